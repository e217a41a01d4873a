"""
Validation of the untrusted names we get handed.

Both of these come from places we don't control, the username from the authorized_keys command= line
and the repository from whatever the client typed into `git clone`, so they get checked before anything else looks at them.
"""
import dataclasses
import pathlib

from .errors import RepoInvalid, UserInvalid


@dataclasses.dataclass(frozen=True)
class User:
    name: str

    def __str__(self):
        return self.name


@dataclasses.dataclass(frozen=True, order=True)
class Repo:
    namespace: str
    name: str

    def __str__(self):
        return f"{self.namespace}/{self.name}"


def validate_user(raw):
    # NOTE: isalnum() is False for the empty string, so an empty username is rejected here too
    if not raw.isalnum():
        raise UserInvalid(raw)
    return User(raw)


def validate_repo(raw: str) -> Repo:
    """
    Turn 'namespace/name' into a Repo.

    The order of these checks decides which reason gets reported when more than one of them applies.
    """
    if not raw.isascii():
        raise RepoInvalid(raw, "repo contains non ASCII")
    if raw.startswith('/'):
        raise RepoInvalid(raw, "repo starts with /")
    if raw.startswith('.'):
        raise RepoInvalid(raw, "repo starts with .")

    namespace, sep, name = raw.partition('/')
    if not sep:
        raise RepoInvalid(raw, "not enough /")
    if '/' in name:
        raise RepoInvalid(raw, "more than one /")

    if not namespace.isalnum():
        raise RepoInvalid(raw, "directory is not alphanumeric")
    if not name.isalnum():
        raise RepoInvalid(raw, "repo is not alphanumeric")

    return Repo(namespace, name)


def repo_to_path(repo: Repo, base_dir: pathlib.Path) -> pathlib.Path:
    return pathlib.Path(base_dir) / repo.namespace / repo.name
