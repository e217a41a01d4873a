"""
The per-user permission table, loaded from the gitcontrol.cfg file.

Format:

    @user
    w namespace/repo
    r namespace/repo
    # comment

Blank lines are ignored everywhere.
Lines outside of the requested user's sections are skipped without being looked at,
since one file holds the sections for every user.
A user may have more than one section, later grants for the same repo replace earlier ones.
"""
import enum
import pathlib
import types
import typing

from .errors import ConfigMalformed, PermissionInvalid
from .identifiers import Repo, User, validate_repo


class Permission(enum.IntEnum):
    # Ordered so that Write >= Read, a write grant is also a read grant
    READ = 1
    WRITE = 2

    @classmethod
    def from_char(cls, c):
        match c:
            case 'r':
                return cls.READ
            case 'w':
                return cls.WRITE
            case _:
                raise PermissionInvalid(c)

    @property
    def marker(self):
        return 'w' if self is Permission.WRITE else 'r'


class UserDb(object):
    """Read-only view of the grants one user has."""

    def __init__(self, repos: typing.Mapping[Repo, Permission]):
        self.repos = types.MappingProxyType(dict(sorted(repos.items())))

    def can_read(self, repo):
        return self.repos.get(repo, 0) >= Permission.READ

    def can_write(self, repo):
        return self.repos.get(repo, 0) >= Permission.WRITE

    def is_empty(self):
        return not self.repos

    def __len__(self):
        return len(self.repos)

    def __repr__(self):
        return f"UserDb({dict(self.repos)!r})"


def _lines(config_path):
    # Only '\n' separates lines, str.splitlines() would also split on things like form feeds
    with open(config_path, 'r', encoding='utf-8', newline='\n') as f:
        for line in f:
            yield line.removesuffix('\n').removesuffix('\r')


def parse_db(lines: typing.Iterable[str], user: User) -> UserDb:
    """Build the table for a single user, raising on the first bad line so nothing partial is ever returned."""
    repos = {}
    # True while we're inside one of this user's sections
    on_user = False

    for lineno, line in enumerate(lines, start=1):
        if not line:
            continue
        if line.startswith('@'):
            on_user = line[1:] == user.name
            continue
        if not on_user or line.startswith('#'):
            continue

        permission = Permission.from_char(line[0])
        if line[1:2] != ' ':
            raise ConfigMalformed(lineno, line)
        repos[validate_repo(line[2:])] = permission

    return UserDb(repos)


def read_db(config_path: pathlib.Path, user: User) -> UserDb:
    return parse_db(_lines(config_path), user)


def list_users(config_path):
    """Every name that has a section header, in the order they first show up."""
    users = {}
    for line in _lines(config_path):
        if line.startswith('@'):
            users.setdefault(line[1:], None)
    return list(users)


def dump_db(db):
    """Render the table back in the same format it was read from."""
    for repo, permission in db.repos.items():
        yield f"{permission.marker} {repo}"
