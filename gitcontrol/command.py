"""
Turn $SSH_ORIGINAL_COMMAND into a git command, check it against the user's grants, and hand over to git.

According to git-shell's manpage git-receive-pack & git-upload-pack are what push & fetch run on the remote end,
nothing else is accepted.
"""
import dataclasses
import os
import pathlib
import typing

from .errors import AccessDenied, UnknownCommand
from .identifiers import Repo, repo_to_path, validate_repo

Launcher = typing.Callable[[str, list[str]], typing.NoReturn]

GIT_RECEIVE_PACK = 'git-receive-pack'
GIT_UPLOAD_PACK = 'git-upload-pack'


@dataclasses.dataclass(frozen=True)
class GitCommand:
    repo: Repo
    program: typing.ClassVar[str]


@dataclasses.dataclass(frozen=True)
class ReceivePack(GitCommand):
    program = GIT_RECEIVE_PACK


@dataclasses.dataclass(frozen=True)
class UploadPack(GitCommand):
    program = GIT_UPLOAD_PACK


def repository_of_path(s):
    # Git quotes the path it sends. Only a single layer gets removed, nothing inside it is unescaped.
    if len(s) >= 2 and s.startswith("'") and s.endswith("'"):
        s = s[1:-1]
    return validate_repo(s)


def parse_command(cmd_str: str) -> GitCommand:
    for command_type in (ReceivePack, UploadPack):
        prefix = command_type.program + ' '
        if cmd_str.startswith(prefix):
            return command_type(repository_of_path(cmd_str[len(prefix):]))
    raise UnknownCommand(cmd_str)


def check_permission(command, db):
    # FIXME: This is the opposite way around to what git does, receive-pack is the push side.
    #        Kept as-is until whoever owns the config format confirms which one is intended.
    match command:
        case ReceivePack(repo=repo):
            if not db.can_read(repo):
                raise AccessDenied("no read permission")
        case UploadPack(repo=repo):
            if not db.can_write(repo):
                raise AccessDenied("no write permission")
        case _:
            raise TypeError(f"Unrecognised git command {command!r}")


def exec_program(program: str, args: list[str]) -> typing.NoReturn:
    # NOTE: The 2nd argument to execvp becomes the zero-th argument to the called binary
    os.execvp(program, [program, *args])


def execute(command: GitCommand, base_dir: pathlib.Path, launch: Launcher = exec_program) -> typing.NoReturn:
    """
    Replace this process with the git command, pointed at the repo under base_dir.

    Only ever returns by raising, an OSError if the program couldn't be run.
    """
    launch(command.program, [os.fspath(repo_to_path(command.repo, base_dir))])
    # A launcher that comes back hasn't replaced anything
    raise OSError(f"{command.program} did not replace the current process")
