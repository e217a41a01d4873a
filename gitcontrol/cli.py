"""
SSH forced command for git access.

Set this as the command= for each key in ~/.ssh/authorized_keys, with the username that key belongs to:

    command="gitcontrol alice",restrict ssh-ed25519 AAAA...

The user's grants are read from ~/gitcontrol.cfg and repositories live under ~/namespace/name.
Every failure exits with its own status code so the SSH side can tell them apart.

To check what a config file actually grants:

    gitcontrol --debug path/to/gitcontrol.cfg [USER]
"""
import argparse
import dataclasses
import os
import pathlib
import sys
import typing

from . import command, userdb
from .errors import AccessDenied, ExitCode, GitControlError, RepoInvalid, UnknownCommand, UsageInvalid, UserInvalid
from .identifiers import User, validate_user

CONFIG_FILENAME = 'gitcontrol.cfg'


@dataclasses.dataclass(frozen=True)
class Context:
    """Everything we take from the environment, gathered once at startup."""

    home: typing.Optional[pathlib.Path]
    ssh_original_command: typing.Optional[str]

    @classmethod
    def from_environ(cls, environ):
        home = environ.get('HOME')
        return cls(home=pathlib.Path(home) if home else None,
                   ssh_original_command=environ.get('SSH_ORIGINAL_COMMAND'))

    @property
    def config_path(self):
        return self.home / CONFIG_FILENAME


@dataclasses.dataclass(frozen=True)
class Normal:
    user: User


@dataclasses.dataclass(frozen=True)
class Debug:
    config_path: pathlib.Path
    user: typing.Optional[User]


class ArgumentParser(argparse.ArgumentParser):
    # argparse would exit(2) on its own, which is the status for a missing $HOME
    def error(self, message):
        raise UsageInvalid(message)


def fail(code: ExitCode, detail) -> typing.NoReturn:
    print(f"{code.message}: {detail}", file=sys.stderr)
    sys.exit(int(code))


def parse_arguments(args: list[str]) -> typing.Union[Normal, Debug]:
    # No --help and no abbreviations, anything but the exact arguments is a usage error
    parser = ArgumentParser(prog='gitcontrol', add_help=False, allow_abbrev=False, description="Restrict an SSH key to git access on the repos its user has been granted")
    parser.add_argument('--debug', metavar='CONFIG', type=pathlib.Path, help="Print the grants loaded from CONFIG instead of running a git command")
    parser.add_argument('user', nargs='?', help="The user this SSH key belongs to")
    parsed = parser.parse_args(args)

    user = validate_user(parsed.user) if parsed.user is not None else None
    if parsed.debug is not None:
        return Debug(parsed.debug, user)
    if user is None:
        raise UsageInvalid("no arguments")
    return Normal(user)


def normal(user: User, context: Context, launch: command.Launcher = command.exec_program) -> typing.NoReturn:
    if context.home is None:
        fail(ExitCode.NO_HOME_ENVIRONMENT, "value not found")

    try:
        db = userdb.read_db(context.config_path, user)
    except (OSError, UnicodeDecodeError, GitControlError) as e:
        fail(ExitCode.CANNOT_READ_DB_FILE, e)

    # Nothing granted means nothing to check, don't bother looking at the command
    if db.is_empty():
        fail(ExitCode.USER_NOT_FOUND, f"{user} not found (or empty)")

    if context.ssh_original_command is None:
        fail(ExitCode.NO_SSH_ORIGINAL_COMMAND, "value not found")

    try:
        cmd = command.parse_command(context.ssh_original_command)
    except UnknownCommand as e:
        fail(ExitCode.UNKNOWN_GIT_COMMAND, e)
    except RepoInvalid as e:
        fail(ExitCode.PATH_OF_REPOSITORY_INVALID, e)

    try:
        command.check_permission(cmd, db)
    except AccessDenied as e:
        fail(ExitCode.PERMISSION_CHECK_FAILED, e)

    try:
        command.execute(cmd, context.home, launch)
    except OSError as e:
        fail(ExitCode.EXECUTING_COMMAND_FAILED, e)


def _valid_users(names):
    for name in names:
        try:
            yield validate_user(name)
        except UserInvalid:
            # Nobody can ever log in as this, so there's nothing to show
            continue


def debug(config_path, user):
    # Everything gets loaded before anything is printed, a bad line anywhere means no output at all
    try:
        if user is not None:
            output = list(userdb.dump_db(userdb.read_db(config_path, user)))
        else:
            output = []
            for section_user in _valid_users(userdb.list_users(config_path)):
                output.append(f"@{section_user}")
                output.extend(userdb.dump_db(userdb.read_db(config_path, section_user)))
    except (OSError, UnicodeDecodeError, GitControlError) as e:
        fail(ExitCode.CANNOT_READ_DB_FILE, e)

    for line in output:
        print(line)


def main(argv: typing.Optional[list[str]] = None,
         environ: typing.Optional[typing.Mapping[str, str]] = None,
         launch: command.Launcher = command.exec_program):
    try:
        mode = parse_arguments(sys.argv[1:] if argv is None else argv)
    except (UsageInvalid, UserInvalid) as e:
        fail(ExitCode.FAILED_READING_CMD_ARGS, e)

    match mode:
        case Normal(user=user):
            normal(user, Context.from_environ(os.environ if environ is None else environ), launch)
        case Debug(config_path=config_path, user=user):
            debug(config_path, user)
