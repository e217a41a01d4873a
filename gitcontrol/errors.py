"""Errors raised by the gatekeeper, and the exit codes they end up as."""
import enum


class GitControlError(Exception):
    pass


class UsageInvalid(GitControlError):
    def __init__(self, reason: str):
        super().__init__(f"Usage invalid: {reason}")
        self.reason = reason


class UserInvalid(GitControlError):
    def __init__(self, raw: str):
        super().__init__(f"User invalid {raw!r}")
        self.raw = raw


class RepoInvalid(GitControlError):
    def __init__(self, raw: str, reason: str):
        super().__init__(f"Repo invalid {raw!r}: {reason}")
        self.raw = raw
        self.reason = reason


class ConfigError(GitControlError):
    """Anything wrong with the contents of the permission config."""


class PermissionInvalid(ConfigError):
    def __init__(self, marker: str):
        super().__init__(f"Permission invalid {marker!r}")
        self.marker = marker


class ConfigMalformed(ConfigError):
    def __init__(self, lineno: int, line: str):
        super().__init__(f"expecting a space after the permission on line {lineno}: {line!r}")
        self.lineno = lineno
        self.line = line


class UnknownCommand(GitControlError):
    def __init__(self, command: str):
        super().__init__(f"unknown command {command!r}")
        self.command = command


class AccessDenied(GitControlError):
    def __init__(self, reason: str):
        super().__init__(f"Access denied: {reason}")
        self.reason = reason


class ExitCode(enum.IntEnum):
    FAILED_READING_CMD_ARGS = 1
    NO_HOME_ENVIRONMENT = 2
    EXECUTING_COMMAND_FAILED = 3
    USER_NOT_FOUND = 4
    NO_SSH_ORIGINAL_COMMAND = 5
    PATH_OF_REPOSITORY_INVALID = 6
    UNKNOWN_GIT_COMMAND = 7
    PERMISSION_CHECK_FAILED = 8
    CANNOT_READ_DB_FILE = 9

    @property
    def message(self):
        return EXIT_MESSAGES[self]


EXIT_MESSAGES = {
    ExitCode.FAILED_READING_CMD_ARGS: "failed reading command arguments",
    ExitCode.NO_HOME_ENVIRONMENT: "no HOME environment found",
    ExitCode.EXECUTING_COMMAND_FAILED: "executing command failed",
    ExitCode.USER_NOT_FOUND: "user not found",
    ExitCode.NO_SSH_ORIGINAL_COMMAND: "no SSH_ORIGINAL_COMMAND found",
    ExitCode.PATH_OF_REPOSITORY_INVALID: "path of repository invalid",
    ExitCode.UNKNOWN_GIT_COMMAND: "unknown git command",
    ExitCode.PERMISSION_CHECK_FAILED: "Permission insufficient",
    ExitCode.CANNOT_READ_DB_FILE: "cannot read db file",
}
