"""
Shared pytest fixtures for the gitcontrol tests.

Fixtures provided:
- home: Temporary home directory, where gitcontrol.cfg and the repos live
- write_config: Write the given text as the config file in `home`
- launcher: Recording stand-in for os.execvp
"""

import pytest


class Launched(Exception):
    """Raised by the recording launcher in place of the process being replaced."""


class RecordingLauncher:
    def __init__(self, error=None):
        self.calls = []
        self.error = error

    def __call__(self, program, args):
        self.calls.append((program, list(args)))
        if self.error is not None:
            raise self.error
        raise Launched(program)


@pytest.fixture
def home(tmp_path):
    return tmp_path


@pytest.fixture
def write_config(home):
    def write(text):
        config_path = home / 'gitcontrol.cfg'
        config_path.write_text(text, encoding='utf-8')
        return config_path
    return write


@pytest.fixture
def launcher():
    return RecordingLauncher()
