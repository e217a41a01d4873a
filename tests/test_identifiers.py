"""
Unit tests for user and repository name validation.

Both names are untrusted, these check that anything outside the
alphanumeric user / 'namespace/name' repo shapes gets rejected.
"""

import pathlib

import pytest

from gitcontrol.errors import RepoInvalid, UserInvalid
from gitcontrol.identifiers import Repo, User, repo_to_path, validate_repo, validate_user


class TestValidateUser:
    """Test username validation"""

    @pytest.mark.parametrize('raw', ['alice', 'Bob', 'user42', '42', 'émile'])
    def test_accepts_alphanumeric(self, raw):
        """Should wrap alphanumeric names unchanged"""
        user = validate_user(raw)
        assert user == User(raw)
        assert str(user) == raw

    @pytest.mark.parametrize('raw', ['al ice', 'alice\n', 'bob-smith', 'a.b', '../root', 'alice;rm', '@alice', 'कि'])
    def test_rejects_non_alphanumeric(self, raw):
        """Should reject any name with a non-alphanumeric character"""
        with pytest.raises(UserInvalid) as excinfo:
            validate_user(raw)
        assert excinfo.value.raw == raw

    def test_rejects_empty(self):
        """An empty username is not a user, even though it has no bad characters"""
        with pytest.raises(UserInvalid):
            validate_user('')


class TestValidateRepo:
    """Test repository path validation"""

    def test_accepts_namespace_and_name(self):
        """Should split 'ns/name' into its two segments"""
        assert validate_repo('team/project1') == Repo('team', 'project1')

    @pytest.mark.parametrize('raw, reason', [
        ('tëam/one', "repo contains non ASCII"),
        ('/team/one', "repo starts with /"),
        ('.team/one', "repo starts with ."),
        ('../one', "repo starts with ."),
        ('teamone', "not enough /"),
        ('', "not enough /"),
        ('team/one/two', "more than one /"),
        ('team/', "repo is not alphanumeric"),
        ('team/one.git', "repo is not alphanumeric"),
        ('team/one two', "repo is not alphanumeric"),
        ('te-am/one', "directory is not alphanumeric"),
        ('te am/one', "directory is not alphanumeric"),
    ])
    def test_rejects_with_reason(self, raw, reason):
        """Should report the reason for the first check that fails"""
        with pytest.raises(RepoInvalid) as excinfo:
            validate_repo(raw)
        assert excinfo.value.raw == raw
        assert excinfo.value.reason == reason

    def test_check_order(self):
        """Non-ASCII is reported before a leading slash, which is reported before the segment checks"""
        with pytest.raises(RepoInvalid, match="non ASCII"):
            validate_repo('/tëam')
        with pytest.raises(RepoInvalid, match="starts with /"):
            validate_repo('/.team')
        with pytest.raises(RepoInvalid, match="starts with ."):
            validate_repo('.team')

    def test_ordering(self):
        """Repos sort by namespace, then name"""
        repos = [Repo('b', 'a'), Repo('a', 'b'), Repo('a', 'a')]
        assert sorted(repos) == [Repo('a', 'a'), Repo('a', 'b'), Repo('b', 'a')]

    def test_str(self):
        assert str(Repo('team', 'one')) == 'team/one'


class TestRepoToPath:
    """Test resolving a repo to its directory"""

    def test_under_base_dir(self):
        """Should resolve to base/namespace/name"""
        repo = validate_repo('team/one')
        assert repo_to_path(repo, pathlib.Path('/srv/git')) == pathlib.Path('/srv/git/team/one')

    def test_accepts_str_base_dir(self):
        assert repo_to_path(Repo('a', 'b'), '/home/git') == pathlib.Path('/home/git/a/b')
