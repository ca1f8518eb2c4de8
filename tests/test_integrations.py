"""Tests for the GitHub integration."""

from unittest.mock import MagicMock

import pytest
import requests

from cvrender.integrations import GITHUB_MAX_REPOS, fetch_github_repos, repos_to_projects
from cvrender.shared import ErrorKind, IntegrationError


def _session(status=200, payload=None, json_error=None):
    resp = MagicMock()
    resp.status_code = status
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = payload
    session = MagicMock()
    session.get.return_value = resp
    return session


def _repo(n, **extra):
    repo = {
        "name": f"repo{n}",
        "description": f"Repo {n}",
        "html_url": f"https://github.com/ana/repo{n}",
        "language": "Python",
        "stargazers_count": n,
        "updated_at": "2024-05-01T10:00:00Z",
        "fork": False,
        "archived": False,
    }
    repo.update(extra)
    return repo


class TestFetchGithubRepos:
    """Tests for fetch_github_repos."""

    def test_filters_and_caps(self):
        payload = [_repo(0, fork=True), _repo(1, archived=True)] + [_repo(n) for n in range(2, 20)]
        session = _session(payload=payload)
        repos = fetch_github_repos("@ana", session=session)
        assert len(repos) == GITHUB_MAX_REPOS
        assert repos[0]["name"] == "repo2"
        args, kwargs = session.get.call_args
        assert args[0] == "https://api.github.com/users/ana/repos"
        assert kwargs["params"]["sort"] == "updated"

    def test_empty_username(self):
        session = _session(payload=[])
        assert fetch_github_repos("  @ ", session=session) == []
        session.get.assert_not_called()

    def test_fields_are_sanitized(self):
        session = _session(payload=[_repo(1, html_url="javascript:alert(1)", description=None,
                                          stargazers_count="many")])
        repo = fetch_github_repos("ana", session=session)[0]
        assert repo["html_url"] == ""
        assert repo["description"] == ""
        assert repo["stargazers_count"] == 0

    @pytest.mark.parametrize("status,fragment", [
        (404, 'GitHub user "ana" not found.'),
        (403, "rate limit"),
        (429, "rate limit"),
        (500, "GitHub API error (500)"),
    ])
    def test_http_errors(self, status, fragment):
        with pytest.raises(IntegrationError) as exc:
            fetch_github_repos("ana", session=_session(status=status))
        assert fragment in str(exc.value)

    def test_network_error(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("down")
        with pytest.raises(IntegrationError) as exc:
            fetch_github_repos("ana", session=session)
        assert exc.value.kind is ErrorKind.SERVICE_UNAVAILABLE

    @pytest.mark.parametrize("kwargs", [{"json_error": ValueError("bad")}, {"payload": {"message": "x"}}])
    def test_unexpected_payload(self, kwargs):
        with pytest.raises(IntegrationError) as exc:
            fetch_github_repos("ana", session=_session(**kwargs))
        assert exc.value.kind is ErrorKind.INVALID_RESPONSE


class TestReposToProjects:
    """Tests for repos_to_projects."""

    def test_conversion(self):
        projects = repos_to_projects([_repo(1), _repo(2, description="")], empty_description="No description")
        assert projects[0]["name"] == "repo1"
        assert projects[0]["url"] == "https://github.com/ana/repo1"
        assert projects[0]["startDate"] == "2024-05"
        assert projects[0]["endDate"] == ""
        assert projects[1]["description"] == "No description"
        assert projects[0]["id"] != projects[1]["id"]
