"""
Integrations with external metadata services.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from .formatting import sanitize_link
from .logging_utils import LOG
from .model import generate_id
from .shared import ErrorKind, IntegrationError, as_text, sanitize_for_xml

GITHUB_REPOS_URL = "https://api.github.com/users/{user}/repos"
GITHUB_FETCH_COUNT = 30
GITHUB_MAX_REPOS = 10


def _clean(value: Any) -> str:
    return sanitize_for_xml(as_text(value)).strip()


def fetch_github_repos(username: str, session: Any = None, timeout: float = 15) -> List[Dict[str, Any]]:
    """
    Fetch a user's most recently updated public repositories.

    Forks and archived repositories are skipped and at most ten are
    returned.

    Args:
        username: GitHub login, with or without a leading '@'
        session: Object with a requests-style ``get``; the requests module by default

    Returns:
        List of dicts with name, description, html_url, language,
        stargazers_count and updated_at

    Raises:
        IntegrationError: If the user does not exist, the rate limit is hit,
            or the service fails or answers with something unexpected
    """
    user = as_text(username).replace("@", "").strip()
    if not user:
        return []

    http = session if session is not None else requests
    url = GITHUB_REPOS_URL.format(user=user)
    try:
        resp = http.get(
            url,
            params={"sort": "updated", "per_page": GITHUB_FETCH_COUNT, "type": "owner"},
            headers={"Accept": "application/vnd.github+json", "User-Agent": "cvrender"},
            timeout=timeout,
        )
    except requests.RequestException as e:
        raise IntegrationError(f"GitHub request failed: {e}") from e

    if resp.status_code == 404:
        raise IntegrationError(f'GitHub user "{user}" not found.')
    if resp.status_code in (403, 429):
        raise IntegrationError("GitHub API rate limit reached. Wait a few minutes and try again.")
    if resp.status_code != 200:
        raise IntegrationError(f"GitHub API error ({resp.status_code})")

    try:
        data = resp.json()
    except ValueError as e:
        raise IntegrationError("GitHub returned invalid JSON", kind=ErrorKind.INVALID_RESPONSE) from e
    if not isinstance(data, list):
        raise IntegrationError("GitHub returned an unexpected payload", kind=ErrorKind.INVALID_RESPONSE)

    repos = []
    for repo in data:
        if not isinstance(repo, dict) or repo.get("fork") or repo.get("archived"):
            continue
        stars = repo.get("stargazers_count")
        repos.append({
            "name": _clean(repo.get("name")),
            "description": _clean(repo.get("description")),
            "html_url": sanitize_link(repo.get("html_url")),
            "language": _clean(repo.get("language")),
            "stargazers_count": stars if isinstance(stars, int) and not isinstance(stars, bool) else 0,
            "updated_at": _clean(repo.get("updated_at")),
        })
        if len(repos) >= GITHUB_MAX_REPOS:
            break

    LOG.info("Fetched %d GitHub repositories for %s", len(repos), user)
    return repos


def repos_to_projects(repos: List[Dict[str, Any]], empty_description: Optional[str] = "") -> List[Dict[str, Any]]:
    """Convert fetched repositories into project entries with fresh ids."""
    projects = []
    for repo in repos:
        updated = as_text(repo.get("updated_at"))
        projects.append({
            "id": generate_id(),
            "name": as_text(repo.get("name")),
            "description": as_text(repo.get("description")) or (empty_description or ""),
            "url": sanitize_link(repo.get("html_url")),
            "startDate": updated.split("T")[0][:7],
            "endDate": "",
        })
    return projects
