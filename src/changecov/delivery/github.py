"""Pull-request comment delivery through the GitHub REST API."""

from __future__ import annotations

import re
from collections.abc import Callable

import httpx

from changecov.config.constants import GITHUB_API_URL
from changecov.core.errors import DeliveryError
from changecov.core.logging import get_logger

log = get_logger("delivery.github")

_REMOTE_RE = re.compile(r"github\.com[:/](?P<owner>[^/]+)/(?P<repo>[^/]+?)(?:\.git)?/?$")


def parse_github_remote(url: str) -> tuple[str, str]:
    """Extract (owner, repo) from an https or ssh GitHub remote URL."""
    match = _REMOTE_RE.search(url.strip())
    if not match:
        raise DeliveryError.remote_unparseable(url)
    return match.group("owner"), match.group("repo")


def parse_repository_slug(slug: str) -> tuple[str, str]:
    """Split an ``owner/repo`` slug (GITHUB_REPOSITORY)."""
    owner, sep, repo = slug.strip().partition("/")
    if not sep or not owner or not repo or "/" in repo:
        raise DeliveryError.invalid_target("repository", slug)
    return owner, repo


class GitHubCommentSink:
    """Posts the report as a comment on a pull request.

    The repository is taken from an explicit ``owner/repo`` slug when given,
    otherwise parsed from the URL returned by ``remote_url``. Every failure
    surfaces as DeliveryError.
    """

    name = "github"

    def __init__(
        self,
        *,
        token: str,
        pr_number: str,
        repository: str | None = None,
        remote_url: Callable[[], str] | None = None,
        api_url: str = GITHUB_API_URL,
        timeout_sec: float = 10.0,
    ) -> None:
        self._token = token
        self._pr_number = pr_number
        self._repository = repository
        self._remote_url = remote_url
        self._api_url = api_url.rstrip("/")
        self._timeout_sec = timeout_sec

    def resolve_repository(self) -> tuple[str, str]:
        if self._repository:
            return parse_repository_slug(self._repository)
        if self._remote_url is None:
            raise DeliveryError.invalid_target("repository", None)
        return parse_github_remote(self._remote_url())

    def issue_number(self) -> int:
        try:
            number = int(str(self._pr_number).strip())
        except ValueError as e:
            raise DeliveryError.invalid_target("pr_number", self._pr_number) from e
        if number <= 0:
            raise DeliveryError.invalid_target("pr_number", self._pr_number)
        return number

    def comments_url(self) -> str:
        owner, repo = self.resolve_repository()
        return f"{self._api_url}/repos/{owner}/{repo}/issues/{self.issue_number()}/comments"

    def deliver(self, report: str) -> None:
        url = self.comments_url()
        log.info("posting_comment", url=url)
        try:
            response = httpx.post(
                url,
                json={"body": report},
                headers={
                    "Authorization": f"Bearer {self._token}",
                    "Accept": "application/vnd.github+json",
                    "X-GitHub-Api-Version": "2022-11-28",
                },
                timeout=self._timeout_sec,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise DeliveryError.request_failed(f"HTTP {status} from {url}", status) from e
        except httpx.HTTPError as e:
            raise DeliveryError.request_failed(str(e) or type(e).__name__) from e
        log.info("comment_posted", status=response.status_code)
