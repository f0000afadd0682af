"""GitHub REST client for dependency-graph comparisons and PR comments."""

from __future__ import annotations

import os
from typing import Any

import httpx

from dep_review.models.change import ChangeSet
from dep_review.utils.errors import (
    DependencyGraphError,
    DependencyGraphForbiddenError,
    DependencyGraphNotFoundError,
)
from dep_review.utils.logging import get_logger_with_context

COMMENT_MARKER = "<!-- dependency-review-pr-comment-marker -->"


class GitHubClient:
    """Client for the GitHub endpoints dependency review needs.

    The client makes plain sequential requests and does not retry; callers
    decide what to do with a failed run.

    Example:
        client = GitHubClient()
        changes = client.compare("octo-org", "octo-repo", "main", "feature")
        if changes is None:
            print("nothing to review")
    """

    DEFAULT_API_URL = "https://api.github.com"
    API_VERSION = "2022-11-28"

    def __init__(
        self,
        token: str | None = None,
        api_url: str | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            token: API token (uses GITHUB_TOKEN or GH_TOKEN if not provided)
            api_url: REST API base URL (uses GITHUB_API_URL or api.github.com)
            timeout: Request timeout in seconds
            transport: Custom httpx transport, mainly for tests
        """
        self._token = token or os.environ.get("GITHUB_TOKEN") or os.environ.get("GH_TOKEN")
        self._api_url = (api_url or os.environ.get("GITHUB_API_URL") or self.DEFAULT_API_URL).rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": self.API_VERSION,
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return httpx.Client(
            base_url=self._api_url,
            headers=headers,
            timeout=self._timeout,
            transport=self._transport,
            follow_redirects=True,
        )

    def compare(self, owner: str, repo: str, base_ref: str, head_ref: str) -> ChangeSet | None:
        """Fetch dependency changes between two revisions.

        Args:
            owner: Repository owner
            repo: Repository name
            base_ref: Base revision
            head_ref: Head revision

        Returns:
            The changes, or None if the service returned no data

        Raises:
            DependencyGraphNotFoundError: On 404
            DependencyGraphForbiddenError: On 403
            DependencyGraphError: On any other error status
        """
        url: str | None = f"/repos/{owner}/{repo}/dependency-graph/compare/{base_ref}...{head_ref}"
        records: list[dict[str, Any]] = []
        received_data = False

        with self._get_client() as client:
            while url:
                response = client.get(url)
                self._raise_for_status(response, owner, repo)

                data = response.json() if response.content else None
                if data is not None:
                    received_data = True
                    records.extend(data)

                url = response.links.get("next", {}).get("url")

        if not received_data:
            return None

        log = get_logger_with_context("github", repo=f"{owner}/{repo}")
        log.debug(f"Fetched {len(records)} dependency changes")
        return ChangeSet.from_api(records)

    def upsert_comment(self, owner: str, repo: str, issue_number: int, body: str) -> str:
        """Create or update the dependency review comment on a pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            issue_number: Pull request number
            body: Markdown body (the marker is appended)

        Returns:
            URL of the comment
        """
        body = f"{body}\n\n{COMMENT_MARKER}"
        comments_url = f"/repos/{owner}/{repo}/issues/{issue_number}/comments"
        log = get_logger_with_context("github", repo=f"{owner}/{repo}", pr=issue_number)

        with self._get_client() as client:
            existing = self._find_marked_comment(client, comments_url, owner, repo)

            if existing is not None:
                log.info(f"Updating dependency review comment {existing}")
                response = client.patch(
                    f"/repos/{owner}/{repo}/issues/comments/{existing}",
                    json={"body": body},
                )
            else:
                log.info("Creating dependency review comment")
                response = client.post(comments_url, json={"body": body})

            self._raise_for_status(response, owner, repo, graph=False)
            return response.json().get("html_url", "")

    def _find_marked_comment(
        self, client: httpx.Client, comments_url: str, owner: str, repo: str
    ) -> int | None:
        url: str | None = comments_url
        while url:
            response = client.get(url, params={"per_page": 100} if url == comments_url else None)
            self._raise_for_status(response, owner, repo, graph=False)
            for comment in response.json():
                if COMMENT_MARKER in (comment.get("body") or ""):
                    return comment["id"]
            url = response.links.get("next", {}).get("url")
        return None

    def _raise_for_status(
        self, response: httpx.Response, owner: str, repo: str, graph: bool = True
    ) -> None:
        if graph and response.status_code == 404:
            raise DependencyGraphNotFoundError()
        if graph and response.status_code == 403:
            raise DependencyGraphForbiddenError(owner, repo)
        if response.status_code >= 400:
            raise DependencyGraphError(
                f"GitHub API request failed: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )
