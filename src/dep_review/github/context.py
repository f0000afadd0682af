"""GitHub Actions run context: repository, event payload and comparison refs."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, Field

from dep_review.models.policy import ReviewPolicy
from dep_review.utils.errors import ConfigurationError
from dep_review.utils.logging import get_logger

logger = get_logger("github")

PULL_REQUEST_EVENTS = ("pull_request", "pull_request_target")


class Refs(BaseModel):
    """Base and head revisions to compare."""

    model_config = {"frozen": True}

    base: str
    head: str


class ActionsContext(BaseModel):
    """What a workflow run tells us about the repository and the triggering event.

    Example:
        context = ActionsContext.from_env()
        if context.pull_request_number is not None:
            print(f"running for #{context.pull_request_number}")
    """

    model_config = {"frozen": True}

    repository: str | None = Field(default=None, description="owner/repo from GITHUB_REPOSITORY")
    event_name: str | None = Field(default=None, description="GITHUB_EVENT_NAME")
    payload: dict[str, Any] = Field(default_factory=dict, description="Webhook payload of the event")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ActionsContext":
        """Build the context from the standard Actions environment variables.

        Raises:
            ConfigurationError: If GITHUB_EVENT_PATH points at an unreadable payload
        """
        env = os.environ if environ is None else environ

        payload: dict[str, Any] = {}
        event_path = env.get("GITHUB_EVENT_PATH")
        if event_path:
            try:
                payload = json.loads(Path(event_path).read_text())
            except (OSError, json.JSONDecodeError) as e:
                raise ConfigurationError(
                    f"Cannot read event payload {event_path}: {e}",
                    config_key="GITHUB_EVENT_PATH",
                ) from e
            if not isinstance(payload, dict):
                raise ConfigurationError(
                    f"Event payload {event_path} is not a JSON object",
                    config_key="GITHUB_EVENT_PATH",
                )

        return cls(
            repository=env.get("GITHUB_REPOSITORY") or None,
            event_name=env.get("GITHUB_EVENT_NAME") or None,
            payload=payload,
        )

    @property
    def pull_request(self) -> dict[str, Any] | None:
        """The pull request object, when the run was triggered by one."""
        if self.event_name is not None and self.event_name not in PULL_REQUEST_EVENTS:
            return None
        pull_request = self.payload.get("pull_request")
        return pull_request if isinstance(pull_request, dict) else None

    @property
    def pull_request_number(self) -> int | None:
        pull_request = self.pull_request
        if pull_request is None:
            return None
        return pull_request.get("number") or self.payload.get("number")


def get_refs(policy: ReviewPolicy, context: ActionsContext) -> Refs:
    """Resolve the revisions to compare.

    Configured ``base-ref``/``head-ref`` win; missing ones are taken from the
    base and head commits of the triggering pull request.

    Raises:
        ConfigurationError: If either ref cannot be determined
    """
    base_ref = policy.base_ref
    head_ref = policy.head_ref

    pull_request = context.pull_request
    if pull_request is not None:
        base_ref = base_ref or (pull_request.get("base") or {}).get("sha")
        head_ref = head_ref or (pull_request.get("head") or {}).get("sha")

    if not base_ref and not head_ref:
        raise ConfigurationError(
            "Both a base ref and head ref must be provided, either via the base-ref/head-ref "
            "options or by running on a pull_request or pull_request_target event."
        )
    if not base_ref:
        raise ConfigurationError(
            "A base ref must be provided, either via the base-ref option or by running "
            "on a pull_request or pull_request_target event.",
            config_key="base-ref",
        )
    if not head_ref:
        raise ConfigurationError(
            "A head ref must be provided, either via the head-ref option or by running "
            "on a pull_request or pull_request_target event.",
            config_key="head-ref",
        )

    logger.debug(f"Comparing {base_ref}...{head_ref}")
    return Refs(base=base_ref, head=head_ref)
