"""Policy configuration file support for dep-review."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pydantic
import yaml

from dep_review.models.policy import ReviewPolicy
from dep_review.utils.errors import ConfigurationError
from dep_review.utils.logging import get_logger

logger = get_logger("config")


def get_config_paths() -> list[Path]:
    """Get possible policy file paths, in lookup order."""
    cwd = Path.cwd()
    return [
        cwd / ".dep-review.yaml",
        cwd / ".dep-review.yml",
        cwd / ".github" / "dependency-review-config.yml",
    ]


def load_policy(
    config_path: Path | str | None = None,
    overrides: dict[str, Any] | None = None,
) -> ReviewPolicy:
    """Load the review policy.

    Values from ``overrides`` that are not None take precedence over the
    file, mirroring action inputs that override a configuration file.

    Args:
        config_path: Explicit policy file. If None, searches default locations.
        overrides: Option values (snake_case keys) from the command line

    Returns:
        Validated ReviewPolicy

    Raises:
        FileNotFoundError: If an explicit path does not exist
        ConfigurationError: If the file or the merged values are invalid
    """
    data: dict[str, Any] = {}

    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        data = _read_config_file(path)
    else:
        for path in get_config_paths():
            if path.exists():
                data = _read_config_file(path)
                break

    # Normalise file keys so overrides replace them regardless of spelling.
    # A key left blank in YAML reads as null and keeps its default; disabling
    # severity failures takes an explicit "none".
    merged = {}
    for key, value in data.items():
        if value is None:
            logger.debug(f"Ignoring empty config key '{key}'")
            continue
        merged[key.replace("-", "_")] = value
    for key, value in (overrides or {}).items():
        if value is not None:
            merged[key] = value

    try:
        policy = ReviewPolicy.model_validate(merged)
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first["loc"]).replace("_", "-")
        raise ConfigurationError(f"Invalid configuration for '{key}': {first['msg']}", config_key=key) from e

    if policy.has_conflicting_licenses:
        logger.warning("allow-licenses and deny-licenses are both set; deny-licenses takes precedence")

    return policy


def _read_config_file(path: Path) -> dict[str, Any]:
    """Read a YAML policy file into a mapping."""
    logger.debug(f"Loading policy from {path}")
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file must contain a mapping: {path}")
    return data


def save_policy(policy: ReviewPolicy, config_path: Path | str) -> Path:
    """Save a policy as kebab-case YAML.

    Args:
        policy: Policy to save
        config_path: Destination file

    Returns:
        Path where the policy was saved
    """
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = policy.model_dump(mode="json", by_alias=True)
    if data["fail-on-severity"] is None:
        data["fail-on-severity"] = "none"
    data = {key: value for key, value in data.items() if value is not None}
    config_path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=False))

    return config_path
