"""Non-fatal configuration checks."""

import warnings
from pathlib import Path
from typing import Any, Dict, List, Optional

from .environment import find_partial_credentials


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for potential issues and return warnings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    for source in config_dict.get("sources", []) or []:
        if isinstance(source, dict) and not source.get("enabled", True):
            warning_messages.append(
                f"Source '{source.get('type', 'unknown')}' is disabled and will be skipped"
            )

    criteria = config_dict.get("criteria", {})
    if isinstance(criteria, dict):
        keywords = criteria.get("keywords", [])
        if isinstance(keywords, list):
            normalized = [k.strip().lower() for k in keywords if isinstance(k, str)]
            duplicates = sorted({k for k in normalized if k and normalized.count(k) > 1})
            if duplicates:
                warning_messages.append(
                    f"Duplicate keywords will be deduplicated: {', '.join(duplicates)}"
                )
        if not criteria.get("location"):
            warning_messages.append(
                "criteria.location is empty; job boards will be searched without a location"
            )

    for channel, missing in find_partial_credentials().items():
        warning_messages.append(
            f"{channel} channel is partially configured and will be skipped "
            f"(missing: {', '.join(missing)})"
        )

    return warning_messages


def check_resume_path(resume_path: Optional[str]) -> List[str]:
    """Warn about a configured resume that does not exist.

    Run against the effective path, after RESUME_PATH has been applied.
    """
    if resume_path and not Path(resume_path).exists():
        return [f"Resume not found at {resume_path}; emails will be sent without attachment"]
    return []


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit warning messages using Python's warnings module."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
