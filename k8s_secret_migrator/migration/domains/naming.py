"""Destination naming and exclusion rules.

Secret Manager names allow only letters, digits, hyphens and underscores;
destination names produced here are restricted further to ``[A-Za-z0-9-]``.
"""
import re
from typing import FrozenSet

from .errors import InvalidSecretNameError

# Service account token secrets created by Kubernetes itself
SERVICE_ACCOUNT_PREFIX = "default-token-"

# Data keys injected into service account secrets, never application data
RESERVED_KEYS = frozenset({"namespace", "token", "ca.crt"})

_DISALLOWED_CHARS = re.compile(r"[^A-Za-z0-9-]")


def sanitize(source_name: str, data_key: str) -> str:
    """
    Build a destination secret name from a source secret and one of its keys.

    Periods become hyphens (``tls.crt`` -> ``tls-crt``), then every character
    outside ``[A-Za-z0-9-]`` is dropped.

    Args:
        source_name: Kubernetes secret name
        data_key: Key inside the secret's data map

    Returns:
        Sanitized name, possibly empty for pathological inputs
    """
    name = f"{source_name}-{data_key}".replace(".", "-")
    return _DISALLOWED_CHARS.sub("", name)


def destination_name(source_name: str, data_key: str) -> str:
    """
    Sanitize and reject names that would be empty.

    Raises:
        InvalidSecretNameError: If nothing usable remains after sanitizing
    """
    name = sanitize(source_name, data_key)
    # A lone hyphen is what remains when both parts are stripped away
    if not name.strip("-"):
        raise InvalidSecretNameError(
            f"Cannot derive a destination name from secret '{source_name}' key '{data_key}'"
        )
    return name


def build_exclusion_set(raw: str) -> FrozenSet[str]:
    """Split a comma-delimited exclude value. Entries are not trimmed."""
    return frozenset((raw or "").split(","))


def is_excluded(source_name: str, exclusions: FrozenSet[str]) -> bool:
    if source_name.startswith(SERVICE_ACCOUNT_PREFIX):
        return True
    return source_name in exclusions


def is_reserved_key(data_key: str) -> bool:
    return data_key in RESERVED_KEYS
