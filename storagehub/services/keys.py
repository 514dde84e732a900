# storagehub/services/keys.py
"""Object key layout: ``<owner>/<folder>/<name>`` or ``<owner>/<name>`` at the root."""

from typing import Optional

from storagehub.core.errors import ValidationError

SEPARATOR = "/"


def validate_component(value: str, field: str) -> str:
    """Reject names that would break the key layout (empty, separator, dot segments)."""
    if not value or not value.strip():
        raise ValidationError(f"{field} must not be empty", details={"field": field})
    if SEPARATOR in value:
        raise ValidationError(
            f"{field} must not contain '{SEPARATOR}'", details={"field": field, "value": value}
        )
    if value in (".", ".."):
        raise ValidationError(f"{field} must not be '{value}'", details={"field": field})
    return value


def folder_path(owner_id: str, folder_name: str) -> str:
    return f"{owner_id}{SEPARATOR}{folder_name}"


def build_key(owner_id: str, folder_name: Optional[str], item_name: str) -> str:
    if folder_name:
        return f"{folder_path(owner_id, folder_name)}{SEPARATOR}{item_name}"
    return f"{owner_id}{SEPARATOR}{item_name}"


def build_folder_marker_key(owner_id: str, folder_name: str) -> str:
    # zero-byte placeholder, the trailing separator marks it as a directory
    return f"{folder_path(owner_id, folder_name)}{SEPARATOR}"
