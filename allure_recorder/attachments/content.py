"""
Conversion of attachment payloads to bytes plus a category.

Payload defaults:
    - str, bytes, bytearray  -> TEXT
    - dict, list             -> JSON (pretty-printed)
    - TypedAttachment        -> its declared type
An explicit attachment_type always overrides the default. dict/list
payloads stored as YAML are dumped as YAML, otherwise as JSON.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import yaml

from .types import AttachmentType


@dataclass(frozen=True)
class TypedAttachment:
    """A payload paired with the category it should be stored as."""
    content: Any
    attachment_type: AttachmentType


def classify(content: Any) -> AttachmentType:
    """Return the default category for a payload."""
    if isinstance(content, TypedAttachment):
        return content.attachment_type
    if isinstance(content, (str, bytes, bytearray)):
        return AttachmentType.TEXT
    if isinstance(content, (dict, list)):
        return AttachmentType.JSON
    raise TypeError(
        f"Unsupported attachment payload: {type(content).__name__} "
        "(use str, bytes, dict, list or TypedAttachment)"
    )


def to_bytes(content: Any, attachment_type: AttachmentType | None = None) -> bytes:
    """Serialize a payload to the bytes written to the sink."""
    if isinstance(content, TypedAttachment):
        return to_bytes(content.content, attachment_type or content.attachment_type)
    if isinstance(content, str):
        return content.encode("utf-8")
    if isinstance(content, (bytes, bytearray)):
        return bytes(content)
    if isinstance(content, (dict, list)):
        if attachment_type == AttachmentType.YAML:
            return yaml.safe_dump(content, sort_keys=False, allow_unicode=True).encode("utf-8")
        return json.dumps(content, indent=2, ensure_ascii=False, default=str).encode("utf-8")
    raise TypeError(f"Unsupported attachment payload: {type(content).__name__}")


def prepare(
    content: Any,
    attachment_type: AttachmentType | None = None,
) -> tuple[bytes, AttachmentType]:
    """
    Resolve a payload into (bytes, category).

    Args:
        content: The attachment payload
        attachment_type: Explicit category, overriding the payload default

    Returns:
        Tuple of (serialized bytes, AttachmentType)

    Raises:
        TypeError: If the payload type is not supported
        yaml.YAMLError: If a YAML payload holds values YAML cannot represent
    """
    resolved = attachment_type if attachment_type is not None else classify(content)
    return to_bytes(content, resolved), resolved
