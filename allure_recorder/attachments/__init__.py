"""
Attachment classification.

Maps attachment payloads to a MIME type and file extension from a
fixed table.

Usage:
    from allure_recorder.attachments import AttachmentType, prepare

    data, attachment_type = prepare({"user": "alice"})
    attachment_type.mime_type   # "application/json"
    attachment_type.extension   # "json"
"""

from .content import TypedAttachment, classify, prepare, to_bytes
from .types import AttachmentType

__all__ = [
    "AttachmentType",
    "TypedAttachment",
    "classify",
    "prepare",
    "to_bytes",
]
