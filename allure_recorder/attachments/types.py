"""
Attachment categories supported by the recorder.

Each category maps to exactly one MIME type and one file extension.
There is no content sniffing: callers either name a category or take
the default chosen from the payload's Python type.
"""

from __future__ import annotations

from enum import Enum


class AttachmentType(str, Enum):
    """Closed set of attachment categories."""
    # Text and structured data
    TEXT = "text"
    HTML = "html"
    XML = "xml"
    JSON = "json"
    YAML = "yaml"
    CSV = "csv"
    TSV = "tsv"
    URI_LIST = "uri_list"
    # Images
    PNG = "png"
    JPEG = "jpeg"
    GIF = "gif"
    BMP = "bmp"
    TIFF = "tiff"
    SVG = "svg"
    IMAGE_DIFF = "image_diff"  # Allure's screenshot diff format
    # Video
    MP4 = "mp4"
    OGG = "ogg"
    WEBM = "webm"

    @property
    def mime_type(self) -> str:
        return _MIME_TYPES[self]

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self]

    @classmethod
    def from_extension(cls, extension: str) -> AttachmentType | None:
        """
        Look up a category by file extension.

        Accepts the extension with or without a leading dot and in any
        case. Aliases like "jpeg" and "yml" resolve to their canonical
        category.

        Returns:
            The matching AttachmentType, or None if unknown
        """
        ext = extension.lower().lstrip(".")
        return _BY_EXTENSION.get(ext)


_MIME_TYPES: dict[AttachmentType, str] = {
    AttachmentType.TEXT: "text/plain",
    AttachmentType.HTML: "text/html",
    AttachmentType.XML: "application/xml",
    AttachmentType.JSON: "application/json",
    AttachmentType.YAML: "application/yaml",
    AttachmentType.CSV: "text/csv",
    AttachmentType.TSV: "text/tab-separated-values",
    AttachmentType.URI_LIST: "text/uri-list",
    AttachmentType.PNG: "image/png",
    AttachmentType.JPEG: "image/jpeg",
    AttachmentType.GIF: "image/gif",
    AttachmentType.BMP: "image/bmp",
    AttachmentType.TIFF: "image/tiff",
    AttachmentType.SVG: "image/svg+xml",
    AttachmentType.IMAGE_DIFF: "application/vnd.allure.image.diff",
    AttachmentType.MP4: "video/mp4",
    AttachmentType.OGG: "video/ogg",
    AttachmentType.WEBM: "video/webm",
}

_EXTENSIONS: dict[AttachmentType, str] = {
    AttachmentType.TEXT: "txt",
    AttachmentType.HTML: "html",
    AttachmentType.XML: "xml",
    AttachmentType.JSON: "json",
    AttachmentType.YAML: "yaml",
    AttachmentType.CSV: "csv",
    AttachmentType.TSV: "tsv",
    AttachmentType.URI_LIST: "uri",
    AttachmentType.PNG: "png",
    AttachmentType.JPEG: "jpg",
    AttachmentType.GIF: "gif",
    AttachmentType.BMP: "bmp",
    AttachmentType.TIFF: "tiff",
    AttachmentType.SVG: "svg",
    AttachmentType.IMAGE_DIFF: "diff.png",
    AttachmentType.MP4: "mp4",
    AttachmentType.OGG: "ogg",
    AttachmentType.WEBM: "webm",
}

_BY_EXTENSION: dict[str, AttachmentType] = {
    ext: attachment_type for attachment_type, ext in _EXTENSIONS.items()
}
_BY_EXTENSION.update({
    "text": AttachmentType.TEXT,
    "log": AttachmentType.TEXT,
    "htm": AttachmentType.HTML,
    "yml": AttachmentType.YAML,
    "jpeg": AttachmentType.JPEG,
    "tif": AttachmentType.TIFF,
})
