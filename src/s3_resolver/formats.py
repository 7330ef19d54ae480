"""
Source formats and media types.

Single source of truth for the formats a resolver can report, the media
types that identify them, and the filename extensions used when storage
metadata is missing or inconclusive.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

__all__ = ["Format", "MediaType", "infer_format"]


class Format(Enum):
    """
    Source media format.
    
    Each member's value is ``(preferred media type, alternate media types,
    extensions)``. The first extension is the preferred one.
    """
    AVI = ("video/avi", ("video/msvideo", "video/x-msvideo"), ("avi",))
    BMP = ("image/bmp", ("image/x-bmp", "image/x-ms-bmp"), ("bmp", "dib"))
    FLV = ("video/x-flv", (), ("flv",))
    GIF = ("image/gif", (), ("gif",))
    JP2 = ("image/jp2", ("image/jpx", "image/jpm"), ("jp2", "j2k", "jpx", "jpf"))
    JPEG = ("image/jpeg", ("image/pjpeg",), ("jpg", "jpeg", "jpe", "jif", "jfif"))
    MOV = ("video/quicktime", ("video/x-quicktime",), ("mov", "qt"))
    MP4 = ("video/mp4", (), ("mp4", "m4v"))
    MPEG = ("video/mpeg", (), ("mpg", "mpeg"))
    PDF = ("application/pdf", (), ("pdf",))
    PNG = ("image/png", (), ("png",))
    TIFF = ("image/tiff", (), ("tif", "ptif", "tiff"))
    WEBM = ("video/webm", (), ("webm",))
    WEBP = ("image/webp", (), ("webp",))
    UNKNOWN = ("unknown/unknown", (), ("unknown",))

    @property
    def preferred_media_type(self) -> "MediaType":
        return MediaType.parse(self.value[0])

    @property
    def media_types(self) -> Tuple[str, ...]:
        return (self.value[0],) + self.value[1]

    @property
    def extensions(self) -> Tuple[str, ...]:
        return self.value[2]

    @property
    def preferred_extension(self) -> str:
        return self.value[2][0]

    @classmethod
    def for_media_type(cls, media_type: "MediaType") -> "Format":
        """Return the format identified by ``media_type``, or UNKNOWN."""
        for fmt in cls:
            if fmt is cls.UNKNOWN:
                continue
            if str(media_type) in fmt.media_types:
                return fmt
        return cls.UNKNOWN

    @classmethod
    def for_extension(cls, extension: str) -> "Format":
        """Return the format using ``extension`` (without the dot), or UNKNOWN."""
        extension = extension.lower()
        for fmt in cls:
            if fmt is cls.UNKNOWN:
                continue
            if extension in fmt.extensions:
                return fmt
        return cls.UNKNOWN


@dataclass(frozen=True)
class MediaType:
    """
    A ``type/subtype`` pair parsed from a Content-Type header value.
    
    Parameters (``; charset=...``) are discarded and both parts are
    lowercased, so ``image/JPEG; q=0.9`` compares equal to ``image/jpeg``.
    """
    type: str
    subtype: str

    @classmethod
    def parse(cls, value: str) -> "MediaType":
        """
        Parse a Content-Type value.
        
        Raises:
            ValueError: If the value is not of the form type/subtype
        """
        essence = (value or "").split(";", 1)[0].strip().lower()
        main, sep, sub = essence.partition("/")
        if not sep or not main or not sub or "/" in sub:
            raise ValueError(f"Invalid media type: {value!r}")
        return cls(type=main, subtype=sub)

    def to_format(self) -> Format:
        return Format.for_media_type(self)

    def __str__(self) -> str:
        return f"{self.type}/{self.subtype}"


def infer_format(name: Optional[str]) -> Format:
    """
    Infer a format from the extension-like suffix of ``name``.
    
    Only the text after the last "/" is considered, so a dot in a directory
    component of a storage key is never mistaken for an extension.
    
    Examples:
        >>> infer_format("cats.jpg")
        <Format.JPEG: ...>
        
        >>> infer_format("images.v2/cats")
        <Format.UNKNOWN: ...>
    """
    if not name:
        return Format.UNKNOWN
    basename = name.rsplit("/", 1)[-1]
    stem, sep, extension = basename.rpartition(".")
    if not sep or not extension:
        return Format.UNKNOWN
    return Format.for_extension(extension)
