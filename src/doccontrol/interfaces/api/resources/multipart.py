"""Multipart form reading for file uploads."""

import re
from dataclasses import dataclass, field
from urllib.parse import unquote_to_bytes

import falcon.asgi

from doccontrol.domain.exceptions import ValidationError

# RFC 5987: filename*=charset''percent-encoded
_FILENAME_STAR_RFC5987 = re.compile(r"([\w-]+)''(.+)")

FILE_FIELDS = ("file", "files", "files[]")


@dataclass
class UploadedFile:
    data: bytes
    file_name: str
    content_type: str


@dataclass
class MultipartForm:
    """Text fields (repeated names keep every value) and at most one file."""

    fields: dict[str, list[str]] = field(default_factory=dict)
    file: UploadedFile | None = None

    def get(self, name: str, default: str | None = None) -> str | None:
        values = self.fields.get(name)
        return values[0] if values else default

    def get_list(self, name: str) -> list[str]:
        return list(self.fields.get(name, []))


def _decode_filename(raw: str) -> str:
    """Fix UTF-8 file names that arrived decoded as Latin-1."""
    raw = raw.strip()
    try:
        return raw.encode("latin-1").decode("utf-8")
    except (UnicodeEncodeError, UnicodeDecodeError):
        return raw


def _filename_star(raw_header_value: bytes) -> str | None:
    """filename*=charset''percent-encoded from a raw Content-Disposition value."""
    decoded = raw_header_value.decode("utf-8", errors="replace")
    idx = decoded.find("filename*=")
    if idx == -1:
        return None
    match = _FILENAME_STAR_RFC5987.match(decoded[idx + len("filename*=") :].strip())
    if not match:
        return None
    charset, encoded = match.groups()
    try:
        return unquote_to_bytes(encoded.split(";")[0]).decode(charset)
    except (ValueError, LookupError):
        return None


def part_filename(part: object) -> str:
    raw = (getattr(part, "filename", None) or "").strip()
    if not raw:
        headers = getattr(part, "_headers", None)
        if isinstance(headers, dict):
            raw = (_filename_star(headers.get(b"content-disposition", b"")) or "").strip()
    return _decode_filename(raw) if raw else ""


async def read_form(req: falcon.asgi.Request) -> MultipartForm:
    """Read a multipart/form-data body. A second file part is rejected."""
    if "multipart/form-data" not in (req.content_type or ""):
        raise ValidationError("Expected multipart/form-data")
    form = MultipartForm()
    async for part in await req.get_media():
        name = part.name or ""
        data = await part.get_data()
        if name in FILE_FIELDS:
            if form.file is not None:
                raise ValidationError("Only one file may be uploaded per request")
            form.file = UploadedFile(
                data=bytes(data),
                file_name=part_filename(part),
                content_type=part.content_type or "application/octet-stream",
            )
        else:
            form.fields.setdefault(name, []).append(data.decode("utf-8").strip())
    return form
