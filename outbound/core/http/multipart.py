"""
Fluent builder for multipart/form-data request bodies.

Example:
    ```python
    body = (
        MultipartBuilder()
        .add_text("description", "quarterly upload")
        .add_json("metadata", {"id": 42})
        .add_file("file", "/tmp/report.pdf", "application/pdf")
        .build()
    )
    client.post("https://example.com/api/upload", body)
    ```
"""

import os
import re
import uuid
from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from outbound.core.http.codec import JSONCodec
from outbound.core.http.exceptions import HTTPClientError, MultipartStateError

CRLF = b"\r\n"
DEFAULT_BINARY = "application/octet-stream"
APPLICATION_JSON_UTF8 = "application/json; charset=UTF-8"

# RFC 2046 bchars minus space and the characters that would force quoting in boundary=
BOUNDARY_PATTERN = re.compile(r"[0-9A-Za-z'+_.-]{1,70}")


class TextPart(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    value: str = ""
    charset: str = "UTF-8"


class JSONPart(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    encoded_value: str


class FilePart(BaseModel):
    """A part read from a path or binary file object when the body is built."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    file: Any = Field(..., description="Filesystem path or binary file object")
    content_type: str = DEFAULT_BINARY
    filename: str


class BytesPart(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    data: bytes
    filename: str
    content_type: str = DEFAULT_BINARY


MultipartPart = Union[TextPart, JSONPart, FilePart, BytesPart]


class MultipartBody(BaseModel):
    """A rendered multipart/form-data body, ready to send as a POST body."""

    model_config = ConfigDict(frozen=True)

    content: bytes
    boundary: str

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={self.boundary}"


class MultipartBuilder:
    """
    Accumulates named parts in insertion order and renders them once.

    A builder is single-use and owned by one caller: after build() it rejects
    further parts and a second build().
    """

    def __init__(self, boundary: Optional[str] = None):
        """
        Args:
            boundary: Fixed boundary string (optional, random when omitted);
                1-70 characters from letters, digits and ' + _ . -

        Raises:
            ValueError: If boundary contains other characters or is too long
        """
        if boundary is not None and not BOUNDARY_PATTERN.fullmatch(boundary):
            raise ValueError(f"Invalid multipart boundary {boundary!r}")
        self._boundary = boundary or f"----outbound-{uuid.uuid4().hex}"
        self._parts: List[MultipartPart] = []
        self._built = False

    @property
    def parts(self) -> List[MultipartPart]:
        return list(self._parts)

    def add_text(self, name: str, value: Optional[str]) -> "MultipartBuilder":
        """Add a text/plain field; None becomes an empty string."""
        value = value if value is not None else ""
        _require_utf8(name, value)
        return self._append(TextPart(name=name, value=value))

    def add_json(self, name: str, value: Any) -> "MultipartBuilder":
        """Add a field holding the JSON encoding of value."""
        _require_utf8(name)
        return self._append(JSONPart(name=name, encoded_value=JSONCodec.encode(value)))

    def add_file(
        self,
        name: str,
        file: Union[str, os.PathLike, Any],
        content_type: Optional[str] = None
    ) -> "MultipartBuilder":
        """
        Add a file field.

        Args:
            name: Form field name
            file: Path to the file, or an open binary file object
            content_type: MIME type (defaults to application/octet-stream)
        """
        if isinstance(file, (str, os.PathLike)):
            filename = Path(file).name
        else:
            filename = os.path.basename(str(getattr(file, "name", "")))
        _require_utf8(name, filename)
        return self._append(
            FilePart(name=name, file=file, content_type=content_type or DEFAULT_BINARY, filename=filename)
        )

    def add_bytes(
        self,
        name: str,
        data: bytes,
        filename: str,
        content_type: Optional[str] = None
    ) -> "MultipartBuilder":
        """Add in-memory binary content as a file field."""
        _require_utf8(name, filename)
        return self._append(
            BytesPart(name=name, data=bytes(data), filename=filename, content_type=content_type or DEFAULT_BINARY)
        )

    def build(self) -> MultipartBody:
        """
        Render all parts into one multipart/form-data body.

        Returns:
            MultipartBody with the encoded content and its boundary

        Raises:
            MultipartStateError: If the builder was already built
            OSError: If a file part cannot be read
        """
        self._ensure_open()
        self._built = True

        boundary = self._boundary.encode("ascii")
        chunks: List[bytes] = []
        for part in self._parts:
            chunks.append(b"--" + boundary + CRLF)
            chunks.append(_part_headers(part))
            chunks.append(CRLF)
            chunks.append(_part_payload(part))
            chunks.append(CRLF)
        chunks.append(b"--" + boundary + b"--" + CRLF)

        return MultipartBody(content=b"".join(chunks), boundary=self._boundary)

    def _append(self, part: MultipartPart) -> "MultipartBuilder":
        self._ensure_open()
        self._parts.append(part)
        return self

    def _ensure_open(self) -> None:
        if self._built:
            raise MultipartStateError("MultipartBuilder has already been built; create a new builder")


def _quote(value: str) -> str:
    """Escape a Content-Disposition parameter value (RFC 7578 section 4.2)."""
    return value.replace('"', "%22").replace("\r", "%0D").replace("\n", "%0A")


def _part_headers(part: MultipartPart) -> bytes:
    disposition = f'Content-Disposition: form-data; name="{_quote(part.name)}"'

    if isinstance(part, TextPart):
        content_type = f"text/plain; charset={part.charset}"
    elif isinstance(part, JSONPart):
        content_type = APPLICATION_JSON_UTF8
    else:
        disposition += f'; filename="{_quote(part.filename)}"'
        content_type = part.content_type

    return f"{disposition}\r\nContent-Type: {content_type}\r\n".encode("utf-8")


def _part_payload(part: MultipartPart) -> bytes:
    if isinstance(part, TextPart):
        return part.value.encode(part.charset)
    if isinstance(part, JSONPart):
        return part.encoded_value.encode("utf-8")
    if isinstance(part, BytesPart):
        return part.data

    if isinstance(part.file, (str, os.PathLike)):
        return Path(part.file).read_bytes()
    return part.file.read()


def _require_utf8(*texts: str) -> None:
    """Reject text that cannot be written as UTF-8 (e.g. lone surrogates)."""
    for text in texts:
        try:
            text.encode("utf-8")
        except UnicodeEncodeError as e:
            raise HTTPClientError(
                message=f"Multipart field text is not encodable as UTF-8: {text!r}",
                original_error=e
            ) from e
