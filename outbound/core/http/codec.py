"""
Best-effort JSON conversion for request and response bodies.

Encoding and decoding never raise: failures degrade to an empty object.
Callers that need strict validation must check the shape of what they get back.
"""

import json
from typing import Any, Dict, Optional, Union

from outbound.core.http.exceptions import CodecError
from outbound.core.logging import get_logger

logger = get_logger(__name__)

EMPTY_OBJECT = "{}"


class JSONCodec:
    """Lossy JSON codec shared by the request executor and the multipart builder."""

    @staticmethod
    def encode(data: Any) -> str:
        """
        Serialize structured data to compact JSON text.

        Args:
            data: Mapping, list or scalar to serialize

        Returns:
            JSON text; "{}" if data is None or cannot be serialized
        """
        if data is None:
            return EMPTY_OBJECT

        try:
            return JSONCodec._dumps(data)
        except CodecError as e:
            logger.debug(f"JSON encode failed, falling back to empty object: {e}")
            return EMPTY_OBJECT

    @staticmethod
    def decode(text: Optional[Union[str, bytes]]) -> Dict[str, Any]:
        """
        Parse a JSON object into a mapping.

        Args:
            text: JSON text (str or UTF-8 bytes)

        Returns:
            Parsed mapping; an empty dict if text is empty, not valid JSON,
            or a JSON value other than an object
        """
        if not text or not text.strip():
            return {}

        try:
            data = JSONCodec._loads(text)
        except CodecError as e:
            logger.debug(f"JSON decode failed, falling back to empty mapping: {e}")
            return {}

        if not isinstance(data, dict):
            logger.debug(f"JSON decode got {type(data).__name__}, not an object; falling back to empty mapping")
            return {}
        return data

    @staticmethod
    def _dumps(data: Any) -> str:
        try:
            # ASCII output: lone surrogates become \u escapes instead of unencodable text
            return json.dumps(data, separators=(",", ":"), ensure_ascii=True, allow_nan=False)
        except (TypeError, ValueError, RecursionError) as e:
            raise CodecError(f"Cannot encode {type(data).__name__} as JSON: {e}", original_error=e) from e

    @staticmethod
    def _loads(text: Union[str, bytes]) -> Any:
        try:
            return json.loads(text)
        except (ValueError, RecursionError) as e:
            # json.JSONDecodeError and UnicodeDecodeError are both ValueError
            raise CodecError(f"Invalid JSON: {e}", original_error=e) from e
