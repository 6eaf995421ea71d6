from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass


DATA_URI_PATTERN = re.compile(
    r"^data:(?P<mime>[A-Za-z0-9][A-Za-z0-9.+-]*/[A-Za-z0-9][A-Za-z0-9.+-]*)"
    r"(?P<params>(?:;[A-Za-z0-9.+-]+=[^;,]+)*)"
    r";base64,(?P<payload>.*)$",
    re.DOTALL,
)


@dataclass(frozen=True)
class DataUri:
    mime_type: str
    payload: str

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")


def parse_data_uri(value: str) -> DataUri:
    """
    Split a ``data:<mimetype>;base64,<payload>`` string.

    Raises:
        ValueError: when the MIME type or base64 marker is missing, or when the
            payload is empty or not valid base64.
    """
    if not isinstance(value, str) or not value:
        raise ValueError("expected a data URI string")
    match = DATA_URI_PATTERN.match(value)
    if not match:
        raise ValueError("expected data:<mimetype>;base64,<payload>")
    payload = match.group("payload").strip()
    if not payload:
        raise ValueError("data URI payload is empty")
    try:
        base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError("data URI payload is not valid base64") from exc
    return DataUri(mime_type=match.group("mime").lower(), payload=payload)


def encode_data_uri(data: bytes, mime_type: str) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"
