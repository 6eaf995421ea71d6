from .errors import (
    AgriInfoError,
    FileReadError,
    InvalidRequest,
    InvalidResponse,
    ModelInvocationError,
    SchemaViolation,
)
from .media import DataUri, encode_data_uri, parse_data_uri

__all__ = [
    "AgriInfoError",
    "DataUri",
    "FileReadError",
    "InvalidRequest",
    "InvalidResponse",
    "ModelInvocationError",
    "SchemaViolation",
    "encode_data_uri",
    "parse_data_uri",
]
