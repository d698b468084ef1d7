"""Statement file decoding."""

from .readers import StatementDecodeError, decode_rows

__all__ = ["StatementDecodeError", "decode_rows"]
