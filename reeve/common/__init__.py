"""Shared primitives used across reeve components."""

from __future__ import annotations

from .identity import (
    check_composite_parts,
    decode_composite_id,
    encode_composite_id,
    split_import_ref,
)
from .secret import REDACTED

__all__ = [
    "REDACTED",
    "check_composite_parts",
    "decode_composite_id",
    "encode_composite_id",
    "split_import_ref",
]
