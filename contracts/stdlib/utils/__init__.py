# -*- coding: utf-8 -*-
"""contracts.stdlib.utils — storage encodings and storage-backed collections."""

from .codec import (
    decode_address,
    decode_bool,
    decode_str,
    decode_uint,
    encode_address,
    encode_bool,
    encode_str,
    encode_uint,
    slot,
)

__all__ = [
    "slot",
    "encode_uint",
    "decode_uint",
    "encode_bool",
    "decode_bool",
    "encode_address",
    "decode_address",
    "encode_str",
    "decode_str",
]
