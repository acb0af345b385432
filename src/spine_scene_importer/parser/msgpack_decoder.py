# SPDX-License-Identifier: MIT
"""Msgpack decoder with support for typed array extensions."""

from __future__ import annotations

from typing import Any

import msgpack
import numpy as np

# Extension type codes used by Three.js-style encoders for typed arrays
EXT_UINT8_ARRAY = 0x12  # 18
EXT_INT32_ARRAY = 0x15  # 21
EXT_UINT32_ARRAY = 0x16  # 22
EXT_FLOAT32_ARRAY = 0x17  # 23

_EXT_DTYPES = {
    EXT_UINT8_ARRAY: np.uint8,
    EXT_INT32_ARRAY: np.int32,
    EXT_UINT32_ARRAY: np.uint32,
    EXT_FLOAT32_ARRAY: np.float32,
}


def decode_typed_array(code: int, data: bytes) -> np.ndarray | msgpack.ExtType:
    """Decode a msgpack extension type to a numpy array."""
    dtype = _EXT_DTYPES.get(code)
    if dtype is None:
        # Leave unknown extension types for the caller to reject
        return msgpack.ExtType(code, data)
    return np.frombuffer(data, dtype=dtype)


def decode_msgpack(data: bytes) -> Any:
    """Decode msgpack data with support for typed arrays.

    Args:
        data: Raw msgpack bytes

    Returns:
        Decoded Python object (dict, list, etc.)
    """
    return msgpack.unpackb(
        data, ext_hook=decode_typed_array, raw=False, strict_map_key=False
    )


def encode_msgpack(obj: Any) -> bytes:
    """Encode a document tree, writing float32 numpy arrays as extensions."""

    def default(value: Any) -> Any:
        if isinstance(value, np.ndarray):
            for code, dtype in _EXT_DTYPES.items():
                if value.dtype == dtype:
                    return msgpack.ExtType(code, value.tobytes())
            return value.tolist()
        raise TypeError(f"Cannot encode {type(value).__name__}")

    return msgpack.packb(obj, default=default, use_bin_type=True)
