# SPDX-License-Identifier: MIT
"""Decode skeleton documents from bytes or files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import msgpack

from spine_scene_importer.errors import MalformedDocumentError
from spine_scene_importer.parser.msgpack_decoder import decode_msgpack

SUFFIX_FORMATS = {
    ".json": "json",
    ".msgpack": "msgpack",
    ".mpk": "msgpack",
}


def decode_document(data: bytes, fmt: str = "json") -> Any:
    """Decode raw document bytes into a generic tree.

    Args:
        data: Encoded document
        fmt: "json" or "msgpack"

    Returns:
        Decoded tree of dicts, lists and scalars

    Raises:
        MalformedDocumentError: if the bytes cannot be decoded
    """
    if fmt == "json":
        try:
            return json.loads(data.decode("utf-8"))
        except (ValueError, RecursionError) as e:
            raise MalformedDocumentError(f"Invalid JSON document: {e}") from e
    elif fmt == "msgpack":
        try:
            return decode_msgpack(data)
        except (msgpack.UnpackException, ValueError, TypeError) as e:
            raise MalformedDocumentError(f"Invalid msgpack document: {e}") from e
    raise MalformedDocumentError(f"Unsupported document format: {fmt}")


def format_for_path(path: Path) -> str:
    """Pick the document format from a file suffix."""
    fmt = SUFFIX_FORMATS.get(path.suffix.lower())
    if fmt is None:
        raise MalformedDocumentError(
            f"Cannot tell the document format of '{path.name}', "
            f"expected one of {', '.join(SUFFIX_FORMATS)}"
        )
    return fmt


def read_document(path: str | Path, fmt: str | None = None) -> Any:
    """Read and decode a document file.

    Args:
        path: Path to the document
        fmt: Format override; chosen from the suffix when None

    Returns:
        Decoded tree
    """
    path = Path(path)
    if fmt is None:
        fmt = format_for_path(path)
    return decode_document(path.read_bytes(), fmt)
