# SPDX-License-Identifier: MIT
"""Document decoding and typed access."""

from spine_scene_importer.parser.document import Document, as_document
from spine_scene_importer.parser.document_reader import (
    decode_document,
    read_document,
)
from spine_scene_importer.parser.msgpack_decoder import decode_msgpack

__all__ = [
    "Document",
    "as_document",
    "decode_document",
    "decode_msgpack",
    "read_document",
]
