# SPDX-License-Identifier: MIT
"""Typed access to a decoded document tree.

The loaders never touch a concrete parser. They see the decoded tree
(mappings, sequences, numbers, strings, booleans and numpy arrays from the
msgpack typed-array extensions) through ``Document``, which supplies
defaults for optional fields and reports structural problems with the
location of the offending node.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from numbers import Integral, Real
from typing import Any

import numpy as np

from spine_scene_importer.errors import MalformedDocumentError

_MISSING = object()


def _is_sequence(value: Any) -> bool:
    if isinstance(value, np.ndarray):
        return True
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, (bool, np.bool_))


def _type_name(value: Any) -> str:
    return type(value).__name__


class Document:
    """A node of a decoded document together with its location."""

    def __init__(self, value: Any, location: str = "$"):
        self._value = value
        self._location = location

    def __repr__(self) -> str:
        return f"Document({self._location})"

    @property
    def value(self) -> Any:
        """The raw decoded value."""
        return self._value

    @property
    def location(self) -> str:
        """Path of this node from the document root, e.g. ``$.bones[2]``."""
        return self._location

    def is_mapping(self) -> bool:
        return isinstance(self._value, Mapping)

    def is_sequence(self) -> bool:
        return _is_sequence(self._value)

    def _field_location(self, name: str) -> str:
        return f"{self._location}.{name}"

    def _error(
        self, message: str, location: str | None = None
    ) -> MalformedDocumentError:
        return MalformedDocumentError(f"{message} at {location or self._location}")

    def _mapping(self) -> Mapping:
        if not self.is_mapping():
            raise self._error(f"Expected an object, got {_type_name(self._value)}")
        return self._value

    def _get(self, name: str) -> Any:
        return self._mapping().get(name, _MISSING)

    def has(self, name: str) -> bool:
        """Return True if this node is an object carrying field ``name``."""
        return self.is_mapping() and name in self._value

    # -- scalars ------------------------------------------------------------

    def _float(self, value: Any, location: str) -> float:
        if not _is_number(value):
            raise self._error(f"Expected a number, got {_type_name(value)}", location)
        try:
            return float(value)
        except OverflowError:
            raise self._error("Number out of range", location) from None

    def _int(self, value: Any, location: str) -> int:
        if isinstance(value, Integral) and not isinstance(value, (bool, np.bool_)):
            return int(value)
        if _is_number(value) and self._float(value, location).is_integer():
            return int(value)
        raise self._error(f"Expected an integer, got {value!r}", location)

    def get_float(self, name: str, default: float) -> float:
        """Return numeric field ``name`` as a float, or ``default`` if absent."""
        value = self._get(name)
        if value is _MISSING or value is None:
            return default
        return self._float(value, self._field_location(name))

    def get_int(self, name: str, default: int) -> int:
        """Return integral field ``name``, or ``default`` if absent or null."""
        value = self._get(name)
        if value is _MISSING or value is None:
            return default
        return self._int(value, self._field_location(name))

    def get_str(self, name: str, default: str | None) -> str | None:
        """Return string field ``name``, or ``default`` if absent or null."""
        value = self._get(name)
        if value is _MISSING or value is None:
            return default
        if not isinstance(value, str):
            raise self._error(
                f"Expected a string, got {_type_name(value)}",
                self._field_location(name),
            )
        return value

    def get_bool(self, name: str, default: bool) -> bool:
        """Return boolean field ``name``, or ``default`` if absent or null."""
        value = self._get(name)
        if value is _MISSING or value is None:
            return default
        if not isinstance(value, (bool, np.bool_)):
            raise self._error(
                f"Expected a boolean, got {_type_name(value)}",
                self._field_location(name),
            )
        return bool(value)

    def _require(self, name: str) -> Any:
        value = self._get(name)
        if value is _MISSING:
            raise self._error(f"Missing required field '{name}'")
        return value

    def require_float(self, name: str) -> float:
        return self._float(self._require(name), self._field_location(name))

    def require_int(self, name: str) -> int:
        return self._int(self._require(name), self._field_location(name))

    def require_str(self, name: str) -> str:
        value = self._require(name)
        if not isinstance(value, str):
            raise self._error(
                f"Expected a string, got {_type_name(value)}",
                self._field_location(name),
            )
        return value

    # -- containers ---------------------------------------------------------

    def child(self, name: str) -> Document:
        """Return required field ``name`` as a Document."""
        return Document(self._require(name), self._field_location(name))

    def get_mapping(self, name: str) -> Document:
        """Return object field ``name``; an absent field reads as empty."""
        value = self._get(name)
        if value is _MISSING:
            return Document({}, self._field_location(name))
        if not isinstance(value, Mapping):
            raise self._error(
                f"Expected an object, got {_type_name(value)}",
                self._field_location(name),
            )
        return Document(value, self._field_location(name))

    def get_sequence(self, name: str) -> list[Document]:
        """Return array field ``name`` as Documents; absent reads as empty."""
        value = self._get(name)
        if value is _MISSING:
            return []
        return Document(value, self._field_location(name)).elements()

    def elements(self) -> list[Document]:
        """Return the elements of this array node."""
        if not self.is_sequence():
            raise self._error(f"Expected an array, got {_type_name(self._value)}")
        return [
            Document(item, f"{self._location}[{i}]")
            for i, item in enumerate(self._value)
        ]

    def items(self) -> Iterator[tuple[str, Document]]:
        """Iterate the fields of this object node in document order."""
        for key, value in self._mapping().items():
            yield str(key), Document(value, self._field_location(str(key)))

    def get_numbers(self, name: str) -> list[float]:
        """Return required array field ``name`` as a flat list of floats."""
        value = self._require(name)
        location = self._field_location(name)
        if isinstance(value, np.ndarray):
            value = value.ravel().tolist()
        if not _is_sequence(value):
            raise self._error(f"Expected an array, got {_type_name(value)}", location)
        return [self._float(v, f"{location}[{i}]") for i, v in enumerate(value)]


def as_document(document: Document | Mapping[str, Any]) -> Document:
    """Wrap a decoded root object in a Document if it is not one already."""
    if isinstance(document, Document):
        return document
    if not isinstance(document, Mapping):
        raise MalformedDocumentError(
            f"Expected the document root to be an object, got {_type_name(document)}"
        )
    return Document(document)
