# SPDX-License-Identifier: MIT
"""Errors raised while loading a skeleton scene.

Every failure is a ``LoadError``; callers that only care whether a load
succeeded can catch that single type. Nothing partially built is ever
returned alongside one of these.
"""

from __future__ import annotations


class LoadError(ValueError):
    """The scene could not be loaded."""


class UnresolvedParentError(LoadError):
    """A bone names a parent that has not been defined before it."""


class UnresolvedBoneError(LoadError):
    """A slot, skinned vertex or animation track names a missing bone."""


class UnknownPropertyError(LoadError):
    """An animation track animates a property other than translate/rotate/scale."""


class MalformedDocumentError(LoadError):
    """The document does not have the expected structure or types."""


class DegenerateTransformError(MalformedDocumentError):
    """A transform with a zero or non-finite scale cannot be inverted."""
