# SPDX-License-Identifier: MIT
"""Spine Scene Importer - Load skeleton animation documents into world space."""

from spine_scene_importer.errors import (
    LoadError,
    MalformedDocumentError,
    UnknownPropertyError,
    UnresolvedBoneError,
    UnresolvedParentError,
)
from spine_scene_importer.loader import Scene, load_scene, load_scene_file

__version__ = "0.1.0"
__all__ = [
    "LoadError",
    "MalformedDocumentError",
    "Scene",
    "UnknownPropertyError",
    "UnresolvedBoneError",
    "UnresolvedParentError",
    "load_scene",
    "load_scene_file",
]
