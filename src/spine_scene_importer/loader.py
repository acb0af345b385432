# SPDX-License-Identifier: MIT
"""Load a skeleton document into an immutable Scene."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from spine_scene_importer.animation.animation_data import Animation
from spine_scene_importer.animation.animation_loader import load_animations
from spine_scene_importer.parser.document import Document, as_document
from spine_scene_importer.parser.document_reader import read_document
from spine_scene_importer.scene.bones import Bone, build_bones
from spine_scene_importer.scene.meshes import Mesh
from spine_scene_importer.scene.skins import DEFAULT_SKIN, load_skins, load_slots

logger = logging.getLogger(__name__)


def _empty_mapping() -> Mapping:
    return MappingProxyType({})


@dataclass(frozen=True)
class Scene:
    """Bones, meshes per skin and animations with world-space geometry."""

    bones: tuple[Bone, ...] = ()
    bone_lookup: Mapping[str, int] = field(default_factory=_empty_mapping)
    meshes: tuple[Mesh, ...] = ()  # The default skin
    skins: Mapping[str, tuple[Mesh, ...]] = field(default_factory=_empty_mapping)
    animations: Mapping[str, Animation] = field(default_factory=_empty_mapping)

    def get_bone(self, name: str) -> Bone | None:
        """Get a bone by name."""
        index = self.bone_lookup.get(name)
        return None if index is None else self.bones[index]

    def get_bone_by_index(self, index: int) -> Bone:
        """Get a bone by its document index."""
        return self.bones[index]

    def get_parent(self, bone: Bone) -> Bone | None:
        """Get the parent of a bone, None for roots."""
        if bone.parent_index is None:
            return None
        return self.bones[bone.parent_index]

    def get_skin(self, name: str) -> tuple[Mesh, ...] | None:
        """Get the meshes of a skin; "default" is the primary mesh list."""
        if name == DEFAULT_SKIN:
            return self.meshes
        return self.skins.get(name)

    def get_animation(self, name: str) -> Animation | None:
        """Get an animation by name."""
        return self.animations.get(name)


class SceneBuilder:
    """Accumulates one load; ``build()`` freezes the result into a Scene."""

    def __init__(self):
        self.bones: list[Bone] = []
        self.bone_lookup: dict[str, int] = {}
        self.meshes: list[Mesh] = []
        self.skins: dict[str, list[Mesh]] = {}
        self.animations: dict[str, Animation] = {}

    def load_bones(self, bone_nodes: list[Document]) -> None:
        self.bones = build_bones(bone_nodes)
        self.bone_lookup = {bone.name: bone.index for bone in self.bones}

    def load_skins(self, slot_nodes: list[Document], skins_node: Document) -> None:
        slots = load_slots(slot_nodes, self.bone_lookup)
        default_meshes, self.skins = load_skins(skins_node, slots, self.bones)
        if default_meshes is not None:
            self.meshes = default_meshes

    def load_animations(self, animations_node: Document) -> None:
        self.animations = load_animations(
            animations_node, self.bones, self.bone_lookup
        )

    def build(self) -> Scene:
        return Scene(
            bones=tuple(self.bones),
            bone_lookup=MappingProxyType(dict(self.bone_lookup)),
            meshes=tuple(self.meshes),
            skins=MappingProxyType(
                {name: tuple(meshes) for name, meshes in self.skins.items()}
            ),
            animations=MappingProxyType(dict(self.animations)),
        )


def load_scene(document: Document | Mapping[str, Any]) -> Scene:
    """Load a decoded skeleton document.

    Bones are built first, then skins (which need bone world transforms),
    then animations (which only need bone identities). Missing top-level
    sections read as empty.

    Args:
        document: Decoded document root, raw or wrapped in a Document

    Returns:
        The loaded Scene

    Raises:
        LoadError: on any failure; no partial scene is returned
    """
    root = as_document(document)
    builder = SceneBuilder()
    builder.load_bones(root.get_sequence("bones"))
    builder.load_skins(root.get_sequence("slots"), root.get_mapping("skins"))
    builder.load_animations(root.get_mapping("animations"))
    scene = builder.build()
    logger.debug(
        "Loaded scene: %d bones, %d meshes, %d skins, %d animations",
        len(scene.bones),
        len(scene.meshes),
        len(scene.skins),
        len(scene.animations),
    )
    return scene


def load_scene_file(path: str | Path, fmt: str | None = None) -> Scene:
    """Read, decode and load a skeleton document file.

    Args:
        path: JSON or msgpack document
        fmt: Format override; chosen from the suffix when None
    """
    return load_scene(read_document(path, fmt))
