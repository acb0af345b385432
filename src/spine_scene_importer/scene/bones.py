# SPDX-License-Identifier: MIT
"""Bone hierarchy construction."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from spine_scene_importer.errors import (
    MalformedDocumentError,
    UnresolvedParentError,
)
from spine_scene_importer.parser.document import Document
from spine_scene_importer.scene.transforms import Transform, z_angle_quaternion

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bone:
    """A node in the skeleton hierarchy."""

    name: str
    index: int  # Position in document order, used by skinned vertex data
    local: Transform
    world: Transform
    inverse_world: Transform
    parent_index: int | None = None
    inherit_scale: bool = True

    @property
    def is_root(self) -> bool:
        return self.parent_index is None


def load_transform(node: Document) -> Transform:
    """Read a planar x/y/rotation/scaleX/scaleY transform from a node."""
    return Transform(
        position=(node.get_float("x", 0.0), node.get_float("y", 0.0), 0.0),
        rotation=z_angle_quaternion(node.get_float("rotation", 0.0)),
        scale=(node.get_float("scaleX", 1.0), node.get_float("scaleY", 1.0), 1.0),
    )


def world_transform(
    parent: Bone | None,
    local: Transform,
    inherit_scale: bool,
) -> Transform:
    """Compute a bone's world transform from its parent's.

    Args:
        parent: Already-built parent bone, or None for a root
        local: Bone transform relative to the parent
        inherit_scale: Whether ancestor scale carries into the world scale

    Returns:
        Transform in world space
    """
    if parent is None:
        return local

    world = parent.world.compose(local)
    if not inherit_scale:
        # Keep the composed position and rotation, drop ancestor scale
        world = Transform(
            position=world.position,
            rotation=world.rotation,
            scale=local.scale,
        )
    return world


def build_bones(bone_nodes: list[Document]) -> list[Bone]:
    """Build bones in document order, resolving parents by name.

    Parents must appear before their children, which rules out cycles.

    Args:
        bone_nodes: The ``bones`` array of the document

    Returns:
        Bones indexed by document position

    Raises:
        UnresolvedParentError: if a parent is unknown or declared later
        MalformedDocumentError: on a missing name, duplicate name or a
            non-invertible world transform
    """
    bones: list[Bone] = []
    by_name: dict[str, int] = {}

    for node in bone_nodes:
        name = node.require_str("name")
        if name in by_name:
            raise MalformedDocumentError(
                f"The bone '{name}' is defined more than once at {node.location}"
            )
        inherit_scale = node.get_bool("inheritScale", True)
        local = load_transform(node)

        parent = None
        parent_name = node.get_str("parent", None)
        if parent_name is not None:
            parent_index = by_name.get(parent_name)
            if parent_index is None:
                raise UnresolvedParentError(
                    f"The parent bone '{parent_name}' does not exist."
                )
            parent = bones[parent_index]

        world = world_transform(parent, local, inherit_scale)
        bone = Bone(
            name=name,
            index=len(bones),
            local=local,
            world=world,
            inverse_world=world.invert(),
            parent_index=None if parent is None else parent.index,
            inherit_scale=inherit_scale,
        )
        bones.append(bone)
        by_name[name] = bone.index

    logger.debug("Built %d bones", len(bones))
    return bones
