# SPDX-License-Identifier: MIT
"""Skeleton, mesh and skin construction."""

from spine_scene_importer.scene.bones import Bone, build_bones
from spine_scene_importer.scene.meshes import AttachmentType, Mesh, Slot
from spine_scene_importer.scene.skins import DEFAULT_SKIN, load_skins, load_slots
from spine_scene_importer.scene.transforms import Transform

__all__ = [
    "AttachmentType",
    "Bone",
    "DEFAULT_SKIN",
    "Mesh",
    "Slot",
    "Transform",
    "build_bones",
    "load_skins",
    "load_slots",
]
