# SPDX-License-Identifier: MIT
"""Slot resolution and per-skin mesh assembly."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from spine_scene_importer.errors import UnresolvedBoneError
from spine_scene_importer.parser.document import Document
from spine_scene_importer.scene.bones import Bone
from spine_scene_importer.scene.meshes import Mesh, Slot, create_mesh

logger = logging.getLogger(__name__)

DEFAULT_SKIN = "default"


def load_slots(
    slot_nodes: list[Document],
    bone_lookup: Mapping[str, int],
) -> dict[str, Slot]:
    """Resolve slots that show an attachment, numbering them in draw order.

    Slots without an attachment are dropped and do not take up an index.

    Raises:
        UnresolvedBoneError: if a kept slot names an unknown bone
    """
    slots: dict[str, Slot] = {}
    for node in slot_nodes:
        attachment = node.get_str("attachment", None)
        if not attachment:
            continue
        bone_name = node.require_str("bone")
        bone_index = bone_lookup.get(bone_name)
        if bone_index is None:
            raise UnresolvedBoneError(
                f"The bone '{bone_name}' of attachment '{attachment}' does not exist."
            )
        name = node.require_str("name")
        slots[name] = Slot(
            name=name,
            bone_index=bone_index,
            index=len(slots),
            attachment=attachment,
        )
    return slots


def load_skin(
    skin_node: Document,
    slots: Mapping[str, Slot],
    bones: Sequence[Bone],
) -> list[Mesh]:
    """Build the meshes of one skin, sorted by slot draw order.

    Only the attachment a slot declares is built; entries for slots that
    show nothing are skipped.
    """
    meshes: list[Mesh] = []
    for slot_name, slot_node in skin_node.items():
        slot = slots.get(slot_name)
        if slot is None:
            logger.debug("Skipping skin entry for inactive slot '%s'", slot_name)
            continue
        for attachment, attachment_node in slot_node.items():
            if attachment != slot.attachment:
                continue
            mesh = create_mesh(attachment_node, attachment, slot, bones)
            if mesh is not None:
                meshes.append(mesh)

    meshes.sort(key=lambda m: m.slot.index)
    return meshes


def load_skins(
    skins_node: Document,
    slots: Mapping[str, Slot],
    bones: Sequence[Bone],
) -> tuple[list[Mesh] | None, dict[str, list[Mesh]]]:
    """Build every skin.

    Returns:
        Tuple of (default skin meshes or None if absent, other skins by name)
    """
    default_meshes = None
    skins: dict[str, list[Mesh]] = {}
    for skin_name, skin_node in skins_node.items():
        meshes = load_skin(skin_node, slots, bones)
        if skin_name == DEFAULT_SKIN:
            default_meshes = meshes
        else:
            skins[skin_name] = meshes
        logger.debug("Loaded skin '%s' with %d meshes", skin_name, len(meshes))
    return default_meshes, skins
