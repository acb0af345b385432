# SPDX-License-Identifier: MIT
"""Load keyframed bone animations."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from spine_scene_importer.animation.animation_data import (
    Animation,
    AnimationCurve,
    AnimationKey,
    AnimationTrack,
    Property,
    property_from_name,
)
from spine_scene_importer.errors import MalformedDocumentError, UnresolvedBoneError
from spine_scene_importer.parser.document import Document
from spine_scene_importer.scene.bones import Bone

logger = logging.getLogger(__name__)

CURVE_POINTS = 4


def parse_curve(key_node: Document) -> AnimationCurve | None:
    """Read Bezier control points from ``curve``.

    Anything other than an array of exactly four numbers (for instance
    ``"stepped"``) leaves interpolation to the runtime.
    """
    if not key_node.has("curve"):
        return None
    curve = key_node.child("curve")
    if not curve.is_sequence() or len(curve.value) != CURVE_POINTS:
        return None
    try:
        x0, y0, x1, y1 = key_node.get_numbers("curve")
    except MalformedDocumentError:
        return None
    return AnimationCurve(x0=x0, y0=y0, x1=x1, y1=y1)


def parse_key(key_node: Document, prop: Property) -> AnimationKey:
    """Read one keyframe for ``prop``.

    Scale keys default missing components to 0 like translate keys do.
    """
    time = key_node.require_float("time")
    if prop == Property.ROTATION:
        value = (key_node.get_float("angle", 0.0),)
    else:
        value = (key_node.get_float("x", 0.0), key_node.get_float("y", 0.0))
    return AnimationKey(time=time, value=value, curve=parse_curve(key_node))


def load_animation(
    name: str,
    animation_node: Document,
    bones: Sequence[Bone],
    bone_lookup: Mapping[str, int],
) -> Animation:
    """Build one animation.

    Raises:
        UnresolvedBoneError: if a track names an unknown bone
        UnknownPropertyError: if a track animates an unsupported property
    """
    tracks: list[AnimationTrack] = []
    duration = 0.0
    for bone_name, bone_node in animation_node.get_mapping("bones").items():
        bone_index = bone_lookup.get(bone_name)
        if bone_index is None:
            raise UnresolvedBoneError(
                f"The bone '{bone_name}' of animation '{name}' does not exist."
            )
        for prop_name, prop_node in bone_node.items():
            prop = property_from_name(prop_name)
            keys = []
            for key_node in prop_node.elements():
                key = parse_key(key_node, prop)
                duration = max(duration, key.time)
                keys.append(key)
            tracks.append(
                AnimationTrack(bone=bones[bone_index], property=prop, keys=tuple(keys))
            )

    return Animation(name=name, duration=duration, tracks=tuple(tracks))


def load_animations(
    animations_node: Document,
    bones: Sequence[Bone],
    bone_lookup: Mapping[str, int],
) -> dict[str, Animation]:
    """Build every animation in document order."""
    animations = {}
    for name, animation_node in animations_node.items():
        animations[name] = load_animation(name, animation_node, bones, bone_lookup)
        logger.debug(
            "Loaded animation '%s' (%d tracks, %.3fs)",
            name,
            len(animations[name].tracks),
            animations[name].duration,
        )
    return animations
