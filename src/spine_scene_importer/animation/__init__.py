# SPDX-License-Identifier: MIT
"""Animation loading for skeleton documents."""

from spine_scene_importer.animation.animation_data import (
    Animation,
    AnimationCurve,
    AnimationKey,
    AnimationTrack,
    Property,
)
from spine_scene_importer.animation.animation_loader import load_animations

__all__ = [
    "Animation",
    "AnimationCurve",
    "AnimationKey",
    "AnimationTrack",
    "Property",
    "load_animations",
]
