# SPDX-License-Identifier: MIT
"""Animation data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from spine_scene_importer.errors import UnknownPropertyError
from spine_scene_importer.scene.bones import Bone


class Property(Enum):
    """Bone properties an animation track can drive."""

    POSITION = "translate"
    ROTATION = "rotate"
    SCALE = "scale"

    @property
    def value_size(self) -> int:
        """Number of floats in a key value for this property."""
        return 1 if self is Property.ROTATION else 2


def property_from_name(name: str) -> Property:
    """Map a document property name to a Property.

    Raises:
        UnknownPropertyError: for anything but translate, rotate and scale
    """
    try:
        return Property(name)
    except ValueError:
        raise UnknownPropertyError(
            f"The animation property '{name}' is not supported."
        ) from None


@dataclass(frozen=True)
class AnimationCurve:
    """Cubic Bezier control points easing into the next key."""

    x0: float
    y0: float
    x1: float
    y1: float


@dataclass(frozen=True)
class AnimationKey:
    """A single keyframe."""

    time: float  # Time in seconds
    value: tuple[float, ...]  # (x, y) for position/scale, (angle,) for rotation
    curve: AnimationCurve | None = None


@dataclass(frozen=True)
class AnimationTrack:
    """Keys for one property of one bone, in document order."""

    bone: Bone
    property: Property
    keys: tuple[AnimationKey, ...] = ()

    @property
    def times(self) -> list[float]:
        return [key.time for key in self.keys]

    def __len__(self) -> int:
        """Return number of keyframes."""
        return len(self.keys)


@dataclass(frozen=True)
class Animation:
    """A named collection of bone tracks."""

    name: str
    duration: float = 0.0
    tracks: tuple[AnimationTrack, ...] = field(default_factory=tuple)

    def get_tracks(self, bone_name: str) -> list[AnimationTrack]:
        """Get the tracks driving a bone."""
        return [track for track in self.tracks if track.bone.name == bone_name]

    def get_track(self, bone_name: str, prop: Property) -> AnimationTrack | None:
        """Get a bone's track for one property."""
        for track in self.tracks:
            if track.bone.name == bone_name and track.property == prop:
                return track
        return None
