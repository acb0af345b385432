# SPDX-License-Identifier: MIT
"""Tests for animation module."""

import pytest


def _load(animation_bones, bone_names=("root", "arm")):
    from spine_scene_importer import load_scene

    bones = [{"name": bone_names[0]}]
    bones += [{"name": name, "parent": bone_names[0]} for name in bone_names[1:]]
    scene = load_scene(
        {"bones": bones, "animations": {"anim": {"bones": animation_bones}}}
    )
    return scene.get_animation("anim")


class TestAnimationData:
    """Tests for animation data structures."""

    def test_property_from_name(self):
        """Test document property names."""
        from spine_scene_importer.animation.animation_data import (
            Property,
            property_from_name,
        )

        assert property_from_name("translate") == Property.POSITION
        assert property_from_name("rotate") == Property.ROTATION
        assert property_from_name("scale") == Property.SCALE
        assert Property.ROTATION.value_size == 1
        assert Property.SCALE.value_size == 2

    @pytest.mark.parametrize("name", ["color", "shear", "Translate", ""])
    def test_unknown_property(self, name):
        """Test unsupported properties are rejected."""
        from spine_scene_importer.animation.animation_data import property_from_name
        from spine_scene_importer.errors import UnknownPropertyError

        with pytest.raises(UnknownPropertyError):
            property_from_name(name)

    def test_animation_lookup_helpers(self):
        """Test finding tracks by bone and property."""
        from spine_scene_importer.animation.animation_data import Property

        animation = _load(
            {
                "root": {"rotate": [{"time": 0}]},
                "arm": {"rotate": [{"time": 0}], "scale": [{"time": 0}]},
            }
        )

        assert len(animation.get_tracks("arm")) == 2
        assert animation.get_track("arm", Property.SCALE).bone.name == "arm"
        assert animation.get_track("root", Property.SCALE) is None


class TestAnimationLoader:
    """Tests for loading animations."""

    def test_duration_is_max_key_time(self):
        """Test duration regardless of key order."""
        animation = _load(
            {
                "arm": {
                    "rotate": [
                        {"time": 0.0, "angle": 0},
                        {"time": 1.5, "angle": 10},
                        {"time": 0.4, "angle": 20},
                    ]
                }
            }
        )

        assert animation.duration == 1.5
        # Keys stay in document order
        assert animation.tracks[0].times == [0.0, 1.5, 0.4]
        assert len(animation.tracks[0]) == 3

    def test_duration_across_tracks(self):
        """Test duration spans every track of the animation."""
        animation = _load(
            {
                "root": {"translate": [{"time": 0.5}]},
                "arm": {"scale": [{"time": 2.25}], "rotate": [{"time": 1.0}]},
            }
        )

        assert animation.duration == 2.25

    def test_empty_animation(self):
        """Test an animation without keys has zero duration."""
        from spine_scene_importer import load_scene

        scene = load_scene({"animations": {"idle": {}, "blank": {"bones": {}}}})

        assert scene.get_animation("idle").duration == 0.0
        assert scene.get_animation("idle").tracks == ()
        assert scene.get_animation("blank").duration == 0.0

    def test_track_order(self):
        """Test tracks follow bones, then properties, in document order."""
        from spine_scene_importer.animation.animation_data import Property

        animation = _load(
            {
                "arm": {"scale": [{"time": 0}], "translate": [{"time": 0}]},
                "root": {"rotate": [{"time": 0}]},
            }
        )

        assert [(t.bone.name, t.property) for t in animation.tracks] == [
            ("arm", Property.SCALE),
            ("arm", Property.POSITION),
            ("root", Property.ROTATION),
        ]

    def test_track_references_scene_bone(self):
        """Test tracks point at the scene's bones."""
        from spine_scene_importer import load_scene

        scene = load_scene(
            {
                "bones": [{"name": "root"}],
                "animations": {"a": {"bones": {"root": {"rotate": [{"time": 0}]}}}},
            }
        )

        assert scene.get_animation("a").tracks[0].bone is scene.get_bone("root")

    def test_key_values(self):
        """Test values read per property."""
        animation = _load(
            {
                "arm": {
                    "translate": [{"time": 0, "x": 3, "y": -4}, {"time": 1}],
                    "rotate": [{"time": 0, "angle": 45}, {"time": 1}],
                    "scale": [{"time": 0, "x": 2, "y": 0.5}],
                }
            }
        )
        translate, rotate, scale = animation.tracks

        assert [k.value for k in translate.keys] == [(3.0, -4.0), (0.0, 0.0)]
        assert [k.value for k in rotate.keys] == [(45.0,), (0.0,)]
        assert scale.keys[0].value == (2.0, 0.5)

    def test_scale_key_defaults_to_zero(self):
        """Test missing scale components default to 0, not 1.

        Documented quirk: scale keys share the translate defaults even though
        a zero scale is degenerate.
        """
        animation = _load({"arm": {"scale": [{"time": 0}, {"time": 1, "x": 2}]}})

        keys = animation.tracks[0].keys
        assert keys[0].value == (0.0, 0.0)
        assert keys[1].value == (2.0, 0.0)

    def test_curve(self):
        """Test Bezier control points are stored verbatim."""
        from spine_scene_importer.animation.animation_data import AnimationCurve

        animation = _load(
            {
                "arm": {
                    "rotate": [
                        {"time": 0, "curve": [0.25, 0, 0.75, 1]},
                        {"time": 1, "curve": "stepped"},
                        {"time": 2, "curve": [0.1, 0.2, 0.3]},
                        {"time": 3, "curve": [0.1, 0.2, 0.3, "x"]},
                        {"time": 4},
                    ]
                }
            }
        )
        keys = animation.tracks[0].keys

        assert keys[0].curve == AnimationCurve(x0=0.25, y0=0.0, x1=0.75, y1=1.0)
        assert all(key.curve is None for key in keys[1:])

    def test_unknown_bone(self):
        """Test a track for a missing bone fails the load."""
        from spine_scene_importer.errors import UnresolvedBoneError

        with pytest.raises(UnresolvedBoneError, match="'leg'"):
            _load({"leg": {"rotate": [{"time": 0}]}})

    def test_unknown_property_fails_load(self):
        """Test an unsupported property fails the load."""
        from spine_scene_importer.errors import UnknownPropertyError

        with pytest.raises(UnknownPropertyError, match="'shear'"):
            _load({"arm": {"shear": [{"time": 0, "x": 1}]}})

    def test_missing_time(self):
        """Test key time is required."""
        from spine_scene_importer.errors import MalformedDocumentError

        with pytest.raises(MalformedDocumentError, match="time"):
            _load({"arm": {"rotate": [{"angle": 10}]}})
