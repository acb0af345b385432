# SPDX-License-Identifier: MIT
"""Shared fixtures for skeleton importer tests."""

import copy

import pytest

SAMPLE_DOCUMENT = {
    "bones": [
        {"name": "root"},
        {"name": "hip", "parent": "root", "x": 10, "rotation": 90},
        {"name": "arm", "parent": "hip", "x": 5, "scaleX": 2, "scaleY": 2},
        {"name": "hand", "parent": "arm", "x": 1, "inheritScale": False},
    ],
    "slots": [
        {"name": "torso", "bone": "hip", "attachment": "torso"},
        {"name": "empty", "bone": "root"},
        {"name": "arm", "bone": "arm", "attachment": "arm-mesh"},
        {"name": "hand", "bone": "hand", "attachment": "hand"},
    ],
    "skins": {
        "default": {
            "hand": {"hand": {"width": 2, "height": 2}},
            "torso": {
                "torso": {"width": 4, "height": 6},
                "torso-alt": {"width": 8, "height": 8},
            },
            "arm": {
                "arm-mesh": {
                    "type": "mesh",
                    "hull": 3,
                    "vertices": [0, 0, 1, 0, 0, 1],
                    "uvs": [0, 0, 1, 0, 0, 1],
                    "triangles": [0, 1, 2],
                }
            },
            "empty": {"unused": {"width": 1, "height": 1}},
        },
        "goblin": {
            "torso": {"torso": {"name": "goblin/torso", "width": 4, "height": 6}},
        },
    },
    "animations": {
        "walk": {
            "bones": {
                "hip": {
                    "rotate": [
                        {"time": 0, "angle": 0},
                        {"time": 1.5, "angle": 90, "curve": [0.25, 0, 0.75, 1]},
                        {"time": 0.4, "angle": 45},
                    ],
                    "translate": [{"time": 0, "x": 1, "y": 2}],
                },
                "arm": {"scale": [{"time": 0.2}]},
            }
        },
        "idle": {},
    },
}


@pytest.fixture
def sample_document():
    """A small skeleton with three skinned slots and two animations."""
    return copy.deepcopy(SAMPLE_DOCUMENT)


@pytest.fixture
def assert_point_close():
    """Compare points within floating-point tolerance."""

    def check(actual, expected, tol=1e-5):
        assert len(actual) == len(expected)
        for a, e in zip(actual, expected):
            assert abs(a - e) < tol, f"{tuple(actual)} != {tuple(expected)}"

    return check
