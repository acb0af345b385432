# SPDX-License-Identifier: MIT
"""Command-line interface for the skeleton scene importer."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from spine_scene_importer.errors import LoadError
from spine_scene_importer.loader import Scene, load_scene_file


def print_summary(scene: Scene) -> None:
    """Print bone, skin and animation counts of a loaded scene."""
    print(f"Bones: {len(scene.bones)}")
    for bone in scene.bones:
        parent = scene.get_parent(bone)
        parent_name = parent.name if parent is not None else "-"
        x, y, _ = bone.world.position
        print(f"  [{bone.index}] {bone.name} (parent: {parent_name}) at ({x:g}, {y:g})")

    print(f"Default skin: {len(scene.meshes)} meshes")
    for name, meshes in scene.skins.items():
        print(f"Skin '{name}': {len(meshes)} meshes")

    print(f"Animations: {len(scene.animations)}")
    for name, animation in scene.animations.items():
        print(
            f"  {name}: {len(animation.tracks)} tracks, {animation.duration:g}s"
        )


def print_skin(scene: Scene, skin_name: str) -> bool:
    """Print the meshes of one skin in draw order."""
    meshes = scene.get_skin(skin_name)
    if meshes is None:
        print(f"Error: Skin not found: {skin_name}", file=sys.stderr)
        return False
    for mesh in meshes:
        kind = "skinned" if mesh.is_skinned else "static"
        print(
            f"  slot {mesh.slot.index} '{mesh.slot.name}': {mesh.path} "
            f"({mesh.vertex_count} vertices, {len(mesh.triangles) // 3} "
            f"triangles, {kind})"
        )
    return True


def main(argv: list[str] | None = None) -> int:
    """Load a skeleton document and print what it contains."""
    parser = argparse.ArgumentParser(
        description="Load a skeleton animation document into world space"
    )
    parser.add_argument(
        "input",
        type=Path,
        help="Input skeleton document (.json, .msgpack or .mpk)",
    )
    parser.add_argument(
        "--format",
        choices=["json", "msgpack"],
        default=None,
        help="Document format (default: chosen from the file suffix)",
    )
    parser.add_argument(
        "--skin",
        type=str,
        default=None,
        help="List the meshes of this skin",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log loading progress",
    )
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    if not args.input.exists():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        return 1

    try:
        scene = load_scene_file(args.input, args.format)
    except (LoadError, OSError) as e:
        print(f"Error: Failed to load {args.input}: {e}", file=sys.stderr)
        return 1

    print_summary(scene)
    if args.skin is not None and not print_skin(scene, args.skin):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
