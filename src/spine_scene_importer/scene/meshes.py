# SPDX-License-Identifier: MIT
"""Mesh construction for region, mesh and skinned mesh attachments.

All vertex positions are projected into world space at load time. Vertices
are stored flat as ``x, y, z, u, v``; skinned meshes additionally carry four
bone index / weight slots per vertex.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum

import numpy as np

from spine_scene_importer.errors import MalformedDocumentError, UnresolvedBoneError
from spine_scene_importer.parser.document import Document
from spine_scene_importer.scene.bones import Bone, load_transform

logger = logging.getLogger(__name__)

VERTEX_STRIDE = 5  # x, y, z, u, v
MAX_INFLUENCES = 4

REGION_TRIANGLES = (0, 1, 2, 2, 1, 3)


class AttachmentType(Enum):
    """Kinds of attachment geometry."""

    REGION = "region"
    MESH = "mesh"
    SKINNED_MESH = "skinnedmesh"
    UNSUPPORTED = "unsupported"


def parse_attachment_type(type_name: str) -> AttachmentType:
    """Map an attachment ``type`` field to its kind; unknown kinds are skipped."""
    try:
        return AttachmentType(type_name)
    except ValueError:
        return AttachmentType.UNSUPPORTED


@dataclass(frozen=True)
class Slot:
    """A draw-order attachment point bound to a bone."""

    name: str
    bone_index: int
    index: int  # Draw order among slots that show an attachment
    attachment: str


@dataclass(frozen=True, eq=False)
class Mesh:
    """World-space geometry of one attachment."""

    attachment: str
    path: str
    slot: Slot
    vertices: np.ndarray  # float32, VERTEX_STRIDE per vertex
    triangles: np.ndarray  # int32, 3 per face
    bone_indices: np.ndarray | None = None  # int32, MAX_INFLUENCES per vertex
    bone_weights: np.ndarray | None = None  # float32, MAX_INFLUENCES per vertex

    def __post_init__(self):
        for array in (
            self.vertices,
            self.triangles,
            self.bone_indices,
            self.bone_weights,
        ):
            if array is not None:
                array.flags.writeable = False

    @property
    def vertex_count(self) -> int:
        return len(self.vertices) // VERTEX_STRIDE

    @property
    def positions(self) -> np.ndarray:
        """Nx3 view of the vertex positions."""
        return self.vertices.reshape(-1, VERTEX_STRIDE)[:, :3]

    @property
    def uvs(self) -> np.ndarray:
        """Nx2 view of the texture coordinates."""
        return self.vertices.reshape(-1, VERTEX_STRIDE)[:, 3:]

    @property
    def is_skinned(self) -> bool:
        return self.bone_indices is not None


def _read(stream: Iterator[float], node: Document, field_name: str) -> float:
    try:
        return next(stream)
    except StopIteration:
        raise MalformedDocumentError(
            f"Field '{field_name}' ends before all vertices are read "
            f"at {node.location}"
        ) from None


def _check_length(
    values: Sequence[float], minimum: int, node: Document, field_name: str
) -> None:
    if len(values) < minimum:
        raise MalformedDocumentError(
            f"Field '{field_name}' holds {len(values)} numbers, expected at least "
            f"{minimum} at {node.location}"
        )


def _as_index(value: float, node: Document, field_name: str) -> int:
    if not float(value).is_integer():
        raise MalformedDocumentError(
            f"Expected an integer in '{field_name}', got {value} at {node.location}"
        )
    return int(value)


def build_region(node: Document, bone: Bone) -> tuple[np.ndarray, np.ndarray]:
    """Build a width x height quad centered on the attachment transform.

    Corners are emitted x-major: (-,-), (-,+), (+,-), (+,+). V is flipped
    because the image origin is top-left.
    """
    world = bone.world.compose(load_transform(node))
    width = node.get_float("width", 0.0)
    height = node.get_float("height", 0.0)

    boundary = (-0.5, 0.5)
    uv_boundary = (0.0, 1.0)
    vertices = []
    for xi in range(2):
        for yi in range(2):
            p = world.apply((boundary[xi] * width, boundary[yi] * height, 0.0))
            vertices.extend(p)
            vertices.append(uv_boundary[xi])
            vertices.append(1.0 - uv_boundary[yi])

    return (
        np.array(vertices, dtype=np.float32),
        np.array(REGION_TRIANGLES, dtype=np.int32),
    )


def build_mesh(
    node: Document,
    bone: Bone,
    bones: Sequence[Bone],
    skinned: bool,
) -> tuple[np.ndarray, np.ndarray, np.ndarray | None, np.ndarray | None]:
    """Build a free-form or skinned mesh.

    For skinned vertices only the first influence positions the vertex, in
    the space of the bone it names; the remaining influences are recorded
    as indices and weights only.

    Args:
        node: Attachment node
        bone: Bone owning the slot, used for non-skinned vertices
        bones: All bones, indexed by skinned vertex data
        skinned: Whether vertices carry bone influences

    Returns:
        Tuple of (vertices, triangles, bone_indices, bone_weights)
    """
    vertex_count = node.require_int("hull")
    if vertex_count < 0:
        raise MalformedDocumentError(
            f"Negative vertex count {vertex_count} at {node.location}"
        )
    vertex_values = node.get_numbers("vertices")
    uv_values = node.get_numbers("uvs")
    _check_length(vertex_values, vertex_count * (5 if skinned else 2), node, "vertices")
    _check_length(uv_values, vertex_count * 2, node, "uvs")
    vertex_stream = iter(vertex_values)
    uv_stream = iter(uv_values)

    vertices = np.zeros(vertex_count * VERTEX_STRIDE, dtype=np.float32)
    bone_indices = None
    bone_weights = None
    if skinned:
        bone_indices = np.zeros(vertex_count * MAX_INFLUENCES, dtype=np.int32)
        bone_weights = np.zeros(vertex_count * MAX_INFLUENCES, dtype=np.float32)

    for i in range(vertex_count):
        vertex_bone = bone
        if skinned:
            influences = _as_index(
                _read(vertex_stream, node, "vertices"), node, "vertices"
            )
            if not 1 <= influences <= MAX_INFLUENCES:
                raise MalformedDocumentError(
                    f"Vertex {i} has {influences} bone influences, expected "
                    f"1 to {MAX_INFLUENCES} at {node.location}"
                )
            point = None
            offset = i * MAX_INFLUENCES
            for bi in range(influences):
                bone_index = _as_index(
                    _read(vertex_stream, node, "vertices"), node, "vertices"
                )
                x = _read(vertex_stream, node, "vertices")
                y = _read(vertex_stream, node, "vertices")
                weight = _read(vertex_stream, node, "vertices")
                if not 0 <= bone_index < len(bones):
                    raise UnresolvedBoneError(
                        f"The bone index {bone_index} of vertex {i} does not exist "
                        f"at {node.location}"
                    )
                if point is None:
                    vertex_bone = bones[bone_index]
                    point = (x, y, 0.0)
                bone_indices[offset + bi] = bone_index
                bone_weights[offset + bi] = weight
        else:
            x = _read(vertex_stream, node, "vertices")
            y = _read(vertex_stream, node, "vertices")
            point = (x, y, 0.0)

        vi = i * VERTEX_STRIDE
        vertices[vi : vi + 3] = vertex_bone.world.apply(point)
        vertices[vi + 3] = _read(uv_stream, node, "uvs")
        vertices[vi + 4] = _read(uv_stream, node, "uvs")

    return (
        vertices,
        build_triangles(node, vertex_count),
        bone_indices,
        bone_weights,
    )


def build_triangles(node: Document, vertex_count: int) -> np.ndarray:
    """Read the flat triangle index stream, validating it against the vertices."""
    values = node.get_numbers("triangles")
    if len(values) % 3 != 0:
        raise MalformedDocumentError(
            f"Triangle list length {len(values)} is not a multiple of 3 "
            f"at {node.location}"
        )
    triangles = [_as_index(v, node, "triangles") for v in values]
    for index in triangles:
        if not 0 <= index < vertex_count:
            raise MalformedDocumentError(
                f"Triangle index {index} out of range for {vertex_count} vertices "
                f"at {node.location}"
            )
    return np.array(triangles, dtype=np.int32)


def create_mesh(
    node: Document,
    attachment: str,
    slot: Slot,
    bones: Sequence[Bone],
) -> Mesh | None:
    """Create the mesh for one attachment.

    Args:
        node: Attachment node
        attachment: Attachment key within the slot
        slot: Slot the attachment belongs to
        bones: All bones of the scene

    Returns:
        Mesh, or None if the attachment type is not supported
    """
    attachment_type = parse_attachment_type(node.get_str("type", "region"))
    path = node.get_str("name", attachment)
    bone = bones[slot.bone_index]

    if attachment_type == AttachmentType.REGION:
        vertices, triangles = build_region(node, bone)
        return Mesh(attachment, path, slot, vertices, triangles)
    elif attachment_type == AttachmentType.MESH:
        vertices, triangles, _, _ = build_mesh(node, bone, bones, skinned=False)
        return Mesh(attachment, path, slot, vertices, triangles)
    elif attachment_type == AttachmentType.SKINNED_MESH:
        vertices, triangles, indices, weights = build_mesh(
            node, bone, bones, skinned=True
        )
        return Mesh(attachment, path, slot, vertices, triangles, indices, weights)

    logger.debug(
        "Skipping unsupported attachment '%s' at %s", attachment, node.location
    )
    return None
