"""
Mesh Generation Logic (PyVista)
===============================
This module translates a GeometryDescriptor into a renderable surface.

Why is this file needed?
------------------------
1. Translation: It converts the abstract descriptor (e.g. "displacement,
   243 segments, scale 1.8") into concrete vertices and quad faces.
2. Texturing: The image is sampled once per vertex, both as color (RGBA point
   data) and as height (red channel), so the renderer only has to draw.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
import pyvista as pv

from hologen.model.geometry import (
    GeometryDescriptor, GeometryKind, KNOT_RADIUS, KNOT_TUBE, KNOT_P, KNOT_Q, PLANE_SIZE,
    resolve_texture,
)

if TYPE_CHECKING:
    import numpy.typing as npt

    from hologen.model.image import ImageHandle

# Get logger
logger = logging.getLogger(__name__)

COLOR_ARRAY = "rgba"


@dataclass
class MeshStats:
    """Return object containing mesh metadata."""
    kind: GeometryKind
    num_points: int
    num_faces: int


def _quad_faces(rows: int, cols: int, row_stride: int) -> npt.NDArray[np.int_]:
    """
    Quad connectivity for a (rows + 1) x (cols + 1) vertex lattice in
    PyVista's flat [4, a, b, c, d, 4, ...] layout.
    """
    r, c = np.meshgrid(np.arange(rows), np.arange(cols), indexing="ij")
    a = r * row_stride + c
    b = (r + 1) * row_stride + c
    d = r * row_stride + (c + 1)
    cc = (r + 1) * row_stride + (c + 1)
    quads = np.stack([a, b, cc, d], axis=-1).reshape(-1, 4)
    return np.hstack([np.full((len(quads), 1), 4), quads]).astype(np.int_).ravel()


def _knot_curve(u: npt.NDArray[np.float64], p: int, q: int, radius: float) -> npt.NDArray[np.float64]:
    """Points of the (p, q) torus knot centerline."""
    qu_over_p = q / p * u
    cs = np.cos(qu_over_p)
    return np.column_stack([
        radius * (2.0 + cs) * 0.5 * np.cos(u),
        radius * (2.0 + cs) * 0.5 * np.sin(u),
        radius * np.sin(qu_over_p) * 0.5,
    ])


def build_torus_knot(
    tubular_segments: int,
    radial_segments: int,
    radius: float = KNOT_RADIUS,
    tube: float = KNOT_TUBE,
    p: int = KNOT_P,
    q: int = KNOT_Q,
) -> pv.PolyData:
    """
    Tube swept along a (p, q) torus knot.

    The cross-section frame at each centerline point is built from the
    tangent (finite difference) and the sum of two nearby points, which
    keeps the tube from twisting.
    """
    tubular_segments = max(int(tubular_segments), 3)
    radial_segments = max(int(radial_segments), 3)

    u = np.arange(tubular_segments + 1) / tubular_segments * p * 2.0 * math.pi
    p1 = _knot_curve(u, p, q, radius)
    p2 = _knot_curve(u + 0.01, p, q, radius)

    tangent = p2 - p1
    normal = p2 + p1
    binormal = np.cross(tangent, normal)
    normal = np.cross(binormal, tangent)
    binormal /= np.linalg.norm(binormal, axis=1, keepdims=True)
    normal /= np.linalg.norm(normal, axis=1, keepdims=True)

    v = np.arange(radial_segments + 1) / radial_segments * 2.0 * math.pi
    cx = -tube * np.cos(v)
    cy = tube * np.sin(v)

    # (tubular + 1, radial + 1, 3)
    points = (
        p1[:, None, :]
        + cx[None, :, None] * normal[:, None, :]
        + cy[None, :, None] * binormal[:, None, :]
    )
    faces = _quad_faces(tubular_segments, radial_segments, radial_segments + 1)
    return pv.PolyData(points.reshape(-1, 3), faces)


def sample_texture(image: ImageHandle, uv: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """
    Bilinear lookup of RGBA values (0..1) at texture coordinates.

    `uv` is (N, 2) with v = 1 at the top edge of the picture.
    """
    pixels = image.pixels
    h, w = image.height, image.width

    x = np.clip(uv[:, 0], 0.0, 1.0) * (w - 1)
    y = (1.0 - np.clip(uv[:, 1], 0.0, 1.0)) * (h - 1)

    x0 = np.floor(x).astype(int)
    y0 = np.floor(y).astype(int)
    x1 = np.minimum(x0 + 1, w - 1)
    y1 = np.minimum(y0 + 1, h - 1)
    fx = (x - x0)[:, None]
    fy = (y - y0)[:, None]

    # Gather the uint8 corners first; only the samples are promoted to float
    c00, c01, c10, c11 = (
        pixels[yy, xx].astype(np.float64) / 255.0
        for yy, xx in ((y0, x0), (y0, x1), (y1, x0), (y1, x1))
    )
    top = c00 * (1.0 - fx) + c01 * fx
    bottom = c10 * (1.0 - fx) + c11 * fx
    return top * (1.0 - fy) + bottom * fy


def build_displacement_plane(
    image: ImageHandle,
    segments: int,
    displacement_scale: float,
    size: float = PLANE_SIZE,
    alpha_test: float = 0.0,
) -> pv.PolyData:
    """
    Square grid in the XY plane, displaced along +Z by the image's red channel.

    Vertex colors come from the same samples. Faces whose four corners are
    all below `alpha_test` are dropped.
    """
    segments = max(int(segments), 1)
    half = size / 2.0

    iy, ix = np.meshgrid(np.arange(segments + 1), np.arange(segments + 1), indexing="ij")
    u = (ix / segments).ravel()
    v = 1.0 - (iy / segments).ravel()
    uv = np.column_stack([u, v])

    rgba = sample_texture(image, uv)
    height = rgba[:, 0] * displacement_scale

    points = np.column_stack([
        u * size - half,
        v * size - half,
        height,
    ])
    faces = _quad_faces(segments, segments, segments + 1)

    if alpha_test > 0.0:
        quads = faces.reshape(-1, 5)
        corner_alpha = rgba[quads[:, 1:], 3]
        keep = (corner_alpha >= alpha_test).any(axis=1)
        faces = quads[keep].ravel()

    if faces.size:
        mesh = pv.PolyData(points, faces)
    else:
        # Fully transparent texture: keep the points, draw nothing
        mesh = pv.PolyData()
        mesh.points = points
    mesh.active_texture_coordinates = uv
    mesh.point_data[COLOR_ARRAY] = np.round(rgba * 255.0).astype(np.uint8)
    return mesh


class SculptureMesher:
    """Builds (and remembers the last) mesh for a descriptor."""

    def __init__(self) -> None:
        self._cached_key: tuple | None = None
        self._cached_mesh: pv.PolyData | None = None

    def generate_mesh(self, descriptor: GeometryDescriptor) -> pv.PolyData:
        key = descriptor.mesh_key()
        if key == self._cached_key and self._cached_mesh is not None:
            return self._cached_mesh

        if descriptor.kind is GeometryKind.DEMO:
            mesh = build_torus_knot(descriptor.segments, descriptor.radial_segments)
        else:
            mesh = build_displacement_plane(
                resolve_texture(descriptor.texture),
                descriptor.segments,
                descriptor.displacement_scale,
                alpha_test=descriptor.material.alpha_test,
            )

        logger.info(
            f"Generated {descriptor.kind} mesh: {mesh.n_points} points, {mesh.n_cells} faces."
        )
        self._cached_key = key
        self._cached_mesh = mesh
        return mesh

    @staticmethod
    def stats(descriptor: GeometryDescriptor, mesh: pv.PolyData) -> MeshStats:
        return MeshStats(kind=descriptor.kind, num_points=mesh.n_points, num_faces=mesh.n_cells)
