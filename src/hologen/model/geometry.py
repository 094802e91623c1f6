"""
Geometry Selection
==================
Derives what the renderer should draw from the current ParameterState.

Why is this file needed?
------------------------
1. Single source of truth: The descriptor is recomputed from the parameters
   every time it is requested, so the displayed mesh can never drift away
   from the controls.
2. Determinism: Animation is expressed as a pure function of elapsed time
   (Pose), which makes every frame reproducible in tests.

Classes:
    GeometryKind: DEMO (procedural knot) or DISPLACEMENT (image plane).
    MaterialSpec: Surface appearance handed to the renderer.
    MotionSpec: Float/spin animation parameters.
    Pose: Object transform for one instant.
    GeometryDescriptor: Everything the renderer needs for one frame.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import Optional, TYPE_CHECKING

import numpy as np

from hologen.model.image import placeholder_image
from hologen.model.tessellation import radial_segments, segments as segments_for_quality

if TYPE_CHECKING:
    import numpy.typing as npt

    from hologen.model.image import ImageHandle
    from hologen.model.parameters import ParameterState

DISPLACEMENT_EXAGGERATION: float = 1.5

# Demo knot (world units)
KNOT_RADIUS: float = 1.0
KNOT_TUBE: float = 0.3
KNOT_P: int = 2
KNOT_Q: int = 3
DEMO_SCALE: float = 1.5

# Displacement plane (world units)
PLANE_SIZE: float = 4.0
PLANE_TILT: float = -math.pi / 6

CYAN = "#00F0FF"


class GeometryKind(StrEnum):
    DEMO = "demo"
    DISPLACEMENT = "displacement"


@dataclass(frozen=True)
class MaterialSpec:
    color: str = "#ffffff"
    opacity: float = 1.0
    emissive_intensity: float = 0.0
    metalness: float = 0.0
    roughness: float = 1.0
    double_sided: bool = False
    alpha_test: float = 0.0


def spin_angle(elapsed: float) -> float:
    """Slow yaw oscillation applied to the sculpture every frame (radians)."""
    return math.sin(elapsed / 8.0) / 4.0


def euler_xyz_matrix(rx: float, ry: float, rz: float) -> npt.NDArray[np.float64]:
    """3x3 rotation for intrinsic X, then Y, then Z angles (R = Rx @ Ry @ Rz)."""
    cx, sx = math.cos(rx), math.sin(rx)
    cy, sy = math.cos(ry), math.sin(ry)
    cz, sz = math.cos(rz), math.sin(rz)
    rot_x = np.array([[1.0, 0.0, 0.0], [0.0, cx, -sx], [0.0, sx, cx]])
    rot_y = np.array([[cy, 0.0, sy], [0.0, 1.0, 0.0], [-sy, 0.0, cy]])
    rot_z = np.array([[cz, -sz, 0.0], [sz, cz, 0.0], [0.0, 0.0, 1.0]])
    return rot_x @ rot_y @ rot_z


@dataclass(frozen=True)
class Pose:
    """Transform of the sculpture at one instant."""
    float_rotation: tuple[float, float, float]
    float_offset: float
    rotation: tuple[float, float, float]
    scale: float

    def matrix(self) -> npt.NDArray[np.float64]:
        """
        4x4 homogeneous transform: float group (translate, rotate) applied on
        top of the mesh's own rotation and uniform scale.
        """
        m = np.eye(4)
        m[:3, :3] = (
            euler_xyz_matrix(*self.float_rotation)
            @ euler_xyz_matrix(*self.rotation)
            * self.scale
        )
        m[1, 3] = self.float_offset
        return m


@dataclass(frozen=True)
class MotionSpec:
    speed: float
    rotation_intensity: float
    float_intensity: float
    tilt: float = 0.0
    scale: float = 1.0

    def pose(self, elapsed: float) -> Pose:
        """
        Pose after `elapsed` seconds. Pure function of time: no state is
        accumulated between frames.
        """
        phase = (elapsed / 4.0) * self.speed
        float_rotation = (
            math.cos(phase) / 8.0 * self.rotation_intensity,
            math.sin(phase) / 8.0 * self.rotation_intensity,
            math.sin(phase) / 20.0 * self.rotation_intensity,
        )
        float_offset = math.sin(phase) / 10.0 * self.float_intensity
        return Pose(
            float_rotation=float_rotation,
            float_offset=float_offset,
            rotation=(self.tilt, spin_angle(elapsed), 0.0),
            scale=self.scale,
        )


DEMO_MOTION = MotionSpec(speed=2.0, rotation_intensity=0.5, float_intensity=0.5, scale=DEMO_SCALE)
DISPLACEMENT_MOTION = MotionSpec(speed=1.0, rotation_intensity=0.2, float_intensity=0.2, tilt=PLANE_TILT)

DISPLACEMENT_MATERIAL = MaterialSpec(
    color="#ffffff",
    metalness=0.4,
    roughness=0.3,
    double_sided=True,
    alpha_test=0.05,
)


def demo_material(wireframe: bool) -> MaterialSpec:
    """Flat glowing cyan; wireframe glows much brighter than the solid body."""
    return MaterialSpec(
        color=CYAN,
        opacity=0.8,
        emissive_intensity=1.5 if wireframe else 0.2,
    )


@dataclass(frozen=True)
class GeometryDescriptor:
    kind: GeometryKind
    segments: int
    displacement_scale: float
    wireframe: bool
    texture: Optional[ImageHandle]
    material: MaterialSpec
    motion: MotionSpec

    @property
    def radial_segments(self) -> int:
        return radial_segments(self.segments)

    def mesh_key(self) -> tuple:
        """Identity of the mesh topology/shape, ignoring render style."""
        # ImageHandle hashes by identity, and keeping it here keeps it alive
        return (self.kind, self.segments, self.displacement_scale, self.texture)


def resolve_texture(image: Optional[ImageHandle]) -> ImageHandle:
    """Returns the image itself, or the transparent placeholder if unusable."""
    if image is None or not image.is_valid:
        return placeholder_image()
    return image


def select_geometry(params: ParameterState) -> GeometryDescriptor:
    """
    Chooses between the demo knot and the displacement plane.

    No active image -> DEMO. Otherwise DISPLACEMENT, with the image used as
    both color and height map.
    """
    seg = segments_for_quality(params.quality)

    if params.active_image is None:
        return GeometryDescriptor(
            kind=GeometryKind.DEMO,
            segments=seg,
            displacement_scale=0.0,
            wireframe=params.wireframe,
            texture=None,
            material=demo_material(params.wireframe),
            motion=DEMO_MOTION,
        )

    return GeometryDescriptor(
        kind=GeometryKind.DISPLACEMENT,
        segments=seg,
        displacement_scale=params.intensity * DISPLACEMENT_EXAGGERATION,
        wireframe=params.wireframe,
        texture=resolve_texture(params.active_image),
        material=DISPLACEMENT_MATERIAL,
        motion=DISPLACEMENT_MOTION,
    )
