"""A camera holding view and projection matrices."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike

_MAX_PITCH = math.radians(89.0)


def _vec3(value: ArrayLike) -> np.ndarray:
    vec = np.asarray(value, dtype=np.float64)
    if vec.shape != (3,):
        raise ValueError(f"expected a 3-vector, got shape {vec.shape}")
    return vec


def _mat4(value: ArrayLike) -> np.ndarray:
    mat = np.array(value, dtype=np.float64)
    if mat.shape != (4, 4):
        raise ValueError(f"expected a 4x4 matrix, got shape {mat.shape}")
    return mat


def _normalize(vec: np.ndarray) -> np.ndarray:
    norm = np.linalg.norm(vec)
    if norm == 0.0:
        raise ValueError("cannot normalize a zero vector")
    return vec / norm


def _rotation(angle: float, axis: ArrayLike) -> np.ndarray:
    x, y, z = _normalize(_vec3(axis))
    c, s = math.cos(angle), math.sin(angle)
    cross = np.array([[0.0, -z, y], [z, 0.0, -x], [-y, x, 0.0]])
    rot = c * np.eye(3) + s * cross + (1.0 - c) * np.outer((x, y, z), (x, y, z))
    result = np.eye(4)
    result[:3, :3] = rot
    return result


def _translation(offset: np.ndarray) -> np.ndarray:
    result = np.eye(4)
    result[:3, 3] = offset
    return result


def _look_at(eye: np.ndarray, center: np.ndarray, up: np.ndarray) -> np.ndarray:
    forward = _normalize(center - eye)
    side = _normalize(np.cross(forward, up))
    upward = np.cross(side, forward)
    result = np.eye(4)
    result[0, :3] = side
    result[1, :3] = upward
    result[2, :3] = -forward
    result[0, 3] = -side @ eye
    result[1, 3] = -upward @ eye
    result[2, 3] = forward @ eye
    return result


class Camera:
    """View and projection state, with an Euler-angle controlled view."""

    def __init__(self, near_plane: float, far_plane: float) -> None:
        self._view = np.eye(4)
        self._projection = np.eye(4)
        self._inverse_view = np.eye(4)
        self._near = float(near_plane)
        self._far = float(far_plane)
        self._euler = np.zeros(3)
        self._position = np.zeros(3)
        self._needs_update = False

    @property
    def view_matrix(self) -> np.ndarray:
        return self._view.copy()

    @property
    def projection_matrix(self) -> np.ndarray:
        return self._projection.copy()

    @property
    def inverse_view_matrix(self) -> np.ndarray:
        return self._inverse_view.copy()

    @property
    def near_plane(self) -> float:
        return self._near

    @property
    def far_plane(self) -> float:
        return self._far

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @property
    def euler(self) -> np.ndarray:
        """Pitch, yaw and roll in radians."""
        return self._euler.copy()

    def _check_planes(self) -> None:
        if self._near == self._far:
            raise ValueError("near and far planes must differ")

    def set_perspective_projection(self, fov: float, aspect_ratio: float) -> None:
        """Set a right-handed perspective projection; ``fov`` is in degrees."""
        if aspect_ratio == 0:
            raise ValueError("aspect ratio must not be zero")
        self._check_planes()
        near, far = self._near, self._far
        focal = 1.0 / math.tan(math.radians(fov) / 2.0)
        proj = np.zeros((4, 4))
        proj[0, 0] = focal / aspect_ratio
        proj[1, 1] = focal
        proj[2, 2] = -(far + near) / (far - near)
        proj[2, 3] = -(2.0 * far * near) / (far - near)
        proj[3, 2] = -1.0
        self._projection = proj

    def set_orthographic_projection(
        self, left: float, right: float, bottom: float, top: float
    ) -> None:
        if left == right or bottom == top:
            raise ValueError("orthographic bounds must not be degenerate")
        self._check_planes()
        near, far = self._near, self._far
        proj = np.eye(4)
        proj[0, 0] = 2.0 / (right - left)
        proj[1, 1] = 2.0 / (top - bottom)
        proj[2, 2] = -2.0 / (far - near)
        proj[0, 3] = -(right + left) / (right - left)
        proj[1, 3] = -(top + bottom) / (top - bottom)
        proj[2, 3] = -(far + near) / (far - near)
        self._projection = proj

    def set_view_matrix(self, view_matrix: ArrayLike) -> None:
        view = _mat4(view_matrix)
        self._inverse_view = np.linalg.inv(view)
        self._view = view

    def set_projection_matrix(self, projection_matrix: ArrayLike) -> None:
        self._projection = _mat4(projection_matrix)

    def set_view_direction(
        self, position: ArrayLike, direction: ArrayLike, up: ArrayLike = (0.0, -1.0, 0.0)
    ) -> None:
        eye = _vec3(position)
        self.set_view_matrix(_look_at(eye, eye + _vec3(direction), _vec3(up)))

    def set_view_target(
        self, position: ArrayLike, target: ArrayLike, up: ArrayLike = (0.0, -1.0, 0.0)
    ) -> None:
        self.set_view_matrix(_look_at(_vec3(position), _vec3(target), _vec3(up)))

    def set_camera_position(self, position: ArrayLike) -> None:
        self._position = _vec3(position).copy()
        self._needs_update = True

    def set_camera_yaw(self, amount: float) -> None:
        """Add ``amount`` radians to the yaw."""
        self._euler[1] += amount
        self._needs_update = True

    def set_camera_pitch(self, amount: float) -> None:
        """Add ``amount`` radians to the pitch, clamped to +/-89 degrees."""
        self._euler[0] = min(max(self._euler[0] + amount, -_MAX_PITCH), _MAX_PITCH)
        self._needs_update = True

    def update_camera(self) -> None:
        """Rebuild the view from position and angles if they changed."""
        if not self._needs_update:
            return
        rotation = (
            _rotation(self._euler[0], (1.0, 0.0, 0.0))
            @ _rotation(self._euler[1], (0.0, 1.0, 0.0))
            @ _rotation(self._euler[2], (0.0, 0.0, 1.0))
        )
        self.set_view_matrix(_translation(self._position) @ rotation)
        self._needs_update = False

    def set_clip_planes(self, near_plane: float, far_plane: float) -> None:
        self._near = float(near_plane)
        self._far = float(far_plane)

    def move_camera_position(self, offset: ArrayLike) -> None:
        self._position = self._position + _vec3(offset)
        self._needs_update = True