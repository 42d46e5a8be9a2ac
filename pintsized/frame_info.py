"""Per-frame data shared with shaders."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

import numpy as np

_MATRIX_FIELDS = ("projection", "view", "reserved0", "reserved1")
_FLOAT = np.dtype("<f4")


def _identity() -> np.ndarray:
    return np.eye(4, dtype=np.float32)


@dataclass(eq=False)
class GlobalUniformObject:
    """Projection and view matrices padded to 256 bytes.

    Matrices are stored column-major as little-endian 32-bit floats.
    """

    SIZE: ClassVar[int] = 256

    projection: np.ndarray = field(default_factory=_identity)
    view: np.ndarray = field(default_factory=_identity)
    reserved0: np.ndarray = field(default_factory=_identity)
    reserved1: np.ndarray = field(default_factory=_identity)

    def __post_init__(self) -> None:
        for name in _MATRIX_FIELDS:
            matrix = np.array(getattr(self, name), dtype=np.float32)
            if matrix.shape != (4, 4):
                raise ValueError(f"{name} must be a 4x4 matrix, got shape {matrix.shape}")
            setattr(self, name, matrix)

    def to_bytes(self) -> bytes:
        return b"".join(
            getattr(self, name).astype(_FLOAT).tobytes(order="F") for name in _MATRIX_FIELDS
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> GlobalUniformObject:
        if len(data) != cls.SIZE:
            raise ValueError(f"expected {cls.SIZE} bytes, got {len(data)}")
        floats = np.frombuffer(data, dtype=_FLOAT)
        matrices = [
            floats[index * 16 : (index + 1) * 16].reshape((4, 4), order="F")
            for index in range(len(_MATRIX_FIELDS))
        ]
        return cls(*matrices)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GlobalUniformObject):
            return NotImplemented
        return all(
            np.array_equal(getattr(self, name), getattr(other, name))
            for name in _MATRIX_FIELDS
        )