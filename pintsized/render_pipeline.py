"""Shader loading, global uniform data and command recording for a render pipeline."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Union

import numpy as np
from numpy.typing import ArrayLike

from .device import Device, MemoryProperty
from .frame_info import GlobalUniformObject
from .gpu_buffer import BufferError, BufferUsage, GpuBuffer
from .pipeline_state import (
    MAT4_SIZE,
    DescriptorPoolConfig,
    PipelineState,
    Rect2D,
    VertexAttribute,
    Viewport,
    build_pipeline_state,
    global_descriptor_pool,
)

_PathLike = Union[str, "os.PathLike[str]"]

ENTRY_POINT = "main"
DEFAULT_VERTEX_STRIDE = 12
_UNIFORM_MEMORY = (
    MemoryProperty.DEVICE_LOCAL | MemoryProperty.HOST_VISIBLE | MemoryProperty.HOST_COHERENT
)
_UNIFORM_USAGE = BufferUsage.TRANSFER_DST | BufferUsage.UNIFORM_BUFFER


class PipelineError(RuntimeError):
    """Raised when a pipeline cannot be built or used."""


class ShaderType(enum.Enum):
    VERTEX = enum.auto()
    FRAGMENT = enum.auto()
    COMPUTE = enum.auto()
    TESSELATE = enum.auto()


_STAGE_FLAGS = {
    ShaderType.VERTEX: 0x1,
    ShaderType.TESSELATE: 0x2,
    ShaderType.FRAGMENT: 0x10,
    ShaderType.COMPUTE: 0x20,
}


@dataclass(frozen=True)
class ShaderStage:
    """A compiled shader module and the pipeline stage it runs in."""

    shader_type: ShaderType
    stage_flag: int
    code: bytes
    entry_point: str = ENTRY_POINT


def read_binary_file(location: _PathLike, assets_dir: _PathLike = "") -> bytes:
    """Read the file whose path is ``assets_dir`` followed by ``location``."""
    path = os.fspath(assets_dir) + os.fspath(location)
    try:
        with open(path, "rb") as file:
            return file.read()
    except OSError as exc:
        raise PipelineError(f"failed to open file: {path}") from exc


def _shader_stage(shader_type: ShaderType, code: bytes) -> ShaderStage:
    if not code or len(code) % 4:
        raise PipelineError(
            f"shader code for {shader_type.name} must be a non-empty multiple of 4 bytes,"
            f" got {len(code)}"
        )
    return ShaderStage(shader_type, _STAGE_FLAGS[shader_type], bytes(code))


def _mat4_bytes(matrix: ArrayLike) -> bytes:
    mat = np.asarray(matrix, dtype="<f4")
    if mat.shape != (4, 4):
        raise ValueError(f"expected a 4x4 matrix, got shape {mat.shape}")
    return mat.tobytes(order="F")


class RenderPipeline:
    """Shader stages, fixed-function state and per-frame global uniform data.

    Commands that would be recorded into a command buffer are appended to
    ``commands`` as tuples.
    """

    vertex_stride: int = DEFAULT_VERTEX_STRIDE

    def __init__(
        self,
        device: Device,
        shader_locations: Mapping[ShaderType, _PathLike],
        assets_dir: _PathLike = "",
    ) -> None:
        self.device = device
        self.assets_dir = assets_dir
        self.shader_count = len(shader_locations)
        modules = {
            ShaderType(shader_type): read_binary_file(location, assets_dir)
            for shader_type, location in shader_locations.items()
        }
        self.shader_stages: tuple[ShaderStage, ...] = tuple(
            _shader_stage(shader_type, modules[shader_type])
            for shader_type in ShaderType
            if shader_type in modules
        )
        if len(self.shader_stages) != self.shader_count:
            raise PipelineError(
                f"Failed to create shader stages, expected {self.shader_count}"
                f" but got {len(self.shader_stages)}"
            )
        self.ubo = GlobalUniformObject()
        self.descriptor_pool: Optional[DescriptorPoolConfig] = None
        self.pipeline_state: Optional[PipelineState] = None
        self.uniform_buffer: Optional[GpuBuffer] = None
        self.descriptor_set_count = 0
        self.commands: list[tuple] = []

    def configure_global_descriptor(self, in_flight_frames: int = 2) -> DescriptorPoolConfig:
        """Create the pool holding one global uniform descriptor set per frame."""
        self.descriptor_pool = global_descriptor_pool(in_flight_frames)
        return self.descriptor_pool

    def configure_pipeline(
        self,
        attributes: Iterable[VertexAttribute],
        in_flight_frames: int,
        viewport: Viewport,
        scissor: Rect2D,
        is_wireframe: bool = False,
    ) -> PipelineState:
        """Build the pipeline, the global uniform buffer and the descriptor sets."""
        if self.descriptor_pool is None:
            raise PipelineError("global descriptor must be configured before the pipeline")
        if in_flight_frames <= 0:
            raise PipelineError(f"frames in flight must be positive, got {in_flight_frames}")
        if in_flight_frames > self.descriptor_pool.max_sets:
            raise PipelineError(
                f"cannot allocate {in_flight_frames} descriptor sets from a pool"
                f" of {self.descriptor_pool.max_sets}"
            )
        state = build_pipeline_state(
            viewport, scissor, attributes, self.vertex_stride, is_wireframe
        )
        try:
            buffer = GpuBuffer(
                self.device,
                GlobalUniformObject.SIZE * in_flight_frames,
                _UNIFORM_USAGE,
                _UNIFORM_MEMORY,
                bind_on_create=True,
            )
        except BufferError as exc:
            raise PipelineError("failed to create the global uniform buffer") from exc
        self.pipeline_state = state
        self.uniform_buffer = buffer
        self.descriptor_set_count = in_flight_frames
        return state

    def _check_frame(self, frame_index: int) -> None:
        if not 0 <= frame_index < self.descriptor_set_count:
            raise PipelineError(
                f"frame index {frame_index} outside {self.descriptor_set_count} descriptor sets"
            )

    def update_global_state(
        self,
        projection: ArrayLike,
        view: ArrayLike,
        view_position: ArrayLike,
        ambient_light_color: ArrayLike,
        frame_index: int,
    ) -> None:
        """Upload projection and view matrices and bind the frame's descriptor set."""
        if self.uniform_buffer is None:
            raise PipelineError("pipeline is not configured")
        self._check_frame(frame_index)
        self.ubo = GlobalUniformObject(
            projection=projection,
            view=view,
            reserved0=self.ubo.reserved0,
            reserved1=self.ubo.reserved1,
        )
        size = GlobalUniformObject.SIZE
        self.uniform_buffer.lock_memory(size, 0)
        try:
            self.uniform_buffer.write_to_buffer(self.ubo.to_bytes(), size, 0)
        finally:
            self.uniform_buffer.unlock_memory()
        self.commands.append(("bind_descriptor_set", frame_index))

    def update_object(self, model_matrix: ArrayLike, frame_index: int) -> None:
        """Push the model matrix as a vertex-stage push constant."""
        self._check_frame(frame_index)
        data = _mat4_bytes(model_matrix)
        self.commands.append(("push_constants", _STAGE_FLAGS[ShaderType.VERTEX], 0, data))
        assert len(data) == MAT4_SIZE

    def bind_pipeline(self) -> bool:
        """Record a bind of the pipeline; False if it has not been created."""
        if self.pipeline_state is None:
            return False
        self.commands.append(("bind_pipeline",))
        return True