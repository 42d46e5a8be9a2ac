"""Fixed-function state of the graphics pipeline and its descriptor pool."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable

MAT4_SIZE = 64
PUSH_CONSTANT_SIZE = 2 * MAT4_SIZE
SHADER_STAGE_VERTEX = 0x1
DESCRIPTOR_TYPE_UNIFORM_BUFFER = 6
COLOR_COMPONENT_RGBA = 0xF


class PolygonMode(enum.IntEnum):
    FILL = 0
    LINE = 1
    POINT = 2


class CullMode(enum.IntFlag):
    NONE = 0
    FRONT = 1
    BACK = 2
    FRONT_AND_BACK = 3


class FrontFace(enum.IntEnum):
    COUNTER_CLOCKWISE = 0
    CLOCKWISE = 1


class CompareOp(enum.IntEnum):
    NEVER = 0
    LESS = 1
    EQUAL = 2
    LESS_OR_EQUAL = 3
    GREATER = 4
    NOT_EQUAL = 5
    GREATER_OR_EQUAL = 6
    ALWAYS = 7


class BlendFactor(enum.IntEnum):
    ZERO = 0
    ONE = 1
    SRC_COLOR = 2
    ONE_MINUS_SRC_COLOR = 3
    DST_COLOR = 4
    ONE_MINUS_DST_COLOR = 5
    SRC_ALPHA = 6
    ONE_MINUS_SRC_ALPHA = 7


class BlendOp(enum.IntEnum):
    ADD = 0
    SUBTRACT = 1
    REVERSE_SUBTRACT = 2
    MIN = 3
    MAX = 4


class DynamicState(enum.IntEnum):
    VIEWPORT = 0
    SCISSOR = 1
    LINE_WIDTH = 2


class PrimitiveTopology(enum.IntEnum):
    POINT_LIST = 0
    LINE_LIST = 1
    LINE_STRIP = 2
    TRIANGLE_LIST = 3
    TRIANGLE_STRIP = 4
    TRIANGLE_FAN = 5


@dataclass(frozen=True)
class Viewport:
    x: float
    y: float
    width: float
    height: float
    min_depth: float = 0.0
    max_depth: float = 1.0


@dataclass(frozen=True)
class Rect2D:
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class VertexAttribute:
    location: int
    binding: int
    format: int
    offset: int


@dataclass(frozen=True)
class RasterizationState:
    polygon_mode: PolygonMode = PolygonMode.FILL
    cull_mode: CullMode = CullMode.BACK
    front_face: FrontFace = FrontFace.COUNTER_CLOCKWISE
    line_width: float = 1.0
    depth_clamp_enable: bool = False
    rasterizer_discard_enable: bool = False
    depth_bias_enable: bool = False
    depth_bias_constant_factor: float = 0.0
    depth_bias_clamp: float = 0.0
    depth_bias_slope_factor: float = 0.0


@dataclass(frozen=True)
class MultisampleState:
    sample_count: int = 1
    sample_shading_enable: bool = False
    min_sample_shading: float = 1.0
    alpha_to_coverage_enable: bool = False
    alpha_to_one_enable: bool = False


@dataclass(frozen=True)
class DepthStencilState:
    depth_test_enable: bool = True
    depth_write_enable: bool = True
    depth_compare_op: CompareOp = CompareOp.LESS
    depth_bounds_test_enable: bool = False
    stencil_test_enable: bool = False


@dataclass(frozen=True)
class ColorBlendAttachment:
    blend_enable: bool = True
    src_color_blend_factor: BlendFactor = BlendFactor.SRC_ALPHA
    dst_color_blend_factor: BlendFactor = BlendFactor.ONE_MINUS_SRC_ALPHA
    color_blend_op: BlendOp = BlendOp.ADD
    src_alpha_blend_factor: BlendFactor = BlendFactor.SRC_ALPHA
    dst_alpha_blend_factor: BlendFactor = BlendFactor.ONE_MINUS_SRC_ALPHA
    alpha_blend_op: BlendOp = BlendOp.ADD
    color_write_mask: int = COLOR_COMPONENT_RGBA


@dataclass(frozen=True)
class PushConstantRange:
    stage_flags: int = SHADER_STAGE_VERTEX
    offset: int = 0
    size: int = PUSH_CONSTANT_SIZE


@dataclass(frozen=True)
class DescriptorPoolConfig:
    """A descriptor pool together with the layout binding it serves."""

    descriptor_type: int
    descriptor_count: int
    max_sets: int
    free_descriptor_set: bool = True
    binding: int = 0
    stage_flags: int = SHADER_STAGE_VERTEX


@dataclass(frozen=True)
class PipelineState:
    viewport: Viewport
    scissor: Rect2D
    vertex_stride: int
    vertex_attributes: tuple[VertexAttribute, ...] = ()
    rasterization: RasterizationState = field(default_factory=RasterizationState)
    multisample: MultisampleState = field(default_factory=MultisampleState)
    depth_stencil: DepthStencilState = field(default_factory=DepthStencilState)
    color_blend_attachments: tuple[ColorBlendAttachment, ...] = (ColorBlendAttachment(),)
    logic_op_enable: bool = False
    dynamic_states: tuple[DynamicState, ...] = (
        DynamicState.VIEWPORT,
        DynamicState.SCISSOR,
        DynamicState.LINE_WIDTH,
    )
    topology: PrimitiveTopology = PrimitiveTopology.TRIANGLE_LIST
    primitive_restart_enable: bool = False
    push_constant_range: PushConstantRange = field(default_factory=PushConstantRange)
    subpass: int = 0


def build_pipeline_state(
    viewport: Viewport,
    scissor: Rect2D,
    attributes: Iterable[VertexAttribute],
    vertex_stride: int,
    is_wireframe: bool = False,
) -> PipelineState:
    """Return the pipeline state used for drawing meshes."""
    if viewport.width <= 0 or viewport.height <= 0:
        raise ValueError("viewport width and height must be positive")
    if scissor.width < 0 or scissor.height < 0:
        raise ValueError("scissor extent must not be negative")
    if vertex_stride <= 0:
        raise ValueError(f"vertex stride must be positive, got {vertex_stride}")
    mode = PolygonMode.LINE if is_wireframe else PolygonMode.FILL
    return PipelineState(
        viewport=viewport,
        scissor=scissor,
        vertex_stride=int(vertex_stride),
        vertex_attributes=tuple(attributes),
        rasterization=RasterizationState(polygon_mode=mode),
    )


def global_descriptor_pool(in_flight_frames: int = 2) -> DescriptorPoolConfig:
    """Return the pool for one uniform-buffer descriptor set per frame in flight."""
    if in_flight_frames <= 0:
        raise ValueError(f"frames in flight must be positive, got {in_flight_frames}")
    return DescriptorPoolConfig(
        descriptor_type=DESCRIPTOR_TYPE_UNIFORM_BUFFER,
        descriptor_count=in_flight_frames,
        max_sets=in_flight_frames,
    )