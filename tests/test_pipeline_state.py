import pytest

from pintsized.pipeline_state import (
    DESCRIPTOR_TYPE_UNIFORM_BUFFER,
    PUSH_CONSTANT_SIZE,
    BlendFactor,
    BlendOp,
    CompareOp,
    CullMode,
    DynamicState,
    FrontFace,
    PolygonMode,
    PrimitiveTopology,
    Rect2D,
    VertexAttribute,
    Viewport,
    build_pipeline_state,
    global_descriptor_pool,
)

VIEWPORT = Viewport(0.0, 0.0, 800.0, 600.0)
SCISSOR = Rect2D(0, 0, 800, 600)
ATTRIBUTES = [VertexAttribute(0, 0, 106, 0), VertexAttribute(1, 0, 106, 12)]


def build(**kwargs):
    return build_pipeline_state(VIEWPORT, SCISSOR, ATTRIBUTES, 24, **kwargs)


def test_default_fills_polygons():
    assert build().rasterization.polygon_mode == PolygonMode.FILL


def test_wireframe_draws_lines():
    assert build(is_wireframe=True).rasterization.polygon_mode == PolygonMode.LINE


def test_rasterization_settings():
    raster = build().rasterization
    assert raster.cull_mode == CullMode.BACK
    assert raster.front_face == FrontFace.COUNTER_CLOCKWISE
    assert raster.line_width == 1.0
    assert raster.depth_bias_enable is False


def test_depth_stencil_settings():
    depth = build().depth_stencil
    assert depth.depth_test_enable and depth.depth_write_enable
    assert depth.depth_compare_op == CompareOp.LESS
    assert depth.stencil_test_enable is False


def test_alpha_blending():
    (attachment,) = build().color_blend_attachments
    assert attachment.blend_enable is True
    assert attachment.src_color_blend_factor == BlendFactor.SRC_ALPHA
    assert attachment.dst_color_blend_factor == BlendFactor.ONE_MINUS_SRC_ALPHA
    assert attachment.color_blend_op == BlendOp.ADD
    assert attachment.color_write_mask == 0xF


def test_dynamic_states_and_topology():
    state = build()
    assert state.dynamic_states == (
        DynamicState.VIEWPORT,
        DynamicState.SCISSOR,
        DynamicState.LINE_WIDTH,
    )
    assert state.topology == PrimitiveTopology.TRIANGLE_LIST


def test_push_constants_hold_two_matrices():
    push = build().push_constant_range
    assert push.offset == 0
    assert push.size == PUSH_CONSTANT_SIZE == 128


def test_single_sample():
    assert build().multisample.sample_count == 1


def test_inputs_are_kept():
    state = build()
    assert state.vertex_attributes == tuple(ATTRIBUTES)
    assert state.vertex_stride == 24
    assert state.viewport == VIEWPORT
    assert state.scissor == SCISSOR


@pytest.mark.parametrize("stride", [0, -4])
def test_bad_stride_raises(stride):
    with pytest.raises(ValueError):
        build_pipeline_state(VIEWPORT, SCISSOR, ATTRIBUTES, stride)


def test_empty_viewport_raises():
    with pytest.raises(ValueError):
        build_pipeline_state(Viewport(0.0, 0.0, 0.0, 600.0), SCISSOR, ATTRIBUTES, 24)


def test_descriptor_pool_defaults_to_two_frames():
    pool = global_descriptor_pool()
    assert pool.descriptor_count == pool.max_sets == 2
    assert pool.descriptor_type == DESCRIPTOR_TYPE_UNIFORM_BUFFER
    assert pool.free_descriptor_set is True


@pytest.mark.parametrize("frames", [1, 3, 5])
def test_descriptor_pool_matches_frames(frames):
    pool = global_descriptor_pool(frames)
    assert pool.descriptor_count == frames
    assert pool.max_sets == frames


def test_descriptor_pool_rejects_zero_frames():
    with pytest.raises(ValueError):
        global_descriptor_pool(0)