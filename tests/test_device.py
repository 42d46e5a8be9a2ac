import dataclasses

import pytest

from pintsized.device import (
    DISCRETE_GPU_BONUS,
    ColorSpace,
    Device,
    DeviceError,
    DeviceType,
    Format,
    MemoryHeap,
    MemoryProperty,
    MemoryType,
    PhysicalDevice,
    PresentMode,
    QueueFamily,
    QueueFamilyIndices,
    QueueFlag,
    SurfaceFormat,
    check_required_extensions,
    device_type_to_string,
    find_memory_type,
    find_queue_families,
    pick_depth_format,
    pick_physical_device,
    pick_present_mode,
    pick_surface_format,
    score_device,
)

ALL = QueueFlag.GRAPHICS | QueueFlag.COMPUTE | QueueFlag.TRANSFER


def make_device(**overrides):
    values = dict(
        name="gpu",
        device_type=DeviceType.INTEGRATED_GPU,
        max_image_dimension_2d=4096,
        geometry_shader=True,
        queue_families=(QueueFamily(ALL, 1, True),),
        extensions=("VK_KHR_swapchain",),
        memory_types=(
            MemoryType(MemoryProperty.DEVICE_LOCAL),
            MemoryType(MemoryProperty.HOST_VISIBLE | MemoryProperty.HOST_COHERENT),
        ),
        memory_heaps=(MemoryHeap(1 << 30, True),),
        surface_formats=(SurfaceFormat(Format.B8G8R8A8_UNORM),),
        present_modes=(PresentMode.FIFO,),
        depth_formats=frozenset({Format.D32_SFLOAT}),
    )
    values.update(overrides)
    return PhysicalDevice(**values)


@pytest.mark.parametrize(
    "kind, name",
    [
        (DeviceType.OTHER, "Unknown"),
        (DeviceType.INTEGRATED_GPU, "Integrated"),
        (DeviceType.DISCRETE_GPU, "Discrete"),
        (DeviceType.VIRTUAL_GPU, "Virtual"),
        (DeviceType.CPU, "CPU"),
        (99, "Unknown"),
    ],
)
def test_device_type_to_string(kind, name):
    assert device_type_to_string(kind) == name


def test_indices_complete_only_when_all_set():
    assert not QueueFamilyIndices(0, 0, 0).is_complete()
    assert QueueFamilyIndices(0, 0, 0, 0).is_complete()


def test_single_family_serves_everything():
    indices = find_queue_families(make_device())
    assert indices == QueueFamilyIndices(0, 0, 0, 0)


def test_dedicated_transfer_family_preferred():
    device = make_device(
        queue_families=(
            QueueFamily(QueueFlag.GRAPHICS | QueueFlag.COMPUTE, 1, True),
            QueueFamily(QueueFlag.TRANSFER, 1, False),
        )
    )
    indices = find_queue_families(device)
    assert indices.graphics_family == 0
    assert indices.compute_family == 0
    assert indices.present_family == 0
    assert indices.transfer_family == 1


def test_empty_family_is_ignored():
    device = make_device(queue_families=(QueueFamily(ALL, 0, False),))
    indices = find_queue_families(device)
    assert indices.graphics_family is None
    assert not indices.is_complete()


def test_check_required_extensions():
    device = make_device(extensions=("VK_KHR_swapchain", "VK_EXT_other"))
    assert check_required_extensions(device, ["VK_KHR_swapchain"])
    assert not check_required_extensions(device, ["VK_KHR_swapchain", "VK_missing"])
    assert check_required_extensions(device, [])


def test_discrete_bonus():
    integrated = make_device()
    discrete = dataclasses.replace(integrated, device_type=DeviceType.DISCRETE_GPU)
    assert score_device(discrete) - score_device(integrated) == DISCRETE_GPU_BONUS


def test_larger_textures_score_higher():
    small = make_device(max_image_dimension_2d=1024)
    large = make_device(max_image_dimension_2d=8192)
    assert score_device(large) > score_device(small) > 0


@pytest.mark.parametrize(
    "override",
    [
        {"geometry_shader": False},
        {"extensions": ()},
        {"queue_families": (QueueFamily(QueueFlag.GRAPHICS, 1, True),)},
    ],
)
def test_unusable_device_scores_zero(override):
    assert score_device(make_device(**override)) == 0


def test_pick_physical_device_prefers_best_and_first_on_tie():
    first = make_device(name="first")
    second = make_device(name="second")
    best = make_device(name="best", device_type=DeviceType.DISCRETE_GPU)
    assert pick_physical_device([first, best, second]).name == "best"
    assert pick_physical_device([first, second]).name == "first"


def test_pick_physical_device_errors():
    with pytest.raises(DeviceError):
        pick_physical_device([])
    with pytest.raises(DeviceError):
        pick_physical_device([make_device(geometry_shader=False)])


def test_pick_surface_format():
    preferred = SurfaceFormat(Format.B8G8R8A8_UNORM, ColorSpace.SRGB_NONLINEAR)
    other = SurfaceFormat(Format.R8G8B8A8_UNORM)
    assert pick_surface_format([other, preferred]) == preferred
    assert pick_surface_format([other]) == other
    with pytest.raises(DeviceError):
        pick_surface_format([])


def test_pick_present_mode():
    assert pick_present_mode([PresentMode.FIFO, PresentMode.MAILBOX]) == PresentMode.MAILBOX
    assert pick_present_mode([PresentMode.IMMEDIATE]) == PresentMode.FIFO


def test_pick_depth_format_order():
    device = make_device(
        depth_formats=frozenset({Format.D24_UNORM_S8_UINT, Format.D32_SFLOAT_S8_UINT})
    )
    assert pick_depth_format(device) == Format.D32_SFLOAT_S8_UINT
    with pytest.raises(DeviceError):
        pick_depth_format(make_device(depth_formats=frozenset()))


def test_find_memory_type():
    device = make_device()
    assert find_memory_type(device, 0b11, MemoryProperty.DEVICE_LOCAL) == 0
    assert find_memory_type(device, 0b11, MemoryProperty.HOST_VISIBLE) == 1
    assert find_memory_type(device, 0b10, MemoryProperty.NONE) == 1
    with pytest.raises(DeviceError):
        find_memory_type(device, 0b01, MemoryProperty.HOST_VISIBLE)


def test_device_setup():
    discrete = make_device(
        name="discrete",
        device_type=DeviceType.DISCRETE_GPU,
        present_modes=(PresentMode.MAILBOX,),
    )
    device = Device([make_device(), discrete], validation_enabled=True)
    assert device.physical_device.name == "discrete"
    assert device.type_name == "Discrete"
    assert device.present_mode == PresentMode.MAILBOX
    assert device.depth_format == Format.D32_SFLOAT
    assert device.queue_indices.is_complete()
    assert device.enabled_layers == ("VK_LAYER_KHRONOS_validation",)
    assert device.find_memory_type(0b11, MemoryProperty.HOST_COHERENT) == 1


def test_device_without_validation_has_no_layers():
    device = Device([make_device()])
    assert device.enabled_layers == ()


def test_device_without_suitable_gpu():
    with pytest.raises(DeviceError):
        Device([make_device(extensions=())])