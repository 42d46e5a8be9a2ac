"""Physical device selection and the queue, format and memory choices made for it."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from .fixed_string import FixedString

SWAPCHAIN_EXTENSION = "VK_KHR_swapchain"
DEVICE_EXTENSIONS: tuple[str, ...] = (SWAPCHAIN_EXTENSION,)
VALIDATION_LAYERS: tuple[str, ...] = ("VK_LAYER_KHRONOS_validation",)

DISCRETE_GPU_BONUS = 10000
_EXTENSION_NAME_CAPACITY = 64


class DeviceError(RuntimeError):
    """Raised when no device, format or memory type meets the requirements."""


class DeviceType(enum.IntEnum):
    OTHER = 0
    INTEGRATED_GPU = 1
    DISCRETE_GPU = 2
    VIRTUAL_GPU = 3
    CPU = 4


class QueueFlag(enum.IntFlag):
    GRAPHICS = 0x1
    COMPUTE = 0x2
    TRANSFER = 0x4


class PresentMode(enum.IntEnum):
    IMMEDIATE = 0
    MAILBOX = 1
    FIFO = 2
    FIFO_RELAXED = 3


class Format(enum.IntEnum):
    UNDEFINED = 0
    R8G8B8A8_UNORM = 37
    B8G8R8A8_UNORM = 44
    B8G8R8A8_SRGB = 50
    D24_UNORM_S8_UINT = 129
    D32_SFLOAT = 126
    D32_SFLOAT_S8_UINT = 130


class ColorSpace(enum.IntEnum):
    SRGB_NONLINEAR = 0
    EXTENDED_SRGB_LINEAR = 1000104002


class MemoryProperty(enum.IntFlag):
    NONE = 0
    DEVICE_LOCAL = 0x1
    HOST_VISIBLE = 0x2
    HOST_COHERENT = 0x4
    HOST_CACHED = 0x8


@dataclass(frozen=True)
class QueueFamily:
    flags: QueueFlag
    queue_count: int = 1
    present_support: bool = False


@dataclass(frozen=True)
class MemoryType:
    property_flags: MemoryProperty
    heap_index: int = 0


@dataclass(frozen=True)
class MemoryHeap:
    size: int
    device_local: bool = False


@dataclass(frozen=True)
class SurfaceFormat:
    format: Format
    color_space: ColorSpace = ColorSpace.SRGB_NONLINEAR


@dataclass(frozen=True)
class PhysicalDevice:
    """What a physical device reports about itself.

    ``depth_formats`` holds the formats usable as a depth/stencil attachment
    with optimal tiling.
    """

    name: str
    device_type: DeviceType = DeviceType.OTHER
    max_image_dimension_2d: int = 0
    geometry_shader: bool = False
    queue_families: tuple[QueueFamily, ...] = ()
    extensions: tuple[str, ...] = ()
    memory_types: tuple[MemoryType, ...] = ()
    memory_heaps: tuple[MemoryHeap, ...] = ()
    surface_formats: tuple[SurfaceFormat, ...] = ()
    present_modes: tuple[PresentMode, ...] = ()
    depth_formats: frozenset[Format] = field(default_factory=frozenset)


@dataclass
class QueueFamilyIndices:
    graphics_family: Optional[int] = None
    present_family: Optional[int] = None
    compute_family: Optional[int] = None
    transfer_family: Optional[int] = None

    def is_complete(self) -> bool:
        return None not in (
            self.graphics_family,
            self.present_family,
            self.compute_family,
            self.transfer_family,
        )


_DEVICE_TYPE_NAMES = {
    DeviceType.OTHER: "Unknown",
    DeviceType.INTEGRATED_GPU: "Integrated",
    DeviceType.DISCRETE_GPU: "Discrete",
    DeviceType.VIRTUAL_GPU: "Virtual",
    DeviceType.CPU: "CPU",
}

_DEPTH_FORMAT_CANDIDATES = (
    Format.D32_SFLOAT,
    Format.D32_SFLOAT_S8_UINT,
    Format.D24_UNORM_S8_UINT,
)


def device_type_to_string(device_type: object) -> str:
    """Return a short human name for a device type; unknown values give "Unknown"."""
    try:
        return _DEVICE_TYPE_NAMES[DeviceType(device_type)]
    except ValueError:
        return "Unknown"


def find_queue_families(device: PhysicalDevice) -> QueueFamilyIndices:
    """Pick queue family indices, preferring a dedicated transfer family."""
    indices = QueueFamilyIndices()
    min_transfer_score = 255
    for index, family in enumerate(device.queue_families):
        usable = family.queue_count > 0
        transfer_score = 0
        if usable and family.flags & QueueFlag.GRAPHICS:
            indices.graphics_family = index
            transfer_score += 1
        if usable and family.flags & QueueFlag.COMPUTE:
            indices.compute_family = index
            transfer_score += 1
        if usable and family.flags & QueueFlag.TRANSFER:
            if min_transfer_score >= transfer_score:
                min_transfer_score = transfer_score
                indices.transfer_family = index
        if family.present_support:
            indices.present_family = index
        if indices.is_complete():
            break
    return indices


def check_required_extensions(device: PhysicalDevice, required: Iterable[str]) -> bool:
    """Return whether every required extension is offered by ``device``."""
    required_names = [FixedString(name, _EXTENSION_NAME_CAPACITY) for name in required]
    matched = sum(
        1
        for available in device.extensions
        for name in required_names
        if name.equals(FixedString(available, _EXTENSION_NAME_CAPACITY))
    )
    return matched == len(required_names)


def score_device(
    device: PhysicalDevice, required_extensions: Iterable[str] = DEVICE_EXTENSIONS
) -> int:
    """Rate a device; zero means it cannot be used."""
    if not check_required_extensions(device, required_extensions):
        return 0
    score = 1
    if device.device_type == DeviceType.DISCRETE_GPU:
        score += DISCRETE_GPU_BONUS
    score += device.max_image_dimension_2d
    score += len(device.memory_heaps)
    if not find_queue_families(device).is_complete():
        return 0
    if not device.geometry_shader:
        return 0
    return score


def pick_physical_device(
    devices: Iterable[PhysicalDevice],
    required_extensions: Iterable[str] = DEVICE_EXTENSIONS,
) -> PhysicalDevice:
    """Return the highest scoring device; the first one wins a tie."""
    required = tuple(required_extensions)
    candidates = list(devices)
    if not candidates:
        raise DeviceError("No GPU-like devices found")
    best: Optional[PhysicalDevice] = None
    best_score = 0
    for device in candidates:
        score = score_device(device, required)
        if score > best_score:
            best_score = score
            best = device
    if best is None:
        raise DeviceError("Failed to find device meeting requirements")
    return best


def pick_surface_format(formats: Sequence[SurfaceFormat]) -> SurfaceFormat:
    """Prefer B8G8R8A8 UNORM in sRGB, otherwise the first format offered."""
    if not formats:
        raise DeviceError("Device offers no surface formats")
    for surface_format in formats:
        if (
            surface_format.format == Format.B8G8R8A8_UNORM
            and surface_format.color_space == ColorSpace.SRGB_NONLINEAR
        ):
            return surface_format
    return formats[0]


def pick_present_mode(modes: Iterable[PresentMode]) -> PresentMode:
    """Prefer mailbox; FIFO is always available."""
    return PresentMode.MAILBOX if PresentMode.MAILBOX in tuple(modes) else PresentMode.FIFO


def pick_depth_format(device: PhysicalDevice) -> Format:
    """Return the first supported depth format among the preferred candidates."""
    for candidate in _DEPTH_FORMAT_CANDIDATES:
        if candidate in device.depth_formats:
            return candidate
    raise DeviceError("Failed to find a supported device format")


def find_memory_type(
    device: PhysicalDevice, type_filter: int, properties: MemoryProperty
) -> int:
    """Return the index of the first allowed memory type having ``properties``."""
    wanted = MemoryProperty(properties)
    for index, memory_type in enumerate(device.memory_types):
        if type_filter & (1 << index) and (memory_type.property_flags & wanted) == wanted:
            return index
    raise DeviceError("Failed to find a suitable memory type!")


class Device:
    """The chosen physical device with its queues and preferred formats."""

    def __init__(
        self,
        physical_devices: Iterable[PhysicalDevice],
        validation_enabled: bool = False,
        validation_layers: Sequence[str] = VALIDATION_LAYERS,
    ) -> None:
        self.validation_enabled = bool(validation_enabled)
        self.validation_layers = tuple(validation_layers)
        self.extensions = DEVICE_EXTENSIONS
        self.physical_device = pick_physical_device(physical_devices, self.extensions)
        self.queue_indices = find_queue_families(self.physical_device)
        self.surface_format = pick_surface_format(self.physical_device.surface_formats)
        self.present_mode = pick_present_mode(self.physical_device.present_modes)
        self.depth_format = pick_depth_format(self.physical_device)

    @property
    def enabled_layers(self) -> tuple[str, ...]:
        return self.validation_layers if self.validation_enabled else ()

    @property
    def type_name(self) -> str:
        return device_type_to_string(self.physical_device.device_type)

    def find_memory_type(self, type_filter: int, properties: MemoryProperty) -> int:
        return find_memory_type(self.physical_device, type_filter, properties)