"""Device memory buffers with mapping, writes and buffer-to-buffer copies."""

from __future__ import annotations

import enum
from typing import Optional

from .device import Device, DeviceError, MemoryProperty

WHOLE_SIZE = (1 << 64) - 1


class BufferUsage(enum.IntFlag):
    TRANSFER_SRC = 0x1
    TRANSFER_DST = 0x2
    UNIFORM_TEXEL_BUFFER = 0x4
    STORAGE_TEXEL_BUFFER = 0x8
    UNIFORM_BUFFER = 0x10
    STORAGE_BUFFER = 0x20
    INDEX_BUFFER = 0x40
    VERTEX_BUFFER = 0x80


class BufferError(RuntimeError):
    """Raised when a buffer operation cannot be carried out."""


class GpuBuffer:
    """A block of device memory of a fixed size, mapped for host writes."""

    def __init__(
        self,
        device: Device,
        size: int,
        usage: BufferUsage,
        memory_properties: MemoryProperty,
        bind_on_create: bool = True,
    ) -> None:
        if size <= 0:
            raise ValueError(f"buffer size must be positive, got {size}")
        self.device = device
        self.size = int(size)
        self.usage = BufferUsage(usage)
        self.memory_properties = MemoryProperty(memory_properties)
        type_filter = (1 << len(device.physical_device.memory_types)) - 1
        try:
            self.memory_index = device.find_memory_type(type_filter, self.memory_properties)
        except DeviceError as exc:
            raise BufferError("Failed to find suitable memory type for buffer") from exc
        self._memory = bytearray(self.size)
        self.bound = bool(bind_on_create)
        self._mapped: Optional[tuple[int, int]] = None

    @property
    def is_locked(self) -> bool:
        return self._mapped is not None

    def bind(self) -> None:
        """Bind the buffer to its memory."""
        self.bound = True

    def _check_range(self, offset: int, size: int, limit: int, what: str) -> None:
        if offset < 0 or size < 0 or offset + size > limit:
            raise BufferError(
                f"{what} range [{offset}, {offset + size}) exceeds size {limit}"
            )

    def lock_memory(self, size: int = WHOLE_SIZE, offset: int = 0, flags: int = 0) -> None:
        """Map ``size`` bytes at ``offset`` for host access."""
        if self.is_locked:
            raise BufferError("Buffer is already locked!")
        if not self.memory_properties & MemoryProperty.HOST_VISIBLE:
            raise BufferError("Cannot lock buffer memory that is not host visible")
        if not 0 <= offset < self.size:
            raise BufferError(f"offset {offset} outside buffer of size {self.size}")
        if size == WHOLE_SIZE:
            size = self.size - offset
        elif size <= 0:
            raise BufferError(f"lock size must be positive, got {size}")
        self._check_range(offset, size, self.size, "lock")
        self._mapped = (offset, size)

    def unlock_memory(self) -> None:
        self._mapped = None

    def write_to_buffer(self, data: object, size: int = WHOLE_SIZE, offset: int = 0) -> None:
        """Copy ``data`` into the mapped range at ``offset`` within it."""
        if self._mapped is None:
            raise BufferError("Buffer is not locked, cannot write to it!")
        payload = memoryview(data).tobytes()  # type: ignore[arg-type]
        mapped_offset, mapped_size = self._mapped
        if size == WHOLE_SIZE:
            start, count = mapped_offset, mapped_size
        else:
            self._check_range(offset, size, mapped_size, "write")
            start, count = mapped_offset + offset, size
        if len(payload) < count:
            raise BufferError(f"data holds {len(payload)} bytes, {count} needed")
        self._memory[start : start + count] = payload[:count]

    def read(self, offset: int = 0, size: Optional[int] = None) -> bytes:
        """Return a copy of the buffer contents."""
        if size is None:
            size = self.size - offset
        self._check_range(offset, size, self.size, "read")
        return bytes(self._memory[offset : offset + size])

    def copy_from_buffer(
        self,
        source: GpuBuffer,
        source_offset: int = 0,
        destination_offset: int = 0,
        size: Optional[int] = None,
    ) -> None:
        """Copy ``size`` bytes from ``source`` into this buffer."""
        if size is None:
            size = source.size - source_offset
        source._check_range(source_offset, size, source.size, "source")
        self._check_range(destination_offset, size, self.size, "destination")
        chunk = bytes(source._memory[source_offset : source_offset + size])
        self._memory[destination_offset : destination_offset + size] = chunk

    def create_resized_buffer(
        self, new_size: int, source_offset: int = 0, destination_offset: int = 0
    ) -> GpuBuffer:
        """Return a new buffer of ``new_size`` holding this buffer's contents."""
        if self.is_locked:
            raise BufferError("Cannot resize a locked buffer!")
        new_buffer = GpuBuffer(
            self.device, new_size, self.usage, self.memory_properties, bind_on_create=False
        )
        if not 0 <= source_offset <= self.size:
            raise BufferError(f"source offset {source_offset} outside buffer")
        if not 0 <= destination_offset <= new_buffer.size:
            raise BufferError(f"destination offset {destination_offset} outside buffer")
        count = min(self.size - source_offset, new_buffer.size - destination_offset)
        if count > 0:
            new_buffer.copy_from_buffer(self, source_offset, destination_offset, count)
        return new_buffer