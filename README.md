# pintsized

Core pieces of a small game engine as a plain Python library. Everything
runs headless: nothing here opens a window or talks to a GPU, so the pieces
can be used on their own, in tools, or in tests. `numpy` is the only
dependency.

## What is inside

| Module | What it gives you |
| --- | --- |
| `pintsized.bits` | `bit`, `set_bit`, `clear_bit`, `test_bit` for 64-bit flag words (index outside 0..63 raises `ValueError`) |
| `pintsized.fixed_string` | `FixedString`, text truncated to a fixed capacity, with `equals`, `equals_ignore_case`, `contains`, `begins_with`, `ends_with` and `+=` |
| `pintsized.ecs` | `Entity`, `Component`, the abstract `System` and `ECSManager`, which stores components per type and entity id and updates systems |
| `pintsized.tasks` | `Task` with dependencies and `TaskManager`, which runs ready tasks on worker threads and queues dependents as they become ready |
| `pintsized.thread_worker` | `ThreadWorker`, one background thread given a `threading.Event` that is cleared on stop |
| `pintsized.camera` | `Camera` with perspective and orthographic projections, look-at views, yaw/pitch (pitch clamped to ±89°) and movement, as numpy matrices |
| `pintsized.plugin_registry` | `PluginRegistry`, named factories; names are truncated to 32 characters and cannot be registered twice |
| `pintsized.device` | A model of GPU device selection: queue families, device scoring, surface/present/depth format choice and memory type lookup, gathered in `Device` |
| `pintsized.gpu_buffer` | `GpuBuffer`, a byte buffer with `lock_memory` / `write_to_buffer` / `unlock_memory`, `read`, copies and `create_resized_buffer` |
| `pintsized.frame_info` | `GlobalUniformObject`: four 4×4 matrices packed into 256 bytes, column-major little-endian float32 |
| `pintsized.pipeline_state` | Frozen dataclasses for fixed-function pipeline state, built by `build_pipeline_state`, and `global_descriptor_pool` |
| `pintsized.render_pipeline` | `RenderPipeline`: loads shader binaries, builds the pipeline state and uniform buffer, and records bind and push-constant commands into `commands` |

## Examples

Bit flags:

```python
from pintsized.bits import bit, clear_bit, set_bit, test_bit

flags = set_bit(0, 3)
assert flags == bit(3) == 8
assert test_bit(flags, 3)
assert clear_bit(flags, 3) == 0
```

Bounded strings:

```python
from pintsized.fixed_string import FixedString

name = FixedString("hello world", 5)
assert str(name) == "hello"
assert name.equals_ignore_case("HELLO")
name += "!!"          # still at most 5 characters
assert len(name) == 5
```

Entities and systems:

```python
from dataclasses import dataclass

from pintsized.ecs import Component, ECSManager, System


@dataclass
class Position(Component):
    x: float = 0.0


class Mover(System):
    def __init__(self, manager):
        self.manager = manager

    def update(self, delta_time):
        for position in self.manager.get_components(Position).values():
            position.x += delta_time


manager = ECSManager()
entity = manager.create_entity()
manager.add_component(entity, Position())
manager.add_system(Mover(manager))
manager.update(0.5)
assert manager.get_component(entity, Position).x == 0.5
```

Tasks with dependencies:

```python
from pintsized.tasks import Task, TaskManager

order = []
first = Task(lambda: order.append("first"))
second = Task(lambda: order.append("second"))
second.add_dependency(first)

with TaskManager() as tasks:
    tasks.add_task(first)
    tasks.add_task(second)
    tasks.initialize(2)
    tasks.update(0.0)
# leaving the block calls shutdown(), which drains the queue and joins workers
```

Camera:

```python
from pintsized.camera import Camera

camera = Camera(0.1, 1000.0)
camera.set_perspective_projection(60.0, 16 / 9)
camera.set_camera_position((0.0, 0.0, -5.0))
camera.set_camera_yaw(0.25)
camera.update_camera()
view = camera.view_matrix          # 4x4 numpy array
```

Picking a device and writing to a buffer:

```python
from pintsized.device import (
    Device, DeviceType, Format, MemoryProperty, MemoryType, PhysicalDevice,
    PresentMode, QueueFamily, QueueFlag, SurfaceFormat,
)
from pintsized.gpu_buffer import BufferUsage, GpuBuffer

gpu = PhysicalDevice(
    name="made-up-gpu",
    device_type=DeviceType.DISCRETE_GPU,
    max_image_dimension_2d=16384,
    geometry_shader=True,
    queue_families=(
        QueueFamily(QueueFlag.GRAPHICS | QueueFlag.COMPUTE | QueueFlag.TRANSFER,
                    present_support=True),
    ),
    extensions=("VK_KHR_swapchain",),
    memory_types=(MemoryType(MemoryProperty.DEVICE_LOCAL
                             | MemoryProperty.HOST_VISIBLE
                             | MemoryProperty.HOST_COHERENT),),
    surface_formats=(SurfaceFormat(Format.B8G8R8A8_UNORM),),
    present_modes=(PresentMode.FIFO, PresentMode.MAILBOX),
    depth_formats=frozenset({Format.D32_SFLOAT}),
)
device = Device([gpu])
assert device.present_mode is PresentMode.MAILBOX
assert device.depth_format is Format.D32_SFLOAT

buffer = GpuBuffer(device, 16, BufferUsage.UNIFORM_BUFFER, MemoryProperty.HOST_VISIBLE)
buffer.lock_memory()
buffer.write_to_buffer(b"abcd" * 4)
buffer.unlock_memory()
assert buffer.read() == b"abcd" * 4
```

Devices that lack a required extension, a complete set of queue families or
geometry shaders score zero; if none is left, `DeviceError` is raised.

`RenderPipeline` reads each shader from the path formed by joining
`assets_dir` and the shader's location as plain strings, so give
`assets_dir` a trailing separator. Shader code must be a non-empty multiple
of four bytes. Call `configure_global_descriptor` before
`configure_pipeline`.

## What it does not do

This package models engine state; it does not drive a game. There is no
main loop, no window, no keyboard or other input handling, no logging
facility, no clock, no event queue and no memory pool. `RenderPipeline`
records the commands it would issue into a list instead of submitting them
to a graphics API, and `GpuBuffer` keeps its memory in a `bytearray`.
Nothing draws to the screen.

## Running the tests

Install the package with its `test` extra and run `pytest` from the project
directory.