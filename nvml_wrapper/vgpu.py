# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""vGPU type queries for a physical device."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Tuple

from nvml_wrapper.common.enums import VgpuCapability
from nvml_wrapper.common.utils import check_uint, decode_c_string
from nvml_wrapper.ffi.bindings import (
    NVML_DEVICE_NAME_BUFFER_SIZE,
    NVML_GRID_LICENSE_BUFFER_SIZE,
    ffi,
)

if TYPE_CHECKING:
    from nvml_wrapper.device import Device


class VgpuType:
    """A vGPU type id, bound to the device it was listed for.

    Returned from Device.vgpu_supported_types() and
    Device.vgpu_creatable_types().
    """

    def __init__(self, device: "Device", type_id: int):
        self._device = device
        self._id = type_id

    def __repr__(self) -> str:
        return f"VgpuType(id={self._id})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VgpuType):
            return NotImplemented
        return self._device == other._device and self._id == other._id

    def __hash__(self) -> int:
        return hash((self._device, self._id))

    @property
    def device(self) -> "Device":
        return self._device

    @property
    def id(self) -> int:
        """The raw nvmlVgpuTypeId_t."""
        return self._id

    def _call(self, name: str, *args: Any) -> None:
        self._device.nvml.library.call(name, self._id, *args)

    def _get_uint(self, name: str) -> int:
        out = ffi.new("unsigned int *")
        self._call(name, out)
        return int(out[0])

    def _get_sized_string(self, name: str) -> str:
        size = ffi.new("unsigned int *", NVML_DEVICE_NAME_BUFFER_SIZE)
        buf = ffi.new("char[]", NVML_DEVICE_NAME_BUFFER_SIZE)
        self._call(name, buf, size)
        return decode_c_string(buf)

    def class_name(self) -> str:
        """Class of the vGPU type, e.g. "Quadro"."""
        return self._get_sized_string("nvmlVgpuTypeGetClass")

    def license(self) -> str:
        """License string required to run this vGPU type."""
        buf = ffi.new("char[]", NVML_GRID_LICENSE_BUFFER_SIZE)
        self._call("nvmlVgpuTypeGetLicense", buf, NVML_GRID_LICENSE_BUFFER_SIZE)
        return decode_c_string(buf)

    def name(self) -> str:
        """Name of the vGPU type, e.g. "GRID M60-2Q"."""
        return self._get_sized_string("nvmlVgpuTypeGetName")

    def capabilities(self, capability: VgpuCapability) -> bool:
        out = ffi.new("unsigned int *")
        self._call("nvmlVgpuTypeGetCapabilities", VgpuCapability(capability).as_c(), out)
        return out[0] != 0

    def device_id(self) -> Tuple[int, int]:
        """The (device id, subsystem id) of this vGPU type."""
        device_id = ffi.new("unsigned long long *")
        subsystem_id = ffi.new("unsigned long long *")
        self._call("nvmlVgpuTypeGetDeviceID", device_id, subsystem_id)
        return int(device_id[0]), int(subsystem_id[0])

    def frame_rate_limit(self) -> int:
        """Static frame rate limit; 0 when the limiter is disabled."""
        return self._get_uint("nvmlVgpuTypeGetFrameRateLimit")

    def framebuffer_size(self) -> int:
        """Framebuffer size in bytes."""
        out = ffi.new("unsigned long long *")
        self._call("nvmlVgpuTypeGetFramebufferSize", out)
        return int(out[0])

    def instance_profile_id(self) -> int:
        return self._get_uint("nvmlVgpuTypeGetGpuInstanceProfileId")

    def max_instances(self) -> int:
        """How many vGPUs of this type the parent device supports."""
        out = ffi.new("unsigned int *")
        self._device.nvml.library.call(
            "nvmlVgpuTypeGetMaxInstances", self._device.handle, self._id, out
        )
        return int(out[0])

    def max_instances_per_vm(self) -> int:
        return self._get_uint("nvmlVgpuTypeGetMaxInstancesPerVm")

    def num_display_heads(self) -> int:
        return self._get_uint("nvmlVgpuTypeGetNumDisplayHeads")

    def resolution(self, display_head: int) -> Tuple[int, int]:
        """Maximum (x, y) resolution of one display head."""
        x = ffi.new("unsigned int *")
        y = ffi.new("unsigned int *")
        self._call(
            "nvmlVgpuTypeGetResolution", check_uint(display_head, "display_head"), x, y
        )
        return int(x[0]), int(y[0])
