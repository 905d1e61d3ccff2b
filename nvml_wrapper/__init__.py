# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""nvml-wrapper - typed, lifetime-checked access to NVIDIA's NVML.

NVML status codes become exceptions, C enums and bitmasks become IntEnum /
IntFlag types with strict decoding, and every handle is tied to the Nvml
instance that produced it so nothing can be used after shutdown.

Package structure:
- ffi/: cffi declarations and the dynamic library loader
- common/: Errors, enums, flag sets, output structs, config, serialization
- nvml, device, unit, event, nvlink, vgpu: Typed handles

Primary API:
    from nvml_wrapper import Nvml, TemperatureSensor

    with Nvml.init() as nvml:
        for device in nvml.devices():
            print(device.name(), device.temperature(TemperatureSensor.GPU))
"""

# Handles
from nvml_wrapper.device import Device
from nvml_wrapper.event import EventData, EventSet
from nvml_wrapper.nvlink import NvLink
from nvml_wrapper.nvml import (
    Nvml,
    cuda_driver_version_major,
    cuda_driver_version_minor,
)
from nvml_wrapper.unit import Unit
from nvml_wrapper.vgpu import VgpuType

# Errors
from nvml_wrapper.common.error import (
    EventSetReleasedError,
    FailedToLoadSymbolError,
    IncorrectBitsError,
    LibraryLoadError,
    LibraryUnloadedError,
    NotSupportedError,
    NvmlCallError,
    NvmlError,
    NvmlReturn,
    NvmlTimeoutError,
    UnexpectedVariantError,
    Utf8Error,
)

# Enums and flag sets
from nvml_wrapper.common.bitmasks import EventTypes, InitFlags, ThrottleReasons
from nvml_wrapper.common.enums import (
    Clock,
    ClockId,
    ComputeMode,
    PerformanceState,
    TemperatureSensor,
    TemperatureThreshold,
)

# Field values
from nvml_wrapper.common.structs import FieldId, FieldValueSample

__all__ = [
    # Handles
    "Nvml",
    "Device",
    "Unit",
    "EventSet",
    "EventData",
    "NvLink",
    "VgpuType",
    "cuda_driver_version_major",
    "cuda_driver_version_minor",
    # Errors
    "NvmlError",
    "NvmlCallError",
    "NvmlReturn",
    "LibraryLoadError",
    "FailedToLoadSymbolError",
    "LibraryUnloadedError",
    "EventSetReleasedError",
    "NotSupportedError",
    "NvmlTimeoutError",
    "Utf8Error",
    "UnexpectedVariantError",
    "IncorrectBitsError",
    # Enums and flag sets
    "InitFlags",
    "EventTypes",
    "ThrottleReasons",
    "Clock",
    "ClockId",
    "ComputeMode",
    "PerformanceState",
    "TemperatureSensor",
    "TemperatureThreshold",
    # Field values
    "FieldId",
    "FieldValueSample",
]
