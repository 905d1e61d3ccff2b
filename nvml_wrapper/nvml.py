# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Process-level NVML handle.

Lifecycle:
- Nvml.init() loads the shared library, resolves its required symbols and
  calls nvmlInitWithFlags.
- Devices, units and event sets obtained from an Nvml borrow its library.
- Nvml.shutdown() (or leaving a `with` block) calls nvmlShutdown and unloads
  the library. Every handle derived from it then raises LibraryUnloadedError.
- An Nvml collected without shutdown() logs a warning and shuts down then.
  Handles keep their Nvml alive, so this only happens once none remain.

NVML reference-counts nvmlInit/nvmlShutdown, so several Nvml instances may
coexist in one process; each must be shut down on its own.

Usage:
    with Nvml.init() as nvml:
        device = nvml.device_by_index(0)
        print(device.name(), device.temperature(TemperatureSensor.GPU))
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional

from nvml_wrapper.common.bitmasks import InitFlags
from nvml_wrapper.common.error import LibraryUnloadedError, NvmlError
from nvml_wrapper.common.structs import ConfidentialComputeCapabilities
from nvml_wrapper.common.utils import check_uint, decode_c_string, encode_c_string
from nvml_wrapper.device import Device
from nvml_wrapper.event import EventSet
from nvml_wrapper.ffi.bindings import (
    NVML_SYSTEM_DRIVER_VERSION_BUFFER_SIZE,
    NVML_SYSTEM_NVML_VERSION_BUFFER_SIZE,
    ffi,
)
from nvml_wrapper.ffi.library import NvmlLibrary
from nvml_wrapper.unit import Unit

logger = logging.getLogger(__name__)


def cuda_driver_version_major(version: int) -> int:
    """Major part of a version from Nvml.sys_cuda_driver_version()."""
    return version // 1000


def cuda_driver_version_minor(version: int) -> int:
    """Minor part of a version from Nvml.sys_cuda_driver_version()."""
    return (version % 1000) // 10


class Nvml:
    """Owner of a loaded and initialized NVML library.

    The wrapper adds no locking. Sharing one instance between threads is
    only as safe as NVML itself; callers that need serialization provide it.
    """

    def __init__(self, library: NvmlLibrary):
        """Wrap an already initialized library. Use init() or from_library()."""
        self._library = library

    @classmethod
    def init(
        cls, lib_path: Optional[str] = None, flags: InitFlags = InitFlags.NONE
    ) -> "Nvml":
        """Load NVML and initialize it.

        Args:
            lib_path: Path to the NVML shared library. When None, the
                environment and platform defaults are searched.
            flags: Flags for nvmlInitWithFlags

        Raises:
            LibraryLoadError: If the library cannot be opened
            FailedToLoadSymbolError: If a required symbol is missing
            NvmlCallError: If nvmlInitWithFlags fails
        """
        return cls.from_library(NvmlLibrary.open(lib_path), flags)

    @classmethod
    def from_library(
        cls, library: NvmlLibrary, flags: InitFlags = InitFlags.NONE
    ) -> "Nvml":
        """Initialize NVML through an already opened library.

        The library is closed if initialization fails.
        """
        try:
            if flags:
                library.call("nvmlInitWithFlags", InitFlags.from_bits(flags).bits)
            else:
                library.call("nvmlInit_v2")
        except NvmlError:
            library.close()
            raise
        logger.info(f"NVML initialized (flags={InitFlags(flags)!r})")
        return cls(library)

    def __enter__(self) -> "Nvml":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.is_loaded:
            self.shutdown()

    @property
    def library(self) -> NvmlLibrary:
        """The library every handle derived from this instance calls into."""
        return self._library

    @property
    def is_loaded(self) -> bool:
        return not self._library.is_closed

    def shutdown(self) -> None:
        """Call nvmlShutdown and unload the library.

        The library is unloaded even if nvmlShutdown reports an error; the
        error is raised afterwards.

        Raises:
            LibraryUnloadedError: If already shut down
        """
        if self._library.is_closed:
            raise LibraryUnloadedError("nvmlShutdown")
        try:
            self._library.call("nvmlShutdown")
        finally:
            self._library.close()
            logger.info("NVML shut down")

    def __del__(self):
        """Destructor: warn and shut down if shutdown() was never called."""
        library = getattr(self, "_library", None)
        if library is None or library.is_closed:
            return
        logger.warning("Nvml not shut down properly, shutting down")
        try:
            self.shutdown()
        except NvmlError as e:
            logger.warning(f"nvmlShutdown failed during collection: {e}")

    # ==================== System queries ====================

    def error_string(self, code: int) -> str:
        """Description NVML itself gives for a status code."""
        ptr = self._library.symbol("nvmlErrorString")(int(code))
        if ptr == ffi.NULL:
            return ""
        return decode_c_string(ptr)

    def sys_driver_version(self) -> str:
        """Version of the installed system driver."""
        buf = ffi.new("char[]", NVML_SYSTEM_DRIVER_VERSION_BUFFER_SIZE)
        self._library.call("nvmlSystemGetDriverVersion", buf, len(buf))
        return decode_c_string(buf)

    def sys_nvml_version(self) -> str:
        """Version of the NVML library itself."""
        buf = ffi.new("char[]", NVML_SYSTEM_NVML_VERSION_BUFFER_SIZE)
        self._library.call("nvmlSystemGetNVMLVersion", buf, len(buf))
        return decode_c_string(buf)

    def sys_cuda_driver_version(self) -> int:
        """CUDA driver version, encoded as 1000 * major + 10 * minor."""
        version = ffi.new("int *")
        self._library.call("nvmlSystemGetCudaDriverVersion_v2", version)
        return int(version[0])

    def sys_process_name(self, pid: int, length: int = 64) -> str:
        """Name of the process with the given pid, truncated to `length` bytes."""
        if length <= 0:
            raise ValueError(f"length must be positive, got {length}")
        buf = ffi.new("char[]", length)
        self._library.call("nvmlSystemGetProcessName", check_uint(pid, "pid"), buf, length)
        return decode_c_string(buf)

    def confidential_compute_capabilities(self) -> ConfidentialComputeCapabilities:
        caps = ffi.new("nvmlConfComputeSystemCaps_t *")
        self._library.call("nvmlSystemGetConfComputeCapabilities", caps)
        return ConfidentialComputeCapabilities.from_c(caps)

    # ==================== Devices ====================

    def device_count(self) -> int:
        count = ffi.new("unsigned int *")
        self._library.call("nvmlDeviceGetCount_v2", count)
        return int(count[0])

    def device_by_index(self, index: int) -> Device:
        """Handle for the device at `index` (0-based, NVML enumeration order).

        Enumeration order is not guaranteed to match nvidia-smi or CUDA.
        """
        handle = ffi.new("nvmlDevice_t *")
        self._library.call(
            "nvmlDeviceGetHandleByIndex_v2", check_uint(index, "index"), handle
        )
        return Device(self, handle[0])

    def device_by_uuid(self, uuid: str) -> Device:
        handle = ffi.new("nvmlDevice_t *")
        self._library.call("nvmlDeviceGetHandleByUUID", encode_c_string(uuid), handle)
        return Device(self, handle[0])

    def device_by_pci_bus_id(self, pci_bus_id: str) -> Device:
        """Handle for the device at a PCI bus id such as "00000000:01:00.0"."""
        handle = ffi.new("nvmlDevice_t *")
        self._library.call(
            "nvmlDeviceGetHandleByPciBusId_v2", encode_c_string(pci_bus_id), handle
        )
        return Device(self, handle[0])

    def device_by_serial(self, serial: str) -> Device:
        handle = ffi.new("nvmlDevice_t *")
        self._library.call("nvmlDeviceGetHandleBySerial", encode_c_string(serial), handle)
        return Device(self, handle[0])

    def devices(self) -> Iterator[Device]:
        """Iterate over every device NVML enumerates."""
        for index in range(self.device_count()):
            yield self.device_by_index(index)

    # ==================== Units / events ====================

    def unit_count(self) -> int:
        """Number of S-class units in the system."""
        count = ffi.new("unsigned int *")
        self._library.call("nvmlUnitGetCount", count)
        return int(count[0])

    def unit_by_index(self, index: int) -> Unit:
        handle = ffi.new("nvmlUnit_t *")
        self._library.call("nvmlUnitGetHandleByIndex", check_uint(index, "index"), handle)
        return Unit(self, handle[0])

    def units(self) -> List[Unit]:
        return [self.unit_by_index(i) for i in range(self.unit_count())]

    def create_event_set(self) -> EventSet:
        """Create an empty event set; register devices on it with
        Device.register_events()."""
        handle = ffi.new("nvmlEventSet_t *")
        self._library.call("nvmlEventSetCreate", handle)
        return EventSet(self, handle[0])
