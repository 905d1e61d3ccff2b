# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""In-process stand-in for libnvidia-ml.

FakeNvml exposes NVML entry points as methods that receive the same cffi
pointers a real library would: outputs are written through `ptr[0]`,
struct fields and `ffi.memmove`, and every method returns an nvmlReturn_t.
Wrap it with NvmlLibrary(FakeNvml(...)) to drive the package without a GPU.

Handles are small integers cast to the handle pointer types; they are
never dereferenced.
"""

from __future__ import annotations

import functools
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Optional, Set, Tuple

from nvml_wrapper.ffi.bindings import ffi

SUCCESS = 0
ERROR_UNINITIALIZED = 1
ERROR_INVALID_ARGUMENT = 2
ERROR_NOT_SUPPORTED = 3
ERROR_NOT_FOUND = 6
ERROR_INSUFFICIENT_SIZE = 7
ERROR_TIMEOUT = 10

NOT_AVAILABLE_ULL = 0xFFFFFFFFFFFFFFFF
INSTANCE_NOT_APPLICABLE = 0xFFFFFFFF

# nvmlValueType_t -> nvmlValue_t member
FIELD_VALUE_MEMBERS = {0: "dVal", 1: "uiVal", 2: "ulVal", 3: "ullVal", 4: "sllVal", 5: "siVal"}


def handle_index(handle) -> int:
    """Recover the list index encoded in a fake handle."""
    return int(ffi.cast("uintptr_t", handle)) - 1


def write_string(dest, length: int, text: str) -> int:
    """Copy `text` plus a NUL into a char buffer of `length` bytes."""
    data = text.encode("utf-8") + b"\x00"
    if len(data) > length:
        return ERROR_INSUFFICIENT_SIZE
    ffi.memmove(dest, data, len(data))
    return SUCCESS


def write_bytes(dest, data: bytes) -> None:
    ffi.memmove(dest, data, len(data))


def nvml_entry(fn):
    """Mark a method as an NVML entry point.

    Honors `fake.fail[name]` (forced status codes) and counts calls in
    `fake.calls`.
    """

    @functools.wraps(fn)
    def wrapper(self, *args):
        self.calls[fn.__name__] = self.calls.get(fn.__name__, 0) + 1
        forced = self.fail.get(fn.__name__)
        if forced is not None:
            return forced
        return fn(self, *args)

    return wrapper


# =============================================================================
# Fake hardware model
# =============================================================================


@dataclass
class FakeProcess:
    pid: int
    used_gpu_memory: int = 256 * 1024 * 1024
    gpu_instance_id: int = INSTANCE_NOT_APPLICABLE
    compute_instance_id: int = INSTANCE_NOT_APPLICABLE


@dataclass
class FakeVgpuType:
    type_id: int
    name: str = "GRID A100-4C"
    class_name: str = "Compute"
    license: str = "NVIDIA-Virtual-Compute-Server,9.0"
    framebuffer_size: int = 4 * 1024**3
    max_instances: int = 10
    resolution: Tuple[int, int] = (4096, 2160)


@dataclass
class FakeDevice:
    name: str = "NVIDIA A100-SXM4-40GB"
    uuid: str = "GPU-00000000-1111-2222-3333-444444444444"
    serial: str = "1563221000001"
    minor_number: int = 0
    brand: int = 2
    architecture: int = 7
    cuda_capability: Tuple[int, int] = (8, 0)
    board_id: int = 0x100
    multi_gpu_board: int = 0
    vbios_version: str = "92.00.25.00.08"
    inforom_image_version: str = "G506.0200.00.04"
    bus_id: str = "00000000:07:00.0"
    pci_bus: int = 7
    pci_device_id: int = 0x20B010DE
    pci_sub_system_id: int = 0x134F10DE
    temperature: int = 41
    temperature_thresholds: Dict[int, int] = field(
        default_factory=lambda: {0: 92, 1: 89, 2: 95, 3: 87}
    )
    power_usage: int = 61_000
    power_limit: int = 400_000
    power_limit_default: int = 400_000
    power_limit_range: Tuple[int, int] = (100_000, 400_000)
    energy: int = 123_456_789
    fan_speeds: List[int] = field(default_factory=lambda: [30])
    memory: Tuple[int, int, int] = (40 * 1024**3, 39 * 1024**3, 1024**3)
    bar1: Tuple[int, int, int] = (64 * 1024**3, 63 * 1024**3, 1024**3)
    utilization: Tuple[int, int] = (12, 3)
    encoder: Tuple[int, int] = (5, 167_000)
    decoder: Tuple[int, int] = (0, 167_000)
    encoder_stats: Tuple[int, int, int] = (2, 60, 1200)
    pcie_throughput: Dict[int, int] = field(default_factory=lambda: {0: 1024, 1: 2048})
    pcie_link: Tuple[int, int, int, int] = (4, 16, 4, 16)
    # Keyed by Clock: GRAPHICS, SM, MEMORY, VIDEO.
    clocks: Dict[int, int] = field(
        default_factory=lambda: {0: 1410, 1: 1410, 2: 1215, 3: 1275}
    )
    max_clocks: Dict[int, int] = field(
        default_factory=lambda: {0: 1410, 1: 1410, 2: 1215, 3: 1290}
    )
    applications_clocks: Optional[Tuple[int, int]] = None
    performance_state: int = 0
    throttle_reasons: int = 0x1
    supported_throttle_reasons: int = 0x1FF
    auto_boost: Tuple[int, int] = (1, 1)
    compute_mode: int = 0
    persistence_mode: int = 1
    display_mode: int = 0
    display_active: int = 0
    api_restricted: Dict[int, int] = field(default_factory=lambda: {0: 1, 1: 0})
    operation_mode: Tuple[int, int] = (0, 0)
    ecc_mode: Tuple[int, int] = (1, 1)
    ecc_errors: Dict[Tuple[int, int], int] = field(default_factory=dict)
    retired_pages: Dict[int, List[Tuple[int, int]]] = field(default_factory=dict)
    # Pages that appear right after the next size query for that cause.
    retired_pages_after_count: Dict[int, List[Tuple[int, int]]] = field(default_factory=dict)
    # (current, pending) nvmlDriverModel_t; None off Windows.
    driver_model: Optional[Tuple[int, int]] = None
    # fieldId -> (nvmlValueType_t, value); missing ids report NOT_SUPPORTED.
    field_values: Dict[int, Tuple[int, object]] = field(default_factory=dict)
    compute_processes: List[FakeProcess] = field(default_factory=list)
    graphics_processes: List[FakeProcess] = field(default_factory=list)
    supported_events: int = 0x1F
    registered_events: int = 0
    nvlinks: Dict[int, Dict[str, object]] = field(default_factory=dict)
    vgpu_supported: List[FakeVgpuType] = field(default_factory=list)
    vgpu_creatable: List[FakeVgpuType] = field(default_factory=list)
    cert_chain: bytes = b"\x30\x82cert-chain"
    attestation_cert_chain: bytes = b"\x30\x82attestation-chain"
    attestation_report: bytes = b"report-body"
    cec_attestation_report: Optional[bytes] = None


@dataclass
class FakeUnit:
    name: str = "S2050"
    id: str = "unit-0"
    serial: str = "0324510000123"
    firmware_version: str = "6.2"
    led_color: int = 0
    led_cause: str = ""
    psu: Tuple[str, int, int, int] = ("Normal", 12, 220, 1200)
    temperatures: Dict[int, int] = field(default_factory=lambda: {0: 25, 1: 38, 2: 31})
    fans: List[Tuple[int, int]] = field(default_factory=lambda: [(4200, 0), (4100, 0)])
    device_indices: List[int] = field(default_factory=list)


@dataclass
class FakeEvent:
    device_index: int
    event_type: int
    event_data: int = 0
    gpu_instance_id: int = INSTANCE_NOT_APPLICABLE
    compute_instance_id: int = INSTANCE_NOT_APPLICABLE


# =============================================================================
# Symbol table
# =============================================================================


class FakeNvml:
    """Fake NVML symbol table backed by FakeDevice / FakeUnit records."""

    def __init__(
        self,
        devices: Optional[List[FakeDevice]] = None,
        units: Optional[List[FakeUnit]] = None,
        missing: Optional[Set[str]] = None,
    ):
        self.devices = list(devices) if devices is not None else [FakeDevice()]
        self.units = list(units) if units is not None else []
        self.missing = set(missing or ())
        self.fail: Dict[str, int] = {}
        self.calls: Dict[str, int] = {}
        self.initialized = 0
        self.init_flags: Optional[int] = None
        self.driver_version = "550.54.15"
        self.nvml_version = "12.550.54.15"
        self.cuda_driver_version = 12040
        self.process_names: Dict[int, str] = {}
        self.cc_caps: Tuple[int, int] = (0, 0)
        self.event_sets: Dict[int, Deque[FakeEvent]] = {}
        self.freed_event_sets: List[int] = []
        self.timeouts_before_event = 0
        self.wait_timeouts: List[int] = []
        self._next_event_set = 1
        self._error_strings: Dict[int, object] = {}

    def __getattribute__(self, name):
        if name.startswith("nvml") and name in object.__getattribute__(self, "missing"):
            raise AttributeError(name)
        return object.__getattribute__(self, name)

    def _device(self, handle) -> Optional[FakeDevice]:
        index = handle_index(handle)
        if 0 <= index < len(self.devices):
            return self.devices[index]
        return None

    def _device_handle(self, index: int):
        return ffi.cast("nvmlDevice_t", index + 1)

    # ==================== Init / system ====================

    @nvml_entry
    def nvmlInit_v2(self):
        self.initialized += 1
        self.init_flags = 0
        return SUCCESS

    @nvml_entry
    def nvmlInitWithFlags(self, flags):
        self.initialized += 1
        self.init_flags = int(flags)
        return SUCCESS

    @nvml_entry
    def nvmlShutdown(self):
        if self.initialized == 0:
            return ERROR_UNINITIALIZED
        self.initialized -= 1
        return SUCCESS

    def nvmlErrorString(self, code):
        buf = self._error_strings.get(int(code))
        if buf is None:
            buf = ffi.new("char[]", f"Fake NVML error {int(code)}".encode())
            self._error_strings[int(code)] = buf
        return ffi.cast("const char *", buf)

    @nvml_entry
    def nvmlSystemGetDriverVersion(self, buf, length):
        return write_string(buf, length, self.driver_version)

    @nvml_entry
    def nvmlSystemGetNVMLVersion(self, buf, length):
        return write_string(buf, length, self.nvml_version)

    @nvml_entry
    def nvmlSystemGetCudaDriverVersion_v2(self, out):
        out[0] = self.cuda_driver_version
        return SUCCESS

    @nvml_entry
    def nvmlSystemGetProcessName(self, pid, buf, length):
        name = self.process_names.get(int(pid))
        if name is None:
            return ERROR_NOT_FOUND
        data = name.encode("utf-8")[: length - 1] + b"\x00"
        write_bytes(buf, data)
        return SUCCESS

    @nvml_entry
    def nvmlSystemGetConfComputeCapabilities(self, caps):
        caps.cpuCaps, caps.gpusCaps = self.cc_caps
        return SUCCESS

    # ==================== Device handles ====================

    @nvml_entry
    def nvmlDeviceGetCount_v2(self, count):
        count[0] = len(self.devices)
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetHandleByIndex_v2(self, index, out):
        if not 0 <= index < len(self.devices):
            return ERROR_INVALID_ARGUMENT
        out[0] = self._device_handle(index)
        return SUCCESS

    def _handle_by(self, attr: str, key, out) -> int:
        wanted = ffi.string(key).decode("utf-8")
        for index, device in enumerate(self.devices):
            if getattr(device, attr) == wanted:
                out[0] = self._device_handle(index)
                return SUCCESS
        return ERROR_NOT_FOUND

    @nvml_entry
    def nvmlDeviceGetHandleByUUID(self, uuid, out):
        return self._handle_by("uuid", uuid, out)

    @nvml_entry
    def nvmlDeviceGetHandleByPciBusId_v2(self, bus_id, out):
        return self._handle_by("bus_id", bus_id, out)

    @nvml_entry
    def nvmlDeviceGetHandleBySerial(self, serial, out):
        return self._handle_by("serial", serial, out)

    # ==================== Identity ====================

    @nvml_entry
    def nvmlDeviceGetName(self, handle, buf, length):
        return write_string(buf, length, self._device(handle).name)

    @nvml_entry
    def nvmlDeviceGetUUID(self, handle, buf, length):
        return write_string(buf, length, self._device(handle).uuid)

    @nvml_entry
    def nvmlDeviceGetSerial(self, handle, buf, length):
        return write_string(buf, length, self._device(handle).serial)

    @nvml_entry
    def nvmlDeviceGetIndex(self, handle, out):
        out[0] = handle_index(handle)
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetMinorNumber(self, handle, out):
        out[0] = self._device(handle).minor_number
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetBrand(self, handle, out):
        out[0] = self._device(handle).brand
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetArchitecture(self, handle, out):
        out[0] = self._device(handle).architecture
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetCudaComputeCapability(self, handle, major, minor):
        major[0], minor[0] = self._device(handle).cuda_capability
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetBoardId(self, handle, out):
        out[0] = self._device(handle).board_id
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetMultiGpuBoard(self, handle, out):
        out[0] = self._device(handle).multi_gpu_board
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetVbiosVersion(self, handle, buf, length):
        return write_string(buf, length, self._device(handle).vbios_version)

    @nvml_entry
    def nvmlDeviceGetInforomVersion(self, handle, inforom, buf, length):
        return write_string(buf, length, f"{int(inforom) + 1}.0")

    @nvml_entry
    def nvmlDeviceGetInforomImageVersion(self, handle, buf, length):
        return write_string(buf, length, self._device(handle).inforom_image_version)

    @nvml_entry
    def nvmlDeviceGetPciInfo_v3(self, handle, pci):
        device = self._device(handle)
        pci.domain = 0
        pci.bus = device.pci_bus
        pci.device = 0
        pci.pciDeviceId = device.pci_device_id
        pci.pciSubSystemId = device.pci_sub_system_id
        return write_string(pci.busId, len(pci.busId), device.bus_id)

    @nvml_entry
    def nvmlDeviceOnSameBoard(self, first, second, out):
        out[0] = int(self._device(first).board_id == self._device(second).board_id)
        return SUCCESS

    # ==================== Thermal / power ====================

    @nvml_entry
    def nvmlDeviceGetTemperature(self, handle, sensor, out):
        if sensor != 0:
            return ERROR_INVALID_ARGUMENT
        out[0] = self._device(handle).temperature
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetTemperatureThreshold(self, handle, threshold, out):
        value = self._device(handle).temperature_thresholds.get(int(threshold))
        if value is None:
            return ERROR_NOT_SUPPORTED
        out[0] = value
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetPowerUsage(self, handle, out):
        out[0] = self._device(handle).power_usage
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetPowerManagementLimit(self, handle, out):
        out[0] = self._device(handle).power_limit
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetPowerManagementDefaultLimit(self, handle, out):
        out[0] = self._device(handle).power_limit_default
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetPowerManagementLimitConstraints(self, handle, min_limit, max_limit):
        min_limit[0], max_limit[0] = self._device(handle).power_limit_range
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetEnforcedPowerLimit(self, handle, out):
        out[0] = self._device(handle).power_limit
        return SUCCESS

    @nvml_entry
    def nvmlDeviceSetPowerManagementLimit(self, handle, limit):
        device = self._device(handle)
        low, high = device.power_limit_range
        if not low <= limit <= high:
            return ERROR_INVALID_ARGUMENT
        device.power_limit = int(limit)
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetTotalEnergyConsumption(self, handle, out):
        out[0] = self._device(handle).energy
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetFanSpeed_v2(self, handle, fan, out):
        speeds = self._device(handle).fan_speeds
        if fan >= len(speeds):
            return ERROR_INVALID_ARGUMENT
        out[0] = speeds[fan]
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetNumFans(self, handle, out):
        out[0] = len(self._device(handle).fan_speeds)
        return SUCCESS

    # ==================== Memory / utilization ====================

    @nvml_entry
    def nvmlDeviceGetMemoryInfo(self, handle, mem):
        mem.total, mem.free, mem.used = self._device(handle).memory
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetBAR1MemoryInfo(self, handle, mem):
        mem.bar1Total, mem.bar1Free, mem.bar1Used = self._device(handle).bar1
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetUtilizationRates(self, handle, util):
        util.gpu, util.memory = self._device(handle).utilization
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetEncoderUtilization(self, handle, util, period):
        util[0], period[0] = self._device(handle).encoder
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetDecoderUtilization(self, handle, util, period):
        util[0], period[0] = self._device(handle).decoder
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetEncoderStats(self, handle, sessions, fps, latency):
        sessions[0], fps[0], latency[0] = self._device(handle).encoder_stats
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetPcieThroughput(self, handle, counter, out):
        out[0] = self._device(handle).pcie_throughput[int(counter)]
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetCurrPcieLinkGeneration(self, handle, out):
        out[0] = self._device(handle).pcie_link[0]
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetCurrPcieLinkWidth(self, handle, out):
        out[0] = self._device(handle).pcie_link[1]
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetMaxPcieLinkGeneration(self, handle, out):
        out[0] = self._device(handle).pcie_link[2]
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetMaxPcieLinkWidth(self, handle, out):
        out[0] = self._device(handle).pcie_link[3]
        return SUCCESS

    # ==================== Clocks / performance ====================

    @nvml_entry
    def nvmlDeviceGetClockInfo(self, handle, clock_type, out):
        out[0] = self._device(handle).clocks[int(clock_type)]
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetMaxClockInfo(self, handle, clock_type, out):
        out[0] = self._device(handle).max_clocks[int(clock_type)]
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetClock(self, handle, clock_type, clock_id, out):
        device = self._device(handle)
        if clock_id == 3:
            out[0] = device.max_clocks[int(clock_type)]
        else:
            out[0] = device.clocks[int(clock_type)]
        return SUCCESS

    @nvml_entry
    def nvmlDeviceSetApplicationsClocks(self, handle, mem_clock, graphics_clock):
        self._device(handle).applications_clocks = (int(mem_clock), int(graphics_clock))
        return SUCCESS

    @nvml_entry
    def nvmlDeviceResetApplicationsClocks(self, handle):
        self._device(handle).applications_clocks = None
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetPerformanceState(self, handle, out):
        out[0] = self._device(handle).performance_state
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetCurrentClocksThrottleReasons(self, handle, out):
        out[0] = self._device(handle).throttle_reasons
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetSupportedClocksThrottleReasons(self, handle, out):
        out[0] = self._device(handle).supported_throttle_reasons
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetAutoBoostedClocksEnabled(self, handle, enabled, default):
        enabled[0], default[0] = self._device(handle).auto_boost
        return SUCCESS

    # ==================== Modes ====================

    @nvml_entry
    def nvmlDeviceGetComputeMode(self, handle, out):
        out[0] = self._device(handle).compute_mode
        return SUCCESS

    @nvml_entry
    def nvmlDeviceSetComputeMode(self, handle, mode):
        self._device(handle).compute_mode = int(mode)
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetPersistenceMode(self, handle, out):
        out[0] = self._device(handle).persistence_mode
        return SUCCESS

    @nvml_entry
    def nvmlDeviceSetPersistenceMode(self, handle, mode):
        self._device(handle).persistence_mode = int(mode)
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetDisplayMode(self, handle, out):
        out[0] = self._device(handle).display_mode
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetDisplayActive(self, handle, out):
        out[0] = self._device(handle).display_active
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetAPIRestriction(self, handle, api, out):
        out[0] = self._device(handle).api_restricted[int(api)]
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetGpuOperationMode(self, handle, current, pending):
        current[0], pending[0] = self._device(handle).operation_mode
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetEccMode(self, handle, current, pending):
        current[0], pending[0] = self._device(handle).ecc_mode
        return SUCCESS

    @nvml_entry
    def nvmlDeviceSetEccMode(self, handle, ecc):
        device = self._device(handle)
        device.ecc_mode = (device.ecc_mode[0], int(ecc))
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetTotalEccErrors(self, handle, error_type, counter, out):
        out[0] = self._device(handle).ecc_errors.get((int(error_type), int(counter)), 0)
        return SUCCESS

    @nvml_entry
    def nvmlDeviceClearEccErrorCounts(self, handle, counter):
        errors = self._device(handle).ecc_errors
        for key in [k for k in errors if k[1] == int(counter)]:
            errors[key] = 0
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetRetiredPages_v2(self, handle, cause, count, addresses, timestamps):
        device = self._device(handle)
        pages = device.retired_pages.setdefault(int(cause), [])
        capacity = int(count[0])
        count[0] = len(pages)
        if addresses == ffi.NULL:
            pages.extend(device.retired_pages_after_count.pop(int(cause), []))
            return ERROR_INSUFFICIENT_SIZE if count[0] else SUCCESS
        if capacity < len(pages):
            return ERROR_INSUFFICIENT_SIZE
        for i, (address, timestamp) in enumerate(pages):
            addresses[i] = address
            timestamps[i] = timestamp
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetDriverModel(self, handle, current, pending):
        device = self._device(handle)
        if device.driver_model is None:
            return ERROR_NOT_SUPPORTED
        current[0], pending[0] = device.driver_model
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetFieldValues(self, handle, values_count, values):
        fields = self._device(handle).field_values
        for i in range(int(values_count)):
            slot = values[i]
            entry = fields.get(int(slot.fieldId))
            slot.timestamp = 1_700_000_000_000_000
            slot.latencyUsec = 0
            if entry is None:
                slot.nvmlReturn = ERROR_NOT_SUPPORTED
                continue
            value_type, value = entry
            slot.nvmlReturn = SUCCESS
            slot.valueType = value_type
            setattr(slot.value, FIELD_VALUE_MEMBERS[value_type], value)
        return SUCCESS

    # ==================== Processes ====================

    def _fill_processes(self, processes: List[FakeProcess], count, infos) -> int:
        capacity = int(count[0])
        count[0] = len(processes)
        if infos == ffi.NULL or capacity < len(processes):
            return ERROR_INSUFFICIENT_SIZE if processes else SUCCESS
        for i, proc in enumerate(processes):
            infos[i].pid = proc.pid
            infos[i].usedGpuMemory = proc.used_gpu_memory
            infos[i].gpuInstanceId = proc.gpu_instance_id
            infos[i].computeInstanceId = proc.compute_instance_id
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetComputeRunningProcesses_v3(self, handle, count, infos):
        return self._fill_processes(self._device(handle).compute_processes, count, infos)

    @nvml_entry
    def nvmlDeviceGetGraphicsRunningProcesses_v3(self, handle, count, infos):
        return self._fill_processes(self._device(handle).graphics_processes, count, infos)

    # ==================== Events ====================

    @nvml_entry
    def nvmlEventSetCreate(self, out):
        set_id = self._next_event_set
        self._next_event_set += 1
        self.event_sets[set_id] = deque()
        out[0] = ffi.cast("nvmlEventSet_t", set_id)
        return SUCCESS

    @nvml_entry
    def nvmlEventSetFree(self, event_set):
        set_id = int(ffi.cast("uintptr_t", event_set))
        if self.event_sets.pop(set_id, None) is None:
            return ERROR_INVALID_ARGUMENT
        self.freed_event_sets.append(set_id)
        return SUCCESS

    @nvml_entry
    def nvmlEventSetWait_v2(self, event_set, data, timeout_ms):
        self.wait_timeouts.append(int(timeout_ms))
        queue = self.event_sets[int(ffi.cast("uintptr_t", event_set))]
        if self.timeouts_before_event > 0 or not queue:
            self.timeouts_before_event = max(0, self.timeouts_before_event - 1)
            return ERROR_TIMEOUT
        event = queue.popleft()
        data.device = self._device_handle(event.device_index)
        data.eventType = event.event_type
        data.eventData = event.event_data
        data.gpuInstanceId = event.gpu_instance_id
        data.computeInstanceId = event.compute_instance_id
        return SUCCESS

    @nvml_entry
    def nvmlDeviceRegisterEvents(self, handle, event_types, event_set):
        device = self._device(handle)
        if event_types & ~device.supported_events:
            return ERROR_NOT_SUPPORTED
        device.registered_events |= int(event_types)
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetSupportedEventTypes(self, handle, out):
        out[0] = self._device(handle).supported_events
        return SUCCESS

    def push_event(self, event: FakeEvent, set_id: int = 1) -> None:
        """Queue an event for delivery by the next wait on `set_id`."""
        self.event_sets[set_id].append(event)

    # ==================== Units ====================

    def _unit(self, handle) -> FakeUnit:
        return self.units[handle_index(handle)]

    @nvml_entry
    def nvmlUnitGetCount(self, count):
        count[0] = len(self.units)
        return SUCCESS

    @nvml_entry
    def nvmlUnitGetHandleByIndex(self, index, out):
        if not 0 <= index < len(self.units):
            return ERROR_INVALID_ARGUMENT
        out[0] = ffi.cast("nvmlUnit_t", index + 1)
        return SUCCESS

    @nvml_entry
    def nvmlUnitGetUnitInfo(self, handle, info):
        unit = self._unit(handle)
        write_string(info.name, len(info.name), unit.name)
        write_string(info.id, len(info.id), unit.id)
        write_string(info.serial, len(info.serial), unit.serial)
        write_string(info.firmwareVersion, len(info.firmwareVersion), unit.firmware_version)
        return SUCCESS

    @nvml_entry
    def nvmlUnitGetLedState(self, handle, state):
        unit = self._unit(handle)
        state.color = unit.led_color
        return write_string(state.cause, len(state.cause), unit.led_cause)

    @nvml_entry
    def nvmlUnitSetLedState(self, handle, color):
        self._unit(handle).led_color = int(color)
        return SUCCESS

    @nvml_entry
    def nvmlUnitGetPsuInfo(self, handle, psu):
        state, psu.current, psu.voltage, psu.power = self._unit(handle).psu
        return write_string(psu.state, len(psu.state), state)

    @nvml_entry
    def nvmlUnitGetTemperature(self, handle, reading, out):
        out[0] = self._unit(handle).temperatures[int(reading)]
        return SUCCESS

    @nvml_entry
    def nvmlUnitGetFanSpeedInfo(self, handle, speeds):
        fans = self._unit(handle).fans
        for i, (speed, state) in enumerate(fans):
            speeds.fans[i].speed = speed
            speeds.fans[i].state = state
        speeds.count = len(fans)
        return SUCCESS

    @nvml_entry
    def nvmlUnitGetDevices(self, handle, count, devices):
        indices = self._unit(handle).device_indices
        capacity = int(count[0])
        count[0] = len(indices)
        if devices == ffi.NULL or capacity < len(indices):
            return ERROR_INSUFFICIENT_SIZE if indices else SUCCESS
        for i, index in enumerate(indices):
            devices[i] = self._device_handle(index)
        return SUCCESS

    # ==================== NvLink ====================

    def _link(self, handle, link) -> Optional[Dict[str, object]]:
        return self._device(handle).nvlinks.get(int(link))

    @nvml_entry
    def nvmlDeviceGetNvLinkState(self, handle, link, out):
        state = self._link(handle, link)
        if state is None:
            return ERROR_INVALID_ARGUMENT
        out[0] = int(state.get("active", 1))
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetNvLinkVersion(self, handle, link, out):
        state = self._link(handle, link)
        if state is None:
            return ERROR_INVALID_ARGUMENT
        out[0] = int(state.get("version", 3))
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetNvLinkCapability(self, handle, link, capability, out):
        state = self._link(handle, link)
        if state is None:
            return ERROR_INVALID_ARGUMENT
        out[0] = int(int(capability) in state.get("capabilities", ()))
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetNvLinkRemotePciInfo_v2(self, handle, link, pci):
        state = self._link(handle, link)
        if state is None:
            return ERROR_INVALID_ARGUMENT
        remote = self.devices[int(state["remote"])]
        pci.domain = 0
        pci.bus = remote.pci_bus
        pci.device = 0
        pci.pciDeviceId = remote.pci_device_id
        pci.pciSubSystemId = remote.pci_sub_system_id
        return write_string(pci.busId, len(pci.busId), remote.bus_id)

    @nvml_entry
    def nvmlDeviceGetNvLinkErrorCounter(self, handle, link, counter, out):
        state = self._link(handle, link)
        if state is None:
            return ERROR_INVALID_ARGUMENT
        out[0] = state.setdefault("errors", {}).get(int(counter), 0)
        return SUCCESS

    @nvml_entry
    def nvmlDeviceResetNvLinkErrorCounters(self, handle, link):
        state = self._link(handle, link)
        if state is None:
            return ERROR_INVALID_ARGUMENT
        state["errors"] = {}
        return SUCCESS

    # ==================== vGPU ====================

    def _vgpu(self, type_id) -> Optional[FakeVgpuType]:
        for device in self.devices:
            for vgpu in device.vgpu_supported:
                if vgpu.type_id == int(type_id):
                    return vgpu
        return None

    def _fill_vgpu_ids(self, types: List[FakeVgpuType], count, ids) -> int:
        capacity = int(count[0])
        count[0] = len(types)
        if ids == ffi.NULL or capacity < len(types):
            return ERROR_INSUFFICIENT_SIZE if types else SUCCESS
        for i, vgpu in enumerate(types):
            ids[i] = vgpu.type_id
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetSupportedVgpus(self, handle, count, ids):
        return self._fill_vgpu_ids(self._device(handle).vgpu_supported, count, ids)

    @nvml_entry
    def nvmlDeviceGetCreatableVgpus(self, handle, count, ids):
        return self._fill_vgpu_ids(self._device(handle).vgpu_creatable, count, ids)

    @nvml_entry
    def nvmlVgpuTypeGetClass(self, type_id, buf, size):
        return write_string(buf, int(size[0]), self._vgpu(type_id).class_name)

    @nvml_entry
    def nvmlVgpuTypeGetName(self, type_id, buf, size):
        return write_string(buf, int(size[0]), self._vgpu(type_id).name)

    @nvml_entry
    def nvmlVgpuTypeGetLicense(self, type_id, buf, size):
        return write_string(buf, size, self._vgpu(type_id).license)

    @nvml_entry
    def nvmlVgpuTypeGetCapabilities(self, type_id, capability, out):
        out[0] = int(capability == 1)
        return SUCCESS

    @nvml_entry
    def nvmlVgpuTypeGetDeviceID(self, type_id, device_id, subsystem_id):
        device_id[0] = 0x20B0
        subsystem_id[0] = 0x1533
        return SUCCESS

    @nvml_entry
    def nvmlVgpuTypeGetFrameRateLimit(self, type_id, out):
        out[0] = 0
        return SUCCESS

    @nvml_entry
    def nvmlVgpuTypeGetFramebufferSize(self, type_id, out):
        out[0] = self._vgpu(type_id).framebuffer_size
        return SUCCESS

    @nvml_entry
    def nvmlVgpuTypeGetGpuInstanceProfileId(self, type_id, out):
        out[0] = INSTANCE_NOT_APPLICABLE
        return SUCCESS

    @nvml_entry
    def nvmlVgpuTypeGetMaxInstances(self, handle, type_id, out):
        if self._device(handle) is None:
            return ERROR_INVALID_ARGUMENT
        out[0] = self._vgpu(type_id).max_instances
        return SUCCESS

    @nvml_entry
    def nvmlVgpuTypeGetMaxInstancesPerVm(self, type_id, out):
        out[0] = 1
        return SUCCESS

    @nvml_entry
    def nvmlVgpuTypeGetNumDisplayHeads(self, type_id, out):
        out[0] = 4
        return SUCCESS

    @nvml_entry
    def nvmlVgpuTypeGetResolution(self, type_id, display_index, x, y):
        if display_index >= 4:
            return ERROR_INVALID_ARGUMENT
        x[0], y[0] = self._vgpu(type_id).resolution
        return SUCCESS

    # ==================== Confidential compute ====================

    @nvml_entry
    def nvmlDeviceGetConfComputeGpuCertificate(self, handle, cert):
        device = self._device(handle)
        cert.certChainSize = len(device.cert_chain)
        cert.attestationCertChainSize = len(device.attestation_cert_chain)
        write_bytes(cert.certChain, device.cert_chain)
        write_bytes(cert.attestationCertChain, device.attestation_cert_chain)
        return SUCCESS

    @nvml_entry
    def nvmlDeviceGetConfComputeGpuAttestationReport(self, handle, report):
        device = self._device(handle)
        nonce = bytes(ffi.buffer(report.nonce))
        body = device.attestation_report + nonce
        report.attestationReportSize = len(body)
        write_bytes(report.attestationReport, body)
        if device.cec_attestation_report is None:
            report.isCecAttestationReportPresent = 0
        else:
            report.isCecAttestationReportPresent = 1
            report.cecAttestationReportSize = len(device.cec_attestation_report)
            write_bytes(report.cecAttestationReport, device.cec_attestation_report)
        return SUCCESS
