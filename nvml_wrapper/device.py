# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Typed wrapper around an `nvmlDevice_t` handle.

A Device borrows the library of the Nvml instance it came from. Every
method resolves its entry point through that library, so calls made after
Nvml.shutdown() raise LibraryUnloadedError.

Units: temperatures in °C, power in milliwatts, energy in millijoules,
clocks in MHz, memory in bytes, PCIe throughput in KB/s.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Sequence, Union

from nvml_wrapper.common.bitmasks import EventTypes, ThrottleReasons
from nvml_wrapper.common.enums import (
    Api,
    Brand,
    Clock,
    ClockId,
    ComputeMode,
    DeviceArchitecture,
    DriverModel,
    EccCounter,
    EnableState,
    InfoRom,
    MemoryErrorType,
    OperationMode,
    PcieUtilCounter,
    PerformanceState,
    RetirementCause,
    TemperatureSensor,
    TemperatureThreshold,
)
from nvml_wrapper.common.error import LibraryUnloadedError, nvml_try
from nvml_wrapper.common.structs import (
    AutoBoostClocksEnabledInfo,
    BAR1MemoryInfo,
    ConfidentialComputeGpuAttestationReport,
    ConfidentialComputeGpuCertificate,
    CudaComputeCapability,
    DriverModelState,
    EccModeState,
    EncoderStats,
    FieldId,
    FieldValueSample,
    MemoryInfo,
    OperationModeState,
    PciInfo,
    PowerManagementConstraints,
    ProcessInfo,
    RetiredPage,
    Utilization,
    UtilizationInfo,
)
from nvml_wrapper.common.utils import check_uint, decode_c_string
from nvml_wrapper.ffi.bindings import (
    NVML_CC_GPU_ATTESTATION_NONCE_SIZE,
    NVML_DEVICE_INFOROM_VERSION_BUFFER_SIZE,
    NVML_DEVICE_NAME_V2_BUFFER_SIZE,
    NVML_DEVICE_SERIAL_BUFFER_SIZE,
    NVML_DEVICE_UUID_V2_BUFFER_SIZE,
    NVML_DEVICE_VBIOS_VERSION_BUFFER_SIZE,
    NVML_ERROR_INSUFFICIENT_SIZE,
    NVML_SUCCESS,
    ffi,
)
from nvml_wrapper.ffi.library import ARRAY_QUERY_SLACK
from nvml_wrapper.nvlink import NvLink
from nvml_wrapper.vgpu import VgpuType

if TYPE_CHECKING:
    from nvml_wrapper.event import EventSet
    from nvml_wrapper.nvml import Nvml


class Device:
    """One GPU as seen by NVML.

    Obtain instances from Nvml.device_by_index() and friends rather than
    constructing them directly.
    """

    def __init__(self, nvml: "Nvml", handle: Any):
        self._nvml = nvml
        self._handle = handle

    def __repr__(self) -> str:
        return f"Device(handle={self._handle!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Device):
            return NotImplemented
        return self._nvml is other._nvml and self._handle == other._handle

    def __hash__(self) -> int:
        return hash((id(self._nvml), int(ffi.cast("uintptr_t", self._handle))))

    @property
    def nvml(self) -> "Nvml":
        """The Nvml instance this device borrows its library from."""
        return self._nvml

    @property
    def handle(self) -> Any:
        """The raw `nvmlDevice_t` (cffi pointer)."""
        return self._handle

    def _call(self, name: str, *args: Any) -> None:
        self._nvml.library.call(name, self._handle, *args)

    def _get_uint(self, name: str, *args: Any) -> int:
        out = ffi.new("unsigned int *")
        self._call(name, *args, out)
        return int(out[0])

    def _get_ull(self, name: str, *args: Any) -> int:
        out = ffi.new("unsigned long long *")
        self._call(name, *args, out)
        return int(out[0])

    def _get_enable_state(self, name: str, *args: Any) -> bool:
        out = ffi.new("nvmlEnableState_t *")
        self._call(name, *args, out)
        return EnableState.from_c(out[0]) is EnableState.ENABLED

    def _get_string(self, name: str, size: int, *args: Any) -> str:
        buf = ffi.new("char[]", size)
        self._call(name, *args, buf, size)
        return decode_c_string(buf)

    # ==================== Identity ====================

    def name(self) -> str:
        """Product name, e.g. "NVIDIA A100-SXM4-40GB"."""
        return self._get_string("nvmlDeviceGetName", NVML_DEVICE_NAME_V2_BUFFER_SIZE)

    def uuid(self) -> str:
        """Globally unique immutable identifier, e.g. "GPU-<hex>"."""
        return self._get_string("nvmlDeviceGetUUID", NVML_DEVICE_UUID_V2_BUFFER_SIZE)

    def serial(self) -> str:
        """Board serial number (matches the physical label)."""
        return self._get_string("nvmlDeviceGetSerial", NVML_DEVICE_SERIAL_BUFFER_SIZE)

    def index(self) -> int:
        return self._get_uint("nvmlDeviceGetIndex")

    def minor_number(self) -> int:
        """Minor number of the device node (/dev/nvidia<minor>)."""
        return self._get_uint("nvmlDeviceGetMinorNumber")

    def brand(self) -> Brand:
        out = ffi.new("nvmlBrandType_t *")
        self._call("nvmlDeviceGetBrand", out)
        return Brand.from_c(out[0])

    def architecture(self) -> DeviceArchitecture:
        out = ffi.new("nvmlDeviceArchitecture_t *")
        self._call("nvmlDeviceGetArchitecture", out)
        return DeviceArchitecture.from_c(out[0])

    def cuda_compute_capability(self) -> CudaComputeCapability:
        major = ffi.new("int *")
        minor = ffi.new("int *")
        self._call("nvmlDeviceGetCudaComputeCapability", major, minor)
        return CudaComputeCapability(major=int(major[0]), minor=int(minor[0]))

    def board_id(self) -> int:
        """Identifier shared by devices on the same physical board."""
        return self._get_uint("nvmlDeviceGetBoardId")

    def is_multi_gpu_board(self) -> bool:
        return self._get_uint("nvmlDeviceGetMultiGpuBoard") != 0

    def vbios_version(self) -> str:
        return self._get_string(
            "nvmlDeviceGetVbiosVersion", NVML_DEVICE_VBIOS_VERSION_BUFFER_SIZE
        )

    def inforom_version(self, inforom: InfoRom) -> str:
        """Version of one infoROM object, e.g. "1.0" for the OEM object."""
        return self._get_string(
            "nvmlDeviceGetInforomVersion",
            NVML_DEVICE_INFOROM_VERSION_BUFFER_SIZE,
            InfoRom(inforom).as_c(),
        )

    def inforom_image_version(self) -> str:
        return self._get_string(
            "nvmlDeviceGetInforomImageVersion", NVML_DEVICE_INFOROM_VERSION_BUFFER_SIZE
        )

    def pci_info(self) -> PciInfo:
        pci = ffi.new("nvmlPciInfo_t *")
        self._call("nvmlDeviceGetPciInfo_v3", pci)
        return PciInfo.from_c(pci)

    def is_on_same_board_as(self, other: "Device") -> bool:
        if not other.nvml.is_loaded:
            raise LibraryUnloadedError("nvmlDeviceOnSameBoard")
        out = ffi.new("int *")
        self._call("nvmlDeviceOnSameBoard", other.handle, out)
        return out[0] != 0

    # ==================== Thermal / power ====================

    def temperature(self, sensor: TemperatureSensor = TemperatureSensor.GPU) -> int:
        """Current temperature reading in °C."""
        return self._get_uint("nvmlDeviceGetTemperature", TemperatureSensor(sensor).as_c())

    def temperature_threshold(self, threshold: TemperatureThreshold) -> int:
        return self._get_uint(
            "nvmlDeviceGetTemperatureThreshold", TemperatureThreshold(threshold).as_c()
        )

    def power_usage(self) -> int:
        """Current board power draw in milliwatts."""
        return self._get_uint("nvmlDeviceGetPowerUsage")

    def power_management_limit(self) -> int:
        return self._get_uint("nvmlDeviceGetPowerManagementLimit")

    def power_management_limit_default(self) -> int:
        return self._get_uint("nvmlDeviceGetPowerManagementDefaultLimit")

    def power_management_limit_constraints(self) -> PowerManagementConstraints:
        min_limit = ffi.new("unsigned int *")
        max_limit = ffi.new("unsigned int *")
        self._call("nvmlDeviceGetPowerManagementLimitConstraints", min_limit, max_limit)
        return PowerManagementConstraints(
            min_limit=int(min_limit[0]), max_limit=int(max_limit[0])
        )

    def enforced_power_limit(self) -> int:
        """The limit actually in effect, after all other limiters are applied."""
        return self._get_uint("nvmlDeviceGetEnforcedPowerLimit")

    def set_power_management_limit(self, limit: int) -> None:
        """Set the power limit in milliwatts. Requires root."""
        self._call("nvmlDeviceSetPowerManagementLimit", check_uint(limit, "limit"))

    def total_energy_consumption(self) -> int:
        """Energy used since the driver was last reloaded, in millijoules."""
        return self._get_ull("nvmlDeviceGetTotalEnergyConsumption")

    def fan_speed(self, fan: int = 0) -> int:
        """Intended speed of one fan, as a percent of its maximum."""
        return self._get_uint("nvmlDeviceGetFanSpeed_v2", check_uint(fan, "fan"))

    def num_fans(self) -> int:
        return self._get_uint("nvmlDeviceGetNumFans")

    # ==================== Memory / utilization ====================

    def memory_info(self) -> MemoryInfo:
        mem = ffi.new("nvmlMemory_t *")
        self._call("nvmlDeviceGetMemoryInfo", mem)
        return MemoryInfo.from_c(mem)

    def bar1_memory_info(self) -> BAR1MemoryInfo:
        mem = ffi.new("nvmlBAR1Memory_t *")
        self._call("nvmlDeviceGetBAR1MemoryInfo", mem)
        return BAR1MemoryInfo.from_c(mem)

    def utilization_rates(self) -> Utilization:
        util = ffi.new("nvmlUtilization_t *")
        self._call("nvmlDeviceGetUtilizationRates", util)
        return Utilization.from_c(util)

    def _utilization_info(self, name: str) -> UtilizationInfo:
        util = ffi.new("unsigned int *")
        period = ffi.new("unsigned int *")
        self._call(name, util, period)
        return UtilizationInfo(utilization=int(util[0]), sampling_period=int(period[0]))

    def encoder_utilization(self) -> UtilizationInfo:
        return self._utilization_info("nvmlDeviceGetEncoderUtilization")

    def decoder_utilization(self) -> UtilizationInfo:
        return self._utilization_info("nvmlDeviceGetDecoderUtilization")

    def encoder_stats(self) -> EncoderStats:
        sessions = ffi.new("unsigned int *")
        fps = ffi.new("unsigned int *")
        latency = ffi.new("unsigned int *")
        self._call("nvmlDeviceGetEncoderStats", sessions, fps, latency)
        return EncoderStats(
            session_count=int(sessions[0]),
            average_fps=int(fps[0]),
            average_latency=int(latency[0]),
        )

    def pcie_throughput(self, counter: PcieUtilCounter) -> int:
        """PCIe throughput over the last 20ms, in KB/s."""
        return self._get_uint(
            "nvmlDeviceGetPcieThroughput", PcieUtilCounter(counter).as_c()
        )

    def current_pcie_link_gen(self) -> int:
        return self._get_uint("nvmlDeviceGetCurrPcieLinkGeneration")

    def current_pcie_link_width(self) -> int:
        return self._get_uint("nvmlDeviceGetCurrPcieLinkWidth")

    def max_pcie_link_gen(self) -> int:
        return self._get_uint("nvmlDeviceGetMaxPcieLinkGeneration")

    def max_pcie_link_width(self) -> int:
        return self._get_uint("nvmlDeviceGetMaxPcieLinkWidth")

    # ==================== Clocks / performance ====================

    def clock_info(self, clock_type: Clock) -> int:
        """Current clock speed in MHz."""
        return self._get_uint("nvmlDeviceGetClockInfo", Clock(clock_type).as_c())

    def max_clock_info(self, clock_type: Clock) -> int:
        return self._get_uint("nvmlDeviceGetMaxClockInfo", Clock(clock_type).as_c())

    def clock(self, clock_type: Clock, clock_id: ClockId) -> int:
        return self._get_uint(
            "nvmlDeviceGetClock", Clock(clock_type).as_c(), ClockId(clock_id).as_c()
        )

    def set_applications_clocks(self, mem_clock: int, graphics_clock: int) -> None:
        """Set the clocks applications run at, in MHz. Requires root."""
        self._call(
            "nvmlDeviceSetApplicationsClocks",
            check_uint(mem_clock, "mem_clock"),
            check_uint(graphics_clock, "graphics_clock"),
        )

    def reset_applications_clocks(self) -> None:
        self._call("nvmlDeviceResetApplicationsClocks")

    def performance_state(self) -> PerformanceState:
        out = ffi.new("nvmlPstates_t *")
        self._call("nvmlDeviceGetPerformanceState", out)
        return PerformanceState.from_c(out[0])

    def current_throttle_reasons(self) -> ThrottleReasons:
        """Why the clocks are currently held below their maximum.

        Raises:
            IncorrectBitsError: If the driver reports a reason this package
                does not define
        """
        return ThrottleReasons.from_bits(
            self._get_ull("nvmlDeviceGetCurrentClocksThrottleReasons")
        )

    def supported_throttle_reasons(self) -> ThrottleReasons:
        return ThrottleReasons.from_bits(
            self._get_ull("nvmlDeviceGetSupportedClocksThrottleReasons")
        )

    def auto_boosted_clocks_enabled(self) -> AutoBoostClocksEnabledInfo:
        is_enabled = ffi.new("nvmlEnableState_t *")
        is_enabled_default = ffi.new("nvmlEnableState_t *")
        self._call("nvmlDeviceGetAutoBoostedClocksEnabled", is_enabled, is_enabled_default)
        return AutoBoostClocksEnabledInfo(
            is_enabled=EnableState.from_c(is_enabled[0]) is EnableState.ENABLED,
            is_enabled_default=EnableState.from_c(is_enabled_default[0])
            is EnableState.ENABLED,
        )

    # ==================== Modes ====================

    def compute_mode(self) -> ComputeMode:
        out = ffi.new("nvmlComputeMode_t *")
        self._call("nvmlDeviceGetComputeMode", out)
        return ComputeMode.from_c(out[0])

    def set_compute_mode(self, mode: ComputeMode) -> None:
        """Requires root. Not persistent across reboots."""
        self._call("nvmlDeviceSetComputeMode", ComputeMode(mode).as_c())

    def is_persistence_mode_enabled(self) -> bool:
        return self._get_enable_state("nvmlDeviceGetPersistenceMode")

    def set_persistence(self, enabled: bool) -> None:
        """Linux only. Requires root."""
        self._call("nvmlDeviceSetPersistenceMode", EnableState.from_bool(enabled).as_c())

    def is_display_connected(self) -> bool:
        """Whether a physical display is connected to any of the device's outputs."""
        return self._get_enable_state("nvmlDeviceGetDisplayMode")

    def is_display_active(self) -> bool:
        """Whether a display is initialized (memory allocated) on the device."""
        return self._get_enable_state("nvmlDeviceGetDisplayActive")

    def is_api_restricted(self, api: Api) -> bool:
        """Whether `api` requires root to call on this device."""
        return self._get_enable_state("nvmlDeviceGetAPIRestriction", Api(api).as_c())

    def gpu_operation_mode(self) -> OperationModeState:
        current = ffi.new("nvmlGpuOperationMode_t *")
        pending = ffi.new("nvmlGpuOperationMode_t *")
        self._call("nvmlDeviceGetGpuOperationMode", current, pending)
        return OperationModeState(
            current=OperationMode.from_c(current[0]),
            pending=OperationMode.from_c(pending[0]),
        )

    def driver_model(self) -> DriverModelState:
        """Current and pending driver model.

        Windows only; elsewhere NVML reports NotSupportedError.
        """
        current = ffi.new("nvmlDriverModel_t *")
        pending = ffi.new("nvmlDriverModel_t *")
        self._call("nvmlDeviceGetDriverModel", current, pending)
        return DriverModelState(
            current=DriverModel.from_c(current[0]),
            pending=DriverModel.from_c(pending[0]),
        )

    def is_ecc_enabled(self) -> EccModeState:
        current = ffi.new("nvmlEnableState_t *")
        pending = ffi.new("nvmlEnableState_t *")
        self._call("nvmlDeviceGetEccMode", current, pending)
        return EccModeState(
            currently_enabled=EnableState.from_c(current[0]) is EnableState.ENABLED,
            pending_enabled=EnableState.from_c(pending[0]) is EnableState.ENABLED,
        )

    def set_ecc(self, enabled: bool) -> None:
        """Takes effect after the next reboot. Requires root."""
        self._call("nvmlDeviceSetEccMode", EnableState.from_bool(enabled).as_c())

    def total_ecc_errors(self, error_type: MemoryErrorType, counter: EccCounter) -> int:
        return self._get_ull(
            "nvmlDeviceGetTotalEccErrors",
            MemoryErrorType(error_type).as_c(),
            EccCounter(counter).as_c(),
        )

    def clear_ecc_error_counts(self, counter: EccCounter) -> None:
        self._call("nvmlDeviceClearEccErrorCounts", EccCounter(counter).as_c())

    def retired_pages(self, cause: RetirementCause) -> List[RetiredPage]:
        """Pages retired for `cause`, with their retirement timestamps."""
        lib = self._nvml.library
        name = "nvmlDeviceGetRetiredPages_v2"
        raw_cause = RetirementCause(cause).as_c()

        count = ffi.new("unsigned int *", 0)
        status = lib.call_status(name, self._handle, raw_cause, count, ffi.NULL, ffi.NULL)
        if status == NVML_SUCCESS:
            return []
        if status != NVML_ERROR_INSUFFICIENT_SIZE:
            nvml_try(status)

        # The list may grow between the two calls.
        capacity = int(count[0]) + ARRAY_QUERY_SLACK
        count[0] = capacity
        addresses = ffi.new("unsigned long long[]", capacity)
        timestamps = ffi.new("unsigned long long[]", capacity)
        lib.call(name, self._handle, raw_cause, count, addresses, timestamps)
        return [
            RetiredPage(address=int(addresses[i]), timestamp=int(timestamps[i]))
            for i in range(min(int(count[0]), capacity))
        ]

    # ==================== Field values ====================

    def field_values(self, ids: Sequence[Union[FieldId, int]]) -> List[FieldValueSample]:
        """Read several fields in one call, in the order requested.

        A field NVML cannot read is reported through its sample's `error`;
        only a failure of the call itself raises.
        """
        field_ids = [i if isinstance(i, FieldId) else FieldId(i) for i in ids]
        if not field_ids:
            return []
        values = ffi.new("nvmlFieldValue_t[]", len(field_ids))
        for i, field_id in enumerate(field_ids):
            values[i].fieldId = field_id.id
        self._call("nvmlDeviceGetFieldValues", len(field_ids), values)
        return [FieldValueSample.from_c(values[i]) for i in range(len(field_ids))]

    # ==================== Processes ====================

    def _running_processes(self, name: str) -> List[ProcessInfo]:
        infos, count = self._nvml.library.call_array(name, "nvmlProcessInfo_t", self._handle)
        return [ProcessInfo.from_c(infos[i]) for i in range(count)]

    def running_compute_processes(self) -> List[ProcessInfo]:
        """Processes with a compute context on this device."""
        return self._running_processes("nvmlDeviceGetComputeRunningProcesses_v3")

    def running_graphics_processes(self) -> List[ProcessInfo]:
        """Processes with a graphics context on this device."""
        return self._running_processes("nvmlDeviceGetGraphicsRunningProcesses_v3")

    # ==================== Events ====================

    def register_events(self, events: EventTypes, event_set: "EventSet") -> "EventSet":
        """Register this device for `events` on `event_set`.

        Returns the event set so registrations can be chained.
        """
        self._call(
            "nvmlDeviceRegisterEvents", EventTypes.from_bits(events).bits, event_set.handle
        )
        return event_set

    def supported_event_types(self) -> EventTypes:
        return EventTypes.from_bits(self._get_ull("nvmlDeviceGetSupportedEventTypes"))

    # ==================== Sub-handles ====================

    def link_wrapper_for(self, link: int) -> NvLink:
        """NvLink accessor for one link of this device (no native call)."""
        return NvLink(self, check_uint(link, "link"))

    def _vgpu_types(self, name: str) -> List[VgpuType]:
        ids, count = self._nvml.library.call_array(name, "nvmlVgpuTypeId_t", self._handle)
        return [VgpuType(self, int(ids[i])) for i in range(count)]

    def vgpu_supported_types(self) -> List[VgpuType]:
        return self._vgpu_types("nvmlDeviceGetSupportedVgpus")

    def vgpu_creatable_types(self) -> List[VgpuType]:
        """vGPU types that can be created given the vGPUs already running."""
        return self._vgpu_types("nvmlDeviceGetCreatableVgpus")

    # ==================== Confidential compute ====================

    def confidential_compute_gpu_certificate(self) -> ConfidentialComputeGpuCertificate:
        cert = ffi.new("nvmlConfComputeGpuCertificate_t *")
        self._call("nvmlDeviceGetConfComputeGpuCertificate", cert)
        return ConfidentialComputeGpuCertificate.from_c(cert)

    def confidential_compute_gpu_attestation_report(
        self, nonce: bytes
    ) -> ConfidentialComputeGpuAttestationReport:
        """Fetch an attestation report bound to a 32-byte caller nonce."""
        if len(nonce) != NVML_CC_GPU_ATTESTATION_NONCE_SIZE:
            raise ValueError(
                f"nonce must be {NVML_CC_GPU_ATTESTATION_NONCE_SIZE} bytes, got {len(nonce)}"
            )
        report = ffi.new("nvmlConfComputeGpuAttestationReport_t *")
        ffi.memmove(report.nonce, bytes(nonce), len(nonce))
        self._call("nvmlDeviceGetConfComputeGpuAttestationReport", report)
        return ConfidentialComputeGpuAttestationReport.from_c(report)
