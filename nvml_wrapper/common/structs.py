# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Owned values returned by NVML queries.

Each dataclass is an immutable copy of a native output struct. The
`from_c()` constructors read a filled-in cffi struct and never keep a
reference to it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Union

from nvml_wrapper.common.enums import (
    ConfidentialComputeCpuCapabilities,
    ConfidentialComputeGpuCapabilities,
    DriverModel,
    FanState,
    FieldValueType,
    LedColor,
    OperationMode,
)
from nvml_wrapper.common.error import NvmlCallError, error_for_code
from nvml_wrapper.common.utils import check_uint, copy_bounded_bytes, decode_c_string
from nvml_wrapper.ffi.bindings import (
    NVML_INSTANCE_ID_NOT_APPLICABLE,
    NVML_SUCCESS,
    NVML_VALUE_NOT_AVAILABLE_ULL,
)


def _instance_id(raw: int) -> Optional[int]:
    return None if raw == NVML_INSTANCE_ID_NOT_APPLICABLE else int(raw)


# ==================== Memory / utilization ====================


@dataclass(frozen=True)
class MemoryInfo:
    """Frame buffer memory, in bytes."""

    total: int
    free: int
    used: int

    @classmethod
    def from_c(cls, struct: Any) -> "MemoryInfo":
        return cls(total=int(struct.total), free=int(struct.free), used=int(struct.used))


@dataclass(frozen=True)
class BAR1MemoryInfo:
    """BAR1 memory, in bytes."""

    total: int
    free: int
    used: int

    @classmethod
    def from_c(cls, struct: Any) -> "BAR1MemoryInfo":
        return cls(
            total=int(struct.bar1Total),
            free=int(struct.bar1Free),
            used=int(struct.bar1Used),
        )


@dataclass(frozen=True)
class Utilization:
    """Percent of time over the last sample period the GPU/memory was busy."""

    gpu: int
    memory: int

    @classmethod
    def from_c(cls, struct: Any) -> "Utilization":
        return cls(gpu=int(struct.gpu), memory=int(struct.memory))


@dataclass(frozen=True)
class UtilizationInfo:
    """Returned from Device.encoder_utilization() and decoder_utilization()."""

    utilization: int
    # Sampling period in μs.
    sampling_period: int


@dataclass(frozen=True)
class EncoderStats:
    session_count: int
    average_fps: int
    # Encode latency in μs.
    average_latency: int


# ==================== Identity ====================


@dataclass(frozen=True)
class PciInfo:
    """PCI attributes of a device (nvmlPciInfo_t)."""

    bus: int
    bus_id: str
    domain: int
    device: int
    pci_device_id: int
    pci_sub_system_id: int

    @classmethod
    def from_c(cls, struct: Any) -> "PciInfo":
        return cls(
            bus=int(struct.bus),
            bus_id=decode_c_string(struct.busId),
            domain=int(struct.domain),
            device=int(struct.device),
            pci_device_id=int(struct.pciDeviceId),
            pci_sub_system_id=int(struct.pciSubSystemId),
        )


@dataclass(frozen=True)
class CudaComputeCapability:
    major: int
    minor: int


@dataclass(frozen=True)
class ProcessInfo:
    """A process with a context on a device."""

    pid: int
    # None when NVML cannot report it (e.g. on Windows in WDDM mode).
    used_gpu_memory: Optional[int]
    gpu_instance_id: Optional[int]
    compute_instance_id: Optional[int]

    @classmethod
    def from_c(cls, struct: Any) -> "ProcessInfo":
        used = int(struct.usedGpuMemory)
        return cls(
            pid=int(struct.pid),
            used_gpu_memory=None if used == NVML_VALUE_NOT_AVAILABLE_ULL else used,
            gpu_instance_id=_instance_id(struct.gpuInstanceId),
            compute_instance_id=_instance_id(struct.computeInstanceId),
        )


# ==================== Clocks / power / modes ====================


@dataclass(frozen=True)
class AutoBoostClocksEnabledInfo:
    """Returned from Device.auto_boosted_clocks_enabled()."""

    is_enabled: bool
    # The GPU reverts to this when no applications are using it.
    is_enabled_default: bool


@dataclass(frozen=True)
class PowerManagementConstraints:
    """Allowed power limit range, in milliwatts."""

    min_limit: int
    max_limit: int


@dataclass(frozen=True)
class EccModeState:
    currently_enabled: bool
    pending_enabled: bool


@dataclass(frozen=True)
class OperationModeState:
    current: OperationMode
    pending: OperationMode


@dataclass(frozen=True)
class RetiredPage:
    """A retired frame buffer page.

    `address` is the hardware address; it does not match the CUDA virtual
    address but does match the address reported in XID 63.
    """

    address: int
    timestamp: int


@dataclass(frozen=True)
class DriverModelState:
    """Returned from Device.driver_model()."""

    current: DriverModel
    pending: DriverModel


# ==================== Field values ====================


@dataclass(frozen=True)
class FieldId:
    """An NVML field id; see the NVML_FI_DEV_* constants in ffi.bindings."""

    id: int

    def __post_init__(self):
        check_uint(self.id, "field id")


_FIELD_VALUE_MEMBERS = {
    FieldValueType.DOUBLE: "dVal",
    FieldValueType.UNSIGNED_INT: "uiVal",
    FieldValueType.UNSIGNED_LONG: "ulVal",
    FieldValueType.UNSIGNED_LONG_LONG: "ullVal",
    FieldValueType.SIGNED_LONG_LONG: "sllVal",
    FieldValueType.SIGNED_INT: "siVal",
}


@dataclass(frozen=True)
class FieldValueSample:
    """One entry of Device.field_values().

    Each field carries its own status: a field NVML could not read has
    `error` set and `value` None, without failing the whole query.
    """

    field: FieldId
    scope_id: int
    # CPU timestamp of the sample, in μs since the epoch.
    timestamp: int
    latency_usec: int
    value: Optional[Union[int, float]]
    error: Optional[NvmlCallError]

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def from_c(cls, struct: Any) -> "FieldValueSample":
        status = int(struct.nvmlReturn)
        value = None
        error = None
        if status == NVML_SUCCESS:
            value_type = FieldValueType.from_c(struct.valueType)
            raw = getattr(struct.value, _FIELD_VALUE_MEMBERS[value_type])
            value = float(raw) if value_type == FieldValueType.DOUBLE else int(raw)
        else:
            error = error_for_code(status)
        return cls(
            field=FieldId(int(struct.fieldId)),
            scope_id=int(struct.scopeId),
            timestamp=int(struct.timestamp),
            latency_usec=int(struct.latencyUsec),
            value=value,
            error=error,
        )


# ==================== Units ====================


@dataclass(frozen=True)
class UnitInfo:
    name: str
    id: str
    serial: str
    firmware_version: str

    @classmethod
    def from_c(cls, struct: Any) -> "UnitInfo":
        return cls(
            name=decode_c_string(struct.name),
            id=decode_c_string(struct.id),
            serial=decode_c_string(struct.serial),
            firmware_version=decode_c_string(struct.firmwareVersion),
        )


@dataclass(frozen=True)
class LedState:
    color: LedColor
    # Explanation for the current color; empty for GREEN.
    cause: str

    @classmethod
    def from_c(cls, struct: Any) -> "LedState":
        return cls(color=LedColor.from_c(struct.color), cause=decode_c_string(struct.cause))


@dataclass(frozen=True)
class PsuInfo:
    """Power supply readings: current in A, voltage in V, power in W."""

    state: str
    current: int
    voltage: int
    power: int

    @classmethod
    def from_c(cls, struct: Any) -> "PsuInfo":
        return cls(
            state=decode_c_string(struct.state),
            current=int(struct.current),
            voltage=int(struct.voltage),
            power=int(struct.power),
        )


@dataclass(frozen=True)
class FanInfo:
    speed: int
    state: FanState


def fan_infos_from_c(struct: Any) -> List[FanInfo]:
    """Copy the populated entries of an nvmlUnitFanSpeeds_t."""
    count = min(int(struct.count), len(struct.fans))
    return [
        FanInfo(speed=int(struct.fans[i].speed), state=FanState.from_c(struct.fans[i].state))
        for i in range(count)
    ]


# ==================== Confidential compute ====================


@dataclass(frozen=True)
class ConfidentialComputeCapabilities:
    cpu_caps: ConfidentialComputeCpuCapabilities
    gpus_caps: ConfidentialComputeGpuCapabilities

    @classmethod
    def from_c(cls, struct: Any) -> "ConfidentialComputeCapabilities":
        return cls(
            cpu_caps=ConfidentialComputeCpuCapabilities.from_c(struct.cpuCaps),
            gpus_caps=ConfidentialComputeGpuCapabilities.from_c(struct.gpusCaps),
        )


@dataclass(frozen=True)
class ConfidentialComputeGpuCertificate:
    """Certificate chains copied out of their fixed-size native buffers."""

    cert_chain: bytes
    attestation_cert_chain: bytes

    @classmethod
    def from_c(cls, struct: Any) -> "ConfidentialComputeGpuCertificate":
        return cls(
            cert_chain=copy_bounded_bytes(struct.certChain, struct.certChainSize),
            attestation_cert_chain=copy_bounded_bytes(
                struct.attestationCertChain, struct.attestationCertChainSize
            ),
        )


@dataclass(frozen=True)
class ConfidentialComputeGpuAttestationReport:
    attestation_report: bytes
    # None when the driver did not produce a CEC report.
    cec_attestation_report: Optional[bytes]

    @classmethod
    def from_c(cls, struct: Any) -> "ConfidentialComputeGpuAttestationReport":
        cec = None
        if struct.isCecAttestationReportPresent:
            cec = copy_bounded_bytes(
                struct.cecAttestationReport, struct.cecAttestationReportSize
            )
        return cls(
            attestation_report=copy_bounded_bytes(
                struct.attestationReport, struct.attestationReportSize
            ),
            cec_attestation_report=cec,
        )
