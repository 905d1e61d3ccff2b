# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Typed wrappers for NVML's C enums.

Each enum maps one-to-one onto the values of its C counterpart. Decoding a
value NVML returns goes through `from_c()`, which raises
UnexpectedVariantError for anything the header does not define.
"""

from __future__ import annotations

from enum import IntEnum

from nvml_wrapper.common.error import UnexpectedVariantError


class NvmlEnum(IntEnum):
    """Base for enums that round-trip to a C integer."""

    @classmethod
    def from_c(cls, raw: int):
        try:
            return cls(int(raw))
        except ValueError:
            raise UnexpectedVariantError(int(raw), cls.__name__) from None

    def as_c(self) -> int:
        return int(self.value)


class EnableState(NvmlEnum):
    """nvmlEnableState_t"""

    DISABLED = 0
    ENABLED = 1

    @classmethod
    def from_bool(cls, enabled: bool) -> "EnableState":
        return cls.ENABLED if enabled else cls.DISABLED


class Brand(NvmlEnum):
    """nvmlBrandType_t"""

    UNKNOWN = 0
    QUADRO = 1
    TESLA = 2
    NVS = 3
    GRID = 4
    GEFORCE = 5
    TITAN = 6
    NVIDIA_VAPPS = 7
    NVIDIA_VPC = 8
    NVIDIA_VCS = 9
    NVIDIA_VWS = 10
    NVIDIA_CLOUD_GAMING = 11
    QUADRO_RTX = 12
    NVIDIA_RTX = 13
    NVIDIA = 14
    GEFORCE_RTX = 15
    TITAN_RTX = 16


class DeviceArchitecture(NvmlEnum):
    """nvmlDeviceArchitecture_t"""

    KEPLER = 2
    MAXWELL = 3
    PASCAL = 4
    VOLTA = 5
    TURING = 6
    AMPERE = 7
    ADA = 8
    HOPPER = 9
    BLACKWELL = 10
    UNKNOWN = 0xFFFFFFFF


class TemperatureSensor(NvmlEnum):
    GPU = 0


class TemperatureThreshold(NvmlEnum):
    """nvmlTemperatureThresholds_t"""

    SHUTDOWN = 0
    SLOWDOWN = 1
    MEM_MAX = 2
    GPU_MAX = 3
    ACOUSTIC_MIN = 4
    ACOUSTIC_CURR = 5
    ACOUSTIC_MAX = 6


class Clock(NvmlEnum):
    """nvmlClockType_t"""

    GRAPHICS = 0
    SM = 1
    MEMORY = 2
    VIDEO = 3


class ClockId(NvmlEnum):
    """nvmlClockId_t"""

    CURRENT = 0
    TARGET_APP_CLOCK = 1
    DEFAULT_APP_CLOCK = 2
    CUSTOMER_BOOST_MAX = 3


class ComputeMode(NvmlEnum):
    """nvmlComputeMode_t"""

    DEFAULT = 0
    EXCLUSIVE_THREAD = 1  # deprecated upstream
    PROHIBITED = 2
    EXCLUSIVE_PROCESS = 3


class PerformanceState(NvmlEnum):
    """nvmlPstates_t; P0 is maximum performance."""

    P0 = 0
    P1 = 1
    P2 = 2
    P3 = 3
    P4 = 4
    P5 = 5
    P6 = 6
    P7 = 7
    P8 = 8
    P9 = 9
    P10 = 10
    P11 = 11
    P12 = 12
    P13 = 13
    P14 = 14
    P15 = 15
    UNKNOWN = 32


class MemoryErrorType(NvmlEnum):
    """nvmlMemoryErrorType_t"""

    CORRECTED = 0
    UNCORRECTED = 1


class EccCounter(NvmlEnum):
    """nvmlEccCounterType_t"""

    VOLATILE = 0
    AGGREGATE = 1


class InfoRom(NvmlEnum):
    """nvmlInforomObject_t"""

    OEM = 0
    ECC = 1
    POWER = 2


class OperationMode(NvmlEnum):
    """nvmlGpuOperationMode_t"""

    ALL_ON = 0
    COMPUTE = 1
    LOW_DP = 2


class Api(NvmlEnum):
    """nvmlRestrictedAPI_t"""

    APPLICATION_CLOCKS = 0
    AUTO_BOOSTED_CLOCKS = 1


class PcieUtilCounter(NvmlEnum):
    """nvmlPcieUtilCounter_t"""

    SEND = 0
    RECEIVE = 1


class RetirementCause(NvmlEnum):
    """nvmlPageRetirementCause_t"""

    MULTIPLE_SINGLE_BIT_ECC_ERRORS = 0
    DOUBLE_BIT_ECC_ERROR = 1


class LedColor(NvmlEnum):
    """nvmlLedColor_t"""

    GREEN = 0
    AMBER = 1


class FanState(NvmlEnum):
    """nvmlFanState_t"""

    NORMAL = 0
    FAILED = 1


class UnitTemperatureReading(NvmlEnum):
    """Sensor selector for nvmlUnitGetTemperature."""

    INTAKE = 0
    EXHAUST = 1
    BOARD = 2


class NvLinkCapability(NvmlEnum):
    """nvmlNvLinkCapability_t"""

    P2P_SUPPORTED = 0
    SYSTEM_MEMORY_ACCESS = 1
    P2P_ATOMICS = 2
    SYSTEM_MEMORY_ATOMICS = 3
    SLI_BRIDGE = 4
    VALID = 5


class NvLinkErrorCounter(NvmlEnum):
    """nvmlNvLinkErrorCounter_t"""

    DL_REPLAY = 0
    DL_RECOVERY = 1
    DL_CRC_FLIT = 2
    DL_CRC_DATA = 3


class VgpuCapability(NvmlEnum):
    """nvmlVgpuCapability_t"""

    NVLINK_P2P = 0
    GPUDIRECT = 1
    MULTI_VGPU_EXCLUSIVE = 2
    EXCLUSIVE_TYPE = 3
    EXCLUSIVE_SIZE = 4


class ConfidentialComputeCpuCapabilities(NvmlEnum):
    NONE = 0
    AMD_SEV = 1
    INTEL_TDX = 2


class ConfidentialComputeGpuCapabilities(NvmlEnum):
    NOT_CAPABLE = 0
    CAPABLE = 1


class DriverModel(NvmlEnum):
    """nvmlDriverModel_t (Windows only)"""

    WDDM = 0
    WDM = 1
    MCDM = 2


class FieldValueType(NvmlEnum):
    """nvmlValueType_t: which member of nvmlValue_t a field value uses."""

    DOUBLE = 0
    UNSIGNED_INT = 1
    UNSIGNED_LONG = 2
    UNSIGNED_LONG_LONG = 3
    SIGNED_LONG_LONG = 4
    SIGNED_INT = 5
