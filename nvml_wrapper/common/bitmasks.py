# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Flag sets for NVML bitmask values.

Flags combine with `|`, `&`, `~` and `in` like any IntFlag. Converting a raw
bitmask goes through `from_bits()`, which rejects bits no flag defines.
`from_bits_truncate()` drops them instead, for callers that opt in.
"""

from __future__ import annotations

from enum import IntFlag
from functools import reduce
from operator import or_

from nvml_wrapper.common.error import IncorrectBitsError


class NvmlFlag(IntFlag):
    """Base for bitmask types that round-trip to a C integer."""

    @classmethod
    def all_bits(cls) -> int:
        return reduce(or_, (member.value for member in cls.__members__.values()), 0)

    @classmethod
    def from_bits(cls, bits: int):
        bits = int(bits)
        if bits < 0 or bits & ~cls.all_bits():
            raise IncorrectBitsError(bits, cls.__name__)
        return cls(bits)

    @classmethod
    def from_bits_truncate(cls, bits: int):
        return cls(int(bits) & cls.all_bits())

    @property
    def bits(self) -> int:
        return int(self.value)


class InitFlags(NvmlFlag):
    """Flags accepted by nvmlInitWithFlags."""

    NONE = 0
    # Don't fail initialization when no GPUs are found.
    NO_GPUS = 0x1
    # Don't attach GPUs during initialization.
    NO_ATTACH = 0x2


class ThrottleReasons(NvmlFlag):
    """Reasons the GPU clocks are being held below their maximum."""

    NONE = 0
    GPU_IDLE = 0x1
    APPLICATIONS_CLOCKS_SETTING = 0x2
    SW_POWER_CAP = 0x4
    HW_SLOWDOWN = 0x8
    SYNC_BOOST = 0x10
    SW_THERMAL_SLOWDOWN = 0x20
    HW_THERMAL_SLOWDOWN = 0x40
    HW_POWER_BRAKE_SLOWDOWN = 0x80
    DISPLAY_CLOCK_SETTING = 0x100


class EventTypes(NvmlFlag):
    """Event kinds that can be registered on an event set."""

    NONE = 0
    SINGLE_BIT_ECC_ERROR = 0x1
    DOUBLE_BIT_ECC_ERROR = 0x2
    PSTATE_CHANGE = 0x4
    CRITICAL_XID_ERROR = 0x8
    CLOCK_CHANGE = 0x10
    POWER_SOURCE_CHANGE = 0x80
    MIG_CONFIG_CHANGE = 0x100
