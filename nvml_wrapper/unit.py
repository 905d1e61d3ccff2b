# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""S-class unit queries.

Units are the enclosures of S-class systems (e.g. the S1070). On any other
system nvmlUnitGetCount reports 0 and no Unit can be obtained.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List

from nvml_wrapper.common.enums import LedColor, UnitTemperatureReading
from nvml_wrapper.common.structs import (
    FanInfo,
    LedState,
    PsuInfo,
    UnitInfo,
    fan_infos_from_c,
)
from nvml_wrapper.device import Device
from nvml_wrapper.ffi.bindings import ffi

if TYPE_CHECKING:
    from nvml_wrapper.nvml import Nvml


class Unit:
    def __init__(self, nvml: "Nvml", handle: Any):
        self._nvml = nvml
        self._handle = handle

    def __repr__(self) -> str:
        return f"Unit(handle={self._handle!r})"

    @property
    def nvml(self) -> "Nvml":
        return self._nvml

    @property
    def handle(self) -> Any:
        return self._handle

    def _call(self, name: str, *args: Any) -> None:
        self._nvml.library.call(name, self._handle, *args)

    def info(self) -> UnitInfo:
        info = ffi.new("nvmlUnitInfo_t *")
        self._call("nvmlUnitGetUnitInfo", info)
        return UnitInfo.from_c(info)

    def led_state(self) -> LedState:
        state = ffi.new("nvmlLedState_t *")
        self._call("nvmlUnitGetLedState", state)
        return LedState.from_c(state)

    def set_led_color(self, color: LedColor) -> None:
        """Set the LED color. Requires root."""
        self._call("nvmlUnitSetLedState", LedColor(color).as_c())

    def psu_info(self) -> PsuInfo:
        psu = ffi.new("nvmlPSUInfo_t *")
        self._call("nvmlUnitGetPsuInfo", psu)
        return PsuInfo.from_c(psu)

    def temperature(self, reading: UnitTemperatureReading) -> int:
        """Temperature in °C at one of the unit's sensors."""
        out = ffi.new("unsigned int *")
        self._call("nvmlUnitGetTemperature", UnitTemperatureReading(reading).as_c(), out)
        return int(out[0])

    def fan_info(self) -> List[FanInfo]:
        speeds = ffi.new("nvmlUnitFanSpeeds_t *")
        self._call("nvmlUnitGetFanSpeedInfo", speeds)
        return fan_infos_from_c(speeds)

    def devices(self) -> List[Device]:
        """Devices housed in this unit."""
        handles, count = self._nvml.library.call_array(
            "nvmlUnitGetDevices", "nvmlDevice_t", self._handle
        )
        return [Device(self._nvml, handles[i]) for i in range(count)]
