# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Per-link NvLink queries."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from nvml_wrapper.common.enums import EnableState, NvLinkCapability, NvLinkErrorCounter
from nvml_wrapper.common.structs import PciInfo
from nvml_wrapper.ffi.bindings import ffi

if TYPE_CHECKING:
    from nvml_wrapper.device import Device


class NvLink:
    """One NvLink of a device. Obtain via Device.link_wrapper_for()."""

    def __init__(self, device: "Device", link: int):
        self._device = device
        self._link = link

    def __repr__(self) -> str:
        return f"NvLink(device={self._device!r}, link={self._link})"

    @property
    def device(self) -> "Device":
        return self._device

    @property
    def link(self) -> int:
        return self._link

    def _call(self, name: str, *args: Any) -> None:
        self._device.nvml.library.call(name, self._device.handle, self._link, *args)

    def is_active(self) -> bool:
        out = ffi.new("nvmlEnableState_t *")
        self._call("nvmlDeviceGetNvLinkState", out)
        return EnableState.from_c(out[0]) is EnableState.ENABLED

    def version(self) -> int:
        out = ffi.new("unsigned int *")
        self._call("nvmlDeviceGetNvLinkVersion", out)
        return int(out[0])

    def has_capability(self, capability: NvLinkCapability) -> bool:
        out = ffi.new("unsigned int *")
        self._call("nvmlDeviceGetNvLinkCapability", NvLinkCapability(capability).as_c(), out)
        return out[0] != 0

    def remote_pci_info(self) -> PciInfo:
        """PCI information of the device on the other end of this link."""
        pci = ffi.new("nvmlPciInfo_t *")
        self._call("nvmlDeviceGetNvLinkRemotePciInfo_v2", pci)
        return PciInfo.from_c(pci)

    def error_counter(self, counter: NvLinkErrorCounter) -> int:
        out = ffi.new("unsigned long long *")
        self._call("nvmlDeviceGetNvLinkErrorCounter", NvLinkErrorCounter(counter).as_c(), out)
        return int(out[0])

    def reset_error_counters(self) -> None:
        """Reset every error counter of this link. Requires root."""
        self._call("nvmlDeviceResetNvLinkErrorCounters")
