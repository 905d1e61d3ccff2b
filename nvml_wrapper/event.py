# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""NVML event sets.

Usage:
    with nvml.create_event_set() as events:
        device.register_events(EventTypes.PSTATE_CHANGE, events)
        data = events.wait(timeout_ms=1000)

wait() timeout semantics:
- 0 polls without blocking
- a positive value is the maximum wait in milliseconds
- None waits until an event arrives

A wait that ends without an event raises NvmlTimeoutError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from nvml_wrapper.common.bitmasks import EventTypes
from nvml_wrapper.common.error import EventSetReleasedError, NvmlTimeoutError
from nvml_wrapper.device import Device
from nvml_wrapper.ffi.bindings import (
    NVML_INSTANCE_ID_NOT_APPLICABLE,
    NVML_UINT_MAX,
    ffi,
)

if TYPE_CHECKING:
    from nvml_wrapper.nvml import Nvml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventData:
    """One event delivered by EventSet.wait()."""

    device: Device
    event_type: EventTypes
    # Xid for CRITICAL_XID_ERROR, 0 otherwise.
    event_data: int
    # None unless the event is scoped to a MIG instance.
    gpu_instance_id: Optional[int]
    compute_instance_id: Optional[int]

    @classmethod
    def from_c(cls, nvml: "Nvml", struct: Any) -> "EventData":
        gpu_instance_id = int(struct.gpuInstanceId)
        compute_instance_id = int(struct.computeInstanceId)
        return cls(
            device=Device(nvml, struct.device),
            event_type=EventTypes.from_bits(int(struct.eventType)),
            event_data=int(struct.eventData),
            gpu_instance_id=None
            if gpu_instance_id == NVML_INSTANCE_ID_NOT_APPLICABLE
            else gpu_instance_id,
            compute_instance_id=None
            if compute_instance_id == NVML_INSTANCE_ID_NOT_APPLICABLE
            else compute_instance_id,
        )


class EventSet:
    """An NVML event set. Created by Nvml.create_event_set()."""

    def __init__(self, nvml: "Nvml", handle: Any):
        self._nvml = nvml
        self._handle = handle
        self._released = False

    def __repr__(self) -> str:
        state = "released" if self._released else repr(self._handle)
        return f"EventSet({state})"

    def __enter__(self) -> "EventSet":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.release()

    @property
    def is_released(self) -> bool:
        return self._released

    @property
    def handle(self) -> Any:
        """The raw `nvmlEventSet_t`.

        Raises:
            EventSetReleasedError: If release() has been called
        """
        if self._released:
            raise EventSetReleasedError()
        return self._handle

    def wait(self, timeout_ms: Optional[int] = None) -> EventData:
        """Block until an event arrives or the timeout expires.

        Args:
            timeout_ms: Maximum wait in milliseconds; 0 polls, None waits
                indefinitely

        Raises:
            ValueError: If timeout_ms is negative or exceeds the native maximum
            NvmlTimeoutError: If no event arrived in time
            EventSetReleasedError: If the set has been released
        """
        if timeout_ms is not None and not 0 <= timeout_ms <= NVML_UINT_MAX:
            raise ValueError(f"timeout_ms must be in [0, {NVML_UINT_MAX}], got {timeout_ms}")

        data = ffi.new("nvmlEventData_t *")
        if timeout_ms is not None:
            self._nvml.library.call("nvmlEventSetWait_v2", self.handle, data, int(timeout_ms))
            return EventData.from_c(self._nvml, data)

        while True:
            try:
                self._nvml.library.call(
                    "nvmlEventSetWait_v2", self.handle, data, NVML_UINT_MAX
                )
            except NvmlTimeoutError:
                logger.debug("Event wait chunk expired, waiting again")
                continue
            return EventData.from_c(self._nvml, data)

    def release(self) -> None:
        """Free the native event set. Idempotent.

        An event set whose library is already unloaded was freed by
        nvmlShutdown and is only marked released. If nvmlEventSetFree fails
        the set stays unreleased and release() may be retried.
        """
        if self._released:
            return
        if self._nvml.is_loaded:
            self._nvml.library.call("nvmlEventSetFree", self._handle)
        self._released = True
