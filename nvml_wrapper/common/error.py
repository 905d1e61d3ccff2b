# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""NVML error types and status-code translation.

Every nonzero `nvmlReturn_t` maps to exactly one exception class. Codes the
header does not define map to `UnknownError`, which still carries the raw
value, so `error_for_code(code).code == code` holds for every nonzero code.

Hierarchy:
- NvmlError
  - LibraryLoadError, FailedToLoadSymbolError      (load time)
  - NvmlCallError and one subclass per status code  (call time)
  - Utf8Error, UnexpectedVariantError, IncorrectBitsError  (decoding)
  - LibraryUnloadedError, EventSetReleasedError     (handle lifecycle)
"""

from __future__ import annotations

from enum import IntEnum
from typing import Dict, Optional, Type


class NvmlReturn(IntEnum):
    """Documented values of `nvmlReturn_t`."""

    SUCCESS = 0
    UNINITIALIZED = 1
    INVALID_ARGUMENT = 2
    NOT_SUPPORTED = 3
    NO_PERMISSION = 4
    ALREADY_INITIALIZED = 5
    NOT_FOUND = 6
    INSUFFICIENT_SIZE = 7
    INSUFFICIENT_POWER = 8
    DRIVER_NOT_LOADED = 9
    TIMEOUT = 10
    IRQ_ISSUE = 11
    LIBRARY_NOT_FOUND = 12
    FUNCTION_NOT_FOUND = 13
    CORRUPTED_INFOROM = 14
    GPU_IS_LOST = 15
    RESET_REQUIRED = 16
    OPERATING_SYSTEM = 17
    LIB_RM_VERSION_MISMATCH = 18
    IN_USE = 19
    MEMORY = 20
    NO_DATA = 21
    VGPU_ECC_NOT_SUPPORTED = 22
    INSUFFICIENT_RESOURCES = 23
    FREQ_NOT_SUPPORTED = 24
    ARGUMENT_VERSION_MISMATCH = 25
    DEPRECATED = 26
    NOT_READY = 27
    GPU_NOT_FOUND = 28
    INVALID_STATE = 29
    UNKNOWN = 999


class NvmlError(Exception):
    """Base class for everything this package raises."""

    pass


# ==================== Load-time errors ====================


class LibraryLoadError(NvmlError):
    """The NVML shared library could not be opened."""

    def __init__(self, message: str, candidates: Optional[list] = None):
        super().__init__(message)
        self.candidates = list(candidates or [])


class FailedToLoadSymbolError(NvmlError):
    """A native entry point is missing from the loaded library."""

    def __init__(self, symbol: str):
        super().__init__(f"Symbol {symbol} not found in the loaded NVML library")
        self.symbol = symbol


# ==================== Lifecycle errors ====================


class LibraryUnloadedError(NvmlError):
    """A handle was used after its owning library was shut down."""

    def __init__(self, symbol: Optional[str] = None):
        if symbol:
            message = f"Cannot call {symbol}: the NVML library has been unloaded"
        else:
            message = "The NVML library has been unloaded"
        super().__init__(message)
        self.symbol = symbol


class EventSetReleasedError(NvmlError):
    """An event set was used after release()."""

    def __init__(self):
        super().__init__("The event set has already been released")


# ==================== Decoding errors ====================


class Utf8Error(NvmlError):
    """A string returned by NVML is not valid UTF-8."""

    def __init__(self, raw: bytes, cause: UnicodeDecodeError):
        super().__init__(f"NVML returned a string that is not valid UTF-8: {cause}")
        self.raw = raw


class UnexpectedVariantError(NvmlError):
    """NVML returned an enum value with no corresponding variant."""

    def __init__(self, raw: int, enum_name: str = ""):
        target = f" for {enum_name}" if enum_name else ""
        super().__init__(f"Unexpected enum variant {raw}{target}")
        self.raw = raw
        self.enum_name = enum_name


class IncorrectBitsError(NvmlError):
    """NVML returned a bitmask with bits that no flag defines."""

    def __init__(self, bits: int, flag_name: str = ""):
        target = f" for {flag_name}" if flag_name else ""
        super().__init__(f"Unrecognized bits {bits:#x}{target}")
        self.bits = bits
        self.flag_name = flag_name


# ==================== Call-time errors ====================


class NvmlCallError(NvmlError):
    """A native call returned a non-success status code."""

    ret: Optional[NvmlReturn] = None
    description = "Unknown error"

    def __init__(self, code: Optional[int] = None):
        if code is None:
            code = int(self.ret) if self.ret is not None else int(NvmlReturn.UNKNOWN)
        super().__init__(f"{self.description} (nvmlReturn_t {code})")
        self.code = code


class UninitializedError(NvmlCallError):
    ret = NvmlReturn.UNINITIALIZED
    description = "NVML was not first initialized"


class InvalidArgumentError(NvmlCallError):
    ret = NvmlReturn.INVALID_ARGUMENT
    description = "A supplied argument is invalid"


class NotSupportedError(NvmlCallError):
    ret = NvmlReturn.NOT_SUPPORTED
    description = "The requested operation is not available on the target device"


class NoPermissionError(NvmlCallError):
    ret = NvmlReturn.NO_PERMISSION
    description = "The current user does not have permission for the operation"


class AlreadyInitializedError(NvmlCallError):
    ret = NvmlReturn.ALREADY_INITIALIZED
    description = "NVML has already been initialized"


class NotFoundError(NvmlCallError):
    ret = NvmlReturn.NOT_FOUND
    description = "A query to find an object was unsuccessful"


class InsufficientSizeError(NvmlCallError):
    ret = NvmlReturn.INSUFFICIENT_SIZE
    description = "An input argument is not large enough"

    def __init__(self, code: Optional[int] = None, required_size: Optional[int] = None):
        super().__init__(code)
        self.required_size = required_size


class InsufficientPowerError(NvmlCallError):
    ret = NvmlReturn.INSUFFICIENT_POWER
    description = "A device's external power cables are not properly attached"


class DriverNotLoadedError(NvmlCallError):
    ret = NvmlReturn.DRIVER_NOT_LOADED
    description = "The NVIDIA driver is not loaded"


class NvmlTimeoutError(NvmlCallError, TimeoutError):
    ret = NvmlReturn.TIMEOUT
    description = "The provided timeout has passed"


class IrqIssueError(NvmlCallError):
    ret = NvmlReturn.IRQ_ISSUE
    description = "The NVIDIA kernel detected an interrupt issue with a GPU"


class SharedLibraryNotFoundError(NvmlCallError):
    ret = NvmlReturn.LIBRARY_NOT_FOUND
    description = "NVML could not find or load one of its own libraries"


class FunctionNotFoundError(NvmlCallError):
    ret = NvmlReturn.FUNCTION_NOT_FOUND
    description = "The local NVML version does not implement this function"


class CorruptedInfoROMError(NvmlCallError):
    ret = NvmlReturn.CORRUPTED_INFOROM
    description = "The infoROM is corrupted"


class GpuLostError(NvmlCallError):
    ret = NvmlReturn.GPU_IS_LOST
    description = "The GPU has fallen off the bus or has otherwise become inaccessible"


class ResetRequiredError(NvmlCallError):
    ret = NvmlReturn.RESET_REQUIRED
    description = "The GPU requires a reset before it can be used again"


class OperatingSystemError(NvmlCallError):
    ret = NvmlReturn.OPERATING_SYSTEM
    description = "The GPU control device has been blocked by the operating system"


class LibRmVersionMismatchError(NvmlCallError):
    ret = NvmlReturn.LIB_RM_VERSION_MISMATCH
    description = "The RM detected a driver/library version mismatch"


class InUseError(NvmlCallError):
    ret = NvmlReturn.IN_USE
    description = "The operation cannot be performed because the GPU is currently in use"


class InsufficientMemoryError(NvmlCallError):
    ret = NvmlReturn.MEMORY
    description = "Insufficient memory"


class NoDataError(NvmlCallError):
    ret = NvmlReturn.NO_DATA
    description = "No data"


class VgpuEccNotSupportedError(NvmlCallError):
    ret = NvmlReturn.VGPU_ECC_NOT_SUPPORTED
    description = "The requested vGPU operation is not available because ECC is enabled"


class InsufficientResourcesError(NvmlCallError):
    ret = NvmlReturn.INSUFFICIENT_RESOURCES
    description = "Ran out of critical resources, other than memory"


class FreqNotSupportedError(NvmlCallError):
    ret = NvmlReturn.FREQ_NOT_SUPPORTED
    description = "The requested frequency is not supported"


class ArgumentVersionMismatchError(NvmlCallError):
    ret = NvmlReturn.ARGUMENT_VERSION_MISMATCH
    description = "The provided version is invalid or unsupported"


class DeprecatedError(NvmlCallError):
    ret = NvmlReturn.DEPRECATED
    description = "The requested functionality has been deprecated"


class NotReadyError(NvmlCallError):
    ret = NvmlReturn.NOT_READY
    description = "The system is not ready for the request"


class GpuNotFoundError(NvmlCallError):
    ret = NvmlReturn.GPU_NOT_FOUND
    description = "No GPUs were found"


class InvalidStateError(NvmlCallError):
    ret = NvmlReturn.INVALID_STATE
    description = "The resource is in an invalid state"


class UnknownError(NvmlCallError):
    """NVML_ERROR_UNKNOWN, or a code this package does not recognize."""

    ret = NvmlReturn.UNKNOWN
    description = "An internal driver error occurred"


_CODE_TO_ERROR: Dict[int, Type[NvmlCallError]] = {
    cls.ret.value: cls
    for cls in (
        UninitializedError,
        InvalidArgumentError,
        NotSupportedError,
        NoPermissionError,
        AlreadyInitializedError,
        NotFoundError,
        InsufficientSizeError,
        InsufficientPowerError,
        DriverNotLoadedError,
        NvmlTimeoutError,
        IrqIssueError,
        SharedLibraryNotFoundError,
        FunctionNotFoundError,
        CorruptedInfoROMError,
        GpuLostError,
        ResetRequiredError,
        OperatingSystemError,
        LibRmVersionMismatchError,
        InUseError,
        InsufficientMemoryError,
        NoDataError,
        VgpuEccNotSupportedError,
        InsufficientResourcesError,
        FreqNotSupportedError,
        ArgumentVersionMismatchError,
        DeprecatedError,
        NotReadyError,
        GpuNotFoundError,
        InvalidStateError,
        UnknownError,
    )
}


def error_for_code(code: int) -> NvmlCallError:
    """Translate a nonzero NVML status code into an exception instance.

    Args:
        code: Raw `nvmlReturn_t` value

    Returns:
        The matching NvmlCallError subclass instance, or UnknownError
        carrying `code` if the value is not a documented status.

    Raises:
        ValueError: If `code` is NVML_SUCCESS
    """
    code = int(code)
    if code == NvmlReturn.SUCCESS:
        raise ValueError("NVML_SUCCESS is not an error")
    cls = _CODE_TO_ERROR.get(code, UnknownError)
    return cls(code)


def nvml_try(code: int) -> None:
    """Raise the typed error for `code` unless it is NVML_SUCCESS."""
    if code != NvmlReturn.SUCCESS:
        raise error_for_code(code)
