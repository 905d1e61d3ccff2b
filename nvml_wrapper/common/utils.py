"""Helpers for moving values across the cffi boundary."""

from __future__ import annotations

from typing import Any

from nvml_wrapper.common.error import Utf8Error
from nvml_wrapper.ffi.bindings import NVML_UINT_MAX, ffi


def decode_c_string(buf: Any) -> str:
    """Copy a NUL-terminated char array into an owned str.

    Reading stops at the first NUL or at the end of the array, whichever
    comes first, so an unterminated buffer is never overrun.

    Raises:
        Utf8Error: If the bytes are not valid UTF-8
    """
    raw = ffi.string(buf)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise Utf8Error(raw, e) from e


def encode_c_string(text: str) -> Any:
    """Build a NUL-terminated char array from `text`.

    Raises:
        ValueError: If `text` contains an interior NUL
    """
    data = text.encode("utf-8")
    if b"\x00" in data:
        raise ValueError(f"String contains an interior NUL byte: {text!r}")
    return ffi.new("char[]", data)


def copy_bounded_bytes(array: Any, size: int) -> bytes:
    """Copy the first `size` bytes of a fixed-size unsigned char array.

    `size` comes from the driver; it is clamped to the array length.
    """
    size = max(0, min(int(size), len(array)))
    return bytes(ffi.buffer(array, size))


def check_uint(value: int, name: str) -> int:
    """Validate that `value` fits in a C unsigned int."""
    value = int(value)
    if value < 0 or value > NVML_UINT_MAX:
        raise ValueError(f"{name} must be in [0, {NVML_UINT_MAX}], got {value}")
    return value
