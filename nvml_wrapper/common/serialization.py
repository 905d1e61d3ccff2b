"""MessagePack encoding for NVML enums and flag sets.

Wire format: msgpack array [type_name, raw_value]

- type_name: the Python class name (e.g. "ComputeMode", "ThrottleReasons")
- raw_value: the C integer value / bitmask

Decoding is as strict as from_c()/from_bits(): an undefined variant or bit
raises instead of being dropped.
"""

from __future__ import annotations

from typing import Dict, Type, Union

import msgpack

from nvml_wrapper.common import bitmasks, enums
from nvml_wrapper.common.bitmasks import NvmlFlag
from nvml_wrapper.common.enums import NvmlEnum

Serializable = Union[NvmlEnum, NvmlFlag]

_ENUM_TYPES: Dict[str, Type[NvmlEnum]] = {
    cls.__name__: cls
    for cls in vars(enums).values()
    if isinstance(cls, type) and issubclass(cls, NvmlEnum) and cls is not NvmlEnum
}

_FLAG_TYPES: Dict[str, Type[NvmlFlag]] = {
    cls.__name__: cls
    for cls in vars(bitmasks).values()
    if isinstance(cls, type) and issubclass(cls, NvmlFlag) and cls is not NvmlFlag
}


def encode_value(value: Serializable) -> bytes:
    """Encode an enum variant or flag set to bytes (MessagePack)."""
    if isinstance(value, NvmlEnum):
        registry = _ENUM_TYPES
    elif isinstance(value, NvmlFlag):
        registry = _FLAG_TYPES
    else:
        raise ValueError(f"Unsupported type for encoding: {type(value)}")

    name = type(value).__name__
    if registry.get(name) is not type(value):
        raise ValueError(f"Unregistered type: {name}")
    return msgpack.packb([name, int(value)], use_bin_type=True)


def decode_value(data: bytes) -> Serializable:
    """Decode bytes produced by encode_value().

    Raises:
        ValueError: If the payload is malformed or names an unknown type
        UnexpectedVariantError: If the enum value is undefined
        IncorrectBitsError: If the bitmask has undefined bits
    """
    if not data:
        raise ValueError("Empty payload")
    payload = msgpack.unpackb(data, raw=False)
    if (
        not isinstance(payload, list)
        or len(payload) != 2
        or not isinstance(payload[0], str)
        or not isinstance(payload[1], int)
    ):
        raise ValueError(f"Malformed payload: {payload!r}")

    name, raw = payload
    if name in _ENUM_TYPES:
        return _ENUM_TYPES[name].from_c(raw)
    if name in _FLAG_TYPES:
        return _FLAG_TYPES[name].from_bits(raw)
    raise ValueError(f"Unknown type: {name}")
