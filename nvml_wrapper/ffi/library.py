# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Dynamic loading of the NVML shared library.

NvmlLibrary owns the opened library and its symbol table:
- Required symbols are resolved when the library is opened; a missing one
  closes the library again and raises FailedToLoadSymbolError.
- Optional symbols (entry points that only newer drivers export) are
  resolved on first use and cached.
- After close(), every lookup raises LibraryUnloadedError instead of
  touching freed memory.

The symbol table is never mutated after a successful resolve, so one
NvmlLibrary may be read from several threads. Serializing the native calls
themselves is the caller's responsibility.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from nvml_wrapper.common.config import resolve_library_candidates
from nvml_wrapper.common.error import (
    FailedToLoadSymbolError,
    LibraryLoadError,
    LibraryUnloadedError,
    nvml_try,
)
from nvml_wrapper.ffi.bindings import NVML_ERROR_INSUFFICIENT_SIZE, NVML_SUCCESS, ffi

logger = logging.getLogger(__name__)

REQUIRED_SYMBOLS = (
    "nvmlInit_v2",
    "nvmlInitWithFlags",
    "nvmlShutdown",
    "nvmlErrorString",
    "nvmlDeviceGetCount_v2",
    "nvmlDeviceGetHandleByIndex_v2",
)

# Extra room allocated for lists that can grow between the size query and the fill.
ARRAY_QUERY_SLACK = 5


class NvmlLibrary:
    """An opened NVML shared library and its resolved entry points.

    Use NvmlLibrary.open() to load the vendor library. The constructor also
    accepts any object exposing NVML entry points as attributes, which is
    how an already-opened cffi library (or a stand-in) is wrapped.
    """

    def __init__(
        self,
        lib: Any,
        *,
        path: Optional[str] = None,
        owned: bool = False,
        required: Iterable[str] = REQUIRED_SYMBOLS,
    ):
        """Wrap `lib` and resolve its required symbols.

        Args:
            lib: Object exposing NVML functions as attributes
            path: Where the library was loaded from (for diagnostics)
            owned: Whether close() should dlclose `lib`
            required: Symbols that must resolve for the library to be usable

        Raises:
            FailedToLoadSymbolError: If a required symbol is missing. An
                owned library is closed before raising.
        """
        self._lib = lib
        self._path = path
        self._owned = owned
        self._closed = False
        self._symbols: Dict[str, Callable[..., Any]] = {}

        for name in required:
            try:
                self._symbols[name] = getattr(lib, name)
            except AttributeError:
                logger.error(f"Required NVML symbol {name} missing from {path or lib!r}")
                self._release()
                raise FailedToLoadSymbolError(name) from None

    @classmethod
    def open(cls, lib_path: Optional[str] = None) -> "NvmlLibrary":
        """Load the NVML shared library.

        Args:
            lib_path: Explicit path to the library. When None, the candidates
                from nvml_wrapper.common.config are tried in order.

        Raises:
            LibraryLoadError: If no candidate could be opened
            FailedToLoadSymbolError: If the library lacks a required symbol
        """
        candidates = resolve_library_candidates(lib_path)
        last_err: Optional[Exception] = None
        for cand in candidates:
            try:
                lib = ffi.dlopen(cand)
            except OSError as e:
                logger.debug(f"Could not load NVML from {cand}: {e}")
                last_err = e
                continue
            logger.info(f"Loaded NVML library from {cand}")
            return cls(lib, path=cand, owned=True)

        hint = (
            "Set NVML_LIB_PATH to the full path of libnvidia-ml or NVML_LIB_DIR to "
            "the folder containing it, or install the NVIDIA driver."
        )
        raise LibraryLoadError(
            f"Could not load the NVML library (tried {', '.join(candidates)}): "
            f"{last_err}\n{hint}",
            candidates,
        )

    @property
    def path(self) -> Optional[str]:
        return self._path

    @property
    def is_closed(self) -> bool:
        return self._closed

    def symbol(self, name: str) -> Callable[..., Any]:
        """Resolve an entry point, loading optional symbols on first use.

        Raises:
            LibraryUnloadedError: If the library has been closed
            FailedToLoadSymbolError: If this NVML version lacks `name`
        """
        if self._closed:
            raise LibraryUnloadedError(name)
        fn = self._symbols.get(name)
        if fn is None:
            try:
                fn = getattr(self._lib, name)
            except AttributeError:
                logger.debug(f"Optional NVML symbol {name} is not available")
                raise FailedToLoadSymbolError(name) from None
            self._symbols[name] = fn
        return fn

    def has_symbol(self, name: str) -> bool:
        """Whether `name` resolves in this library."""
        try:
            self.symbol(name)
        except FailedToLoadSymbolError:
            return False
        return True

    def call(self, name: str, *args: Any) -> None:
        """Call an entry point returning nvmlReturn_t and raise on failure."""
        nvml_try(self.symbol(name)(*args))

    def call_status(self, name: str, *args: Any) -> int:
        """Call an entry point and return the raw status without translating it.

        For the size-query calls where NVML_ERROR_INSUFFICIENT_SIZE is an
        expected answer rather than a failure.
        """
        return int(self.symbol(name)(*args))

    def call_array(self, name: str, ctype: str, *args: Any) -> Tuple[Any, int]:
        """Run an NVML "count, then fill" query.

        `name` must take `(*args, unsigned int *count, ctype *array)`. The
        first call passes a NULL array to learn the count; the second fills
        a freshly allocated array.

        Returns:
            Tuple of (array, count); array is None when count is 0
        """
        count = ffi.new("unsigned int *", 0)
        status = self.call_status(name, *args, count, ffi.NULL)
        if status == NVML_SUCCESS:
            return None, 0
        if status != NVML_ERROR_INSUFFICIENT_SIZE:
            nvml_try(status)

        # The list may grow between the two calls.
        capacity = int(count[0]) + ARRAY_QUERY_SLACK
        count[0] = capacity
        array = ffi.new(f"{ctype}[]", capacity)
        self.call(name, *args, count, array)
        return array, min(int(count[0]), capacity)

    def close(self) -> None:
        """Drop the symbol table and unload the library. Idempotent."""
        if self._closed:
            return
        self._release()
        logger.debug(f"Closed NVML library {self._path or ''}")

    def _release(self) -> None:
        self._closed = True
        self._symbols.clear()
        lib, self._lib = self._lib, None
        if self._owned and lib is not None:
            ffi.dlclose(lib)
