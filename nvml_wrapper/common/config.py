"""Configuration constants and environment handling for locating NVML."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import List, Optional

# Full path to the NVML shared library; takes priority over everything else
# except an explicit lib_path argument.
NVML_LIB_PATH_ENV = "NVML_LIB_PATH"

# Directory containing the NVML shared library (platform file name appended).
NVML_LIB_DIR_ENV = "NVML_LIB_DIR"

LINUX_LIB_NAMES = ("libnvidia-ml.so.1", "libnvidia-ml.so")
WINDOWS_LIB_NAME = "nvml.dll"


def platform_lib_names() -> List[str]:
    """Shared library file names the dynamic loader should look for."""
    if os.name == "nt":
        return [WINDOWS_LIB_NAME]
    return list(LINUX_LIB_NAMES)


def _windows_default_paths() -> List[str]:
    # Drivers before R450 install NVML under Program Files instead of System32.
    program_files = os.environ.get("ProgramW6432") or os.environ.get("ProgramFiles")
    if not program_files:
        return []
    return [str(Path(program_files) / "NVIDIA Corporation" / "NVSMI" / WINDOWS_LIB_NAME)]


def resolve_library_candidates(lib_path: Optional[str] = None) -> List[str]:
    """Get the ordered list of library paths/names to try loading.

    Priority order:
    1. lib_path argument
    2. NVML_LIB_PATH environment variable
    3. NVML_LIB_DIR environment variable + platform file name(s)
    4. Platform file names, resolved by the system dynamic loader

    An explicit lib_path or NVML_LIB_PATH is the only candidate returned.
    """
    if lib_path:
        return [str(lib_path)]

    env_path = os.environ.get(NVML_LIB_PATH_ENV)
    if env_path:
        return [env_path]

    candidates: List[str] = []
    env_dir = os.environ.get(NVML_LIB_DIR_ENV)
    if env_dir:
        candidates.extend(str(Path(env_dir) / name) for name in platform_lib_names())

    candidates.extend(platform_lib_names())
    if sys.platform == "win32":
        candidates.extend(_windows_default_paths())
    return candidates
