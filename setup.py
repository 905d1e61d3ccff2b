# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Build script for nvml-wrapper.

The bindings use cffi in ABI mode: nothing is compiled at install time and
libnvidia-ml is opened at runtime, so the package installs on machines
without the NVIDIA driver.
"""

from setuptools import setup

setup(
    name="nvml-wrapper",
    version="0.11.0",
    description="Safe, typed Python bindings for the NVIDIA Management Library (NVML)",
    author="NVIDIA Inc.",
    license="Apache-2.0",
    python_requires=">=3.10",
    install_requires=[
        "cffi>=1.15",
        "msgpack>=1.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.3.4",
        ],
    },
    packages=[
        "nvml_wrapper",
        "nvml_wrapper.common",
        "nvml_wrapper.ffi",
    ],
)
