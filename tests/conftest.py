# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Shared fixtures: a fake NVML symbol table and handles built on it."""

import logging

import pytest

from nvml_wrapper.ffi.library import NvmlLibrary
from nvml_wrapper.nvml import Nvml
from tests.utils.fake_nvml import FakeDevice, FakeNvml

logger = logging.getLogger(__name__)


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast test that needs no GPU or driver")
    config.addinivalue_line("markers", "pre_merge: run on every merge request")
    config.addinivalue_line("markers", "gpu_1: needs one NVIDIA GPU and a real libnvidia-ml")


@pytest.fixture
def fake_nvml():
    """Two devices on the same board; no units."""
    return FakeNvml(
        devices=[
            FakeDevice(),
            FakeDevice(
                uuid="GPU-55555555-6666-7777-8888-999999999999",
                serial="1563221000002",
                minor_number=1,
                bus_id="00000000:0F:00.0",
                pci_bus=0x0F,
            ),
        ]
    )


@pytest.fixture
def library(fake_nvml):
    return NvmlLibrary(fake_nvml, path="fake-libnvidia-ml")


@pytest.fixture
def nvml(library):
    instance = Nvml.from_library(library)
    yield instance
    if instance.is_loaded:
        instance.shutdown()


@pytest.fixture
def device(nvml):
    return nvml.device_by_index(0)
