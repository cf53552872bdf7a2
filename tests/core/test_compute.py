"""
Tests for timing, device selection and tolerance tiers.
"""

import time

from denselu.core.compute.device import DeviceInfo, get_cpu_info, select_device
from denselu.core.compute.timing import Timer, timed
from denselu.core.compute.tolerances import (
    CPU_FP64,
    GPU_FP32,
    GPU_FP64,
    select_tolerance,
)


class TestTimer:

    def test_sections_accumulate(self):
        timer = Timer()
        timer.start()
        with timer.section('work'):
            time.sleep(0.001)
        with timer.section('work'):
            time.sleep(0.001)
        timer.stop()
        result = timer.result()
        assert result['work'] >= 0.002
        assert result['total_seconds'] >= result['work']

    def test_timed(self):
        with timed() as timer:
            pass
        assert timer.result()['total_seconds'] >= 0.0


class TestDevice:

    def test_cpu_info(self):
        info = get_cpu_info()
        assert info.device_type == 'cpu'
        assert not info.is_gpu
        assert info.supports_fp64
        assert info.torch_name == 'cpu'

    def test_select_cpu(self):
        assert select_device('cpu').device_type == 'cpu'

    def test_mps_has_no_fp64(self):
        mps = DeviceInfo(device_type='mps', device_index=0, name='Apple GPU', memory_bytes=None)
        assert mps.is_gpu
        assert not mps.supports_fp64

    def test_auto_always_returns_a_device(self):
        device = select_device('auto')
        assert device.device_type in ('cpu', 'cuda', 'mps')
        assert str(device)


class TestTolerances:

    def test_cpu(self):
        assert select_tolerance('cpu_crout') is CPU_FP64

    def test_gpu(self):
        assert select_tolerance('gpu_lu') is GPU_FP64
        assert select_tolerance('gpu_lu', fp64=False) is GPU_FP32
