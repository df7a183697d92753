"""
Resource Sampler for Hostwatch Monitor

System resource sampling using psutil.
Collects CPU, memory and per-mount disk utilization once per cycle.

Important Notes:
    - All metrics are SYSTEM-WIDE, not per-process
    - CPU is averaged over a window of interval/10 seconds, clamped to [5, 60]
    - Disk covers the root filesystem (/) plus every directory under the
      mount root (default /mnt), rediscovered on each collect()
    - Failures are returned in SampleBatch.errors, never raised

Author: Hostwatch Team
SPDX-License-Identifier: Apache-2.0
"""

import logging
import os
import time
from dataclasses import dataclass, field

import psutil

from hostwatch.exceptions import SamplerError
from hostwatch.monitor.evaluator import CPU, MEMORY, disk_dimension

logger = logging.getLogger(__name__)

DEFAULT_MOUNT_ROOT = "/mnt"
ROOT_FILESYSTEM = "/"

MIN_CPU_WINDOW = 5.0
MAX_CPU_WINDOW = 60.0


@dataclass
class Sample:
    """A single reading for one dimension."""

    dimension: str
    value: float
    timestamp: float
    # Memory: available bytes. Disk: free bytes.
    available_bytes: int | None = None
    total_bytes: int | None = None


@dataclass
class SampleBatch:
    """Everything collected in one cycle."""

    samples: list[Sample] = field(default_factory=list)
    errors: dict[str, SamplerError] = field(default_factory=dict)
    # Disk dimensions discovered this cycle; None if discovery failed
    mounts: set[str] | None = None


def cpu_window(interval: float) -> float:
    """CPU averaging window for a check interval."""
    return max(MIN_CPU_WINDOW, min(MAX_CPU_WINDOW, interval / 10))


class ResourceSampler:
    """
    Reads host metrics on demand.

    Example:
        sampler = ResourceSampler(interval=300)
        batch = sampler.collect()
        for sample in batch.samples:
            print(f"{sample.dimension}: {sample.value}%")
    """

    BYTES_PER_MB = 1024**2

    def __init__(self, interval: float = 300, mount_root: str = DEFAULT_MOUNT_ROOT):
        """
        Args:
            interval: Check interval in seconds, used to size the CPU window
            mount_root: Directory whose children are treated as mounted volumes
        """
        self.cpu_window = cpu_window(interval)
        self.mount_root = mount_root

    def sample_cpu(self) -> Sample:
        """Blocks for the CPU window."""
        try:
            percent = psutil.cpu_percent(interval=self.cpu_window)
        except Exception as e:
            raise SamplerError(CPU, str(e)) from e
        if percent is None:
            raise SamplerError(CPU, "no CPU reading returned")
        return Sample(dimension=CPU, value=float(percent), timestamp=time.time())

    def sample_memory(self) -> Sample:
        try:
            mem = psutil.virtual_memory()
        except Exception as e:
            raise SamplerError(MEMORY, str(e)) from e
        return Sample(
            dimension=MEMORY,
            value=float(mem.percent),
            timestamp=time.time(),
            available_bytes=mem.available,
            total_bytes=mem.total,
        )

    def sample_disk(self, path: str) -> Sample:
        dimension = disk_dimension(path)
        try:
            usage = psutil.disk_usage(path)
        except Exception as e:
            raise SamplerError(dimension, str(e)) from e
        return Sample(
            dimension=dimension,
            value=float(usage.percent),
            timestamp=time.time(),
            available_bytes=usage.free,
            total_bytes=usage.total,
        )

    def discover_mounts(self) -> list[str]:
        """List volumes under the mount root, sorted."""
        if not os.path.isdir(self.mount_root):
            return []
        try:
            with os.scandir(self.mount_root) as entries:
                mounts = [
                    os.path.join(self.mount_root, entry.name)
                    for entry in entries
                    if not entry.name.startswith(".") and entry.is_dir()
                ]
        except OSError as e:
            pattern = os.path.join(self.mount_root, "*")
            raise SamplerError(disk_dimension(pattern), str(e)) from e
        return sorted(mounts)

    def collect(self) -> SampleBatch:
        """Sample every dimension, recording failures instead of raising."""
        batch = SampleBatch()

        for reader in (self.sample_cpu, self.sample_memory):
            self._record(batch, reader)

        paths = [ROOT_FILESYSTEM]
        try:
            paths.extend(self.discover_mounts())
            batch.mounts = {disk_dimension(p) for p in paths}
        except SamplerError as e:
            batch.errors[e.dimension] = e

        for path in paths:
            self._record(batch, lambda p=path: self.sample_disk(p))

        return batch

    @staticmethod
    def _record(batch: SampleBatch, reader) -> None:
        try:
            batch.samples.append(reader())
        except SamplerError as e:
            batch.errors[e.dimension] = e

    @classmethod
    def format_sample(cls, sample: Sample) -> str:
        """Human-readable log line for a sample."""
        if sample.dimension == CPU:
            return f"CPU usage: {sample.value:.2f}%"

        total_mb = (sample.total_bytes or 0) // cls.BYTES_PER_MB
        available_mb = (sample.available_bytes or 0) // cls.BYTES_PER_MB
        if sample.dimension == MEMORY:
            return (
                f"Memory usage: {sample.value:.2f}% "
                f"(Available: {available_mb} MB, Total: {total_mb} MB)"
            )
        mount = sample.dimension.split(":", 1)[1]
        return (
            f"Diskspace used {mount}: {sample.value:.2f}% "
            f"(Free: {available_mb} MB, Total: {total_mb} MB)"
        )
