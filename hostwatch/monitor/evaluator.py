"""
Threshold Evaluator for Hostwatch Monitor

Decides breach/no-breach for a sampled value against its metric-class limit.

Dimensions are plain strings:
    - ``cpu``
    - ``memory``
    - ``disk:<mount-path>`` (one per mounted volume, e.g. ``disk:/``)

Author: Hostwatch Team
SPDX-License-Identifier: Apache-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hostwatch.monitor.sampler import Sample

CPU = "cpu"
MEMORY = "memory"
DISK = "disk"
DISK_PREFIX = "disk:"

DEFAULT_CPU_LIMIT = 90.0
DEFAULT_MEMORY_LIMIT = 90.0
DEFAULT_DISK_LIMIT = 85.0


def disk_dimension(mount: str) -> str:
    """Build the dimension key for a mount path."""
    return f"{DISK_PREFIX}{mount}"


def mount_of(dimension: str) -> str:
    """Return the mount path of a disk dimension."""
    if not dimension.startswith(DISK_PREFIX):
        raise ValueError(f"Not a disk dimension: {dimension!r}")
    return dimension[len(DISK_PREFIX) :]


def metric_class(dimension: str) -> str:
    """Map a dimension to its metric class (cpu, memory or disk)."""
    if dimension in (CPU, MEMORY):
        return dimension
    if dimension.startswith(DISK_PREFIX):
        return DISK
    raise ValueError(f"Unknown dimension: {dimension!r}")


def is_breach(value: float, limit: float) -> bool:
    """Strict comparison: a value equal to the limit is not a breach."""
    return value > limit


@dataclass(frozen=True)
class Limits:
    """Per-metric-class threshold percentages, fixed for the process lifetime."""

    cpu: float = DEFAULT_CPU_LIMIT
    memory: float = DEFAULT_MEMORY_LIMIT
    disk: float = DEFAULT_DISK_LIMIT

    def for_dimension(self, dimension: str) -> float:
        return getattr(self, metric_class(dimension))

    def breached(self, sample: Sample) -> bool:
        """Evaluate a sample against the limit of its metric class."""
        return is_breach(sample.value, self.for_dimension(sample.dimension))
