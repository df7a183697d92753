"""
Hostwatch Monitor Module

Threshold monitoring of host CPU, memory and disk usage with incident
lifecycle tracking.
"""

from hostwatch.monitor.cycle import SystemMonitor
from hostwatch.monitor.evaluator import Limits, is_breach
from hostwatch.monitor.incidents import (
    Action,
    ActionKind,
    Incident,
    IncidentFactory,
    IncidentTracker,
)
from hostwatch.monitor.sampler import ResourceSampler, Sample, SampleBatch

__all__ = [
    "Action",
    "ActionKind",
    "Incident",
    "IncidentFactory",
    "IncidentTracker",
    "Limits",
    "ResourceSampler",
    "Sample",
    "SampleBatch",
    "SystemMonitor",
    "is_breach",
]
