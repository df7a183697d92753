"""
Reconciliation Cycle for Hostwatch Monitor

One pass of sample -> evaluate -> track -> notify across every dimension.
A failure on one dimension never stops the others.

Author: Hostwatch Team
SPDX-License-Identifier: Apache-2.0
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hostwatch.monitor.evaluator import Limits
from hostwatch.monitor.incidents import Action, IncidentTracker
from hostwatch.monitor.sampler import ResourceSampler

if TYPE_CHECKING:
    from hostwatch.notify import WebhookNotifier

logger = logging.getLogger(__name__)


class SystemMonitor:
    """
    Runs reconciliation cycles against a tracker it does not own.

    Example:
        monitor = SystemMonitor(ResourceSampler(), Limits(), WebhookNotifier(url))
        tracker = IncidentTracker(IncidentFactory(hostname, limits))
        actions = monitor.run_cycle(tracker)
    """

    def __init__(self, sampler: ResourceSampler, limits: Limits, notifier: WebhookNotifier):
        self.sampler = sampler
        self.limits = limits
        self.notifier = notifier

    def run_cycle(self, tracker: IncidentTracker) -> list[Action]:
        """
        Run one cycle.

        Returns:
            Actions emitted this cycle, whether or not delivery succeeded
        """
        batch = self.sampler.collect()
        actions: list[Action] = []

        # Skipped dimensions keep their previous state
        for dimension, error in batch.errors.items():
            logger.error(f"Error processing {dimension} metrics: {error}")

        for sample in batch.samples:
            logger.info(self.sampler.format_sample(sample))
            action = tracker.reconcile(sample.dimension, self.limits.breached(sample))
            if action is not None:
                actions.append(action)
                self._deliver(action)

        if batch.mounts is not None:
            for action in tracker.retire(batch.mounts):
                actions.append(action)
                self._deliver(action)

        return actions

    def _deliver(self, action: Action) -> None:
        if not self.notifier.deliver(action):
            logger.warning(
                f"Notification for {action.incident.alert_id} was not delivered; "
                "it will not be retried"
            )
