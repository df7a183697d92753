"""
Incident Tracker for Hostwatch Monitor

Holds at most one active incident per dimension and turns per-cycle breach
observations into create/resolve actions.

    breached + no active incident   -> CREATE, incident stored
    breached + active incident      -> nothing
    clear    + active incident      -> RESOLVE, incident dropped
    clear    + no active incident   -> nothing

State is memory-resident only and starts empty with every process.

Author: Hostwatch Team
SPDX-License-Identifier: Apache-2.0
"""

import logging
import re
import time
from collections.abc import Callable, Iterable
from dataclasses import asdict, dataclass, replace
from enum import Enum

from hostwatch.monitor.evaluator import CPU, DISK_PREFIX, MEMORY, Limits, mount_of

logger = logging.getLogger(__name__)

ROOT_MOUNT = "/"


class ActionKind(Enum):
    """Notification kinds emitted by the tracker."""

    CREATE = "create"
    RESOLVE = "resolve"


@dataclass(frozen=True)
class Incident:
    """An alert record as delivered to the webhook."""

    title: str
    cause: str
    alert_id: str
    timestamp: int
    resolved: bool = False

    def to_payload(self) -> dict:
        """Webhook body. ``resolved`` is only present once true."""
        payload = asdict(self)
        if not self.resolved:
            del payload["resolved"]
        return payload


@dataclass(frozen=True)
class Action:
    """One notification the tracker wants delivered."""

    kind: ActionKind
    incident: Incident


_UNSAFE = re.compile(r"[^A-Za-z0-9/]+")


def _escape(match: re.Match) -> str:
    return "".join(f"_{byte:02x}" for byte in match.group().encode("utf-8", "surrogateescape"))


def _mount_slug(mount: str) -> str:
    """
    Reversible ID fragment for a mount path.

    ``/`` becomes ``-`` and every other non-alphanumeric byte becomes
    ``_xx``, so ``/mnt/data`` -> ``mnt-data`` and ``/mnt/data_x`` ->
    ``mnt-data_5fx``. Relative paths get a leading ``.``.
    """
    if mount.startswith("/"):
        body, prefix = mount[1:], ""
    else:
        body, prefix = mount, "."
    return prefix + _UNSAFE.sub(_escape, body).replace("/", "-")


class IncidentFactory:
    """
    Builds incidents for a dimension on this host.

    The alert ID depends only on the dimension and hostname, so repeated
    incidents for the same dimension deduplicate on the receiving side.
    """

    def __init__(
        self,
        hostname: str,
        limits: Limits | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.hostname = hostname
        self.limits = limits or Limits()
        self._clock = clock

    def alert_id(self, dimension: str) -> str:
        if dimension in (CPU, MEMORY):
            return f"high-{dimension}-{self.hostname}"
        mount = mount_of(dimension)
        if mount == ROOT_MOUNT:
            return f"high-disk-{self.hostname}"
        return f"high-disk-{_mount_slug(mount)}-{self.hostname}"

    def title(self, dimension: str) -> str:
        limit = self.limits.for_dimension(dimension)
        if dimension == CPU:
            subject = "CPU usage"
        elif dimension == MEMORY:
            subject = "Memory usage"
        elif mount_of(dimension) == ROOT_MOUNT:
            subject = "Root disk usage"
        else:
            subject = f"{mount_of(dimension)} disk usage"
        return f"{subject} higher than {limit:.0f}%! - {self.hostname}"

    def cause(self, dimension: str) -> str:
        if dimension == CPU:
            return "High CPU usage"
        if dimension == MEMORY:
            return "High memory usage"
        return "High disk usage"

    def __call__(self, dimension: str) -> Incident:
        return Incident(
            title=self.title(dimension),
            cause=self.cause(dimension),
            alert_id=self.alert_id(dimension),
            timestamp=int(self._clock()),
        )


class IncidentTracker:
    """
    Owner of the active-incident set.

    Example:
        tracker = IncidentTracker(IncidentFactory("web-1"))
        tracker.reconcile("cpu", True)    # Action(CREATE, ...)
        tracker.reconcile("cpu", True)    # None
        tracker.reconcile("cpu", False)   # Action(RESOLVE, ...)
    """

    def __init__(self, factory: Callable[[str], Incident]):
        self._factory = factory
        self._active: dict[str, Incident] = {}

    def __contains__(self, dimension: str) -> bool:
        return dimension in self._active

    def __len__(self) -> int:
        return len(self._active)

    def active(self, dimension: str) -> Incident | None:
        """Get the open incident for a dimension, if any."""
        return self._active.get(dimension)

    def active_dimensions(self) -> list[str]:
        return sorted(self._active)

    def reconcile(self, dimension: str, breached: bool) -> Action | None:
        """
        Apply one breach observation for a dimension.

        Args:
            dimension: Dimension key (``cpu``, ``memory``, ``disk:<mount>``)
            breached: Whether this cycle's sample exceeded its limit

        Returns:
            The action to deliver, or None when nothing changed
        """
        current = self._active.get(dimension)

        if breached:
            if current is not None:
                logger.info(f"Already have active incident for '{dimension}', skipping.")
                return None
            incident = self._factory(dimension)
            self._active[dimension] = incident
            return Action(ActionKind.CREATE, incident)

        if current is None:
            return None

        logger.info(f"Resolving active incident for '{dimension}'")
        del self._active[dimension]
        return Action(ActionKind.RESOLVE, replace(current, resolved=True))

    def retire(self, present: Iterable[str], prefix: str = DISK_PREFIX) -> list[Action]:
        """
        Resolve and forget active dimensions under ``prefix`` that were not
        discovered this cycle (e.g. an unmounted volume).
        """
        seen = set(present)
        gone = [d for d in self.active_dimensions() if d.startswith(prefix) and d not in seen]
        actions = []
        for dimension in gone:
            logger.info(f"Dimension '{dimension}' disappeared")
            action = self.reconcile(dimension, False)
            if action is not None:
                actions.append(action)
        return actions
