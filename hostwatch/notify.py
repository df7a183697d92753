"""
Hostwatch Webhook Notification Module.
Delivers incident create/resolve notifications to an alerting webhook.
"""
import json
import logging
from dataclasses import replace
from typing import Optional

import requests

from hostwatch import __version__
from hostwatch.monitor.incidents import Action, ActionKind, Incident

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0
USER_AGENT = "hostwatch system-monitoring"


class WebhookNotifier:
    """
    Sends one incident per call as a JSON POST.

    Delivery is at-most-once: failures are logged and reported through the
    return value, never retried.
    """

    def __init__(self, url: str, timeout: float = DEFAULT_TIMEOUT,
                 session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json",
            "User-Agent": f"{USER_AGENT}/{__version__}",
        })

    def deliver(self, action: Action) -> bool:
        return self.send(action.incident, action.kind)

    def send(self, incident: Incident, kind: ActionKind = ActionKind.CREATE) -> bool:
        """
        POST an incident to the webhook.
        Returns True if accepted (status < 400), False otherwise.
        """
        if kind is ActionKind.RESOLVE:
            logger.info(f"Resolving incident: {incident.title}")
            incident = replace(incident, resolved=True)
        else:
            logger.info(f"Triggering incident: {incident.title}")

        try:
            body = json.dumps(incident.to_payload())
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to serialize incident {incident.alert_id}: {e}")
            return False

        try:
            resp = self.session.post(self.url, data=body, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to send {kind.value} for {incident.alert_id}: {e}")
            return False

        if resp.status_code >= 400:
            logger.error(
                f"Webhook rejected {kind.value} for {incident.alert_id} "
                f"with status: {resp.status_code}"
            )
            return False

        logger.debug(f"Delivered {kind.value} for {incident.alert_id} ({resp.status_code})")
        return True

    def close(self):
        self.session.close()
