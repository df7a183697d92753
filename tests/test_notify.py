"""Tests for webhook incident delivery."""

import json
from unittest.mock import MagicMock

import pytest
import requests

from hostwatch.monitor.incidents import Action, ActionKind, Incident
from hostwatch.notify import DEFAULT_TIMEOUT, USER_AGENT, WebhookNotifier

URL = "https://alerts.example.com/webhook/abc"


@pytest.fixture
def incident() -> Incident:
    return Incident(
        title="CPU usage higher than 90%! - web-1",
        cause="High CPU usage",
        alert_id="high-cpu-web-1",
        timestamp=1700000000,
    )


@pytest.fixture
def session() -> MagicMock:
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    session.post.return_value = MagicMock(status_code=200)
    return session


@pytest.fixture
def notifier(session) -> WebhookNotifier:
    return WebhookNotifier(URL, session=session)


def posted_body(session: MagicMock) -> dict:
    _, kwargs = session.post.call_args
    return json.loads(kwargs["data"])


class TestWebhookNotifier:
    """Tests for WebhookNotifier."""

    def test_headers(self, notifier, session):
        assert session.headers["Content-Type"] == "application/json"
        assert session.headers["User-Agent"].startswith(USER_AGENT)

    def test_create_payload(self, notifier, session, incident):
        assert notifier.send(incident, ActionKind.CREATE) is True

        session.post.assert_called_once()
        args, kwargs = session.post.call_args
        assert args == (URL,)
        assert kwargs["timeout"] == DEFAULT_TIMEOUT
        assert posted_body(session) == {
            "title": "CPU usage higher than 90%! - web-1",
            "cause": "High CPU usage",
            "alert_id": "high-cpu-web-1",
            "timestamp": 1700000000,
        }

    def test_resolve_sets_resolved(self, notifier, session, incident):
        """Resolve payload always carries resolved=true."""
        assert notifier.send(incident, ActionKind.RESOLVE) is True
        body = posted_body(session)
        assert body["resolved"] is True
        assert body["alert_id"] == "high-cpu-web-1"
        # Caller's incident is left untouched
        assert incident.resolved is False

    def test_deliver_action(self, notifier, session, incident):
        assert notifier.deliver(Action(ActionKind.RESOLVE, incident)) is True
        assert posted_body(session)["resolved"] is True

    @pytest.mark.parametrize("status", [200, 201, 202, 204, 301, 399])
    def test_success_statuses(self, notifier, session, incident, status):
        session.post.return_value = MagicMock(status_code=status)
        assert notifier.send(incident) is True

    @pytest.mark.parametrize("status", [400, 404, 429, 500, 503])
    def test_failure_statuses(self, notifier, session, incident, status):
        session.post.return_value = MagicMock(status_code=status)
        assert notifier.send(incident) is False

    @pytest.mark.parametrize(
        "error",
        [
            requests.exceptions.ConnectionError("refused"),
            requests.exceptions.Timeout("timed out"),
        ],
    )
    def test_transport_errors(self, notifier, session, incident, error):
        session.post.side_effect = error
        assert notifier.send(incident) is False
        session.post.assert_called_once()

    def test_serialization_error(self, notifier, session):
        bad = Incident(title="t", cause="c", alert_id="a", timestamp=object())
        assert notifier.send(bad) is False
        session.post.assert_not_called()

    def test_default_session(self):
        notifier = WebhookNotifier(URL)
        assert isinstance(notifier.session, requests.Session)
        notifier.close()
