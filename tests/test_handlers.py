"""Unit tests for per-event handling and its log output."""

import json

import pytest
from structlog.testing import capture_logs

from hookrelay.events import UnknownEvent, decode_event
from hookrelay.handlers import UnhandledEventError, handle_event


def _event(name: str, payload: dict):
    return decode_event(name, json.dumps(payload).encode())


def test_ping_is_acknowledged(ping_payload: dict) -> None:
    with capture_logs() as logs:
        handled = handle_event(_event("ping", ping_payload))

    assert handled == "ping"
    assert logs[0]["event"] == "ping_received"
    assert logs[0]["hook_id"] == 987


def test_issue_comment_logs_action_and_number(issue_comment_payload: dict) -> None:
    issue_comment_payload["action"] = "edited"

    with capture_logs() as logs:
        handled = handle_event(_event("issue_comment", issue_comment_payload))

    assert handled == "issue_comment"
    assert logs == [
        {
            "event": "issue_comment_event_received",
            "log_level": "info",
            "action": "edited",
            "issue": 42,
            "comment_id": 555,
            "repository": "octocat/hello-world",
            "sender": "octocat",
        }
    ]


def test_issues_logs_issue_number(issues_payload: dict) -> None:
    issues_payload["action"] = "closed"

    with capture_logs() as logs:
        handle_event(_event("issues", issues_payload))

    assert logs[0]["event"] == "issue_event_received"
    assert logs[0]["action"] == "closed"
    assert logs[0]["issue"] == 42


def test_pull_request_logs_number_and_refs(pull_request_payload: dict) -> None:
    pull_request_payload["action"] = "synchronize"

    with capture_logs() as logs:
        handle_event(_event("pull_request", pull_request_payload))

    entry = logs[0]
    assert entry["event"] == "pull_request_event_received"
    assert entry["action"] == "synchronize"
    assert entry["pull_request"] == 7
    assert (entry["head"], entry["base"]) == ("feature", "main")


def test_push_logs_ref(push_payload: dict) -> None:
    with capture_logs() as logs:
        handled = handle_event(_event("push", push_payload))

    assert handled == "push"
    assert logs[0]["event"] == "push_event_received"
    assert logs[0]["ref"] == "refs/heads/main"
    assert logs[0]["commits"] == 1


def test_unknown_event_is_rejected_with_warning() -> None:
    event = UnknownEvent(name="repository", payload={"action": "created"})

    with capture_logs() as logs, pytest.raises(UnhandledEventError) as exc_info:
        handle_event(event)

    assert exc_info.value.event_name == "repository"
    assert logs == [
        {"event": "unhandled_event_type", "log_level": "warning", "event_name": "repository"}
    ]
