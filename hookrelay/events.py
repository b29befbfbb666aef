"""Decoding of webhook deliveries into typed events.

Two decoders are provided. ``decode_payload`` is the strict one: the caller
names the event type and the body must validate against that type's model.
``decode_event`` is the generic one used by the dispatcher: it accepts any
event name, delegates known names to ``decode_payload`` and wraps anything
else in an ``UnknownEvent`` so the caller can decide what to do with it.

Every parse or validation problem surfaces as ``EventDecodeError``. Its
message carries the parser detail and is meant for server-side logs only.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from hookrelay.schemas.webhooks import (
    IssueCommentPayload,
    IssuesPayload,
    PingPayload,
    PullRequestPayload,
    PushPayload,
)


class EventType(str, Enum):
    """Event names, as sent in the ``X-GitHub-Event`` header, that are handled."""

    PING = "ping"
    ISSUES = "issues"
    ISSUE_COMMENT = "issue_comment"
    PULL_REQUEST = "pull_request"
    PUSH = "push"


class EventDecodeError(Exception):
    """Raised when a delivery body does not match the shape of its event."""

    def __init__(self, event_name: str, detail: str) -> None:
        super().__init__(f"cannot decode {event_name!r} payload: {detail}")
        self.event_name = event_name
        self.detail = detail


class _Event(BaseModel):
    model_config = ConfigDict(frozen=True)


class PingEvent(_Event):
    kind: Literal[EventType.PING] = EventType.PING
    payload: PingPayload


class IssuesEvent(_Event):
    kind: Literal[EventType.ISSUES] = EventType.ISSUES
    payload: IssuesPayload


class IssueCommentEvent(_Event):
    kind: Literal[EventType.ISSUE_COMMENT] = EventType.ISSUE_COMMENT
    payload: IssueCommentPayload


class PullRequestEvent(_Event):
    kind: Literal[EventType.PULL_REQUEST] = EventType.PULL_REQUEST
    payload: PullRequestPayload


class PushEvent(_Event):
    kind: Literal[EventType.PUSH] = EventType.PUSH
    payload: PushPayload


class UnknownEvent(_Event):
    """Catch-all for event names the receiver has no model for."""

    name: str
    payload: dict[str, Any]


WebhookPayload = (
    PingPayload | IssuesPayload | IssueCommentPayload | PullRequestPayload | PushPayload
)

WebhookEvent = (
    PingEvent
    | IssuesEvent
    | IssueCommentEvent
    | PullRequestEvent
    | PushEvent
    | UnknownEvent
)

_PAYLOAD_MODELS: dict[EventType, type[BaseModel]] = {
    EventType.PING: PingPayload,
    EventType.ISSUES: IssuesPayload,
    EventType.ISSUE_COMMENT: IssueCommentPayload,
    EventType.PULL_REQUEST: PullRequestPayload,
    EventType.PUSH: PushPayload,
}

_EVENT_MODELS: dict[EventType, type[_Event]] = {
    EventType.PING: PingEvent,
    EventType.ISSUES: IssuesEvent,
    EventType.ISSUE_COMMENT: IssueCommentEvent,
    EventType.PULL_REQUEST: PullRequestEvent,
    EventType.PUSH: PushEvent,
}

_json_object = TypeAdapter(dict[str, Any])


def decode_payload(event_type: EventType, body: bytes) -> WebhookPayload:
    """Validate *body* strictly against the model for *event_type*."""
    model = _PAYLOAD_MODELS[event_type]
    try:
        return model.model_validate_json(body)  # type: ignore[return-value]
    except ValidationError as exc:
        raise EventDecodeError(event_type.value, str(exc)) from exc


def decode_event(event_name: str, body: bytes) -> WebhookEvent:
    """Decode a delivery given the raw event header value and body.

    Unrecognised event names still require the body to be a JSON object;
    they come back as ``UnknownEvent`` rather than raising.
    """
    try:
        event_type = EventType(event_name)
    except ValueError:
        try:
            raw = _json_object.validate_json(body)
        except ValidationError as exc:
            raise EventDecodeError(event_name, str(exc)) from exc
        return UnknownEvent(name=event_name, payload=raw)

    payload = decode_payload(event_type, body)
    return _EVENT_MODELS[event_type](payload=payload)  # type: ignore[return-value]
