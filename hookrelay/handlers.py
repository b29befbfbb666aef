"""Per-event handling for verified, decoded webhook deliveries."""

from typing import assert_never

import structlog

from hookrelay.events import (
    IssueCommentEvent,
    IssuesEvent,
    PingEvent,
    PullRequestEvent,
    PushEvent,
    UnknownEvent,
    WebhookEvent,
)

logger = structlog.get_logger()


class UnhandledEventError(Exception):
    """Raised for an event type the receiver has no handling logic for."""

    def __init__(self, event_name: str) -> None:
        super().__init__(f"unhandled event type {event_name!r}")
        self.event_name = event_name


def handle_event(event: WebhookEvent) -> str:
    """Route *event* to its handling logic and return the handled event name.

    Raises:
        UnhandledEventError: for ``UnknownEvent``. Unrecognised event types
            are always rejected, never acknowledged.
    """
    match event:
        case PingEvent(payload=payload):
            logger.info("ping_received", hook_id=payload.hook_id, zen=payload.zen)
        case IssuesEvent(payload=payload):
            logger.info(
                "issue_event_received",
                action=payload.action.value,
                issue=payload.issue.number,
                repository=payload.repository.full_name,
                sender=payload.sender.login,
            )
        case IssueCommentEvent(payload=payload):
            logger.info(
                "issue_comment_event_received",
                action=payload.action.value,
                issue=payload.issue.number,
                comment_id=payload.comment.id,
                repository=payload.repository.full_name,
                sender=payload.sender.login,
            )
        case PullRequestEvent(payload=payload):
            logger.info(
                "pull_request_event_received",
                action=payload.action.value,
                pull_request=payload.pull_request.number,
                head=payload.pull_request.head.ref,
                base=payload.pull_request.base.ref,
                repository=payload.repository.full_name,
                sender=payload.sender.login,
            )
        case PushEvent(payload=payload):
            logger.info(
                "push_event_received",
                ref=payload.ref,
                before=payload.before,
                after=payload.after,
                commits=len(payload.commits),
                forced=payload.forced,
                deleted=payload.deleted,
                repository=payload.repository.full_name,
            )
        case UnknownEvent(name=name):
            logger.warning("unhandled_event_type", event_name=name)
            raise UnhandledEventError(name)
        case _:
            assert_never(event)

    return event.kind.value
