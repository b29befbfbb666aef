"""GitHub webhook router: decode the verified delivery and dispatch it.

Signature verification has already happened in
``hookrelay.middleware.signature`` by the time a request reaches this router.
"""

from typing import Annotated

import structlog
from fastapi import APIRouter, Header, HTTPException, Request, status

from hookrelay.events import EventDecodeError, decode_event
from hookrelay.handlers import UnhandledEventError, handle_event
from hookrelay.schemas.webhooks import WebhookAck

logger = structlog.get_logger()

router = APIRouter(tags=["webhooks"])


def _bad_request() -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Bad Request")


@router.post("", response_model=WebhookAck)
@router.post("/", response_model=WebhookAck, include_in_schema=False)
async def github_webhook(
    request: Request,
    x_github_event: Annotated[str | None, Header()] = None,
    x_github_delivery: Annotated[str | None, Header()] = None,
) -> WebhookAck:
    """Receive a GitHub webhook delivery.

    Decodes the body according to ``X-GitHub-Event`` and hands the typed event
    to ``handle_event``. Missing headers, undecodable bodies and unhandled
    event types all produce the same ``400`` response; the detail is logged.
    """
    with structlog.contextvars.bound_contextvars(delivery_id=x_github_delivery):
        if not x_github_event:
            logger.warning("missing_event_header")
            raise _bad_request()

        body = await request.body()
        try:
            event = decode_event(x_github_event, body)
        except EventDecodeError as exc:
            logger.warning(
                "webhook_decode_failed", event_name=exc.event_name, error=exc.detail
            )
            raise _bad_request() from exc

        try:
            handled = handle_event(event)
        except UnhandledEventError as exc:
            raise _bad_request() from exc

    return WebhookAck(event=handled)
