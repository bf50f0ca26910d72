"""Inbound webhook receiver."""

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Header, HTTPException

from hook_sentry.verification import InboundRequest
from hook_sentry.webhook.dependencies import require_valid_signature

logger = logging.getLogger(__name__)
router = APIRouter()


def parse_payload(inbound: InboundRequest) -> Any:
    """Decode the verified raw body as JSON."""
    try:
        return json.loads(inbound.body)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise HTTPException(status_code=400, detail="Body is not valid JSON") from e


@router.post("")
async def receive_webhook(
    inbound: InboundRequest = Depends(require_valid_signature),
    x_shopify_topic: str | None = Header(None),
) -> dict[str, Any]:
    """
    Accept a signed webhook delivery.

    The signature is checked by the dependency before this body runs; the
    payload is only parsed once it is known to be authentic.
    """
    payload = parse_payload(inbound)

    logger.info(
        f"Accepted webhook topic={x_shopify_topic} from {inbound.client_ip} "
        f"({len(inbound.body)} bytes, {type(payload).__name__})"
    )
    return {"status": "accepted", "topic": x_shopify_topic}
