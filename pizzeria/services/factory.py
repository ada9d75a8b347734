"""Pizza factory client: forward a stored order for fulfilment and collect the pizza JWT."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from pizzeria.core.errors import FactoryError
from pizzeria.schemas.auth import CurrentUser
from pizzeria.schemas.order import OrderOut

if TYPE_CHECKING:
    from pizzeria.core.config import Settings

logger = logging.getLogger(__name__)

FACTORY_FAILURE_MESSAGE = "Failed to fulfill order at factory"


@dataclass(frozen=True)
class FactoryReceipt:
    jwt: str
    report_url: str | None


def is_factory_configured(settings: Settings) -> bool:
    return bool(settings.FACTORY_URL and settings.FACTORY_URL.strip())


def _headers(settings: Settings) -> dict[str, str]:
    headers = {"Content-Type": "application/json", "Accept": "application/json"}
    if settings.FACTORY_API_KEY is not None:
        headers["Authorization"] = f"Bearer {settings.FACTORY_API_KEY.get_secret_value()}"
    return headers


def _payload(diner: CurrentUser, order: OrderOut) -> dict[str, Any]:
    return {
        "diner": {"id": diner.id, "name": diner.name, "email": diner.email},
        "order": order.model_dump(mode="json", by_alias=True),
    }


async def send_order_to_factory(
    diner: CurrentUser,
    order: OrderOut,
    settings: Settings,
) -> FactoryReceipt:
    """
    POST the order to {FACTORY_URL}/api/order.

    Raises FactoryError (carrying the factory's reportUrl when it sent one) on
    a non-2xx response, an unreachable factory, or a body without a jwt.
    """
    url = f"{settings.FACTORY_URL}/api/order"
    try:
        async with httpx.AsyncClient(timeout=settings.FACTORY_REQUEST_TIMEOUT_SEC) as client:
            resp = await client.post(url, json=_payload(diner, order), headers=_headers(settings))
    except httpx.TimeoutException as e:
        logger.error("Factory request timed out", extra={"order_id": order.id})
        raise FactoryError(FACTORY_FAILURE_MESSAGE) from e
    except httpx.RequestError as e:
        logger.error("Factory unreachable: %s", e, extra={"order_id": order.id})
        raise FactoryError(FACTORY_FAILURE_MESSAGE) from e

    try:
        body = resp.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    report_url = body.get("reportUrl")

    if resp.status_code < 200 or resp.status_code >= 300 or not body.get("jwt"):
        logger.error(
            "Factory rejected order",
            extra={"order_id": order.id, "status_code": resp.status_code},
        )
        raise FactoryError(FACTORY_FAILURE_MESSAGE, report_url=report_url)

    return FactoryReceipt(jwt=body["jwt"], report_url=report_url)
