"""Turns a GetRateQuote response body into a RateResponse.

The body is expected with SOAP prefixes already stripped, so the document
root is ``GetRateQuoteResponse``. Malformed XML raises ``ExpatError`` from
``xmltodict``; every other gap in the document is tolerated.
"""

from __future__ import annotations

import re
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Sequence

import xmltodict

from . import constants
from .models import Location, Package, RateEstimate, RateResponse
from .options import RateOptions

TRUE_LITERALS = frozenset({"true", "t", "yes", "y", "1"})
FALSE_LITERALS = frozenset({"false", "f", "no", "n", "0"})

_LEADING_INTEGER = re.compile(r"\s*([-+]?\d+)")
_LEADING_DECIMAL = re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)")


class InvalidBooleanError(ValueError):
    def __init__(self, literal: str) -> None:
        super().__init__(f'invalid value for Boolean: "{literal}"')
        self.literal = literal


def parse_bool(text: str | None) -> bool:
    if text is None:
        return False
    normalized = text.strip().lower()
    if not normalized or normalized in FALSE_LITERALS:
        return False
    if normalized in TRUE_LITERALS:
        return True
    raise InvalidBooleanError(text)


def parse_money(text: str | None) -> Decimal:
    """Parse a charge such as ``$1,234.56`` as a dollar amount (not cents)."""
    cleaned = (text or "").strip()
    if cleaned.startswith("$"):
        cleaned = cleaned[1:]
    cleaned = cleaned.replace(",", "")
    match = _LEADING_DECIMAL.match(cleaned)
    if not match:
        return Decimal("0")
    return Decimal(match.group(0))


def parse_service_days(text: str | None) -> int:
    match = _LEADING_INTEGER.match(text or "")
    return int(match.group(1)) if match else 0


def parse_rate_response(
    origin: Location,
    destination: Location,
    packages: Sequence[Package],
    response: str,
    options: RateOptions,
    *,
    request: str | None = None,
    today: date | None = None,
) -> RateResponse:
    today = today or date.today()
    packages = tuple(packages)
    params = xmltodict.parse(response, force_list=("string", "ServiceLevel"))

    result_node = _child(_child(params, "GetRateQuoteResponse"), "GetRateQuoteResult")

    success = parse_bool(_text(_child(result_node, "WasSuccess")))

    # API-level validation errors, e.g. "Origin Country must be USA or CAN ...".
    # Not intended for end users.
    messages = [
        text
        for text in (_text(node) for node in _children(_child(result_node, "Messages"), "string"))
        if text
    ]
    message = ", ".join(messages)

    service_levels = _children(_child(_child(result_node, "Result"), "ServiceLevels"), "ServiceLevel")
    rates = tuple(
        _build_rate_estimate(origin, destination, packages, service_level, today)
        for service_level in service_levels
    )

    if not rates:
        success = False
        if not message:
            message = constants.NO_RATES_MESSAGE

    return RateResponse(
        success=success,
        message=message,
        params=params,
        rates=rates,
        xml=response,
        request=request,
        log_xml=options.log_xml,
    )


def _build_rate_estimate(
    origin: Location,
    destination: Location,
    packages: tuple[Package, ...],
    service_level: Any,
    today: date,
) -> RateEstimate:
    # R+L returns a day count rather than a delivery date.
    delivery_date = today + timedelta(days=parse_service_days(_text(_child(service_level, "ServiceDays"))))
    return RateEstimate(
        origin=origin,
        destination=destination,
        carrier=constants.CARRIER_NAME,
        service_name=_text(_child(service_level, "Title")) or "",
        service_code=_text(_child(service_level, "Code")),
        total_price=parse_money(_text(_child(service_level, "NetCharge"))),
        currency=constants.CURRENCY,
        packages=packages,
        delivery_range=(delivery_date, delivery_date),
    )


def _child(node: Any, key: str) -> Any:
    if isinstance(node, dict):
        return node.get(key)
    return None


def _children(node: Any, key: str) -> list[Any]:
    value = _child(node, key)
    if value is None:
        return []
    return value if isinstance(value, list) else [value]


def _text(node: Any) -> str | None:
    if node is None:
        return None
    if isinstance(node, dict):
        return node.get("#text")
    return str(node)
