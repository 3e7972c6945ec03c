"""Builds the GetRateQuote SOAP 1.2 document.

Pure functions, no I/O. The document is assembled as nested dicts in the
carrier's required element order and serialized with ``xmltodict``.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Sequence

import xmltodict

from . import constants
from .models import Accessorial, Location, Package, QuoteType
from .options import RateOptions

logger = logging.getLogger(__name__)

FLAG_ACCESSORIALS: tuple[tuple[str, Accessorial], ...] = (
    ("residential", Accessorial.RESIDENTIAL_DELIVERY),
    ("liftgate", Accessorial.DESTINATION_LIFTGATE),
    ("delivery_notification", Accessorial.DELIVERY_NOTIFICATION),
)


def build_rate_request(
    origin: Location,
    destination: Location,
    packages: Sequence[Package],
    options: RateOptions,
) -> str:
    if not _uses_imperial_units(origin):
        # R+L only rates in pounds/inches; metric origins are encoded the same way.
        logger.debug("Origin country %s is not imperial; encoding packages in lbs/in", origin.country_code)

    request: dict[str, Any] = {
        "rlc:CustomerData": constants.CUSTOMER_DATA,
        "rlc:QuoteType": QuoteType.DOMESTIC.value,
        "rlc:CODAmount": constants.COD_AMOUNT,
        "rlc:Origin": build_location_node(origin),
        "rlc:Destination": build_location_node(destination),
        "rlc:Items": {"rlc:Item": [build_item_node(package) for package in packages]},
        "rlc:DeclaredValue": options.value,
        "rlc:Accessorials": {"rlc:Accessorial": [item.value for item in selected_accessorials(options)]},
        "OverDimensionPcs": constants.OVER_DIMENSION_PCS,
    }
    document = {
        "soap12:Envelope": {
            "@xmlns:soap12": constants.SOAP12_NAMESPACE,
            "soap12:Body": {
                "rlc:GetRateQuote": {
                    "@xmlns:rlc": constants.RLC_NAMESPACE,
                    "rlc:APIKey": options.key,
                    "rlc:request": request,
                },
            },
        },
    }
    return xmltodict.unparse(document)


def build_location_node(location: Location) -> dict[str, Any]:
    return {
        "rlc:City": location.city,
        "rlc:StateOrProvince": location.province,
        "rlc:ZipOrPostalCode": location.postal_code,
        "rlc:CountryCode": constants.COUNTRY_CODE,
    }


def build_item_node(package: Package) -> dict[str, Any]:
    item: dict[str, Any] = {}
    if package.freight_class:
        item["rlc:Class"] = package.freight_class
    item["rlc:Weight"] = _format_number(package.lbs())
    item["rlc:Width"] = _format_number(package.inches("width"))
    item["rlc:Height"] = _format_number(package.inches("height"))
    item["rlc:Length"] = _format_number(package.inches("length"))
    return item


def selected_accessorials(options: RateOptions) -> list[Accessorial]:
    """Accessorials switched on by the boolean flags, then any explicit extras."""
    selected = [accessorial for flag, accessorial in FLAG_ACCESSORIALS if getattr(options, flag)]
    for accessorial in options.accessorials:
        if accessorial not in selected:
            selected.append(accessorial)
    return selected


def _uses_imperial_units(origin: Location) -> bool:
    return origin.country_code in constants.IMPERIAL_COUNTRIES


def _format_number(value: float) -> str:
    amount = Decimal(str(round(float(value), 2)))
    if amount == amount.to_integral_value():
        return str(int(amount))
    return format(amount.normalize(), "f")
