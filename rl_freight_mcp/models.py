"""Carrier-neutral shipment values and the rate results produced for them.

Locations and packages are what the aggregation layer hands in; rate
estimates and the rate response are what it gets back. Everything here is
immutable so one call's inputs can be shared across concurrent quotes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Literal

from . import constants


class QuoteType(str, Enum):
    DOMESTIC = "Domestic"
    ALASKA_HAWAII = "AlaskaHawaii"
    INTERNATIONAL = "International"


class Accessorial(str, Enum):
    """Add-on services R+L accepts, valued by their wire token."""

    INSIDE_DELIVERY = "InsideDelivery"
    RESIDENTIAL_PICKUP = "ResidentialPickup"
    RESIDENTIAL_DELIVERY = "ResidentialDelivery"
    ORIGIN_LIFTGATE = "OriginLiftgate"
    DESTINATION_LIFTGATE = "DestinationLiftgate"
    DELIVERY_NOTIFICATION = "DeliveryNotification"
    FREEZABLE = "Freezable"
    HAZMAT = "Hazmat"
    INSIDE_PICKUP = "InsidePickup"
    LIMITED_ACCESS_PICKUP = "LimitedAccessPickup"
    DOCK_PICKUP = "DockPickup"
    DOCK_DELIVERY = "DockDelivery"
    AIRPORT_PICKUP = "AirportPickup"
    AIRPORT_DELIVERY = "AirportDelivery"
    LIMITED_ACCESS_DELIVERY = "LimitedAccessDelivery"
    CUBIC_FEET = "CubicFeet"
    KEEP_FROM_FREEZING = "KeepFromFreezing"
    DOOR_TO_DOOR = "DoorToDoor"
    COD = "COD"
    FZ = "FZ"
    OVER_DIMENSION = "OverDimension"

    @property
    def key(self) -> str:
        return self.name.lower()

    @classmethod
    def from_key(cls, key: str) -> "Accessorial":
        """Look up an accessorial by its snake_case key, e.g. ``destination_liftgate``."""
        try:
            return cls[str(key).strip().upper()]
        except KeyError:
            allowed = ", ".join(member.key for member in cls)
            raise ValueError(f"Unknown accessorial '{key}'. Allowed values: {allowed}") from None


@dataclass(frozen=True)
class Location:
    city: str | None = None
    province: str | None = None
    postal_code: str | None = None
    country: str = "US"

    @property
    def country_code(self) -> str:
        return (self.country or "").strip().upper()


Dimension = Literal["length", "width", "height"]


@dataclass(frozen=True)
class Package:
    """A handling unit. ``units`` says how weight and dimensions are expressed."""

    weight: float
    length: float
    width: float
    height: float
    freight_class: str | None = None
    units: Literal["imperial", "metric"] = "imperial"

    def __post_init__(self) -> None:
        if self.units not in ("imperial", "metric"):
            raise ValueError(f"units must be 'imperial' or 'metric', got '{self.units}'")

    @property
    def imperial(self) -> bool:
        return self.units == "imperial"

    def lbs(self) -> float:
        if self.imperial:
            return float(self.weight)
        return float(self.weight) * constants.POUNDS_PER_KILOGRAM

    def kgs(self) -> float:
        if self.imperial:
            return float(self.weight) / constants.POUNDS_PER_KILOGRAM
        return float(self.weight)

    def inches(self, dimension: Dimension) -> float:
        value = float(getattr(self, dimension))
        return value if self.imperial else value / constants.CENTIMETRES_PER_INCH

    def centimetres(self, dimension: Dimension) -> float:
        value = float(getattr(self, dimension))
        return value * constants.CENTIMETRES_PER_INCH if self.imperial else value


@dataclass(frozen=True)
class RateEstimate:
    origin: Location
    destination: Location
    carrier: str
    service_name: str
    service_code: str | None
    total_price: Decimal
    currency: str
    packages: tuple[Package, ...]
    delivery_range: tuple[date, date]

    @property
    def delivery_date(self) -> date:
        return self.delivery_range[-1]

    def to_dict(self) -> dict[str, Any]:
        return {
            "carrier": self.carrier,
            "service_name": self.service_name,
            "service_code": self.service_code,
            "total_price": str(self.total_price),
            "currency": self.currency,
            "delivery_range": [day.isoformat() for day in self.delivery_range],
            "package_count": len(self.packages),
        }


@dataclass(frozen=True)
class RateResponse:
    success: bool
    message: str
    params: dict[str, Any] = field(default_factory=dict)
    rates: tuple[RateEstimate, ...] = ()
    xml: str | None = None
    request: str | None = None
    log_xml: bool = False

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "success": self.success,
            "message": self.message,
            "rates": [rate.to_dict() for rate in self.rates],
        }
        if self.log_xml:
            payload["request"] = self.request
            payload["xml"] = self.xml
        return payload
