from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import Accessorial


class RateOptions(BaseModel):
    """Option bag for a rate request. Unrecognized keys are dropped.

    ``key`` and ``value`` are required by the carrier but are not checked
    here; a missing value simply produces an empty element in the request.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    key: str | None = None
    value: Any = None
    test: bool = False
    residential: bool = False
    liftgate: bool = False
    delivery_notification: bool = False
    log_xml: bool = False
    accessorials: tuple[Accessorial, ...] = Field(default_factory=tuple)

    @field_validator("accessorials", mode="before")
    @classmethod
    def _coerce_accessorials(cls, value: Any) -> tuple[Accessorial, ...]:
        if value is None:
            return ()
        if isinstance(value, (str, Accessorial)):
            value = [value]
        return tuple(
            item if isinstance(item, Accessorial) else Accessorial.from_key(item)
            for item in value
        )

    @classmethod
    def merge(cls, *layers: "RateOptions | Mapping[str, Any] | None") -> "RateOptions":
        """Combine option layers left to right; later layers win key by key."""
        merged: dict[str, Any] = {}
        for layer in layers:
            if layer is None:
                continue
            if isinstance(layer, RateOptions):
                merged.update(layer.model_dump(exclude_unset=True))
            else:
                merged.update(layer)
        return cls.model_validate(merged)
