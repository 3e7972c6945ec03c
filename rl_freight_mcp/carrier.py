from __future__ import annotations

import logging
import threading
from typing import Any, Mapping, Sequence

from . import constants
from .http_client import RLHTTPClient
from .models import Location, Package, RateResponse
from .options import RateOptions
from .request_builder import build_rate_request
from .response_parser import parse_rate_response

logger = logging.getLogger(__name__)


class TooManyItemsError(ValueError):
    def __init__(self, count: int) -> None:
        super().__init__(f"R+L accepts at most {constants.MAX_ITEMS} items per quote, got {count}")
        self.count = count


class RLFreightCarrier:
    """Rate-quote adapter for R+L Carriers.

    Options given at construction act as defaults for every call; options
    passed to ``find_rates`` override them key by key.
    """

    name = constants.CARRIER_NAME
    retry_safe = True
    maximum_weight_lbs = constants.MAXIMUM_WEIGHT_LBS
    requirements = ("key",)

    def __init__(
        self,
        options: RateOptions | Mapping[str, Any] | None = None,
        http_client: RLHTTPClient | None = None,
    ) -> None:
        self.options = RateOptions.merge(options)
        missing = [name for name in self.requirements if not getattr(self.options, name)]
        if missing:
            raise ValueError(f"Missing required parameter: {', '.join(missing)}")
        self.http_client = http_client or RLHTTPClient()

    def find_rates(
        self,
        origin: Location,
        destination: Location,
        packages: Package | Sequence[Package],
        options: RateOptions | Mapping[str, Any] | None = None,
        *,
        timeout: float | None = None,
        cancel_event: threading.Event | None = None,
    ) -> RateResponse:
        effective = RateOptions.merge(self.options, options)
        package_list = (packages,) if isinstance(packages, Package) else tuple(packages)
        if len(package_list) > constants.MAX_ITEMS:
            raise TooManyItemsError(len(package_list))

        rate_request = build_rate_request(origin, destination, package_list, effective)
        if effective.log_xml:
            logger.info("R+L rate request: %s", rate_request)

        response = self.http_client.post_rate_request(
            rate_request,
            test=effective.test,
            timeout=timeout,
            cancel_event=cancel_event,
        )
        if effective.log_xml:
            logger.info("R+L rate response: %s", response)

        return parse_rate_response(
            origin,
            destination,
            package_list,
            response,
            effective,
            request=rate_request,
        )
