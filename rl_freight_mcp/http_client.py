from __future__ import annotations

import json
import logging
import re
import threading

import requests
from mcp.server.fastmcp.exceptions import ToolError

from . import constants

logger = logging.getLogger(__name__)

_SOAP_TAG_PATTERN = re.compile(r"</?soap(?:12)?:[^>]*>")


class RLHTTPClient:
    def __init__(
        self,
        test_url: str = constants.TEST_URL,
        live_url: str = constants.LIVE_URL,
        timeout: float = 30.0,
    ) -> None:
        self.test_url = test_url
        self.live_url = live_url
        self.timeout = timeout

    def post_rate_request(
        self,
        xml_request: str,
        *,
        test: bool = False,
        timeout: float | None = None,
        cancel_event: threading.Event | None = None,
    ) -> str:
        url = self.test_url if test else self.live_url
        body = xml_request.replace("\n", "")
        headers = {"Content-Type": constants.SOAP_CONTENT_TYPE}

        _raise_if_cancelled(cancel_event)
        try:
            response = requests.post(
                url,
                data=body.encode("utf-8"),
                headers=headers,
                timeout=timeout if timeout is not None else self.timeout,
            )
        except requests.RequestException as exc:
            raise ToolError(json.dumps({
                "code": "REQUEST_ERROR",
                "message": str(exc),
            }))
        _raise_if_cancelled(cancel_event)

        if not 200 <= response.status_code < 300:
            raise ToolError(json.dumps({
                "status_code": response.status_code,
                "code": str(response.status_code),
                "message": f"R+L API returned HTTP {response.status_code}",
                "details": response.text,
            }))

        logger.debug("R+L responded %s from %s", response.status_code, url)
        return strip_soap_tags(response.text)


def strip_soap_tags(body: str) -> str:
    return _SOAP_TAG_PATTERN.sub("", body)


def _raise_if_cancelled(cancel_event: threading.Event | None) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise ToolError(json.dumps({
            "code": "CANCELLED",
            "message": "Rate request was cancelled",
        }))
