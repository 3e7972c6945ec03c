from typing import Any
from xml.parsers.expat import ExpatError
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from dotenv import load_dotenv
import json
import os
import sys
from . import carrier as carrier_module
from .http_client import RLHTTPClient
from .models import Location, Package
from .options import RateOptions
from .response_parser import InvalidBooleanError

# Initialize FastMCP server
mcp = FastMCP("rl-freight-mcp")

load_dotenv()
api_key: str | None = None
test_mode: bool = True
timeout: float = 30.0
carrier: carrier_module.RLFreightCarrier | None = None


def _refresh_runtime_configuration() -> None:
    global api_key, test_mode, timeout
    test_mode = os.getenv("ENVIRONMENT") != "production"
    api_key = os.getenv("RL_API_KEY")
    timeout = float(os.getenv("RL_TIMEOUT") or 30.0)


def _initialize_carrier() -> None:
    global carrier
    carrier = carrier_module.RLFreightCarrier(
        options={"key": api_key, "test": test_mode},
        http_client=RLHTTPClient(timeout=timeout),
    )


def _require_carrier() -> carrier_module.RLFreightCarrier:
    if carrier is None:
        raise RuntimeError("Carrier is not initialized. Start R+L MCP via server.main().")
    return carrier


def _build_location(data: dict[str, Any], label: str) -> Location:
    if not isinstance(data, dict):
        raise TypeError(f"{label} must be a JSON object")
    return Location(
        city=data.get("city"),
        province=data.get("province"),
        postal_code=data.get("postal_code"),
        country=data.get("country") or "US",
    )


def _build_packages(items: list[dict[str, Any]]) -> list[Package]:
    if not isinstance(items, list) or not items:
        raise TypeError("packages must be a non-empty list of JSON objects")
    packages = []
    for idx, item in enumerate(items):
        if not isinstance(item, dict):
            raise TypeError(f"Package at index {idx} must be a JSON object")
        missing = [key for key in ("weight", "length", "width", "height") if item.get(key) is None]
        if missing:
            raise ValueError(f"Package at index {idx} missing required key(s): {', '.join(missing)}")
        packages.append(Package(
            weight=float(item["weight"]),
            length=float(item["length"]),
            width=float(item["width"]),
            height=float(item["height"]),
            freight_class=str(item["freight_class"]) if item.get("freight_class") else None,
            units=item.get("units", "imperial"),
        ))
    return packages


@mcp.tool()
async def find_rates(
    origin: dict[str, Any],
    destination: dict[str, Any],
    packages: list[dict[str, Any]],
    declared_value: str,
    residential: bool = False,
    liftgate: bool = False,
    delivery_notification: bool = False,
    accessorials: list[str] | None = None,
    log_xml: bool = False,
) -> dict[str, Any]:
    """
    Quote LTL freight rates with R+L Carriers (GetRateQuote SOAP operation).

    Args:
        origin (dict): Pickup location with keys city, province, postal_code, country (alpha-2, default US).
        destination (dict): Delivery location with the same keys as origin.
        packages (list[dict]): One to eight items, each with weight, length, width, height,
            optional freight_class and units ('imperial' for lbs/in, 'metric' for kg/cm).
        declared_value (str): Declared value of the goods in USD. Sent as given.
        residential (bool): Request residential delivery. Default false.
        liftgate (bool): Request a liftgate at the destination. Default false.
        delivery_notification (bool): Request delivery notification. Default false.
        accessorials (list[str] | None): Extra accessorial keys, e.g. ["inside_delivery", "hazmat"].
        log_xml (bool): Include the raw request and response XML in the result. Default false.

    Returns:
        dict[str, Any]: {"success": bool, "message": str, "rates": [...]} where each rate carries
        carrier, service_name, service_code, total_price (decimal string, USD), currency,
        delivery_range ([start, end] ISO dates) and package_count.
        On error, raises ToolError with JSON containing code and message.
    """
    try:
        origin_location = _build_location(origin, "origin")
        destination_location = _build_location(destination, "destination")
        package_list = _build_packages(packages)
        call_options = RateOptions(
            value=declared_value,
            residential=residential,
            liftgate=liftgate,
            delivery_notification=delivery_notification,
            accessorials=accessorials or (),
            log_xml=log_xml,
        )
    except (TypeError, ValueError) as exc:
        raise ToolError(json.dumps({
            "code": "VALIDATION_ERROR",
            "message": str(exc),
        }))

    try:
        rate_response = _require_carrier().find_rates(
            origin_location,
            destination_location,
            package_list,
            call_options,
        )
    except carrier_module.TooManyItemsError as exc:
        raise ToolError(json.dumps({
            "code": "TOO_MANY_ITEMS",
            "message": str(exc),
        }))
    except InvalidBooleanError as exc:
        raise ToolError(json.dumps({
            "code": "INVALID_BOOLEAN",
            "message": str(exc),
        }))
    except ExpatError as exc:
        raise ToolError(json.dumps({
            "code": "MALFORMED_RESPONSE",
            "message": f"R+L response is not well-formed XML: {exc}",
        }))

    return rate_response.to_dict()


def _validate_runtime_configuration() -> None:
    if not api_key:
        raise RuntimeError("Missing required env var: RL_API_KEY must be set before starting the server.")


def main():
    print("Starting R+L Freight MCP Server...", file=sys.stderr)
    _refresh_runtime_configuration()
    _validate_runtime_configuration()
    _initialize_carrier()

    try:
        mcp.run(transport='stdio')
    except KeyboardInterrupt:
        pass

if __name__ == "__main__":
    main()
