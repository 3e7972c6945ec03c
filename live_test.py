"""Live rate quote against the R+L Carriers RateQuoteService.

Requires RL_API_KEY in the environment (or .env). Runs a handful of quotes
that exercise the accessorial flags and multi-item requests, then prints a
summary table.

Known limitations (not code bugs):
  - QuoteType is always Domestic, so non US/CA lanes come back with
    "Origin Country must be USA or CAN" messages and no rates
  - R+L returns service days, not delivery dates
"""

import os

from dotenv import load_dotenv
load_dotenv()

from rl_freight_mcp.carrier import RLFreightCarrier
from rl_freight_mcp.models import Location, Package

API_KEY = os.getenv("RL_API_KEY")

carrier = RLFreightCarrier(options={"key": API_KEY, "test": True, "value": "1500"})

origin = Location(city="Wilmington", province="OH", postal_code="45177", country="US")
destination = Location(city="Atlanta", province="GA", postal_code="30301", country="US")
pallet = Package(weight=500, length=48, width=40, height=36, freight_class="70")

results: list[tuple[str, str, str]] = []  # (case, status, detail)


def run_test(name: str, fn):
    """Run a single quote and record the result."""
    try:
        response = fn()
        detail = response.message or ", ".join(
            f"{rate.service_name} {rate.total_price} ({rate.delivery_date})" for rate in response.rates
        )
        results.append((name, "PASS" if response.success else "NO RATES", detail[:200]))
        print(f"  {'PASS' if response.success else 'NO RATES':8}  {name}")
        return response
    except Exception as exc:
        results.append((name, "FAIL", str(exc)[:300]))
        print(f"  FAIL      {name}: {exc!s:.200}")
        return None


if __name__ == "__main__":
    print("R+L Freight live rate quotes")
    run_test("single pallet", lambda: carrier.find_rates(origin, destination, [pallet]))
    run_test(
        "residential + liftgate",
        lambda: carrier.find_rates(origin, destination, [pallet], {"residential": True, "liftgate": True}),
    )
    run_test(
        "delivery notification, three items",
        lambda: carrier.find_rates(origin, destination, [pallet] * 3, {"delivery_notification": True}),
    )
    run_test(
        "metric pallet",
        lambda: carrier.find_rates(
            origin,
            destination,
            [Package(weight=225, length=120, width=100, height=90, freight_class="70", units="metric")],
        ),
    )
    run_test(
        "Canadian destination",
        lambda: carrier.find_rates(
            origin,
            Location(city="Toronto", province="ON", postal_code="M5V 2T6", country="CA"),
            [pallet],
        ),
    )

    print()
    for name, status, detail in results:
        print(f"{status:8}  {name:40}  {detail}")
