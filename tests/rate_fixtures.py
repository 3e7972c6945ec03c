from rl_freight_mcp.models import Location, Package


def make_origin() -> Location:
    return Location(city="Wilmington", province="OH", postal_code="45177", country="US")


def make_destination() -> Location:
    return Location(city="Atlanta", province="GA", postal_code="30301", country="US")


def make_packages(num_packages: int = 1, freight_class: str | None = "70") -> list[Package]:
    """Return ``num_packages`` distinguishable imperial packages.

    Weights are 100, 200, ... so the order of items in a request can be
    checked.
    """
    return [
        Package(
            weight=100 * (idx + 1),
            length=48,
            width=40,
            height=36 + idx,
            freight_class=freight_class,
        )
        for idx in range(num_packages)
    ]


def make_service_level(title: str, code: str, net_charge: str, service_days: str) -> dict:
    return {"Title": title, "Code": code, "NetCharge": net_charge, "ServiceDays": service_days}


def make_rate_response_xml(
    was_success: str = "true",
    messages: tuple[str, ...] = (),
    service_levels: tuple[dict, ...] = (),
    soap_envelope: bool = False,
) -> str:
    """Build a GetRateQuote response body.

    With ``soap_envelope`` the body is wrapped the way the live service sends
    it, before the transport strips the SOAP tags.
    """
    message_xml = "".join(f"<string>{message}</string>" for message in messages)
    level_xml = "".join(
        "<ServiceLevel>"
        + "".join(f"<{key}>{value}</{key}>" for key, value in level.items())
        + "</ServiceLevel>"
        for level in service_levels
    )
    body = (
        '<GetRateQuoteResponse xmlns="http://www.rlcarriers.com/">'
        "<GetRateQuoteResult>"
        f"<WasSuccess>{was_success}</WasSuccess>"
        f"<Messages>{message_xml}</Messages>"
        f"<Result><ServiceLevels>{level_xml}</ServiceLevels></Result>"
        "</GetRateQuoteResult>"
        "</GetRateQuoteResponse>"
    )
    if not soap_envelope:
        return '<?xml version="1.0" encoding="utf-8"?>' + body
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        '<soap:Envelope xmlns:soap="http://www.w3.org/2003/05/soap-envelope">\n'
        f"<soap:Body>{body}</soap:Body>\n"
        "</soap:Envelope>"
    )
