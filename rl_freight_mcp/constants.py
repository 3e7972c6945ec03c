TEST_URL = "http://api.rlcarriers.com/1.0.1/RateQuoteService.asmx"
LIVE_URL = "http://api.rlcarriers.com/1.0.1/RateQuoteService.asmx"

SOAP12_NAMESPACE = "http://www.w3.org/2003/05/soap-envelope"
RLC_NAMESPACE = "http://www.rlcarriers.com/"
RATE_QUOTE_ACTION = "http://www.rlcarriers.com/GetRateQuote"
SOAP_CONTENT_TYPE = f"application/soap+xml; charset=utf-8; action='{RATE_QUOTE_ACTION}'"

CARRIER_NAME = "R+L Freight"
# Arbitrarily large; R+L does not publish a weight ceiling.
MAXIMUM_WEIGHT_LBS = 1_000_000
MAX_ITEMS = 8

CUSTOMER_DATA = "ShipHawk.com"
# Required by the schema even for Canadian locations.
COUNTRY_CODE = "USA"
COD_AMOUNT = "0"
OVER_DIMENSION_PCS = "0"
CURRENCY = "USD"

# ---------------------------------------------------------------------------
# Unit systems
# ---------------------------------------------------------------------------

IMPERIAL_COUNTRIES = frozenset({"US", "LR", "MM"})

POUNDS_PER_KILOGRAM = 2.20462262
CENTIMETRES_PER_INCH = 2.54

NO_RATES_MESSAGE = "No shipping rates could be found for the destination address"
