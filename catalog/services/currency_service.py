"""Static-rate currency conversion used for the EUR column of the product list."""

from decimal import Decimal, ROUND_HALF_UP

from catalog.core.exceptions import CurrencyRateNotFoundException

# 1 USD is 0.98 EUR; further source currencies go in as new top-level keys
RATES = {
    "usd": {
        "eur": 0.98,
    },
}


def convert(amount: float, currency_from: str, currency_to: str) -> float:
    """Convert ``amount`` using the static rate table.

    Raises ``CurrencyRateNotFoundException`` when ``currency_from`` is
    unknown. A known source with an unconfigured target converts to 0.
    """
    source = currency_from.lower()
    if source not in RATES:
        raise CurrencyRateNotFoundException("Currency rate not found")

    rate = RATES[source].get(currency_to.lower(), 0)

    converted = Decimal(str(amount)) * Decimal(str(rate))
    return float(converted.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
