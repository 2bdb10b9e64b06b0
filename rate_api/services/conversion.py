from __future__ import annotations

from dataclasses import dataclass

from rate_api.currencies import CurrencyDescriptor
from rate_api.services.rate_cache import RateSnapshot


@dataclass(frozen=True, slots=True)
class ConversionResult:
    rate: float
    amount: float
    currency: CurrencyDescriptor

    @property
    def price_tag(self) -> str:
        return f"{self.currency.symbol}{self.amount:.2f}"

    def to_info(self) -> dict[str, object]:
        return {
            "currencySymbol": self.currency.symbol,
            "priceTag": self.price_tag,
            "amount": self.amount,
            "currencyCode": self.currency.code,
            "currencyName": self.currency.name,
        }


def convert(snapshot: RateSnapshot, target: CurrencyDescriptor, amount: float) -> ConversionResult:
    # A target missing from the table converts at 0 rather than failing.
    rate = snapshot.rate_for(target.code)
    return ConversionResult(rate=rate, amount=rate * amount, currency=target)
