from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ConversionInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    currency_symbol: str = Field(alias="currencySymbol")
    price_tag: str = Field(alias="priceTag")
    amount: float
    currency_code: str = Field(alias="currencyCode")
    currency_name: str = Field(alias="currencyName")


class ConversionResponse(BaseModel):
    success: bool = True
    info: ConversionInfo


class RateInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_currency: str = Field(alias="from")
    to_currency: str = Field(alias="to")
    rate: float


class RateResponse(BaseModel):
    success: bool = True
    info: RateInfo


class LatestResponse(BaseModel):
    success: bool = True
    base: str
    rates: dict[str, float]


class CurrencyOut(BaseModel):
    code: str
    symbol: str
    name: str


class CurrenciesResponse(BaseModel):
    success: bool = True
    currencies: dict[str, CurrencyOut]


class StatusResponse(BaseModel):
    success: bool = True
    message: str
