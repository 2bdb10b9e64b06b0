from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CurrencyDescriptor:
    code: str
    symbol: str
    name: str

    def to_jsonable(self) -> dict[str, str]:
        return {"code": self.code, "symbol": self.symbol, "name": self.name}


def _c(code: str, symbol: str, name: str) -> CurrencyDescriptor:
    return CurrencyDescriptor(code=code, symbol=symbol, name=name)


_EUR = _c("EUR", "€", "Euro")
_USD = _c("USD", "$", "United States Dollar")
_XOF = _c("XOF", "CFA", "West African CFA Franc")
_XAF = _c("XAF", "FCFA", "Central African CFA Franc")
_XCD = _c("XCD", "EC$", "East Caribbean Dollar")
_AUD = _c("AUD", "A$", "Australian Dollar")
_NZD = _c("NZD", "NZ$", "New Zealand Dollar")
_CHF = _c("CHF", "CHF", "Swiss Franc")
_DKK = _c("DKK", "kr", "Danish Krone")
_NOK = _c("NOK", "kr", "Norwegian Krone")
_GBP = _c("GBP", "£", "British Pound Sterling")
_INR = _c("INR", "₹", "Indian Rupee")
_ZAR = _c("ZAR", "R", "South African Rand")
_MAD = _c("MAD", "DH", "Moroccan Dirham")
_XPF = _c("XPF", "₣", "CFP Franc")
_ILS = _c("ILS", "₪", "Israeli New Shekel")
_ANG = _c("ANG", "ƒ", "Netherlands Antillean Guilder")

# Keyed by ISO 3166-1 alpha-2 country or region code.
CURRENCIES: dict[str, CurrencyDescriptor] = {
    "AD": _EUR,
    "AE": _c("AED", "د.إ", "United Arab Emirates Dirham"),
    "AF": _c("AFN", "؋", "Afghan Afghani"),
    "AG": _XCD,
    "AI": _XCD,
    "AL": _c("ALL", "L", "Albanian Lek"),
    "AM": _c("AMD", "֏", "Armenian Dram"),
    "AO": _c("AOA", "Kz", "Angolan Kwanza"),
    "AR": _c("ARS", "$", "Argentine Peso"),
    "AS": _USD,
    "AT": _EUR,
    "AU": _AUD,
    "AW": _c("AWG", "ƒ", "Aruban Florin"),
    "AX": _EUR,
    "AZ": _c("AZN", "₼", "Azerbaijani Manat"),
    "BA": _c("BAM", "KM", "Bosnia-Herzegovina Convertible Mark"),
    "BB": _c("BBD", "Bds$", "Barbadian Dollar"),
    "BD": _c("BDT", "৳", "Bangladeshi Taka"),
    "BE": _EUR,
    "BF": _XOF,
    "BG": _c("BGN", "лв", "Bulgarian Lev"),
    "BH": _c("BHD", ".د.ب", "Bahraini Dinar"),
    "BI": _c("BIF", "FBu", "Burundian Franc"),
    "BJ": _XOF,
    "BL": _EUR,
    "BM": _c("BMD", "$", "Bermudian Dollar"),
    "BN": _c("BND", "B$", "Brunei Dollar"),
    "BO": _c("BOB", "Bs.", "Bolivian Boliviano"),
    "BQ": _USD,
    "BR": _c("BRL", "R$", "Brazilian Real"),
    "BS": _c("BSD", "B$", "Bahamian Dollar"),
    "BT": _c("BTN", "Nu.", "Bhutanese Ngultrum"),
    "BV": _NOK,
    "BW": _c("BWP", "P", "Botswanan Pula"),
    "BY": _c("BYN", "Br", "Belarusian Ruble"),
    "BZ": _c("BZD", "BZ$", "Belize Dollar"),
    "CA": _c("CAD", "C$", "Canadian Dollar"),
    "CC": _AUD,
    "CD": _c("CDF", "FC", "Congolese Franc"),
    "CF": _XAF,
    "CG": _XAF,
    "CH": _CHF,
    "CI": _XOF,
    "CK": _NZD,
    "CL": _c("CLP", "$", "Chilean Peso"),
    "CM": _XAF,
    "CN": _c("CNY", "¥", "Chinese Yuan"),
    "CO": _c("COP", "$", "Colombian Peso"),
    "CR": _c("CRC", "₡", "Costa Rican Colón"),
    "CU": _c("CUP", "₱", "Cuban Peso"),
    "CV": _c("CVE", "Esc", "Cape Verdean Escudo"),
    "CW": _ANG,
    "CX": _AUD,
    "CY": _EUR,
    "CZ": _c("CZK", "Kč", "Czech Koruna"),
    "DE": _EUR,
    "DJ": _c("DJF", "Fdj", "Djiboutian Franc"),
    "DK": _DKK,
    "DM": _XCD,
    "DO": _c("DOP", "RD$", "Dominican Peso"),
    "DZ": _c("DZD", "د.ج", "Algerian Dinar"),
    "EC": _USD,
    "EE": _EUR,
    "EG": _c("EGP", "E£", "Egyptian Pound"),
    "EH": _MAD,
    "ER": _c("ERN", "Nfk", "Eritrean Nakfa"),
    "ES": _EUR,
    "ET": _c("ETB", "Br", "Ethiopian Birr"),
    "FI": _EUR,
    "FJ": _c("FJD", "FJ$", "Fijian Dollar"),
    "FK": _c("FKP", "£", "Falkland Islands Pound"),
    "FM": _USD,
    "FO": _DKK,
    "FR": _EUR,
    "GA": _XAF,
    "GB": _GBP,
    "GD": _XCD,
    "GE": _c("GEL", "₾", "Georgian Lari"),
    "GF": _EUR,
    "GG": _GBP,
    "GH": _c("GHS", "GH₵", "Ghanaian Cedi"),
    "GI": _c("GIP", "£", "Gibraltar Pound"),
    "GL": _DKK,
    "GM": _c("GMD", "D", "Gambian Dalasi"),
    "GN": _c("GNF", "FG", "Guinean Franc"),
    "GP": _EUR,
    "GQ": _XAF,
    "GR": _EUR,
    "GS": _GBP,
    "GT": _c("GTQ", "Q", "Guatemalan Quetzal"),
    "GU": _USD,
    "GW": _XOF,
    "GY": _c("GYD", "G$", "Guyanaese Dollar"),
    "HK": _c("HKD", "HK$", "Hong Kong Dollar"),
    "HM": _AUD,
    "HN": _c("HNL", "L", "Honduran Lempira"),
    "HR": _EUR,
    "HT": _c("HTG", "G", "Haitian Gourde"),
    "HU": _c("HUF", "Ft", "Hungarian Forint"),
    "ID": _c("IDR", "Rp", "Indonesian Rupiah"),
    "IE": _EUR,
    "IL": _ILS,
    "IM": _GBP,
    "IN": _INR,
    "IO": _USD,
    "IQ": _c("IQD", "ع.د", "Iraqi Dinar"),
    "IR": _c("IRR", "﷼", "Iranian Rial"),
    "IS": _c("ISK", "kr", "Icelandic Króna"),
    "IT": _EUR,
    "JE": _GBP,
    "JM": _c("JMD", "J$", "Jamaican Dollar"),
    "JO": _c("JOD", "JD", "Jordanian Dinar"),
    "JP": _c("JPY", "¥", "Japanese Yen"),
    "KE": _c("KES", "KSh", "Kenyan Shilling"),
    "KG": _c("KGS", "с", "Kyrgystani Som"),
    "KH": _c("KHR", "៛", "Cambodian Riel"),
    "KI": _AUD,
    "KM": _c("KMF", "CF", "Comorian Franc"),
    "KN": _XCD,
    "KP": _c("KPW", "₩", "North Korean Won"),
    "KR": _c("KRW", "₩", "South Korean Won"),
    "KW": _c("KWD", "KD", "Kuwaiti Dinar"),
    "KY": _c("KYD", "CI$", "Cayman Islands Dollar"),
    "KZ": _c("KZT", "₸", "Kazakhstani Tenge"),
    "LA": _c("LAK", "₭", "Laotian Kip"),
    "LB": _c("LBP", "L£", "Lebanese Pound"),
    "LC": _XCD,
    "LI": _CHF,
    "LK": _c("LKR", "Rs", "Sri Lankan Rupee"),
    "LR": _c("LRD", "L$", "Liberian Dollar"),
    "LS": _c("LSL", "L", "Lesotho Loti"),
    "LT": _EUR,
    "LU": _EUR,
    "LV": _EUR,
    "LY": _c("LYD", "LD", "Libyan Dinar"),
    "MA": _MAD,
    "MC": _EUR,
    "MD": _c("MDL", "L", "Moldovan Leu"),
    "ME": _EUR,
    "MF": _EUR,
    "MG": _c("MGA", "Ar", "Malagasy Ariary"),
    "MH": _USD,
    "MK": _c("MKD", "ден", "Macedonian Denar"),
    "ML": _XOF,
    "MM": _c("MMK", "K", "Myanma Kyat"),
    "MN": _c("MNT", "₮", "Mongolian Tugrik"),
    "MO": _c("MOP", "MOP$", "Macanese Pataca"),
    "MP": _USD,
    "MQ": _EUR,
    "MR": _c("MRU", "UM", "Mauritanian Ouguiya"),
    "MS": _XCD,
    "MT": _EUR,
    "MU": _c("MUR", "₨", "Mauritian Rupee"),
    "MV": _c("MVR", "Rf", "Maldivian Rufiyaa"),
    "MW": _c("MWK", "MK", "Malawian Kwacha"),
    "MX": _c("MXN", "$", "Mexican Peso"),
    "MY": _c("MYR", "RM", "Malaysian Ringgit"),
    "MZ": _c("MZN", "MT", "Mozambican Metical"),
    "NA": _c("NAD", "N$", "Namibian Dollar"),
    "NC": _XPF,
    "NE": _XOF,
    "NF": _AUD,
    "NG": _c("NGN", "₦", "Nigerian Naira"),
    "NI": _c("NIO", "C$", "Nicaraguan Córdoba"),
    "NL": _EUR,
    "NO": _NOK,
    "NP": _c("NPR", "₨", "Nepalese Rupee"),
    "NR": _AUD,
    "NU": _NZD,
    "NZ": _NZD,
    "OM": _c("OMR", "﷼", "Omani Rial"),
    "PA": _c("PAB", "B/.", "Panamanian Balboa"),
    "PE": _c("PEN", "S/", "Peruvian Sol"),
    "PF": _XPF,
    "PG": _c("PGK", "K", "Papua New Guinean Kina"),
    "PH": _c("PHP", "₱", "Philippine Peso"),
    "PK": _c("PKR", "₨", "Pakistani Rupee"),
    "PL": _c("PLN", "zł", "Polish Zloty"),
    "PM": _EUR,
    "PN": _NZD,
    "PR": _USD,
    "PS": _ILS,
    "PT": _EUR,
    "PW": _USD,
    "PY": _c("PYG", "₲", "Paraguayan Guarani"),
    "QA": _c("QAR", "﷼", "Qatari Rial"),
    "RE": _EUR,
    "RO": _c("RON", "lei", "Romanian Leu"),
    "RS": _c("RSD", "дин.", "Serbian Dinar"),
    "RU": _c("RUB", "₽", "Russian Ruble"),
    "RW": _c("RWF", "FRw", "Rwandan Franc"),
    "SA": _c("SAR", "﷼", "Saudi Riyal"),
    "SB": _c("SBD", "SI$", "Solomon Islands Dollar"),
    "SC": _c("SCR", "SRe", "Seychellois Rupee"),
    "SD": _c("SDG", "ج.س.", "Sudanese Pound"),
    "SE": _c("SEK", "kr", "Swedish Krona"),
    "SG": _c("SGD", "S$", "Singapore Dollar"),
    "SH": _c("SHP", "£", "Saint Helena Pound"),
    "SI": _EUR,
    "SJ": _NOK,
    "SK": _EUR,
    "SL": _c("SLE", "Le", "Sierra Leonean Leone"),
    "SM": _EUR,
    "SN": _XOF,
    "SO": _c("SOS", "Sh", "Somali Shilling"),
    "SR": _c("SRD", "$", "Surinamese Dollar"),
    "SS": _c("SSP", "£", "South Sudanese Pound"),
    "ST": _c("STN", "Db", "São Tomé and Príncipe Dobra"),
    "SV": _USD,
    "SX": _ANG,
    "SY": _c("SYP", "£S", "Syrian Pound"),
    "SZ": _c("SZL", "E", "Swazi Lilangeni"),
    "TC": _USD,
    "TD": _XAF,
    "TF": _EUR,
    "TG": _XOF,
    "TH": _c("THB", "฿", "Thai Baht"),
    "TJ": _c("TJS", "SM", "Tajikistani Somoni"),
    "TK": _NZD,
    "TL": _USD,
    "TM": _c("TMT", "T", "Turkmenistani Manat"),
    "TN": _c("TND", "DT", "Tunisian Dinar"),
    "TO": _c("TOP", "T$", "Tongan Paʻanga"),
    "TR": _c("TRY", "₺", "Turkish Lira"),
    "TT": _c("TTD", "TT$", "Trinidad and Tobago Dollar"),
    "TV": _AUD,
    "TW": _c("TWD", "NT$", "New Taiwan Dollar"),
    "TZ": _c("TZS", "TSh", "Tanzanian Shilling"),
    "UA": _c("UAH", "₴", "Ukrainian Hryvnia"),
    "UG": _c("UGX", "USh", "Ugandan Shilling"),
    "UM": _USD,
    "US": _USD,
    "UY": _c("UYU", "$U", "Uruguayan Peso"),
    "UZ": _c("UZS", "soʻm", "Uzbekistan Som"),
    "VA": _EUR,
    "VC": _XCD,
    "VE": _c("VES", "Bs.S", "Venezuelan Bolívar"),
    "VG": _USD,
    "VI": _USD,
    "VN": _c("VND", "₫", "Vietnamese Dong"),
    "VU": _c("VUV", "VT", "Vanuatu Vatu"),
    "WF": _XPF,
    "WS": _c("WST", "WS$", "Samoan Tala"),
    "XK": _EUR,
    "YE": _c("YER", "﷼", "Yemeni Rial"),
    "YT": _EUR,
    "ZA": _ZAR,
    "ZM": _c("ZMW", "ZK", "Zambian Kwacha"),
    "ZW": _c("ZWL", "Z$", "Zimbabwean Dollar"),
}

_BY_CODE: dict[str, CurrencyDescriptor] = {}
for _descriptor in CURRENCIES.values():
    _BY_CODE.setdefault(_descriptor.code, _descriptor)


def for_country(country: str | None) -> CurrencyDescriptor | None:
    if not country:
        return None
    return CURRENCIES.get(country.strip().upper())


def by_code(code: str | None) -> CurrencyDescriptor | None:
    if not code:
        return None
    return _BY_CODE.get(code.strip().upper())


def is_supported(code: str | None) -> bool:
    return by_code(code) is not None


def as_jsonable() -> dict[str, dict[str, str]]:
    return {country: descriptor.to_jsonable() for country, descriptor in CURRENCIES.items()}
