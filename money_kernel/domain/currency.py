"""Currency -- ISO 4217 registry with canonical scales and numeric codes."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import ClassVar, Mapping

from money_kernel.exceptions import UnknownCurrencyError


@dataclass(frozen=True, slots=True)
class Currency:
    """
    A single ISO 4217 currency (one entry of the currency table).

    Guarantees:
        - code is three uppercase ASCII letters
        - decimal_places is the canonical scale of amounts in this currency
    """

    code: str
    numeric_code: int
    decimal_places: int
    name: str

    def __post_init__(self) -> None:
        if len(self.code) != 3 or not (self.code.isascii() and self.code.isalpha() and self.code.isupper()):
            raise ValueError(f"Currency code must be 3 uppercase letters: {self.code!r}")
        if self.decimal_places < 0:
            raise ValueError(f"decimal_places cannot be negative: {self.decimal_places}")

    @classmethod
    def of(cls, currency: Currency | str) -> Currency:
        """Resolve a code through the registry; Currency instances pass through."""
        if isinstance(currency, Currency):
            return currency
        return CurrencyRegistry.lookup(currency)

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"Currency({self.code!r})"


# (code, numeric code, decimal places, name)
# Source: ISO 4217 list one. Keep sorted by section, bump TABLE_VERSION on edit.
_CURRENCY_TABLE: tuple[tuple[str, int, int, str], ...] = (
    # Major currencies
    ("USD", 840, 2, "US Dollar"),
    ("EUR", 978, 2, "Euro"),
    ("GBP", 826, 2, "Pound Sterling"),
    ("JPY", 392, 0, "Japanese Yen"),
    ("CHF", 756, 2, "Swiss Franc"),
    ("CAD", 124, 2, "Canadian Dollar"),
    ("AUD", 36, 2, "Australian Dollar"),
    ("NZD", 554, 2, "New Zealand Dollar"),
    # Zero decimal currencies
    ("BIF", 108, 0, "Burundian Franc"),
    ("CLP", 152, 0, "Chilean Peso"),
    ("DJF", 262, 0, "Djiboutian Franc"),
    ("GNF", 324, 0, "Guinean Franc"),
    ("ISK", 352, 0, "Icelandic Krona"),
    ("KMF", 174, 0, "Comorian Franc"),
    ("KRW", 410, 0, "South Korean Won"),
    ("PYG", 600, 0, "Paraguayan Guarani"),
    ("RWF", 646, 0, "Rwandan Franc"),
    ("UGX", 800, 0, "Ugandan Shilling"),
    ("UYI", 940, 0, "Uruguay Peso en Unidades Indexadas"),
    ("VND", 704, 0, "Vietnamese Dong"),
    ("VUV", 548, 0, "Vanuatu Vatu"),
    ("XAF", 950, 0, "Central African CFA Franc"),
    ("XOF", 952, 0, "West African CFA Franc"),
    ("XPF", 953, 0, "CFP Franc"),
    # Three decimal currencies
    ("BHD", 48, 3, "Bahraini Dinar"),
    ("IQD", 368, 3, "Iraqi Dinar"),
    ("JOD", 400, 3, "Jordanian Dinar"),
    ("KWD", 414, 3, "Kuwaiti Dinar"),
    ("LYD", 434, 3, "Libyan Dinar"),
    ("OMR", 512, 3, "Omani Rial"),
    ("TND", 788, 3, "Tunisian Dinar"),
    # Four decimal currencies
    ("CLF", 990, 4, "Chilean Unidad de Fomento"),
    ("UYW", 927, 4, "Unidad Previsional"),
    # Two decimal currencies
    ("AED", 784, 2, "UAE Dirham"),
    ("AFN", 971, 2, "Afghan Afghani"),
    ("ALL", 8, 2, "Albanian Lek"),
    ("AMD", 51, 2, "Armenian Dram"),
    ("ANG", 532, 2, "Netherlands Antillean Guilder"),
    ("AOA", 973, 2, "Angolan Kwanza"),
    ("ARS", 32, 2, "Argentine Peso"),
    ("AWG", 533, 2, "Aruban Florin"),
    ("AZN", 944, 2, "Azerbaijan Manat"),
    ("BAM", 977, 2, "Bosnia and Herzegovina Convertible Mark"),
    ("BBD", 52, 2, "Barbadian Dollar"),
    ("BDT", 50, 2, "Bangladeshi Taka"),
    ("BGN", 975, 2, "Bulgarian Lev"),
    ("BMD", 60, 2, "Bermudian Dollar"),
    ("BND", 96, 2, "Brunei Dollar"),
    ("BOB", 68, 2, "Bolivian Boliviano"),
    ("BOV", 984, 2, "Bolivian Mvdol"),
    ("BRL", 986, 2, "Brazilian Real"),
    ("BSD", 44, 2, "Bahamian Dollar"),
    ("BTN", 64, 2, "Bhutanese Ngultrum"),
    ("BWP", 72, 2, "Botswana Pula"),
    ("BYN", 933, 2, "Belarusian Ruble"),
    ("BZD", 84, 2, "Belize Dollar"),
    ("CDF", 976, 2, "Congolese Franc"),
    ("CHE", 947, 2, "WIR Euro"),
    ("CHW", 948, 2, "WIR Franc"),
    ("CNY", 156, 2, "Chinese Yuan"),
    ("COP", 170, 2, "Colombian Peso"),
    ("COU", 970, 2, "Colombian Unidad de Valor Real"),
    ("CRC", 188, 2, "Costa Rican Colon"),
    ("CUC", 931, 2, "Cuban Convertible Peso"),
    ("CUP", 192, 2, "Cuban Peso"),
    ("CVE", 132, 2, "Cape Verdean Escudo"),
    ("CZK", 203, 2, "Czech Koruna"),
    ("DKK", 208, 2, "Danish Krone"),
    ("DOP", 214, 2, "Dominican Peso"),
    ("DZD", 12, 2, "Algerian Dinar"),
    ("EGP", 818, 2, "Egyptian Pound"),
    ("ERN", 232, 2, "Eritrean Nakfa"),
    ("ETB", 230, 2, "Ethiopian Birr"),
    ("FJD", 242, 2, "Fijian Dollar"),
    ("FKP", 238, 2, "Falkland Islands Pound"),
    ("GEL", 981, 2, "Georgian Lari"),
    ("GHS", 936, 2, "Ghanaian Cedi"),
    ("GIP", 292, 2, "Gibraltar Pound"),
    ("GMD", 270, 2, "Gambian Dalasi"),
    ("GTQ", 320, 2, "Guatemalan Quetzal"),
    ("GYD", 328, 2, "Guyanese Dollar"),
    ("HKD", 344, 2, "Hong Kong Dollar"),
    ("HNL", 340, 2, "Honduran Lempira"),
    ("HTG", 332, 2, "Haitian Gourde"),
    ("HUF", 348, 2, "Hungarian Forint"),
    ("IDR", 360, 2, "Indonesian Rupiah"),
    ("ILS", 376, 2, "Israeli New Shekel"),
    ("INR", 356, 2, "Indian Rupee"),
    ("IRR", 364, 2, "Iranian Rial"),
    ("JMD", 388, 2, "Jamaican Dollar"),
    ("KES", 404, 2, "Kenyan Shilling"),
    ("KGS", 417, 2, "Kyrgyzstani Som"),
    ("KHR", 116, 2, "Cambodian Riel"),
    ("KPW", 408, 2, "North Korean Won"),
    ("KYD", 136, 2, "Cayman Islands Dollar"),
    ("KZT", 398, 2, "Kazakhstani Tenge"),
    ("LAK", 418, 2, "Lao Kip"),
    ("LBP", 422, 2, "Lebanese Pound"),
    ("LKR", 144, 2, "Sri Lankan Rupee"),
    ("LRD", 430, 2, "Liberian Dollar"),
    ("LSL", 426, 2, "Lesotho Loti"),
    ("MAD", 504, 2, "Moroccan Dirham"),
    ("MDL", 498, 2, "Moldovan Leu"),
    ("MGA", 969, 2, "Malagasy Ariary"),
    ("MKD", 807, 2, "Macedonian Denar"),
    ("MMK", 104, 2, "Myanmar Kyat"),
    ("MNT", 496, 2, "Mongolian Tugrik"),
    ("MOP", 446, 2, "Macanese Pataca"),
    ("MRU", 929, 2, "Mauritanian Ouguiya"),
    ("MUR", 480, 2, "Mauritian Rupee"),
    ("MVR", 462, 2, "Maldivian Rufiyaa"),
    ("MWK", 454, 2, "Malawian Kwacha"),
    ("MXN", 484, 2, "Mexican Peso"),
    ("MXV", 979, 2, "Mexican Unidad de Inversion"),
    ("MYR", 458, 2, "Malaysian Ringgit"),
    ("MZN", 943, 2, "Mozambican Metical"),
    ("NAD", 516, 2, "Namibian Dollar"),
    ("NGN", 566, 2, "Nigerian Naira"),
    ("NIO", 558, 2, "Nicaraguan Cordoba"),
    ("NOK", 578, 2, "Norwegian Krone"),
    ("NPR", 524, 2, "Nepalese Rupee"),
    ("PAB", 590, 2, "Panamanian Balboa"),
    ("PEN", 604, 2, "Peruvian Sol"),
    ("PGK", 598, 2, "Papua New Guinean Kina"),
    ("PHP", 608, 2, "Philippine Peso"),
    ("PKR", 586, 2, "Pakistani Rupee"),
    ("PLN", 985, 2, "Polish Zloty"),
    ("QAR", 634, 2, "Qatari Riyal"),
    ("RON", 946, 2, "Romanian Leu"),
    ("RSD", 941, 2, "Serbian Dinar"),
    ("RUB", 643, 2, "Russian Ruble"),
    ("SAR", 682, 2, "Saudi Riyal"),
    ("SBD", 90, 2, "Solomon Islands Dollar"),
    ("SCR", 690, 2, "Seychellois Rupee"),
    ("SDG", 938, 2, "Sudanese Pound"),
    ("SEK", 752, 2, "Swedish Krona"),
    ("SGD", 702, 2, "Singapore Dollar"),
    ("SHP", 654, 2, "Saint Helena Pound"),
    ("SLE", 925, 2, "Sierra Leonean Leone"),
    ("SOS", 706, 2, "Somali Shilling"),
    ("SRD", 968, 2, "Surinamese Dollar"),
    ("SSP", 728, 2, "South Sudanese Pound"),
    ("STN", 930, 2, "Sao Tome and Principe Dobra"),
    ("SVC", 222, 2, "Salvadoran Colon"),
    ("SYP", 760, 2, "Syrian Pound"),
    ("SZL", 748, 2, "Swazi Lilangeni"),
    ("THB", 764, 2, "Thai Baht"),
    ("TJS", 972, 2, "Tajikistani Somoni"),
    ("TMT", 934, 2, "Turkmenistan Manat"),
    ("TOP", 776, 2, "Tongan Paanga"),
    ("TRY", 949, 2, "Turkish Lira"),
    ("TTD", 780, 2, "Trinidad and Tobago Dollar"),
    ("TWD", 901, 2, "New Taiwan Dollar"),
    ("TZS", 834, 2, "Tanzanian Shilling"),
    ("UAH", 980, 2, "Ukrainian Hryvnia"),
    ("USN", 997, 2, "US Dollar (Next day)"),
    ("UYU", 858, 2, "Uruguayan Peso"),
    ("UZS", 860, 2, "Uzbekistani Som"),
    ("VED", 926, 2, "Venezuelan Bolivar Digital"),
    ("VES", 928, 2, "Venezuelan Bolivar Soberano"),
    ("WST", 882, 2, "Samoan Tala"),
    ("XCD", 951, 2, "East Caribbean Dollar"),
    ("YER", 886, 2, "Yemeni Rial"),
    ("ZAR", 710, 2, "South African Rand"),
    ("ZMW", 967, 2, "Zambian Kwacha"),
    ("ZWL", 932, 2, "Zimbabwean Dollar"),
    # Funds, precious metals and special codes (no minor unit)
    ("XAG", 961, 0, "Silver (troy ounce)"),
    ("XAU", 959, 0, "Gold (troy ounce)"),
    ("XBA", 955, 0, "European Composite Unit"),
    ("XBB", 956, 0, "European Monetary Unit"),
    ("XBC", 957, 0, "European Unit of Account 9"),
    ("XBD", 958, 0, "European Unit of Account 17"),
    ("XDR", 960, 0, "Special Drawing Rights"),
    ("XPD", 964, 0, "Palladium (troy ounce)"),
    ("XPT", 962, 0, "Platinum (troy ounce)"),
    ("XSU", 994, 0, "Sucre"),
    ("XTS", 963, 0, "Testing Code"),
    ("XUA", 965, 0, "ADB Unit of Account"),
    ("XXX", 999, 0, "No currency"),
)

_CURRENCIES: Mapping[str, Currency] = MappingProxyType(
    {code: Currency(code, numeric, places, name) for code, numeric, places, name in _CURRENCY_TABLE}
)
_BY_NUMERIC: Mapping[int, Currency] = MappingProxyType(
    {currency.numeric_code: currency for currency in _CURRENCIES.values()}
)


def _normalize(code: str) -> str:
    if not code or not isinstance(code, str):
        return ""
    return code.upper().strip()


class CurrencyRegistry:
    """
    Read-only ISO 4217 table (code -> canonical scale and numeric code).

    Built once at import time; there is no mutation API, so concurrent
    lookups need no locking.
    """

    TABLE_VERSION: ClassVar[str] = "2024.1"

    @classmethod
    def lookup(cls, code: str) -> Currency:
        """
        Get the currency entry for a code (case-insensitive, whitespace trimmed).

        Raises:
            UnknownCurrencyError: If the code is not in the table.
        """
        currency = _CURRENCIES.get(_normalize(code))
        if currency is None:
            raise UnknownCurrencyError(str(code))
        return currency

    @classmethod
    def lookup_numeric(cls, numeric_code: int) -> Currency:
        """Get the currency entry for an ISO 4217 numeric code."""
        currency = _BY_NUMERIC.get(numeric_code)
        if currency is None:
            raise UnknownCurrencyError(str(numeric_code))
        return currency

    @classmethod
    def is_valid(cls, code: str) -> bool:
        """Check if a currency code is in the table."""
        return _normalize(code) in _CURRENCIES

    @classmethod
    def get_decimal_places(cls, code: str) -> int:
        """Canonical scale for a currency code."""
        return cls.lookup(code).decimal_places

    @classmethod
    def validate(cls, code: str) -> str:
        """Validate and normalize a currency code."""
        return cls.lookup(code).code

    @classmethod
    def all_codes(cls) -> frozenset[str]:
        return frozenset(_CURRENCIES)

    @classmethod
    def all_currencies(cls) -> Mapping[str, Currency]:
        return _CURRENCIES
