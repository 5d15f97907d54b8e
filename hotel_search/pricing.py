from dataclasses import dataclass
from typing import Optional

from babel.core import UnknownLocaleError
from babel.numbers import UnknownCurrencyError, format_currency

from hotel_search.errors import FormatterError

# Currency pattern with the currency sign removed; the ISO code is appended
# after the number instead.
NO_SYMBOL_PATTERN = "#,##0.00"


@dataclass(frozen=True)
class CurrencyFormatter:
    """Locale-aware price formatting backed by Babel.

    Example (locale "pt", EUR, no symbol):
        1234.5 -> "1.234,50 EUR"
    """

    locale: str = "pt"
    currency: str = "EUR"
    show_symbol: bool = False

    def format(
        self,
        amount: float,
        locale: Optional[str] = None,
        currency: Optional[str] = None,
        show_symbol: Optional[bool] = None,
    ) -> str:
        locale = locale or self.locale
        currency = (currency or self.currency).upper()
        show_symbol = self.show_symbol if show_symbol is None else show_symbol

        try:
            if show_symbol:
                return format_currency(amount, currency, locale=locale)
            formatted = format_currency(
                amount,
                currency,
                format=NO_SYMBOL_PATTERN,
                locale=locale,
                currency_digits=True,
            )
        except (UnknownLocaleError, UnknownCurrencyError, ValueError, TypeError) as exc:
            raise FormatterError() from exc

        return f"{formatted.strip()} {currency}"
