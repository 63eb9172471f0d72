"""Built-in formatters for {name, number|date|time[, style]} placeholders.

Every formatter has the signature ``(value, locale, style) -> str`` and is
looked up by format type name at compile time. Custom formatters with the
same signature override built-ins of the same name.

Styles:
    number: (none) | integer | percent | currency | currency:XXX | <number pattern>
    date:   short | medium | long | full | <date pattern>   (default: medium)
    time:   short | medium | long | full | <time pattern>   (default: medium)

Thread Safety:
    Thread-safe. Uses Babel (no global locale state mutation).

Python 3.13+. Uses Babel for i18n.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, date, datetime, time
from decimal import Decimal
from numbers import Number
from types import MappingProxyType

from babel import dates as babel_dates
from babel import numbers as babel_numbers

from mfcompiler.diagnostics import ErrorTemplate, RuntimeTypeError
from mfcompiler.locale_utils import get_babel_locale

__all__ = [
    "BUILTIN_FORMATTERS",
    "Formatter",
    "format_date",
    "format_number",
    "format_time",
]

logger = logging.getLogger(__name__)

type Formatter = Callable[[object, str, str | None], str]

_DEFAULT_CURRENCY: str = "USD"

# '#,##0' = integer with grouping
_INTEGER_PATTERN: str = "#,##0"


def format_number(value: object, locale: str, style: str | None = None) -> str:
    """Format a number with locale-specific separators.

    Examples:
        >>> format_number(1234.5, "en")
        '1,234.5'
        >>> format_number(1234.5, "de")
        '1.234,5'
        >>> format_number(0.25, "en", "percent")
        '25%'
        >>> format_number(3.5, "en", "currency:EUR")
        '€3.50'
        >>> format_number(1234.56, "en", "integer")
        '1,235'

    Raises:
        RuntimeTypeError: If value is not a number
    """
    if not isinstance(value, Number) or isinstance(value, bool):
        raise RuntimeTypeError(ErrorTemplate.invalid_formatter_value("number", "a number", value))
    number: int | float | Decimal = value  # type: ignore[assignment]
    babel_locale = get_babel_locale(locale)

    if not style:
        return str(babel_numbers.format_decimal(number, locale=babel_locale))
    if style == "integer":
        return str(babel_numbers.format_decimal(number, format=_INTEGER_PATTERN, locale=babel_locale))
    if style == "percent":
        return str(babel_numbers.format_percent(number, locale=babel_locale))
    if style == "currency" or style.startswith("currency:"):
        currency = style.partition(":")[2].strip().upper() or _default_currency(locale)
        return str(babel_numbers.format_currency(number, currency, locale=babel_locale))
    return str(babel_numbers.format_decimal(number, format=style, locale=babel_locale))


def format_date(value: object, locale: str, style: str | None = None) -> str:
    """Format a date with locale-specific formatting.

    Examples:
        >>> format_date(date(2025, 10, 27), "en", "short")
        '10/27/25'
        >>> format_date(date(2025, 10, 27), "de", "short")
        '27.10.25'
        >>> format_date(datetime(2025, 10, 27), "en", "yyyy-MM-dd")
        '2025-10-27'

    Raises:
        RuntimeTypeError: If value is not a date, datetime, ISO 8601 string
            or POSIX timestamp
    """
    moment = _as_datetime(value, "date")
    return str(babel_dates.format_date(moment, format=style or "medium", locale=get_babel_locale(locale)))


def format_time(value: object, locale: str, style: str | None = None) -> str:
    """Format a time of day with locale-specific formatting.

    Example:
        >>> format_time(datetime(2025, 10, 27, 14, 30), "en", "short")
        '2:30 PM'

    Raises:
        RuntimeTypeError: If value is not a time, datetime, ISO 8601 string
            or POSIX timestamp
    """
    if isinstance(value, time):
        moment: datetime | time = value
    else:
        moment = _as_datetime(value, "time")
    return str(babel_dates.format_time(moment, format=style or "medium", locale=get_babel_locale(locale)))


def _as_datetime(value: object, formatter: str) -> datetime:
    """Convert formatter input to datetime.

    Numbers are POSIX timestamps in UTC; strings must be ISO 8601.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError as e:
            raise RuntimeTypeError(
                ErrorTemplate.invalid_formatter_value(formatter, "an ISO 8601 string", value)
            ) from e
    if isinstance(value, int | float | Decimal) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(float(value), tz=UTC)
        except (OverflowError, OSError, ValueError) as e:
            raise RuntimeTypeError(
                ErrorTemplate.invalid_formatter_value(formatter, "a POSIX timestamp", value)
            ) from e
    raise RuntimeTypeError(
        ErrorTemplate.invalid_formatter_value(formatter, "a date or datetime", value)
    )


def _default_currency(locale: str) -> str:
    """Currency of the locale's territory, USD when it has none."""
    territory = get_babel_locale(locale).territory
    if territory:
        currencies = babel_numbers.get_territory_currencies(territory)
        if currencies:
            return currencies[0]
    logger.debug("Locale %s has no territory currency, using %s", locale, _DEFAULT_CURRENCY)
    return _DEFAULT_CURRENCY


BUILTIN_FORMATTERS: MappingProxyType[str, Formatter] = MappingProxyType(
    {
        "number": format_number,
        "date": format_date,
        "time": format_time,
    }
)
