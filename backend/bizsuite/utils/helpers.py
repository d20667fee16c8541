import re
from datetime import date, datetime, timezone
from typing import Optional, Union

# Anything that could end a declaration, a rule or the <style> element, or load a resource
_CSS_UNSAFE = re.compile(r"""[<>{};"'\\]|url\s*\(|@import""", re.IGNORECASE)


def format_currency(amount: Optional[float]) -> str:
    """Format an amount with thousands separators and two decimals, e.g. 1,234.50"""
    return f"{amount or 0:,.2f}"


def format_date(value: Optional[Union[date, datetime]]) -> str:
    """Format a date as dd/mm/yyyy; empty string when missing."""
    if value is None:
        return ""
    return value.strftime("%d/%m/%Y")


def format_quantity(quantity: float) -> str:
    """Whole quantities print without decimals."""
    if float(quantity).is_integer():
        return str(int(quantity))
    return f"{quantity:g}"


def format_rate(rate: Optional[float]) -> str:
    return f"{rate or 0:g}%"


def safe_filename(number: str) -> str:
    return number.replace("/", "-").replace("\\", "-").strip()


def split_address(address: Optional[str]) -> list:
    """Comma separated address -> trimmed lines."""
    if not address:
        return []
    return [part.strip() for part in address.split(",") if part.strip()]


def contrasting_text_color(hex_color: Optional[str]) -> str:
    """Black or white text, whichever reads better on the given background."""
    if not hex_color:
        return "#000000"
    value = hex_color.lstrip("#")
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    try:
        red, green, blue = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return "#000000"
    luminance = (0.299 * red + 0.587 * green + 0.114 * blue) / 255
    return "#000000" if luminance > 0.6 else "#ffffff"


def as_utc(value: datetime) -> datetime:
    """Naive datetimes from the API are UTC; make them comparable with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def css_value(value: Optional[str]) -> Optional[str]:
    """Template design strings are written into a <style> block; keep them to a single value."""
    if value is None:
        return None
    return _CSS_UNSAFE.sub("", value).strip()
