"""Rupiah formatting shared by every view."""

from decimal import ROUND_HALF_UP, Decimal

MONTH_NAMES = (
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
)

# Indexed by date.weekday() (Monday=0)
WEEKDAY_ABBREVIATIONS = ("Sen", "Sel", "Rab", "Kam", "Jum", "Sab", "Min")


def format_thousands(value: int) -> str:
    """Indonesian digit grouping: 1234567 -> '1.234.567'."""
    return f"{abs(value):,}".replace(",", ".")


def format_rupiah(value: int) -> str:
    """1234567 -> 'Rp1.234.567', negatives get a leading '-'."""
    text = "Rp" + format_thousands(value)
    return f"-{text}" if value < 0 else text


def format_money_compact(value: int) -> str:
    """
    Short form for calendar cells: 0, 950, 150k, 1.5jt, -2jt.
    """
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    amount = Decimal(abs(value))

    if amount >= 1_000_000:
        millions = (amount / 1_000_000).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        text = str(millions)
        if text.endswith(".0"):
            text = text[:-2]
        return f"{sign}{text}jt"
    if amount >= 1_000:
        thousands = (amount / 1_000).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return f"{sign}{thousands}k"
    return f"{sign}{amount}"
