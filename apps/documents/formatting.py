"""French formatting helpers shared by the contract and the invoice."""

from __future__ import annotations

import re
import unicodedata
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

MONTHS_FR = (
    "janvier",
    "février",
    "mars",
    "avril",
    "mai",
    "juin",
    "juillet",
    "août",
    "septembre",
    "octobre",
    "novembre",
    "décembre",
)

_UNITS = ("", "un", "deux", "trois", "quatre", "cinq", "six", "sept", "huit", "neuf")
_TEENS = (
    "dix",
    "onze",
    "douze",
    "treize",
    "quatorze",
    "quinze",
    "seize",
    "dix-sept",
    "dix-huit",
    "dix-neuf",
)
_TENS = (
    "",
    "dix",
    "vingt",
    "trente",
    "quarante",
    "cinquante",
    "soixante",
    "soixante-dix",
    "quatre-vingt",
    "quatre-vingt-dix",
)


def format_date(value: date) -> str:
    """01/03/2025"""
    return value.strftime("%d/%m/%Y")


def format_date_long(value: date, *, with_year: bool = True) -> str:
    """1 mars 2025, or 1 mars without the year."""
    text = f"{value.day} {MONTHS_FR[value.month - 1]}"
    if with_year:
        text = f"{text} {value.year}"
    return text


def format_price(value: Decimal) -> str:
    """1 234,50 (French grouping, two decimals)."""
    amount = Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    grouped = f"{amount:,.2f}"
    return grouped.replace(",", " ").replace(".", ",")


def format_amount(value: Decimal) -> str:
    """Amount without trailing zero cents: 850, 851.2."""
    amount = Decimal(value).normalize()
    if amount == amount.to_integral_value():
        return str(amount.quantize(Decimal("1")))
    return format(amount, "f")


def number_to_words(number: int) -> str:
    """French spelling of a whole amount, as printed on the lease."""
    if number == 0:
        return "zéro"
    if number < 10:
        return _UNITS[number]
    if number < 20:
        return _TEENS[number - 10]
    if number < 100:
        tens, units = divmod(number, 10)
        if tens in (7, 9):
            return f"{_TENS[tens - 1]}-{_TEENS[units]}"
        return _TENS[tens] + (f"-{_UNITS[units]}" if units else "")
    if number < 1000:
        hundreds, rest = divmod(number, 100)
        prefix = "cent" if hundreds == 1 else f"{_UNITS[hundreds]} cent"
        return prefix + (f" {number_to_words(rest)}" if rest else "")
    thousands, rest = divmod(number, 1000)
    prefix = "mille" if thousands == 1 else f"{number_to_words(thousands)} mille"
    return prefix + (f" {number_to_words(rest)}" if rest else "")


def invoice_number(start_date: date, last_name: str) -> str:
    """Invoice reference ``YYYY-MM-DD-LASTNAME``, accents stripped, letters only."""
    decomposed = unicodedata.normalize("NFD", last_name.upper())
    without_accents = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    letters = re.sub(r"[^A-Z]", "", without_accents)
    return f"{start_date.isoformat()}-{letters}"
