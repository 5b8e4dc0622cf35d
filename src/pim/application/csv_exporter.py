"""Tabular export of products as CSV.

The format is deliberately minimal: fields are joined with a comma and
never quoted, so values are expected not to contain the delimiter.
"""

from __future__ import annotations

import os
from calendar import monthrange
from collections.abc import Iterable
from datetime import date, datetime

from dateutil.relativedelta import relativedelta

from pim.domain.model.product import (
    MONTHLY_RECURRING_CHARGE,
    ONE_TIME_CHARGE,
    Product,
)

CSV_DELIMITER = ","
CSV_HEADERS = (
    "Product name",
    "Contract number",
    "One time charge",
    "Monthly recurring charge",
    "Start date",
    "Duration",
)
DATE_FORMAT = "{0.day:02d}.{0.month:02d}.{0.year:04d}"


class CsvExporter:
    """Stateless product -> CSV row mapper."""

    def __init__(self, line_separator: str = os.linesep, encoding: str = "utf-8") -> None:
        self._line_separator = line_separator
        self._encoding = encoding

    def export(self, products: Iterable[Product]) -> bytes:
        lines = [CSV_DELIMITER.join(CSV_HEADERS)]
        lines.extend(self.to_row(product) for product in products)
        return "".join(line + self._line_separator for line in lines).encode(self._encoding)

    def to_row(self, product: Product) -> str:
        return CSV_DELIMITER.join(
            [
                product.name or "",
                product.contract_number or "",
                self._charge(product, ONE_TIME_CHARGE),
                self._charge(product, MONTHLY_RECURRING_CHARGE),
                self._start_date(product),
                self._duration(product),
            ]
        )

    # --- Columns --------------------------------------------------------------

    @staticmethod
    def _charge(product: Product, price_type: str) -> str:
        price = product.first_price(price_type)
        if price is None or price.price is None:
            return ""
        return str(price.price)

    @staticmethod
    def _start_date(product: Product) -> str:
        if product.start_date is None:
            return ""
        return DATE_FORMAT.format(product.start_date.date())

    @staticmethod
    def _duration(product: Product) -> str:
        if product.start_date is None or product.termination_date is None:
            return ""
        return format_duration(product.start_date, product.termination_date)


def format_duration(start: datetime, end: datetime) -> str:
    """Render the calendar period between the two dates as e.g. ``3M5D``.

    Only the date part counts.  Months include whole years.  When the end
    day is before the start day the period steps back one month and
    counts the remaining days, so Jan 31 to Feb 28 is ``28D``.  A segment
    that is zero or negative is left out, so a zero-length or reversed
    period renders as an empty string.
    """
    months, days = calendar_period(start.date(), end.date())
    result = f"{months}M" if months > 0 else ""
    if days > 0:
        result += f"{days}D"
    return result


def calendar_period(start: date, end: date) -> tuple[int, int]:
    """Total months and remaining days from ``start`` to ``end``."""
    months = (end.year - start.year) * 12 + end.month - start.month
    days = end.day - start.day
    if months > 0 and days < 0:
        months -= 1
        days = (end - (start + relativedelta(months=months))).days
    elif months < 0 and days > 0:
        months += 1
        days -= monthrange(end.year, end.month)[1]
    return months, days
