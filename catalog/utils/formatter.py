"""
Locale formatter.

Renders items, reviews and currency amounts for a fixed set of locale tags.
Each tag maps to one LocaleSpec row; unknown tags fall back to the default.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Tuple

from catalog.models.item import Item
from catalog.models.review import Review
import config.settings as settings

logger = logging.getLogger(__name__)

NBSP = "\u00a0"
NARROW_NBSP = "\u202f"


@dataclass(frozen=True)
class LocaleSpec:
    """
    Formatting data for one locale.

    date_pattern fields: d, m, y (four digits), yy (two digits).
    currency_pattern field: amount (already grouped and separated).
    """
    tag: str
    date_pattern: str
    currency_pattern: str
    group_separator: str
    decimal_separator: str
    product_template: str
    review_template: str
    no_reviews: str


LOCALES: Dict[str, LocaleSpec] = {
    "en-GB": LocaleSpec(
        tag="en-GB",
        date_pattern="{d:02d}/{m:02d}/{y}",
        currency_pattern="£{amount}",
        group_separator=",",
        decimal_separator=".",
        product_template="{name}, Price: {price}, Rating: {stars}, Best Before: {best_before}",
        review_template="Review: {stars}\t{comments}",
        no_reviews="No reviews"
    ),
    "en-US": LocaleSpec(
        tag="en-US",
        date_pattern="{m}/{d}/{yy:02d}",
        currency_pattern="${amount}",
        group_separator=",",
        decimal_separator=".",
        product_template="{name}, Price: {price}, Rating: {stars}, Best Before: {best_before}",
        review_template="Review: {stars}\t{comments}",
        no_reviews="No reviews"
    ),
    "fr-FR": LocaleSpec(
        tag="fr-FR",
        date_pattern="{d:02d}/{m:02d}/{y}",
        currency_pattern="{amount}" + NBSP + "€",
        group_separator=NARROW_NBSP,
        decimal_separator=",",
        product_template="{name}, Prix : {price}, Évaluation : {stars}, À consommer avant : {best_before}",
        review_template="Avis : {stars}\t{comments}",
        no_reviews="Aucun avis"
    ),
    "ru-RU": LocaleSpec(
        tag="ru-RU",
        date_pattern="{d:02d}.{m:02d}.{y}",
        currency_pattern="{amount}" + NBSP + "₽",
        group_separator=NBSP,
        decimal_separator=",",
        product_template="{name}, Цена: {price}, Рейтинг: {stars}, Годен до: {best_before}",
        review_template="Отзыв: {stars}\t{comments}",
        no_reviews="Нет отзывов"
    ),
    "zh-CN": LocaleSpec(
        tag="zh-CN",
        date_pattern="{y}/{m}/{d}",
        currency_pattern="¥{amount}",
        group_separator=",",
        decimal_separator=".",
        product_template="{name}, 价格: {price}, 评分: {stars}, 保质期: {best_before}",
        review_template="评论: {stars}\t{comments}",
        no_reviews="暂无评论"
    ),
}


def supported_locales() -> Tuple[str, ...]:
    return tuple(LOCALES)


class LocaleFormatter:
    """
    Renders catalog text for a single locale.
    """

    def __init__(self, spec: LocaleSpec):
        self.spec = spec

    @property
    def tag(self) -> str:
        return self.spec.tag

    def format_money(self, amount: Decimal) -> str:
        """Currency rendering with the locale's separators, always two decimals."""
        amount = Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        sign = "-" if amount < 0 else ""
        grouped = f"{abs(amount):,.2f}"
        grouped = grouped.replace(",", "\x00").replace(".", self.spec.decimal_separator)
        grouped = grouped.replace("\x00", self.spec.group_separator)
        return sign + self.spec.currency_pattern.format(amount=grouped)

    def format_date(self, value: date) -> str:
        return self.spec.date_pattern.format(
            d=value.day, m=value.month, y=value.year, yy=value.year % 100
        )

    def format_item(self, item: Item) -> str:
        return self.spec.product_template.format(
            name=item.name,
            price=self.format_money(item.price),
            stars=item.stars,
            best_before=self.format_date(item.best_before())
        )

    def format_review(self, review: Review) -> str:
        return self.spec.review_template.format(
            stars=review.rating.stars,
            comments=review.comments
        )

    def no_reviews(self) -> str:
        return self.spec.no_reviews


def build_formatters() -> Dict[str, LocaleFormatter]:
    """One formatter per supported locale, resolved once."""
    return {tag: LocaleFormatter(spec) for tag, spec in LOCALES.items()}


def resolve(formatters: Dict[str, LocaleFormatter], tag: str) -> LocaleFormatter:
    """Formatter for tag, or the default locale's formatter for an unknown tag."""
    formatter = formatters.get(tag)
    if formatter is None:
        logger.debug(f"Unsupported locale {tag!r}, falling back to {settings.DEFAULT_LOCALE}")
        formatter = formatters[settings.DEFAULT_LOCALE]
    return formatter


def get_formatter(tag: str) -> LocaleFormatter:
    """Standalone lookup with default-locale fallback."""
    return LocaleFormatter(LOCALES.get(tag, LOCALES[settings.DEFAULT_LOCALE]))
