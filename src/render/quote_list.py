# src/render/quote_list.py
"""
Render a quote list for display.

render_quote_list() fills a container (any mutable sequence) with one
QuoteListItem per quote: a label "<carrier> - <premium>/<modality>" and a
call-to-action carrying the carrier/product identifiers, link and button text.
to_html() turns those items into markup for the /quote/html endpoint.
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Any, Callable, List, MutableSequence, Optional, Sequence

from src.pricing.config import DEFAULTS
from src.pricing.dataset import finite_number
from src.pricing.schemas import Quote


ClickHandler = Callable[["QuoteAction", Quote], Any]


def format_currency(amount: Any, currency_symbol: str) -> str:
    value = finite_number(amount)
    if value is None:
        return "-"
    return f"{currency_symbol}{value:.2f}"


@dataclass
class QuoteAction:
    carrier: str
    product: str
    href: str
    text: str
    role: str = "button"
    quote: Optional[Quote] = None
    on_click: Optional[ClickHandler] = None

    def click(self) -> Any:
        if self.on_click is None or self.quote is None:
            return None
        return self.on_click(self, self.quote)


@dataclass
class QuoteListItem:
    label: str
    action: QuoteAction


def render_quote_list(
    quotes: Sequence[Quote],
    container: Optional[MutableSequence[QuoteListItem]] = None,
    *,
    currency_symbol: Optional[str] = None,
    on_button_click: Optional[ClickHandler] = None,
) -> MutableSequence[QuoteListItem]:
    if not isinstance(quotes, (list, tuple)):
        raise TypeError("quotes must be a list returned by calculate_quotes.")
    if container is None:
        raise ValueError("A container is required to render quotes.")

    if currency_symbol is None:
        currency_symbol = quotes[0].currency_symbol if quotes else DEFAULTS.currency_symbol

    del container[:]
    for quote in quotes:
        label = f"{quote.carrier} - {format_currency(quote.premium, currency_symbol)}/{quote.modality}"
        action = QuoteAction(
            carrier=quote.carrier,
            product=quote.product,
            href=quote.link_url or "#",
            text=quote.button_text or DEFAULTS.button_text,
            quote=quote,
            on_click=on_button_click,
        )
        container.append(QuoteListItem(label=label, action=action))
    return container


def to_html(items: Sequence[QuoteListItem]) -> str:
    esc = html.escape
    parts: List[str] = ['<div class="quote-tool__list">']
    for item in items:
        a = item.action
        parts.append(
            '<div class="quote-tool__item">'
            f'<div class="quote-tool__label">{esc(item.label)}</div>'
            f'<a class="quote-tool__cta" href="{esc(str(a.href))}" role="{esc(a.role)}" '
            f'data-carrier="{esc(str(a.carrier))}" data-product="{esc(str(a.product))}">{esc(str(a.text))}</a>'
            "</div>"
        )
    parts.append("</div>")
    return "".join(parts)
