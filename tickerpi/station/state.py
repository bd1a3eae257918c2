from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from tickerpi.station.quotes import Quote


class SymbolSlot(Enum):
    A = "a"
    B = "b"

    def other(self):
        return SymbolSlot.B if self is SymbolSlot.A else SymbolSlot.A


@dataclass
class DisplayState:
    """State kept between refreshes; owned by the control loop thread.

    `current_quote` is replaced only by a successful fetch. A failed fetch
    leaves the previous quote in place without marking it stale.
    """

    symbol_a: str
    symbol_b: str
    selected_slot: SymbolSlot = SymbolSlot.A
    current_quote: Quote = field(default_factory=Quote)
    last_refresh_ms: Optional[int] = None

    @property
    def selected_symbol(self):
        return self.symbol_a if self.selected_slot is SymbolSlot.A else self.symbol_b

    def toggle_symbol(self):
        self.selected_slot = self.selected_slot.other()
        return self.selected_symbol

    def apply_quote(self, quote):
        self.current_quote = quote

    def mark_refreshed(self, now_ms):
        self.last_refresh_ms = now_ms

    def status_text(self):
        return self.current_quote.trade_timestamp
