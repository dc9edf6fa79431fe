# blackjack/client/cardfx/table.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from blackjack.common.cards import face_of, suit_of
from blackjack.client.state import TableSnapshot
from .terminal import TerminalRenderer, Style, RESET, BOLD, RED_BOLD, GREEN_BOLD, DIM
from .sprites import card_face, card_back, shoe

SUIT_SYMBOLS = {"C": "♣", "D": "♦", "H": "♥", "S": "♠"}


def suit_style(suit: str) -> Style:
    # Hearts/diamonds red; spades/clubs default
    return RED_BOLD if suit in ("H", "D") else RESET


@dataclass
class TableConfig:
    gap_x: int = 2
    shoe_w: int = 18
    shoe_h: int = 5
    left_margin: int = 2
    right_margin: int = 2
    top_margin: int = 1


class TableRenderer:
    """
    Draws one frame of the table from a TableSnapshot:
      - dealer hand near the top (cards past the reveal cursor face down)
      - player hand below it with the points
      - shoe with the remaining card count on the right
      - status line and strategy feedback at the bottom
    """

    def __init__(self, renderer: TerminalRenderer, cfg: Optional[TableConfig] = None):
        self.r = renderer
        self.cfg = cfg or TableConfig()
        self._last: Optional[TableSnapshot] = None
        self._last_size: Optional[Tuple[int, int]] = None

    def _choose_card_size(self, term_w: int, term_h: int) -> Tuple[int, int]:
        card_w, card_h = (11, 7)
        if term_w < 70 or term_h < 22:
            card_w, card_h = (9, 5)
        return card_w, card_h

    def _draw_hand(self, cards, hidden: int, x0: int, y: int, card_w: int, card_h: int, term_w: int, term_h: int) -> None:
        back = card_back(card_w, card_h)
        for i, rank in enumerate(cards):
            x = x0 + i * (card_w + self.cfg.gap_x)
            if i >= len(cards) - hidden:
                self.r.draw_sprite(back, x, y, term_w, term_h, style=DIM)
                continue
            suit = suit_of(rank)
            spr = card_face(face_of(rank), SUIT_SYMBOLS[suit], card_w, card_h)
            self.r.draw_sprite(spr, x, y, term_w, term_h, style=suit_style(suit))

    def render(self, snap: TableSnapshot, *, force: bool = False) -> bool:
        """Draw the frame if anything changed. Returns True when a frame was drawn."""
        term_w, term_h = self.r.get_size()
        if not force and snap == self._last and (term_w, term_h) == self._last_size:
            return False
        self._last = snap
        self._last_size = (term_w, term_h)

        card_w, card_h = self._choose_card_size(term_w, term_h)
        if self.r.clear_each_frame:
            self.r.clear()

        left = self.cfg.left_margin
        dealer_y = self.cfg.top_margin + 1
        player_y = dealer_y + card_h + 3

        # Dealer
        bank_label = f"Dealer ({snap.bank_points})" if snap.displayed_bank_cards == len(snap.bank_cards) else "Dealer"
        self.r.write_at(left, dealer_y - 1, bank_label, BOLD)
        hidden = len(snap.bank_cards) - snap.displayed_bank_cards
        self._draw_hand(snap.bank_cards, hidden, left, dealer_y, card_w, card_h, term_w, term_h)

        # Player
        points_style = RED_BOLD if snap.player_points > 21 else BOLD
        self.r.write_at(left, player_y - 1, f"{snap.player_name or 'You'} ({snap.player_points})", points_style)
        self._draw_hand(snap.player_cards, 0, left, player_y, card_w, card_h, term_w, term_h)

        # Shoe
        shoe_spr = shoe(snap.cards_amount, w=self.cfg.shoe_w, h=self.cfg.shoe_h)
        shoe_x = max(0, term_w - shoe_spr.w - self.cfg.right_margin)
        self.r.draw_sprite(shoe_spr, shoe_x, dealer_y, term_w, term_h)

        # Strategy feedback
        info_y = player_y + card_h + 1
        if snap.feedback is not None:
            verdict, style = ("correct", GREEN_BOLD) if snap.feedback else ("incorrect", RED_BOLD)
            self.r.write_at(
                left, info_y,
                f"{snap.last_action.value}: {verdict} (basic strategy: {snap.recommended_action.value})",
                style,
            )

        # Status line
        status_style = RED_BOLD if snap.status.is_error else BOLD
        self.r.write_at(left, info_y + 2, snap.status.value, status_style)
        self.r.write_at(left, info_y + 3, "[Enter] hit/deal  [space] stand  [d] double  [s] split  [q] quit", DIM)
        self.r.move(info_y + 5, left + 1)
        self.r.flush()
        return True
