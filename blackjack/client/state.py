# blackjack/client/state.py

import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from blackjack.common.protocol import MessageAction, SessionMessage, build_request
from blackjack.common.cards import rank_of
from blackjack.common.constants import (
    MAX_HAND_POINTS,
    BANK_STAND_POINTS,
    DISPLAYED_BANK_CARDS_AFTER_DRAWING,
    REVEAL_INTERVAL_S,
)
from blackjack.common.logging_utils import get_logger
from blackjack.client.strategy import recommend

log = get_logger("client.state")


class Key(Enum):
    ENTER = "enter"
    DOUBLE = "d"
    SPACE = "space"
    SPLIT = "s"
    QUIT = "q"


class Status(Enum):
    WAITING_FOR_DEALER = "Waiting for the dealer..."
    DEAL = "Enter to DEAL"
    BURST = "Burst! - Press Enter"
    DEALER_WINS = "Dealer wins - Press Enter"
    PUSH = "Push - Press Enter"
    PLAYER_WINS = "You win! - Press Enter"
    CONTINUE_AT_21 = "21 ! Enter to CONTINUE"
    HIT_STAND_DOUBLE = "Enter to HIT, Space to STAND, D to DOUBLE"
    HIT_STAND = "Enter to HIT, Space to STAND"

    @property
    def is_error(self) -> bool:
        return self in (Status.BURST, Status.DEALER_WINS)

    @property
    def is_round_over(self) -> bool:
        return self in (Status.BURST, Status.DEALER_WINS, Status.PUSH, Status.PLAYER_WINS)


def derive_status(
    player_points: int,
    bank_points: int,
    player_cards_count: int,
    displayed_bank_cards: int,
    bank_cards_count: int,
) -> Status:
    """Status line for the table, first matching rule wins."""
    if displayed_bank_cards != bank_cards_count:
        return Status.WAITING_FOR_DEALER
    if player_cards_count == 0:
        return Status.DEAL
    if player_points > MAX_HAND_POINTS:
        return Status.BURST
    # the up-card alone never reaches 17, so two bank cards mean the bank was resolved
    if bank_cards_count >= 2:
        if bank_points > MAX_HAND_POINTS or player_points > bank_points:
            return Status.PLAYER_WINS
        if player_points == bank_points:
            return Status.PUSH
        return Status.DEALER_WINS
    if player_points == MAX_HAND_POINTS:
        return Status.CONTINUE_AT_21
    if player_cards_count == 2:
        return Status.HIT_STAND_DOUBLE
    return Status.HIT_STAND


def strategy_feedback(last_action: Optional[MessageAction], recommended: Optional[MessageAction]) -> Optional[bool]:
    """None until the player acted, then whether the action matched basic strategy."""
    if last_action is None or recommended is None:
        return None
    return last_action == recommended


@dataclass(frozen=True)
class TableSnapshot:
    player_name: str
    player_cards: Tuple[int, ...]
    bank_cards: Tuple[int, ...]
    displayed_bank_cards: int
    player_points: int
    bank_points: int
    cards_amount: int
    last_action: Optional[MessageAction]
    recommended_action: Optional[MessageAction]
    status: Status

    @property
    def visible_bank_cards(self) -> Tuple[int, ...]:
        return self.bank_cards[:self.displayed_bank_cards]

    @property
    def feedback(self) -> Optional[bool]:
        return strategy_feedback(self.last_action, self.recommended_action)


class ClientSessionState:
    """
    Client mirror of the table.

    Written by the network thread (apply) and by the input loop (press,
    advance_reveal), read by the renderer (snapshot). Every access goes
    through one lock.
    """

    def __init__(self, player_name: str = "", clock=time.monotonic) -> None:
        self._lock = threading.Lock()
        self._clock = clock
        self.player_name = player_name
        self.player_cards: list[int] = []
        self.bank_cards: list[int] = []
        self.player_points = 0
        self.bank_points = 0
        self.cards_amount = 0
        self.displayed_bank_cards = 0
        self.last_action: Optional[MessageAction] = None
        self.recommended_action: Optional[MessageAction] = None
        # set between a Restart request and the dealt up-card
        self._restart_pending = False
        self._last_reveal = clock()

    # ---------- inbound ----------
    def apply(self, msg: SessionMessage) -> None:
        with self._lock:
            match msg.action:
                case MessageAction.SEND_PLAYER_CARD:
                    self.player_cards.append(rank_of(msg.card_index))
                    self.player_points = msg.player_handpoints
                    self.cards_amount = msg.cards_amount

                case MessageAction.SEND_BANK_CARD:
                    self.bank_cards.append(rank_of(msg.card_index))
                    self.bank_points = msg.player_handpoints
                    self.cards_amount = msg.cards_amount
                    self.displayed_bank_cards = len(self.bank_cards)
                    self._restart_pending = False
                    if len(self.player_cards) >= 2:
                        self.recommended_action = recommend(self.player_cards[:2], self.bank_cards[0])

                case MessageAction.SEND_BANK_CARDS:
                    self.bank_cards = list(msg.bank_cards)
                    self.bank_points = msg.player_handpoints
                    self.cards_amount = msg.cards_amount
                    self.displayed_bank_cards = min(DISPLAYED_BANK_CARDS_AFTER_DRAWING, len(self.bank_cards))
                    self._last_reveal = self._clock()

                case (
                    MessageAction.NEW_PLAYER
                    | MessageAction.HIT
                    | MessageAction.STAND
                    | MessageAction.DOUBLE_DOWN
                    | MessageAction.CONTINUE
                    | MessageAction.RESTART
                    | MessageAction.SPLIT
                    | MessageAction.NO_SPLIT
                ):
                    log.warning(f"Server sent client-only action {msg.action.value}, ignoring")

    # ---------- input ----------
    def _status(self) -> Status:
        return derive_status(
            self.player_points,
            self.bank_points,
            len(self.player_cards),
            self.displayed_bank_cards,
            len(self.bank_cards),
        )

    def _clear_round(self) -> None:
        self.player_cards = []
        self.bank_cards = []
        self.player_points = 0
        self.bank_points = 0
        self.displayed_bank_cards = 0
        self.last_action = None
        self.recommended_action = None

    def press(self, key: Key) -> Optional[SessionMessage]:
        """
        Apply a key press. Returns the request to send, or None when the key
        is not valid in the current state.
        """
        with self._lock:
            status = self._status()
            if status is Status.WAITING_FOR_DEALER or self._restart_pending:
                return None
            dealt = len(self.player_cards) > 0

            match key:
                case Key.ENTER:
                    if status is Status.DEAL or status.is_round_over:
                        self._clear_round()
                        self._restart_pending = True
                        return build_request(MessageAction.RESTART)
                    if status is Status.CONTINUE_AT_21:
                        self.last_action = MessageAction.CONTINUE
                        return build_request(MessageAction.CONTINUE)
                    if self.player_points <= MAX_HAND_POINTS:
                        self.last_action = MessageAction.HIT
                        return build_request(MessageAction.HIT)
                    return None

                case Key.DOUBLE:
                    if len(self.player_cards) == 2 and not status.is_round_over:
                        self.last_action = MessageAction.DOUBLE_DOWN
                        return build_request(MessageAction.DOUBLE_DOWN)
                    return None

                case Key.SPACE:
                    if (
                        dealt
                        and not status.is_round_over
                        and self.bank_points < BANK_STAND_POINTS
                        and self.player_points <= MAX_HAND_POINTS
                    ):
                        self.last_action = MessageAction.STAND
                        return build_request(MessageAction.STAND)
                    return None

                case Key.SPLIT:
                    # TODO: send Split once the server deals split hands
                    if dealt and not status.is_round_over:
                        self.last_action = MessageAction.SPLIT
                    return None

                case Key.QUIT:
                    return None

    def advance_reveal(self, now: Optional[float] = None) -> bool:
        """Show one more bank card, at most once per REVEAL_INTERVAL_S. Returns True if it moved."""
        now = self._clock() if now is None else now
        with self._lock:
            if self.displayed_bank_cards >= len(self.bank_cards):
                return False
            if now - self._last_reveal < REVEAL_INTERVAL_S:
                return False
            self.displayed_bank_cards += 1
            self._last_reveal = now
            return True

    def snapshot(self) -> TableSnapshot:
        with self._lock:
            return TableSnapshot(
                player_name=self.player_name,
                player_cards=tuple(self.player_cards),
                bank_cards=tuple(self.bank_cards),
                displayed_bank_cards=self.displayed_bank_cards,
                player_points=self.player_points,
                bank_points=self.bank_points,
                cards_amount=self.cards_amount,
                last_action=self.last_action,
                recommended_action=self.recommended_action,
                status=self._status(),
            )
