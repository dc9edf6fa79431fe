# blackjack/server/session.py

import socket
from enum import Enum
from typing import List, Optional, Tuple

from blackjack.common.protocol import (
    MessageAction,
    SessionMessage,
    ProtocolError,
    decode_message,
    build_player_card,
    build_bank_card,
    build_bank_cards,
)
from blackjack.common.constants import SHOE_SIZE, MAX_HANDPOINTS_VALUE, ACE_SOFT_POINTS
from blackjack.common.cards import Deck, DeckExhausted, rank_of
from blackjack.common.rules import card_points, dealer_should_draw
from blackjack.common.transport import MessageChannel
from blackjack.common.logging_utils import get_logger

log = get_logger("server.session")


class SessionState(Enum):
    IDLE = "idle"
    IN_PLAY = "in_play"
    BANK_RESOLVING = "bank_resolving"
    ROUND_OVER = "round_over"


class DealingSession:
    """
    One table for one connection: owns the shoe, the player hand and the bank hand.

    handle() takes one inbound message and returns the messages to send back,
    so the session knows nothing about sockets.
    """

    def __init__(self, shoe_size: int = SHOE_SIZE, seed: Optional[int] = None) -> None:
        self._shoe_size = shoe_size
        self._seed = seed
        self.deck: Optional[Deck] = None
        # shaped for several players, only slot 0 is dealt
        self.players_handpoints: List[int] = []
        self.player_cards: List[int] = []
        self.bank_points = 0
        self.bank_cards: List[int] = []
        self.state = SessionState.IDLE

    @property
    def player_points(self) -> int:
        return self.players_handpoints[0] if self.players_handpoints else 0

    def _hand_full(self) -> bool:
        # one more card must still fit the u8 points field
        return self.player_points + ACE_SOFT_POINTS > MAX_HANDPOINTS_VALUE

    def on_connect(self) -> None:
        self.deck = Deck.new_shuffled(self._shoe_size, self._seed)
        self.players_handpoints = [0]
        self.player_cards = []
        self.bank_points = 0
        self.bank_cards = []
        self.state = SessionState.IDLE

    def on_disconnect(self) -> None:
        self.deck = None
        self.players_handpoints = []
        self.player_cards = []
        self.bank_cards = []
        self.bank_points = 0
        self.state = SessionState.IDLE

    # ---------- drawing ----------
    def _draw(self) -> int:
        try:
            return self.deck.draw_identifier()
        except DeckExhausted:
            log.warning("Shoe exhausted, shuffling a fresh one")
            # refill shoe is never seeded
            self.deck = Deck.new_shuffled(self._shoe_size)
            return self.deck.draw_identifier()

    def _deal_player_card(self) -> SessionMessage:
        card_index = self._draw()
        rank = rank_of(card_index)
        # FIXME: only the first player's hand is dealt
        self.players_handpoints[0] += card_points(rank, self.players_handpoints[0])
        self.player_cards.append(rank)
        return build_player_card(card_index, self.deck.remaining(), self.players_handpoints[0])

    def _deal_bank_card(self) -> SessionMessage:
        card_index = self._draw()
        rank = rank_of(card_index)
        self.bank_cards.append(rank)
        self.bank_points = card_points(rank, 0)
        return build_bank_card(card_index, self.deck.remaining(), self.bank_points)

    def draw_all_bank_cards(self) -> None:
        self.state = SessionState.BANK_RESOLVING
        while dealer_should_draw(self.bank_points):
            rank = rank_of(self._draw())
            self.bank_cards.append(rank)
            self.bank_points += card_points(rank, self.bank_points)

    def _send_bank_cards(self) -> SessionMessage:
        self.state = SessionState.ROUND_OVER
        return build_bank_cards(self.bank_cards, self.deck.remaining(), self.bank_points)

    # ---------- dispatch ----------
    def handle(self, msg: SessionMessage) -> List[SessionMessage]:
        if self.deck is None:
            raise RuntimeError("Session used before on_connect()")

        match msg.action:
            case MessageAction.HIT:
                if self._hand_full():
                    log.warning(f"Hit refused, hand is at {self.player_points} points")
                    return []
                out = [self._deal_player_card()]
                if self.state is SessionState.IDLE:
                    self.state = SessionState.IN_PLAY
                log.info(f"Player hand points: {self.player_points}")
                return out

            case MessageAction.DOUBLE_DOWN:
                out = [] if self._hand_full() else [self._deal_player_card()]
                self.draw_all_bank_cards()
                out.append(self._send_bank_cards())
                log.info(f"Double down: player={self.player_points} bank={self.bank_points}")
                return out

            case MessageAction.STAND | MessageAction.CONTINUE:
                self.draw_all_bank_cards()
                out = [self._send_bank_cards()]
                log.info(f"Bank resolved: cards={self.bank_cards} points={self.bank_points}")
                return out

            case MessageAction.RESTART:
                self.players_handpoints[0] = 0
                self.player_cards = []
                self.bank_points = 0
                self.bank_cards = []
                # the shoe keeps depleting across rounds
                out = [self._deal_player_card(), self._deal_player_card(), self._deal_bank_card()]
                self.state = SessionState.IN_PLAY
                log.info(
                    f"New round: player={self.player_points} bank_up={self.bank_points} "
                    f"shoe={self.deck.remaining()}"
                )
                return out

            case MessageAction.NEW_PLAYER:
                log.info(f"Player name: {msg.text}")
                return []

            case MessageAction.SPLIT | MessageAction.NO_SPLIT:
                log.info(f"{msg.action.value} is not supported, ignoring")
                return []

            case MessageAction.SEND_PLAYER_CARD | MessageAction.SEND_BANK_CARD | MessageAction.SEND_BANK_CARDS:
                log.warning(f"Client sent server-only action {msg.action.value}, ignoring")
                return []

        raise ProtocolError(f"Unhandled action: {msg.action}")


def handle_client(conn: socket.socket, addr: Tuple[str, int], session: Optional[DealingSession] = None) -> None:
    log.info(f"Client connected: {addr[0]}:{addr[1]}")
    channel = MessageChannel(conn, addr)
    session = session or DealingSession()
    session.on_connect()
    try:
        while True:
            try:
                raw = channel.recv_text()
                if raw is None:
                    break
                msg = decode_message(raw)
            except ProtocolError as e:
                # one corrupt frame does not end the game
                log.warning(f"Dropping malformed message from {addr[0]}:{addr[1]}: {e}")
                continue

            for reply in session.handle(msg):
                channel.send(reply, note=f"reply to {msg.action.value}")

    except (ConnectionError, OSError) as e:
        log.warning(f"Session error with {addr[0]}:{addr[1]}: {e}")
    finally:
        session.on_disconnect()
        channel.close()
        log.info(f"Client disconnected: {addr[0]}:{addr[1]}")
