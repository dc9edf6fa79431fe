# blackjack/common/protocol.py

import json
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import List, Tuple

from .logging_utils import get_logger
from .constants import SHOE_SIZE, ONE_SET_CARDS_AMOUNT, MAX_HANDPOINTS_VALUE

_log = get_logger("protocol")

# -------------------------
# Errors
# -------------------------
class ProtocolError(ValueError):
    """Raised when a message is malformed or invalid."""
    pass


def _require(condition: bool, msg: str) -> None:
    if not condition:
        _log.warning(f"ProtocolError: {msg}")
        raise ProtocolError(msg)


# -------------------------
# Actions
# -------------------------
class MessageAction(str, Enum):
    NEW_PLAYER = "NewPlayer"
    SEND_PLAYER_CARD = "SendPlayerCard"
    SEND_BANK_CARD = "SendBankCard"
    SEND_BANK_CARDS = "SendBankCards"
    HIT = "Hit"
    STAND = "Stand"
    DOUBLE_DOWN = "DoubleDown"
    CONTINUE = "Continue"
    RESTART = "Restart"
    SPLIT = "Split"
    NO_SPLIT = "NoSplit"


# Sent by the client, consumed by the server
CLIENT_ACTIONS = frozenset({
    MessageAction.NEW_PLAYER,
    MessageAction.HIT,
    MessageAction.STAND,
    MessageAction.DOUBLE_DOWN,
    MessageAction.CONTINUE,
    MessageAction.RESTART,
    MessageAction.SPLIT,
    MessageAction.NO_SPLIT,
})

# Sent by the server, consumed by the client
SERVER_ACTIONS = frozenset({
    MessageAction.SEND_PLAYER_CARD,
    MessageAction.SEND_BANK_CARD,
    MessageAction.SEND_BANK_CARDS,
})


# -------------------------
# Envelope
#
# Fixed shape: every field is always present on the wire,
# fields a given action does not use are zero/empty.
# -------------------------
@dataclass(frozen=True)
class SessionMessage:
    action: MessageAction
    card_index: int = 0
    cards_amount: int = 0
    text: str = ""
    player_handpoints: int = 0
    bank_cards: Tuple[int, ...] = field(default_factory=tuple)


_FIELDS = ("action", "card_index", "cards_amount", "text", "player_handpoints", "bank_cards")


def _validate(msg: SessionMessage) -> None:
    _require(isinstance(msg.action, MessageAction), "action must be a MessageAction")
    _require(0 <= msg.card_index < SHOE_SIZE, f"card_index must be 0..{SHOE_SIZE - 1}")
    _require(0 <= msg.cards_amount <= SHOE_SIZE, f"cards_amount must be 0..{SHOE_SIZE}")
    _require(0 <= msg.player_handpoints <= MAX_HANDPOINTS_VALUE, "player_handpoints must be uint8")
    _require(
        all(0 <= rank < ONE_SET_CARDS_AMOUNT for rank in msg.bank_cards),
        f"bank_cards must hold ranks 0..{ONE_SET_CARDS_AMOUNT - 1}",
    )


def encode_message(msg: SessionMessage) -> str:
    _validate(msg)
    data = asdict(msg)
    data["action"] = msg.action.value
    data["bank_cards"] = list(msg.bank_cards)
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


def decode_message(raw: str) -> SessionMessage:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        _require(False, f"Invalid JSON: {e.msg}")
    except RecursionError:
        _require(False, "JSON nested too deeply")
    _require(isinstance(data, dict), "Message must be a JSON object")
    missing = [name for name in _FIELDS if name not in data]
    _require(not missing, f"Missing fields: {', '.join(missing)}")

    try:
        action = MessageAction(data["action"])
    except ValueError:
        _require(False, f"Unknown action: {data['action']!r}")

    for name in ("card_index", "cards_amount", "player_handpoints"):
        value = data[name]
        _require(isinstance(value, int) and not isinstance(value, bool), f"{name} must be an integer")
    _require(isinstance(data["text"], str), "text must be a string")
    bank_cards = data["bank_cards"]
    _require(isinstance(bank_cards, list), "bank_cards must be a list")
    _require(
        all(isinstance(c, int) and not isinstance(c, bool) for c in bank_cards),
        "bank_cards must hold integers",
    )

    msg = SessionMessage(
        action=action,
        card_index=data["card_index"],
        cards_amount=data["cards_amount"],
        text=data["text"],
        player_handpoints=data["player_handpoints"],
        bank_cards=tuple(bank_cards),
    )
    _validate(msg)
    return msg


# -------------------------
# Builders
# -------------------------
def build_player_card(card_index: int, cards_amount: int, player_handpoints: int) -> SessionMessage:
    return SessionMessage(
        action=MessageAction.SEND_PLAYER_CARD,
        card_index=card_index,
        cards_amount=cards_amount,
        player_handpoints=player_handpoints,
    )


def build_bank_card(card_index: int, cards_amount: int, bank_handpoints: int) -> SessionMessage:
    # bank points travel in player_handpoints, the envelope has a single points field
    return SessionMessage(
        action=MessageAction.SEND_BANK_CARD,
        card_index=card_index,
        cards_amount=cards_amount,
        player_handpoints=bank_handpoints,
    )


def build_bank_cards(bank_cards: List[int], cards_amount: int, bank_handpoints: int) -> SessionMessage:
    return SessionMessage(
        action=MessageAction.SEND_BANK_CARDS,
        cards_amount=cards_amount,
        player_handpoints=bank_handpoints,
        bank_cards=tuple(bank_cards),
    )


def build_request(action: MessageAction, text: str = "") -> SessionMessage:
    _require(action in CLIENT_ACTIONS, f"{action.value} is not a client request")
    return SessionMessage(action=action, text=text)
