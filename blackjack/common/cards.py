# blackjack/common/cards.py

import random
from typing import List, Optional

from .constants import SHOE_SIZE, ONE_SET_CARDS_AMOUNT, CARDS_WITH_SAME_VALUE_BY_COLOR

# Suit order inside one set: rank % 4
SUITS = ["C", "D", "H", "S"]
FACES = ["2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A"]


class DeckExhausted(RuntimeError):
    """Raised when drawing from an empty shoe."""
    pass


def rank_of(card_index: int) -> int:
    return card_index % ONE_SET_CARDS_AMOUNT


def face_of(rank: int) -> str:
    return FACES[rank // CARDS_WITH_SAME_VALUE_BY_COLOR]


def suit_of(rank: int) -> str:
    return SUITS[rank % CARDS_WITH_SAME_VALUE_BY_COLOR]


class Deck:
    """
    Shuffled shoe of card identifiers in [0, size).
    Identifiers are popped from the end, so a drawn card is never reissued.
    """

    def __init__(self, cards: List[int]) -> None:
        self._cards = cards

    @classmethod
    def new_shuffled(cls, size: int = SHOE_SIZE, seed: Optional[int] = None) -> "Deck":
        cards = list(range(size))
        random.Random(seed).shuffle(cards)
        return cls(cards)

    def draw_identifier(self) -> int:
        if not self._cards:
            raise DeckExhausted("No cards left in the shoe")
        return self._cards.pop()

    def draw_one(self) -> int:
        return rank_of(self.draw_identifier())

    def remaining(self) -> int:
        return len(self._cards)
