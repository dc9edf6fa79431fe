# blackjack/client/strategy.py

from typing import Sequence

from blackjack.common.protocol import MessageAction
from blackjack.common.rules import card_points

ACE = 11
TEN = 10


def _value(rank: int) -> int:
    # an ace standing alone always counts 11 here
    return card_points(rank, 0)


def recommend(player_cards: Sequence[int], dealer_up_card: int) -> MessageAction:
    """
    Simplified basic strategy for the first two player cards against the dealer up-card.
    Cards are ranks (0..51). Returns SPLIT, DOUBLE_DOWN, HIT or STAND.
    """
    if len(player_cards) < 2:
        raise ValueError("basic strategy needs the first two player cards")

    first = _value(player_cards[0])
    second = _value(player_cards[1])
    player_points = first + second
    bank = _value(dealer_up_card)

    # pair
    if first == second:
        if (
            first == ACE
            or first == 8
            or first == 9 and bank not in (7, TEN, ACE)
            or first == 7 and bank <= 7
            # FIXME: standard strategy also splits 6,6 against a 2
            or first == 6 and bank <= 6 and bank != 2
            or first in (2, 3) and 4 <= bank <= 7
        ):
            return MessageAction.SPLIT

        if (
            first == 6 and bank == 2
            or first == 4 and bank in (5, 6)
            or first in (2, 3) and bank < 4
        ):
            return MessageAction.DOUBLE_DOWN

    # totals
    if (
        player_points >= 17
        or 13 <= player_points <= 16 and bank <= 6
        or player_points == 12 and 4 <= bank <= 6
    ):
        return MessageAction.STAND

    if (
        13 <= player_points <= 16 and bank >= 7
        or player_points == 12 and (bank <= 3 or bank >= 7)
        or player_points == 10 and bank >= TEN
        or player_points == 9 and (bank == 2 or bank >= 7)
    ):
        return MessageAction.HIT

    if (
        player_points == 11
        or player_points == 10 and bank <= 9
        or player_points == 9 and 3 <= bank <= 6
    ):
        return MessageAction.DOUBLE_DOWN

    return MessageAction.STAND
