# blackjack/common/rules.py

from typing import Iterable

from .constants import (
    ONE_SET_CARDS_AMOUNT,
    CARDS_WITH_SAME_VALUE_BY_COLOR, MINIMUM_CARD_VALUE,
    TEN_POINTS_CARDS_START_INDEX, ACE_CARDS_START_INDEX,
    TEN_VALUE_CARDS_POINTS, ACE_HARD_POINTS, ACE_SOFT_POINTS, MAX_POINTS_FOR_SOFT_ACE,
    MAX_HAND_POINTS, BANK_STAND_POINTS,
)


def card_points(rank: int, points_so_far: int) -> int:
    """
    Points a card adds to a hand holding points_so_far.
    The ace value is decided once, when the ace is drawn, and never revisited.
    """
    if not 0 <= rank < ONE_SET_CARDS_AMOUNT:
        raise ValueError(f"rank must be 0..{ONE_SET_CARDS_AMOUNT - 1}, got {rank}")

    if TEN_POINTS_CARDS_START_INDEX <= rank < ACE_CARDS_START_INDEX:
        return TEN_VALUE_CARDS_POINTS
    if rank >= ACE_CARDS_START_INDEX:
        # FIXME: the player should be able to pick the ace value
        if points_so_far >= MAX_POINTS_FOR_SOFT_ACE:
            return ACE_HARD_POINTS
        return ACE_SOFT_POINTS
    return rank // CARDS_WITH_SAME_VALUE_BY_COLOR + MINIMUM_CARD_VALUE


def hand_points(ranks: Iterable[int]) -> int:
    points = 0
    for rank in ranks:
        points += card_points(rank, points)
    return points


def is_bust(points: int) -> bool:
    return points > MAX_HAND_POINTS


def dealer_should_draw(points: int) -> bool:
    return points < BANK_STAND_POINTS
