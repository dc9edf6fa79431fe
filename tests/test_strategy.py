import pytest

from blackjack.common.protocol import MessageAction
from blackjack.client.strategy import recommend

ACE = 48
TEN = 32


def card(value: int) -> int:
    """Clubs rank of a card worth `value` (11 = ace)."""
    if value == 11:
        return ACE
    if value == 10:
        return TEN
    return (value - 2) * 4


SPLIT = MessageAction.SPLIT
DOUBLE = MessageAction.DOUBLE_DOWN
HIT = MessageAction.HIT
STAND = MessageAction.STAND


@pytest.mark.parametrize("p1, p2, bank, expected", [
    (11, 11, 6, SPLIT),
    (8, 8, 10, SPLIT),
    (10, 6, 9, HIT),
    (10, 8, 5, STAND),
    (9, 9, 6, SPLIT),
    (9, 9, 7, STAND),
    (9, 9, 11, STAND),
    (7, 7, 7, SPLIT),
    (7, 7, 8, HIT),
    (6, 6, 4, SPLIT),
    (6, 6, 2, DOUBLE),
    (4, 4, 5, DOUBLE),
    (3, 3, 5, SPLIT),
    (2, 2, 3, DOUBLE),
    (5, 6, 10, DOUBLE),
    (5, 5, 9, DOUBLE),
    (5, 5, 10, HIT),
    (2, 7, 2, HIT),
    (2, 7, 4, DOUBLE),
    (10, 2, 3, HIT),
    (10, 2, 5, STAND),
    (10, 10, 11, STAND),
    (10, 11, 10, STAND),
    (3, 5, 10, STAND),
])
def test_known_cases(p1, p2, bank, expected):
    assert recommend([card(p1), card(p2)], card(bank)) is expected


def test_suit_does_not_matter():
    # 10 and 6 of diamonds against the 9 of diamonds
    assert recommend([33, 17], 29) is recommend([TEN, card(6) + 2], card(9) + 1)


def test_total_over_all_starting_hands():
    allowed = {SPLIT, DOUBLE, HIT, STAND}
    for first in range(52):
        for second in range(52):
            for bank in range(0, 52, 4):
                assert recommend([first, second], bank) in allowed


def test_needs_two_cards():
    with pytest.raises(ValueError):
        recommend([ACE], TEN)
