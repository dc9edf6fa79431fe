import pytest

from blackjack.common.cards import Deck, DeckExhausted, rank_of, face_of, suit_of
from blackjack.common.constants import SHOE_SIZE


def test_shoe_conservation():
    deck = Deck.new_shuffled()
    assert deck.remaining() == SHOE_SIZE == 416

    drawn = [deck.draw_identifier() for _ in range(150)]
    assert deck.remaining() == SHOE_SIZE - 150
    assert len(set(drawn)) == 150
    assert all(0 <= c < SHOE_SIZE for c in drawn)


def test_full_shoe_is_a_permutation():
    deck = Deck.new_shuffled(seed=1)
    drawn = [deck.draw_identifier() for _ in range(SHOE_SIZE)]
    assert sorted(drawn) == list(range(SHOE_SIZE))


def test_draw_one_returns_rank():
    deck = Deck.new_shuffled(seed=2)
    for _ in range(60):
        assert 0 <= deck.draw_one() < 52


def test_exhausted():
    deck = Deck.new_shuffled(size=3)
    for _ in range(3):
        deck.draw_one()
    assert deck.remaining() == 0
    with pytest.raises(DeckExhausted):
        deck.draw_one()


def test_seeded_shoes_match():
    a = Deck.new_shuffled(seed=7)
    b = Deck.new_shuffled(seed=7)
    assert [a.draw_identifier() for _ in range(20)] == [b.draw_identifier() for _ in range(20)]


def test_draw_pops_from_the_top():
    deck = Deck([5, 100, 48])
    assert deck.draw_identifier() == 48
    assert deck.draw_one() == 48  # 100 % 52
    assert deck.remaining() == 1


def test_rank_face_suit():
    assert rank_of(415) == 51
    assert rank_of(52) == 0
    assert face_of(0) == "2"
    assert face_of(31) == "9"
    assert face_of(32) == "10"
    assert face_of(36) == "J"
    assert face_of(44) == "K"
    assert face_of(48) == "A"
    assert suit_of(48) == "C"
    assert suit_of(51) == "S"
