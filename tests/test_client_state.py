from blackjack.common.protocol import (
    MessageAction,
    build_player_card,
    build_bank_card,
    build_bank_cards,
    build_request,
)
from blackjack.client.state import ClientSessionState, Key, Status, derive_status, strategy_feedback
from blackjack.client.ui import parse_key


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def _dealt_state(clock=None) -> ClientSessionState:
    """10 + 8 against a 6 up-card."""
    state = ClientSessionState("Ada", clock=clock or FakeClock())
    state.apply(build_player_card(card_index=32, cards_amount=415, player_handpoints=10))
    state.apply(build_player_card(card_index=52 + 24, cards_amount=414, player_handpoints=18))
    state.apply(build_bank_card(card_index=16, cards_amount=413, bank_handpoints=6))
    return state


def test_inbound_cards():
    state = _dealt_state()
    snap = state.snapshot()
    assert snap.player_cards == (32, 24)
    assert snap.player_points == 18
    assert snap.bank_cards == (16,)
    assert snap.bank_points == 6
    assert snap.cards_amount == 413
    assert snap.displayed_bank_cards == 1
    assert snap.recommended_action is MessageAction.STAND
    assert snap.status is Status.HIT_STAND_DOUBLE


def test_bank_reveal_is_paced():
    clock = FakeClock()
    state = _dealt_state(clock)
    state.apply(build_bank_cards([16, 32, 4], cards_amount=411, bank_handpoints=19))

    snap = state.snapshot()
    assert snap.displayed_bank_cards == 2
    assert snap.visible_bank_cards == (16, 32)
    assert snap.status is Status.WAITING_FOR_DEALER

    clock.now = 1.0
    assert not state.advance_reveal()
    clock.now = 2.5
    assert state.advance_reveal()
    assert not state.advance_reveal()

    snap = state.snapshot()
    assert snap.displayed_bank_cards == 3
    assert snap.status is Status.DEALER_WINS
    assert snap.status.is_error


def test_keys_ignored_while_dealer_reveals():
    state = _dealt_state()
    state.apply(build_bank_cards([16, 32, 4], cards_amount=411, bank_handpoints=19))
    assert state.press(Key.ENTER) is None
    assert state.press(Key.SPACE) is None


def test_enter_after_round_restarts_and_clears():
    clock = FakeClock()
    state = _dealt_state(clock)
    state.apply(build_bank_cards([16, 32], cards_amount=411, bank_handpoints=16 + 10))

    assert state.snapshot().status is Status.PLAYER_WINS
    msg = state.press(Key.ENTER)
    assert msg == build_request(MessageAction.RESTART)

    snap = state.snapshot()
    assert snap.player_cards == ()
    assert snap.bank_cards == ()
    assert snap.player_points == 0
    assert snap.last_action is None
    # waiting for the deal, a second Enter sends nothing
    assert state.press(Key.ENTER) is None

    state.apply(build_player_card(card_index=0, cards_amount=410, player_handpoints=2))
    state.apply(build_player_card(card_index=4, cards_amount=409, player_handpoints=5))
    state.apply(build_bank_card(card_index=8, cards_amount=408, bank_handpoints=4))
    assert state.press(Key.ENTER).action is MessageAction.HIT


def test_first_enter_deals():
    state = ClientSessionState("Ada")
    assert state.snapshot().status is Status.DEAL
    assert state.press(Key.ENTER).action is MessageAction.RESTART


def test_hit_stand_and_feedback():
    state = _dealt_state()
    assert state.press(Key.SPACE).action is MessageAction.STAND
    snap = state.snapshot()
    assert snap.last_action is MessageAction.STAND
    assert snap.feedback is True


def test_hit_against_strategy_is_incorrect():
    state = _dealt_state()
    assert state.press(Key.ENTER).action is MessageAction.HIT
    assert state.snapshot().feedback is False


def test_double_needs_exactly_two_cards():
    state = _dealt_state()
    state.apply(build_player_card(card_index=0, cards_amount=412, player_handpoints=20))
    assert state.press(Key.DOUBLE) is None

    state = _dealt_state()
    assert state.press(Key.DOUBLE).action is MessageAction.DOUBLE_DOWN


def test_burst_enter_restarts_and_space_is_refused():
    state = _dealt_state()
    state.apply(build_player_card(card_index=40, cards_amount=412, player_handpoints=28))
    assert state.snapshot().status is Status.BURST
    assert state.press(Key.SPACE) is None
    assert state.press(Key.ENTER).action is MessageAction.RESTART


def test_enter_at_21_continues():
    state = _dealt_state()
    state.apply(build_player_card(card_index=4, cards_amount=412, player_handpoints=21))
    assert state.snapshot().status is Status.CONTINUE_AT_21
    assert state.press(Key.ENTER).action is MessageAction.CONTINUE


def test_split_is_only_recorded():
    state = _dealt_state()
    assert state.press(Key.SPLIT) is None
    assert state.snapshot().last_action is MessageAction.SPLIT


def test_split_after_burst_keeps_feedback():
    state = _dealt_state()
    state.press(Key.ENTER)
    state.apply(build_player_card(card_index=40, cards_amount=412, player_handpoints=28))
    assert state.snapshot().status is Status.BURST
    assert state.press(Key.SPLIT) is None
    assert state.snapshot().last_action is MessageAction.HIT


def test_client_only_actions_are_ignored():
    state = _dealt_state()
    before = state.snapshot()
    state.apply(build_request(MessageAction.HIT))
    assert state.snapshot() == before


def test_status_priority():
    # reveal in progress beats everything, even a burst
    assert derive_status(25, 19, 3, 1, 3) is Status.WAITING_FOR_DEALER
    assert derive_status(0, 0, 0, 0, 0) is Status.DEAL
    assert derive_status(25, 10, 3, 2, 2) is Status.BURST
    assert derive_status(20, 23, 2, 3, 3) is Status.PLAYER_WINS
    assert derive_status(20, 19, 2, 2, 2) is Status.PLAYER_WINS
    assert derive_status(19, 19, 2, 2, 2) is Status.PUSH
    assert derive_status(18, 19, 2, 2, 2) is Status.DEALER_WINS
    assert derive_status(21, 5, 3, 1, 1) is Status.CONTINUE_AT_21
    assert derive_status(15, 5, 2, 1, 1) is Status.HIT_STAND_DOUBLE
    assert derive_status(15, 5, 3, 1, 1) is Status.HIT_STAND


def test_strategy_feedback():
    assert strategy_feedback(None, MessageAction.HIT) is None
    assert strategy_feedback(MessageAction.HIT, MessageAction.HIT) is True
    assert strategy_feedback(MessageAction.SPLIT, MessageAction.HIT) is False


def test_parse_key():
    assert parse_key("\n") is Key.ENTER
    assert parse_key("h\n") is Key.ENTER
    assert parse_key(" \n") is Key.SPACE
    assert parse_key("stand\n") is Key.SPACE
    assert parse_key("D\n") is Key.DOUBLE
    assert parse_key("s\n") is Key.SPLIT
    assert parse_key("q\n") is Key.QUIT
    assert parse_key("xyz\n") is None
