"""Tests for dealer automation."""

import pytest

from cardutil import cards
from twentyone.game import dealer_draw_one, dealer_turn, is_dealer_done, play_dealer
from twentyone.game.state import SplitStatus


class TestIsDealerDone:
    """Tests for the dealer stand rule."""

    @pytest.mark.parametrize(
        "dealer, done",
        [
            ("10C 6D", False),
            ("10C 7D", True),
            ("AC 6D", True),  # soft 17 stands
            ("AC 5D", False),
            ("10C 6D KH", True),  # bust
            ("KC 9D", True),
        ],
    )
    def test_stand_rule(self, make_state, dealer, done):
        assert is_dealer_done(make_state("KS QH", dealer)) is done


class TestDealerDrawOne:
    """Tests for single dealer draws."""

    def test_draws_one_card(self, make_state):
        state = make_state("KS QH", "10C 2D", deck="5C 9H")
        drawn = dealer_draw_one(state)

        assert drawn.dealer_hand == cards("10C 2D 5C")
        assert drawn.deck == cards("9H")
        assert drawn.phase == state.phase
        assert drawn.chips == state.chips


class TestDealerTurn:
    """Tests for the dealer loop."""

    def test_yields_each_draw(self, make_state):
        state = make_state("KS QH", "2C 3D", deck="4C 5H 6S 9D")
        steps = list(dealer_turn(state))

        assert [len(s.dealer_hand) for s in steps] == [3, 4, 5]
        assert steps[-1].dealer_hand == cards("2C 3D 4C 5H 6S")

    def test_no_draw_when_already_done(self, make_state):
        assert list(dealer_turn(make_state("KS QH", "10C 8D", deck="5C"))) == []

    def test_play_dealer_finishes(self, make_state):
        final = play_dealer(make_state("KS QH", "10C 2D", deck="3C 5H"))
        assert final.dealer_hand == cards("10C 2D 3C 5H")
        assert is_dealer_done(final)

    def test_play_dealer_unchanged_when_done(self, make_state):
        state = make_state("KS QH", "10C 8D")
        assert play_dealer(state) is state

    def test_no_draw_when_both_split_hands_bust(self, make_split_state):
        state = make_split_state(
            "8S 6C KD",
            "8H 5D 9C",
            dealer="2C 3D",
            deck="4C",
            statuses=(SplitStatus.BUST, SplitStatus.BUST),
        )
        assert play_dealer(state) is state

    def test_draws_when_one_split_hand_is_live(self, make_split_state):
        state = make_split_state(
            "8S 6C KD",
            "8H 9D",
            dealer="10C 6D",
            deck="4C",
            statuses=(SplitStatus.BUST, SplitStatus.STAND),
        )
        assert play_dealer(state).dealer_hand == cards("10C 6D 4C")
