"""Tests for hand evaluation."""

import pytest

from cardutil import cards
from twentyone.hand import HandValue, evaluate, format_hand, is_blackjack, is_bust, is_pair


class TestEvaluate:
    """Tests for evaluate()."""

    @pytest.mark.parametrize(
        "hand, total, soft",
        [
            ("7S 5S", 12, False),
            ("KS QS", 20, False),
            ("AS 6S", 17, True),
            ("AS 6S 8D", 15, False),
            ("AS AH", 12, True),
            ("AS AH AC", 13, True),
            ("AS KH", 21, True),
            ("KS QS 5S", 25, False),
            ("AS AH 9S KS", 21, False),
            ("7S", 7, False),
            ("AS", 11, True),
            ("AS AH AC AD", 14, True),
            ("7S 7H 7C", 21, False),
            ("AS 5S AH 4S", 21, True),
        ],
    )
    def test_totals(self, hand, total, soft):
        assert evaluate(cards(hand)) == HandValue(total=total, soft=soft)

    def test_empty_hand(self):
        """Test empty hand evaluates to a hard zero."""
        assert evaluate(()) == HandValue(total=0, soft=False)

    def test_soft_to_hard_transition(self):
        """Test ace switching from 11 to 1."""
        hand = cards("A♠ 6♠")
        assert evaluate(hand) == HandValue(17, True)
        assert evaluate(hand + cards("8♦")) == HandValue(15, False)

    def test_bust_property(self):
        assert evaluate(cards("KS QS 2S")).is_bust
        assert not evaluate(cards("KS AS")).is_bust


class TestHandPredicates:
    """Tests for blackjack, bust and pair checks."""

    def test_blackjack(self):
        assert is_blackjack(cards("AS KH"))
        assert is_blackjack(cards("10C AD"))

    def test_three_card_21_is_not_blackjack(self):
        assert not is_blackjack(cards("7S 7H 7C"))

    def test_bust(self):
        assert is_bust(cards("10S 6H KC"))
        assert not is_bust(cards("10S 6H 5C"))

    def test_pair_requires_same_rank(self):
        assert is_pair(cards("8S 8H"))
        assert not is_pair(cards("KS QH"))
        assert not is_pair(cards("8S 8H 2C"))


class TestFormatHand:
    """Tests for text rendering of hands."""

    def test_formats(self):
        assert format_hand(cards("AS 6H")) == "A♠ 6♥ (soft 17)"
        assert format_hand(cards("KS QH")) == "K♠ Q♥ (20)"
        assert format_hand(cards("AS KH")) == "A♠ K♥ (BLACKJACK)"
        assert format_hand(cards("KS QH 5C")) == "K♠ Q♥ 5♣ (BUST)"
