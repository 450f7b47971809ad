"""Tests for cards and deck operations."""

import pytest
from collections import Counter
from dataclasses import FrozenInstanceError
from random import Random

from twentyone.cards import Card, Rank, Suit, create_deck, draw, shuffle


class TestCard:
    """Tests for the Card class."""

    def test_card_values(self):
        """Test blackjack values of each rank."""
        assert Card(Rank.TWO, Suit.SPADES).value == 2
        assert Card(Rank.NINE, Suit.HEARTS).value == 9
        assert Card(Rank.TEN, Suit.CLUBS).value == 10
        assert Card(Rank.JACK, Suit.DIAMONDS).value == 10
        assert Card(Rank.QUEEN, Suit.SPADES).value == 10
        assert Card(Rank.KING, Suit.HEARTS).value == 10
        assert Card(Rank.ACE, Suit.CLUBS).value == 11

    def test_card_is_immutable(self):
        """Test cards cannot be changed after creation."""
        card = Card(Rank.ACE, Suit.SPADES)
        with pytest.raises(FrozenInstanceError):
            card.rank = Rank.KING  # type: ignore[misc]

    def test_card_str(self):
        """Test card string rendering."""
        assert str(Card(Rank.ACE, Suit.SPADES)) == "A♠"
        assert str(Card(Rank.TEN, Suit.HEARTS)) == "10♥"

    def test_from_string(self):
        """Test parsing cards from strings."""
        assert Card.from_string("A♠") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_string("kh") == Card(Rank.KING, Suit.HEARTS)
        assert Card.from_string("10d") == Card(Rank.TEN, Suit.DIAMONDS)
        assert Card.from_string("TC") == Card(Rank.TEN, Suit.CLUBS)

    @pytest.mark.parametrize("bad", ["", "A", "1S", "AX", "11H"])
    def test_from_string_rejects_garbage(self, bad):
        """Test invalid card strings raise ValueError."""
        with pytest.raises(ValueError):
            Card.from_string(bad)


class TestCreateDeck:
    """Tests for deck construction."""

    def test_deck_has_52_cards(self):
        assert len(create_deck()) == 52

    def test_no_duplicates(self):
        deck = create_deck()
        assert len(set(deck)) == 52

    def test_13_cards_per_suit_and_4_per_rank(self):
        deck = create_deck()
        suits = Counter(card.suit for card in deck)
        ranks = Counter(card.rank for card in deck)
        assert set(suits.values()) == {13}
        assert set(ranks.values()) == {4}
        assert set(suits) == set(Suit)
        assert set(ranks) == set(Rank)

    def test_fresh_deck_each_call(self):
        assert create_deck() == create_deck()


class TestShuffle:
    """Tests for shuffling."""

    def test_preserves_cards(self):
        deck = create_deck()
        shuffled = shuffle(deck)
        assert len(shuffled) == 52
        assert Counter(shuffled) == Counter(deck)

    def test_does_not_touch_input(self):
        deck = create_deck()
        before = list(deck)
        shuffle(deck)
        assert list(deck) == before

    def test_changes_order(self):
        """Successive shuffles produce different orderings."""
        deck = create_deck()
        orderings = {shuffle(deck) for _ in range(10)}
        assert len(orderings) > 1
        assert any(ordering != deck for ordering in orderings)

    def test_seeded_shuffle_is_reproducible(self):
        deck = create_deck()
        assert shuffle(deck, Random(3)) == shuffle(deck, Random(3))


class TestDraw:
    """Tests for drawing from the top of the deck."""

    def test_draws_from_end(self):
        deck = create_deck()
        card, rest = draw(deck)
        assert card == deck[-1]
        assert rest == deck[:-1]
        assert len(deck) == 52

    def test_draw_from_empty_deck(self):
        with pytest.raises(IndexError):
            draw(())
