"""Card and deck primitives - immutable card representations."""

from dataclasses import dataclass
from enum import Enum
from random import Random


class Suit(Enum):
    """Card suits."""

    SPADES = "♠"
    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"

    def __str__(self) -> str:
        return self.value


class Rank(Enum):
    """Card ranks in deck order."""

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    def __str__(self) -> str:
        return self.value

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, face cards = 10)."""
        if self == Rank.ACE:
            return 11
        if self in (Rank.JACK, Rank.QUEEN, Rank.KING):
            return 10
        return int(self.value)

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        """Return the blackjack point value."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', 'Kh', '10d'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        rank_map = {rank.value: rank for rank in Rank}
        rank_map["T"] = Rank.TEN

        suit_map = {
            "S": Suit.SPADES,
            "♠": Suit.SPADES,
            "H": Suit.HEARTS,
            "♥": Suit.HEARTS,
            "D": Suit.DIAMONDS,
            "♦": Suit.DIAMONDS,
            "C": Suit.CLUBS,
            "♣": Suit.CLUBS,
        }

        if rank_str not in rank_map:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in suit_map:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(rank_map[rank_str], suit_map[suit_str])


# A deck is an ordered tuple of cards; the top of the deck is the last element.
Deck = tuple[Card, ...]


def create_deck() -> Deck:
    """Build a fresh, ordered 52-card deck."""
    return tuple(Card(rank, suit) for suit in Suit for rank in Rank)


def shuffle(deck: Deck, rng: Random | None = None) -> Deck:
    """
    Return a shuffled copy of a deck.

    Args:
        deck: Cards to shuffle; left untouched
        rng: Random number generator for reproducible shuffles

    Returns:
        A new deck holding the same cards in random order
    """
    cards = list(deck)
    (rng or Random()).shuffle(cards)
    return tuple(cards)


def draw(deck: Deck) -> tuple[Card, Deck]:
    """Take the top card, returning it with the remaining deck."""
    if not deck:
        raise IndexError("Cannot draw from empty deck")
    return deck[-1], deck[:-1]
