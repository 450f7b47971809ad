"""Hand evaluation for blackjack."""

from dataclasses import dataclass
from typing import Sequence

from twentyone.cards import Card

BLACKJACK = 21


@dataclass(frozen=True, slots=True)
class HandValue:
    """Evaluated total of a hand."""

    total: int
    soft: bool

    @property
    def is_bust(self) -> bool:
        """Check if the total exceeds 21."""
        return self.total > BLACKJACK


def evaluate(cards: Sequence[Card]) -> HandValue:
    """
    Calculate the best value of a hand.

    Every Ace starts at 11 and is demoted to 1, one at a time, while the
    total is over 21. The hand is soft if an Ace is still counted as 11.
    """
    total = 0
    high_aces = 0

    for card in cards:
        total += card.value
        if card.is_ace:
            high_aces += 1

    while total > BLACKJACK and high_aces > 0:
        total -= 10
        high_aces -= 1

    return HandValue(total=total, soft=high_aces > 0)


def is_blackjack(cards: Sequence[Card]) -> bool:
    """Check if the hand is a natural (21 with exactly 2 cards)."""
    return len(cards) == 2 and evaluate(cards).total == BLACKJACK


def is_bust(cards: Sequence[Card]) -> bool:
    """Check if the hand has busted (value > 21)."""
    return evaluate(cards).is_bust


def is_pair(cards: Sequence[Card]) -> bool:
    """Check if the hand is a pair (two cards of same rank)."""
    return len(cards) == 2 and cards[0].rank == cards[1].rank


def format_hand(cards: Sequence[Card]) -> str:
    """Render a hand as text, e.g. 'A♠ 6♥ (soft 17)'."""
    value = evaluate(cards)
    cards_str = " ".join(str(card) for card in cards)
    if is_blackjack(cards):
        value_str = "(BLACKJACK)"
    elif value.is_bust:
        value_str = "(BUST)"
    elif value.soft:
        value_str = f"(soft {value.total})"
    else:
        value_str = f"({value.total})"
    return f"{cards_str} {value_str}".strip()
