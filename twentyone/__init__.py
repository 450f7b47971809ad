"""Blackjack round engine - pure functions over an immutable round state."""

from twentyone.cards import Card, Deck, Rank, Suit, create_deck, draw, shuffle
from twentyone.hand import HandValue, evaluate, is_blackjack
from twentyone.rules import HOUSE_RULES, HouseRules

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "create_deck",
    "draw",
    "shuffle",
    "HandValue",
    "evaluate",
    "is_blackjack",
    "HOUSE_RULES",
    "HouseRules",
]
