"""Pytest fixtures for round engine tests."""

import pytest
from random import Random

from cardutil import cards, stack
from twentyone.cards import create_deck, shuffle
from twentyone.game import GameSession, Phase, RoundState, create_game_state
from twentyone.game.state import SplitHand, SplitPlay, SplitStatus, StandardPlay


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def fresh_state():
    """A new session state."""
    return create_game_state()


@pytest.fixture
def make_state():
    """Factory for a mid-round state with chosen cards (bet already taken)."""

    def _make(
        player: str,
        dealer: str,
        bet: int = 100,
        chips: int = 900,
        deck: str | None = None,
        phase: Phase = Phase.PLAYING,
    ) -> RoundState:
        return create_game_state().evolve(
            player=StandardPlay(hand=cards(player)),
            dealer_hand=cards(dealer),
            bet=bet,
            chips=chips,
            phase=phase,
            deck=stack(deck) if deck is not None else shuffle(create_deck(), Random(7)),
        )

    return _make


@pytest.fixture
def make_split_state():
    """Factory for a state already split into two hands."""

    def _make(
        first: str,
        second: str,
        dealer: str = "10C 7D",
        bet: int = 100,
        chips: int = 800,
        deck: str = "",
        active_index: int = 0,
        statuses: tuple[SplitStatus, SplitStatus] = (SplitStatus.PLAYING, SplitStatus.PLAYING),
        phase: Phase = Phase.PLAYING,
    ) -> RoundState:
        hands = (
            SplitHand(cards=cards(first), bet=bet, status=statuses[0]),
            SplitHand(cards=cards(second), bet=bet, status=statuses[1]),
        )
        return create_game_state().evolve(
            player=SplitPlay(hands=hands, active_index=active_index),
            dealer_hand=cards(dealer),
            bet=bet,
            chips=chips,
            phase=phase,
            deck=stack(deck),
        )

    return _make


@pytest.fixture
def session(rng):
    """A session past the welcome screen, ready for a bet."""
    game = GameSession(rng=rng)
    game.start()
    return game
