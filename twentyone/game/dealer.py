"""Dealer automation: hit below 17, stand on any 17 or more."""

from typing import Iterator

from twentyone.cards import draw
from twentyone.game.state import RoundState, SplitStatus
from twentyone.hand import evaluate
from twentyone.rules import HOUSE_RULES, HouseRules


def is_dealer_done(state: RoundState, rules: HouseRules = HOUSE_RULES) -> bool:
    """
    Check if the dealer stands.

    Soft 17 stands, and a bust total is trivially done.
    """
    return evaluate(state.dealer_hand).total >= rules.dealer_stand_total


def dealer_draw_one(state: RoundState) -> RoundState:
    """Draw exactly one card into the dealer's hand."""
    card, deck = draw(state.deck)
    return state.evolve(deck=deck, dealer_hand=state.dealer_hand + (card,))


def dealer_has_live_opponent(state: RoundState) -> bool:
    """Check if any player hand is still live, i.e. worth drawing against."""
    if state.split_hands is None:
        return not evaluate(state.player_hand).is_bust
    return any(hand.status != SplitStatus.BUST for hand in state.split_hands)


def dealer_turn(state: RoundState, rules: HouseRules = HOUSE_RULES) -> Iterator[RoundState]:
    """
    Play out the dealer hand one card at a time.

    Yields each state after a draw so callers can pace the reveal. Nothing
    is drawn when every player hand has already busted.
    """
    if not dealer_has_live_opponent(state):
        return
    while not is_dealer_done(state, rules):
        state = dealer_draw_one(state)
        yield state


def play_dealer(state: RoundState, rules: HouseRules = HOUSE_RULES) -> RoundState:
    """Run the dealer loop to completion and return the final state."""
    for state in dealer_turn(state, rules):
        pass
    return state
