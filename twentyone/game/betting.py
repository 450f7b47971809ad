"""Bet validation against house limits and the bankroll."""

import math
from dataclasses import dataclass
from numbers import Integral, Real

from twentyone.game.state import Phase, RoundState
from twentyone.rules import HOUSE_RULES, HouseRules


@dataclass(frozen=True)
class BetResult:
    """Outcome of a bet attempt; ``state`` is only set when the bet is valid."""

    valid: bool
    state: RoundState | None = None
    error: str | None = None


def validate_bet(amount: object, chips: int, rules: HouseRules = HOUSE_RULES) -> str | None:
    """
    Check a wager.

    Returns:
        An error message, or None if the amount is acceptable
    """
    if isinstance(amount, bool) or not isinstance(amount, Real):
        return "Bet must be a whole number."
    if not isinstance(amount, Integral):
        # Large integers do not convert to float
        if not math.isfinite(amount) or amount != int(amount):
            return "Bet must be a whole number."
    if amount <= 0:
        return "Bet must be greater than zero."
    if amount < rules.min_bet:
        return f"Minimum bet is ${rules.min_bet}."
    if amount > rules.max_bet:
        return f"Maximum bet is ${rules.max_bet}."
    if amount > chips:
        return f"You only have ${chips}."
    return None


def place_bet(state: RoundState, amount: object, rules: HouseRules = HOUSE_RULES) -> BetResult:
    """
    Place a wager and move the round to the playing phase.

    Args:
        state: Current round state
        amount: Requested bet; anything other than a whole number is rejected
        rules: House limits

    Returns:
        BetResult carrying the new state, or the reason for rejection
    """
    error = validate_bet(amount, state.chips, rules)
    if error is not None:
        return BetResult(valid=False, error=error)

    bet = int(amount)
    return BetResult(
        valid=True,
        state=state.evolve(chips=state.chips - bet, bet=bet, phase=Phase.PLAYING),
    )
