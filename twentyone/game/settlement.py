"""Round settlement: naturals, dealer comparison, payouts and game over."""

from dataclasses import replace

from twentyone.game.state import (
    Hand,
    Outcome,
    Phase,
    RoundResult,
    RoundState,
    RoundStats,
    SplitStatus,
    StandardPlay,
)
from twentyone.hand import BLACKJACK, evaluate, is_blackjack
from twentyone.rules import HOUSE_RULES, HouseRules


def check_for_blackjack(state: RoundState, rules: HouseRules = HOUSE_RULES) -> RoundState:
    """
    Resolve naturals right after the initial deal.

    Returns the very same object when neither side has a natural.
    """
    player_bj = is_blackjack(state.player_hand)
    dealer_bj = is_blackjack(state.dealer_hand)

    if not player_bj and not dealer_bj:
        return state

    if player_bj and dealer_bj:
        outcome = Outcome.PUSH
        chip_change = 0
        chips = state.chips + state.bet
    elif player_bj:
        outcome = Outcome.BLACKJACK
        chip_change = rules.blackjack_win(state.bet)
        chips = state.chips + state.bet + chip_change
    else:
        outcome = Outcome.LOSE
        chip_change = -state.bet
        chips = state.chips

    return state.evolve(
        chips=chips,
        phase=Phase.RESULT,
        result=RoundResult(outcome=outcome, chip_change=chip_change),
        stats=state.stats.record(outcome).with_peak(chips),
    )


def compare_hands(player: Hand, dealer: Hand) -> Outcome:
    """
    Compare a finished player hand to the dealer's.

    A busted player hand loses even if the dealer busts too.
    """
    player_total = evaluate(player).total
    dealer_total = evaluate(dealer).total

    if player_total > BLACKJACK:
        return Outcome.BUST
    if dealer_total > BLACKJACK or player_total > dealer_total:
        return Outcome.WIN
    if player_total < dealer_total:
        return Outcome.LOSE
    return Outcome.PUSH


def _payout(outcome: Outcome, bet: int) -> tuple[int, int]:
    """Chips returned to the bankroll and net chip change for one hand."""
    if outcome == Outcome.WIN:
        return 2 * bet, bet
    if outcome == Outcome.PUSH:
        return bet, 0
    return 0, -bet


def settle_round(state: RoundState) -> RoundState:
    """
    Pay out every player hand against the dealer's final hand.

    Split hands are settled independently, each counted as a hand played;
    the round result is then an aggregate SPLIT outcome with the net change.
    """
    if isinstance(state.player, StandardPlay):
        outcome = compare_hands(state.player_hand, state.dealer_hand)
        returned, chip_change = _payout(outcome, state.bet)
        chips = state.chips + returned
        return state.evolve(
            chips=chips,
            phase=Phase.RESULT,
            result=RoundResult(outcome=outcome, chip_change=chip_change),
            stats=state.stats.record(outcome).with_peak(chips),
        )

    split = state.player
    stats = state.stats
    hands = []
    chips = state.chips
    total_change = 0
    for hand in split.hands:
        if hand.status == SplitStatus.BUST:
            outcome = Outcome.BUST
        else:
            outcome = compare_hands(hand.cards, state.dealer_hand)
        returned, chip_change = _payout(outcome, hand.bet)
        chips += returned
        total_change += chip_change
        stats = stats.record(outcome)
        hands.append(replace(hand, result=outcome))

    return state.evolve(
        player=replace(split, hands=(hands[0], hands[1])),
        chips=chips,
        phase=Phase.RESULT,
        result=RoundResult(outcome=Outcome.SPLIT, chip_change=total_change),
        stats=stats.with_peak(chips),
    )


def check_game_over(state: RoundState, rules: HouseRules = HOUSE_RULES) -> RoundState:
    """End the session once chips fall below the minimum bet."""
    if state.chips < rules.min_bet:
        return state.evolve(phase=Phase.GAME_OVER)
    return state


def start_new_round(state: RoundState) -> RoundState:
    """
    Clear the table for the next bet.

    Chips, deck and stats carry over; hands, bet and result are reset.
    """
    return state.evolve(
        player=StandardPlay(),
        dealer_hand=(),
        bet=0,
        phase=Phase.BETTING,
        result=None,
        reshuffled=False,
    )


def get_win_rate(stats: RoundStats) -> int:
    """Percentage of decided (non-push) hands won, rounded to a whole number."""
    decided = stats.hands_played - stats.hands_pushed
    if decided <= 0:
        return 0
    return round(100 * stats.hands_won / decided)
