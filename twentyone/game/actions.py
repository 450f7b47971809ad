"""Dealing and player actions for the standard (unsplit) hand."""

from enum import Enum
from random import Random

from twentyone.cards import Deck, create_deck, draw, shuffle
from twentyone.game.state import (
    Hand,
    Outcome,
    Phase,
    RoundResult,
    RoundState,
    SplitHand,
    SplitPlay,
    SplitStatus,
    StandardPlay,
)
from twentyone.hand import BLACKJACK, evaluate, is_pair
from twentyone.rules import HOUSE_RULES, HouseRules


class Action(Enum):
    """Inputs a player can send to the engine."""

    HIT = "hit"
    STAND = "stand"
    DOUBLE = "double"
    SPLIT = "split"
    SPLIT_HIT = "split_hit"
    SPLIT_STAND = "split_stand"
    QUIT = "quit"


def deal_initial_cards(
    state: RoundState,
    rules: HouseRules = HOUSE_RULES,
    rng: Random | None = None,
) -> RoundState:
    """
    Deal two cards each to player and dealer, alternating from the top.

    The deck is replaced by a freshly shuffled one first if it holds fewer
    than ``rules.reshuffle_threshold`` cards; ``reshuffled`` reports it.
    """
    deck = state.deck
    reshuffled = len(deck) < rules.reshuffle_threshold
    if reshuffled:
        deck = shuffle(create_deck(), rng)

    player: Hand = ()
    dealer: Hand = ()
    for _ in range(2):
        card, deck = draw(deck)
        player += (card,)
        card, deck = draw(deck)
        dealer += (card,)

    return state.evolve(
        deck=deck,
        player=StandardPlay(hand=player),
        dealer_hand=dealer,
        phase=Phase.PLAYING,
        result=None,
        reshuffled=reshuffled,
    )


def _bust(state: RoundState, hand: Hand, deck: Deck, bet: int, chips: int) -> RoundState:
    """Close the round as a player bust; the stake is already off the bankroll."""
    return state.evolve(
        deck=deck,
        player=StandardPlay(hand=hand),
        bet=bet,
        chips=chips,
        phase=Phase.RESULT,
        result=RoundResult(outcome=Outcome.BUST, chip_change=-bet),
        stats=state.stats.record(Outcome.BUST),
    )


def player_hit(state: RoundState) -> RoundState:
    """
    Draw one card into the player's hand.

    Busting ends the round; reaching 21 stands automatically.
    """
    card, deck = draw(state.deck)
    hand = state.player_hand + (card,)
    total = evaluate(hand).total

    if total > BLACKJACK:
        return _bust(state, hand, deck, state.bet, state.chips)

    phase = Phase.DEALER_TURN if total == BLACKJACK else Phase.PLAYING
    return state.evolve(deck=deck, player=StandardPlay(hand=hand), phase=phase)


def player_stand(state: RoundState) -> RoundState:
    """Keep the current hand and hand over to the dealer."""
    return state.evolve(phase=Phase.DEALER_TURN)


def player_double(state: RoundState) -> RoundState:
    """
    Double the stake and take exactly one more card.

    Precondition: two-card hand and chips >= bet (see get_available_actions).
    """
    chips = state.chips - state.bet
    bet = state.bet * 2
    card, deck = draw(state.deck)
    hand = state.player_hand + (card,)

    if evaluate(hand).is_bust:
        return _bust(state, hand, deck, bet, chips)

    return state.evolve(
        deck=deck,
        player=StandardPlay(hand=hand),
        bet=bet,
        chips=chips,
        phase=Phase.DEALER_TURN,
    )


def player_split(state: RoundState) -> RoundState:
    """
    Split a pair into two hands, each carrying a stake equal to the bet.

    Each hand keeps one of the original cards and receives one new card,
    the first hand drawing first. Split Aces get no further cards: both
    hands stand and play passes to the dealer.

    Precondition: two cards of equal rank and chips >= bet.
    """
    first, second = state.player_hand
    card, deck = draw(state.deck)
    first_hand: Hand = (first, card)
    card, deck = draw(deck)
    second_hand: Hand = (second, card)

    if first.is_ace:
        status = SplitStatus.STAND
        phase = Phase.DEALER_TURN
    else:
        status = SplitStatus.PLAYING
        phase = Phase.PLAYING

    hands = (
        SplitHand(cards=first_hand, bet=state.bet, status=status),
        SplitHand(cards=second_hand, bet=state.bet, status=status),
    )
    return state.evolve(
        deck=deck,
        player=SplitPlay(hands=hands, active_index=0),
        chips=state.chips - state.bet,
        phase=phase,
    )


def get_available_actions(state: RoundState) -> tuple[Action, ...]:
    """
    List the actions that are legal right now, in display order.

    Quit is always available. During a split only the split actions are
    offered, and they address the hand at ``active_hand_index``.
    """
    if state.phase != Phase.PLAYING:
        return (Action.QUIT,)

    if state.is_split:
        return (Action.SPLIT_HIT, Action.SPLIT_STAND, Action.QUIT)

    hand = state.player_hand
    actions: list[Action] = []
    if evaluate(hand).total < BLACKJACK:
        actions.append(Action.HIT)
    actions.append(Action.STAND)

    if len(hand) == 2 and state.chips >= state.bet:
        actions.append(Action.DOUBLE)
        if is_pair(hand):
            actions.append(Action.SPLIT)

    actions.append(Action.QUIT)
    return tuple(actions)
