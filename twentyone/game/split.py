"""Split hand play: two hands sharing one dealer, played one at a time."""

from dataclasses import replace
from typing import cast

from twentyone.cards import draw
from twentyone.game.state import Phase, RoundState, SplitPlay, SplitStatus
from twentyone.hand import BLACKJACK, evaluate


def _advance(state: RoundState, split: SplitPlay) -> RoundState:
    """
    Move play to the next hand still in play.

    Once no hand has status PLAYING the dealer takes over.
    """
    playing = [i for i, hand in enumerate(split.hands) if hand.status == SplitStatus.PLAYING]
    if not playing:
        return state.evolve(player=split, phase=Phase.DEALER_TURN)

    following = [i for i in playing if i > split.active_index]
    next_index = following[0] if following else playing[0]
    return state.evolve(player=replace(split, active_index=next_index))


def split_hit(state: RoundState) -> RoundState:
    """Draw one card into the active split hand only."""
    split = cast(SplitPlay, state.player)

    hand = split.active_hand
    card, deck = draw(state.deck)
    cards = hand.cards + (card,)
    total = evaluate(cards).total

    if total > BLACKJACK:
        status = SplitStatus.BUST
    elif total == BLACKJACK:
        status = SplitStatus.STAND
    else:
        status = hand.status

    split = split.replace_hand(split.active_index, replace(hand, cards=cards, status=status))
    return _advance(state.evolve(deck=deck), split)


def split_stand(state: RoundState) -> RoundState:
    """Stand on the active split hand."""
    split = cast(SplitPlay, state.player)

    hand = replace(split.active_hand, status=SplitStatus.STAND)
    return _advance(state, split.replace_hand(split.active_index, hand))
