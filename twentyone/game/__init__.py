"""Round state, engine operations and the session driver."""

from twentyone.game.state import (
    Outcome,
    Phase,
    RoundResult,
    RoundState,
    RoundStats,
    SplitHand,
    SplitPlay,
    SplitStatus,
    StandardPlay,
    create_game_state,
)
from twentyone.game.betting import BetResult, place_bet
from twentyone.game.actions import (
    Action,
    deal_initial_cards,
    get_available_actions,
    player_double,
    player_hit,
    player_split,
    player_stand,
)
from twentyone.game.split import split_hit, split_stand
from twentyone.game.dealer import dealer_draw_one, dealer_turn, is_dealer_done, play_dealer
from twentyone.game.settlement import (
    check_for_blackjack,
    check_game_over,
    get_win_rate,
    settle_round,
    start_new_round,
)
from twentyone.game.events import EventType, GameEvent
from twentyone.game.session import GameSession

__all__ = [
    "Outcome",
    "Phase",
    "RoundResult",
    "RoundState",
    "RoundStats",
    "SplitHand",
    "SplitPlay",
    "SplitStatus",
    "StandardPlay",
    "create_game_state",
    "BetResult",
    "place_bet",
    "Action",
    "deal_initial_cards",
    "get_available_actions",
    "player_double",
    "player_hit",
    "player_split",
    "player_stand",
    "split_hit",
    "split_stand",
    "dealer_draw_one",
    "dealer_turn",
    "is_dealer_done",
    "play_dealer",
    "check_for_blackjack",
    "check_game_over",
    "get_win_rate",
    "settle_round",
    "start_new_round",
    "EventType",
    "GameEvent",
    "GameSession",
]
