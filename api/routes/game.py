"""Game API endpoints."""

import logging
from typing import Annotated, Sequence

from fastapi import APIRouter, Header, HTTPException

from api.schemas import (
    ActionRequest,
    BetRequest,
    CardResponse,
    GameStateResponse,
    HandResponse,
    NewGameResponse,
    RoundResultResponse,
    SplitHandResponse,
    StatsResponse,
)
from api.session import create_session, get_session
from twentyone.cards import Card
from twentyone.game import GameSession, Phase, RoundState, SplitHand
from twentyone.hand import evaluate, is_blackjack

logger = logging.getLogger(__name__)

router = APIRouter()

SessionHeader = Annotated[str, Header(alias="X-Session-ID")]


def _card_to_response(card: Card) -> CardResponse:
    return CardResponse(rank=str(card.rank), suit=str(card.suit), value=card.value)


def _hand_to_response(cards: Sequence[Card]) -> HandResponse:
    """Convert a hand to HandResponse."""
    value = evaluate(cards)
    return HandResponse(
        cards=[_card_to_response(c) for c in cards],
        total=value.total,
        soft=value.soft,
        is_blackjack=is_blackjack(cards),
        is_bust=value.is_bust,
    )


def _split_hand_to_response(hand: SplitHand) -> SplitHandResponse:
    return SplitHandResponse(
        **_hand_to_response(hand.cards).model_dump(),
        bet=hand.bet,
        status=hand.status.value,
        result=hand.result.value if hand.result is not None else None,
    )


def _game_state_response(game: GameSession) -> GameStateResponse:
    """Render the session state; the hole card stays hidden while the player acts."""
    state: RoundState = game.state

    dealer_cards = state.dealer_hand
    if state.phase == Phase.PLAYING:
        dealer_cards = dealer_cards[:1]

    split_hands = None
    if state.split_hands is not None:
        split_hands = [_split_hand_to_response(h) for h in state.split_hands]

    result = None
    if state.result is not None:
        result = RoundResultResponse(
            outcome=state.result.outcome.value,
            chip_change=state.result.chip_change,
        )

    stats = state.stats
    return GameStateResponse(
        phase=state.phase.value,
        chips=state.chips,
        bet=state.bet,
        player_hand=None if state.is_split else _hand_to_response(state.player_hand),
        split_hands=split_hands,
        active_hand_index=state.active_hand_index,
        dealer_hand=_hand_to_response(dealer_cards),
        dealer_showing=_card_to_response(state.dealer_hand[0]) if state.dealer_hand else None,
        cards_remaining=len(state.deck),
        result=result,
        available_actions=[a.value for a in game.available_actions],
        stats=StatsResponse(
            hands_played=stats.hands_played,
            hands_won=stats.hands_won,
            hands_lost=stats.hands_lost,
            hands_pushed=stats.hands_pushed,
            blackjacks=stats.blackjacks,
            peak_chips=stats.peak_chips,
            win_rate=game.win_rate,
        ),
    )


def _get_game(token: str) -> GameSession:
    """Resolve the session header or fail with 404."""
    game = get_session(token)
    if game is None:
        raise HTTPException(status_code=404, detail="Session not found or expired")
    return game


@router.post("/new")
async def new_game() -> NewGameResponse:
    """Open a new table with a fresh bankroll."""
    token, _ = create_session()
    return NewGameResponse(session_id=token)


@router.get("/state")
async def get_state(session_id: SessionHeader) -> GameStateResponse:
    """Get current game state."""
    return _game_state_response(_get_game(session_id))


@router.post("/bet")
async def place_bet(request: BetRequest, session_id: SessionHeader) -> GameStateResponse:
    """Place a bet and deal cards."""
    game = _get_game(session_id)

    result = game.bet(request.amount)
    if not result.valid:
        raise HTTPException(status_code=400, detail=result.error)

    return _game_state_response(game)


@router.post("/action")
async def player_action(request: ActionRequest, session_id: SessionHeader) -> GameStateResponse:
    """Execute a player action."""
    game = _get_game(session_id)

    if not game.act(request.action):
        logger.debug("Rejected action %s in phase %s", request.action, game.phase.value)
        raise HTTPException(status_code=400, detail=f"Cannot {request.action} now")

    return _game_state_response(game)


@router.post("/next")
async def next_round(session_id: SessionHeader) -> GameStateResponse:
    """Clear the table and reopen betting after a result."""
    game = _get_game(session_id)

    if not game.next_round():
        raise HTTPException(status_code=400, detail="Round is not finished")

    return _game_state_response(game)


@router.get("/stats")
async def get_stats(session_id: SessionHeader) -> StatsResponse:
    """Get session statistics."""
    return _game_state_response(_get_game(session_id)).stats
