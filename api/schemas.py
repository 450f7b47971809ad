"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Literal


class BetRequest(BaseModel):
    """Request to place a bet; range and bankroll checks happen in the engine."""

    amount: int | float = Field(..., description="Bet amount in whole chips")


class ActionRequest(BaseModel):
    """Request for player action."""

    action: Literal["hit", "stand", "double", "split", "split_hit", "split_stand", "quit"]


class CardResponse(BaseModel):
    """Card representation."""

    model_config = ConfigDict(from_attributes=True)

    rank: str
    suit: str
    value: int


class HandResponse(BaseModel):
    """Hand representation with its evaluated total."""

    cards: list[CardResponse]
    total: int
    soft: bool
    is_blackjack: bool
    is_bust: bool


class SplitHandResponse(HandResponse):
    """One split hand with its own stake."""

    bet: int
    status: Literal["playing", "stand", "bust"]
    result: str | None = None


class RoundResultResponse(BaseModel):
    """Round result."""

    outcome: Literal["win", "lose", "push", "blackjack", "bust", "split"]
    chip_change: int


class StatsResponse(BaseModel):
    """Session statistics."""

    hands_played: int
    hands_won: int
    hands_lost: int
    hands_pushed: int
    blackjacks: int
    peak_chips: int
    win_rate: int


class GameStateResponse(BaseModel):
    """Current table state as seen by the player."""

    phase: str
    chips: int
    bet: int
    player_hand: HandResponse | None
    split_hands: list[SplitHandResponse] | None
    active_hand_index: int
    dealer_hand: HandResponse
    dealer_showing: CardResponse | None
    cards_remaining: int
    result: RoundResultResponse | None
    available_actions: list[str]
    stats: StatsResponse


class NewGameResponse(BaseModel):
    """Newly opened session."""

    session_id: str
