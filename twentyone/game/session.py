"""Session driver: owns the current RoundState and sequences a full round."""

import logging
from random import Random
from typing import Callable

from transitions import Machine

from twentyone.cards import create_deck, shuffle
from twentyone.game.actions import (
    Action,
    deal_initial_cards,
    get_available_actions,
    player_double,
    player_hit,
    player_split,
    player_stand,
)
from twentyone.game.betting import BetResult, place_bet
from twentyone.game.dealer import dealer_draw_one, dealer_has_live_opponent, is_dealer_done
from twentyone.game.events import EventEmitter, EventType, GameEvent
from twentyone.game.settlement import (
    check_for_blackjack,
    check_game_over,
    get_win_rate,
    settle_round,
    start_new_round,
)
from twentyone.game.split import split_hit, split_stand
from twentyone.game.state import Outcome, Phase, RoundState, create_game_state, format_chips
from twentyone.hand import evaluate, format_hand
from twentyone.rules import HOUSE_RULES, HouseRules

logger = logging.getLogger(__name__)

_ACTION_HANDLERS: dict[Action, tuple[Callable[[RoundState], RoundState], EventType]] = {
    Action.HIT: (player_hit, EventType.PLAYER_HIT),
    Action.STAND: (player_stand, EventType.PLAYER_STAND),
    Action.DOUBLE: (player_double, EventType.PLAYER_DOUBLE),
    Action.SPLIT: (player_split, EventType.PLAYER_SPLIT),
    Action.SPLIT_HIT: (split_hit, EventType.PLAYER_HIT),
    Action.SPLIT_STAND: (split_stand, EventType.PLAYER_STAND),
}

# Cards an action draws from the deck
_DRAWS = {Action.HIT: 1, Action.DOUBLE: 1, Action.SPLIT: 2, Action.SPLIT_HIT: 1}

_OUTCOME_EVENTS = {
    Outcome.WIN: EventType.PLAYER_WINS,
    Outcome.BLACKJACK: EventType.PLAYER_WINS,
    Outcome.LOSE: EventType.PLAYER_LOSES,
    Outcome.BUST: EventType.PLAYER_LOSES,
    Outcome.PUSH: EventType.PUSH,
}

# Machine trigger that leads into each phase
_ENTER_TRIGGERS = {
    Phase.BETTING: "open_betting",
    Phase.PLAYING: "accept_bet",
    Phase.DEALER_TURN: "player_done",
    Phase.RESULT: "round_over",
    Phase.GAME_OVER: "end_game",
}


class GameSession:
    """
    A single-player session at the table.

    Holds the one current RoundState and replaces it with each engine call.
    The phase flow is mirrored in a state machine; an out-of-order phase
    change raises MachineError. Presentation layers follow along through
    events.
    """

    STATES = [p.value for p in Phase]

    TRANSITIONS = [
        {"trigger": "open_betting", "source": ["welcome", "result"], "dest": "betting"},
        {"trigger": "accept_bet", "source": "betting", "dest": "playing"},
        {"trigger": "player_done", "source": "playing", "dest": "dealer_turn"},
        {"trigger": "round_over", "source": ["playing", "dealer_turn"], "dest": "result"},
        {"trigger": "end_game", "source": "*", "dest": "game_over", "after": "_log_game_over"},
    ]

    def __init__(
        self,
        rules: HouseRules = HOUSE_RULES,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize a new session.

        Args:
            rules: House limits
            rng: Random number generator for reproducible shuffles
        """
        self.rules = rules
        self._rng = rng or Random()
        self._state = create_game_state(rules).evolve(deck=shuffle(create_deck(), self._rng))
        self.events = EventEmitter()

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial=Phase.WELCOME.value,
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> RoundState:
        """The current round state."""
        return self._state

    @property
    def phase(self) -> Phase:
        return Phase(self._machine_state)  # type: ignore[attr-defined]

    @property
    def available_actions(self) -> tuple[Action, ...]:
        return get_available_actions(self._state)

    @property
    def win_rate(self) -> int:
        return get_win_rate(self._state.stats)

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to session events."""
        self.events.subscribe(handler, event_type)

    def _commit(self, state: RoundState) -> None:
        """Adopt a new state, moving the machine along if the phase changed."""
        if state.phase != self.phase:
            self.trigger(_ENTER_TRIGGERS[state.phase])  # type: ignore[attr-defined]
        self._state = state

    def start(self) -> bool:
        """Leave the welcome screen and open betting."""
        if self.phase != Phase.WELCOME:
            return False
        self._commit(start_new_round(self._state))
        self.events.emit_new(EventType.GAME_STARTED, chips=self._state.chips)
        logger.info("Session started with %s", format_chips(self._state.chips))
        return True

    def bet(self, amount: object) -> BetResult:
        """
        Place a bet, deal, and resolve any naturals.

        Returns:
            The validator's result; on success ``state`` is the state after dealing
        """
        if self.phase != Phase.BETTING:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="Cannot bet in current state",
                state=self.phase.value,
            )
            return BetResult(valid=False, error="Betting is closed.")

        result = place_bet(self._state, amount, self.rules)
        if not result.valid:
            self.events.emit_new(EventType.BET_REJECTED, amount=amount, error=result.error)
            logger.debug("Bet %r rejected: %s", amount, result.error)
            return result

        self._commit(result.state)
        self.events.emit_new(EventType.BET_PLACED, amount=self._state.bet)
        self._deal()
        return BetResult(valid=True, state=self._state)

    def _deal(self) -> None:
        """Deal the opening cards and settle immediately on a natural."""
        state = deal_initial_cards(self._state, self.rules, self._rng)
        if state.reshuffled:
            self.events.emit_new(EventType.DECK_RESHUFFLED, cards=len(state.deck) + 4)
            logger.info("Deck reshuffled")
            state = state.evolve(reshuffled=False)
        self._commit(state)

        self.events.emit_new(
            EventType.ROUND_STARTED,
            bet=state.bet,
            player=format_hand(state.player_hand),
            dealer_upcard=str(state.dealer_hand[0]),
        )
        logger.debug("Dealt %s against %s", format_hand(state.player_hand), state.dealer_hand[0])

        checked = check_for_blackjack(state, self.rules)
        if checked is state:
            return

        if checked.result.outcome in (Outcome.BLACKJACK, Outcome.PUSH):
            self.events.emit_new(EventType.PLAYER_BLACKJACK)
        if checked.result.outcome in (Outcome.LOSE, Outcome.PUSH):
            self.events.emit_new(EventType.DEALER_BLACKJACK)
        self._commit(checked)
        self._end_round()

    def act(self, action: Action | str) -> bool:
        """
        Apply a player action.

        Actions not offered by get_available_actions are refused.

        Returns:
            True if the action was applied
        """
        try:
            action = Action(action)
        except ValueError:
            self.events.emit_new(EventType.INVALID_ACTION, message=f"Unknown action: {action}")
            return False

        if action not in self.available_actions:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message=f"Cannot {action.value} now",
                state=self.phase.value,
            )
            return False

        if action == Action.QUIT:
            return self.quit()

        handler, event_type = _ACTION_HANDLERS[action]
        self._ensure_cards(_DRAWS.get(action, 0))
        before = self._state
        self._commit(handler(before))
        self._emit_action(event_type, before)

        if self.phase == Phase.DEALER_TURN:
            self._play_dealer()
        elif self.phase == Phase.RESULT:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand=format_hand(self._state.player_hand))
            self._end_round()
        return True

    def _ensure_cards(self, count: int) -> None:
        """
        Refill a deck that ran out mid-round.

        The new deck holds every card not on the table.
        """
        state = self._state
        if len(state.deck) >= count:
            return

        on_table = set(state.dealer_hand) | set(state.player_hand)
        for hand in state.split_hands or ():
            on_table.update(hand.cards)
        deck = shuffle(tuple(c for c in create_deck() if c not in on_table), self._rng)
        self._state = state.evolve(deck=deck)
        self.events.emit_new(EventType.DECK_RESHUFFLED, cards=len(deck))
        logger.info("Deck ran out mid-round, reshuffled %d cards", len(deck))

    def _emit_action(self, event_type: EventType, before: RoundState) -> None:
        state = self._state
        if state.split_hands is None:
            self.events.emit_new(event_type, hand=format_hand(state.player_hand), bet=state.bet)
            return

        if not before.is_split:
            self.events.emit_new(
                event_type,
                hands=[format_hand(hand.cards) for hand in state.split_hands],
                bet=state.bet,
            )
            return

        index = before.active_hand_index
        self.events.emit_new(
            event_type,
            hand_index=index,
            hand=format_hand(state.split_hands[index].cards),
        )
        if state.phase == Phase.PLAYING and state.active_hand_index != index:
            self.events.emit_new(EventType.SPLIT_HAND_CHANGED, hand_index=state.active_hand_index)

    def _play_dealer(self) -> None:
        """Reveal the hole card, draw to 17, and settle."""
        self.events.emit_new(
            EventType.DEALER_REVEALS,
            card=str(self._state.dealer_hand[1]),
            hand_value=evaluate(self._state.dealer_hand).total,
        )
        if dealer_has_live_opponent(self._state):
            while not is_dealer_done(self._state, self.rules):
                self._ensure_cards(1)
                self._commit(dealer_draw_one(self._state))
                self.events.emit_new(
                    EventType.DEALER_HITS, hand_value=evaluate(self._state.dealer_hand).total
                )

        dealer_value = evaluate(self._state.dealer_hand)
        if dealer_value.is_bust:
            self.events.emit_new(EventType.DEALER_BUSTS)
        else:
            self.events.emit_new(EventType.DEALER_STANDS, hand_value=dealer_value.total)

        self._commit(settle_round(self._state))
        self._end_round()

    def _end_round(self) -> None:
        """Announce the result and check whether the bankroll is exhausted."""
        state = self._state
        if state.split_hands is not None:
            for index, hand in enumerate(state.split_hands):
                if hand.result is not None:
                    self.events.emit_new(_OUTCOME_EVENTS[hand.result], hand_index=index)
        else:
            self.events.emit_new(_OUTCOME_EVENTS[state.result.outcome], hand_index=0)

        self.events.emit_new(
            EventType.ROUND_ENDED,
            outcome=state.result.outcome.value,
            chip_change=state.result.chip_change,
            chips=state.chips,
        )
        logger.info(
            "Round ended: %s (%s), chips now %s",
            state.result.outcome.value,
            format_chips(state.result.chip_change),
            format_chips(state.chips),
        )

        over = check_game_over(state, self.rules)
        if over is not state:
            self._commit(over)
            self.events.emit_new(EventType.GAME_ENDED, reason="bankrupt", chips=over.chips)

    def next_round(self) -> bool:
        """Clear the table after a result and reopen betting."""
        if self.phase != Phase.RESULT:
            return False
        self._commit(start_new_round(self._state))
        self.events.clear_history()
        return True

    def quit(self) -> bool:
        """End the session from any phase."""
        if self.phase == Phase.GAME_OVER:
            return False
        self._commit(self._state.evolve(phase=Phase.GAME_OVER))
        self.events.emit_new(EventType.GAME_ENDED, reason="quit", chips=self._state.chips)
        return True

    def _log_game_over(self) -> None:
        stats = self._state.stats
        logger.info(
            "Game over after %d hands, win rate %d%%, peak %s",
            stats.hands_played,
            self.win_rate,
            format_chips(stats.peak_chips),
        )
