"""Round state model - the single immutable record threaded through the engine."""

from dataclasses import dataclass, field, replace
from enum import Enum

from twentyone.cards import Card, Deck
from twentyone.rules import HOUSE_RULES, HouseRules

Hand = tuple[Card, ...]


class Phase(Enum):
    """
    Session phases.

    Flow: WELCOME → BETTING → PLAYING → DEALER_TURN → RESULT → BETTING ...,
    with RESULT → GAME_OVER once the bankroll drops below the minimum bet.
    """

    WELCOME = "welcome"
    BETTING = "betting"
    PLAYING = "playing"
    DEALER_TURN = "dealer_turn"
    RESULT = "result"
    GAME_OVER = "game_over"

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class Outcome(Enum):
    """How a hand (or a whole round) ended for the player."""

    WIN = "win"
    LOSE = "lose"
    PUSH = "push"
    BLACKJACK = "blackjack"
    BUST = "bust"
    SPLIT = "split"  # aggregate of two split hands

    @property
    def is_win(self) -> bool:
        return self in (Outcome.WIN, Outcome.BLACKJACK)

    @property
    def is_loss(self) -> bool:
        return self in (Outcome.LOSE, Outcome.BUST)


class SplitStatus(Enum):
    """Play status of a split hand."""

    PLAYING = "playing"
    STAND = "stand"
    BUST = "bust"


@dataclass(frozen=True)
class RoundStats:
    """Cumulative session counters, only ever incremented at settlement."""

    hands_played: int = 0
    hands_won: int = 0
    hands_lost: int = 0
    hands_pushed: int = 0
    blackjacks: int = 0
    peak_chips: int = HOUSE_RULES.starting_chips

    def record(self, outcome: Outcome) -> "RoundStats":
        """Count one settled hand."""
        return replace(
            self,
            hands_played=self.hands_played + 1,
            hands_won=self.hands_won + outcome.is_win,
            hands_lost=self.hands_lost + outcome.is_loss,
            hands_pushed=self.hands_pushed + (outcome == Outcome.PUSH),
            blackjacks=self.blackjacks + (outcome == Outcome.BLACKJACK),
        )

    def with_peak(self, chips: int) -> "RoundStats":
        """Raise the peak to ``chips`` if it is a new high."""
        if chips <= self.peak_chips:
            return self
        return replace(self, peak_chips=chips)


@dataclass(frozen=True)
class RoundResult:
    """Settled result of a round."""

    outcome: Outcome
    chip_change: int


@dataclass(frozen=True)
class SplitHand:
    """One of the two hands created by a split, with its own stake."""

    cards: Hand
    bet: int
    status: SplitStatus = SplitStatus.PLAYING
    result: Outcome | None = None


@dataclass(frozen=True)
class StandardPlay:
    """Player holds a single hand."""

    hand: Hand = ()


@dataclass(frozen=True)
class SplitPlay:
    """Player has split into two hands; ``active_index`` points at the one in play."""

    hands: tuple[SplitHand, SplitHand]
    active_index: int = 0

    @property
    def active_hand(self) -> SplitHand:
        return self.hands[self.active_index]

    def replace_hand(self, index: int, hand: SplitHand) -> "SplitPlay":
        """Return a copy with the hand at ``index`` swapped out."""
        hands = list(self.hands)
        hands[index] = hand
        return replace(self, hands=(hands[0], hands[1]))


PlayerHands = StandardPlay | SplitPlay


@dataclass(frozen=True)
class RoundState:
    """
    Complete state of a blackjack session at one point in time.

    Every engine operation takes a RoundState and returns a new one; the
    input is never modified. ``player`` is either a StandardPlay or a
    SplitPlay, so the authoritative hand is always unambiguous.
    """

    deck: Deck = ()
    player: PlayerHands = field(default_factory=StandardPlay)
    dealer_hand: Hand = ()
    chips: int = HOUSE_RULES.starting_chips
    bet: int = 0
    phase: Phase = Phase.WELCOME
    result: RoundResult | None = None
    reshuffled: bool = False
    stats: RoundStats = field(default_factory=RoundStats)

    @property
    def is_split(self) -> bool:
        return isinstance(self.player, SplitPlay)

    @property
    def player_hand(self) -> Hand:
        """The player's hand; empty once the round has been split."""
        if isinstance(self.player, StandardPlay):
            return self.player.hand
        return ()

    @property
    def split_hands(self) -> tuple[SplitHand, SplitHand] | None:
        if isinstance(self.player, SplitPlay):
            return self.player.hands
        return None

    @property
    def active_hand_index(self) -> int:
        if isinstance(self.player, SplitPlay):
            return self.player.active_index
        return 0

    def evolve(self, **changes) -> "RoundState":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


def create_game_state(rules: HouseRules = HOUSE_RULES) -> RoundState:
    """Create the state a new session starts from."""
    return RoundState(
        chips=rules.starting_chips,
        stats=RoundStats(peak_chips=rules.starting_chips),
    )


def format_chips(amount: int) -> str:
    """Format a chip amount as dollars, e.g. 1000 -> '$1,000', -50 -> '-$50'."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,}"
