"""House limits and fixed table rules."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal


@dataclass(frozen=True)
class HouseRules:
    """
    Fixed house constants for the single-player table.

    Dealer stands on all 17s, doubling is allowed on any first two cards,
    one split per round, split Aces receive one card each.
    """

    # Bankroll
    starting_chips: int = 1000

    # Betting limits
    min_bet: int = 10
    max_bet: int = 500

    # Blackjack payout (3:2)
    blackjack_payout: Decimal = Decimal("1.5")

    # Deck is replaced when fewer cards than this remain before a deal
    reshuffle_threshold: int = 15

    # Dealer stands on this total or higher, soft totals included
    dealer_stand_total: int = 17

    def __post_init__(self) -> None:
        """Validate limits."""
        if self.min_bet < 1:
            raise ValueError("min_bet must be at least 1")
        if self.max_bet < self.min_bet:
            raise ValueError("max_bet must be at least min_bet")
        if self.starting_chips < self.min_bet:
            raise ValueError("starting_chips must cover the minimum bet")
        if self.blackjack_payout < 1:
            raise ValueError("blackjack_payout must be at least 1.0")
        if not 4 <= self.reshuffle_threshold <= 52:
            raise ValueError("reshuffle_threshold must be between 4 and 52")

    def blackjack_win(self, bet: int) -> int:
        """
        Winnings for a natural on top of the returned stake.

        Rounds half up to whole chips, so a 30 bet wins 45 and a 15 bet wins 23.
        """
        payout = Decimal(bet) * self.blackjack_payout
        return int(payout.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


HOUSE_RULES = HouseRules()
