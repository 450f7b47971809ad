"""HTTP boundary for the blackjack table."""
