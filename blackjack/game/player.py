"""Player bankroll and betting."""

from dataclasses import dataclass
from decimal import Decimal

from blackjack.game.outcome import Outcome


@dataclass
class Player:
    """The player's money across rounds. Hands belong to the round, not here."""

    bankroll: Decimal = Decimal("2500")
    current_bet: int = 0
    last_bet: int = 0

    def can_afford(self, amount: int) -> bool:
        return 0 < amount and Decimal(amount) <= self.bankroll

    def place_bet(self, amount: int) -> bool:
        """
        Stake an amount for the next round.

        Returns:
            False if the amount is not positive or exceeds the bankroll
        """
        if not self.can_afford(amount):
            return False
        self.bankroll -= Decimal(amount)
        self.current_bet = amount
        self.last_bet = amount
        return True

    @property
    def can_repeat_bet(self) -> bool:
        """Check if the previous bet can be placed again."""
        return self.last_bet > 0 and self.can_afford(self.last_bet)

    def settle(self, outcome: Outcome) -> Decimal:
        """
        Pay out the current bet for a round outcome.

        The stake is returned plus the net result (stake times the payout
        multiplier); a loss returns nothing.

        Returns:
            The net win (positive) or loss (negative)
        """
        stake = Decimal(self.current_bet)
        net = stake * outcome.payout
        self.bankroll += stake + net
        self.current_bet = 0
        return net

    def refund(self) -> Decimal:
        """Return the current stake to the bankroll without a result."""
        stake = Decimal(self.current_bet)
        self.bankroll += stake
        self.current_bet = 0
        return stake

    @property
    def is_broke(self) -> bool:
        """Check if not even the smallest bet (1) can be placed."""
        return not self.can_afford(1)
