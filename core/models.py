"""Raffle value types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from core.constants import DrawStatus, RaffleDefaults
from core.exceptions import ConfigurationError


@dataclass(frozen=True, slots=True)
class Ticket:
    """Raffle ticket: distinct numbers in the order they were drawn."""
    numbers: Tuple[int, ...]

    def __str__(self) -> str:
        return " ".join(str(num) for num in self.numbers)

    def __len__(self) -> int:
        return len(self.numbers)


@dataclass(frozen=True, slots=True)
class Participant:
    """One purchase: a buyer name and the tickets bought in that transaction."""
    name: str
    tickets: Tuple[Ticket, ...]

    @property
    def first_ticket(self) -> Ticket:
        return self.tickets[0]


@dataclass(frozen=True, slots=True)
class PurchaseResult:
    participant: Optional[Participant]  # None when zero tickets were asked for
    ticket_count: int
    pot_size: float


@dataclass(frozen=True, slots=True)
class TierResult:
    """Winners of one match-count tier.

    ``reward`` is the tier amount computed from the pot before payout. It is
    only deducted from the pot when the tier has at least one winner.
    """
    matches: int
    reward: float
    winners: Tuple[Participant, ...] = ()
    reward_per_winner: float = 0.0

    @property
    def paid(self) -> bool:
        return bool(self.winners)

    @property
    def paid_amount(self) -> float:
        return self.reward if self.paid else 0.0


@dataclass(frozen=True, slots=True)
class DrawResult:
    """Outcome of a settled draw."""
    winning_ticket: Ticket
    tiers: Tuple[TierResult, ...]
    pot_before: float
    total_paid: float
    remaining_pot: float

    def tier(self, matches: int) -> TierResult:
        for tier in self.tiers:
            if tier.matches == matches:
                return tier
        raise KeyError(f"No reward tier for {matches} matches")

    @property
    def winners(self) -> Tuple[Participant, ...]:
        return tuple(winner for tier in self.tiers for winner in tier.winners)


@dataclass(frozen=True, slots=True)
class RaffleStatus:
    """Snapshot of the ledger for status display."""
    status: DrawStatus
    pot_size: float
    participant_count: int
    ticket_count: int
    winning_ticket: Optional[Ticket] = None

    @property
    def open(self) -> bool:
        return self.status is DrawStatus.OPEN


def _default_reward_shares() -> Dict[int, float]:
    return dict(RaffleDefaults.REWARD_SHARES)


@dataclass(frozen=True)
class RaffleRules:
    """Game rules. Defaults come from ``RaffleDefaults``."""
    min_number: int = RaffleDefaults.MIN_NUMBER
    max_number: int = RaffleDefaults.MAX_NUMBER
    ticket_size: int = RaffleDefaults.TICKET_SIZE
    pot_seed: float = RaffleDefaults.POT_SEED
    ticket_price: float = RaffleDefaults.TICKET_PRICE
    reward_shares: Dict[int, float] = field(default_factory=_default_reward_shares)
    max_tickets_per_buyer: int = RaffleDefaults.MAX_TICKETS_PER_BUYER

    def __post_init__(self) -> None:
        if self.min_number > self.max_number:
            raise ConfigurationError(
                f"Invalid number range: {self.min_number}..{self.max_number}"
            )
        if self.ticket_size < 1:
            raise ConfigurationError("Ticket size must be at least 1")
        if self.ticket_size > self.number_range:
            raise ConfigurationError(
                f"Cannot draw {self.ticket_size} distinct numbers from a range of {self.number_range}"
            )
        if self.pot_seed < 0 or self.ticket_price < 0:
            raise ConfigurationError("Pot seed and ticket price must not be negative")
        if self.max_tickets_per_buyer < 1:
            raise ConfigurationError("Ticket cap per buyer must be at least 1")
        if not self.reward_shares:
            raise ConfigurationError("At least one reward tier is required")
        for matches, share in self.reward_shares.items():
            if not 1 <= matches <= self.ticket_size:
                raise ConfigurationError(f"Reward tier {matches} is outside 1..{self.ticket_size}")
            if not 0.0 <= share <= 1.0:
                raise ConfigurationError(f"Reward share for tier {matches} must be within 0..1")
        # Small tolerance for float sums such as 0.1 + 0.15 + 0.25 + 0.5
        if sum(self.reward_shares.values()) > 1.0 + 1e-9:
            raise ConfigurationError("Reward shares must not exceed the whole pot")

    @property
    def number_range(self) -> int:
        return self.max_number - self.min_number + 1

    @property
    def tiers(self) -> Tuple[int, ...]:
        return tuple(sorted(self.reward_shares))
