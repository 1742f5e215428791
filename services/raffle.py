"""Raffle ledger: pot, participants and draw lifecycle."""

from __future__ import annotations

from typing import List, Optional, Tuple

from core import get_logger
from core.constants import DrawStatus
from core.exceptions import DrawNotOpenError, InvalidInputError, TicketLimitError
from core.models import (
    DrawResult,
    Participant,
    PurchaseResult,
    RaffleRules,
    RaffleStatus,
    Ticket,
)
from services.rewards import RewardEngine
from services.ticket_generator import TicketGenerator
from utils.performance import PerformanceMonitor
from utils.validators import parse_purchase_input, validate_name, INVALID_FORMAT_MESSAGE

logger = get_logger(__name__)


class Raffle:
    """Single mutable raffle ledger.

    A draw cycle is ``open_draw`` -> any number of purchases -> ``settle_draw``.
    Participants and the winning ticket of a settled draw stay readable until
    the next draw opens. Every operation validates before it mutates, so a
    rejected call leaves the ledger unchanged.

    Not thread-safe: callers sharing a ledger across threads must serialize
    whole operations.
    """

    def __init__(
        self,
        generator: Optional[TicketGenerator] = None,
        rules: Optional[RaffleRules] = None,
        pot_size: float = 0.0,
        monitor: Optional[PerformanceMonitor] = None,
    ) -> None:
        """Initialize ledger.

        Args:
            generator: Ticket source owned by this ledger
            rules: Game rules (defaults to the fixed raffle rules)
            pot_size: Starting pot, carried over from earlier draws
            monitor: Optional metrics sink
        """
        self.rules = rules or (generator.rules if generator else RaffleRules())
        self.generator = generator or TicketGenerator(rules=self.rules)
        self.rewards = RewardEngine(self.rules)
        self.monitor = monitor

        self._open = False
        self._pot_size = float(pot_size)
        self._participants: List[Participant] = []
        self._winning_ticket: Optional[Ticket] = None
        self._last_result: Optional[DrawResult] = None

    @property
    def open(self) -> bool:
        return self._open

    @property
    def pot_size(self) -> float:
        return self._pot_size

    @property
    def participants(self) -> Tuple[Participant, ...]:
        return tuple(self._participants)

    @property
    def winning_ticket(self) -> Optional[Ticket]:
        return self._winning_ticket

    @property
    def last_result(self) -> Optional[DrawResult]:
        return self._last_result

    def status(self) -> RaffleStatus:
        if self._open:
            status = DrawStatus.OPEN
        elif self._last_result is not None:
            status = DrawStatus.SETTLED
        else:
            status = DrawStatus.NOT_STARTED
        return RaffleStatus(
            status=status,
            pot_size=self._pot_size,
            participant_count=len(self._participants),
            ticket_count=sum(len(p.tickets) for p in self._participants),
            winning_ticket=self._winning_ticket,
        )

    def open_draw(self) -> float:
        """Open a new draw and add the opening contribution to the pot.

        Calling it while a draw is already open changes nothing.

        Returns:
            float: Pot size after opening
        """
        if self._open:
            logger.debug("Draw already open, nothing to do")
            return self._pot_size

        self._participants = []
        self._winning_ticket = None
        self._last_result = None
        self._pot_size += self.rules.pot_seed
        self._open = True

        logger.info(f"New draw opened. Pot size: {self._pot_size}")
        if self.monitor:
            self.monitor.record_draw_opened(self._pot_size)
        return self._pot_size

    def tickets_held(self, name: str) -> int:
        """Total tickets bought under ``name`` in the current draw."""
        name = name.strip()
        return sum(len(p.tickets) for p in self._participants if p.name == name)

    def buy_tickets(self, name: str, count: int) -> PurchaseResult:
        """Generate ``count`` tickets for ``name`` and add their price to the pot.

        A count of zero is a valid request that buys nothing: no participant
        is recorded and the pot is unchanged.

        Raises:
            DrawNotOpenError: If no draw is open
            InvalidInputError: If the name is empty or the count is not a non-negative int
            TicketLimitError: If the buyer would exceed the per-draw ticket cap
        """
        self.ensure_open("purchase")

        try:
            if not validate_name(name):
                raise InvalidInputError(INVALID_FORMAT_MESSAGE)
            # bool is an int subclass but never a ticket count
            if isinstance(count, bool) or not isinstance(count, int):
                raise InvalidInputError(f"Number of tickets must be an integer, got {count!r}.")
            if count < 0:
                raise InvalidInputError("Number of tickets must not be negative.")
        except InvalidInputError:
            self._reject("invalid_input")
            raise

        name = name.strip()
        if count == 0:
            logger.info(f"{name} asked for no tickets. Pot size: {self._pot_size}")
            return PurchaseResult(participant=None, ticket_count=0, pot_size=self._pot_size)

        limit = self.rules.max_tickets_per_buyer
        held = self.tickets_held(name)
        if held + count > limit:
            logger.warning(f"{name} holds {held} ticket(s) and asked for {count}; cap is {limit}")
            self._reject("ticket_limit")
            raise TicketLimitError(limit=limit, remaining=limit - held)

        tickets = self.generator.generate_many(count)
        participant = Participant(name=name, tickets=tickets)

        self._pot_size += count * self.rules.ticket_price
        self._participants.append(participant)

        logger.info(f"{name} purchased {count} ticket(s). Pot size: {self._pot_size}")
        if self.monitor:
            self.monitor.record_purchase(count, self._pot_size)
        return PurchaseResult(participant=participant, ticket_count=count, pot_size=self._pot_size)

    def register_purchase(self, raw_input: str) -> PurchaseResult:
        """Parse a ``"<name>,<count>"`` line and buy the tickets.

        Raises:
            DrawNotOpenError: If no draw is open
            InvalidInputError: If the line is malformed
            TicketLimitError: If the buyer would exceed the per-draw ticket cap
        """
        self.ensure_open("purchase")
        try:
            name, count = parse_purchase_input(raw_input)
        except InvalidInputError:
            logger.warning(f"Rejected purchase input: {raw_input!r}")
            self._reject("invalid_input")
            raise
        return self.buy_tickets(name, count)

    def settle_draw(self) -> DrawResult:
        """Draw the winning ticket, pay the tiers and close the draw.

        Tier amounts are computed from the pot before payout. Only tiers with
        at least one winner are deducted from the pot.

        Raises:
            DrawNotOpenError: If no draw is open
        """
        self.ensure_open("settlement")

        if self.monitor:
            with self.monitor.track_settlement():
                result = self._settle()
        else:
            result = self._settle()

        if self.monitor:
            self.monitor.record_settlement(
                result.total_paid,
                {tier.matches: len(tier.winners) for tier in result.tiers},
                result.remaining_pot,
            )
        return result

    def _settle(self) -> DrawResult:
        pot_before = self._pot_size
        tier_amounts = self.rewards.tier_amounts(pot_before)

        winning_ticket = self.generator.generate()
        logger.info(f"Winning ticket: {winning_ticket}")

        tiers = self.rewards.evaluate(self._participants, winning_ticket, tier_amounts)
        total_paid = self.rewards.total_paid(tiers)

        self._winning_ticket = winning_ticket
        self._pot_size = pot_before - total_paid
        self._open = False

        result = DrawResult(
            winning_ticket=winning_ticket,
            tiers=tiers,
            pot_before=pot_before,
            total_paid=total_paid,
            remaining_pot=self._pot_size,
        )
        self._last_result = result

        logger.info(
            f"Draw settled: {len(self._participants)} participant(s), paid {total_paid}, "
            f"remaining pot {self._pot_size}"
        )
        return result

    def ensure_open(self, operation: str = "purchase") -> None:
        if not self._open:
            logger.warning(f"Rejected {operation}: draw has not started")
            self._reject("not_open")
            raise DrawNotOpenError()

    def _reject(self, reason: str) -> None:
        if self.monitor:
            self.monitor.record_rejection(reason)
