"""Random ticket generation."""

from __future__ import annotations

import random
from typing import Optional

from core import get_logger
from core.models import RaffleRules, Ticket

logger = get_logger(__name__)


class TicketGenerator:
    """Draws raffle tickets from a single pseudo-random source.

    The source is seeded once, when the generator is created. Every call to
    :meth:`generate` advances it, so calls must stay strictly sequential.
    Not suitable where cryptographic randomness is required.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        rules: Optional[RaffleRules] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Initialize generator.

        Args:
            seed: Seed for a deterministic sequence (None seeds from the OS)
            rules: Number range and ticket size
            rng: Pre-built random source, takes precedence over ``seed``
        """
        self.seed = seed
        self.rules = rules or RaffleRules()
        self._rng = rng or random.Random(seed)

    def generate(self) -> Ticket:
        """Draw one ticket of distinct numbers, rejecting repeats.

        Returns:
            Ticket: numbers in the order they were drawn
        """
        numbers: list[int] = []
        used: set[int] = set()

        while len(numbers) < self.rules.ticket_size:
            num = self._rng.randint(self.rules.min_number, self.rules.max_number)
            if num not in used:
                used.add(num)
                numbers.append(num)

        ticket = Ticket(tuple(numbers))
        logger.debug(f"Generated ticket: {ticket}")
        return ticket

    def generate_many(self, count: int) -> tuple[Ticket, ...]:
        """Draw ``count`` tickets in sequence."""
        return tuple(self.generate() for _ in range(count))
