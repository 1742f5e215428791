"""Pytest configuration and fixtures."""

from typing import Iterable, List, Sequence

import pytest

from core.models import RaffleRules, Ticket
from services.raffle import Raffle
from services.ticket_generator import TicketGenerator


class ScriptedGenerator(TicketGenerator):
    """Ticket source that hands out predefined tickets in order."""

    def __init__(self, tickets: Iterable[Sequence[int]], rules: RaffleRules = None) -> None:
        super().__init__(seed=0, rules=rules)
        self.scripted: List[Ticket] = [Ticket(tuple(numbers)) for numbers in tickets]

    def generate(self) -> Ticket:
        return self.scripted.pop(0)


class ScriptedIO:
    """Feeds console input from a list and records every prompt and line."""

    def __init__(self, inputs: Iterable[str]) -> None:
        self.inputs = list(inputs)
        self.prompts: List[str] = []
        self.lines: List[str] = []

    def read(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.inputs:
            raise EOFError
        return self.inputs.pop(0)

    def write(self, text: str = "") -> None:
        self.lines.append(text)

    @property
    def output(self) -> str:
        return "\n".join(self.lines)


@pytest.fixture
def seeded_generator():
    """Deterministic ticket generator."""
    return TicketGenerator(seed=42)


@pytest.fixture
def raffle(seeded_generator):
    """Closed ledger with an empty pot."""
    return Raffle(generator=seeded_generator)


@pytest.fixture
def scripted_raffle():
    """Build a closed ledger whose tickets come from a script."""
    def build(tickets, pot_size=0.0, rules=None):
        return Raffle(generator=ScriptedGenerator(tickets, rules=rules), pot_size=pot_size, rules=rules)
    return build


@pytest.fixture
def scripted_io():
    def build(*inputs):
        return ScriptedIO(inputs)
    return build
