"""Terminal presentation layer for the raffle."""

from .console import RaffleConsole

__all__ = ["RaffleConsole"]
