"""Application-wide constants and configuration values."""

from __future__ import annotations

from enum import Enum


# Raffle game rules
class RaffleDefaults:
    """Fixed raffle rules."""
    MIN_NUMBER = 1
    MAX_NUMBER = 15
    TICKET_SIZE = 5
    POT_SEED = 100.0  # added to the pot when a draw opens
    TICKET_PRICE = 5.0
    MAX_TICKETS_PER_BUYER = 10  # per name, per draw
    # Share of the pot paid to each match-count tier
    REWARD_SHARES = {
        2: 0.10,
        3: 0.15,
        4: 0.25,
        5: 0.50,
    }


class PurchaseDefaults:
    """Purchase input format."""
    SEPARATOR = ","
    EXAMPLE = "James,1"


class DrawStatus(str, Enum):
    """Raffle draw status."""
    NOT_STARTED = "not_started"
    OPEN = "open"
    SETTLED = "settled"


# Menu rendering
class ConsoleDefaults:
    """Terminal menu texts."""
    TITLE = "Welcome to My Raffle App"
    PAUSE_PROMPT = "Press Enter to return to the main menu"
    TIER_LABELS = {
        2: "Group 2 Winners",
        3: "Group 3 Winners",
        4: "Group 4 Winners",
        5: "Group 5 Winners (Jackpot)",
    }
    EMPTY_TIER = "Nil"
