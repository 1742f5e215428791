"""Text rendering for the terminal menu."""

from __future__ import annotations

from typing import List

from core.constants import ConsoleDefaults, PurchaseDefaults
from core.models import DrawResult, PurchaseResult, RaffleStatus, TierResult
from utils.formatting import format_currency, pluralize

MENU_OPTIONS = (
    ("1", "Start a New Draw"),
    ("2", "Buy Tickets"),
    ("3", "Run Raffle"),
    ("4", "Exit"),
)

PURCHASE_PROMPT = (
    f"Enter your name, number of tickets to purchase (e.g., {PurchaseDefaults.EXAMPLE}): "
)
CHOICE_PROMPT = "Enter your choice: "
INVALID_CHOICE = "Invalid choice. Please enter 1, 2, 3 or 4."


def format_status(status: RaffleStatus) -> str:
    if not status.open:
        return "Draw has not started"
    return f"Draw is ongoing. Raffle pot size is ${format_currency(status.pot_size)}"


def format_menu(status: RaffleStatus) -> List[str]:
    lines = [ConsoleDefaults.TITLE, f"Status: {format_status(status)}", ""]
    lines.extend(f"[{key}] {label}" for key, label in MENU_OPTIONS)
    lines.append("")
    return lines


def format_draw_opened(pot_size: float) -> str:
    return f"New Raffle draw has been started. Initial pot size: ${format_currency(pot_size)}"


def format_purchase(result: PurchaseResult) -> List[str]:
    participant = result.participant
    if participant is None:
        return ["No tickets purchased.", ""]
    lines = [f"Hi {participant.name}, you have purchased {pluralize(result.ticket_count, 'ticket')}"]
    for index, ticket in enumerate(participant.tickets, start=1):
        lines.append(f"Ticket {index}: {ticket}")
    lines.append("")
    return lines


def format_tier(tier: TierResult) -> List[str]:
    label = ConsoleDefaults.TIER_LABELS.get(tier.matches, f"Group {tier.matches} Winners")
    lines = [f"{label}:"]
    if not tier.winners:
        lines.append(ConsoleDefaults.EMPTY_TIER)
    for winner in tier.winners:
        lines.append(
            f"{winner.name} with {len(winner.tickets)} winning ticket(s) - "
            f"${format_currency(tier.reward_per_winner)}"
        )
    lines.append("")
    return lines


def format_draw_result(result: DrawResult) -> List[str]:
    lines = [f"Winning Ticket is {result.winning_ticket}", ""]
    for tier in result.tiers:
        lines.extend(format_tier(tier))
    lines.append(f"Remaining pot size: ${format_currency(result.remaining_pot)}")
    return lines
