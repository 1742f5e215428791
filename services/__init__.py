"""Services package."""

from .ticket_generator import TicketGenerator
from .rewards import (
    RewardEngine,
    calculate_tier_amounts,
    count_matching_numbers,
    group_winners,
    split_reward,
)
from .raffle import Raffle

__all__ = [
    "TicketGenerator",
    "RewardEngine",
    "calculate_tier_amounts",
    "count_matching_numbers",
    "group_winners",
    "split_reward",
    "Raffle",
]
