"""Reward tiers: match counting, pot allocation and payout split."""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from core import get_logger
from core.models import Participant, RaffleRules, Ticket, TierResult

logger = get_logger(__name__)


def count_matching_numbers(ticket_numbers: Iterable[int], winning_numbers: Iterable[int]) -> int:
    """Count ticket numbers found in the winning numbers.

    Each winning number can be matched once, so repeated values only count as
    often as they appear in ``winning_numbers``. For duplicate-free tickets
    this is the size of the intersection.
    """
    remaining = Counter(winning_numbers)
    matched = 0
    for num in ticket_numbers:
        if remaining[num] > 0:
            matched += 1
            remaining[num] -= 1
    return matched


def calculate_tier_amounts(pot_size: float, shares: Optional[Mapping[int, float]] = None) -> Dict[int, float]:
    """Reward amount per tier as a share of ``pot_size``."""
    shares = shares if shares is not None else RaffleRules().reward_shares
    return {matches: share * pot_size for matches, share in sorted(shares.items())}


def split_reward(tier_amount: float, winner_count: int) -> float:
    """Equal share of a tier amount.

    Raises:
        ValueError: If there are no winners to share the amount
    """
    if winner_count < 1:
        raise ValueError("Number of winners must be at least 1")
    return tier_amount / winner_count


def group_winners(
    participants: Sequence[Participant],
    winning_ticket: Ticket,
    tiers: Iterable[int],
) -> Dict[int, List[Participant]]:
    """Bucket participants by the match count of their first ticket.

    Only each participant's first ticket takes part in the grouping. Match
    counts outside ``tiers`` win nothing.
    """
    groups: Dict[int, List[Participant]] = {matches: [] for matches in tiers}
    for participant in participants:
        matched = count_matching_numbers(participant.first_ticket.numbers, winning_ticket.numbers)
        if matched in groups:
            groups[matched].append(participant)
    return groups


class RewardEngine:
    """Computes tier results for a settled draw."""

    def __init__(self, rules: Optional[RaffleRules] = None) -> None:
        self.rules = rules or RaffleRules()

    def tier_amounts(self, pot_size: float) -> Dict[int, float]:
        return calculate_tier_amounts(pot_size, self.rules.reward_shares)

    def evaluate(
        self,
        participants: Sequence[Participant],
        winning_ticket: Ticket,
        tier_amounts: Mapping[int, float],
    ) -> Tuple[TierResult, ...]:
        """Build per-tier results.

        Args:
            participants: Participants of the draw, in purchase order
            winning_ticket: Drawn ticket
            tier_amounts: Amounts computed from the pot before payout

        Returns:
            Tier results ordered by match count
        """
        groups = group_winners(participants, winning_ticket, tier_amounts)

        results = []
        for matches in sorted(tier_amounts):
            winners = tuple(groups[matches])
            reward = tier_amounts[matches]
            per_winner = split_reward(reward, len(winners)) if winners else 0.0
            results.append(
                TierResult(
                    matches=matches,
                    reward=reward,
                    winners=winners,
                    reward_per_winner=per_winner,
                )
            )
            if winners:
                logger.info(
                    f"Tier {matches}: {len(winners)} winner(s), {per_winner} each"
                )
        return tuple(results)

    @staticmethod
    def total_paid(tiers: Iterable[TierResult]) -> float:
        """Sum of tier amounts for tiers with at least one winner."""
        return sum(tier.paid_amount for tier in tiers)
