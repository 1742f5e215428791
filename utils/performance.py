"""Raffle metrics using Prometheus collectors."""

from __future__ import annotations

import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from prometheus_client import REGISTRY, Counter, Gauge, Histogram, write_to_textfile


tickets_sold = Counter("raffle_tickets_sold_total", "Total tickets sold")
draws_opened = Counter("raffle_draws_opened_total", "Total draws opened")
draws_settled = Counter("raffle_draws_settled_total", "Total draws settled")
rewards_paid = Counter("raffle_rewards_paid_total", "Total reward amount paid out")
winners_total = Counter("raffle_winners_total", "Winners per tier", labelnames=("tier",))
rejected_operations = Counter(
    "raffle_rejected_operations_total", "Rejected ledger operations", labelnames=("reason",)
)
pot_size = Gauge("raffle_pot_size", "Current pot size")
settlement_duration = Histogram("raffle_settlement_duration_seconds", "Draw settlement duration")


class PerformanceMonitor:
    def __init__(self) -> None:
        self.metrics = {
            "tickets_sold": tickets_sold,
            "draws_opened": draws_opened,
            "draws_settled": draws_settled,
            "rewards_paid": rewards_paid,
            "winners_total": winners_total,
            "rejected_operations": rejected_operations,
            "pot_size": pot_size,
            "settlement_duration": settlement_duration,
        }

    @contextmanager
    def track_settlement(self) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            settlement_duration.observe(time.perf_counter() - start)

    def record_draw_opened(self, pot: float) -> None:
        draws_opened.inc()
        pot_size.set(pot)

    def record_purchase(self, ticket_count: int, pot: float) -> None:
        tickets_sold.inc(ticket_count)
        pot_size.set(pot)

    def record_settlement(self, paid: float, winners_by_tier: dict[int, int], pot: float) -> None:
        draws_settled.inc()
        rewards_paid.inc(paid)
        for tier, count in winners_by_tier.items():
            if count:
                winners_total.labels(tier=str(tier)).inc(count)
        pot_size.set(pot)

    def record_rejection(self, reason: str) -> None:
        rejected_operations.labels(reason=reason).inc()

    def write_textfile(self, path: Optional[str]) -> None:
        """Dump the default registry, which holds every raffle collector, in text format."""
        if not path:
            return
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        write_to_textfile(path, REGISTRY)
