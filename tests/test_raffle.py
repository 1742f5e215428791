"""Unit tests for the Raffle ledger."""

import pytest
from prometheus_client import REGISTRY

from core.constants import DrawStatus, RaffleDefaults
from core.exceptions import ConfigurationError, DrawNotOpenError, InvalidInputError, TicketLimitError
from core.models import RaffleRules, Ticket
from services.raffle import Raffle
from services.ticket_generator import TicketGenerator
from utils.performance import PerformanceMonitor

NO_MATCH = (1, 2, 4, 5, 6)
WINNING = (3, 7, 8, 11, 12)


def test_open_draw_sets_open_and_seeds_pot(raffle):
    pot = raffle.open_draw()

    assert raffle.open
    assert pot == 100
    assert raffle.pot_size == 100


def test_open_draw_is_idempotent(raffle):
    raffle.open_draw()
    pot = raffle.open_draw()

    assert pot == 100
    assert raffle.pot_size == 100


def test_purchase_and_invalid_input_end_to_end():
    raffle = Raffle(generator=TicketGenerator(seed=42), pot_size=100)
    assert not raffle.open

    assert raffle.open_draw() == 200
    assert raffle.open

    result = raffle.register_purchase("John,3")
    assert result.participant.name == "John"
    assert result.ticket_count == 3
    assert len(result.participant.tickets) == 3
    assert result.pot_size == 215
    assert raffle.pot_size == 215

    with pytest.raises(InvalidInputError):
        raffle.register_purchase("bad input")
    assert raffle.pot_size == 215
    assert len(raffle.participants) == 1


@pytest.mark.parametrize(
    "raw_input",
    ["bad input", "John", "John,3,4", "John,abc", "John,", ",3", "   ,3", "John,-1", "John,2.5", ""],
)
def test_malformed_purchase_leaves_ledger_unchanged(raffle, raw_input):
    raffle.open_draw()

    with pytest.raises(InvalidInputError):
        raffle.register_purchase(raw_input)
    assert raffle.pot_size == 100
    assert raffle.participants == ()


def test_purchase_trims_name_and_count(raffle):
    raffle.open_draw()
    result = raffle.register_purchase("  Alice  ,  2 ")

    assert result.participant.name == "Alice"
    assert result.ticket_count == 2
    assert raffle.pot_size == 110


def test_names_need_not_be_unique(raffle):
    raffle.open_draw()
    raffle.buy_tickets("Bob", 1)
    raffle.buy_tickets("Bob", 2)

    assert [p.name for p in raffle.participants] == ["Bob", "Bob"]
    assert [len(p.tickets) for p in raffle.participants] == [1, 2]
    assert raffle.pot_size == 115


@pytest.mark.parametrize("count", ["4", 2.0, None, True])
def test_buy_tickets_rejects_non_integer_counts(raffle, count):
    raffle.open_draw()

    with pytest.raises(InvalidInputError):
        raffle.buy_tickets("Carol", count)
    assert raffle.pot_size == 100
    assert raffle.participants == ()


def test_zero_tickets_buys_nothing(raffle):
    raffle.open_draw()

    result = raffle.register_purchase("John,0")

    assert result.participant is None
    assert result.ticket_count == 0
    assert result.pot_size == 100
    assert raffle.pot_size == 100
    assert raffle.participants == ()


def test_buy_tickets_rejects_negative_count(raffle):
    raffle.open_draw()
    with pytest.raises(InvalidInputError, match="must not be negative"):
        raffle.buy_tickets("John", -1)
    assert raffle.participants == ()


def test_exceeding_ticket_cap_is_rejected(raffle):
    limit = RaffleDefaults.MAX_TICKETS_PER_BUYER
    raffle.open_draw()
    raffle.buy_tickets("Bob", limit - 2)
    pot = raffle.pot_size

    with pytest.raises(TicketLimitError) as excinfo:
        raffle.register_purchase("Bob,3")

    assert str(excinfo.value) == "You can only purchase 2 more tickets in this draw."
    assert excinfo.value.remaining == 2
    assert raffle.tickets_held("Bob") == limit - 2
    assert raffle.pot_size == pot
    assert len(raffle.participants) == 1


def test_ticket_cap_counts_every_purchase_under_the_name(raffle):
    raffle.open_draw()
    raffle.buy_tickets("Bob", 6)
    raffle.buy_tickets(" Bob ", 3)

    with pytest.raises(TicketLimitError, match="only purchase 1 more ticket in"):
        raffle.buy_tickets("Bob", 2)

    raffle.buy_tickets("Bob", 1)
    with pytest.raises(TicketLimitError) as excinfo:
        raffle.buy_tickets("Bob", 1)
    assert str(excinfo.value) == (
        "You have already purchased the maximum number of tickets (10) in this draw."
    )
    assert raffle.tickets_held("Bob") == 10


def test_ticket_cap_rejects_huge_count_before_generating(raffle):
    raffle.open_draw()

    with pytest.raises(TicketLimitError):
        raffle.register_purchase("Bob,200000")
    assert raffle.participants == ()
    assert raffle.pot_size == 100


def test_ticket_cap_is_per_name_and_per_draw():
    rules = RaffleRules(max_tickets_per_buyer=2)
    raffle = Raffle(generator=TicketGenerator(seed=9, rules=rules), rules=rules)
    raffle.open_draw()
    raffle.buy_tickets("Ann", 2)
    raffle.buy_tickets("Ben", 2)

    with pytest.raises(TicketLimitError):
        raffle.buy_tickets("Ann", 1)

    raffle.settle_draw()
    raffle.open_draw()
    assert raffle.buy_tickets("Ann", 2).ticket_count == 2


def test_ticket_cap_must_be_positive():
    with pytest.raises(ConfigurationError):
        RaffleRules(max_tickets_per_buyer=0)


def test_buy_tickets_rejects_empty_name(raffle):
    raffle.open_draw()
    with pytest.raises(InvalidInputError):
        raffle.buy_tickets("  ", 1)
    assert raffle.pot_size == 100


def test_purchase_when_closed_is_rejected(raffle):
    with pytest.raises(DrawNotOpenError, match="Draw has not started"):
        raffle.register_purchase("Alice,2")
    with pytest.raises(DrawNotOpenError):
        raffle.buy_tickets("Alice", 2)

    assert raffle.pot_size == 0
    assert raffle.participants == ()


def test_malformed_purchase_when_closed_reports_not_open(raffle):
    with pytest.raises(DrawNotOpenError):
        raffle.register_purchase("bad input")


def test_settle_when_closed_is_rejected():
    raffle = Raffle(generator=TicketGenerator(seed=1), pot_size=110)

    with pytest.raises(DrawNotOpenError):
        raffle.settle_draw()
    assert raffle.pot_size == 110
    assert raffle.winning_ticket is None


def test_settle_without_winners_keeps_pot(scripted_raffle):
    raffle = scripted_raffle([NO_MATCH, NO_MATCH, WINNING])
    raffle.open_draw()
    raffle.buy_tickets("User4", 1)
    raffle.buy_tickets("User5", 1)
    assert raffle.pot_size == 110

    result = raffle.settle_draw()

    assert result.winning_ticket == Ticket(WINNING)
    assert result.total_paid == 0
    assert result.remaining_pot == 110
    assert raffle.pot_size == 110
    assert not raffle.open
    assert all(not tier.winners for tier in result.tiers)


def test_settle_splits_tier_between_co_winners(scripted_raffle):
    raffle = scripted_raffle([(3, 7, 8, 10, 11), (3, 7, 8, 12, 13), WINNING])
    raffle.open_draw()
    raffle.buy_tickets("User4", 1)
    raffle.buy_tickets("User5", 1)

    result = raffle.settle_draw()

    tier4 = result.tier(4)
    assert [w.name for w in tier4.winners] == ["User4", "User5"]
    assert tier4.reward == pytest.approx(27.5)
    assert tier4.reward_per_winner == pytest.approx(13.75)
    assert not result.tier(5).paid
    assert result.pot_before == 110
    assert result.remaining_pot == pytest.approx(82.5)
    assert raffle.pot_size == pytest.approx(82.5)


def test_jackpot_shared_by_two_winners(scripted_raffle):
    raffle = scripted_raffle([(12, 13, 3, 15, 2), (12, 13, 3, 15, 2), (2, 3, 12, 13, 15)])
    raffle.open_draw()
    raffle.buy_tickets("User4", 1)
    raffle.buy_tickets("User5", 1)

    result = raffle.settle_draw()

    assert len(result.tier(5).winners) == 2
    assert result.tier(5).reward_per_winner == pytest.approx(27.5)
    assert raffle.pot_size == pytest.approx(55)


def test_only_first_ticket_counts(scripted_raffle):
    raffle = scripted_raffle([NO_MATCH, WINNING, WINNING])
    raffle.open_draw()
    raffle.buy_tickets("Multi", 2)

    result = raffle.settle_draw()

    assert result.winners == ()
    assert raffle.pot_size == 110


def test_tier_amounts_use_pot_before_payout(scripted_raffle):
    # One winner in every tier: 10% + 15% + 25% + 50% of the same pot
    raffle = scripted_raffle(
        [(3, 7, 1, 2, 4), (3, 7, 8, 1, 2), (3, 7, 8, 11, 1), WINNING, WINNING]
    )
    raffle.open_draw()
    for name in ("Two", "Three", "Four", "Five"):
        raffle.buy_tickets(name, 1)
    assert raffle.pot_size == 120

    result = raffle.settle_draw()

    assert [t.reward for t in result.tiers] == pytest.approx([12, 18, 30, 60])
    assert result.total_paid == pytest.approx(120)
    assert raffle.pot_size == pytest.approx(0)


def test_settled_draw_stays_readable_until_next_open(scripted_raffle):
    raffle = scripted_raffle([NO_MATCH, WINNING])
    raffle.open_draw()
    raffle.buy_tickets("Dave", 1)
    result = raffle.settle_draw()

    assert raffle.participants[0].name == "Dave"
    assert raffle.winning_ticket == Ticket(WINNING)
    assert raffle.last_result is result
    assert raffle.status().status is DrawStatus.SETTLED

    raffle.open_draw()

    assert raffle.participants == ()
    assert raffle.winning_ticket is None
    assert raffle.last_result is None
    assert raffle.pot_size == 210


def test_status_snapshot(raffle):
    assert raffle.status().status is DrawStatus.NOT_STARTED

    raffle.open_draw()
    raffle.buy_tickets("Eve", 3)
    status = raffle.status()

    assert status.open
    assert status.pot_size == 115
    assert status.participant_count == 1
    assert status.ticket_count == 3


def test_custom_rules_drive_pot_changes():
    rules = RaffleRules(pot_seed=50, ticket_price=2)
    raffle = Raffle(generator=TicketGenerator(seed=5, rules=rules), rules=rules)

    assert raffle.open_draw() == 50
    raffle.buy_tickets("Frank", 3)
    assert raffle.pot_size == 56


def test_monitor_records_ledger_activity(scripted_raffle):
    def sample(name, labels=None):
        return REGISTRY.get_sample_value(name, labels or {}) or 0.0

    sold_before = sample("raffle_tickets_sold_total")
    settled_before = sample("raffle_draws_settled_total")
    rejected_before = sample("raffle_rejected_operations_total", {"reason": "not_open"})

    raffle = scripted_raffle([(3, 7, 8, 11, 1), WINNING])
    raffle.monitor = PerformanceMonitor()

    with pytest.raises(DrawNotOpenError):
        raffle.settle_draw()
    raffle.open_draw()
    raffle.buy_tickets("Grace", 1)
    raffle.settle_draw()

    assert sample("raffle_tickets_sold_total") == sold_before + 1
    assert sample("raffle_draws_settled_total") == settled_before + 1
    assert sample("raffle_rejected_operations_total", {"reason": "not_open"}) == rejected_before + 1
    assert sample("raffle_pot_size") == pytest.approx(raffle.pot_size)


def test_monitor_textfile_holds_raffle_collectors(raffle, tmp_path):
    path = tmp_path / "raffle.prom"
    raffle.monitor = PerformanceMonitor()
    raffle.open_draw()
    with pytest.raises(TicketLimitError):
        raffle.buy_tickets("Hal", RaffleDefaults.MAX_TICKETS_PER_BUYER + 1)

    raffle.monitor.write_textfile(str(path))

    content = path.read_text()
    assert "raffle_draws_opened_total" in content
    assert 'raffle_rejected_operations_total{reason="ticket_limit"}' in content
