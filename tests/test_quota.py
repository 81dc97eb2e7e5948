import pytest
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta

from Analyzer.core import QuotaLedger

NOW = datetime(2026, 10, 19, 9, 30)


def test_admits_up_to_default_ceiling_then_denies():
    ledger = QuotaLedger()

    decisions = [ledger.admit("client-a", NOW) for _ in range(51)]

    assert all(d.allowed for d in decisions[:50])
    assert decisions[49].count == 50
    assert not decisions[50].allowed
    assert decisions[50].remaining == 0


def test_denied_request_does_not_increment():
    ledger = QuotaLedger(limit=2)
    ledger.admit("client-a", NOW)
    ledger.admit("client-a", NOW)

    for _ in range(5):
        decision = ledger.admit("client-a", NOW)
        assert not decision.allowed

    assert ledger.current_usage("client-a", NOW) == 2


def test_callers_have_independent_buckets():
    ledger = QuotaLedger(limit=1)

    assert ledger.admit("client-a", NOW).allowed
    assert ledger.admit("client-b", NOW).allowed
    assert not ledger.admit("client-a", NOW).allowed


def test_same_calendar_day_shares_bucket():
    ledger = QuotaLedger(limit=2)
    morning = datetime(2026, 10, 19, 0, 0, 1)
    night = datetime(2026, 10, 19, 23, 59, 59)

    ledger.admit("client-a", morning)
    ledger.admit("client-a", night)

    assert not ledger.admit("client-a", night).allowed


def test_new_day_starts_fresh_count():
    ledger = QuotaLedger(limit=2)
    ledger.admit("client-a", NOW)
    ledger.admit("client-a", NOW)
    tomorrow = NOW + timedelta(days=1)

    decision = ledger.admit("client-a", tomorrow)

    assert decision.allowed
    assert decision.count == 1
    assert ledger.current_usage("client-a", tomorrow) == 1


def test_rollover_evicts_previous_days():
    ledger = QuotaLedger(limit=5)
    for caller in ("client-a", "client-b", "client-c"):
        ledger.admit(caller, NOW)
    assert len(ledger) == 3

    ledger.admit("client-a", NOW + timedelta(days=1))

    assert len(ledger) == 1
    assert ledger.current_usage("client-b", NOW) == 0


def test_prune_removes_only_stale_entries():
    ledger = QuotaLedger(limit=5)
    ledger.admit("client-a", NOW)

    assert ledger.prune(NOW) == 0
    assert ledger.prune(NOW + timedelta(days=2)) == 1
    assert len(ledger) == 0


def test_current_usage_is_zero_for_unknown_caller():
    ledger = QuotaLedger()

    assert ledger.current_usage("nobody", NOW) == 0
    assert len(ledger) == 0


def test_concurrent_admits_never_exceed_ceiling():
    ledger = QuotaLedger(limit=50)

    with ThreadPoolExecutor(max_workers=16) as pool:
        decisions = list(pool.map(lambda _: ledger.admit("client-a", NOW), range(200)))

    assert sum(d.allowed for d in decisions) == 50
    assert ledger.current_usage("client-a", NOW) == 50


@pytest.mark.parametrize("limit", [0, -1])
def test_rejects_non_positive_limit(limit):
    with pytest.raises(ValueError):
        QuotaLedger(limit=limit)


def test_back_dated_request_is_charged_to_current_day():
    ledger = QuotaLedger(limit=5)
    ledger.admit("client-a", NOW)
    tomorrow = NOW + timedelta(days=1)
    ledger.admit("client-a", tomorrow)

    decision = ledger.admit("client-b", NOW)

    assert decision.allowed
    assert len(ledger) == 2
    assert ledger.current_usage("client-b", tomorrow) == 1
    assert ledger.current_usage("client-b", NOW) == 0
