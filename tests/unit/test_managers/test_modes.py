"""Tests for browser modes and delete periods."""

from datetime import timedelta


def test_period_lookup_by_key():
    from clippie.ui.domain.modes import DeletePeriod

    assert DeletePeriod.from_key("h") is DeletePeriod.HOUR
    assert DeletePeriod.from_key("a") is DeletePeriod.ALL
    assert DeletePeriod.from_key("x") is None


def test_period_ranges():
    from clippie.ui.domain.modes import DeletePeriod

    assert DeletePeriod.HOUR.delta == timedelta(hours=1)
    assert DeletePeriod.WEEK.delta == timedelta(days=7)
    assert DeletePeriod.ALL.delta is None


def test_all_confirmation_countdown():
    from clippie.ui.domain.modes import REQUIRED_ALL_CONFIRMATIONS, ConfirmingAll

    assert REQUIRED_ALL_CONFIRMATIONS == 3
    assert ConfirmingAll().remaining == 3
    assert ConfirmingAll(2).remaining == 1


def test_delete_flow_membership():
    from clippie.ui.domain.modes import (
        ConfirmingSingle,
        FilteringMode,
        NormalMode,
        SelectingPeriod,
        is_delete_flow,
    )

    assert is_delete_flow(SelectingPeriod())
    assert is_delete_flow(ConfirmingSingle(1))
    assert not is_delete_flow(NormalMode())
    assert not is_delete_flow(FilteringMode())
