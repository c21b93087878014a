from __future__ import annotations

import pytest

from expense_sheets.services.notifications import NotificationCenter


@pytest.fixture
def center(fake_clock) -> NotificationCenter:
    return NotificationCenter(ttl_seconds=5.0, clock=fake_clock)


def test_visible_until_ttl_then_expires(center, fake_clock):
    center.success("Expense saved successfully!")
    fake_clock.advance(4.999)
    assert center.current() is not None
    fake_clock.advance(0.002)  # T + 5.001s
    assert center.current() is None


def test_dismiss_removes_immediately_and_for_good(center, fake_clock):
    center.error("Sheet not found")
    fake_clock.advance(1.0)
    center.dismiss()
    assert center.current() is None
    fake_clock.advance(1.0)
    assert center.current() is None


def test_new_notification_restarts_timer(center, fake_clock):
    center.success("first")
    fake_clock.advance(3.0)
    center.error("second")
    fake_clock.advance(3.0)  # 6s after first, 3s after second
    active = center.current()
    assert active is not None
    assert active.message == "second"
    assert active.type == "error"
    fake_clock.advance(2.001)
    assert center.current() is None


def test_only_one_notification_at_a_time(center):
    center.success("one")
    center.error("two")
    assert center.current().message == "two"


def test_remaining_seconds(center, fake_clock):
    assert center.remaining_seconds() == 0.0
    center.success("saved")
    fake_clock.advance(2.0)
    assert center.remaining_seconds() == pytest.approx(3.0)
    fake_clock.advance(10.0)
    assert center.remaining_seconds() == 0.0
