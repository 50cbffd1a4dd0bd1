"""Unit tests for Streak System (moodlet/gamification/streak_system.py)"""
import pytest
from datetime import date, datetime, timedelta, timezone

from moodlet.gamification.streak_system import (
    update_streak,
    is_streak_at_risk,
    streak_milestone_reached,
    next_milestone,
    days_until_next_milestone,
    format_streak_display,
)
from moodlet.models import UserProfile


def day(d: int) -> date:
    return date(2024, 1, d)


# ============================================================================
# Streak Update Tests
# ============================================================================

def test_update_streak_first_activity():
    """Test first-ever entry starts a streak of 1"""
    profile = UserProfile()

    result = update_streak(profile, day(10))

    assert profile.current_streak == 1
    assert profile.longest_streak == 1
    assert profile.last_log_date == day(10)
    assert profile.streak_grace_used is False
    assert result["old_streak"] == 0
    assert "Day 1" in result["message"]


def test_update_streak_same_day_no_change():
    """Test several check-ins on one day leave the counters alone"""
    profile = UserProfile(current_streak=3, longest_streak=5, last_log_date=day(10), streak_grace_used=True)

    result = update_streak(profile, datetime(2024, 1, 10, 22, 30, tzinfo=timezone.utc))

    assert profile.current_streak == 3
    assert profile.longest_streak == 5
    assert profile.streak_grace_used is True
    assert profile.last_log_date == day(10)
    assert result["streak_broken"] is False


@pytest.mark.parametrize("current,longest,grace", [
    (0, 0, False),
    (1, 1, False),
    (4, 9, True),
    (30, 30, False),
])
def test_update_streak_same_day_property(current, longest, grace):
    """Test same-day updates never touch current, longest or grace"""
    profile = UserProfile(
        current_streak=current, longest_streak=longest,
        last_log_date=day(20), streak_grace_used=grace
    )

    update_streak(profile, day(20))

    assert (profile.current_streak, profile.longest_streak, profile.streak_grace_used) == (current, longest, grace)


def test_update_streak_consecutive_day():
    """Test consecutive day increments the streak and clears grace"""
    profile = UserProfile(current_streak=5, longest_streak=10, last_log_date=day(10), streak_grace_used=True)

    update_streak(profile, day(11))

    assert profile.current_streak == 6
    assert profile.longest_streak == 10
    assert profile.streak_grace_used is False


def test_update_streak_daily_run():
    """Test N gap-free days produce a streak of N"""
    profile = UserProfile()

    for n in range(1, 21):
        update_streak(profile, day(1) + timedelta(days=n - 1))
        assert profile.current_streak == n
        assert profile.longest_streak >= profile.current_streak


def test_update_streak_new_best():
    """Test longest streak follows the current streak upward"""
    profile = UserProfile(current_streak=14, longest_streak=14, last_log_date=day(10))

    update_streak(profile, day(11))

    assert profile.current_streak == 15
    assert profile.longest_streak == 15


# ============================================================================
# Grace Period Tests
# ============================================================================

def test_grace_forgives_one_missed_day_then_breaks():
    """Test one missed day is forgiven once, the second miss breaks the streak"""
    profile = UserProfile(current_streak=5, longest_streak=5, last_log_date=day(10))

    result = update_streak(profile, day(12))

    assert profile.current_streak == 6
    assert profile.streak_grace_used is True
    assert result["grace_used"] is True

    result = update_streak(profile, day(14))

    assert profile.current_streak == 1
    assert profile.streak_grace_used is False
    assert profile.longest_streak == 6
    assert result["streak_broken"] is True


def test_grace_restored_by_consecutive_day():
    """Test a consecutive day after a forgiven miss makes grace available again"""
    profile = UserProfile(current_streak=5, longest_streak=5, last_log_date=day(10))

    update_streak(profile, day(12))
    update_streak(profile, day(13))
    update_streak(profile, day(15))

    assert profile.current_streak == 8
    assert profile.streak_grace_used is True


@pytest.mark.parametrize("gap", [3, 4, 10, 365])
@pytest.mark.parametrize("grace_used", [True, False])
def test_update_streak_long_gap_resets(gap, grace_used):
    """Test a gap of 3+ days resets regardless of grace state"""
    profile = UserProfile(
        current_streak=7, longest_streak=14,
        last_log_date=day(1), streak_grace_used=grace_used
    )

    update_streak(profile, day(1) + timedelta(days=gap))

    assert profile.current_streak == 1
    assert profile.streak_grace_used is False
    assert profile.longest_streak == 14


def test_update_streak_reset_clears_paid_milestone():
    """Test a broken streak can earn its milestone bonuses again"""
    profile = UserProfile(current_streak=7, longest_streak=7, last_log_date=day(1), last_streak_milestone_paid=7)

    update_streak(profile, day(9))

    assert profile.last_streak_milestone_paid is None


def test_update_streak_backdated_entry_keeps_last_log():
    """Test an entry dated before the last log behaves like a same-day entry"""
    profile = UserProfile(current_streak=4, longest_streak=4, last_log_date=day(10))

    update_streak(profile, day(8))

    assert profile.current_streak == 4
    assert profile.last_log_date == day(10)


# ============================================================================
# Risk & Milestone Tests
# ============================================================================

def test_is_streak_at_risk():
    """Test at-risk only after exactly one idle day with grace unused"""
    profile = UserProfile(current_streak=3, longest_streak=3, last_log_date=day(10))

    assert is_streak_at_risk(profile, day(10)) is False
    assert is_streak_at_risk(profile, day(11)) is True
    assert is_streak_at_risk(profile, day(12)) is False

    profile.streak_grace_used = True
    assert is_streak_at_risk(profile, day(11)) is False


def test_is_streak_at_risk_without_history():
    """Test a profile that never checked in is not at risk"""
    assert is_streak_at_risk(UserProfile(), day(10)) is False


def test_is_streak_at_risk_is_pure():
    """Test the risk query never mutates the profile"""
    profile = UserProfile(current_streak=3, longest_streak=3, last_log_date=day(10))
    before = profile.model_dump()

    is_streak_at_risk(profile, day(11))

    assert profile.model_dump() == before


@pytest.mark.parametrize("streak,expected", [
    (0, None), (2, None), (3, 3), (7, 7), (8, None), (14, 14), (30, 30), (100, 100), (101, None),
])
def test_streak_milestone_reached(streak, expected):
    """Test milestones match exactly"""
    profile = UserProfile(current_streak=streak, longest_streak=streak)
    assert streak_milestone_reached(profile) == expected


@pytest.mark.parametrize("streak,milestone,days_left", [
    (0, 3, 3),
    (3, 7, 4),
    (13, 14, 1),
    (99, 100, 1),
    (100, 101, 1),
    (150, 151, 1),
])
def test_next_milestone(streak, milestone, days_left):
    """Test next milestone projections"""
    profile = UserProfile(current_streak=streak, longest_streak=streak)

    assert next_milestone(profile) == milestone
    assert days_until_next_milestone(profile) == days_left


def test_update_streak_reports_milestone():
    """Test reaching a milestone is reported in the result"""
    profile = UserProfile(current_streak=6, longest_streak=10, last_log_date=day(10))

    result = update_streak(profile, day(11))

    assert result["milestone"] == 7
    assert "7-day milestone" in result["message"]


# ============================================================================
# Display Tests
# ============================================================================

def test_format_streak_display_empty():
    assert "No streak yet" in format_streak_display(UserProfile())


def test_format_streak_display():
    """Test display shows best streak and the next milestone"""
    profile = UserProfile(current_streak=5, longest_streak=9)

    display = format_streak_display(profile)

    assert "5 day streak" in display
    assert "best: 9" in display
    assert "2 days until your 7-day milestone" in display
