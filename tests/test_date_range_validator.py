"""Unit tests for stay date validation."""

from datetime import date, timedelta

import pytest

from src.models.booking import DateRange, DateRejection, DateRole, StayConstraints
from src.rules import DateRangeValidator


TODAY = date(2026, 6, 1)


class TestValidateCheckIn:
    """Tests for check-in candidates."""

    def test_today_is_accepted(self):
        """Test that today itself is not considered in the past."""
        verdict = DateRangeValidator.validate(
            TODAY, DateRole.CHECK_IN, DateRange(), StayConstraints(), TODAY
        )

        assert verdict.accepted
        assert verdict.reason is None

    def test_past_date_is_rejected(self):
        """Test that yesterday is rejected as a past date."""
        verdict = DateRangeValidator.validate(
            TODAY - timedelta(days=1), DateRole.CHECK_IN, DateRange(), StayConstraints(), TODAY
        )

        assert not verdict.accepted
        assert verdict.reason == DateRejection.PAST_DATE

    def test_blackout_date_is_rejected(self):
        """Test exact calendar match against the blackout set."""
        blackout = TODAY + timedelta(days=10)
        constraints = StayConstraints(blackout_dates=frozenset({blackout}))

        verdict = DateRangeValidator.validate(
            blackout, DateRole.CHECK_IN, DateRange(), constraints, TODAY
        )
        neighbour = DateRangeValidator.validate(
            blackout + timedelta(days=1), DateRole.CHECK_IN, DateRange(), constraints, TODAY
        )

        assert verdict.reason == DateRejection.BLACKOUT_DATE
        assert neighbour.accepted


class TestValidateCheckOut:
    """Tests for check-out candidates."""

    def test_next_day_is_one_night(self):
        """Test check-in today and check-out tomorrow with a one night minimum."""
        date_range, verdict = DateRangeValidator.select(
            TODAY, DateRole.CHECK_IN, DateRange(), StayConstraints(min_stay_nights=1), TODAY
        )
        date_range, verdict = DateRangeValidator.select(
            TODAY + timedelta(days=1),
            DateRole.CHECK_OUT,
            date_range,
            StayConstraints(min_stay_nights=1),
            TODAY,
        )

        assert verdict.accepted
        assert DateRangeValidator.compute_nights(date_range) == 1

    def test_exceeds_maximum_stay(self):
        """Test check-out two days after check-in with a one night maximum."""
        constraints = StayConstraints(min_stay_nights=1, max_stay_nights=1)
        date_range = DateRange(check_in=TODAY)

        verdict = DateRangeValidator.validate(
            TODAY + timedelta(days=2), DateRole.CHECK_OUT, date_range, constraints, TODAY
        )

        assert not verdict.accepted
        assert verdict.reason == DateRejection.EXCEEDS_MAXIMUM_STAY
        assert verdict.message == "Check-out exceeds maximum stay of 1 night."

    def test_below_minimum_stay(self):
        """Test a stay shorter than the configured minimum."""
        constraints = StayConstraints(min_stay_nights=3)
        date_range = DateRange(check_in=TODAY)

        verdict = DateRangeValidator.validate(
            TODAY + timedelta(days=2), DateRole.CHECK_OUT, date_range, constraints, TODAY
        )

        assert verdict.reason == DateRejection.BELOW_MINIMUM_STAY
        assert verdict.message == "Minimum stay is 3 nights."

    def test_requires_check_in(self):
        """Test check-out without a stored check-in."""
        verdict = DateRangeValidator.validate(
            TODAY + timedelta(days=2), DateRole.CHECK_OUT, DateRange(), StayConstraints(), TODAY
        )

        assert verdict.reason == DateRejection.MISSING_CHECK_IN

    @pytest.mark.parametrize("offset", [0, -1])
    def test_check_out_must_follow_check_in(self, offset):
        """Test same-day and earlier check-out candidates."""
        check_in = TODAY + timedelta(days=5)
        verdict = DateRangeValidator.validate(
            check_in + timedelta(days=offset),
            DateRole.CHECK_OUT,
            DateRange(check_in=check_in),
            StayConstraints(),
            TODAY,
        )

        assert verdict.reason == DateRejection.CHECK_OUT_NOT_AFTER_CHECK_IN

    def test_blackout_check_out(self):
        """Test that a blackout day cannot be the check-out day."""
        blackout = TODAY + timedelta(days=3)
        constraints = StayConstraints(blackout_dates=frozenset({blackout}))

        verdict = DateRangeValidator.validate(
            blackout, DateRole.CHECK_OUT, DateRange(check_in=TODAY), constraints, TODAY
        )

        assert verdict.reason == DateRejection.BLACKOUT_DATE


class TestSelect:
    """Tests for merging accepted dates into a range."""

    def test_new_check_in_clears_check_out(self):
        """Test that changing the start date forces a new check-out."""
        complete = DateRange(check_in=TODAY, check_out=TODAY + timedelta(days=3))

        date_range, verdict = DateRangeValidator.select(
            TODAY + timedelta(days=1), DateRole.CHECK_IN, complete, StayConstraints(), TODAY
        )

        assert verdict.accepted
        assert date_range.check_in == TODAY + timedelta(days=1)
        assert date_range.check_out is None
        assert date_range.nights == 0

    def test_rejection_leaves_range_unchanged(self):
        """Test that a rejected candidate never reaches the range."""
        complete = DateRange(check_in=TODAY, check_out=TODAY + timedelta(days=3))

        date_range, verdict = DateRangeValidator.select(
            TODAY - timedelta(days=1), DateRole.CHECK_IN, complete, StayConstraints(), TODAY
        )

        assert not verdict.accepted
        assert date_range == complete

    def test_same_inputs_same_verdict(self):
        """Test that validation is a pure function of its inputs."""
        args = (TODAY + timedelta(days=4), DateRole.CHECK_OUT, DateRange(check_in=TODAY))

        first = DateRangeValidator.validate(*args, StayConstraints(max_stay_nights=3), TODAY)
        second = DateRangeValidator.validate(*args, StayConstraints(max_stay_nights=3), TODAY)

        assert first == second


class TestValidateRange:
    """Tests for re-validating a stored range."""

    def test_valid_range(self):
        date_range = DateRange(check_in=TODAY, check_out=TODAY + timedelta(days=2))

        assert DateRangeValidator.validate_range(date_range, StayConstraints(), TODAY) == []

    def test_range_gone_stale(self):
        """Test a range picked yesterday and re-checked today."""
        yesterday = TODAY - timedelta(days=1)
        date_range = DateRange(check_in=yesterday, check_out=TODAY + timedelta(days=2))

        verdicts = DateRangeValidator.validate_range(date_range, StayConstraints(), TODAY)

        assert [verdict.reason for verdict in verdicts] == [DateRejection.PAST_DATE]

    def test_compute_nights_incomplete(self):
        assert DateRangeValidator.compute_nights(DateRange(check_in=TODAY)) == 0
        assert DateRangeValidator.compute_nights(DateRange()) == 0
