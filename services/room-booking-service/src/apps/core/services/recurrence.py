# services/room-booking-service/src/apps/core/services/recurrence.py
"""
Recurrence Expansion

Turns a recurrence rule (daily, weekly or monthly, with optional weekday
filter and end conditions) into the ordered list of occurrence dates.
"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Callable, FrozenSet, Iterable, List, Optional

from dateutil.relativedelta import relativedelta

from .exceptions import InvalidRecurrenceRuleError

logger = logging.getLogger(__name__)

# Hard ceiling on generated occurrences, whatever the rule says
MAX_OCCURRENCES = 1000

# Effective end date when a rule has neither end_date nor max_occurrences
DEFAULT_HORIZON_DAYS = 365

DAY_NAMES = {
    1: 'Monday',
    2: 'Tuesday',
    3: 'Wednesday',
    4: 'Thursday',
    5: 'Friday',
    6: 'Saturday',
    7: 'Sunday',
}


class Frequency(str, Enum):
    """Recurrence frequency."""
    DAILY = 'daily'
    WEEKLY = 'weekly'
    MONTHLY = 'monthly'


@dataclass(frozen=True)
class RecurrenceRule:
    """
    Recurrence rule for a repeating booking.

    days_of_week uses ISO weekdays (1=Monday ... 7=Sunday) and only
    applies to weekly rules. An empty set is the same as no filter.
    """
    start_date: date
    frequency: Frequency
    interval: int = 1
    days_of_week: Optional[FrozenSet[int]] = None
    end_date: Optional[date] = None
    max_occurrences: Optional[int] = None

    def __post_init__(self):
        try:
            object.__setattr__(self, 'frequency', Frequency(self.frequency))
        except ValueError:
            raise InvalidRecurrenceRuleError(
                f"Unknown frequency: {self.frequency}",
                field='frequency'
            )

        if self.days_of_week is not None:
            days = frozenset(self.days_of_week)
            object.__setattr__(self, 'days_of_week', days or None)

        self._validate()

    def _validate(self):
        if isinstance(self.interval, bool) or not isinstance(self.interval, int):
            raise InvalidRecurrenceRuleError(
                "Interval must be a whole number", field='interval'
            )

        if self.interval < 1:
            raise InvalidRecurrenceRuleError(
                "Interval must be at least 1", field='interval'
            )

        if self.max_occurrences is not None and self.max_occurrences <= 0:
            raise InvalidRecurrenceRuleError(
                "Max occurrences must be a positive number",
                field='max_occurrences'
            )

        if self.end_date is not None and self.end_date < self.start_date:
            raise InvalidRecurrenceRuleError(
                "End date cannot be before start date", field='end_date'
            )

        if self.days_of_week:
            invalid = sorted(
                d for d in self.days_of_week
                if isinstance(d, bool) or not isinstance(d, int) or not 1 <= d <= 7
            )
            if invalid:
                raise InvalidRecurrenceRuleError(
                    f"Days of week must be between 1 and 7, got {invalid}",
                    field='days_of_week'
                )

    @property
    def effective_end_date(self) -> Optional[date]:
        """End date after applying the default horizon."""
        if self.end_date is not None:
            return self.end_date

        if self.max_occurrences is not None:
            return None

        try:
            return self.start_date + timedelta(days=DEFAULT_HORIZON_DAYS)
        except OverflowError:
            return date.max

    @property
    def occurrence_limit(self) -> int:
        if self.max_occurrences is None:
            return MAX_OCCURRENCES
        return min(self.max_occurrences, MAX_OCCURRENCES)


# =============================================================================
# Expansion
# =============================================================================

def expand_recurrence(rule: RecurrenceRule) -> List[date]:
    """
    Expand a rule into its occurrence dates.

    The start date is always the first occurrence. Expansion stops at the
    first date after the effective end date, when the occurrence limit is
    reached, or when date arithmetic runs past date.max.
    """
    end_date = rule.effective_end_date
    limit = rule.occurrence_limit
    step = _get_stepper(rule)

    occurrences = [rule.start_date]
    current = rule.start_date

    while len(occurrences) < limit:
        try:
            current = step(current)
        except (OverflowError, ValueError):
            logger.debug(f"Recurrence from {rule.start_date} ran past the calendar end")
            break

        if end_date is not None and current > end_date:
            break

        occurrences.append(current)

    return occurrences


def _get_stepper(rule: RecurrenceRule) -> Callable[[date], date]:
    """Return the function producing the next occurrence after a date."""
    if rule.frequency == Frequency.DAILY:
        return lambda previous: previous + timedelta(days=rule.interval)

    if rule.frequency == Frequency.MONTHLY:
        return lambda previous: previous + relativedelta(months=rule.interval)

    if rule.days_of_week:
        return lambda previous: _next_matching_weekday(rule, previous)

    return lambda previous: previous + timedelta(weeks=rule.interval)


def _next_matching_weekday(rule: RecurrenceRule, previous: date) -> date:
    """
    Walk forward day by day to the next date on one of the rule's weekdays.

    Weeks are 7-day windows counted from the start date. Only every
    interval-th window is active; the walk skips straight over the others.
    """
    candidate = previous + timedelta(days=1)

    while True:
        window = (candidate - rule.start_date).days // 7

        if window % rule.interval != 0:
            next_active = (window // rule.interval + 1) * rule.interval
            candidate = rule.start_date + timedelta(weeks=next_active)
            continue

        if candidate.isoweekday() in rule.days_of_week:
            return candidate

        candidate += timedelta(days=1)


# =============================================================================
# Description
# =============================================================================

def describe_recurrence(rule: RecurrenceRule) -> str:
    """Human readable summary, e.g. 'Repeats weekly on Monday until May 1, 2024'."""
    description = f"Repeats {rule.frequency.value}"

    if rule.interval > 1:
        unit = {
            Frequency.DAILY: 'days',
            Frequency.WEEKLY: 'weeks',
            Frequency.MONTHLY: 'months',
        }[rule.frequency]
        description += f" every {rule.interval} {unit}"

    if rule.frequency == Frequency.WEEKLY and rule.days_of_week:
        description += f" on {format_days(rule.days_of_week)}"

    if rule.end_date:
        description += f" until {format_long_date(rule.end_date)}"
    elif rule.max_occurrences:
        description += f" for {rule.max_occurrences} occurrences"

    return description


def format_days(days: Iterable[int]) -> str:
    return ', '.join(DAY_NAMES[d] for d in sorted(days))


def format_long_date(value: date) -> str:
    return f"{value.strftime('%B')} {value.day}, {value.year}"
