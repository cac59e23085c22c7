# services/room-booking-service/src/tests/unit/test_services.py
"""
Unit Tests for Room Booking Services

Tests for service layer business logic.
"""

import uuid
from datetime import date, time
from unittest.mock import patch, MagicMock

import pytest
from django.db import OperationalError

from apps.core.models import Booking, RecurringPattern, Room
from apps.core.services import (
    AvailabilityService,
    BookingService,
    DjangoBookingSource,
    RoomService,
    RecurrenceRule,
    Frequency,
    TimeWindow,
    BookingConflictError,
    BookingNotFoundError,
    BookingStateError,
    BookingValidationError,
    DataSourceUnavailableError,
    RoomNotFoundError,
    RoomUnavailableError,
)
from tests.conftest import BOOKING_DAY, at


def weekly_mondays(count=4):
    return RecurrenceRule(
        start_date=BOOKING_DAY,
        frequency=Frequency.WEEKLY,
        days_of_week={1},
        max_occurrences=count,
    )


@pytest.mark.django_db
class TestDjangoBookingSource:
    """Tests for the ORM booking source."""

    def test_returns_overlapping_non_cancelled_bookings(self, room, create_booking):
        first = create_booking(start_time=at(BOOKING_DAY, 9), end_time=at(BOOKING_DAY, 10))
        create_booking(
            start_time=at(BOOKING_DAY, 10),
            end_time=at(BOOKING_DAY, 11),
            status=Booking.Status.CANCELLED,
        )
        create_booking(start_time=at(BOOKING_DAY, 15), end_time=at(BOOKING_DAY, 16))

        bookings = DjangoBookingSource().fetch_for_room(
            room.id, TimeWindow(start=at(BOOKING_DAY, 8), end=at(BOOKING_DAY, 12))
        )

        assert bookings == [first]

    def test_completed_bookings_block_and_touching_ones_do_not(self, room, create_booking):
        completed = create_booking(status=Booking.Status.COMPLETED)
        create_booking(start_time=at(BOOKING_DAY, 11), end_time=at(BOOKING_DAY, 12))

        service = AvailabilityService(DjangoBookingSource())
        result = service.check_availability(
            room.id, TimeWindow(start=at(BOOKING_DAY, 10, 30), end=at(BOOKING_DAY, 11))
        )

        assert result.conflicts == [completed]

    def test_database_error_becomes_data_source_error(self, room):
        with patch.object(Booking.objects, 'filter', side_effect=OperationalError('db down')):
            with pytest.raises(DataSourceUnavailableError) as exc_info:
                DjangoBookingSource().fetch_for_room(room.id)

        assert exc_info.value.details['room_id'] == str(room.id)


@pytest.mark.django_db
class TestRoomService:
    """Tests for RoomService."""

    def setup_method(self):
        self.service = RoomService()

    def test_get_room_not_found(self):
        with pytest.raises(RoomNotFoundError):
            self.service.get_room(uuid.uuid4())

    def test_get_room_with_malformed_id(self):
        with pytest.raises(RoomNotFoundError):
            self.service.get_room('not-a-uuid')

    def test_get_bookable_room_under_maintenance(self, create_room):
        room = create_room(status=Room.Status.MAINTENANCE)

        with pytest.raises(RoomUnavailableError):
            self.service.get_bookable_room(room.id)

    def test_search_by_capacity_and_location(self, create_room):
        create_room(name='Alpha', capacity=4, location='Oslo HQ')
        bergen = create_room(name='Bravo', capacity=10, location='Bergen Office')
        create_room(name='Charlie', capacity=12, location='Oslo HQ', status=Room.Status.INACTIVE)

        assert self.service.search_rooms(capacity=6) == [bergen]
        assert self.service.search_rooms(location='bergen') == [bergen]

    def test_search_for_free_window(self, room, create_room, create_booking):
        free = create_room(name='Alpha')
        create_room(name='Charlie', status=Room.Status.MAINTENANCE)
        create_booking(room=room, start_time=at(BOOKING_DAY, 10), end_time=at(BOOKING_DAY, 11))

        rooms = self.service.search_rooms(
            target_date=BOOKING_DAY, start_time='10:00', end_time='11:00'
        )

        assert rooms == [free]

    def test_search_propagates_data_source_failure(self, create_room):
        create_room()
        source = MagicMock()
        source.fetch_for_room.side_effect = DataSourceUnavailableError()
        service = RoomService(AvailabilityService(source))

        with pytest.raises(DataSourceUnavailableError):
            service.search_rooms(target_date=BOOKING_DAY, start_time='10:00', end_time='11:00')


@pytest.mark.django_db
class TestBookingService:
    """Tests for BookingService."""

    def setup_method(self):
        self.service = BookingService()

    def test_create_booking_success(self, room, user_id):
        booking = self.service.create_booking(
            room_id=room.id,
            user_id=user_id,
            title='Planning',
            start_time=at(BOOKING_DAY, 10),
            end_time=at(BOOKING_DAY, 11),
            meeting_type=Booking.MeetingType.INTERNAL,
        )

        assert booking.id is not None
        assert booking.status == Booking.Status.CONFIRMED
        assert booking.duration_minutes == 60

    def test_create_booking_with_conflict(self, room, user_id, create_booking):
        existing = create_booking()

        with pytest.raises(BookingConflictError) as exc_info:
            self.service.create_booking(
                room_id=room.id,
                user_id=user_id,
                title='Overlap',
                start_time=at(BOOKING_DAY, 10, 30),
                end_time=at(BOOKING_DAY, 11, 30),
            )

        assert exc_info.value.conflicts == [existing]
        assert exc_info.value.details['conflict_ids'] == [str(existing.id)]

    def test_create_back_to_back_booking(self, room, user_id, create_booking):
        create_booking()

        booking = self.service.create_booking(
            room_id=room.id,
            user_id=user_id,
            title='Next',
            start_time=at(BOOKING_DAY, 11),
            end_time=at(BOOKING_DAY, 12),
        )

        assert booking.start_time == at(BOOKING_DAY, 11)

    def test_cancelled_booking_frees_the_slot(self, room, user_id, create_booking):
        create_booking(status=Booking.Status.CANCELLED)

        booking = self.service.create_booking(
            room_id=room.id,
            user_id=user_id,
            title='Reuse',
            start_time=at(BOOKING_DAY, 10),
            end_time=at(BOOKING_DAY, 11),
        )

        assert booking.status == Booking.Status.CONFIRMED

    def test_create_booking_outside_business_hours(self, room, user_id):
        with pytest.raises(BookingValidationError):
            self.service.create_booking(
                room_id=room.id,
                user_id=user_id,
                title='Early',
                start_time=at(BOOKING_DAY, 6),
                end_time=at(BOOKING_DAY, 7),
            )

    def test_create_booking_in_unavailable_room(self, create_room, user_id):
        room = create_room(status=Room.Status.MAINTENANCE)

        with pytest.raises(RoomUnavailableError):
            self.service.create_booking(
                room_id=room.id,
                user_id=user_id,
                title='Blocked',
                start_time=at(BOOKING_DAY, 10),
                end_time=at(BOOKING_DAY, 11),
            )

    def test_get_booking_not_found(self):
        with pytest.raises(BookingNotFoundError):
            self.service.get_booking(uuid.uuid4())

    def test_list_user_bookings(self, user_id, create_booking):
        create_booking(start_time=at(BOOKING_DAY, 13), end_time=at(BOOKING_DAY, 14))
        create_booking()
        create_booking(
            start_time=at(BOOKING_DAY, 15),
            end_time=at(BOOKING_DAY, 16),
            status=Booking.Status.CANCELLED,
        )
        create_booking(user_id=uuid.uuid4(), start_time=at(BOOKING_DAY, 16), end_time=at(BOOKING_DAY, 17))

        bookings = self.service.list_user_bookings(user_id)
        confirmed = self.service.list_user_bookings(user_id, status=Booking.Status.CONFIRMED)

        assert len(bookings) == 3
        assert [b.start_time.hour for b in confirmed] == [10, 13]

    def test_get_room_bookings(self, room, create_booking):
        booking = create_booking()
        create_booking(
            start_time=at(BOOKING_DAY, 12),
            end_time=at(BOOKING_DAY, 13),
            status=Booking.Status.CANCELLED,
        )

        bookings = self.service.get_room_bookings(
            room.id, at(BOOKING_DAY, 8), at(BOOKING_DAY, 18)
        )

        assert bookings == [booking]

    def test_update_booking_extends_over_itself(self, create_booking):
        booking = create_booking()

        updated = self.service.update_booking(
            booking.id,
            end_time=at(BOOKING_DAY, 12),
            title='Longer sync',
        )

        assert updated.end_time == at(BOOKING_DAY, 12)
        assert updated.title == 'Longer sync'

    def test_update_booking_into_conflict(self, create_booking):
        create_booking(start_time=at(BOOKING_DAY, 12), end_time=at(BOOKING_DAY, 13))
        booking = create_booking()

        with pytest.raises(BookingConflictError):
            self.service.update_booking(
                booking.id,
                start_time=at(BOOKING_DAY, 12),
                end_time=at(BOOKING_DAY, 13),
            )

    def test_update_booking_to_other_room(self, create_room, create_booking):
        other = create_room(name='Other')
        booking = create_booking()

        updated = self.service.update_booking(booking.id, room_id=other.id)

        assert updated.room_id == other.id

    def test_update_cancelled_booking(self, create_booking):
        booking = create_booking(status=Booking.Status.CANCELLED)

        with pytest.raises(BookingStateError):
            self.service.update_booking(booking.id, title='Nope')

    def test_cancel_booking(self, create_booking):
        booking = create_booking()

        cancelled = self.service.cancel_booking(booking.id, reason='Moved online')

        assert cancelled.status == Booking.Status.CANCELLED
        assert cancelled.cancelled_at is not None
        assert cancelled.cancellation_reason == 'Moved online'

    def test_cancel_twice(self, create_booking):
        booking = create_booking()
        self.service.cancel_booking(booking.id)

        with pytest.raises(BookingStateError):
            self.service.cancel_booking(booking.id)

    def test_complete_booking(self, create_booking):
        booking = create_booking()

        completed = self.service.complete_booking(booking.id)

        assert completed.status == Booking.Status.COMPLETED

    def test_complete_cancelled_booking(self, create_booking):
        booking = create_booking(status=Booking.Status.CANCELLED)

        with pytest.raises(BookingStateError):
            self.service.complete_booking(booking.id)


@pytest.mark.django_db
class TestRecurringBookings:
    """Tests for recurring booking operations."""

    def setup_method(self):
        self.service = BookingService()

    def test_preview_flags_conflicts(self, room, create_booking):
        blocker = create_booking(
            start_time=at(date(2030, 3, 11), 10, 30),
            end_time=at(date(2030, 3, 11), 11, 30),
        )

        instances = self.service.preview_recurring(
            room.id, weekly_mondays(), '10:00', '11:00',
            excluded_dates=[date(2030, 3, 18)],
        )

        assert [i.date for i in instances] == [
            date(2030, 3, 4), date(2030, 3, 11), date(2030, 3, 18), date(2030, 3, 25),
        ]
        assert [i.available for i in instances] == [True, False, True, True]
        assert instances[1].conflict_id == blocker.id
        assert [i.excluded for i in instances] == [False, False, True, False]

    def test_preview_unknown_room(self):
        with pytest.raises(RoomNotFoundError):
            self.service.preview_recurring(uuid.uuid4(), weekly_mondays(), '10:00', '11:00')

    def test_create_recurring_booking(self, room, user_id, create_booking):
        create_booking(
            start_time=at(date(2030, 3, 11), 10),
            end_time=at(date(2030, 3, 11), 11),
        )

        result = self.service.create_recurring_booking(
            room_id=room.id,
            user_id=user_id,
            title='Weekly review',
            rule=weekly_mondays(),
            start_time='10:00',
            end_time='11:00',
            excluded_dates=[date(2030, 3, 18)],
        )

        assert [b.start_time for b in result.bookings] == [
            at(date(2030, 3, 4), 10),
            at(date(2030, 3, 25), 10),
        ]
        assert [s.date for s in result.skipped] == [date(2030, 3, 11), date(2030, 3, 18)]

        pattern = result.pattern
        assert pattern.frequency == RecurringPattern.Frequency.WEEKLY
        assert pattern.days_of_week == [1]
        assert pattern.start_time == time(10, 0)
        assert pattern.bookings.count() == 2

    def test_create_recurring_booking_with_nothing_free(self, room, user_id, create_booking):
        create_booking()

        with pytest.raises(BookingConflictError):
            self.service.create_recurring_booking(
                room_id=room.id,
                user_id=user_id,
                title='Blocked',
                rule=weekly_mondays(count=1),
                start_time='10:00',
                end_time='11:00',
            )

        assert not RecurringPattern.objects.exists()

    def test_create_recurring_booking_outside_business_hours(self, room, user_id):
        with pytest.raises(BookingValidationError):
            self.service.create_recurring_booking(
                room_id=room.id,
                user_id=user_id,
                title='Late',
                rule=weekly_mondays(),
                start_time='18:00',
                end_time='19:00',
            )

    def _create_series(self, room, user_id):
        return self.service.create_recurring_booking(
            room_id=room.id,
            user_id=user_id,
            title='Standup',
            rule=weekly_mondays(),
            start_time='09:00',
            end_time='09:30',
        )

    def test_cancel_all(self, room, user_id):
        result = self._create_series(room, user_id)

        cancelled = self.service.cancel_recurring(result.pattern.id, 'all', reason='Project ended')

        assert cancelled == 4
        assert not Booking.objects.filter(status=Booking.Status.CONFIRMED).exists()

    def test_cancel_future(self, room, user_id):
        result = self._create_series(room, user_id)
        third = result.bookings[2]

        cancelled = self.service.cancel_recurring(result.pattern.id, 'future', instance_id=third.id)

        assert cancelled == 2
        remaining = Booking.objects.filter(status=Booking.Status.CONFIRMED).order_by('start_time')
        assert list(remaining) == result.bookings[:2]

    def test_cancel_single(self, room, user_id):
        result = self._create_series(room, user_id)
        second = result.bookings[1]

        cancelled = self.service.cancel_recurring(result.pattern.id, 'single', instance_id=second.id)

        second.refresh_from_db()
        assert cancelled == 1
        assert second.status == Booking.Status.CANCELLED
        assert Booking.objects.filter(status=Booking.Status.CONFIRMED).count() == 3

    def test_cancel_instance_of_other_series(self, room, user_id, create_booking):
        result = self._create_series(room, user_id)
        stray = create_booking(start_time=at(BOOKING_DAY, 14), end_time=at(BOOKING_DAY, 15))

        with pytest.raises(BookingValidationError):
            self.service.cancel_recurring(result.pattern.id, 'single', instance_id=stray.id)

    def test_cancel_with_unknown_scope(self, room, user_id):
        result = self._create_series(room, user_id)

        with pytest.raises(BookingValidationError):
            self.service.cancel_recurring(result.pattern.id, 'some')

    def test_cancel_future_requires_instance(self, room, user_id):
        result = self._create_series(room, user_id)

        with pytest.raises(BookingValidationError):
            self.service.cancel_recurring(result.pattern.id, 'future')
