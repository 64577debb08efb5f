"""
Tests for the mock schedule source.
"""

import json

import pendulum
import pytest

from barberslots.adapters.mock_schedule_client import MockScheduleClient
from barberslots.domain.exceptions import ScheduleSourceError
from barberslots.domain.models import BookingStatus, DayOfWeek
from barberslots.domain.slot_generator import SlotGenerator
from barberslots.services.booking_slots import BookingSlotService

TZ = "Europe/Berlin"


class TestMockScheduleClient:
    """Tests for MockScheduleClient with the bundled data."""

    def setup_method(self):
        self.client = MockScheduleClient(timezone=TZ)

    def test_working_hours(self):
        """Test loading a barber's weekly schedule."""
        periods = self.client.get_working_hours("barber-1")

        assert len(periods) == 7
        assert periods[0].day_of_week is DayOfWeek.MONDAY
        assert not periods[3].is_active

    def test_bookings(self):
        """Test loading a barber's bookings."""
        bookings = self.client.get_bookings("barber-1")

        assert [booking.status for booking in bookings] == [
            BookingStatus.CONFIRMED,
            BookingStatus.CANCELLED,
            BookingStatus.PENDING,
            BookingStatus.NO_SHOW,
        ]

    def test_barber_without_schedule(self):
        """Test that a null schedule is reported as None."""
        assert self.client.get_working_hours("barber-3") is None

    def test_unknown_barber(self):
        """Test that unknown barbers have no schedule and no bookings."""
        assert self.client.get_working_hours("nobody") is None
        assert self.client.get_bookings("nobody") == []

    def test_barber_ids(self):
        """Test listing the barbers in the data file."""
        assert self.client.barber_ids() == ["barber-1", "barber-2", "barber-3"]

    def test_slots_for_monday(self):
        """End-to-end: split shift with a confirmed and a pending booking."""
        service = BookingSlotService(
            schedule_source=self.client,
            slot_generator=SlotGenerator(timezone=TZ),
            clock=lambda: pendulum.datetime(2024, 11, 25, 7, 0, tz=TZ),
        )

        slots = service.find_slots(barber_id="barber-1", day=pendulum.date(2024, 11, 25), service_duration_minutes=60)

        unavailable = [slot.start_time for slot in slots if not slot.is_available]
        assert len(slots) == 14
        assert unavailable == ["09:00", "09:30", "10:00", "15:30", "16:00", "16:30"]


class TestMockDataFiles:
    """Tests for custom data files."""

    def test_missing_file_means_no_data(self, tmp_path):
        """Test that a missing file behaves like an empty backend."""
        client = MockScheduleClient(data_file=tmp_path / "missing.json")

        assert client.get_working_hours("barber-1") is None
        assert client.get_bookings("barber-1") == []

    def test_unreadable_file(self, tmp_path):
        """Test that invalid JSON raises ScheduleSourceError."""
        data_file = tmp_path / "data.json"
        data_file.write_text("{not json", encoding="utf-8")

        with pytest.raises(ScheduleSourceError):
            MockScheduleClient(data_file=data_file)

    def test_invalid_booking(self, tmp_path):
        """Test that a malformed booking aborts instead of being skipped."""
        data_file = tmp_path / "data.json"
        data_file.write_text(
            json.dumps({"barbers": {"b": {"workingHours": [], "bookings": [{"startTime": "2024-11-25T09:00:00Z"}]}}}),
            encoding="utf-8",
        )

        with pytest.raises(ScheduleSourceError):
            MockScheduleClient(data_file=data_file).get_bookings("b")

    def test_working_hours_missing_start_time(self, tmp_path):
        """Test that an incomplete period raises ScheduleSourceError."""
        data_file = tmp_path / "data.json"
        data_file.write_text(
            json.dumps({"barbers": {"b": {"workingHours": [{"endTime": "18:00", "isActive": True}], "bookings": []}}}),
            encoding="utf-8",
        )

        with pytest.raises(ScheduleSourceError):
            MockScheduleClient(data_file=data_file).get_working_hours("b")

    def test_working_hours_string_is_active(self, tmp_path):
        """Test that a string isActive flag raises ScheduleSourceError."""
        data_file = tmp_path / "data.json"
        data_file.write_text(
            json.dumps({"barbers": {"b": {"workingHours": [
                {"startTime": "09:00", "endTime": "18:00", "isActive": "false"},
            ]}}}),
            encoding="utf-8",
        )

        with pytest.raises(ScheduleSourceError, match="isActive"):
            MockScheduleClient(data_file=data_file).get_working_hours("b")
