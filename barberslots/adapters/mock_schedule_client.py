"""
Mock schedule source for running without the GraphQL backend.
"""

import json
from pathlib import Path
from typing import Any, Dict, List

from ..domain.exceptions import ScheduleSourceError
from ..domain.models import ExistingBooking, WorkingPeriod


class MockScheduleClient:
    """
    Mock client that serves working hours and bookings from a JSON file.

    The file maps barber ids to their records:
    ``{"barbers": {"<id>": {"workingHours": [...] | null, "bookings": [...]}}}``
    """

    DEFAULT_DATA_FILE = Path(__file__).parent / "mock_schedule_data.json"

    def __init__(self, data_file: Path | None = None, timezone: str = "UTC"):
        """
        Initialize the mock client.

        Args:
            data_file: JSON file with mock data, defaults to the bundled file
            timezone: Timezone for booking timestamps without an offset
        """
        self.data_file = data_file or self.DEFAULT_DATA_FILE
        self.timezone = timezone
        self._load_schedule_data()

    def _load_schedule_data(self) -> None:
        """Load mock schedule data from the JSON file."""
        if not self.data_file.exists():
            # Every barber is unknown: no schedule, no bookings
            self.barbers: Dict[str, Dict[str, Any]] = {}
            return

        try:
            with open(self.data_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise ScheduleSourceError(f"Could not read mock data {self.data_file}: {e}") from e

        self.barbers = data.get("barbers", {})

    def barber_ids(self) -> List[str]:
        return list(self.barbers)

    def get_working_hours(self, barber_id: str) -> List[WorkingPeriod] | None:
        """Return the barber's working periods, or None if no schedule exists."""
        records = self.barbers.get(barber_id, {}).get("workingHours")

        if records is None:
            return None

        periods: List[WorkingPeriod] = []

        for record in records:
            try:
                periods.append(WorkingPeriod.from_mapping(record))
            except (KeyError, TypeError) as e:
                raise ScheduleSourceError(f"Invalid mock working hours {record}: {e}") from e

        return periods

    def get_bookings(self, barber_id: str) -> List[ExistingBooking]:
        """Return the barber's bookings."""
        bookings: List[ExistingBooking] = []

        for record in self.barbers.get(barber_id, {}).get("bookings", []):
            try:
                bookings.append(ExistingBooking.from_mapping(record, self.timezone))
            except (KeyError, TypeError, ValueError) as e:
                raise ScheduleSourceError(f"Invalid mock booking {record}: {e}") from e

        return bookings
