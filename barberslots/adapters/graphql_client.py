"""
GraphQL API client for fetching barber working hours and bookings.
"""

import logging
from typing import Any, Dict, List

import requests

from ..domain.exceptions import ScheduleSourceError
from ..domain.models import ExistingBooking, WorkingPeriod

logger = logging.getLogger(__name__)


GET_WORKING_HOURS = """
query GetWorkingHours($barberId: ID!) {
  workingHours(ownerId: $barberId, ownerType: BARBER) {
    id
    dayOfWeek
    startTime
    endTime
    isActive
  }
}
"""

GET_EXISTING_BOOKINGS = """
query GetExistingBookings($barberId: ID!) {
  bookingsByBarber(barberId: $barberId) {
    id
    startTime
    endTime
    status
  }
}
"""


class GraphQLScheduleClient:
    """
    Client for the booking backend's GraphQL API.

    Implements the schedule source protocol used by ``BookingSlotService``.
    """

    def __init__(
        self,
        api_url: str,
        access_token: str | None = None,
        timezone: str = "UTC",
        timeout: int = 30
    ):
        """
        Initialize the GraphQL client.

        Args:
            api_url: GraphQL endpoint URL
            access_token: Optional bearer token from the session store
            timezone: Timezone for booking timestamps without an offset
            timeout: Request timeout in seconds
        """
        self.api_url = api_url
        self.timezone = timezone
        self.timeout = timeout
        self.headers = {"Content-Type": "application/json"}
        if access_token:
            self.headers["Authorization"] = f"Bearer {access_token}"

    def get_working_hours(self, barber_id: str) -> List[WorkingPeriod] | None:
        """
        Get all working periods of a barber.

        Returns:
            List of WorkingPeriod objects, or None if the API has no schedule

        Raises:
            ScheduleSourceError: If the API call fails or a period is incomplete
            FormatError: If a period has a malformed clock time
        """
        data = self._execute(GET_WORKING_HOURS, {"barberId": barber_id})
        records = data.get("workingHours")

        if records is None:
            return None

        periods: List[WorkingPeriod] = []

        for record in records:
            try:
                periods.append(WorkingPeriod.from_mapping(record))
            except (KeyError, TypeError) as e:
                raise ScheduleSourceError(
                    f"Could not parse working hours {record.get('id', '?')}: {e}"
                ) from e

        return periods

    def get_bookings(self, barber_id: str) -> List[ExistingBooking]:
        """
        Get all bookings of a barber.

        Raises:
            ScheduleSourceError: If the API call fails or a booking is malformed
        """
        data = self._execute(GET_EXISTING_BOOKINGS, {"barberId": barber_id})
        bookings: List[ExistingBooking] = []

        for record in data.get("bookingsByBarber") or []:
            try:
                bookings.append(ExistingBooking.from_mapping(record, self.timezone))
            except (KeyError, TypeError, ValueError) as e:
                # Skipping would hide a conflict, so the whole fetch fails
                raise ScheduleSourceError(
                    f"Could not parse booking {record.get('id', '?')}: {e}"
                ) from e

        return bookings

    def _execute(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        """
        Run a GraphQL query and return its ``data`` object.

        Raises:
            ScheduleSourceError: On HTTP failure or GraphQL errors
        """
        try:
            response = requests.post(
                self.api_url,
                headers=self.headers,
                json={"query": query, "variables": variables},
                timeout=self.timeout
            )
            response.raise_for_status()
            payload = response.json()

        except requests.exceptions.RequestException as e:
            raise ScheduleSourceError(f"Failed to query {self.api_url}: {e}") from e
        except ValueError as e:
            raise ScheduleSourceError(f"Invalid JSON from {self.api_url}: {e}") from e

        errors = payload.get("errors")
        if errors:
            messages = "; ".join(error.get("message", "Unknown error") for error in errors)
            raise ScheduleSourceError(f"GraphQL error: {messages}")

        logger.debug("GraphQL query succeeded with variables %s", variables)
        return payload.get("data") or {}
