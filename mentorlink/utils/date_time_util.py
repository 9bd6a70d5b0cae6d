from datetime import datetime, timezone
from dateutil.relativedelta import relativedelta


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class DateTimeUtil:
    def __init__(self, logger):
        self.logger = logger

    def now(self) -> datetime:
        """Current UTC time; injected so services can be tested with a fixed clock."""
        return utc_now()

    def add_months(self, dt: datetime, months: int) -> datetime:
        """
        Shift a datetime by a number of calendar months.

        Days past the end of the target month are clamped, e.g. Nov 30 + 3 months
        gives Feb 28 (or 29).

        Args:
            dt (datetime): The starting datetime.
            months (int): Number of months to add; may be negative.

        Returns:
            datetime: The shifted datetime, keeping the original time and tzinfo.
        """
        return dt + relativedelta(months=months)

    def format_datetime_to_iso_utc_z(self, dt_object: datetime) -> str:
        """
        Formats a datetime object into an ISO 8601 string with microseconds
        and 'Z' for UTC timezone. Naive datetimes are treated as UTC.

        Args:
            dt_object (datetime): The datetime object to format.

        Returns:
            str: The formatted string (e.g., "2026-10-27T10:30:45.123456Z").

        Raises:
            ValueError: If the dt_object is not a datetime.
        """
        if not isinstance(dt_object, datetime):
            raise ValueError("Input must be a datetime object.")
        if dt_object.tzinfo is None:
            dt_object = dt_object.replace(tzinfo=timezone.utc)
        return (
            dt_object.astimezone(timezone.utc)
            .isoformat(timespec="microseconds")
            .replace("+00:00", "Z")
        )

    def parse_iso_datetime(self, value: str | None) -> datetime | None:
        """
        Parse an ISO 8601 string (as stored in JSON columns) back into a UTC datetime.

        Args:
            value (str | None): The stored value.

        Returns:
            datetime | None: The parsed datetime, or None for empty input.
        """
        if not value:
            return None
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            self.logger.warning("[DateTimeUtil] unparseable datetime value: %s", value)
            raise
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
