"""Date window model."""

from datetime import date

from pydantic import BaseModel, ConfigDict, model_validator

from contributor_stats.exceptions import InvalidDateRangeError
from contributor_stats.utils.dates import (
    CALENDAR_FORMAT,
    end_of_day,
    parse_calendar_date,
    start_of_day,
)


class DateWindow(BaseModel):
    """Calendar date range used to scope a contributor's activity.

    For comparisons the window is widened to whole days in UTC: the start
    becomes midnight of the first day and the end the last second of the
    last day. Both bounds are exclusive when filtering.
    """

    model_config = ConfigDict(frozen=True)

    start: date
    end: date

    @model_validator(mode="after")
    def _check_order(self) -> "DateWindow":
        if self.end < self.start:
            raise InvalidDateRangeError(
                f"End date {self.end.isoformat()} must not be before start date "
                f"{self.start.isoformat()}"
            )
        return self

    @classmethod
    def from_strings(cls, start: str, end: str) -> "DateWindow":
        """Build a window from YYYY-MM-DD strings."""
        return cls(
            start=parse_calendar_date(start, "start date"),
            end=parse_calendar_date(end, "end date"),
        )

    @property
    def start_date(self) -> str:
        """Start as a calendar date, the form the Search API expects."""
        return self.start.strftime(CALENDAR_FORMAT)

    @property
    def end_date(self) -> str:
        """End as a calendar date, the form the Search API expects."""
        return self.end.strftime(CALENDAR_FORMAT)

    @property
    def start_timestamp(self) -> str:
        """Start widened to a full timestamp for listing endpoints."""
        return start_of_day(self.start)

    @property
    def end_timestamp(self) -> str:
        """End widened to a full timestamp for listing endpoints."""
        return end_of_day(self.end)
