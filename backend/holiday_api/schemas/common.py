"""Shared field types."""
from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator

from holiday_api.timeutils import to_utc

# Timestamps are stored in UTC; naive input is taken as UTC
UtcDatetime = Annotated[datetime, AfterValidator(to_utc)]
