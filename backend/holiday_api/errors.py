"""Error kinds surfaced by the holiday services.

Read operations raise these; mutating operations log store faults and
return ``False`` instead, except for address validation and picture storage
which always propagate so callers can report them distinctly.
"""


class HolidayPlannerError(Exception):
    """Base class for every error raised by the service layer."""


class ResourceNotFoundError(HolidayPlannerError):
    """A referenced holiday, activity, invitation or participant does not exist."""


class LoadDataError(HolidayPlannerError):
    """The store could not complete a read."""


class LocationValidationError(HolidayPlannerError):
    """The address is invalid or the address validator itself failed."""


class PictureStorageError(HolidayPlannerError):
    """A picture could not be stored or deleted."""


class OperationCancelled(HolidayPlannerError):
    """The caller's cancellation signal fired before a store step."""


class CascadeStepFailed(HolidayPlannerError):
    """A step of a multi-entity operation reported failure; the unit is rolled back."""
