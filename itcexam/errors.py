from enum import Enum
from typing import Optional


class Section(Enum):
    """Instance file sections, in the order they appear after the preamble."""

    EXAMS = "Exams"
    PERIODS = "Periods"
    ROOMS = "Rooms"
    PERIOD_HARD_CONSTRAINTS = "PeriodHardConstraints"
    ROOM_HARD_CONSTRAINTS = "RoomHardConstraints"
    INSTITUTIONAL_WEIGHTINGS = "InstitutionalWeightings"


class ParseError(ValueError):
    """Base class for every instance parsing failure.

    ``line`` is the 0-based line offset inside the section body and ``field``
    the 0-based field index on that line, when known.
    """

    def __init__(self, message: str, section: Optional[Section] = None,
                 line: Optional[int] = None, field: Optional[int] = None):
        self.reason = message
        self.section = section
        self.line = line
        self.field = field
        super().__init__(self._format())

    def _format(self) -> str:
        where = []
        if self.section is not None:
            where.append(f"section {self.section.value}")
        if self.line is not None:
            where.append(f"line {self.line}")
        if self.field is not None:
            where.append(f"field {self.field}")
        if not where:
            return self.reason
        return f"{', '.join(where)}: {self.reason}"


class MalformedDocument(ParseError):
    pass


class MissingField(ParseError):
    pass


class InvalidNumber(ParseError):
    pass


class InvalidDate(ParseError):
    pass


class InvalidTime(ParseError):
    pass
