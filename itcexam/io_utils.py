import io
import os
import re
from datetime import date, time
from typing import IO, Iterator, List, Tuple, Union

from .config import config, get_logger
from .errors import (
    InvalidDate, InvalidNumber, InvalidTime, MalformedDocument, MissingField, Section,
)
from .models import (
    FRONTLOAD, Exam, FrontloadWeighting, InstitutionalWeighting, Period,
    PeriodHardConstraint, ProblemInstance, Room, RoomHardConstraint, Weighting,
)

TextOrPath = Union[str, os.PathLike, IO]

logger = get_logger("io_utils")

HEADER_RE = re.compile(r"^\[.*\]\r?\n", re.MULTILINE)
WHITESPACE_RE = re.compile(r"\s+")
INT_RE = re.compile(r"[+-]?\d+")

# preamble + one segment per Section
SEGMENT_COUNT = 1 + len(Section)


def _open_text(src: TextOrPath):
    """Return a text-mode file handle and a flag indicating whether to close it.

    Accepts a filesystem path, a text IO object, or a BytesIO buffer.
    """
    if isinstance(src, (str, os.PathLike)):
        f = open(src, 'r', encoding=config.encoding, newline='')
        return f, True
    # BytesIO -> decode a copy so the caller's buffer stays open
    if isinstance(src, io.BytesIO):
        f = io.StringIO(src.getvalue().decode(config.encoding))
        return f, True
    if hasattr(src, 'read'):
        if hasattr(src, 'seekable') and src.seekable():
            src.seek(0)
        return src, False
    raise TypeError("Unsupported input type; expected path or file-like object")


def tokenize_line(line: str) -> List[str]:
    """Drop all whitespace from ``line`` and split it on commas.

    Empty fields are kept so callers can report them.
    """
    return WHITESPACE_RE.sub('', line).split(',')


def split_sections(text: str) -> List[str]:
    """Split a document into its six section bodies, headers removed."""
    segments = HEADER_RE.split(text)
    if len(segments) < SEGMENT_COUNT:
        raise MalformedDocument(
            f"expected {SEGMENT_COUNT} header-delimited segments, found {len(segments)}"
        )
    if len(segments) > SEGMENT_COUNT:
        logger.warning("Ignoring %d trailing section(s) after %s",
                       len(segments) - SEGMENT_COUNT, Section.INSTITUTIONAL_WEIGHTINGS.value)
    return segments[1:SEGMENT_COUNT]


def _records(body: str, section: Section) -> Iterator[Tuple[int, List[str]]]:
    """Yield (line offset, fields) for every non-blank line of a section body."""
    found = False
    for offset, line in enumerate(body.split('\n')):
        fields = tokenize_line(line)
        if fields == ['']:
            continue
        found = True
        yield offset, fields
    if not found:
        raise MissingField("section has no records", section=section, line=0)


def _field(fields: List[str], idx: int, section: Section, line: int) -> str:
    if idx >= len(fields) or fields[idx] == '':
        raise MissingField("missing value", section=section, line=line, field=idx)
    return fields[idx]


def _int_field(fields: List[str], idx: int, section: Section, line: int) -> int:
    value = _field(fields, idx, section, line)
    if not INT_RE.fullmatch(value):
        raise InvalidNumber(f"not an integer: {value!r}", section=section, line=line, field=idx)
    return int(value)


def _parts(value: str, count: int) -> List[int]:
    parts = value.split(':')
    if len(parts) != count or not all(INT_RE.fullmatch(p) for p in parts):
        raise ValueError(value)
    return [int(p) for p in parts]


def _date_field(fields: List[str], idx: int, section: Section, line: int) -> date:
    value = _field(fields, idx, section, line)
    try:
        day, month, year = _parts(value, 3)
        return date(year, month, day)
    except ValueError as e:
        raise InvalidDate(f"expected DD:MM:YYYY, got {value!r}",
                          section=section, line=line, field=idx) from e


def _time_field(fields: List[str], idx: int, section: Section, line: int) -> time:
    value = _field(fields, idx, section, line)
    try:
        hour, minute, second = _parts(value, 3)
        return time(hour, minute, second)
    except ValueError as e:
        raise InvalidTime(f"expected HH:MM:SS, got {value!r}",
                          section=section, line=line, field=idx) from e


def read_exams(body: str) -> Tuple[Exam, ...]:
    """One exam per line: duration, then the ids of its students."""
    section = Section.EXAMS
    exams: List[Exam] = []
    for line, fields in _records(body, section):
        duration = _int_field(fields, 0, section, line)
        students = tuple(_field(fields, i, section, line) for i in range(1, len(fields)))
        exams.append(Exam(index=len(exams), duration=duration, students=students))
    logger.debug("Read %d exams", len(exams))
    return tuple(exams)


def read_periods(body: str) -> Tuple[Period, ...]:
    section = Section.PERIODS
    periods: List[Period] = []
    for line, fields in _records(body, section):
        periods.append(Period(
            index=len(periods),
            date=_date_field(fields, 0, section, line),
            time=_time_field(fields, 1, section, line),
            duration=_int_field(fields, 2, section, line),
            penalty=_int_field(fields, 3, section, line),
        ))
    logger.debug("Read %d periods", len(periods))
    return tuple(periods)


def read_rooms(body: str) -> Tuple[Room, ...]:
    section = Section.ROOMS
    rooms: List[Room] = []
    for line, fields in _records(body, section):
        rooms.append(Room(
            index=len(rooms),
            capacity=_int_field(fields, 0, section, line),
            penalty=_int_field(fields, 1, section, line),
        ))
    logger.debug("Read %d rooms", len(rooms))
    return tuple(rooms)


def read_period_hard_constraints(body: str) -> Tuple[PeriodHardConstraint, ...]:
    section = Section.PERIOD_HARD_CONSTRAINTS
    constraints = tuple(
        PeriodHardConstraint(
            first_exam=_int_field(fields, 0, section, line),
            constraint_type=_field(fields, 1, section, line),
            second_exam=_int_field(fields, 2, section, line),
        )
        for line, fields in _records(body, section)
    )
    logger.debug("Read %d period hard constraints", len(constraints))
    return constraints


def read_room_hard_constraints(body: str) -> Tuple[RoomHardConstraint, ...]:
    """Room constraints are optional: a blank body gives an empty tuple."""
    section = Section.ROOM_HARD_CONSTRAINTS
    if not body.strip():
        return ()
    constraints = tuple(
        RoomHardConstraint(
            exam=_int_field(fields, 0, section, line),
            constraint_type=_field(fields, 1, section, line),
        )
        for line, fields in _records(body, section)
    )
    logger.debug("Read %d room hard constraints", len(constraints))
    return constraints


def read_institutional_weightings(body: str) -> Tuple[InstitutionalWeighting, ...]:
    section = Section.INSTITUTIONAL_WEIGHTINGS
    weightings: List[InstitutionalWeighting] = []
    for line, fields in _records(body, section):
        tag = _field(fields, 0, section, line)
        if tag == FRONTLOAD:
            weightings.append(FrontloadWeighting(
                largest_exams=_int_field(fields, 1, section, line),
                last_periods=_int_field(fields, 2, section, line),
                penalty=_int_field(fields, 3, section, line),
            ))
        else:
            weightings.append(Weighting(type=tag, param=_int_field(fields, 1, section, line)))
    logger.debug("Read %d institutional weightings", len(weightings))
    return tuple(weightings)


def parse_problem(text: str) -> ProblemInstance:
    """Parse an ITC2007 exam-track document into a ProblemInstance.

    Raises a ParseError subclass on the first malformed segment or line.
    """
    (exams_body, periods_body, rooms_body, phc_body,
     rhc_body, weightings_body) = split_sections(text)
    instance = ProblemInstance.build(
        exams=read_exams(exams_body),
        periods=read_periods(periods_body),
        rooms=read_rooms(rooms_body),
        period_hard_constraints=read_period_hard_constraints(phc_body),
        room_hard_constraints=read_room_hard_constraints(rhc_body),
        institutional_weightings=read_institutional_weightings(weightings_body),
    )
    logger.info("Parsed instance: %d exams, %d periods, %d rooms",
                len(instance.exams), len(instance.periods), len(instance.rooms))
    return instance


def load_problem(src: TextOrPath) -> ProblemInstance:
    """Read a whole instance from a path or file-like object and parse it."""
    try:
        f, should_close = _open_text(src)
        try:
            text = f.read()
        finally:
            if should_close:
                f.close()
    except UnicodeDecodeError as e:
        raise MalformedDocument(
            f"not valid {config.encoding} text: byte {e.object[e.start]:#04x}"
        ) from e
    return parse_problem(text)
