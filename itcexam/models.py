from dataclasses import dataclass, field
from datetime import date, time
from typing import Optional, Sequence, Tuple, Union

import numpy as np

FRONTLOAD = "FRONTLOAD"


@dataclass(frozen=True)
class Exam:
    index: int
    duration: int  # minutes
    students: Tuple[str, ...] = ()

    @property
    def enrollment(self) -> int:
        return len(self.students)


@dataclass(frozen=True)
class Period:
    index: int
    date: date
    time: time
    duration: int  # minutes
    penalty: int


@dataclass(frozen=True)
class Room:
    index: int
    capacity: int
    penalty: int


@dataclass(frozen=True)
class PeriodHardConstraint:
    first_exam: int
    constraint_type: str  # AFTER | EXAM_COINCIDENCE | EXCLUSION, stored verbatim
    second_exam: int


@dataclass(frozen=True)
class RoomHardConstraint:
    exam: int
    constraint_type: str


@dataclass(frozen=True)
class Weighting:
    """Institutional weighting carrying a single parameter (TWOINAROW, PERIODSPREAD, ...)."""
    type: str
    param: int

    @property
    def params(self) -> Tuple[int]:
        return (self.param,)


@dataclass(frozen=True)
class FrontloadWeighting:
    """FRONTLOAD weighting: the largest exams should avoid the last periods."""
    largest_exams: int
    last_periods: int
    penalty: int
    type: str = field(default=FRONTLOAD, init=False)

    @property
    def params(self) -> Tuple[int, int, int]:
        return (self.largest_exams, self.last_periods, self.penalty)


InstitutionalWeighting = Union[Weighting, FrontloadWeighting]


@dataclass(frozen=True)
class ProblemInstance:
    """A fully parsed exam timetabling instance.

    Records refer to each other by index only. ``clash_matrix[i, j]`` is the
    number of students of exam ``i`` who also sit exam ``j``; the array is
    read-only.
    """
    exams: Tuple[Exam, ...]
    periods: Tuple[Period, ...]
    rooms: Tuple[Room, ...]
    period_hard_constraints: Tuple[PeriodHardConstraint, ...]
    room_hard_constraints: Tuple[RoomHardConstraint, ...]
    institutional_weightings: Tuple[InstitutionalWeighting, ...]
    clash_matrix: np.ndarray = field(repr=False, compare=False)

    @classmethod
    def build(cls, exams: Sequence[Exam], periods: Sequence[Period], rooms: Sequence[Room],
              period_hard_constraints: Sequence[PeriodHardConstraint],
              room_hard_constraints: Sequence[RoomHardConstraint],
              institutional_weightings: Sequence[InstitutionalWeighting]) -> "ProblemInstance":
        # local import: graph_build depends on this module
        from .graph_build import build_clash_matrix

        exams = tuple(exams)
        return cls(
            exams=exams,
            periods=tuple(periods),
            rooms=tuple(rooms),
            period_hard_constraints=tuple(period_hard_constraints),
            room_hard_constraints=tuple(room_hard_constraints),
            institutional_weightings=tuple(institutional_weightings),
            clash_matrix=build_clash_matrix(exams),
        )

    def clash(self, i: int, j: int) -> int:
        return int(self.clash_matrix[i, j])

    def weighting(self, tag: str) -> Optional[InstitutionalWeighting]:
        for w in self.institutional_weightings:
            if w.type == tag:
                return w
        return None

    @property
    def num_students(self) -> int:
        students = set()
        for exam in self.exams:
            students.update(exam.students)
        return len(students)
