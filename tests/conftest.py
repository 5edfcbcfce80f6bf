import pytest

from itcexam.io_utils import parse_problem

SAMPLE_INSTANCE = """\
[Exams:3]
90, S1, S2
120, S2, S3, S4
60, S5
[Periods:3]
15:04:2005, 09:30:00, 210, 0
15:04:2005, 14:00:00, 210, 0
18:04:2005, 09:30:00, 120, 5
[Rooms:2]
260, 0
100, 10
[PeriodHardConstraints]
0, AFTER, 1
1, EXAM_COINCIDENCE, 2
[RoomHardConstraints]
2, ROOM_EXCLUSIVE
[InstitutionalWeightings]
TWOINAROW, 7
TWOINADAY, 5
PERIODSPREAD, 5
NONMIXEDDURATIONS, 10
FRONTLOAD, 100, 30, 5
"""


def make_document(exams="90,S1\n", periods="01:02:2024,09:00:00,120,5\n", rooms="100,0\n",
                  period_constraints="0,EXCLUSION,0\n", room_constraints="",
                  weightings="TWOINAROW,7\n"):
    return (
        f"[Exams:x]\n{exams}"
        f"[Periods:x]\n{periods}"
        f"[Rooms:x]\n{rooms}"
        f"[PeriodHardConstraints]\n{period_constraints}"
        f"[RoomHardConstraints]\n{room_constraints}"
        f"[InstitutionalWeightings]\n{weightings}"
    )


@pytest.fixture
def sample_text():
    return SAMPLE_INSTANCE


@pytest.fixture
def sample_instance():
    return parse_problem(SAMPLE_INSTANCE)


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "sample.exam"
    path.write_text(SAMPLE_INSTANCE, encoding="ascii")
    return path
