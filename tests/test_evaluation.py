import pytest

from itcexam.evaluation import clash_clique_bound, instance_stats, summary
from itcexam.io_utils import parse_problem
from itcexam.models import ProblemInstance

from conftest import make_document


class TestClashCliqueBound:
    def test_no_exams(self):
        instance = ProblemInstance.build([], [], [], [], [], [])
        assert clash_clique_bound(instance) == 0

    def test_exams_sharing_one_student(self):
        instance = parse_problem(make_document(exams="60,X\n" * 5))
        assert clash_clique_bound(instance) == 5

    def test_triangle_with_tail(self):
        # 0-1, 0-2, 1-2 clash pairwise; 3 only clashes with 2
        instance = parse_problem(make_document(exams="60,A,B\n60,A,C\n60,B,C,D\n60,D\n"))
        assert clash_clique_bound(instance) == 3

    def test_candidates_must_clash_with_every_chosen_exam(self):
        # 0 clashes with 1 (one student) and with 2 (three students); 1 and 2 are apart
        instance = parse_problem(make_document(exams="60,A,B,C,D\n60,A\n60,B,C,D\n"))
        assert clash_clique_bound(instance) == 2

    def test_isolated_exams(self):
        instance = parse_problem(make_document(exams="60,A\n60,B\n"))
        assert clash_clique_bound(instance) == 1


class TestInstanceStats:
    def test_sample(self, sample_instance):
        stats = instance_stats(sample_instance)
        assert stats['num_exams'] == 3
        assert stats['num_students'] == 5
        assert stats['num_periods'] == 3
        assert stats['num_rooms'] == 2
        assert stats['num_period_constraints'] == 2
        assert stats['num_room_constraints'] == 1
        assert stats['conflict_edges'] == 1
        assert stats['conflict_density'] == pytest.approx(1 / 3)
        assert stats['students_per_exam'] == pytest.approx(2.0)
        assert stats['largest_exam'] == 3
        assert stats['clique_lb'] == 2
        assert stats['weightings']['FRONTLOAD'] == (100, 30, 5)


class TestSummary:
    def test_sample(self, sample_instance):
        text = summary(sample_instance)
        assert "Exams: 3  Students: 5" in text
        assert "Clique lower bound: 2" in text
        assert "FRONTLOAD=100,30,5" in text
        assert "Warning" not in text

    def test_warns_when_periods_below_clique_bound(self):
        instance = parse_problem(make_document(exams="90,S1\n90,S1\n"))
        assert "Warning: periods=1 < clique LB=2" in summary(instance)
