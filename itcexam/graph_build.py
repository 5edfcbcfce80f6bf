from collections import Counter, defaultdict
from typing import Dict, Sequence

import networkx as nx
import numpy as np

from .models import Exam, ProblemInstance


def build_clash_matrix(exams: Sequence[Exam]) -> np.ndarray:
    """Count shared students for every ordered pair of exams.

    For each student on exam ``i``'s roster, ``M[i, j]`` adds the number of
    times that student is listed on exam ``j``. Work is done per student over
    the exams they sit, so the result is symmetric. The returned array is a
    read-only view.
    """
    n = len(exams)
    matrix = np.zeros((n, n), dtype=np.int64)
    # student -> {exam index: times listed on that exam}
    sittings: Dict[str, Counter] = defaultdict(Counter)
    for exam in exams:
        for sid in exam.students:
            sittings[sid][exam.index] += 1
    for counts in sittings.values():
        idx = np.fromiter(counts.keys(), dtype=np.intp, count=len(counts))
        mult = np.fromiter(counts.values(), dtype=np.int64, count=len(counts))
        matrix[np.ix_(idx, idx)] += np.outer(mult, mult)
    matrix.setflags(write=False)
    # a view of a read-only base cannot be made writeable again
    return matrix.view()


def build_conflict_graph(instance: ProblemInstance) -> nx.Graph:
    """Exam conflict graph: an edge for every pair of exams sharing a student."""
    G = nx.Graph()
    for exam in instance.exams:
        G.add_node(exam.index, duration=exam.duration, enrollment=exam.enrollment)
    rows, cols = np.nonzero(np.triu(instance.clash_matrix, k=1))
    for u, v in zip(rows.tolist(), cols.tolist()):
        G.add_edge(u, v, weight=instance.clash(u, v))
    return G
