from typing import Any, Dict, Optional

import networkx as nx
import numpy as np

from .graph_build import build_conflict_graph
from .models import ProblemInstance


def clash_clique_bound(instance: ProblemInstance) -> int:
    """Size of a greedily grown set of mutually clashing exams.

    No two exams in the set can share a period, so its size is a lower bound
    on the number of periods a clash-free timetable needs. Growth starts from
    the exam that clashes with the most others and each step adds the
    remaining candidate sharing the most students with the exams already
    chosen.
    """
    n = len(instance.exams)
    if n == 0:
        return 0
    clashes = instance.clash_matrix
    adjacent = clashes > 0
    np.fill_diagonal(adjacent, False)
    chosen = [int(np.argmax(adjacent.sum(axis=1)))]
    # exams clashing with every chosen exam
    candidates = adjacent[chosen[0]].copy()
    while candidates.any():
        shared = clashes[chosen].sum(axis=0)
        nxt = int(np.argmax(np.where(candidates, shared, -1)))
        chosen.append(nxt)
        candidates &= adjacent[nxt]
    return len(chosen)


def instance_stats(instance: ProblemInstance, G: Optional[nx.Graph] = None) -> Dict[str, Any]:
    if G is None:
        G = build_conflict_graph(instance)
    n = len(instance.exams)
    enrollments = [e.enrollment for e in instance.exams]
    max_edges = n * (n - 1) // 2
    return {
        'num_exams': n,
        'num_students': instance.num_students,
        'num_periods': len(instance.periods),
        'num_rooms': len(instance.rooms),
        'num_period_constraints': len(instance.period_hard_constraints),
        'num_room_constraints': len(instance.room_hard_constraints),
        'conflict_edges': G.number_of_edges(),
        'conflict_density': G.number_of_edges() / max_edges if max_edges else 0.0,
        'students_per_exam': sum(enrollments) / n if n else 0.0,
        'largest_exam': max(enrollments, default=0),
        'clique_lb': clash_clique_bound(instance),
        'weightings': {w.type: w.params for w in instance.institutional_weightings},
    }


def summary(instance: ProblemInstance) -> str:
    s = instance_stats(instance)
    warning = ""
    if s['num_periods'] < s['clique_lb']:
        warning = (
            f"Warning: periods={s['num_periods']} < clique LB={s['clique_lb']}; "
            f"a clash-free timetable is impossible.\n"
        )
    weightings = ", ".join(
        f"{tag}={','.join(str(p) for p in params)}" for tag, params in s['weightings'].items()
    )
    return (
        f"Exams: {s['num_exams']}  Students: {s['num_students']}\n"
        f"Periods: {s['num_periods']}  Rooms: {s['num_rooms']}\n"
        f"Period constraints: {s['num_period_constraints']}  "
        f"Room constraints: {s['num_room_constraints']}\n"
        f"Conflict edges: {s['conflict_edges']}  Density: {s['conflict_density']:.4f}\n"
        f"Students per exam: {s['students_per_exam']:.2f}  Largest exam: {s['largest_exam']}\n"
        f"Clique lower bound: {s['clique_lb']}\n"
        f"Weightings: {weightings}\n"
        f"{warning}"
    )
