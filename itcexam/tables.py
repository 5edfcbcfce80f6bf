"""Tabular views of a ProblemInstance, for inspection and CSV export."""
import os
from typing import Dict, List

import pandas as pd

from .models import ProblemInstance


def instance_frames(instance: ProblemInstance) -> Dict[str, pd.DataFrame]:
    exams = pd.DataFrame(
        [{'exam': e.index, 'duration_minutes': e.duration, 'enrollment': e.enrollment}
         for e in instance.exams],
        columns=['exam', 'duration_minutes', 'enrollment'],
    )
    periods = pd.DataFrame(
        [{'period': p.index, 'date': p.date.isoformat(), 'time': p.time.isoformat(),
          'duration_minutes': p.duration, 'penalty': p.penalty} for p in instance.periods],
        columns=['period', 'date', 'time', 'duration_minutes', 'penalty'],
    )
    rooms = pd.DataFrame(
        [{'room': r.index, 'capacity': r.capacity, 'penalty': r.penalty} for r in instance.rooms],
        columns=['room', 'capacity', 'penalty'],
    )
    period_constraints = pd.DataFrame(
        [{'exam_1': c.first_exam, 'type': c.constraint_type, 'exam_2': c.second_exam}
         for c in instance.period_hard_constraints],
        columns=['exam_1', 'type', 'exam_2'],
    )
    room_constraints = pd.DataFrame(
        [{'exam': c.exam, 'type': c.constraint_type} for c in instance.room_hard_constraints],
        columns=['exam', 'type'],
    )
    weightings = pd.DataFrame(
        [{'type': w.type, 'params': ','.join(str(p) for p in w.params)}
         for w in instance.institutional_weightings],
        columns=['type', 'params'],
    )
    index = [e.index for e in instance.exams]
    clashes = pd.DataFrame(instance.clash_matrix, index=index, columns=index)
    return {
        'exams': exams,
        'periods': periods,
        'rooms': rooms,
        'period_constraints': period_constraints,
        'room_constraints': room_constraints,
        'weightings': weightings,
        'clashes': clashes,
    }


def save_instance_csv(out_dir: str, instance: ProblemInstance) -> List[str]:
    """Write one CSV per table into ``out_dir``; returns the paths written."""
    os.makedirs(out_dir, exist_ok=True)
    paths = []
    for name, df in instance_frames(instance).items():
        path = os.path.join(out_dir, f"{name}.csv")
        df.to_csv(path, index=(name == 'clashes'))
        paths.append(path)
    return paths
