"""
Flat CSV export of episode and step logs.

Column order follows the dataclass field order, so a log type and its CSV
header can never drift apart.
"""
import csv
from dataclasses import asdict, fields
from pathlib import Path
from typing import Iterable

from cognitive_grid.evaluation.logs import EpisodeLog, StepLog


def _write_rows(path: Path | str, row_type, rows: Iterable) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fieldnames = [f.name for f in fields(row_type)]

    with open(path, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for row in rows:
            writer.writerow(asdict(row))
    return path


def write_episode_logs_csv(path: Path | str, logs: Iterable[EpisodeLog]) -> Path:
    """Write one row per episode. Creates parent directories; overwrites `path`."""
    return _write_rows(path, EpisodeLog, logs)


def write_step_logs_csv(path: Path | str, logs: Iterable[StepLog]) -> Path:
    """Write one row per tick."""
    return _write_rows(path, StepLog, logs)


def read_episode_logs_csv(path: Path | str) -> list[EpisodeLog]:
    """Load episode logs written by write_episode_logs_csv()."""
    int_fields = {'episode', 'seed', 'steps', 'moves', 'noise_overrides', 'replans'}
    logs = []
    with open(path, 'r', newline='') as f:
        for row in csv.DictReader(f):
            values = dict(row)
            for key in int_fields:
                values[key] = int(values[key])
            values['success'] = values['success'] == 'True'
            values['energy_remaining'] = float(values['energy_remaining'])
            values['termination_reason'] = values['termination_reason'] or None
            logs.append(EpisodeLog(**values))
    return logs
