"""SQL fragment builders shared by the company and job stores.

Placeholders are written PostgreSQL style (`$1`, `$2`, ...); the position of a
value in the returned list is the number after the `$`. `jobly.db.run_query`
turns them into bind parameters at execution time.
"""
from __future__ import annotations
from typing import Any, List, Mapping, NamedTuple

from jobly.errors import BadRequestError


class PartialUpdate(NamedTuple):
    set_cols: str
    values: List[Any]


def placeholder(position: int) -> str:
    return f"${position}"


def sql_for_partial_update(data_to_update: Mapping[str, Any], alias_table: Mapping[str, str]) -> PartialUpdate:
    """Build the SET clause of an UPDATE from a sparse mapping.

    {"numEmployees": 10, "name": "Acme"} with {"numEmployees": "num_employees"}
    gives '"num_employees"=$1, "name"=$2' and [10, "Acme"].
    """
    if not data_to_update:
        raise BadRequestError("No data")

    cols = []
    values = []
    for key, value in data_to_update.items():
        values.append(value)
        cols.append(f'"{alias_table.get(key, key)}"={placeholder(len(values))}')
    return PartialUpdate(", ".join(cols), values)


class WhereClause:
    """Conjunction of predicates whose parameters are numbered as they are added."""

    def __init__(self) -> None:
        self._fragments: List[str] = []
        self.values: List[Any] = []

    def add(self, template: str, value: Any) -> None:
        # template holds a single "{param}" slot for this predicate's value
        self.values.append(value)
        self._fragments.append(template.format(param=placeholder(len(self.values))))

    def __len__(self) -> int:
        return len(self._fragments)

    def render(self) -> str:
        if not self._fragments:
            raise BadRequestError("At least one filter must be given")
        return " AND ".join(self._fragments)
