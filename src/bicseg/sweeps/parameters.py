from __future__ import annotations

from dataclasses import dataclass
from itertools import product
from typing import Any, Dict, List, Sequence

SWEEPABLE = ("size1", "inc1", "size2", "inc2", "cpw")


@dataclass
class SweepParameter:
    name: str
    values: List[str]


def parse_parameter(definition: str) -> SweepParameter:
    parts = definition.split()
    if len(parts) < 2:
        raise ValueError("Parameter definition must include a name and at least one value")
    if parts[0] not in SWEEPABLE:
        raise ValueError(f"Unknown sweep parameter {parts[0]!r}; expected one of {SWEEPABLE}")
    return SweepParameter(name=parts[0], values=parts[1:])


def expand_grid(parameters: Sequence[SweepParameter]) -> List[Dict[str, Any]]:
    if not parameters:
        return [{}]
    names = [param.name for param in parameters]
    return [dict(zip(names, combo)) for combo in product(*(p.values for p in parameters))]
