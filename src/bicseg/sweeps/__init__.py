from .grid import SweepResult, SweepRunner
from .parameters import SweepParameter, expand_grid, parse_parameter

__all__ = [
    "SweepParameter",
    "parse_parameter",
    "expand_grid",
    "SweepResult",
    "SweepRunner",
]
