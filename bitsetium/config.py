"""
bitsetium/config.py
═══════════════════

Tuning knobs for expression evaluation and the command-line tool.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Union

from bitsetium.capacities import CAPACITIES, capacity_type
from bitsetium.errors import ConfigurationError


@dataclass
class EvalConfig:
    """Settings used when building bitsets from set expressions."""
    capacity: Union[int, str] = 256
    list_limit: int = 64
    lower_bound: int = 0
    color: bool = True

    def validate(self) -> List[str]:
        """Return a list of validation problems (empty if valid)."""
        problems: List[str] = []
        try:
            capacity_type(self.capacity)
        except ConfigurationError:
            problems.append(
                f"capacity {self.capacity!r} is not one of "
                f"{sorted(CAPACITIES)}")
        if self.list_limit <= 0:
            problems.append("list_limit must be positive")
        if self.lower_bound < 0:
            problems.append("lower_bound must be non-negative")
        return problems

    def resolved(self) -> type:
        """The capacity type; raises ``ConfigurationError`` if invalid."""
        problems = self.validate()
        if problems:
            raise ConfigurationError(problems[0])
        return capacity_type(self.capacity)


__all__ = ["EvalConfig"]
