"""Immutable what-if capacity overrides."""

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Optional, Tuple


def parse_capacity(value) -> Optional[int]:
    """Coerce an operator-entered capacity to a non-negative int, or None if invalid."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, str):
        value = value.strip()
        try:
            return parse_capacity(int(value))
        except ValueError:
            try:
                value = float(value)
            except ValueError:
                return None
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value) or not value.is_integer():
            return None
        return parse_capacity(int(value))
    return None


@dataclass(frozen=True)
class OverrideRequest:
    """Operator asked to change (or, with new_capacity=None, restore) a school's capacity."""
    school_id: str
    new_capacity: object = None

    @property
    def is_reset(self) -> bool:
        return self.new_capacity is None


@dataclass(frozen=True)
class CapacityOverrides:
    """Sparse school_id -> hypothetical capacity snapshot.

    Every operation returns a new snapshot (or the same one when the input is
    rejected), so derived views can be computed as pure functions of it.
    """
    values: Dict[str, int] = field(default_factory=dict)

    def set(
        self,
        school_id: str,
        new_capacity,
        known_ids: Optional[Iterable[str]] = None,
    ) -> "CapacityOverrides":
        capacity = parse_capacity(new_capacity)
        if capacity is None:
            return self
        if known_ids is not None and school_id not in set(known_ids):
            return self
        updated = dict(self.values)
        updated[school_id] = capacity
        return CapacityOverrides(updated)

    def reset(self, school_id: str) -> "CapacityOverrides":
        if school_id not in self.values:
            return self
        updated = dict(self.values)
        del updated[school_id]
        return CapacityOverrides(updated)

    def reset_all(self) -> "CapacityOverrides":
        return CapacityOverrides()

    def apply(
        self,
        request: OverrideRequest,
        known_ids: Optional[Iterable[str]] = None,
    ) -> "CapacityOverrides":
        if request.is_reset:
            return self.reset(request.school_id)
        return self.set(request.school_id, request.new_capacity, known_ids)

    def effective_capacity(self, school_id: str, original_capacity: int) -> int:
        return self.values.get(school_id, original_capacity)

    def get(self, school_id: str) -> Optional[int]:
        return self.values.get(school_id)

    def items(self) -> Iterator[Tuple[str, int]]:
        return iter(self.values.items())

    @property
    def is_active(self) -> bool:
        return bool(self.values)

    def __contains__(self, school_id) -> bool:
        return school_id in self.values

    def __len__(self) -> int:
        return len(self.values)
