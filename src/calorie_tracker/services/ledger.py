"""Food ledger: the persisted list of logged foods."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import date

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from calorie_tracker.domain.foods import FoodEntry, MealType
from calorie_tracker.services.store import FOODS_KEY, Store

_logger = logging.getLogger(__name__)


class _FoodRecord(BaseModel):
    """Stored shape of a food entry."""

    model_config = ConfigDict(allow_inf_nan=False)

    id: int
    name: str
    calories: float
    quantity: float
    meal: MealType
    date: date
    protein: float = 0.0
    carbs: float = 0.0
    fats: float = 0.0


_RECORDS = TypeAdapter(list[_FoodRecord])


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


@dataclass
class FoodLedger:
    """Append/delete-only ordered collection of food entries."""

    store: Store
    _entries: list[FoodEntry] = field(default_factory=list)
    now_ms: Callable[[], int] = _now_ms

    @classmethod
    def load(cls, store: Store, now_ms: Callable[[], int] = _now_ms) -> "FoodLedger":
        """Load the ledger from the store, falling back to an empty one."""
        entries = _parse_entries(store.load(FOODS_KEY))
        return cls(store=store, _entries=entries, now_ms=now_ms)

    @property
    def entries(self) -> tuple[FoodEntry, ...]:
        """Entries in insertion order."""
        return tuple(self._entries)

    def add(self, entry: FoodEntry) -> FoodEntry:
        """Append an entry, assigning an id when it has none."""
        added = self._append(entry)
        self._persist()
        return added

    def add_many(self, entries: list[FoodEntry]) -> list[FoodEntry]:
        """Append several entries with a single write."""
        added = [self._append(entry) for entry in entries]
        self._persist()
        return added

    def remove(self, entry_id: int) -> None:
        """Remove the entry with the given id; unknown ids are ignored."""
        remaining = [entry for entry in self._entries if entry.id != entry_id]
        if len(remaining) == len(self._entries):
            return
        self._entries = remaining
        self._persist()

    def list_for_date(self, day: date) -> list[FoodEntry]:
        """Return entries logged for a calendar day, in insertion order."""
        return [entry for entry in self._entries if entry.date == day]

    def history(self) -> list[FoodEntry]:
        """Return all entries, newest first."""
        return list(reversed(self._entries))

    def _append(self, entry: FoodEntry) -> FoodEntry:
        if entry.id is None:
            entry = replace(entry, id=self._next_id())
        self._entries.append(entry)
        return entry

    def _next_id(self) -> int:
        # Ids must stay unique when several entries land in the same millisecond.
        assigned = [entry.id for entry in self._entries if entry.id is not None]
        return max(self.now_ms(), max(assigned, default=0) + 1)

    def _persist(self) -> None:
        self.store.save(FOODS_KEY, [_to_record(entry) for entry in self._entries])


def _to_record(entry: FoodEntry) -> dict[str, object]:
    return {
        "id": entry.id,
        "name": entry.name,
        "calories": entry.calories,
        "quantity": entry.quantity,
        "meal": entry.meal.value,
        "date": entry.date.isoformat(),
        "protein": entry.protein,
        "carbs": entry.carbs,
        "fats": entry.fats,
    }


def _parse_entries(raw: object | None) -> list[FoodEntry]:
    if raw is None:
        return []
    try:
        records = _RECORDS.validate_python(raw)
    except ValidationError:
        _logger.warning("Stored foods are malformed; starting with an empty ledger")
        return []
    return [
        FoodEntry(
            id=record.id,
            name=record.name,
            calories=record.calories,
            quantity=record.quantity,
            meal=record.meal,
            date=record.date,
            protein=record.protein,
            carbs=record.carbs,
            fats=record.fats,
        )
        for record in records
    ]
