"""Belegungsraster Woche × Tag × Slot.

Einzige Quelle der Wahrheit für "ist dieser Zeitpunkt frei". Eine belegte
Zelle wird nur durch clear() wieder freigegeben.
"""

from models.timeslot import NUM_DAYS, NUM_SLOTS, NUM_WEEKS, GridCell, span_is_valid


class BlockingGrid:
    """Dreidimensionale Bool-Tabelle der belegten Zellen."""

    def __init__(self) -> None:
        self._cells: list[list[list[bool]]] = self._empty()

    @staticmethod
    def _empty() -> list[list[list[bool]]]:
        return [
            [[False] * NUM_SLOTS for _ in range(NUM_DAYS)]
            for _ in range(NUM_WEEKS)
        ]

    # ─── Lesen ───

    def is_blocked(self, week: int, day: int, slot: int) -> bool:
        return self._cells[week][day][slot]

    def is_free(self, week: int, day: int, start: int, duration: int) -> bool:
        """True wenn der Block gültig liegt und in dieser Woche komplett frei ist."""
        if not span_is_valid(start, duration):
            return False
        plane = self._cells[week][day]
        return not any(plane[start + i] for i in range(duration))

    def is_free_all_weeks(self, day: int, start: int, duration: int) -> bool:
        return all(self.is_free(w, day, start, duration) for w in range(NUM_WEEKS))

    def occupied_cells(self) -> list[GridCell]:
        return [
            GridCell(week=w, day=d, slot=s)
            for w in range(NUM_WEEKS)
            for d in range(NUM_DAYS)
            for s in range(NUM_SLOTS)
            if self._cells[w][d][s]
        ]

    def snapshot(self) -> tuple[tuple[tuple[bool, ...], ...], ...]:
        """Unveränderliche Kopie des gesamten Rasters."""
        return tuple(tuple(tuple(row) for row in plane) for plane in self._cells)

    # ─── Schreiben ───

    def block(self, week: int, day: int, start: int, duration: int) -> None:
        plane = self._cells[week][day]
        for i in range(duration):
            plane[start + i] = True

    def block_all_weeks(self, day: int, start: int, duration: int) -> None:
        for w in range(NUM_WEEKS):
            self.block(w, day, start, duration)

    def clear(self) -> None:
        self._cells = self._empty()

    def __repr__(self) -> str:
        return f"BlockingGrid({len(self.occupied_cells())} belegt)"
