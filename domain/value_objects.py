"""Domain Value Objects"""
from datetime import date

from pydantic import BaseModel


class DateRange(BaseModel):
    """Value Object for a half-open stay interval [start, end)

    Ordered by start, then end. Callers are responsible for start < end.
    """
    start: date
    end: date

    class Config:
        frozen = True

    def compare_to(self, other: "DateRange") -> int:
        """Sign of the start difference, tie-broken by end"""
        if other is None:
            return 1
        mine, theirs = (self.start, self.end), (other.start, other.end)
        return (mine > theirs) - (mine < theirs)

    def __lt__(self, other: "DateRange") -> bool:
        return self.compare_to(other) < 0

    def __le__(self, other: "DateRange") -> bool:
        return self.compare_to(other) <= 0

    def __gt__(self, other: "DateRange") -> bool:
        return self.compare_to(other) > 0

    def __ge__(self, other: "DateRange") -> bool:
        return self.compare_to(other) >= 0

    def overlaps(self, start: date, end: date) -> bool:
        """Half-open overlap test against [start, end)"""
        return self.start < end and start < self.end

    def nights(self) -> int:
        """Calculate number of nights"""
        return (self.end - self.start).days

    def clone(self) -> "DateRange":
        return DateRange(start=self.start, end=self.end)


class ImportResult(BaseModel):
    """Outcome of merging serialized entities into a repository"""
    imported_count: int = 0
    replaced_count: int = 0

    @property
    def total_count(self) -> int:
        return self.imported_count + self.replaced_count

    def __str__(self) -> str:
        return f"Imported: {self.imported_count}, Replaced: {self.replaced_count}, Total: {self.total_count}"
