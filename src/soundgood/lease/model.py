from dataclasses import asdict, dataclass
from datetime import date


@dataclass(frozen=True)
class Lease:
    """
    A rental of one instrument by one student.

    ``start_day`` is inclusive and ``end_day`` exclusive; the lease is active
    on ``d`` iff ``start_day <= d < end_day``.
    """

    id: int
    student_id: int
    instrument_id: int
    start_day: date
    end_day: date

    @classmethod
    def from_row(cls, row: dict) -> "Lease":
        return cls(
            id=row["id"],
            student_id=row["student_id"],
            instrument_id=row["instrument_id"],
            start_day=row["start_day"],
            end_day=row["end_day"],
        )

    def is_active(self, on: date) -> bool:
        return self.start_day <= on < self.end_day

    def to_dict(self) -> dict:
        data = asdict(self)
        data["start_day"] = self.start_day.isoformat()
        data["end_day"] = self.end_day.isoformat()
        return data
