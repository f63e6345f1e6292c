from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class Instrument:
    """A rentable instrument. Reference data, never changed by renting."""

    id: int
    price: int
    type: str
    brand: str
    quality: str

    @classmethod
    def from_row(cls, row: dict) -> "Instrument":
        return cls(
            id=row["id"],
            price=row["price"],
            type=row["type"],
            brand=row["brand"],
            quality=row["quality"],
        )

    def to_dict(self) -> dict:
        return asdict(self)
