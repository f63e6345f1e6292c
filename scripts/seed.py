"""Seed sample students and instruments into the database."""
from soundgood import db

STUDENTS = ["Alice Andersson", "Bertil Berg", "Cecilia Carlsson"]

INSTRUMENTS = [
    {"price": 100, "type": "guitar", "brand": "Fender", "quality": "good"},
    {"price": 150, "type": "guitar", "brand": "Gibson", "quality": "excellent"},
    {"price": 300, "type": "piano", "brand": "Yamaha", "quality": "good"},
    {"price": 80, "type": "drums", "brand": "Pearl", "quality": "fair"},
    {"price": 60, "type": "violin", "brand": "Stentor", "quality": "fair"},
    {"price": 90, "type": "saxophone", "brand": "Selmer", "quality": "good"},
]


def main():
    with db.transaction() as tx:
        for name in STUDENTS:
            row = tx.fetch_one("INSERT INTO student (name) VALUES (%s) RETURNING id", (name,))
            print(f"Created student: {name} (id={row['id']})")

        for instrument in INSTRUMENTS:
            row = tx.fetch_one(
                """
                INSERT INTO instrument (price, type, brand, quality)
                VALUES (%(price)s, %(type)s, %(brand)s, %(quality)s)
                RETURNING id
                """,
                instrument,
            )
            print(f"Created: {instrument['brand']} {instrument['type']} (id={row['id']})")


if __name__ == "__main__":
    main()
