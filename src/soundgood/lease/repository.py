from datetime import date
from typing import Callable, List, Optional

from soundgood.config import config
from soundgood.db import Transaction, store_operation
from soundgood.instrument.model import Instrument
from soundgood.lease.model import Lease

# A lease is active on %(today)s iff start_day <= today < end_day
ACTIVE_ON_DAY = "(l.start_day <= %(today)s AND %(today)s < l.end_day)"


class LeaseRepository:
    """
    Repository for lease and instrument availability data access.
    Encapsulates all SQL and row locking for the lease table.

    Every method takes the Transaction handle of the unit of work it belongs
    to. Committing and rolling back is the caller's business.
    """

    def __init__(self, today: Callable[[], date] = date.today, lock_instruments: bool = None):
        self.today = today
        self.lock_instruments = (
            config.lock_instruments if lock_instruments is None else lock_instruments
        )

    @store_operation("Could not list instruments.")
    def list_available_instruments(
        self, tx: Transaction, type_filter: Optional[str] = None
    ) -> List[Instrument]:
        """
        List instruments with no lease active today.
        A blank or missing type filter lists every type; any other value
        must equal the instrument type exactly.
        """
        query = f"""
            SELECT i.id, i.price, i.type, i.brand, i.quality
            FROM instrument AS i
            WHERE NOT EXISTS (
                SELECT 1 FROM lease AS l
                WHERE l.instrument_id = i.id AND {ACTIVE_ON_DAY}
            )
        """
        params = {"today": self.today()}

        if type_filter and type_filter.strip():
            query += " AND i.type = %(type)s"
            params["type"] = type_filter

        query += " ORDER BY i.type, i.id"

        return [Instrument.from_row(row) for row in tx.fetch_all(query, params)]

    @store_operation("Could not lock student leases.")
    def lock_student_leases(self, tx: Transaction, student_id: int) -> None:
        """
        Take write locks on the student row and all of the student's lease rows.

        A concurrent transaction doing the same for this student blocks here
        until we commit or roll back. The student row is locked too so that a
        student without any lease rows yet is serialized as well.
        """
        tx.fetch_all("SELECT id FROM student WHERE id = %s FOR UPDATE", (student_id,))
        tx.fetch_all("SELECT id FROM lease WHERE student_id = %s FOR UPDATE", (student_id,))

    @store_operation("Could not get student lease count.")
    def count_active_leases(self, tx: Transaction, student_id: int) -> int:
        """Lock the student's leases, then count the ones active today."""
        self.lock_student_leases(tx, student_id)
        row = tx.fetch_one(
            f"""
            SELECT COUNT(*) AS count FROM lease AS l
            WHERE l.student_id = %(student_id)s AND {ACTIVE_ON_DAY}
            """,
            {"student_id": student_id, "today": self.today()},
        )
        return row["count"]

    @store_operation("Could not lock instrument.")
    def lock_instrument(self, tx: Transaction, instrument_id: int) -> None:
        """Take a write lock on the instrument row until the transaction ends."""
        tx.fetch_all("SELECT id FROM instrument WHERE id = %s FOR UPDATE", (instrument_id,))

    @store_operation("Could not read instrument rented status.")
    def is_instrument_available(self, tx: Transaction, instrument_id: int) -> bool:
        """True iff no lease for the instrument is active today."""
        if self.lock_instruments:
            self.lock_instrument(tx, instrument_id)
        row = tx.fetch_one(
            f"""
            SELECT COUNT(*) = 0 AS is_empty FROM lease AS l
            WHERE l.instrument_id = %(instrument_id)s AND {ACTIVE_ON_DAY}
            """,
            {"instrument_id": instrument_id, "today": self.today()},
        )
        return row["is_empty"]

    @store_operation("Could not add lease.")
    def create_lease(self, tx: Transaction, student_id: int, instrument_id: int, end_day: date) -> int:
        """
        Insert a lease starting today. Quota and availability must already
        have been checked in the same transaction.
        """
        row = tx.fetch_one(
            """
            INSERT INTO lease (student_id, instrument_id, start_day, end_day)
            VALUES (%s, %s, %s, %s)
            RETURNING id
            """,
            (student_id, instrument_id, self.today(), end_day),
        )
        return row["id"]

    @store_operation("Could not terminate rental.")
    def terminate_lease(self, tx: Transaction, lease_id: int) -> int:
        """
        End a lease today. Only ever moves end_day earlier: leases that
        already ended (or end today) and unknown ids are left untouched.

        Returns:
            Number of leases changed (0 or 1)
        """
        return tx.execute(
            "UPDATE lease SET end_day = %(today)s WHERE id = %(lease_id)s AND end_day > %(today)s",
            {"lease_id": lease_id, "today": self.today()},
        )

    @store_operation("Could not read lease.")
    def get_lease(self, tx: Transaction, lease_id: int) -> Optional[Lease]:
        """Get a lease by ID, whatever its state."""
        row = tx.fetch_one(
            "SELECT id, student_id, instrument_id, start_day, end_day FROM lease WHERE id = %s",
            (lease_id,),
        )
        return Lease.from_row(row) if row else None

    @store_operation("Could not list student leases.")
    def list_active_leases(self, tx: Transaction, student_id: int) -> List[Lease]:
        """List the student's leases active today, oldest first."""
        rows = tx.fetch_all(
            f"""
            SELECT l.id, l.student_id, l.instrument_id, l.start_day, l.end_day
            FROM lease AS l
            WHERE l.student_id = %(student_id)s AND {ACTIVE_ON_DAY}
            ORDER BY l.start_day, l.id
            """,
            {"student_id": student_id, "today": self.today()},
        )
        return [Lease.from_row(row) for row in rows]
