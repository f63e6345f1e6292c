import calendar
import logging
from datetime import date, datetime
from typing import Callable, List, Optional

from soundgood import db
from soundgood.config import config
from soundgood.errors import RuleRejection, ValidationRejection
from soundgood.lease.model import Lease
from soundgood.lease.repository import LeaseRepository

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"


def add_months(day: date, months: int) -> date:
    """Shift a date by whole months, clamping to the last day of the month."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def parse_end_day(value: str) -> date:
    """Parse a YYYY-MM-DD date string, raising ValidationRejection if malformed."""
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except (AttributeError, ValueError) as e:
        raise ValidationRejection(f"Invalid end date {value!r}, expected YYYY-MM-DD.") from e


class RentalService:
    """Creates leases after checking the date window, quota and availability."""

    def __init__(self, repository: LeaseRepository = None, today: Callable[[], date] = None):
        self.today = today or (repository.today if repository else date.today)
        self.repository = repository or LeaseRepository(today=self.today)

    def validate_end_day(self, end_day: str) -> date:
        """
        Parse the requested end date and check it lies after today and no
        more than max_lease_months ahead. Touches no store.
        """
        parsed = parse_end_day(end_day)
        today = self.today()
        latest = add_months(today, config.max_lease_months)
        if parsed <= today or parsed > latest:
            raise ValidationRejection(
                f"The end rent date must be after today and at most "
                f"{config.max_lease_months} months ahead (no later than {latest.isoformat()})."
            )
        return parsed

    def create_lease(self, student_id: int, instrument_id: int, end_day: str) -> int:
        """
        Rent an instrument to a student until end_day (exclusive).

        The student's lease rows are locked before counting, so concurrent
        requests for the same student are serialized and the quota holds.
        Any rejection or failure after the lock rolls the transaction back.

        Returns:
            The new lease id
        """
        parsed_end_day = self.validate_end_day(end_day)

        with db.transaction() as tx:
            count = self.repository.count_active_leases(tx, student_id)
            if count >= config.max_active_leases:
                logger.info(
                    "Rejected lease for student %s: %s active leases", student_id, count
                )
                raise RuleRejection(
                    f"Student cannot have more than {config.max_active_leases} rentals simultaneously."
                )

            if not self.repository.is_instrument_available(tx, instrument_id):
                logger.info(
                    "Rejected lease for student %s: instrument %s is rented",
                    student_id,
                    instrument_id,
                )
                raise RuleRejection(f"Instrument {instrument_id} cannot be rented.")

            lease_id = self.repository.create_lease(tx, student_id, instrument_id, parsed_end_day)

        logger.info(
            "Created lease %s: student %s, instrument %s, until %s",
            lease_id,
            student_id,
            instrument_id,
            parsed_end_day,
        )
        return lease_id

    def get_lease(self, lease_id: int) -> Optional[Lease]:
        with db.transaction() as tx:
            return self.repository.get_lease(tx, lease_id)

    def list_student_leases(self, student_id: int) -> List[Lease]:
        """List a student's currently active leases."""
        with db.transaction() as tx:
            return self.repository.list_active_leases(tx, student_id)


class TerminationService:
    """Ends leases early. No business validation beyond the repository's."""

    def __init__(self, repository: LeaseRepository = None):
        self.repository = repository or LeaseRepository()

    def terminate_lease(self, lease_id: int) -> None:
        with db.transaction() as tx:
            affected = self.repository.terminate_lease(tx, lease_id)

        if affected:
            logger.info("Terminated lease %s", lease_id)
        else:
            logger.info("Lease %s not found or already ended; nothing to terminate", lease_id)
