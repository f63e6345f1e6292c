from datetime import date
from typing import Callable, List, Optional

from soundgood import db
from soundgood.instrument.model import Instrument
from soundgood.lease.repository import LeaseRepository


class InstrumentService:
    def __init__(self, repository: LeaseRepository = None, today: Callable[[], date] = date.today):
        self.repository = repository or LeaseRepository(today=today)

    def list_instruments(self, type_filter: Optional[str] = None) -> List[Instrument]:
        """
        List instruments nobody is renting today, optionally of one type.
        Read-only, but still runs in its own committed transaction.
        """
        with db.transaction() as tx:
            return self.repository.list_available_instruments(tx, type_filter)
