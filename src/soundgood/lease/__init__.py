"""
Lease

This module provides lease data access and the rental and termination
services built on it.
"""

from soundgood.lease.model import Lease
from soundgood.lease.repository import LeaseRepository
from soundgood.lease.service import RentalService, TerminationService

__all__ = ["Lease", "LeaseRepository", "RentalService", "TerminationService"]
