"""
Instrument

This module provides the instrument model and the listing of rentable
instruments (see soundgood.instrument.service).
"""

from soundgood.instrument.model import Instrument

__all__ = ["Instrument"]
