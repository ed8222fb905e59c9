"""
Calculators Package

Provides all calculation components for lot processing.
"""

from .breakdown import BreakdownComputer, calculate_lot_breakdown
from .deposit import deposit_amount
from .lot import LotCalculator, calculate_lot
from .summary import SummaryAggregator, calculate_summary

__all__ = [
    "LotCalculator",
    "BreakdownComputer",
    "SummaryAggregator",
    "deposit_amount",
    "calculate_lot",
    "calculate_lot_breakdown",
    "calculate_summary",
]
