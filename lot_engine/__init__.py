"""
LOT PAYMENT ENGINE
Seller / MSTC payment breakdown for auction lots
"""

from .calculators import calculate_lot, calculate_lot_breakdown, calculate_summary
from .models import CalculationInput, CalculationResult, Config, Lot
from .processor import LotProcessor

__all__ = [
    'LotProcessor',
    'CalculationInput',
    'CalculationResult',
    'Config',
    'Lot',
    'calculate_lot',
    'calculate_lot_breakdown',
    'calculate_summary',
]
