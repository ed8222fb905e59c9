"""
Deposit Policy

Resolves a security deposit or EMD value into an amount, according to its
DepositType.
"""

from ..models import DepositType


def deposit_amount(deposit_type: DepositType, value: float, material_value: float) -> float:
    """
    Amount of a deposit for one lot.

    - notApplicable: 0
    - percentage: value % of material value
    - lumpsum: value as given, independent of material value
    """
    if deposit_type is DepositType.NOT_APPLICABLE:
        return 0.0
    if deposit_type is DepositType.PERCENTAGE:
        return (material_value * value) / 100
    if deposit_type is DepositType.LUMPSUM:
        return value

    raise ValueError(f"Unhandled deposit type: {deposit_type!r}")
