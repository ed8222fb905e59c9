"""
Input Validation for the Lot Payment Engine

Validates request data before processing begins. The calculators themselves
accept any numbers; rejecting bad input is the job of this layer.
Raises ValueError with clear messages for any constraint violations.
"""

import math

from .models import CalculationInput, Config, Lot


class InputValidator:
    """Validates calculation input according to business rules."""

    def validate(self, input_data: CalculationInput) -> None:
        """
        Run all validations. Raises ValueError if any check fails.
        """
        self._validate_config(input_data.config)
        self._validate_lot_ids(input_data.lots)
        for lot in input_data.lots:
            self._validate_lot(lot)
            self._validate_amounts(lot, input_data.config)

    def _validate_config(self, config: Config) -> None:
        """Validate config-level constraints."""
        if not math.isfinite(config.mstc_sc_percent):
            raise ValueError(f"mstc_sc_percent must be a finite number, got: {config.mstc_sc_percent}")

    def _validate_lot_ids(self, lots: list[Lot]) -> None:
        """Lot ids, where given, must be unique."""
        seen = set()
        for lot in lots:
            if lot.lot_id is None:
                continue
            if lot.lot_id in seen:
                raise ValueError(f"Duplicate lot id: {lot.lot_id}")
            seen.add(lot.lot_id)

    def _validate_lot(self, lot: Lot) -> None:
        """Validate lot-level constraints."""
        label = lot.name or lot.lot_id

        for field_name in ("quantity", "bid_value", "gst_percent", "tcs_percent",
                           "penalty_percent", "sd_value", "emd_value"):
            value = getattr(lot, field_name)
            if not math.isfinite(value):
                raise ValueError(f"{field_name} must be a finite number for lot {label}, got: {value}")

        # Percentages are computed as given, only the lot invariants are enforced
        if lot.quantity < 0:
            raise ValueError(f"quantity cannot be negative for lot {label}, got: {lot.quantity}")

        if lot.bid_value < 0:
            raise ValueError(f"bid_value cannot be negative for lot {label}, got: {lot.bid_value}")

    def _validate_amounts(self, lot: Lot, config: Config) -> None:
        """Amounts derived from finite inputs must stay finite."""
        label = lot.name or lot.lot_id
        material_value = lot.quantity * lot.bid_value
        if not math.isfinite(material_value):
            raise ValueError(f"material value overflows for lot {label}: {lot.quantity} x {lot.bid_value}")

        for field_name, percent in (
            ("gst_percent", lot.gst_percent),
            ("tcs_percent", lot.tcs_percent),
            ("penalty_percent", lot.penalty_percent),
            ("sd_value", lot.sd_value),
            ("emd_value", lot.emd_value),
            ("mstc_sc_percent", config.mstc_sc_percent),
        ):
            if not math.isfinite(material_value * percent):
                raise ValueError(f"{field_name} overflows the material value for lot {label}, got: {percent}")
