"""
Lot Calculator

Derives every monetary field for a single lot. Each value feeds the ones
computed after it, so the order of the steps below matters.
"""

from ..models import Config, Lot, LotCalculation
from .deposit import deposit_amount


class LotCalculator:
    """Calculates taxes, deposits and fees for one lot."""

    # Rates as class constants
    SC_GST_MULTIPLIER = 1.18  # 18% GST loaded on the service charge
    TDS_ON_SC_RATE = 0.02
    IT_TDS_RATE = 0.001
    TCS_ON_GST_RATE = 0.005

    def calculate(self, lot: Lot, config: Config) -> LotCalculation:
        """Calculate all fields for a lot and return a LotCalculation."""
        material_value = (lot.quantity or 0) * (lot.bid_value or 0)
        penalty = (material_value * (lot.penalty_percent or 0)) / 100

        # GST on RCM basis: buyer self-assesses, so no GST here
        effective_gst_percent = 0 if config.gst_on_rcm else (lot.gst_percent or 0)
        gst = (material_value * effective_gst_percent) / 100
        tcs = ((material_value + gst) * (lot.tcs_percent or 0)) / 100

        sd_amount = deposit_amount(config.security_deposit_type, lot.sd_value or 0, material_value)
        emd = deposit_amount(config.emd_type, lot.emd_value or 0, material_value)

        service_charge_without_gst = (material_value * (config.mstc_sc_percent or 0)) / 100
        tds = self._calculate_tds_on_sc(service_charge_without_gst, config.tds_on_sc)
        service_charge_gross = service_charge_without_gst * self.SC_GST_MULTIPLIER
        service_charge = service_charge_gross - tds

        # Same amount as the service charge, only categorised differently
        transaction_fees = service_charge if config.is_transaction_fees else 0.0

        total = material_value + penalty + gst + tcs + sd_amount + transaction_fees

        it_tds = self._calculate_it_tds(material_value, config.it_tds)
        tcs_on_gst = self._calculate_tcs_on_gst(material_value, config.tcs_on_gst)

        seller_payment = material_value + gst + tcs - it_tds - service_charge

        return LotCalculation(
            lot_id=lot.lot_id,
            name=lot.name,
            material_value=material_value,
            penalty=penalty,
            gst=gst,
            tcs=tcs,
            sd_amount=sd_amount,
            emd=emd,
            service_charge_without_gst=service_charge_without_gst,
            tds=tds,
            service_charge_gross=service_charge_gross,
            service_charge=service_charge,
            transaction_fees=transaction_fees,
            total=total,
            it_tds=it_tds,
            tcs_on_gst=tcs_on_gst,
            seller_payment=seller_payment,
            mstc_sc=service_charge,
        )

    def _calculate_tds_on_sc(self, service_charge_without_gst: float, enabled: bool) -> float:
        """TDS on service charge (2% of the charge before GST)."""
        if not enabled:
            return 0.0
        return service_charge_without_gst * self.TDS_ON_SC_RATE

    def _calculate_it_tds(self, material_value: float, enabled: bool) -> float:
        """Income-tax TDS (0.1% of material value)."""
        if not enabled:
            return 0.0
        return material_value * self.IT_TDS_RATE

    def _calculate_tcs_on_gst(self, material_value: float, enabled: bool) -> float:
        """TCS on GST (0.5% of material value)."""
        if not enabled:
            return 0.0
        return material_value * self.TCS_ON_GST_RATE


def calculate_lot(lot: Lot, config: Config) -> LotCalculation:
    """Function form of LotCalculator.calculate."""
    return LotCalculator().calculate(lot, config)
