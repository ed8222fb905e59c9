"""
Summary Aggregator

Folds per-lot calculations into portfolio totals.
"""

from ..models import Config, Lot, LotCalculation, LotTotals, Summary
from .lot import LotCalculator


class SummaryAggregator:
    """Aggregates LotCalculator results across all lots."""

    def __init__(self, lot_calculator: LotCalculator | None = None):
        self.lot_calculator = lot_calculator or LotCalculator()

    def summarize(self, lots: list[Lot], config: Config) -> Summary:
        calculations = [self.lot_calculator.calculate(lot, config) for lot in lots]
        return self.from_calculations(calculations)

    def from_calculations(self, calculations: list[LotCalculation]) -> Summary:
        """
        Sum calculations in input order.

        Balance = Total Payment - EMD
        Grand Total = Total Payment + MSTC Service Charge + SD
        """
        total_emd = 0.0
        total_mstc_sc = 0.0
        total_tcs_on_gst = 0.0
        total_it_tds = 0.0
        total_seller_payment = 0.0
        total_payment = 0.0
        total_sd_amount = 0.0

        for calc in calculations:
            total_emd += calc.emd
            total_mstc_sc += calc.mstc_sc
            total_tcs_on_gst += calc.tcs_on_gst
            total_it_tds += calc.it_tds
            total_seller_payment += calc.seller_payment
            total_payment += calc.total
            total_sd_amount += calc.sd_amount

        total_balance = total_payment - total_emd

        return Summary(
            total_emd=total_emd,
            total_balance=total_balance,
            total_mstc_sc=total_mstc_sc,
            total_tcs_on_gst=total_tcs_on_gst,
            total_it_tds=total_it_tds,
            total_seller_payment=total_seller_payment,
            total_payment=total_payment,
            mstc_payment=total_mstc_sc,
            balance_seller_payment=total_seller_payment - total_emd,
            balance_mstc_sc=total_mstc_sc,
            balance_tcs_on_gst=total_tcs_on_gst,
            balance_it_tds=total_it_tds,
            balance_total=total_balance + total_mstc_sc,
            total_sd_amount=total_sd_amount,
            grand_total=total_payment + total_mstc_sc + total_sd_amount,
        )

    def lot_totals(self, calculations: list[LotCalculation]) -> LotTotals:
        """Totals row for the lot details table."""
        totals = LotTotals()
        for calc in calculations:
            totals.material_value += calc.material_value
            totals.gst += calc.gst
            totals.tcs += calc.tcs
            totals.penalty += calc.penalty
            totals.transaction_fees += calc.transaction_fees
            totals.sd_amount += calc.sd_amount
            totals.total += calc.total
        return totals


def calculate_summary(lots: list[Lot], config: Config) -> Summary:
    """Function form of SummaryAggregator.summarize."""
    return SummaryAggregator().summarize(lots, config)
