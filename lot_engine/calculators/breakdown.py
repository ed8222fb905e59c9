"""
Breakdown Computer

Splits a lot's payment into what goes to the seller and what goes to MSTC.
The split depends on the MSTC payment mode.
"""

from ..models import BreakdownTotals, Config, Lot, LotBreakdown, LotCalculation, MstcPaymentType
from .lot import LotCalculator


class BreakdownComputer:
    """Derives seller / MSTC groupings and balance payment for a lot."""

    def __init__(self, lot_calculator: LotCalculator | None = None):
        self.lot_calculator = lot_calculator or LotCalculator()

    def breakdown(self, lot: Lot, config: Config) -> LotBreakdown:
        """Calculate the lot, then build its breakdown."""
        calc = self.lot_calculator.calculate(lot, config)
        return self.from_calculation(calc, config)

    def from_calculation(self, calc: LotCalculation, config: Config) -> LotBreakdown:
        """
        Build the breakdown from an existing LotCalculation.

        Service charge mode:
            MSTC Payment    = Service Charge (net of TDS) + IT TDS + TCS on GST
            Balance Payment = Total - EMD - MSTC Payment - SD

        Transaction fees mode:
            MSTC Payment    = Transaction Fees + IT TDS + TCS on GST
            Balance Payment = Total - EMD - MSTC Payment + Transaction Fees - SD

        Both modes:
            Seller Payment  = EMD + Balance Payment + SD
            Grand Total     = MSTC Payment + Seller Payment
        """
        mode = config.mstc_payment_type
        emd_amount = calc.emd
        sd_amount = calc.sd_amount
        it_tds_amount = calc.it_tds
        tcs_on_gst_amount = calc.tcs_on_gst

        if mode is MstcPaymentType.TRANSACTION_FEES:
            service_charge_amount = 0.0
            transaction_fees_amount = calc.service_charge
            tds_on_service_charge = 0.0

            mstc_payment = transaction_fees_amount + it_tds_amount + tcs_on_gst_amount
            # Total already carries the transaction fees once; add them back
            # before MSTC Payment takes them out again.
            balance_payment = calc.total - emd_amount - mstc_payment + transaction_fees_amount - sd_amount
        elif mode is MstcPaymentType.SERVICE_CHARGE:
            service_charge_amount = calc.service_charge
            transaction_fees_amount = 0.0
            tds_on_service_charge = calc.tds

            mstc_payment = service_charge_amount + it_tds_amount + tcs_on_gst_amount
            balance_payment = calc.total - emd_amount - mstc_payment - sd_amount
        else:
            raise ValueError(f"Unhandled MSTC payment type: {mode!r}")

        seller_payment_total = emd_amount + balance_payment + sd_amount

        return LotBreakdown(
            lot_name=calc.name,
            sd_amount=sd_amount,
            emd_amount=emd_amount,
            balance_payment=balance_payment,
            service_charge_amount=service_charge_amount,
            transaction_fees_amount=transaction_fees_amount,
            it_tds_amount=it_tds_amount,
            tcs_on_gst_amount=tcs_on_gst_amount,
            tds_on_service_charge=tds_on_service_charge,
            mstc_payment_total=mstc_payment,
            seller_payment_total=seller_payment_total,
            grand_total=mstc_payment + seller_payment_total,
        )

    def totals(self, breakdowns: list[LotBreakdown], config: Config) -> BreakdownTotals:
        """Column totals plus the Seller and MSTC group subtotals."""
        totals = BreakdownTotals()
        for b in breakdowns:
            totals.sd_amount += b.sd_amount
            totals.emd_amount += b.emd_amount
            totals.balance_payment += b.balance_payment
            totals.service_charge_amount += b.service_charge_amount
            totals.transaction_fees_amount += b.transaction_fees_amount
            totals.tds_on_service_charge += b.tds_on_service_charge
            totals.it_tds_amount += b.it_tds_amount
            totals.tcs_on_gst_amount += b.tcs_on_gst_amount
            totals.grand_total += b.grand_total

        mstc_fee = totals.transaction_fees_amount if config.is_transaction_fees else totals.service_charge_amount
        totals.seller_subtotal = totals.sd_amount + totals.emd_amount + totals.balance_payment
        totals.mstc_subtotal = mstc_fee + totals.it_tds_amount + totals.tcs_on_gst_amount
        return totals


def calculate_lot_breakdown(lot: Lot, config: Config) -> LotBreakdown:
    """Function form of BreakdownComputer.breakdown."""
    return BreakdownComputer().breakdown(lot, config)
