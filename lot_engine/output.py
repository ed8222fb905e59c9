"""
Output Builder

Constructs the final API response from processing context: per-lot values,
the lot details table, the payment breakdown table and the summary.
"""

import math
from decimal import ROUND_HALF_UP, Decimal

from .models import (
    BreakdownTotals, CalculationResult, Config, DepositType, LotBreakdown, ProcessingContext,
)


def to_money(value: float) -> float:
    """Convert to float with 2 decimal places."""
    return round(float(value or 0), 2)


def format_inr(value) -> str:
    """Format a number as whole rupees with Indian digit grouping (₹12,34,567)."""
    if value and not math.isfinite(value):
        return f"₹{value}"
    amount = int(Decimal(str(value or 0)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    sign = "-" if amount < 0 else ""
    digits = str(abs(amount))

    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join(groups + [tail])

    return f"{sign}₹{digits}"


def _deposit_input_label(prefix: str, deposit_type: DepositType) -> str:
    return f"{prefix} {'%' if deposit_type is DepositType.PERCENTAGE else 'Amt'}"


class OutputBuilder:
    """Builds the final output response."""

    SELLER_GROUP = "seller"
    MSTC_GROUP = "mstc"
    TOTAL_GROUP = "total"

    def build(self, ctx: ProcessingContext) -> CalculationResult:
        """Construct the complete result from processing context."""
        return CalculationResult(
            config=self._build_config(ctx.config),
            lots=self._build_lots(ctx),
            lot_details=self._build_lot_details(ctx),
            breakdown=self._build_breakdown(ctx),
            summary=self._build_summary(ctx),
        )

    def _build_config(self, config: Config) -> dict:
        """Echo the configuration used for the pass."""
        return {
            "security_deposit_type": config.security_deposit_type.value,
            "emd_type": config.emd_type.value,
            "mstc_payment_type": config.mstc_payment_type.value,
            "gst_on_rcm": config.gst_on_rcm,
            "tds_on_sc": config.tds_on_sc,
            "it_tds": config.it_tds,
            "tcs_on_gst": config.tcs_on_gst,
            "mstc_sc_percent": config.mstc_sc_percent,
        }

    def _build_lots(self, ctx: ProcessingContext) -> list:
        """Per-lot calculated values."""
        lots = []
        for calc in ctx.calculations:
            lots.append({
                "id": calc.lot_id,
                "name": calc.name,
                "material_value": to_money(calc.material_value),
                "penalty": to_money(calc.penalty),
                "gst": to_money(calc.gst),
                "tcs": to_money(calc.tcs),
                "sd_amount": to_money(calc.sd_amount),
                "emd": to_money(calc.emd),
                "service_charge_without_gst": to_money(calc.service_charge_without_gst),
                "tds": to_money(calc.tds),
                "service_charge_gross": to_money(calc.service_charge_gross),
                "service_charge": to_money(calc.service_charge),
                "transaction_fees": to_money(calc.transaction_fees),
                "total": to_money(calc.total),
                "it_tds": to_money(calc.it_tds),
                "tcs_on_gst": to_money(calc.tcs_on_gst),
                "seller_payment": to_money(calc.seller_payment),
                "mstc_sc": to_money(calc.mstc_sc),
            })
        return lots

    def _lot_detail_columns(self, config: Config) -> list[tuple[str, str]]:
        """(key, label) pairs of the lot details table, in display order."""
        columns = [
            ("name", "Lot Name"),
            ("quantity", "Qty"),
            ("bid_value", "Bid Value"),
            ("gst_percent", "GST%"),
            ("tcs_percent", "TCS%"),
            ("penalty_percent", "Penalty%"),
        ]
        if config.shows_emd:
            columns.append(("emd_value", _deposit_input_label("EMD", config.emd_type)))
        if config.shows_sd:
            columns.append(("sd_value", _deposit_input_label("SD", config.security_deposit_type)))

        columns += [
            ("material_value", "Material Value"),
            ("gst", "GST"),
            ("tcs", "TCS"),
            ("penalty", "Penalty"),
        ]
        if config.is_transaction_fees:
            columns.append(("transaction_fees", "Trans. Fees"))
        if config.shows_sd:
            columns.append(("sd_amount", "SD"))
        columns.append(("total", "Total"))
        return columns

    def _build_lot_details(self, ctx: ProcessingContext) -> dict:
        """Lot details table: inputs next to calculated values.

        The totals row is only shown when there is more than one lot.
        """
        columns = self._lot_detail_columns(ctx.config)
        rows = []
        for lot, calc in zip(ctx.lots, ctx.calculations):
            values = {
                "name": lot.name,
                "quantity": lot.quantity,
                "bid_value": lot.bid_value,
                "gst_percent": lot.gst_percent,
                "tcs_percent": lot.tcs_percent,
                "penalty_percent": lot.penalty_percent,
                "emd_value": lot.emd_value,
                "sd_value": lot.sd_value,
                "material_value": to_money(calc.material_value),
                "gst": to_money(calc.gst),
                "tcs": to_money(calc.tcs),
                "penalty": to_money(calc.penalty),
                "transaction_fees": to_money(calc.transaction_fees),
                "sd_amount": to_money(calc.sd_amount),
                "total": to_money(calc.total),
            }
            rows.append({key: values[key] for key, _ in columns})

        totals = None
        if len(ctx.lots) > 1:
            t = ctx.lot_totals
            available = {
                "material_value": to_money(t.material_value),
                "gst": to_money(t.gst),
                "tcs": to_money(t.tcs),
                "penalty": to_money(t.penalty),
                "transaction_fees": to_money(t.transaction_fees),
                "sd_amount": to_money(t.sd_amount),
                "total": to_money(t.total),
            }
            totals = {key: available[key] for key, _ in columns if key in available}

        return {
            "columns": [{"key": key, "label": label} for key, label in columns],
            "rows": rows,
            "totals": totals,
            "gst_on_rcm": ctx.config.gst_on_rcm,
        }

    def _breakdown_columns(self, config: Config, totals: BreakdownTotals) -> list[tuple[str, str, str]]:
        """(attribute, label, group) triples of the breakdown table, in display order."""
        columns = []
        if config.shows_sd:
            columns.append(("sd_amount", "SD Amount", self.SELLER_GROUP))
        if config.shows_emd:
            columns.append(("emd_amount", "EMD Amount", self.SELLER_GROUP))
        columns.append(("balance_payment", "Balance Payment", self.SELLER_GROUP))

        if config.is_transaction_fees:
            columns.append(("transaction_fees_amount", "Transaction Fees", self.MSTC_GROUP))
        elif config.tds_on_sc:
            label = f"Service Charge (Excl S/C TDS: {format_inr(totals.tds_on_service_charge)})"
            columns.append(("service_charge_amount", label, self.MSTC_GROUP))
        else:
            columns.append(("service_charge_amount", "Service Charge", self.MSTC_GROUP))

        columns += [
            ("it_tds_amount", "IT TDS", self.MSTC_GROUP),
            ("tcs_on_gst_amount", "TCS on GST", self.MSTC_GROUP),
            ("grand_total", "Total Payable", self.TOTAL_GROUP),
        ]
        return columns

    def _build_breakdown(self, ctx: ProcessingContext) -> dict:
        """Payment breakdown table with column totals and group subtotals."""
        totals = ctx.breakdown_totals
        columns = self._breakdown_columns(ctx.config, totals)
        seller_span = sum(1 for _, _, group in columns if group == self.SELLER_GROUP)
        mstc_span = sum(1 for _, _, group in columns if group == self.MSTC_GROUP)

        return {
            "groups": [
                {"key": self.SELLER_GROUP, "label": "Seller Payment", "span": seller_span},
                {"key": self.MSTC_GROUP, "label": "MSTC Payment", "span": mstc_span},
                {"key": self.TOTAL_GROUP, "label": "Total Payment", "span": 1},
            ],
            "columns": [
                {"key": attr, "label": label, "group": group} for attr, label, group in columns
            ],
            "rows": [self._breakdown_row(b, columns) for b in ctx.breakdowns],
            "column_total": {
                attr: to_money(getattr(totals, attr)) for attr, _, _ in columns
            },
            "group_subtotal": {
                self.SELLER_GROUP: to_money(totals.seller_subtotal),
                self.MSTC_GROUP: to_money(totals.mstc_subtotal),
                self.TOTAL_GROUP: to_money(totals.grand_total),
            },
        }

    def _breakdown_row(self, breakdown: LotBreakdown, columns: list[tuple[str, str, str]]) -> dict:
        return {
            "lot_name": breakdown.lot_name,
            "values": {attr: to_money(getattr(breakdown, attr)) for attr, _, _ in columns},
            "mstc_payment_total": to_money(breakdown.mstc_payment_total),
            "seller_payment_total": to_money(breakdown.seller_payment_total),
        }

    def _build_summary(self, ctx: ProcessingContext) -> dict:
        """Build summary section with value and description for each field."""
        s = ctx.summary
        payment = format_inr(s.total_payment)
        emd = format_inr(s.total_emd)
        mstc_sc = format_inr(s.total_mstc_sc)
        sd = format_inr(s.total_sd_amount)

        return {
            "total_emd": {
                "value": to_money(s.total_emd),
                "description": "EMD collected across all lots" if ctx.config.shows_emd else "EMD not applicable"
            },
            "total_payment": {
                "value": to_money(s.total_payment),
                "description": f"Sum of lot totals across {len(ctx.calculations)} lot(s)"
            },
            "total_balance": {
                "value": to_money(s.total_balance),
                "description": f"total_payment ({payment}) - EMD ({emd}) = {format_inr(s.total_balance)}"
            },
            "total_mstc_sc": {
                "value": to_money(s.total_mstc_sc),
                "description": (
                    f"Transaction fees charged by MSTC: {mstc_sc}" if ctx.config.is_transaction_fees
                    else f"Service charge incl. 18% GST, net of S/C TDS: {mstc_sc}"
                )
            },
            "total_tcs_on_gst": {
                "value": to_money(s.total_tcs_on_gst),
                "description": "0.5% of material value" if ctx.config.tcs_on_gst else "TCS on GST not applicable"
            },
            "total_it_tds": {
                "value": to_money(s.total_it_tds),
                "description": "0.1% of material value" if ctx.config.it_tds else "IT TDS not applicable"
            },
            "total_seller_payment": {
                "value": to_money(s.total_seller_payment),
                "description": "material value + GST + TCS - IT TDS - service charge, summed over lots"
            },
            "mstc_payment": {
                "value": to_money(s.mstc_payment),
                "description": f"Amount routed through MSTC: {format_inr(s.mstc_payment)}"
            },
            "balance_seller_payment": {
                "value": to_money(s.balance_seller_payment),
                "description": f"seller payment ({format_inr(s.total_seller_payment)}) - EMD ({emd}) = {format_inr(s.balance_seller_payment)}"
            },
            "balance_mstc_sc": {
                "value": to_money(s.balance_mstc_sc),
                "description": "MSTC service charge still payable after EMD"
            },
            "balance_tcs_on_gst": {
                "value": to_money(s.balance_tcs_on_gst),
                "description": "TCS on GST still payable after EMD"
            },
            "balance_it_tds": {
                "value": to_money(s.balance_it_tds),
                "description": "IT TDS still payable after EMD"
            },
            "balance_total": {
                "value": to_money(s.balance_total),
                "description": f"balance ({format_inr(s.total_balance)}) + MSTC service charge ({mstc_sc}) = {format_inr(s.balance_total)}"
            },
            "total_sd_amount": {
                "value": to_money(s.total_sd_amount),
                "description": "Non-adjustable security deposit across all lots" if ctx.config.shows_sd else "Security deposit not applicable"
            },
            "grand_total": {
                "value": to_money(s.grand_total),
                "description": f"total_payment ({payment}) + MSTC service charge ({mstc_sc}) + SD ({sd}) = {format_inr(s.grand_total)}"
            },
        }
