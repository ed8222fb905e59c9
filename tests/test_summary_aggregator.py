"""
Unit Tests for Summary Aggregator
"""

import pytest

from lot_engine.calculators.lot import LotCalculator
from lot_engine.calculators.summary import SummaryAggregator, calculate_summary
from lot_engine.models import Config, DepositType, Lot, MstcPaymentType, Summary


@pytest.fixture
def aggregator():
    return SummaryAggregator()


@pytest.fixture
def lots():
    return [
        Lot(lot_id=1, name="Lot 1", quantity=10, bid_value=100, gst_percent=18, tcs_percent=1),
        Lot(lot_id=2, name="Lot 2", quantity=10, bid_value=100, gst_percent=18, tcs_percent=1),
    ]


class TestEmptyInput:

    def test_all_fields_zero(self, aggregator):
        result = aggregator.summarize([], Config(mstc_sc_percent=2, it_tds=True))
        assert result == Summary()
        assert all(value == 0 for value in vars(result).values())


class TestTwoLots:

    def test_totals(self, aggregator, lots):
        result = aggregator.summarize(lots, Config(mstc_sc_percent=2))

        assert result.total_payment == pytest.approx(2383.6)
        assert result.total_mstc_sc == pytest.approx(47.2)
        assert result.mstc_payment == pytest.approx(47.2)
        assert result.total_seller_payment == pytest.approx(2336.4)
        assert result.total_emd == 0
        assert result.total_sd_amount == 0

    def test_derived_fields(self, aggregator, lots):
        result = aggregator.summarize(lots, Config(mstc_sc_percent=2))

        assert result.total_balance == pytest.approx(2383.6)
        assert result.balance_total == pytest.approx(2383.6 + 47.2)
        assert result.grand_total == pytest.approx(2383.6 + 47.2 + 0)

    def test_emd_deducted_in_balance_fields(self, aggregator):
        lots = [Lot(quantity=10, bid_value=100, emd_value=10)]
        config = Config(emd_type=DepositType.PERCENTAGE, mstc_sc_percent=2)
        result = aggregator.summarize(lots, config)

        assert result.total_emd == pytest.approx(100)
        assert result.total_balance == pytest.approx(1000 - 100)
        assert result.balance_seller_payment == pytest.approx(result.total_seller_payment - 100)
        assert result.balance_mstc_sc == pytest.approx(result.total_mstc_sc)

    def test_grand_total_adds_sd(self, aggregator):
        lots = [Lot(quantity=10, bid_value=100, sd_value=300)]
        config = Config(security_deposit_type=DepositType.LUMPSUM, mstc_sc_percent=2)
        result = aggregator.summarize(lots, config)

        # total already includes SD once: 1000 + 300
        assert result.total_payment == pytest.approx(1300)
        assert result.total_sd_amount == pytest.approx(300)
        assert result.grand_total == pytest.approx(1300 + 23.6 + 300)


class TestElementwiseSum:
    """Summary totals equal the sum of per-lot calculations."""

    CONFIGS = [
        Config(mstc_sc_percent=2),
        Config(mstc_payment_type=MstcPaymentType.TRANSACTION_FEES, mstc_sc_percent=1.5, tds_on_sc=True),
        Config(
            security_deposit_type=DepositType.PERCENTAGE, emd_type=DepositType.LUMPSUM,
            it_tds=True, tcs_on_gst=True, gst_on_rcm=True, mstc_sc_percent=3,
        ),
    ]

    @pytest.mark.parametrize("count", [1, 2, 5, 17])
    @pytest.mark.parametrize("config", CONFIGS)
    def test_matches_sum_of_calculations(self, aggregator, count, config):
        lots = [
            Lot(quantity=i + 1, bid_value=100 * (i + 1), gst_percent=18, tcs_percent=1,
                penalty_percent=i % 3, sd_value=5, emd_value=1000)
            for i in range(count)
        ]
        calcs = [LotCalculator().calculate(lot, config) for lot in lots]
        result = aggregator.summarize(lots, config)

        assert result.total_emd == pytest.approx(sum(c.emd for c in calcs))
        assert result.total_mstc_sc == pytest.approx(sum(c.mstc_sc for c in calcs))
        assert result.total_tcs_on_gst == pytest.approx(sum(c.tcs_on_gst for c in calcs))
        assert result.total_it_tds == pytest.approx(sum(c.it_tds for c in calcs))
        assert result.total_seller_payment == pytest.approx(sum(c.seller_payment for c in calcs))
        assert result.total_payment == pytest.approx(sum(c.total for c in calcs))
        assert result.total_sd_amount == pytest.approx(sum(c.sd_amount for c in calcs))

    def test_order_independent(self, aggregator, lots):
        lots = lots + [Lot(quantity=7, bid_value=33.3, gst_percent=5)]
        config = Config(mstc_sc_percent=2)
        forward = aggregator.summarize(lots, config)
        backward = aggregator.summarize(list(reversed(lots)), config)
        assert forward.grand_total == pytest.approx(backward.grand_total)


class TestLotTotals:

    def test_sums_table_columns(self, aggregator):
        config = Config(
            mstc_payment_type=MstcPaymentType.TRANSACTION_FEES,
            security_deposit_type=DepositType.PERCENTAGE,
            mstc_sc_percent=2,
        )
        lots = [
            Lot(quantity=10, bid_value=100, gst_percent=18, tcs_percent=1, penalty_percent=1, sd_value=10),
            Lot(quantity=5, bid_value=100, gst_percent=18, tcs_percent=1, penalty_percent=1, sd_value=10),
        ]
        calcs = [LotCalculator().calculate(lot, config) for lot in lots]
        totals = aggregator.lot_totals(calcs)

        assert totals.material_value == pytest.approx(1500)
        assert totals.gst == pytest.approx(270)
        assert totals.tcs == pytest.approx(17.7)
        assert totals.penalty == pytest.approx(15)
        assert totals.transaction_fees == pytest.approx(35.4)
        assert totals.sd_amount == pytest.approx(150)
        assert totals.total == pytest.approx(sum(c.total for c in calcs))


class TestFunctionForm:

    def test_matches_class(self, aggregator, lots):
        config = Config(mstc_sc_percent=2)
        assert calculate_summary(lots, config) == aggregator.summarize(lots, config)
