"""
Domain Models for the Lot Payment Engine

These dataclasses provide type-safe representations of all business entities.
Monetary values are plain floats; rounding happens only when output is built.
"""

from dataclasses import dataclass, field
from enum import Enum


def _pick(data: dict, key: str, legacy_key: str, default=None):
    """Read a snake_case key, falling back to the legacy camelCase form key."""
    if key in data:
        return data[key]
    return data.get(legacy_key, default)


def _number(value) -> float:
    """Coerce a form value to float. Missing or falsy values become 0."""
    if not value:
        return 0.0
    return float(value)


def _flag(value) -> bool:
    """Coerce a 0/1 form flag (or a real bool) to bool."""
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)


# =============================================================================
# ENUMS
# =============================================================================


class DepositType(str, Enum):
    """How an SD or EMD value is interpreted."""

    NOT_APPLICABLE = "notApplicable"
    PERCENTAGE = "percentage"  # value is % of material value
    LUMPSUM = "lumpsum"  # value is a flat amount

    @classmethod
    def parse(cls, value, field_name: str) -> "DepositType":
        if isinstance(value, cls):
            return value
        if not value:
            return cls.NOT_APPLICABLE
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(repr(m.value) for m in cls)
            raise ValueError(f"Invalid {field_name}: {value!r}. Must be one of {allowed}") from None


class MstcPaymentType(str, Enum):
    """How the MSTC fee is charged."""

    SERVICE_CHARGE = "serviceCharge"  # deducted from seller proceeds
    TRANSACTION_FEES = "transactionFees"  # paid by the buyer on top of the total

    @classmethod
    def parse(cls, value) -> "MstcPaymentType":
        if isinstance(value, cls):
            return value
        if not value:
            return cls.SERVICE_CHARGE
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(repr(m.value) for m in cls)
            raise ValueError(f"Invalid mstc_payment_type: {value!r}. Must be one of {allowed}") from None


# =============================================================================
# INPUT MODELS
# =============================================================================


@dataclass(frozen=True)
class Lot:
    """A single lot sold in the auction."""

    lot_id: int | str | None = None
    name: str = ""
    quantity: float = 0.0
    bid_value: float = 0.0
    gst_percent: float = 0.0
    tcs_percent: float = 0.0
    penalty_percent: float = 0.0
    sd_value: float = 0.0  # % or flat amount, depending on Config.security_deposit_type
    emd_value: float = 0.0  # % or flat amount, depending on Config.emd_type

    @classmethod
    def from_dict(cls, data: dict) -> "Lot":
        lot_id = data.get("id", data.get("lot_id"))
        return cls(
            lot_id=lot_id,
            name=data.get("name") or (f"Lot {lot_id}" if lot_id is not None else ""),
            quantity=_number(data.get("quantity")),
            bid_value=_number(_pick(data, "bid_value", "bidValue")),
            gst_percent=_number(_pick(data, "gst_percent", "gstPercent")),
            tcs_percent=_number(_pick(data, "tcs_percent", "tcsPercent")),
            penalty_percent=_number(_pick(data, "penalty_percent", "penaltyPercent")),
            sd_value=_number(_pick(data, "sd_value", "sdValue")),
            emd_value=_number(_pick(data, "emd_value", "emdValue")),
        )


@dataclass(frozen=True)
class Config:
    """Global flags controlling which taxes and fees apply."""

    security_deposit_type: DepositType = DepositType.NOT_APPLICABLE
    emd_type: DepositType = DepositType.NOT_APPLICABLE
    mstc_payment_type: MstcPaymentType = MstcPaymentType.SERVICE_CHARGE
    gst_on_rcm: bool = False  # buyer self-assesses GST; lot GST is ignored
    tds_on_sc: bool = False  # 2% TDS withheld from service charge
    it_tds: bool = False  # 0.1% income-tax TDS on material value
    tcs_on_gst: bool = False  # 0.5% TCS-on-GST on material value
    mstc_sc_percent: float = 0.0

    @property
    def is_transaction_fees(self) -> bool:
        return self.mstc_payment_type is MstcPaymentType.TRANSACTION_FEES

    @property
    def shows_sd(self) -> bool:
        return self.security_deposit_type is not DepositType.NOT_APPLICABLE

    @property
    def shows_emd(self) -> bool:
        return self.emd_type is not DepositType.NOT_APPLICABLE

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        return cls(
            security_deposit_type=DepositType.parse(
                _pick(data, "security_deposit_type", "securityDepositType"), "security_deposit_type"
            ),
            emd_type=DepositType.parse(_pick(data, "emd_type", "emdType"), "emd_type"),
            mstc_payment_type=MstcPaymentType.parse(_pick(data, "mstc_payment_type", "mstcPaymentType")),
            gst_on_rcm=_flag(_pick(data, "gst_on_rcm", "gstOnRcm", False)),
            tds_on_sc=_flag(_pick(data, "tds_on_sc", "tdsOnSc", False)),
            it_tds=_flag(_pick(data, "it_tds", "itTds", False)),
            tcs_on_gst=_flag(_pick(data, "tcs_on_gst", "tcsOnGst", False)),
            mstc_sc_percent=_number(_pick(data, "mstc_sc_percent", "mstcScPercent")),
        )


@dataclass
class CalculationInput:
    """Complete input for one calculation pass."""

    lots: list[Lot]
    config: Config

    @classmethod
    def from_dict(cls, data: dict) -> "CalculationInput":
        raw_lots = data.get("lots", [])
        if not isinstance(raw_lots, list):
            raise ValueError(f"lots must be a list, got: {type(raw_lots).__name__}")
        for i, item in enumerate(raw_lots):
            if not isinstance(item, dict):
                raise ValueError(f"lots[{i}] must be an object, got: {type(item).__name__}")
        raw_config = data.get("config") or {}
        if not isinstance(raw_config, dict):
            raise ValueError(f"config must be an object, got: {type(raw_config).__name__}")
        return cls(
            lots=[Lot.from_dict(item) for item in raw_lots],
            config=Config.from_dict(raw_config),
        )


# =============================================================================
# OUTPUT / RESULT MODELS
# =============================================================================


@dataclass(frozen=True)
class LotCalculation:
    """Every monetary field derived for one lot."""

    lot_id: int | str | None = None
    name: str = ""
    material_value: float = 0.0
    penalty: float = 0.0
    gst: float = 0.0
    tcs: float = 0.0
    sd_amount: float = 0.0
    emd: float = 0.0
    service_charge_without_gst: float = 0.0
    tds: float = 0.0
    service_charge_gross: float = 0.0  # incl. 18% GST, before TDS
    service_charge: float = 0.0  # net of TDS
    transaction_fees: float = 0.0
    total: float = 0.0
    it_tds: float = 0.0
    tcs_on_gst: float = 0.0
    seller_payment: float = 0.0
    mstc_sc: float = 0.0


@dataclass(frozen=True)
class LotBreakdown:
    """Seller vs MSTC split of one lot, for display."""

    lot_name: str = ""
    sd_amount: float = 0.0
    emd_amount: float = 0.0
    balance_payment: float = 0.0
    service_charge_amount: float = 0.0  # zero in transaction-fee mode
    transaction_fees_amount: float = 0.0  # zero in service-charge mode
    it_tds_amount: float = 0.0
    tcs_on_gst_amount: float = 0.0
    tds_on_service_charge: float = 0.0
    mstc_payment_total: float = 0.0
    seller_payment_total: float = 0.0
    grand_total: float = 0.0


@dataclass
class BreakdownTotals:
    """Column totals and group subtotals of the breakdown table."""

    sd_amount: float = 0.0
    emd_amount: float = 0.0
    balance_payment: float = 0.0
    service_charge_amount: float = 0.0
    transaction_fees_amount: float = 0.0
    tds_on_service_charge: float = 0.0
    it_tds_amount: float = 0.0
    tcs_on_gst_amount: float = 0.0
    grand_total: float = 0.0
    seller_subtotal: float = 0.0
    mstc_subtotal: float = 0.0


@dataclass
class LotTotals:
    """Totals row of the lot details table."""

    material_value: float = 0.0
    gst: float = 0.0
    tcs: float = 0.0
    penalty: float = 0.0
    transaction_fees: float = 0.0
    sd_amount: float = 0.0
    total: float = 0.0


@dataclass(frozen=True)
class Summary:
    """Portfolio-level totals over all lots."""

    total_emd: float = 0.0
    total_balance: float = 0.0
    total_mstc_sc: float = 0.0
    total_tcs_on_gst: float = 0.0
    total_it_tds: float = 0.0
    total_seller_payment: float = 0.0
    total_payment: float = 0.0
    mstc_payment: float = 0.0
    balance_seller_payment: float = 0.0
    balance_mstc_sc: float = 0.0
    balance_tcs_on_gst: float = 0.0
    balance_it_tds: float = 0.0
    balance_total: float = 0.0
    total_sd_amount: float = 0.0
    grand_total: float = 0.0


@dataclass
class ProcessingContext:
    """
    Holds all intermediate state during a calculation pass.
    This is the "bag" that flows through the pipeline.
    """

    # Input (immutable during processing)
    lots: list[Lot]
    config: Config

    # Step results (populated as we go)
    calculations: list[LotCalculation] = field(default_factory=list)
    breakdowns: list[LotBreakdown] = field(default_factory=list)
    breakdown_totals: BreakdownTotals = field(default_factory=BreakdownTotals)
    lot_totals: LotTotals = field(default_factory=LotTotals)
    summary: Summary = field(default_factory=Summary)


@dataclass
class CalculationResult:
    """Final output of a calculation pass."""

    config: dict
    lots: list
    lot_details: dict
    breakdown: dict
    summary: dict
