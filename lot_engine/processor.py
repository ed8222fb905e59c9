"""
Lot Processor - Main Orchestrator

Coordinates the lot calculation pipeline through discrete, testable steps.
"""

import logging
from typing import Any, Dict

from .calculators import BreakdownComputer, LotCalculator, SummaryAggregator
from .models import CalculationInput, CalculationResult, ProcessingContext
from .output import OutputBuilder
from .validators import InputValidator

logger = logging.getLogger(__name__)


class LotProcessor:
    """
    Main orchestrator for lot processing.

    Implements a clear pipeline pattern:
    1. Validate Input
    2. Build Context
    3. Calculate Lots
    4. Compute Breakdowns
    5. Compute Table Totals
    6. Summarize
    7. Build Output
    """

    def __init__(self):
        self.validator = InputValidator()
        self.lot_calculator = LotCalculator()
        self.breakdown_computer = BreakdownComputer(self.lot_calculator)
        self.summary_aggregator = SummaryAggregator(self.lot_calculator)
        self.output_builder = OutputBuilder()

    def process(self, input_data: CalculationInput) -> CalculationResult:
        """
        Process all lots through the complete pipeline.

        Args:
            input_data: Parsed CalculationInput object

        Returns:
            CalculationResult with per-lot values, tables and summary
        """
        # Step 1: Validate
        self.validator.validate(input_data)

        # Step 2: Build initial context
        ctx = ProcessingContext(lots=list(input_data.lots), config=input_data.config)

        # Step 3: Calculate every lot once
        ctx.calculations = [self.lot_calculator.calculate(lot, ctx.config) for lot in ctx.lots]

        # Step 4: Seller / MSTC split per lot
        ctx.breakdowns = [
            self.breakdown_computer.from_calculation(calc, ctx.config) for calc in ctx.calculations
        ]

        # Step 5: Table totals
        ctx.breakdown_totals = self.breakdown_computer.totals(ctx.breakdowns, ctx.config)
        ctx.lot_totals = self.summary_aggregator.lot_totals(ctx.calculations)

        # Step 6: Summary
        ctx.summary = self.summary_aggregator.from_calculations(ctx.calculations)

        logger.debug(
            "Processed %d lot(s) in %s mode, grand total %.2f",
            len(ctx.lots), ctx.config.mstc_payment_type.value, ctx.breakdown_totals.grand_total,
        )

        # Step 7: Build output
        return self.output_builder.build(ctx)

    def process_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Process lots from raw dictionary input.

        Convenience method for API usage.
        """
        input_data = CalculationInput.from_dict(data)
        result = self.process(input_data)
        return self._result_to_dict(result)

    def _result_to_dict(self, result: CalculationResult) -> Dict[str, Any]:
        """Convert CalculationResult to dictionary for API response."""
        return {
            "config": result.config,
            "lots": result.lots,
            "lot_details": result.lot_details,
            "breakdown": result.breakdown,
            "summary": result.summary,
        }


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def process_lots_from_dict(input_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Process lots from Python dict and return Python dict.
    """
    processor = LotProcessor()
    return processor.process_from_dict(input_data)


def process_lots_from_json(json_input: str) -> str:
    """
    Process lots from JSON string input and return JSON string output.
    """
    import json

    try:
        input_data = json.loads(json_input)
        processor = LotProcessor()
        result = processor.process_from_dict(input_data)
        return json.dumps(result, indent=2, ensure_ascii=False)

    except ValueError as e:
        error_response = {"error": str(e), "status": "validation_failed"}
        return json.dumps(error_response, indent=2)

    except Exception as e:
        logger.error(f"Processing error: {str(e)}")
        error_response = {"error": str(e), "status": "failed"}
        return json.dumps(error_response, indent=2)
