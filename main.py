from dataclasses import asdict

from flask import Flask, request, jsonify
from flask_cors import CORS
from lot_engine import LotProcessor
from lot_engine.calculators import BreakdownComputer, LotCalculator
from lot_engine.models import CalculationInput, Config, Lot
from lot_engine.validators import InputValidator
import os
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)

# Enable CORS for all routes (the calculator front end runs on another origin)
CORS(app)

# Initialize the processor and calculators
processor = LotProcessor()
lot_calculator = LotCalculator()
breakdown_computer = BreakdownComputer(lot_calculator)
validator = InputValidator()


@app.route("/api", methods=["GET"])
def api_info():
    """API information endpoint"""
    return jsonify({
        "status": "ok",
        "message": "MSTC Lot Payment Calculator API",
        "version": "1.0",
        "endpoints": {
            "calculate": "/calculate [POST]",
            "calculate_lot": "/calculate_lot [POST]",
            "health": "/health [GET]"
        }
    }), 200


@app.route("/health", methods=["GET"])
def health():
    """Health check for monitoring"""
    return jsonify({"status": "healthy"}), 200


@app.route("/calculate", methods=["POST"])
def calculate():
    """
    Run all lots through the payment engine
    """
    try:
        input_data = request.get_json(force=True, silent=True)

        if not input_data or not isinstance(input_data, dict):
            return jsonify({
                "error": "No input data provided",
                "status": "failed"
            }), 400

        lot_count = len(input_data.get("lots") or [])
        logger.info(f"Calculating {lot_count} lot(s)")

        result = processor.process_from_dict(input_data)

        logger.info(f"Calculation complete for {lot_count} lot(s)")

        return jsonify(result), 200

    except (ValueError, TypeError) as e:
        # Validation errors from engine
        logger.error(f"Validation error: {str(e)}")
        return jsonify({
            "error": str(e),
            "status": "validation_failed"
        }), 400

    except Exception as e:
        # Unexpected errors
        logger.error(f"Processing error: {str(e)}")
        return jsonify({
            "error": str(e),
            "status": "failed"
        }), 500


@app.route("/calculate_lot", methods=["POST"])
def calculate_lot():
    """
    Calculate a single lot: {"lot": {...}, "config": {...}}
    """
    try:
        input_data = request.get_json(force=True, silent=True)

        if not isinstance(input_data, dict) or "lot" not in input_data:
            return jsonify({
                "error": "No lot provided",
                "status": "failed"
            }), 400

        lot_data = input_data["lot"]
        config_data = input_data.get("config") or {}
        if not isinstance(lot_data, dict):
            raise ValueError(f"lot must be an object, got: {type(lot_data).__name__}")
        if not isinstance(config_data, dict):
            raise ValueError(f"config must be an object, got: {type(config_data).__name__}")

        lot = Lot.from_dict(lot_data)
        config = Config.from_dict(config_data)
        validator.validate(CalculationInput(lots=[lot], config=config))

        calc = lot_calculator.calculate(lot, config)
        breakdown = breakdown_computer.from_calculation(calc, config)

        return jsonify({
            "calculation": asdict(calc),
            "breakdown": asdict(breakdown)
        }), 200

    except (ValueError, TypeError) as e:
        logger.error(f"Validation error: {str(e)}")
        return jsonify({
            "error": str(e),
            "status": "validation_failed"
        }), 400

    except Exception as e:
        logger.error(f"Processing error: {str(e)}")
        return jsonify({
            "error": str(e),
            "status": "failed"
        }), 500


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    app.run(host="0.0.0.0", port=port, debug=False)
