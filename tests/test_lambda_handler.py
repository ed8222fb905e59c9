"""Tests for AWS Lambda handler."""

import base64
import json

from lambda_handler import lambda_handler

PAYLOAD = {
    "config": {
        "security_deposit_type": "notApplicable",
        "emd_type": "notApplicable",
        "mstc_payment_type": "serviceCharge",
        "gst_on_rcm": 0,
        "tds_on_sc": 0,
        "it_tds": 0,
        "tcs_on_gst": 0,
        "mstc_sc_percent": 2,
    },
    "lots": [
        {
            "id": 1,
            "name": "Lambda Test Lot",
            "quantity": 10,
            "bid_value": 100,
            "gst_percent": 18,
            "tcs_percent": 1,
        }
    ],
}


class TestLambdaHandler:
    """Test the Lambda handler routes and responses."""

    def test_health_check(self):
        """GET /health returns healthy status."""
        event = {"httpMethod": "GET", "path": "/health"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["status"] == "healthy"

    def test_api_info(self):
        """GET /api returns API information."""
        event = {"httpMethod": "GET", "path": "/api"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["status"] == "ok"
        assert "endpoints" in body

    def test_cors_preflight(self):
        """OPTIONS requests return CORS headers."""
        event = {"httpMethod": "OPTIONS", "path": "/calculate"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        assert "Access-Control-Allow-Origin" in response["headers"]
        assert "Access-Control-Allow-Methods" in response["headers"]

    def test_not_found(self):
        """Unknown paths return 404."""
        event = {"httpMethod": "GET", "path": "/unknown"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 404

    def test_calculate_success(self):
        """POST /calculate processes valid lots."""
        event = {"httpMethod": "POST", "path": "/calculate", "body": json.dumps(PAYLOAD)}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["lots"][0]["total"] == 1191.8
        assert body["breakdown"]["rows"][0]["lot_name"] == "Lambda Test Lot"

    def test_http_api_event_format(self):
        """HTTP API (v2) events use requestContext and rawPath."""
        event = {
            "requestContext": {"http": {"method": "POST"}},
            "rawPath": "/calculate",
            "body": json.dumps(PAYLOAD),
        }
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200

    def test_base64_body(self):
        """Base64 encoded bodies are decoded."""
        encoded = base64.b64encode(json.dumps(PAYLOAD).encode("utf-8")).decode("ascii")
        event = {"httpMethod": "POST", "path": "/calculate", "body": encoded, "isBase64Encoded": True}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200

    def test_dict_body(self):
        """Direct invocations may pass the body as a dict."""
        event = {"httpMethod": "POST", "path": "/calculate", "body": PAYLOAD}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 200

    def test_empty_body(self):
        event = {"httpMethod": "POST", "path": "/calculate", "body": ""}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400

    def test_invalid_json(self):
        """Malformed JSON returns 400."""
        event = {"httpMethod": "POST", "path": "/calculate", "body": "{not json"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
        body = json.loads(response["body"])
        assert "Invalid JSON" in body["error"]

    def test_validation_error(self):
        """Bad config values return 400 validation_failed."""
        payload = {"config": {"emd_type": "monthly"}, "lots": []}
        event = {"httpMethod": "POST", "path": "/calculate", "body": json.dumps(payload)}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
        body = json.loads(response["body"])
        assert body["status"] == "validation_failed"

    def test_non_object_body(self):
        event = {"httpMethod": "POST", "path": "/calculate", "body": "[1, 2]"}
        response = lambda_handler(event, None)

        assert response["statusCode"] == 400
