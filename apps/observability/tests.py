"""
Tests for health probes and request logging middleware.
"""
from unittest.mock import patch

from django.db import DatabaseError
from django.test import Client, TestCase


class HealthEndpointsTest(TestCase):
    """Test health check endpoints."""

    def setUp(self):
        self.client = Client()

    def test_healthz_returns_ok(self):
        response = self.client.get("/healthz")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "ok")

    def test_readyz_returns_ok_when_db_is_reachable(self):
        response = self.client.get("/readyz")
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["status"], "ok")
        self.assertTrue(data["db"])

    def test_readyz_reports_degraded_when_db_fails(self):
        with patch("apps.observability.views.health.connection") as mock_connection:
            mock_connection.cursor.side_effect = DatabaseError("down")
            response = self.client.get("/readyz")
        self.assertEqual(response.status_code, 503)
        self.assertFalse(response.json()["db"])

    def test_healthz_rejects_post(self):
        response = self.client.post("/healthz")
        self.assertEqual(response.status_code, 405)


class RequestLogMiddlewareTest(TestCase):
    def setUp(self):
        self.client = Client()

    def test_request_id_added_to_response(self):
        response = self.client.get("/healthz")
        self.assertIn("X-Request-Id", response)
        self.assertEqual(len(response["X-Request-Id"]), 32)

    def test_incoming_request_id_is_preserved(self):
        response = self.client.get("/healthz", HTTP_X_REQUEST_ID="abc-123")
        self.assertEqual(response["X-Request-Id"], "abc-123")

    def test_request_is_logged(self):
        with self.assertLogs("clothing.request", level="INFO") as captured:
            self.client.get("/healthz")
        self.assertTrue(any("GET /healthz -> 200" in line for line in captured.output))
