import json
import logging
import unittest

from inventory_api.core.logging import JsonFormatter


def _record(message, *args, **extra):
    record = logging.LogRecord("inventory_api.main", logging.INFO, __file__, 1, message, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class JsonFormatterTest(unittest.TestCase):
    def setUp(self):
        self.formatter = JsonFormatter("Inventory Management API", "test")

    def test_service_context_is_included(self):
        payload = json.loads(self.formatter.format(_record("Stock %s %s", "add", 3)))
        self.assertEqual(payload["message"], "Stock add 3")
        self.assertEqual(payload["service"], "Inventory Management API")
        self.assertEqual(payload["environment"], "test")
        self.assertEqual(payload["level"], "INFO")
        self.assertNotIn("request", payload)

    def test_request_fields_are_grouped(self):
        record = _record(
            "GET /api/products status=200",
            method="GET",
            path="/api/products",
            status_code=200,
            duration_ms=1.5,
            client="testclient",
        )
        payload = json.loads(self.formatter.format(record))
        self.assertEqual(
            payload["request"],
            {
                "method": "GET",
                "path": "/api/products",
                "status_code": 200,
                "duration_ms": 1.5,
                "client": "testclient",
            },
        )


if __name__ == "__main__":
    unittest.main()
