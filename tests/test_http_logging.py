import os
import unittest

from fastapi.testclient import TestClient

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/0")

from leadforms.main import app
from leadforms.core.http_logging import request_id_from_header


class HttpLoggingTests(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(app)

    def tearDown(self):
        self.client.close()

    def test_health_has_response_headers_and_request_id(self):
        with self.assertLogs("leadforms.http", level="INFO") as logs:
            response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers.get("x-content-type-options"), "nosniff")
        self.assertEqual(response.headers.get("referrer-policy"), "no-referrer")
        self.assertEqual(response.headers.get("cache-control"), "no-store")

        request_id = response.headers.get("x-request-id")
        self.assertRegex(str(request_id), r"^[a-f0-9]{32}$")
        self.assertIn("GET /health status=200", logs.output[0])
        self.assertIn(f"request_id={request_id}", logs.output[0])

    def test_invalid_request_id_is_replaced(self):
        response = self.client.get("/health", headers={"X-Request-ID": "bad id with spaces"})
        self.assertNotEqual(response.headers.get("x-request-id"), "bad id with spaces")

    def test_request_id_from_header(self):
        self.assertEqual(request_id_from_header(" keep-me_1.0 "), "keep-me_1.0")
        self.assertEqual(len(request_id_from_header(None)), 32)
        self.assertEqual(len(request_id_from_header("x" * 200)), 32)


if __name__ == "__main__":
    unittest.main()
