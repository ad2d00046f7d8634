import json
import os
import unittest

import httpx

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/0")

from leadforms.services.form_transport import FieldFetchError, FormApiClient, LeadSubmissionError


class FormApiClientTests(unittest.IsolatedAsyncioTestCase):
    def _client(self, handler):
        self.requests = []

        def _record(request):
            self.requests.append(request)
            return handler(request)

        return FormApiClient("http://forms.test/", transport=httpx.MockTransport(_record))

    async def test_fetch_field_assignments(self):
        items = [{"id": "a1", "fieldLibrary": {"name": "email", "dataType": "email"}}]
        client = self._client(lambda request: httpx.Response(200, json=items))

        result = await client.fetch_field_assignments("tpl-1")

        self.assertEqual(result, items)
        self.assertEqual(self.requests[0].method, "GET")
        self.assertEqual(str(self.requests[0].url), "http://forms.test/api/public/form-templates/tpl-1/fields")

    async def test_fetch_error_status_raises_with_detail(self):
        client = self._client(lambda request: httpx.Response(404, json={"detail": "Form template not found"}))
        with self.assertRaises(FieldFetchError) as ctx:
            await client.fetch_field_assignments("tpl-1")
        self.assertEqual(str(ctx.exception), "Form template not found")

    async def test_fetch_non_list_body_raises(self):
        client = self._client(lambda request: httpx.Response(200, json={"fields": []}))
        with self.assertRaises(FieldFetchError):
            await client.fetch_field_assignments("tpl-1")

    async def test_fetch_network_error_raises(self):
        def _fail(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = self._client(_fail)
        with self.assertRaises(FieldFetchError):
            await client.fetch_field_assignments("tpl-1")

    async def test_submit_lead_posts_json(self):
        client = self._client(lambda request: httpx.Response(201, json={"id": "lead-1"}))
        payload = {"formType": "custom-form", "email": "a@b.co", "formData": {"email": "a@b.co"}}

        ack = await client.submit_lead(payload)

        self.assertEqual(ack, {"id": "lead-1"})
        self.assertEqual(self.requests[0].method, "POST")
        self.assertEqual(self.requests[0].url.path, "/api/public/leads")
        self.assertEqual(json.loads(self.requests[0].content), payload)

    async def test_submit_lead_rejection_raises(self):
        client = self._client(lambda request: httpx.Response(400, json={"detail": "Email is required as identifier"}))
        with self.assertRaises(LeadSubmissionError) as ctx:
            await client.submit_lead({"formData": {}})
        self.assertEqual(str(ctx.exception), "Email is required as identifier")

    async def test_submit_lead_plain_error_body(self):
        client = self._client(lambda request: httpx.Response(502, text="bad gateway"))
        with self.assertRaises(LeadSubmissionError) as ctx:
            await client.submit_lead({"email": "a@b.co"})
        self.assertEqual(str(ctx.exception), "HTTP 502")


if __name__ == "__main__":
    unittest.main()
