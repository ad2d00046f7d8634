import os
import unittest
import uuid
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, delete
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/0")

from leadforms.db.session import Base, get_db
from leadforms.main import app
from leadforms.models.field_library import FieldLibrary
from leadforms.models.form_template import FormTemplate
from leadforms.models.form_template_field import FormTemplateField
from leadforms.models.site_lead import SiteLead
from leadforms.services.rate_limit import InMemoryRateLimiter


class PublicFormsApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.engine = create_engine(
            "sqlite+pysqlite:///:memory:",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        cls.SessionLocal = sessionmaker(bind=cls.engine, autocommit=False, autoflush=False)
        Base.metadata.create_all(bind=cls.engine)

    @classmethod
    def tearDownClass(cls):
        Base.metadata.drop_all(bind=cls.engine)
        cls.engine.dispose()

    def setUp(self):
        with self.SessionLocal() as db:
            for model in (SiteLead, FormTemplateField, FormTemplate, FieldLibrary):
                db.execute(delete(model))
            db.commit()

            email = FieldLibrary(
                name="email",
                label="Email",
                data_type="email",
                default_placeholder="you@example.com",
                default_validation={"required": True},
                translations={"es": {"label": "Correo electrónico"}},
                category="contact",
            )
            country = FieldLibrary(
                name="country",
                label="Country",
                data_type="select",
                enum_list=["Spain", "France"],
                default_validation={},
                translations={},
            )
            template = FormTemplate(name="Contact", config={})
            inactive = FormTemplate(name="Old", config={}, is_active=False)
            db.add_all([email, country, template, inactive])
            db.flush()
            db.add_all(
                [
                    FormTemplateField(
                        form_template_id=template.id, field_library_id=country.id, is_required=False, order="2"
                    ),
                    FormTemplateField(
                        form_template_id=template.id,
                        field_library_id=email.id,
                        is_required=True,
                        order="1",
                        section="contact",
                    ),
                    FormTemplateField(
                        form_template_id=template.id, field_library_id=uuid.uuid4(), is_required=False, order="3"
                    ),
                ]
            )
            db.commit()
            self.template_id = str(template.id)
            self.inactive_id = str(inactive.id)

        def override_get_db():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)
        self.limiter = InMemoryRateLimiter()

    def tearDown(self):
        self.client.close()
        app.dependency_overrides.clear()

    def test_fields_are_sanitized(self):
        response = self.client.get(f"/api/public/form-templates/{self.template_id}/fields")
        self.assertEqual(response.status_code, 200)
        rows = response.json()
        self.assertEqual(len(rows), 3)

        by_order = {row["order"]: row for row in rows}
        email_entry = by_order["1"]["fieldLibrary"]
        self.assertEqual(email_entry["name"], "email")
        self.assertEqual(email_entry["translations"]["es"]["label"], "Correo electrónico")
        self.assertNotIn("category", email_entry)
        self.assertNotIn("isSystemField", email_entry)
        self.assertNotIn("createdAt", email_entry)
        self.assertEqual(by_order["1"]["section"], "contact")
        self.assertIsNone(by_order["3"]["fieldLibrary"])

    def test_unknown_or_inactive_template_is_404(self):
        for template_id in ("not-a-uuid", str(uuid.uuid4()), self.inactive_id):
            response = self.client.get(f"/api/public/form-templates/{template_id}/fields")
            self.assertEqual(response.status_code, 404, template_id)

    def test_descriptors_are_localized_and_skip_orphans(self):
        response = self.client.get(f"/api/public/form-templates/{self.template_id}/descriptors?lang=es")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["language"], "es")
        names = [item["fieldName"] for item in body["fields"]]
        self.assertEqual(names, ["email", "country"])
        self.assertEqual(body["fields"][0]["resolvedLabel"], "Correo electrónico")
        self.assertTrue(body["fields"][0]["isRequired"])
        self.assertEqual(body["fields"][1]["resolvedOptions"], ["Spain", "France"])
        self.assertEqual(body["fields"][1]["resolvedPlaceholder"], "Select country")
        self.assertEqual(body["fields"][1]["currentValue"], "")

    def test_descriptors_unknown_profile_is_400(self):
        response = self.client.get(f"/api/public/form-templates/{self.template_id}/descriptors?profile=fancy")
        self.assertEqual(response.status_code, 400)

    def test_create_lead_stores_form_data(self):
        with patch("leadforms.api.public.leads.get_rate_limiter", return_value=self.limiter):
            response = self.client.post(
                "/api/public/leads",
                json={
                    "formType": "custom-form",
                    "formTemplateId": self.template_id,
                    "siteId": "main-site",
                    "formData": {"email": "a@b.co", "firstName": "Jo", "country": "Spain"},
                    "email": "a@b.co",
                    "firstName": "Jo",
                },
            )
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["identifier"], "a@b.co")
        self.assertEqual(body["firstName"], "Jo")
        self.assertEqual(body["formData"]["country"], "Spain")
        self.assertEqual(response.headers["RateLimit-Limit"], "20")
        self.assertEqual(response.headers["RateLimit-Remaining"], "19")

        with self.SessionLocal() as db:
            row = db.query(SiteLead).one()
            self.assertEqual(row.form_type, "custom-form")
            self.assertEqual(row.form_template_id, self.template_id)

    def test_create_lead_flat_body(self):
        with patch("leadforms.api.public.leads.get_rate_limiter", return_value=self.limiter):
            response = self.client.post(
                "/api/public/leads", json={"email": "jo@example.com", "company": "Acme", "lastName": "Doe"}
            )
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["siteId"], "main-site")
        self.assertEqual(body["formType"], "contact")
        self.assertEqual(body["lastName"], "Doe")
        self.assertEqual(body["formData"], {"company": "Acme", "lastName": "Doe"})

    def test_create_lead_requires_email(self):
        with patch("leadforms.api.public.leads.get_rate_limiter", return_value=self.limiter):
            response = self.client.post("/api/public/leads", json={"formData": {"firstName": "Jo"}})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Email is required as identifier")

    def test_create_lead_is_rate_limited(self):
        with (
            patch("leadforms.api.public.leads.get_rate_limiter", return_value=self.limiter),
            patch("leadforms.api.public.leads.settings.LEAD_RATE_LIMIT", 1),
        ):
            first = self.client.post("/api/public/leads", json={"email": "a@b.co"})
            second = self.client.post("/api/public/leads", json={"email": "a@b.co"})
        self.assertEqual(first.status_code, 201)
        self.assertEqual(second.status_code, 429)
        self.assertEqual(second.headers["RateLimit-Remaining"], "0")
        self.assertIn("Retry-After", second.headers)

    def test_health_and_request_id(self):
        response = self.client.get("/health", headers={"X-Request-ID": "req-123"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok"})
        self.assertEqual(response.headers["X-Request-ID"], "req-123")
        self.assertEqual(response.headers["X-Content-Type-Options"], "nosniff")


if __name__ == "__main__":
    unittest.main()
