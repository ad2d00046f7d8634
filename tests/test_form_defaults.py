import os
import unittest
from unittest.mock import patch

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/0")

from leadforms.services.form_defaults import default_values
from leadforms.services.form_fields import resolve_field_assignments
from leadforms.services.form_profiles import DYNAMIC_PROFILE, SIMPLE_PROFILE, profile_from_settings


def _fields(*pairs):
    return resolve_field_assignments(
        [
            {
                "id": f"assign-{name}",
                "order": str(index),
                "fieldLibrary": {"id": f"lib-{name}", "name": name, "label": name, "dataType": data_type},
            }
            for index, (name, data_type) in enumerate(pairs)
        ]
    )


class DefaultValuesTests(unittest.TestCase):
    def test_simple_profile_checkbox_and_list(self):
        fields = _fields(("agree", "checkbox"), ("links", "extensible_list"))
        self.assertEqual(default_values(fields, SIMPLE_PROFILE), {"agree": "false", "links": [""]})

    def test_array_default_depends_on_profile(self):
        fields = _fields(("topics", "array"))
        self.assertEqual(default_values(fields, SIMPLE_PROFILE), {"topics": [""]})
        self.assertEqual(default_values(fields, DYNAMIC_PROFILE), {"topics": []})

    def test_scalars_default_to_empty_string(self):
        fields = _fields(("email", "email"), ("country", "select"), ("rating", "stars"))
        self.assertEqual(default_values(fields), {"email": "", "country": "", "rating": ""})

    def test_list_values_are_not_shared_between_calls(self):
        fields = _fields(("links", "extensible_list"))
        first = default_values(fields)
        first["links"].append("changed")
        self.assertEqual(default_values(fields), {"links": [""]})


class ProfileFromSettingsTests(unittest.TestCase):
    def test_named_profile_with_settings_overrides(self):
        with (
            patch("leadforms.services.form_profiles.settings.FORM_FETCH_RETRIES", 4),
            patch("leadforms.services.form_profiles.settings.FORM_FETCH_RETRY_DELAY_SECONDS", 0.5),
            patch("leadforms.services.form_profiles.settings.FORM_ENFORCE_REQUIRED_CHECKBOX", True),
        ):
            profile = profile_from_settings("simple")
        self.assertEqual(profile.name, "simple")
        self.assertTrue(profile.retry_on_load_failure)
        self.assertEqual(profile.load_retries, 4)
        self.assertEqual(profile.load_retry_delay_seconds, 0.5)
        self.assertTrue(profile.enforce_required_checkbox)

    def test_unknown_name_uses_dynamic(self):
        with patch("leadforms.services.form_profiles.settings.FORM_PROFILE", "nonsense"):
            profile = profile_from_settings()
        self.assertEqual(profile.name, "dynamic")
        self.assertFalse(profile.retry_on_load_failure)


if __name__ == "__main__":
    unittest.main()
