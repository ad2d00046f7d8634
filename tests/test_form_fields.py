import os
import unittest

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/0")

from leadforms.services.field_types import DataType
from leadforms.services.form_fields import parse_order, resolve_field_assignments


def _assignment(name, data_type="text", *, order="0", library=True):
    item = {
        "id": f"assign-{name}",
        "fieldLibraryId": f"lib-{name}",
        "isRequired": False,
        "order": order,
        "customValidation": None,
    }
    item["fieldLibrary"] = (
        {"id": f"lib-{name}", "name": name, "label": name.title(), "dataType": data_type} if library else None
    )
    return item


class ResolveFieldAssignmentsTests(unittest.TestCase):
    def test_orphaned_assignment_is_dropped_without_error(self):
        with self.assertLogs("leadforms.forms", level="WARNING") as logs:
            fields = resolve_field_assignments([_assignment("email", "email"), _assignment("ghost", library=False)])
        self.assertEqual([item.name for item in fields], ["email"])
        self.assertIn("without library entry", logs.output[0])

    def test_empty_name_and_duplicates_are_dropped(self):
        items = [_assignment("email", "email"), _assignment("", "text"), _assignment("email", "text", order="5")]
        with self.assertLogs("leadforms.forms", level="WARNING"):
            fields = resolve_field_assignments(items)
        self.assertEqual(len(fields), 1)
        self.assertEqual(fields[0].data_type, DataType.EMAIL)

    def test_field_name_is_stripped(self):
        with self.assertLogs("leadforms.forms", level="WARNING"):
            fields = resolve_field_assignments([_assignment(" email ", "email"), _assignment("email", "text")])
        self.assertEqual([item.name for item in fields], ["email"])
        self.assertEqual(fields[0].entry.name, "email")
        self.assertEqual(fields[0].data_type, DataType.EMAIL)

    def test_unparseable_assignment_is_dropped(self):
        broken = _assignment("email")
        broken["fieldLibrary"] = "not-an-object"
        with self.assertLogs("leadforms.forms", level="WARNING"):
            fields = resolve_field_assignments([broken, _assignment("phone", "phone")])
        self.assertEqual([item.name for item in fields], ["phone"])

    def test_sorted_by_numeric_order_and_stable(self):
        items = [
            _assignment("c", order="10"),
            _assignment("a", order="2"),
            _assignment("b", order="2"),
            _assignment("d", order="x"),
        ]
        fields = resolve_field_assignments(items)
        self.assertEqual([item.name for item in fields], ["d", "a", "b", "c"])

    def test_none_input_yields_empty_tuple(self):
        self.assertEqual(resolve_field_assignments(None), ())

    def test_unknown_data_type_maps_to_unknown(self):
        fields = resolve_field_assignments([_assignment("rating", "stars")])
        self.assertEqual(fields[0].data_type, DataType.UNKNOWN)

    def test_validation_merges_custom_over_default(self):
        item = _assignment("bio", "textarea")
        item["fieldLibrary"]["defaultValidation"] = {"minLength": 3, "maxLength": 100}
        item["customValidation"] = {"maxLength": 10}
        field_item = resolve_field_assignments([item])[0]
        self.assertEqual(field_item.validation.min_length, 3)
        self.assertEqual(field_item.validation.max_length, 10)

    def test_placeholder_key_is_custom_placeholder(self):
        item = _assignment("company")
        item["placeholder"] = "Acme Inc."
        field_item = resolve_field_assignments([item])[0]
        self.assertEqual(field_item.assignment.custom_placeholder, "Acme Inc.")


class ParseOrderTests(unittest.TestCase):
    def test_leading_integer(self):
        self.assertEqual(parse_order("12"), 12)
        self.assertEqual(parse_order(" 7abc"), 7)
        self.assertEqual(parse_order("-3"), -3)
        self.assertEqual(parse_order(4), 4)

    def test_non_numeric_is_zero(self):
        self.assertEqual(parse_order(""), 0)
        self.assertEqual(parse_order(None), 0)
        self.assertEqual(parse_order("abc"), 0)


if __name__ == "__main__":
    unittest.main()
