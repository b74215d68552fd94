import datetime as dt
import unittest
from dataclasses import dataclass

import pandas as pd

from rule_schema import utils


@dataclass
class Customer:
    full_name: str
    email: str = ""


class UtilsTests(unittest.TestCase):
    def test_get_field_on_mappings_and_objects(self):
        self.assertEqual(utils._get_field({"a": 1}, "a"), 1)
        self.assertIsNone(utils._get_field({"a": 1}, "b"))
        self.assertEqual(utils._get_field(Customer("Reza"), "full_name"), "Reza")
        self.assertIsNone(utils._get_field(Customer("Reza"), "missing"))
        self.assertIsNone(utils._get_field(None, "a"))

    def test_shape_checks(self):
        for value in ({}, {"a": 1}, Customer("x")):
            self.assertTrue(utils._is_object(value), repr(value))
        for value in (None, "str", 1, 2.5, True, [], (), pd.DataFrame()):
            self.assertFalse(utils._is_object(value), repr(value))

        for value in ([], (1,), pd.DataFrame({"a": [1]})):
            self.assertTrue(utils._is_array(value))
        for value in ("abc", {"a": 1}, None, b"x"):
            self.assertFalse(utils._is_array(value))

    def test_elements(self):
        items = [{"a": 1}, {"a": 2}]
        out = utils._elements(items)
        self.assertIs(out[0], items[0])
        self.assertEqual(utils._elements(pd.DataFrame({"a": [1, 2]})), [{"a": 1}, {"a": 2}])

    def test_json_safe(self):
        value = {
            "when": dt.datetime(2025, 8, 3, 12, 0, tzinfo=dt.timezone.utc),
            "items": ({"n": 1},),
            "customer": Customer("Reza", "r@x.com"),
            "frame": pd.DataFrame({"a": [1]}),
            1: None,
        }
        self.assertEqual(utils._json_safe(value), {
            "when": "2025-08-03T12:00:00+00:00",
            "items": [{"n": 1}],
            "customer": {"full_name": "Reza", "email": "r@x.com"},
            "frame": [{"a": 1}],
            "1": None,
        })


if __name__ == "__main__":
    unittest.main()
