"""Tests for searchable spec and model file parsing."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from Searchable.core.errors import ConfigurationError
from Searchable.core.model import parse_model_definition
from Searchable.core.spec import JoinSpec, parse_join_spec, parse_search_spec


class TestParseSearchSpec(unittest.TestCase):
    def test_full_mapping(self) -> None:
        spec = parse_search_spec(
            {
                "columns": {"users.name": 10, "locations.city": 2.5},
                "fulltext": {"users.bio": 1},
                "joins": {
                    "locations": ["locations.user_id", "users.id"],
                    "tags": {"first": "tags.user_id", "second": "users.id", "whereIn": ["tags.name", ["a", "b"]]},
                },
                "groupBy": "users.id",
                "mutations": {"users.name": "LOWER"},
                "maxWords": 3,
            }
        )
        self.assertEqual(list(spec.columns), ["users.name", "locations.city"])
        self.assertEqual(spec.fulltext_columns, {"users.bio": 1})
        self.assertEqual(spec.joins["locations"], JoinSpec("locations.user_id", "users.id"))
        self.assertEqual(spec.joins["tags"].where_in, ("tags.name", ("a", "b")))
        self.assertEqual(spec.group_by, ("users.id",))
        self.assertEqual(spec.mutations, {"users.name": "LOWER"})
        self.assertEqual(spec.max_words, 3)

    def test_defaults(self) -> None:
        spec = parse_search_spec({"columns": {"users.name": 1}})
        self.assertEqual(spec.joins, {})
        self.assertIsNone(spec.group_by)
        self.assertIsNone(spec.max_words)

    def test_join_missing_key_pair(self) -> None:
        with self.assertRaisesRegex(ConfigurationError, "Invalid join spec"):
            parse_search_spec({"columns": {}, "joins": {"locations": ["locations.user_id"]}})
        with self.assertRaisesRegex(ConfigurationError, "Invalid join spec"):
            parse_search_spec({"columns": {}, "joins": {"locations": {"first": "a.b"}}})
        with self.assertRaisesRegex(ConfigurationError, "Invalid join spec"):
            parse_search_spec({"columns": {}, "joins": {"locations": "locations.user_id"}})

    def test_join_where_shape(self) -> None:
        join = parse_join_spec({"first": "a.id", "second": "b.a_id", "where": ["a.kind", "=", "x"]}, "joins.a")
        self.assertEqual(join.where, ("a.kind", "=", "x"))
        with self.assertRaisesRegex(ConfigurationError, "where"):
            parse_join_spec({"first": "a.id", "second": "b.a_id", "where": ["a.kind", "x"]}, "joins.a")
        with self.assertRaisesRegex(ConfigurationError, "whereIn"):
            parse_join_spec({"first": "a.id", "second": "b.a_id", "whereIn": ["a.kind", "x"]}, "joins.a")

    def test_join_prefixed(self) -> None:
        join = JoinSpec("locations.user_id", "users.id", where=("locations.city", "=", "x"))
        prefixed = join.prefixed("app_")
        self.assertEqual(prefixed.first, "app_locations.user_id")
        self.assertEqual(prefixed.second, "app_users.id")
        self.assertEqual(prefixed.where, ("app_locations.city", "=", "x"))
        self.assertIs(join.prefixed(""), join)
        in_join = JoinSpec("a.id", "b.a_id", where_in=("a.kind", ("x",))).prefixed("p_")
        self.assertEqual(in_join.where_in, ("p_a.kind", ("x",)))

    def test_negative_column_weight(self) -> None:
        with self.assertRaises(ConfigurationError):
            parse_search_spec({"columns": {"users.name": -1}})

    def test_type_errors_carry_key(self) -> None:
        with self.assertRaisesRegex(TypeError, "searchable\\.maxWords"):
            parse_search_spec({"columns": {}, "maxWords": True})
        with self.assertRaisesRegex(TypeError, "searchable\\.columns"):
            parse_search_spec({"columns": ["users.name"]})


class TestParseModelDefinition(unittest.TestCase):
    def test_model(self) -> None:
        model = parse_model_definition(
            {"table": "users", "connection": "main", "columns": {"users.name": 10}}, "users"
        )
        self.assertEqual(model.table, "users")
        self.assertEqual(model.primary_key, "id")
        self.assertEqual(model.connection, "main")
        self.assertEqual(model.to_searchable_spec().columns, {"users.name": 10})

    def test_missing_table(self) -> None:
        with self.assertRaisesRegex(ValueError, "users\\.table"):
            parse_model_definition({"columns": {}}, "users")


if __name__ == "__main__":
    unittest.main()
