"""End-to-end searches executed on SQLite."""

import dataclasses
import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from Searchable.compiler import get_dialect
from Searchable.config import load_config_with_defaults
from Searchable.core.model import ModelDefinition
from Searchable.core.spec import JoinSpec, SearchSpec
from Searchable.services import Connection, create_searcher
from Searchable.storage import DatabaseManager, QueryBuilder

USERS = [
    (1, "John Smith", "john@example.com", 1),
    (2, "Jane Doe", "jane@example.com", 1),
    (3, "Johnny Appleseed", "apple@example.com", 0),
    (4, "Bob Stone", "bob@example.com", 1),
]
LOCATIONS = [
    (1, 1, "Boston"),
    (2, 3, "Denver"),
]


class TestSqliteSearch(unittest.TestCase):
    def setUp(self) -> None:
        self.db = DatabaseManager(":memory:")
        conn = self.db.get_connection()
        conn.executescript(
            """
            CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT, email TEXT, active INTEGER);
            CREATE TABLE locations (id INTEGER PRIMARY KEY, user_id INTEGER, city TEXT);
            """
        )
        conn.executemany("INSERT INTO users VALUES (?, ?, ?, ?)", USERS)
        conn.executemany("INSERT INTO locations VALUES (?, ?, ?)", LOCATIONS)
        # Default config uses the sqlite connection.
        self.searcher = create_searcher(load_config_with_defaults())
        self.users = ModelDefinition(
            table="users",
            spec=SearchSpec(columns={"users.name": 10, "users.email": 5}),
        )
        self.with_city = ModelDefinition(
            table="users",
            spec=SearchSpec(
                columns={"users.name": 10, "locations.city": 5},
                joins={"locations": JoinSpec("locations.user_id", "users.id")},
            ),
        )

    def tearDown(self) -> None:
        self.db.close()

    def _ids(self, query: QueryBuilder) -> list[int]:
        return [row["id"] for row in self.db.run(query)]

    def test_ranks_matching_rows(self) -> None:
        query = self.searcher.search(self.users, QueryBuilder("users"), "john")
        rows = self.db.run(query)
        self.assertEqual([row["id"] for row in rows], [1, 3])
        self.assertGreater(rows[0]["relevance"], rows[1]["relevance"])
        self.assertEqual(rows[0]["name"], "John Smith")

    def test_threshold_excludes_weak_rows(self) -> None:
        compiled = self.searcher.compile(self.users, "john")
        assert compiled is not None
        self.assertEqual(compiled.threshold, 52.78)
        self.assertNotIn(2, self._ids(self.searcher.search(self.users, QueryBuilder("users"), "john")))

    def test_empty_search_returns_all_rows(self) -> None:
        query = self.searcher.search(self.users, QueryBuilder("users"), "  ")
        self.assertEqual(self._ids(query), [1, 2, 3, 4])

    def test_caller_filter_inside_and_outside(self) -> None:
        query = QueryBuilder("users").where("users.active", "=", 1)
        self.assertEqual(self._ids(self.searcher.search(self.users, query, "john")), [1])

    def test_outer_query_can_filter_on_relevance(self) -> None:
        query = self.searcher.search(self.users, QueryBuilder("users"), "john")
        query.where("relevance", ">", 1500)
        self.assertEqual(self._ids(query), [1])

    def test_restriction(self) -> None:
        query = self.searcher.search(
            self.users,
            QueryBuilder("users"),
            "john",
            restriction=lambda q: q.where("users.id", "!=", 1),
        )
        self.assertEqual(self._ids(query), [3])

    def test_search_joined_column(self) -> None:
        query = self.searcher.search(self.with_city, QueryBuilder("users"), "denver")
        self.assertEqual(self._ids(query), [3])

    def test_join_refinement_binding(self) -> None:
        model = ModelDefinition(
            table="users",
            spec=SearchSpec(
                columns={"users.name": 10, "locations.city": 5},
                joins={"locations": JoinSpec("locations.user_id", "users.id", where=("locations.city", "!=", "Denver"))},
            ),
        )
        query = self.searcher.search(model, QueryBuilder("users"), "denver")
        self.assertEqual(self._ids(query), [])
        query = self.searcher.search(model, QueryBuilder("users"), "boston")
        # "Bob Stone" contains b-o-s-t-o-n in order
        self.assertEqual(self._ids(query), [1, 4])

    def test_phone_number_search(self) -> None:
        conn = self.db.get_connection()
        conn.execute("CREATE TABLE contacts (id INTEGER PRIMARY KEY, phone TEXT)")
        conn.executemany("INSERT INTO contacts VALUES (?, ?)", [(1, "5551234567"), (2, "5559876543")])
        model = ModelDefinition(table="contacts", spec=SearchSpec(columns={"contacts.phone": 10}))
        query = self.searcher.search(model, QueryBuilder("contacts"), "(555) 123-4567")
        self.assertEqual(self._ids(query), [1])

    def test_caller_select_bindings_are_replaced(self) -> None:
        query = QueryBuilder("users").add_select_raw("? as tag", ["x"])
        query = self.searcher.search(self.users, query, "john")
        rows = self.db.run(query)
        self.assertEqual([row["id"] for row in rows], [1, 3])
        self.assertNotIn("tag", rows[0].keys())

    def test_prefixed_tables_with_join(self) -> None:
        conn = self.db.get_connection()
        conn.executescript(
            """
            CREATE TABLE app_users (id INTEGER PRIMARY KEY, name TEXT, email TEXT, active INTEGER);
            CREATE TABLE app_locations (id INTEGER PRIMARY KEY, user_id INTEGER, city TEXT);
            """
        )
        conn.executemany("INSERT INTO app_users VALUES (?, ?, ?, ?)", USERS)
        conn.executemany("INSERT INTO app_locations VALUES (?, ?, ?)", LOCATIONS)
        searcher = dataclasses.replace(
            self.searcher,
            connections={"sqlite": Connection(dialect=get_dialect("sqlite"), prefix="app_")},
        )
        model = ModelDefinition(
            table="users",
            spec=SearchSpec(
                columns={"users.name": 10, "locations.city": 5},
                joins={"locations": JoinSpec("locations.user_id", "users.id", where=("locations.city", "!=", "Denver"))},
            ),
        )

        query = searcher.search(model, QueryBuilder("app_users"), "boston")
        sql = query.to_sql()
        self.assertIn("left join app_locations on app_locations.user_id = app_users.id and app_locations.city != ?", sql)
        self.assertIn("group by app_users.id, app_locations.city", sql)
        self.assertEqual(self._ids(query), [1, 4])

        grouped = dataclasses.replace(model, spec=dataclasses.replace(model.spec, group_by=("users.id",)))
        query = searcher.search(grouped, QueryBuilder("app_users"), "denver")
        self.assertIn("group by app_users.id having", query.to_sql())
        self.assertEqual(self._ids(query), [])


if __name__ == "__main__":
    unittest.main()
