"""CLI tests using click's test runner and a temporary SQLite database."""

import json
import sqlite3
import sys
import tempfile
import unittest
from pathlib import Path

from click.testing import CliRunner

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from Searchable.cli.ui import cli

MODEL_YAML = """
table: users
columns:
  users.name: 10
  users.email: 5
"""


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        tmp = Path(self._tmp.name)
        self.db_path = tmp / "app.db"
        conn = sqlite3.connect(self.db_path)
        conn.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT, email TEXT)")
        conn.executemany(
            "INSERT INTO users VALUES (?, ?, ?)",
            [(1, "John Smith", "john@example.com"), (2, "Jane Doe", "jane@example.com")],
        )
        conn.commit()
        conn.close()

        self.config_path = tmp / "config.yml"
        self.config_path.write_text(
            "log:\n"
            "  level: WARNING\n"
            "database:\n"
            "  default: sqlite\n"
            "  connections:\n"
            "    sqlite:\n"
            "      driver: sqlite\n"
            f"      path: {self.db_path.as_posix()}\n"
            "      path_env: SEARCHABLE_CLI_TEST_UNSET\n"
            "    warehouse:\n"
            "      driver: mysql\n",
            encoding="utf-8",
        )
        self.model_path = tmp / "users.yml"
        self.model_path.write_text(MODEL_YAML, encoding="utf-8")
        self.runner = CliRunner()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _invoke(self, *args: str):
        return self.runner.invoke(cli, ["--config", str(self.config_path), *args])

    def test_compile_prints_sql_and_bindings(self) -> None:
        result = self._invoke("compile", str(self.model_path), "john")
        self.assertEqual(result.exit_code, 0, result.output)
        sql, bindings = result.stdout.strip().splitlines()
        self.assertTrue(sql.startswith("select * from (select users.*, ("))
        self.assertTrue(sql.endswith(") as users"))
        self.assertEqual(json.loads(bindings)[0], "john%")

    def test_compile_empty_search_prints_plain_query(self) -> None:
        result = self._invoke("compile", str(self.model_path), "  ")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.stdout.strip().splitlines(), ["select * from users", "[]"])

    def test_search_json_output(self) -> None:
        result = self._invoke("search", str(self.model_path), "john", "--format", "json")
        self.assertEqual(result.exit_code, 0, result.output)
        rows = json.loads(result.stdout)
        self.assertEqual([row["id"] for row in rows], [1])
        self.assertIn("relevance", rows[0])

    def test_search_text_output(self) -> None:
        result = self._invoke("search", str(self.model_path), "john", "--limit", "1")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("name=John Smith", result.stdout)

    def test_search_requires_sqlite_connection(self) -> None:
        self.model_path.write_text(MODEL_YAML + "connection: warehouse\n", encoding="utf-8")
        result = self._invoke("search", str(self.model_path), "john")
        self.assertNotEqual(result.exit_code, 0)

    def test_unknown_matcher_in_config_fails(self) -> None:
        self.config_path.write_text("search:\n  matchers:\n    nopeMatcher: 1\n", encoding="utf-8")
        result = self._invoke("compile", str(self.model_path), "john")
        self.assertNotEqual(result.exit_code, 0)


if __name__ == "__main__":
    unittest.main()
