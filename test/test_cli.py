"""Tests for the SearchAssembler CLI."""

from __future__ import annotations

import json
import sys
import tempfile
import unittest
from pathlib import Path

from click.testing import CliRunner

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SearchAssembler.cli import cli


_CONFIG_YAML = """
log:
  level: ERROR
  to_file: false
  dir: log

tokenizer:
  min_size: 3

queries:
  - NAME: active
    TRUE: [active]
  - NAME: status
    FIELDS:
      status:
        OR: [a, b]
"""


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.config_path = Path(self._tmp.name) / "config.yml"
        self.config_path.write_text(_CONFIG_YAML, encoding="utf-8")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _invoke(self, *args: str):
        return CliRunner().invoke(cli, ["--config", str(self.config_path), *args])

    def test_compile_prints_queries(self) -> None:
        result = self._invoke("compile")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('active:"1"\n', result.output)
        self.assertIn('(status:"a" OR status:"b")\n', result.output)

    def test_compile_json(self) -> None:
        result = self._invoke("compile", "--json")
        self.assertEqual(result.exit_code, 0, result.output)
        start = result.output.index("[")
        payload = json.loads(result.output[start:])
        self.assertEqual(
            payload,
            [
                {"name": "active", "query": 'active:"1"'},
                {"name": "status", "query": '(status:"a" OR status:"b")'},
            ],
        )

    def test_tokenize_uses_config_min_size(self) -> None:
        result = self._invoke("tokenize", "cat tests")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("cat tes test tests est ests sts \n", result.output)

    def test_tokenize_min_size_option(self) -> None:
        result = self._invoke("tokenize", "abc", "--min-size", "2")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("ab abc bc \n", result.output)

    def test_tokenize_rejects_zero_min_size(self) -> None:
        result = self._invoke("tokenize", "abc", "--min-size", "0")
        self.assertNotEqual(result.exit_code, 0)

    def test_missing_config_fails(self) -> None:
        result = CliRunner().invoke(cli, ["--config", str(Path(self._tmp.name) / "missing.yml"), "compile"])
        self.assertNotEqual(result.exit_code, 0)


if __name__ == "__main__":
    unittest.main()
