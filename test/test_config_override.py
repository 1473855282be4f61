"""Tests for config override behavior with defaults."""

import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SearchAssembler.config import load_config_with_defaults


_BASE_YAML = """
log:
  level: INFO
  to_file: false
  dir: log

tokenizer:
  min_size: 1

index:
  put_limit: 200
  max_attempts: 5
  retry_base_delay: 0.5
  retry_max_delay: 10.0
  page_size: 20

queries:
  - NAME: base
    TEXT: base query
"""


class TestConfigOverride(unittest.TestCase):
    def test_override_merges_with_defaults(self) -> None:
        override_yaml = """
log:
  level: DEBUG

index:
  put_limit: 50

queries:
  - NAME: override
    TRUE: [published]
"""
        with tempfile.TemporaryDirectory() as tmp:
            override_path = Path(tmp) / "override.yml"
            override_path.write_text(override_yaml, encoding="utf-8")

            cfg = load_config_with_defaults(override_path, _defaults_text=_BASE_YAML)

        self.assertEqual(cfg.runtime.level, "DEBUG")
        self.assertEqual(cfg.index.put_limit, 50)
        self.assertEqual(cfg.index.max_attempts, 5)
        self.assertEqual(cfg.tokenizer.min_size, 1)
        self.assertEqual(len(cfg.query.queries), 1)
        self.assertEqual(cfg.query.queries[0].name, "override")

    def test_empty_override_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            override_path = Path(tmp) / "override.yml"
            override_path.write_text("{}", encoding="utf-8")

            cfg = load_config_with_defaults(override_path, _defaults_text=_BASE_YAML)

        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertEqual(cfg.index.put_limit, 200)
        self.assertEqual(len(cfg.query.queries), 1)
        self.assertEqual(cfg.query.queries[0].name, "base")
        self.assertEqual(cfg.query.queries[0].text, ("base query",))

    def test_defaults_file_is_read(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            default_path = Path(tmp) / "default.yml"
            default_path.write_text(_BASE_YAML, encoding="utf-8")
            override_path = Path(tmp) / "override.yml"
            override_path.write_text("tokenizer:\n  min_size: 4\n", encoding="utf-8")

            cfg = load_config_with_defaults(override_path, default_path=default_path)

        self.assertEqual(cfg.tokenizer.min_size, 4)
        self.assertEqual(cfg.query.queries[0].name, "base")

    def test_root_must_be_mapping(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            override_path = Path(tmp) / "override.yml"
            override_path.write_text("- a\n- b\n", encoding="utf-8")

            with self.assertRaisesRegex(ValueError, "Config root must be a mapping"):
                load_config_with_defaults(override_path, _defaults_text=_BASE_YAML)


if __name__ == "__main__":
    unittest.main()
