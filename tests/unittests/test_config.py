"""Unit tests for connection configuration helpers."""
import json
import os
import tempfile
import unittest
from unittest.mock import patch
from qb_field.config import REQUIRED_CONFIG_KEYS, load_config, resolve_defaults
from qb_field.field import QBField


class TestLoadConfig(unittest.TestCase):
    """Test config file loading."""

    def write_config(self, config):
        handle, path = tempfile.mkstemp(suffix=".json")
        with os.fdopen(handle, "w") as config_file:
            json.dump(config, config_file)
        self.addCleanup(os.remove, path)
        return path

    def test_load_config(self):
        config = {"realm": "demo", "user_token": "token", "request_timeout": 30}
        path = self.write_config(config)

        self.assertEqual(load_config(path), config)

    def test_missing_required_keys(self):
        path = self.write_config({"realm": "demo"})

        with self.assertRaises(Exception) as context:
            load_config(path)

        self.assertIn("user_token", str(context.exception))

    def test_required_keys(self):
        self.assertEqual(REQUIRED_CONFIG_KEYS, ["realm", "user_token"])


class TestResolveDefaults(unittest.TestCase):
    """Test the environment default resolver."""

    def test_empty_environment(self):
        self.assertEqual(resolve_defaults({}), {
            "quickbase": {"realm": ""},
            "tableId": "",
            "fid": -1,
        })

    def test_environment_values(self):
        defaults = resolve_defaults({
            "QB_REALM": "demo",
            "QB_USERTOKEN": "token",
            "QB_TABLE_ID": "bck7gs3q2",
        })

        self.assertEqual(defaults, {
            "quickbase": {"realm": "demo", "user_token": "token"},
            "tableId": "bck7gs3q2",
            "fid": -1,
        })

    @patch.dict(os.environ, {"QB_REALM": "fromenv"}, clear=True)
    def test_reads_process_environment(self):
        self.assertEqual(resolve_defaults()["quickbase"], {"realm": "fromenv"})

    def test_defaults_feed_field(self):
        defaults = resolve_defaults({"QB_REALM": "demo", "QB_TABLE_ID": "bck7gs3q2"})

        with patch.object(QBField, "defaults", defaults):
            field = QBField()

        self.assertEqual(field.get_table_id(), "bck7gs3q2")
        self.assertEqual(field.get_fid(), -1)
        self.assertEqual(field.to_json()["connectionConfig"], {"realm": "demo"})
