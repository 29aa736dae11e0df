import os
import unittest
from unittest import mock

from nextdns_logs.config import load_settings
from nextdns_logs.errors import ConfigError


class TestLoadSettings(unittest.TestCase):
    def test_defaults(self):
        with mock.patch.dict(os.environ, {"NEXTDNS_API_KEY": "k", "NEXTDNS_PROFILE": "p"}, clear=True):
            s = load_settings()
        self.assertEqual(s.api_url, "https://api.nextdns.io")
        self.assertEqual(s.output_path, "output.log")
        self.assertEqual(s.page_limit, 1000)
        self.assertEqual(s.timeout_sec, 20.0)
        self.assertEqual(s.stream_data_prefix, "data:")
        self.assertEqual(s.stream_data_marker, "timestamp")

    def test_overrides(self):
        env = {
            "NEXTDNS_API_KEY": "k",
            "NEXTDNS_PROFILE": "p",
            "NEXTDNS_API_URL": "http://localhost:8080/",
            "NEXTDNS_PAGE_LIMIT": "250",
            "NEXTDNS_TIMEOUT_SEC": "5.5",
            "NEXTDNS_STREAM_DATA_PREFIX": "",
            "LOG_LEVEL": "debug",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            s = load_settings()
        self.assertEqual(s.api_url, "http://localhost:8080")
        self.assertEqual(s.page_limit, 250)
        self.assertEqual(s.timeout_sec, 5.5)
        self.assertEqual(s.stream_data_prefix, "")
        self.assertEqual(s.log_level, "DEBUG")

    def test_missing_profile(self):
        with mock.patch.dict(os.environ, {"NEXTDNS_API_KEY": "k"}, clear=True):
            with self.assertRaises(ConfigError):
                load_settings()

    def test_bad_numbers(self):
        for name, value in (("NEXTDNS_PAGE_LIMIT", "lots"), ("NEXTDNS_PAGE_LIMIT", "5000"), ("NEXTDNS_TIMEOUT_SEC", "soon")):
            env = {"NEXTDNS_API_KEY": "k", "NEXTDNS_PROFILE": "p", name: value}
            with self.subTest(name=name, value=value), mock.patch.dict(os.environ, env, clear=True):
                with self.assertRaises(ConfigError):
                    load_settings()


if __name__ == "__main__":
    unittest.main()
