#!/usr/bin/env python
# -*- coding: utf-8 -*-

import os
import tempfile
import unittest

from mock import patch

import pycloudfiles
from pycloudfiles.config import Settings
import pycloudfiles.exceptions as exc

SAMPLE_CONFIG = """[settings]
storage_url = https://storage.example.com/v1/acct
timeout = 12
http_debug = True
unknown = ignored
"""


class SettingsTest(unittest.TestCase):
    def setUp(self):
        fd, self.cfg_file = tempfile.mkstemp(suffix=".cfg")
        with os.fdopen(fd, "w") as cfg:
            cfg.write(SAMPLE_CONFIG)
        self.env = patch.dict(os.environ, clear=True)
        self.env.start()

    def tearDown(self):
        self.env.stop()
        os.unlink(self.cfg_file)

    def test_defaults(self):
        settings = Settings(config_file="/nonexistent/pycloudfiles.cfg")
        self.assertEqual(settings.get("timeout"), 5)
        self.assertIsNone(settings.get("storage_url"))
        self.assertFalse(settings.get("http_debug"))
        self.assertTrue(settings.get("user_agent").startswith(
                "pycloudfiles/"))

    def test_config_file(self):
        settings = Settings(config_file=self.cfg_file)
        self.assertEqual(settings.get("storage_url"),
                "https://storage.example.com/v1/acct")
        self.assertEqual(settings.get("timeout"), 12.0)
        self.assertTrue(settings.get("http_debug"))

    def test_env_overrides_file(self):
        os.environ["CLOUDFILES_TIMEOUT"] = "2.5"
        os.environ["CLOUDFILES_AUTH_TOKEN"] = "tok"
        settings = Settings(config_file=self.cfg_file)
        self.assertEqual(settings.get("timeout"), 2.5)
        self.assertEqual(settings.get("auth_token"), "tok")

    def test_set_overrides_env(self):
        os.environ["CLOUDFILES_STORAGE_URL"] = "https://env.example.com"
        settings = Settings(config_file=self.cfg_file)
        settings.set("storage_url", "https://set.example.com")
        self.assertEqual(settings.get("storage_url"),
                "https://set.example.com")
        settings.reset()
        self.assertEqual(settings.get("storage_url"),
                "https://env.example.com")

    def test_invalid_key(self):
        settings = Settings(config_file=self.cfg_file)
        self.assertRaises(exc.InvalidSetting, settings.get, "unknown")
        self.assertRaises(exc.InvalidSetting, settings.set, "bogus", 1)

    def test_bad_config_file(self):
        with open(self.cfg_file, "w") as cfg:
            cfg.write("no section here\n")
        self.assertRaises(exc.InvalidSetting, Settings,
                config_file=self.cfg_file)

    def test_module_helpers(self):
        with patch.object(pycloudfiles, "settings",
                Settings(config_file=self.cfg_file)):
            pycloudfiles.set_http_debug(False)
            self.assertFalse(pycloudfiles.get_setting("http_debug"))
            pycloudfiles.set_setting("timeout", 9)
            self.assertEqual(pycloudfiles.get_setting("timeout"), 9)


if __name__ == "__main__":
    unittest.main()
