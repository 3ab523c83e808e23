#!/usr/bin/env python
# -*- coding: utf-8 -*-

# Copyright 2014 Rackspace

# All Rights Reserved.
#
#    Licensed under the Apache License, Version 2.0 (the "License"); you may
#    not use this file except in compliance with the License. You may obtain
#    a copy of the License at
#
#         http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
#    WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
#    License for the specific language governing permissions and limitations
#    under the License.

import configparser
import os

import pycloudfiles.exceptions as exc
import pycloudfiles.utils as utils
from pycloudfiles.version import version

CONFIG_FILE = os.path.expanduser("~/.pycloudfiles.cfg")
CONFIG_SECTION = "settings"


class Settings(object):
    """
    Holds the configuration for new connections. Values come from the
    defaults below, then the config file, then the environment; anything set
    explicitly with `set()` wins over all of them.
    """
    env_dct = {
            "storage_url": "CLOUDFILES_STORAGE_URL",
            "cdn_management_url": "CLOUDFILES_CDN_URL",
            "auth_token": "CLOUDFILES_AUTH_TOKEN",
            "timeout": "CLOUDFILES_TIMEOUT",
            "user_agent": "CLOUDFILES_USER_AGENT",
            "http_debug": "CLOUDFILES_HTTP_DEBUG",
            }
    _defaults = {
            "storage_url": None,
            "cdn_management_url": None,
            "auth_token": None,
            "timeout": 5,
            "user_agent": "pycloudfiles/%s" % version,
            "http_debug": False,
            }
    _converters = {
            "timeout": float,
            "http_debug": utils.to_bool,
            }

    def __init__(self, config_file=None):
        self._file_settings = {}
        self._explicit = {}
        config_file = config_file or os.environ.get("CLOUDFILES_CONFIG_FILE",
                CONFIG_FILE)
        if os.path.exists(config_file):
            self.read_config(config_file)


    def _check_key(self, key):
        if key not in self._defaults:
            raise exc.InvalidSetting(details="'%s' is not a valid setting. "
                    "Valid settings are: %s" % (key,
                    ", ".join(sorted(self._defaults))))


    def get(self, key):
        """
        Returns the value for the specified key.
        """
        self._check_key(key)
        if key in self._explicit:
            return self._explicit[key]
        env_val = os.environ.get(self.env_dct[key])
        if env_val is not None:
            return self._convert(key, env_val)
        if key in self._file_settings:
            return self._file_settings[key]
        return self._defaults[key]


    def set(self, key, val):
        """
        Sets the value for the specified key, overriding the config file and
        the environment.
        """
        self._check_key(key)
        self._explicit[key] = val


    def reset(self):
        """Discards every value set with `set()`."""
        self._explicit = {}


    def _convert(self, key, val):
        converter = self._converters.get(key)
        if converter is None:
            return val
        return converter(val)


    def read_config(self, config_file):
        """
        Parses the specified configuration file and stores the values. Keys
        that are not known settings are ignored.
        """
        cfg = configparser.ConfigParser()
        try:
            cfg.read(config_file)
        except configparser.MissingSectionHeaderError as e:
            # The file exists, but doesn't have the correct format.
            raise exc.InvalidSetting(details="The config file '%s' is not "
                    "valid: %s" % (config_file, e))
        if not cfg.has_section(CONFIG_SECTION):
            return
        for key in self._defaults:
            if cfg.has_option(CONFIG_SECTION, key):
                raw = cfg.get(CONFIG_SECTION, key)
                self._file_settings[key] = self._convert(key, raw)
