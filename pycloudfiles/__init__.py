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

"""
pycloudfiles is a client for Rackspace Cloud Files containers and their CDN
publication settings.

To use it, create a connection from an already issued auth token and the
account's endpoints, either explicitly:

    import pycloudfiles
    conn = pycloudfiles.connect(storage_url=..., cdn_management_url=...,
            auth_token=...)

or from `~/.pycloudfiles.cfg` and the CLOUDFILES_* environment variables:

    conn = pycloudfiles.connect()
    result = conn.get_container("photos")
    if result.ok:
        result.value.make_public()
"""

import logging

from pycloudfiles.config import Settings
from pycloudfiles.version import version

__version__ = version

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Module-level settings shared by every new connection.
settings = Settings()

from pycloudfiles.client import Connection
from pycloudfiles.client import Response
from pycloudfiles.object_storage import CdnConfig
from pycloudfiles.object_storage import CdnDescriptor
from pycloudfiles.object_storage import Container
from pycloudfiles.object_storage import ObjectQueryArgs
from pycloudfiles.results import Error
from pycloudfiles.results import Ok


def get_setting(key):
    """Returns the current value of a setting."""
    return settings.get(key)


def set_setting(key, val):
    """Overrides a setting for connections created from now on."""
    settings.set(key, val)


def set_http_debug(val):
    """Turns logging of every request and response on or off."""
    settings.set("http_debug", val)


def connect(storage_url=None, cdn_management_url=None, auth_token=None,
        **kwargs):
    """
    Returns a Connection. Any argument not passed is read from the settings.
    """
    return Connection(storage_url=storage_url,
            cdn_management_url=cdn_management_url, auth_token=auth_token,
            **kwargs)
