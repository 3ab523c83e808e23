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
Stand-ins for the network-facing pieces, used by the unit tests.
"""

from requests.structures import CaseInsensitiveDict

from pycloudfiles.client import Connection
from pycloudfiles.client import Response
from pycloudfiles.object_storage import CdnDescriptor
from pycloudfiles.object_storage import Container
import pycloudfiles.utils as utils


def make_response(status_code, body="", headers=None):
    return Response(status_code, CaseInsensitiveDict(headers or {}), body)


class FakeResponse(object):
    """Looks enough like a `requests.Response` for Connection."""
    def __init__(self, status_code=200, text="", headers=None):
        self.status_code = status_code
        self.text = text
        self.headers = CaseInsensitiveDict(headers or {})


class FakeConnection(Connection):
    """
    A Connection that never touches the network. Responses queued with
    `queue()` are handed out in order, one per request; every request is
    recorded in `requests` as (endpoint, method, path, headers).
    """
    def __init__(self, *args, **kwargs):
        kwargs.setdefault("storage_url", "https://storage.example.com/v1/acct")
        kwargs.setdefault("cdn_management_url",
                "https://cdn.example.com/v1/acct")
        kwargs.setdefault("auth_token", utils.random_ascii())
        super(FakeConnection, self).__init__(*args, **kwargs)
        self.requests = []
        self._responses = []


    def queue(self, *outcomes):
        """
        Each outcome is a status code, a (status, body) or (status, body,
        headers) tuple, or an outcome object returned as is.
        """
        for outcome in outcomes:
            if isinstance(outcome, int):
                outcome = make_response(outcome)
            elif isinstance(outcome, tuple) and not isinstance(outcome,
                    Response):
                outcome = make_response(*outcome)
            self._responses.append(outcome)


    def _request(self, base_url, method, path, headers=None):
        endpoint = "cdn" if base_url == self.cdn_management_url else "storage"
        self.requests.append((endpoint, method, path, dict(headers or {})))
        return self._responses.pop(0)


class FakeContainer(Container):
    def __init__(self, connection=None, name=None, nbytes=None, count=None,
            cdn_details=None):
        connection = connection or FakeConnection()
        name = name or utils.random_unicode()
        nbytes = 42 if nbytes is None else nbytes
        count = 3 if count is None else count
        super(FakeContainer, self).__init__(connection, name, nbytes, count,
                cdn_details or CdnDescriptor())
