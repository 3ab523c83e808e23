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
The connection collaborator: every HTTP round trip made against the storage
and CDN management endpoints goes through a `Connection`.

A connection is handed the endpoint URLs and an already issued auth token;
obtaining the token is the caller's business. Each request is a single
blocking `requests` call. Nothing is retried, and an HTTP error status is
returned as a `Response` rather than raised, so that callers can map it to a
result. Transport failures are returned as `results.Error` of kind
`TRANSPORT`, with the original `requests` exception attached.
"""

from collections import namedtuple
import logging

import requests

import pycloudfiles
import pycloudfiles.exceptions as exc
from pycloudfiles.object_storage import CdnDescriptor
from pycloudfiles.object_storage import Container
from pycloudfiles import results
from pycloudfiles.results import Error
from pycloudfiles.results import Ok
import pycloudfiles.utils as utils

logger = logging.getLogger(__name__)

# Statuses that carry container information in their headers.
INFO_CODES = (200, 204)
CREATED_CODES = (201, 202)

Response = namedtuple("Response", ["status_code", "headers", "body"])


def http_log_req(method, uri, headers):
    """
    Logs a request as the equivalent curl command line. The auth token is
    masked.
    """
    string_parts = ["curl -i -X %s" % method]
    for key, val in headers.items():
        if key.lower() == "x-auth-token":
            val = "<masked>"
        string_parts.append("-H '%s: %s'" % (key, val))
    string_parts.append(uri)
    logger.debug("\nREQ: %s\n", " ".join(string_parts))


def http_log_resp(resp, body):
    """Logs the status, headers and body of a response."""
    logger.debug("RESP: %s %s\n", resp.status_code, resp.headers)
    if body:
        logger.debug("RESP BODY: %s", body)


class Connection(object):
    """
    Performs authenticated requests against one storage account and its CDN
    management service. Any argument left out is read from
    `pycloudfiles.settings`.
    """
    def __init__(self, storage_url=None, cdn_management_url=None,
            auth_token=None, timeout=None, user_agent=None, http_debug=None):
        settings = pycloudfiles.settings
        self.storage_url = storage_url or settings.get("storage_url")
        self.cdn_management_url = (cdn_management_url or
                settings.get("cdn_management_url"))
        self.auth_token = auth_token or settings.get("auth_token")
        self.timeout = timeout if timeout is not None else settings.get(
                "timeout")
        self.user_agent = user_agent or settings.get("user_agent")
        if http_debug is None:
            http_debug = settings.get("http_debug")
        self.http_debug = http_debug
        if not self.storage_url:
            raise exc.MissingConfiguration(details="No storage URL has been "
                    "supplied or configured.")
        if not self.auth_token:
            raise exc.MissingConfiguration(details="No auth token has been "
                    "supplied or configured.")
        self.storage_url = self.storage_url.rstrip("/")
        if self.cdn_management_url:
            self.cdn_management_url = self.cdn_management_url.rstrip("/")


    def __repr__(self):
        return "<Connection %s>" % self.storage_url


    def _request(self, base_url, method, path, headers=None):
        uri = "%s%s" % (base_url, path)
        hdrs = {"X-Auth-Token": self.auth_token,
                "User-Agent": self.user_agent,
                }
        if headers:
            hdrs.update(headers)
        if self.http_debug:
            http_log_req(method, uri, hdrs)
        try:
            resp = requests.request(method, uri, headers=hdrs,
                    timeout=self.timeout, allow_redirects=False)
        except requests.RequestException as e:
            logger.debug("%s %s failed: %s", method, uri, e)
            return results.transport_error(e)
        body = resp.text
        if self.http_debug:
            http_log_resp(resp, body)
        return Response(resp.status_code, resp.headers, body)


    def send_storage_request(self, method, path, headers=None):
        """
        Sends a request to the storage endpoint. Returns a `Response`, or an
        `Error` of kind TRANSPORT if no response was received.
        """
        return self._request(self.storage_url, method, path, headers=headers)


    def send_cdn_management_request(self, method, path, headers=None):
        """
        Sends a request to the CDN management endpoint. Returns a `Response`,
        or an `Error` of kind TRANSPORT if no response was received or no CDN
        management URL is configured.
        """
        if not self.cdn_management_url:
            return results.transport_error(exc.NotCDNEnabled())
        return self._request(self.cdn_management_url, method, path,
                headers=headers)


    def get_container_path(self, name):
        """Returns the request path of the named container."""
        return "/%s" % utils.url_encode(name)


    def get_container(self, name):
        """
        Fetches the current state of a container. Returns `Ok(Container)` or
        the mapped `Error`.
        """
        path = self.get_container_path(name)
        resp = self.send_storage_request("HEAD", path)
        if isinstance(resp, Error) or resp.status_code not in INFO_CODES:
            return results.error_result(resp)
        hdrs = resp.headers
        nbytes = utils.to_int(hdrs.get("x-container-bytes-used"), 0)
        count = utils.to_int(hdrs.get("x-container-object-count"), 0)
        cdn_result = self._get_cdn_details(path)
        if not cdn_result.ok:
            return cdn_result
        return Ok(Container(self, name, nbytes, count, cdn_result.value))


    def _get_cdn_details(self, path):
        """
        A container that the CDN service doesn't know about, or an account
        without CDN management, is reported as not CDN-enabled.
        """
        if not self.cdn_management_url:
            return Ok(CdnDescriptor())
        resp = self.send_cdn_management_request("HEAD", path)
        if isinstance(resp, Error):
            return resp
        if resp.status_code == 404:
            return Ok(CdnDescriptor())
        if resp.status_code not in INFO_CODES:
            return results.error_result(resp)
        hdrs = resp.headers
        return Ok(CdnDescriptor(
                cdn_enabled=utils.to_bool(hdrs.get("x-cdn-enabled")),
                cdn_uri=hdrs.get("x-cdn-uri"),
                ttl=utils.to_int(hdrs.get("x-ttl")),
                log_retention=utils.to_bool(hdrs.get("x-log-retention"))))


    def delete_container(self, name):
        """
        Deletes the named container, which must be empty. A container that
        still holds objects yields an `Error` of kind NOT_EMPTY.
        """
        resp = self.send_storage_request("DELETE",
                self.get_container_path(name))
        if isinstance(resp, Error):
            return resp
        if resp.status_code == 204:
            return results.OK
        if resp.status_code == 409:
            return Error(results.NOT_EMPTY, response=resp)
        return results.error_result(resp)


    def create_container(self, name):
        """
        Creates the named container, or leaves an existing one unchanged.
        Returns `Ok(Container)` describing it.
        """
        resp = self.send_storage_request("PUT", self.get_container_path(name))
        created = results.expect(resp, CREATED_CODES)
        if not created.ok:
            return created
        return self.get_container(name)


    def container_exists(self, name):
        """
        Returns True if the named container exists. As with
        `Container.object_exists()`, any failure reads as False.
        """
        resp = self.send_storage_request("HEAD", self.get_container_path(name))
        return results.expect(resp, INFO_CODES).ok


    def get_containers_names(self):
        """
        Returns `Ok` with the names of the containers in the account, within
        the page size the service imposes.
        """
        return self._get_names(self.send_storage_request("GET", ""))


    def get_public_containers_names(self):
        """
        Returns `Ok` with the names of the CDN-enabled containers in the
        account.
        """
        return self._get_names(self.send_cdn_management_request("GET",
                "?enabled_only=true"))


    def _get_names(self, resp):
        if isinstance(resp, Error):
            return resp
        if resp.status_code == 204:
            return Ok([])
        if resp.status_code == 200:
            return Ok(utils.split_lines(resp.body))
        return results.error_result(resp)
