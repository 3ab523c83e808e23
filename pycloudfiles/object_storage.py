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
Client-side view of one Cloud Files container.

A `Container` is a snapshot: its name, size and object count are fixed when
it is created by a `Connection`, and nothing done through it changes them.
Call `refresh()` to get a new snapshot.
"""

from collections import namedtuple
import json
import logging

from pycloudfiles import results
from pycloudfiles.results import Error
from pycloudfiles.results import Ok
import pycloudfiles.utils as utils

logger = logging.getLogger(__name__)

# One day, in seconds.
DEFAULT_CDN_TTL = 86400

# Codes the CDN management service uses to acknowledge a PUT or POST.
CDN_SUCCESS_CODES = (201, 202)
OBJECT_EXISTS_CODES = (200, 204)

CdnDescriptor = namedtuple("CdnDescriptor",
        ["cdn_enabled", "cdn_uri", "ttl", "log_retention"])
CdnDescriptor.__new__.__defaults__ = (False, None, None, False)

CdnConfig = namedtuple("CdnConfig", ["ttl", "user_agent_acl",
        "referrer_acl"])
CdnConfig.__new__.__defaults__ = (DEFAULT_CDN_TTL, None, None)

ObjectQueryArgs = namedtuple("ObjectQueryArgs", ["limit", "marker",
        "prefix", "path"])
ObjectQueryArgs.__new__.__defaults__ = (None, None, None, None)


def _query_args(query_args, kwargs):
    if kwargs:
        if query_args is not None:
            return query_args._replace(**kwargs)
        return ObjectQueryArgs(**kwargs)
    return query_args


class Container(object):
    """
    Represents a container as it was when it was fetched. Mutating calls go
    straight to the service and report an `Ok` or an `Error`; they never
    update this object.
    """
    __slots__ = ("_connection", "_name", "_bytes", "_count", "_cdn_details")

    def __init__(self, connection, name, nbytes=0, count=0, cdn_details=None):
        set_ = object.__setattr__
        set_(self, "_connection", connection)
        set_(self, "_name", name)
        set_(self, "_bytes", nbytes)
        set_(self, "_count", count)
        set_(self, "_cdn_details", cdn_details or CdnDescriptor())


    def __setattr__(self, att, val):
        raise AttributeError("Container objects are read-only; use "
                "refresh() to get the current state.")


    def __delattr__(self, att):
        raise AttributeError("Container objects are read-only.")


    def __repr__(self):
        return "<Container %s: %s objects, %s bytes%s>" % (self._name,
                self._count, self._bytes, ", public" if self.is_public
                else "")


    @property
    def connection(self):
        return self._connection


    @property
    def name(self):
        return self._name


    @property
    def bytes(self):
        """Total size of the container's objects, in bytes."""
        return self._bytes


    @property
    def count(self):
        """Number of objects in the container."""
        return self._count


    @property
    def cdn_details(self):
        return self._cdn_details


    @property
    def is_empty(self):
        return self._count == 0


    @property
    def is_public(self):
        """True if the container is published on the CDN."""
        return bool(self._cdn_details.cdn_enabled)


    @property
    def cdn_url(self):
        """
        The public CDN URL. Only meaningful when `is_public` is True; it is
        not checked.
        """
        return self._cdn_details.cdn_uri


    @property
    def cdn_ttl(self):
        """TTL of the CDN edge caches, in seconds."""
        return self._cdn_details.ttl


    @property
    def log_retention(self):
        """
        Whether CDN access logs are kept. Always False for a container that
        isn't public, whatever the stored flag says.
        """
        return self.is_public and bool(self._cdn_details.log_retention)


    @property
    def _path(self):
        return self._connection.get_container_path(self._name)


    def _post_cdn_headers(self, headers):
        resp = self._connection.send_cdn_management_request("POST",
                self._path, headers=headers)
        return results.expect(resp, CDN_SUCCESS_CODES)


    def make_public(self, config=None):
        """
        Publishes the container on the CDN.

        This is done in two steps: the container is first registered with the
        CDN service (PUT), and only if that succeeds is it configured and
        enabled (POST). `config` is a CdnConfig; by default the TTL is one day
        and no ACL is set. The ACLs are Perl-compatible regular expressions
        matched against the User-Agent and Referer of CDN requests.

        Returns `Ok`, or the `Error` of whichever step failed.
        """
        if config is None:
            config = CdnConfig()
        registered = self._register_on_cdn()
        if not registered.ok:
            logger.debug("CDN registration of '%s' failed: %r", self._name,
                    registered)
            return registered
        return self._enable_on_cdn(config)


    def _register_on_cdn(self):
        resp = self._connection.send_cdn_management_request("PUT",
                self._path)
        return results.expect(resp, CDN_SUCCESS_CODES)


    def _enable_on_cdn(self, config):
        headers = {"X-CDN-Enabled": "True"}
        headers.update(utils.cdn_config_to_headers(config))
        return self._post_cdn_headers(headers)


    def make_private(self):
        """
        Removes the container from the CDN.

        Content that is already cached stays reachable through the CDN URL
        until the TTL that was in effect expires.
        """
        return self._post_cdn_headers({"X-CDN-Enabled": "False"})


    def set_log_retention(self, enabled):
        """
        Turns retention of CDN access logs on or off. This only has an effect
        on a public container, which is left for the service to enforce.
        """
        state = "True" if enabled else "False"
        return self._post_cdn_headers({"x-log-retention": state})


    def refresh(self):
        """Returns `Ok` with a new Container holding the current state."""
        return self._connection.get_container(self._name)


    def delete(self):
        """
        Deletes the container. The service refuses to delete a container that
        still holds objects; that yields an `Error` of kind NOT_EMPTY.
        """
        return self._connection.delete_container(self._name)


    def get_objects_names(self, query_args=None, **kwargs):
        """
        Returns `Ok` with the names of the objects in the container, in the
        order the service lists them.

        Filters can be passed as an ObjectQueryArgs or as keyword arguments:
        `limit`, `marker` (list the names after this one), `prefix` and `path`
        (a pseudo-directory). Only one page is fetched, whose size the service
        limits; use `marker` to walk through larger containers.
        """
        resp = self._list(_query_args(query_args, kwargs))
        if isinstance(resp, Error):
            return resp
        if resp.status_code == 204:
            return Ok([])
        if resp.status_code == 200:
            return Ok(utils.split_lines(resp.body))
        return results.error_result(resp)


    def get_objects_details(self, query_args=None, **kwargs):
        """
        Same as `get_objects_names()`, but each object is described by a dict
        with its `name`, `bytes`, `hash`, `content_type` and `last_modified`.
        """
        resp = self._list(_query_args(query_args, kwargs), fmt="json")
        if isinstance(resp, Error):
            return resp
        if resp.status_code == 204:
            return Ok([])
        if resp.status_code == 200:
            try:
                details = json.loads(resp.body) if resp.body else []
            except ValueError:
                details = None
            if not isinstance(details, list):
                logger.debug("Undecodable listing for '%s'", self._name)
                return Error(results.UNEXPECTED_RESPONSE, response=resp)
            return Ok(details)
        return results.error_result(resp)


    def _list(self, query_args, fmt=None):
        qs = utils.object_query_args_to_string(query_args)
        if fmt:
            qs = "%s%sformat=%s" % (qs, "&" if qs else "?", fmt)
        return self._connection.send_storage_request("GET",
                "%s%s" % (self._path, qs))


    def object_exists(self, name):
        """
        Returns True if the named object exists in this container.

        Note that any failure, including the request not getting through,
        also returns False: a False result doesn't prove that the object is
        absent.
        """
        path = "%s/%s" % (self._path, utils.url_encode(name))
        resp = self._connection.send_storage_request("HEAD", path)
        return results.expect(resp, OBJECT_EXISTS_CODES).ok
