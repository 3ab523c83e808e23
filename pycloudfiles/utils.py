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

from collections import OrderedDict
import random
import string
from urllib.parse import quote

import pycloudfiles.exceptions as exc


# Characters to use for random unicode strings; (start, end) code points.
_UNICODE_RANGES = ((0x0041, 0x005A), (0x00C0, 0x00FF), (0x0391, 0x03A9),
        (0x0410, 0x044F))

_QUERY_FIELDS = ("limit", "marker", "prefix", "path")


def url_encode(value):
    """
    Percent-encodes a name so that it can be used as a single path segment
    or query value. Nothing is treated as safe, so '/' in pseudo-directory
    names is encoded as well. Accepts both text and bytes.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        value = "%s" % value
    return quote(value, safe="")


def to_bool(val):
    """
    Interprets the header and config-file spellings of a boolean. None stays
    False.
    """
    if isinstance(val, bool):
        return val
    if val is None:
        return False
    return ("%s" % val).strip().lower() in ("true", "yes", "on", "1")


def to_int(val, default=None):
    """Converts a header value to int, returning `default` on failure."""
    try:
        return int(val)
    except (TypeError, ValueError):
        return default


def cdn_config_to_headers(config):
    """
    Translates a CdnConfig into the headers that configure a CDN-enabled
    container. The TTL is always sent; each ACL only when it is set.
    """
    headers = OrderedDict()
    headers["X-TTL"] = "%s" % config.ttl
    if config.user_agent_acl is not None:
        headers["X-User-Agent-ACL"] = config.user_agent_acl
    if config.referrer_acl is not None:
        headers["X-Referrer-ACL"] = config.referrer_acl
    return headers


def object_query_args_to_string(query_args):
    """
    Builds the query string for an object listing. Returns an empty string
    when no argument is set; otherwise the string starts with '?'.
    """
    if query_args is None:
        return ""
    limit = query_args.limit
    if limit is not None:
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise exc.InvalidQueryArgs(details="limit must be a positive "
                    "integer; received %r." % (limit,))
    parts = []
    for field in _QUERY_FIELDS:
        val = getattr(query_args, field)
        if val is None:
            continue
        parts.append("%s=%s" % (field, url_encode(val)))
    if not parts:
        return ""
    return "?%s" % "&".join(parts)


def split_lines(body):
    """
    Splits a plain-text listing into its names, dropping empty lines and
    keeping the order the service sent them in.
    """
    if not body:
        return []
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    return [line for line in body.split("\n") if line]


def random_unicode(length=20):
    """
    Generates a random name with non-ASCII characters; used in testing.
    """
    def get_char():
        start, end = random.choice(_UNICODE_RANGES)
        return chr(random.randint(start, end))
    return "".join(get_char() for _ in range(length))


def random_ascii(length=20):
    """
    Generates a random name; used in testing.
    """
    return "".join(random.choice(string.ascii_letters)
            for _ in range(length))
