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
Typed outcomes for storage and CDN requests.

Every operation on a container answers with either an `Ok` carrying its
value, or an `Error` whose `kind` is one of the constants below. Callers
branch on `result.ok` (or on `result.kind`), or call `result.unwrap()` to
get the value and have an `Error` raised as the matching exception from
`pycloudfiles.exceptions`.
"""

import logging

import pycloudfiles.exceptions as exc

logger = logging.getLogger(__name__)

NOT_FOUND = "not_found"
UNAUTHORIZED = "unauthorized"
NOT_EMPTY = "not_empty"
UNEXPECTED_RESPONSE = "unexpected_response"
TRANSPORT = "transport"

ERROR_KINDS = (NOT_FOUND, UNAUTHORIZED, NOT_EMPTY, UNEXPECTED_RESPONSE,
        TRANSPORT)

_status_kinds = {401: UNAUTHORIZED, 404: NOT_FOUND}


class Result(object):
    """Base class for `Ok` and `Error`."""
    __slots__ = ()
    ok = False

    def unwrap(self):
        raise NotImplementedError


class Ok(Result):
    """A successful outcome, optionally carrying a value."""
    __slots__ = ("value",)
    ok = True

    def __init__(self, value=None):
        self.value = value

    def unwrap(self):
        return self.value

    def __eq__(self, other):
        return isinstance(other, Ok) and other.value == self.value

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash(("ok", repr(self.value)))

    def __repr__(self):
        if self.value is None:
            return "<Ok>"
        return "<Ok %r>" % (self.value,)


class Error(Result):
    """
    A failed outcome.

    `response` holds the raw `Response` for HTTP-level failures, and
    `exception` the original transport exception for `TRANSPORT` errors.
    """
    __slots__ = ("kind", "response", "exception")

    def __init__(self, kind, response=None, exception=None):
        if kind not in ERROR_KINDS:
            raise ValueError("Unknown error kind: %s" % kind)
        self.kind = kind
        self.response = response
        self.exception = exception

    @property
    def status_code(self):
        return getattr(self.response, "status_code", None)

    def unwrap(self):
        raise self.to_exception()

    def to_exception(self):
        """
        Returns the exception from `pycloudfiles.exceptions` that matches
        this error.
        """
        if self.kind == TRANSPORT:
            if isinstance(self.exception, exc.ClientException):
                return self.exception
            return exc.TransportError(original=self.exception)
        if self.kind == NOT_EMPTY:
            return exc.ContainerNotEmpty(response=self.response)
        if self.kind == NOT_FOUND:
            return exc.NotFound(response=self.response)
        if self.kind == UNAUTHORIZED:
            return exc.Unauthorized(response=self.response)
        return exc.from_response(self.response)

    def __eq__(self, other):
        return (isinstance(other, Error) and other.kind == self.kind and
                other.response == self.response and
                other.exception is self.exception)

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash(("error", self.kind))

    def __repr__(self):
        if self.kind == TRANSPORT:
            return "<Error %s: %r>" % (self.kind, self.exception)
        if self.response is not None:
            return "<Error %s: HTTP %s>" % (self.kind, self.status_code)
        return "<Error %s>" % self.kind


OK = Ok()


def transport_error(exception):
    """Wraps a transport-level exception without reclassifying it."""
    return Error(TRANSPORT, exception=exception)


def error_result(outcome):
    """
    Maps any outcome that is not a success to an `Error`.

    An `Error` is returned unchanged, so transport failures reported by the
    connection keep their original exception. Otherwise 401 and 404 get
    their own kinds and every other response becomes `UNEXPECTED_RESPONSE`,
    carrying the response for diagnostics.
    """
    if isinstance(outcome, Error):
        return outcome
    status = getattr(outcome, "status_code", None)
    kind = _status_kinds.get(status, UNEXPECTED_RESPONSE)
    logger.debug("Mapped HTTP %s to error '%s'", status, kind)
    return Error(kind, response=outcome)


def expect(outcome, codes, value=None):
    """
    Returns `Ok(value)` when `outcome` is a response whose status is one of
    `codes`, and the mapped `Error` otherwise.
    """
    if not isinstance(outcome, Error) and outcome.status_code in codes:
        return Ok(value)
    return error_result(outcome)
