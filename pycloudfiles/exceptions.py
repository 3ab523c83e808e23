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


class ClientException(Exception):
    """
    The base exception class for all exceptions this library raises.
    """
    message = "Client error"

    def __init__(self, code=None, message=None, details=None, response=None):
        self.code = code or getattr(self, "http_status", None)
        self.message = message or self.__class__.message
        self.details = details
        self.response = response
        super(ClientException, self).__init__(self.message)

    def __str__(self):
        formatted_string = "%s" % self.message
        if self.code:
            formatted_string += " (HTTP %s)" % self.code
        if self.details:
            formatted_string += "\n%s" % self.details
        return formatted_string


class Unauthorized(ClientException):
    """
    HTTP 401 - Unauthorized: bad credentials.
    """
    http_status = 401
    message = "Unauthorized"


class NotFound(ClientException):
    """
    HTTP 404 - Not found
    """
    http_status = 404
    message = "Not found"


class ContainerNotEmpty(ClientException):
    """
    HTTP 409 - The service refused to delete a container that still holds
    objects.
    """
    http_status = 409
    message = "Container not empty"


class UnexpectedResponse(ClientException):
    """
    The service answered with a status code that has no meaning for the
    request that was made.
    """
    message = "Unexpected response"


class TransportError(ClientException):
    """
    The request never produced an HTTP response: the connection was refused,
    timed out, or was dropped. The original exception is available as
    `original`.
    """
    message = "Transport failure"

    def __init__(self, original=None, *args, **kwargs):
        self.original = original
        kwargs.setdefault("details", "%s" % original if original else None)
        super(TransportError, self).__init__(*args, **kwargs)


class NotCDNEnabled(ClientException):
    """
    No CDN management endpoint has been configured for this connection.
    """
    message = "CDN is not enabled for this service"


class InvalidQueryArgs(ClientException):
    """
    The arguments supplied for an object listing cannot be sent.
    """
    message = "Invalid object query arguments"


class InvalidSetting(ClientException):
    """
    An unknown configuration key was requested.
    """
    message = "Invalid setting"


class MissingConfiguration(ClientException):
    """
    A connection was requested without the URL or token it needs.
    """
    message = "Missing configuration"


_code_map = dict((c.http_status, c) for c in (Unauthorized, NotFound))


def from_response(response, body=None):
    """
    Return an instance of a ClientException or subclass based on a response
    object.

    Usage::

        resp = conn.send_storage_request("HEAD", path)
        if resp.status_code not in (200, 204):
            raise exceptions.from_response(resp)
    """
    status = getattr(response, "status_code", None)
    cls = _code_map.get(status, UnexpectedResponse)
    if body is None:
        body = getattr(response, "body", None)
    details = body.strip() if body else None
    return cls(code=status, details=details, response=response)
