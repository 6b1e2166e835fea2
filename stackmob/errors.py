# Copyright (c) 2009-2010 Six Apart Ltd.
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
# * Redistributions of source code must retain the above copyright notice,
#   this list of conditions and the following disclaimer.
#
# * Redistributions in binary form must reproduce the above copyright notice,
#   this list of conditions and the following disclaimer in the documentation
#   and/or other materials provided with the distribution.
#
# * Neither the name of Six Apart Ltd. nor the names of its contributors may
#   be used to endorse or promote products derived from this software without
#   specific prior written permission.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
# AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
# IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE
# ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE
# LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR
# CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF
# SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS
# INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN
# CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE)
# ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE
# POSSIBILITY OF SUCH DAMAGE.

"""

Exceptions raised and delivered by the StackMob client.

Configuration problems are raised synchronously, as soon as an invalid
model is classified or serialized. Everything that happens on the way to
and from the server is delivered through a request's failure path instead.

"""

import http.client


class StackMobError(Exception):
    """Base class of all StackMob client errors."""
    pass


class ConfigurationError(StackMobError):
    """An error thrown when a model class or one of its fields has a name
    the StackMob platform cannot store.

    Schema and field names must be 3-25 alphanumeric characters. The error
    is fatal for the model class and is never retried.

    """
    pass


class TransportError(StackMobError):
    """An error building, signing or sending a request.

    The original exception, if any, is available as `reason`.

    """

    def __init__(self, message, reason=None):
        super(TransportError, self).__init__(message)
        self.reason = reason


class RedirectLoopError(TransportError):
    """An error thrown when a request is redirected more times than the
    client allows."""
    pass


class HttpResponseError(StackMobError, http.client.HTTPException):
    """An error thrown when the server answers with a status outside of the
    100-399 range.

    The status code, response headers and raw response body are available
    as `code`, `headers` and `body`.

    """

    def __init__(self, code, headers, body):
        super(HttpResponseError, self).__init__(
            'call failed with HTTP response code %s, headers %s, body %s'
            % (code, ', '.join('%s=%s' % item for item in sorted(headers.items())), body))
        self.code = code
        self.headers = headers
        self.body = body


class RequestError(HttpResponseError):
    """An HttpResponseError thrown when the server reports an error in the
    client's request.

    This exception corresponds to the HTTP status code 400.

    """
    pass


class Unauthorized(HttpResponseError):
    """An HttpResponseError thrown when the server reports that the
    requested resource is not available through an unauthenticated request.

    This exception corresponds to the HTTP status code 401. Thus when this
    exception is received, the caller may need to log in and try again.

    """
    pass


class Forbidden(HttpResponseError):
    """An HttpResponseError thrown when the server reports that the client,
    as authenticated, is not authorized to request the requested resource.

    This exception corresponds to the HTTP status code 403.

    """
    pass


class NotFound(HttpResponseError):
    """An HttpResponseError thrown when the server reports that the
    requested resource was not found."""
    pass


class PreconditionFailed(HttpResponseError):
    """An HttpResponseError thrown when the server reports that some of the
    conditions in a conditional request were not true.

    This exception corresponds to the HTTP status code 412.

    """
    pass


class ServerError(HttpResponseError):
    """An HttpResponseError thrown when the server reports an unexpected
    error.

    This exception corresponds to the HTTP status code 500.

    """
    pass


response_errors = {
    http.client.BAD_REQUEST:           RequestError,
    http.client.UNAUTHORIZED:          Unauthorized,
    http.client.FORBIDDEN:             Forbidden,
    http.client.NOT_FOUND:             NotFound,
    http.client.PRECONDITION_FAILED:   PreconditionFailed,
    http.client.INTERNAL_SERVER_ERROR: ServerError,
}


def error_for_response(code, headers, body):
    """Returns the `HttpResponseError` instance best describing a failed
    response."""
    err_cls = response_errors.get(code, HttpResponseError)
    return err_cls(code, headers, body)
