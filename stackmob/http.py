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

The request pipeline.

A `Request` is built from a verb, a host and path, headers, query arguments
and an optional JSON body. `Request.send()` signs it with the session's
OAuth consumer key and secret and hands it to a worker thread, returning at
once with a `SendResult` that says only whether the request was accepted
for sending. The outcome of the request itself is delivered later to the
request's callback, and through the `SendResult`'s future.

When the server answers with a redirect, the request is signed again for
the new location and resent, after the request's redirect observer has been
told about the move. Redirects are followed at most `max_redirects` times.

"""

from collections import namedtuple
from concurrent.futures import ThreadPoolExecutor
import http.client
import logging
import threading
from urllib.parse import quote, urljoin

import httplib2
from oauthlib import oauth1

from stackmob import __version__
from stackmob.callback import Callback
from stackmob.cookies import header_value
from stackmob.errors import TransportError, RedirectLoopError, error_for_response


log = logging.getLogger('stackmob.http')

SENT = 'SENT'
FAILED = 'FAILED'

SendResult = namedtuple('SendResult', 'status failure_reason future')
SendResult.__doc__ = """Whether a request was accepted for sending.

`status` is `SENT` or `FAILED`. A failed send carries the exception that
prevented it as `failure_reason`; a sent one carries the
`concurrent.futures.Future` of its `Response` as `future`.

"""

Response = namedtuple('Response', 'status headers body')

CONTENT_TYPE = 'application/vnd.stackmob+json;'
ACCEPT = 'application/vnd.stackmob+json; version=%d'
USER_AGENT = 'StackMob (Python; %s)' % __version__

REDIRECT_STATUSES = (
    http.client.MOVED_PERMANENTLY,
    http.client.FOUND,
    http.client.SEE_OTHER,
    http.client.TEMPORARY_REDIRECT,
    http.client.PERMANENT_REDIRECT,
)

DEFAULT_MAX_REDIRECTS = 5

#: Upper bound on requests in flight at once through the shared pool.
MAX_WORKERS = 128

workers = ThreadPoolExecutor(max_workers=MAX_WORKERS, thread_name_prefix='stackmob')

local = threading.local()


def user_agent():
    """Returns this thread's default `httplib2.Http` instance.

    The instance does not follow redirects itself, so that the pipeline can
    see them.

    """
    http = getattr(local, 'http', None)
    if http is None:
        http = httplib2.Http()
        http.follow_redirects = False
        local.http = http
    return http


def is_success(status):
    return 100 <= status < 400


def is_redirect(status):
    return status in REDIRECT_STATUSES


def percent_encode(value):
    """Percent-encodes a query string key or value.

    Spaces become ``%20``, never ``+``.

    """
    return quote(str(value), safe='')


def format_query_string(arguments):
    return '&'.join('%s=%s' % (percent_encode(k), percent_encode(v))
                    for k, v in arguments.items())


def total_number_of_items(headers):
    """Returns the total number of objects a query could return, as told by
    the ``Content-Range`` header of its response.

    Returns -1 if the header is missing or unreadable, and -2 if the server
    did not know the total.

    """
    value = header_value(headers, 'content-range')
    if not value:
        return -1
    parts = value.rsplit('/', 1)
    if len(parts) != 2:
        return -1
    total = parts[1].strip()
    if total == '*':
        return -2
    try:
        return int(total)
    except ValueError:
        return -1


class Request(object):

    """A signed request to a StackMob host.

    Parameter `session` supplies the credentials, API version and
    application name. `verb` is one of ``GET``, ``POST``, ``PUT`` and
    ``DELETE``; query `arguments` are sent only with ``GET`` and ``DELETE``
    and a `body` only with ``POST`` and ``PUT``.

    Optional parameter `redirected` is called as
    ``redirected(original_url, headers, body, new_url)`` before a redirected
    request is resent. Optional parameters `http` and `executor` replace the
    default `httplib2.Http` user agent and worker pool, and `cookies` is the
    `CookieStore` whose cookies are sent and which keeps the cookies set by
    successful responses.

    """

    def __init__(self, session, verb, host, path, headers=None,
                 arguments=None, body=None, secure=False, redirected=None,
                 http=None, executor=None, cookies=None,
                 max_redirects=DEFAULT_MAX_REDIRECTS):
        self.session = session
        self.verb = verb
        self.host = host
        self.path = path
        self.headers = headers or {}
        self.arguments = arguments or {}
        self.body = body or None
        self.secure = secure
        self.redirected = redirected
        self.http = http
        self.executor = executor if executor is not None else workers
        self.cookies = cookies
        self.max_redirects = max_redirects

    def url(self):
        """Returns the URL this request is first sent to."""
        if not self.host:
            raise TransportError('No host to send %s %s to' % (self.verb, self.path))
        scheme = 'https' if self.secure else 'http'
        url = '%s://%s/%s' % (scheme, self.host, self.path.lstrip('/'))
        if self.arguments and self.verb in ('GET', 'DELETE'):
            url += '?' + format_query_string(self.arguments)
        return url

    def standard_headers(self):
        user_agent = USER_AGENT
        if self.session.app_name:
            user_agent += '/' + self.session.app_name

        headers = {
            'Content-Type': CONTENT_TYPE,
            'Accept': ACCEPT % self.session.api_version,
            'User-Agent': user_agent,
        }
        if self.cookies is not None:
            cookie = self.cookies.cookie_header()
            if cookie:
                headers['Cookie'] = cookie
        headers.update(self.headers)
        return headers

    def get_request(self, url):
        """Returns the parameters for sending this request to `url`, signed,
        as a dictionary of keyword arguments suitable for passing to
        `httplib2.Http.request()`.

        Raises `TransportError` if the request cannot be signed.

        """
        body = self.body if self.verb in ('POST', 'PUT') else None
        client = oauth1.Client(self.session.api_key,
                               client_secret=self.session.api_secret)
        try:
            uri, headers, body = client.sign(url, http_method=self.verb,
                                             body=body,
                                             headers=self.standard_headers())
        except ValueError as exc:
            raise TransportError('Could not sign %s %s: %s' % (self.verb, url, exc), exc)

        # Use 'uri' because httplib2.request does.
        return dict(uri=uri, method=self.verb, body=body, headers=headers)

    def send(self, callback=None):
        """Signs the request and submits it for sending.

        Returns a `SendResult`. If the request could not be built or signed
        the result is `FAILED`, and `callback` has already been told so.
        Otherwise `callback` is told the outcome later, from a worker
        thread.

        """
        if callback is None:
            callback = Callback()

        try:
            request = self.get_request(self.url())
            future = self.executor.submit(self.execute, request, 0)
        except Exception as exc:
            if not isinstance(exc, TransportError):
                exc = TransportError('Could not send %s %s: %s'
                                     % (self.verb, self.path, exc), exc)
            log.debug('Failed to send %s %s: %s', self.verb, self.path, exc)
            deliver(callback.failure, exc)
            return SendResult(FAILED, exc, None)

        future.add_done_callback(lambda f: complete(f, callback))
        return SendResult(SENT, None, future)

    def execute(self, request, hops):
        """Sends the signed `request` and returns its `Response`, following
        any redirects.

        Raises `TransportError` if the request could not be sent and
        `HttpResponseError` if the server answered with an error status.

        """
        url = request['uri']
        http = self.http if self.http is not None else user_agent()

        log.debug('%s %s', request['method'], url)
        try:
            response, content = http.request(**request)
        except Exception as exc:
            raise TransportError('Could not %s %s: %s'
                                 % (request['method'], url, exc), exc)

        if isinstance(content, bytes):
            content = content.decode('utf-8', 'replace')
        headers = dict(response)
        status = response.status

        if is_redirect(status) and 'location' in response:
            new_url = urljoin(url, response['location'])
            if hops >= self.max_redirects:
                raise RedirectLoopError('Gave up on %s %s after %d redirects'
                                        % (request['method'], url, hops))
            log.debug('Redirected from %s to %s', url, new_url)
            if self.redirected is not None:
                deliver(self.redirected, url, headers, content, new_url)
            return self.execute(self.get_request(new_url), hops + 1)

        if not is_success(status):
            raise error_for_response(status, headers, content)

        if self.cookies is not None:
            self.cookies.store_cookies(headers)
        return Response(status, headers, content)


def deliver(fn, *args):
    """Calls a user supplied function, logging anything it raises."""
    try:
        fn(*args)
    except Exception:
        log.exception('Error in callback %r', fn)


def complete(future, callback):
    try:
        response = future.result()
    except Exception as exc:
        log.debug('Request failed: %s', exc)
        deliver(callback.failure, exc)
    else:
        deliver(callback.success, response.body)
