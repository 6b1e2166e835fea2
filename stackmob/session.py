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

Credentials and endpoint state shared by all requests of a client.

A `Session` holds what never changes for a client: API key and secret,
application name, API version and the name of the user schema.

`Endpoints` holds the two hosts requests go to, the API host and the push
host. The server may move either of them by redirecting a request, so both
are kept behind one lock and read fresh whenever a request is built.

"""

import logging
import threading
from urllib.parse import urlparse


log = logging.getLogger('stackmob.session')

DEFAULT_URL_FORMAT = 'mob1.stackmob.com'
DEFAULT_API_HOST = 'api.' + DEFAULT_URL_FORMAT
DEFAULT_PUSH_HOST = 'push.' + DEFAULT_URL_FORMAT

API_HOST_PREFIX = 'api.'
PUSH_HOST_PREFIX = 'push.'


class Session(object):

    """The identity a client signs its requests with."""

    def __init__(self, api_key, api_secret, user_object_name='user',
                 api_version=0, app_name=None):
        self._api_key = api_key
        self._api_secret = api_secret
        self._user_object_name = user_object_name
        self._api_version = int(api_version)
        self._app_name = app_name

    @property
    def api_key(self):
        return self._api_key

    @property
    def api_secret(self):
        return self._api_secret

    @property
    def user_object_name(self):
        return self._user_object_name

    @property
    def api_version(self):
        return self._api_version

    @property
    def app_name(self):
        return self._app_name

    def __repr__(self):
        return '<Session %s v%d app=%r>' % (self._api_key, self._api_version,
                                             self._app_name)


class Endpoints(object):

    """The current API and push hosts."""

    def __init__(self, api_host=DEFAULT_API_HOST, push_host=DEFAULT_PUSH_HOST):
        self._lock = threading.Lock()
        self._api_host = api_host
        self._push_host = push_host

    @property
    def api_host(self):
        with self._lock:
            return self._api_host

    @property
    def push_host(self):
        with self._lock:
            return self._push_host

    def snapshot(self):
        """Returns the ``(api_host, push_host)`` pair as of one instant."""
        with self._lock:
            return self._api_host, self._push_host

    def update_from_redirect(self, new_url):
        """Moves whichever endpoint `new_url` points into, if it is not
        already there.

        Returns True if an endpoint changed.

        """
        host = urlparse(new_url).hostname
        if not host:
            log.debug('Ignoring redirect to %r with no host', new_url)
            return False

        with self._lock:
            if host.startswith(PUSH_HOST_PREFIX):
                if host.lower() != self._push_host.lower():
                    log.debug('Push host moved from %s to %s', self._push_host, host)
                    self._push_host = host
                    return True
            elif host.startswith(API_HOST_PREFIX):
                if host.lower() != self._api_host.lower():
                    log.debug('API host moved from %s to %s', self._api_host, host)
                    self._api_host = host
                    return True
        return False
