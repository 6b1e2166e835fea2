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

The cookie jar StackMob sessions are kept in.

StackMob hands out at most one cookie per response, optionally with an
expiry date. The jar understands just that shape of ``Set-Cookie`` header;
anything it cannot read is ignored.

"""

from datetime import datetime, timezone
import logging
import threading


log = logging.getLogger('stackmob.cookies')

SET_COOKIE_HEADER = 'set-cookie'
EXPIRES = 'expires'

cookie_date_formats = (
    '%a, %d-%b-%Y %H:%M:%S GMT',
    '%a, %d %b %Y %H:%M:%S GMT',
)


def parse_expires(value):
    """Parses a cookie expiry date into an aware UTC `datetime`, or returns
    None if the date cannot be read."""
    value = value.strip()
    for fmt in cookie_date_formats:
        try:
            return datetime.strptime(value, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    log.debug('Could not parse cookie expiry %r', value)
    return None


def header_value(headers, name):
    """Finds header `name` in `headers` regardless of the case of its
    key."""
    for key, value in headers.items():
        if key is not None and key.lower() == name:
            return value
    return None


class CookieStore(object):

    """A thread safe store of single valued cookies keyed by name."""

    def __init__(self):
        self._lock = threading.Lock()
        self._cookies = {}

    def store_cookie(self, cookie_string):
        """Adds the cookie described by one ``Set-Cookie`` header value."""
        if not cookie_string:
            return
        parts = cookie_string.split(';')
        pair = parts[0].split('=')
        if len(pair) != 2:
            log.debug('Ignoring unreadable cookie %r', cookie_string)
            return
        name, value = pair[0].strip(), pair[1].strip()

        expires = None
        for attribute in parts[1:]:
            attr = attribute.split('=', 1)
            if len(attr) == 2 and attr[0].strip().lower() == EXPIRES:
                expires = parse_expires(attr[1])
                break

        with self._lock:
            self._cookies[name] = (value, expires)

    def store_cookies(self, headers):
        """Adds the cookie set by a response with the given headers, if
        any."""
        self.store_cookie(header_value(headers, SET_COOKIE_HEADER))

    def _unexpired(self):
        now = datetime.now(timezone.utc)
        with self._lock:
            items = list(self._cookies.items())
        return [(name, value) for name, (value, expires) in items
                if expires is None or now <= expires]

    def get(self, name):
        """Returns the value of unexpired cookie `name`, or None."""
        for cookie_name, value in self._unexpired():
            if cookie_name == name:
                return value
        return None

    def cookie_header(self):
        """Renders the unexpired cookies as a ``Cookie`` header value."""
        return '; '.join('%s=%s' % item for item in self._unexpired())

    def clear(self):
        with self._lock:
            self._cookies.clear()

    def __len__(self):
        return len(self._unexpired())
