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

Default client settings, read from the environment:

* ``STACKMOB_API_KEY`` and ``STACKMOB_API_SECRET``: the OAuth consumer key
  and secret, required
* ``STACKMOB_USER_OBJECT_NAME``: name of the user schema, ``user`` by default
* ``STACKMOB_API_VERSION``: API version to request, ``0`` by default
* ``STACKMOB_API_HOST``, ``STACKMOB_PUSH_HOST``: the hosts to start from
* ``STACKMOB_APP_NAME``: application name added to the user agent

"""

import os

from stackmob.client import StackMob
from stackmob.session import DEFAULT_API_HOST, DEFAULT_PUSH_HOST


API_KEY = os.getenv('STACKMOB_API_KEY')
API_SECRET = os.getenv('STACKMOB_API_SECRET')
USER_OBJECT_NAME = os.getenv('STACKMOB_USER_OBJECT_NAME', 'user')
API_VERSION = int(os.getenv('STACKMOB_API_VERSION', '0'))
API_HOST = os.getenv('STACKMOB_API_HOST', DEFAULT_API_HOST)
PUSH_HOST = os.getenv('STACKMOB_PUSH_HOST', DEFAULT_PUSH_HOST)
APP_NAME = os.getenv('STACKMOB_APP_NAME')


def settings():
    return {
        'api_key': API_KEY,
        'api_secret': API_SECRET,
        'user_object_name': USER_OBJECT_NAME,
        'api_version': API_VERSION,
        'api_host': API_HOST,
        'push_host': PUSH_HOST,
        'app_name': APP_NAME,
    }


def new_stackmob(**overrides):
    """Makes a `StackMob` client from the default settings, with any
    keyword arguments taking their place."""
    kwargs = settings()
    kwargs.update(overrides)
    if not kwargs['api_key'] or not kwargs['api_secret']:
        raise ValueError('A StackMob API key and secret are required; set '
                         'STACKMOB_API_KEY and STACKMOB_API_SECRET')
    return StackMob(**kwargs)
