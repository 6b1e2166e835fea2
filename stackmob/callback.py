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

Completion callbacks for StackMob requests.

Every request reports back exactly once, through either `success()` with
the raw response body or `failure()` with the exception describing what
went wrong. Callbacks may run on a worker thread.

"""

import logging


log = logging.getLogger('stackmob.callback')


class Callback(object):

    """Receives the outcome of a request.

    Subclass and override `success()` and `failure()`, or pass plain
    functions:

    >>> Callback(success=lambda body: print(body))

    """

    def __init__(self, success=None, failure=None):
        if success is not None:
            self.success = success
        if failure is not None:
            self.failure = failure

    def success(self, response_body):
        pass

    def failure(self, exc):
        log.debug('Request failed with nobody listening: %s', exc)


class IntermediaryCallback(Callback):

    """A callback that does some work with a successful response before
    passing it on to another callback."""

    def __init__(self, callback, on_success):
        self.callback = callback if callback is not None else Callback()
        self.on_success = on_success

    def success(self, response_body):
        try:
            result = self.on_success(response_body)
        except Exception as exc:
            self.callback.failure(exc)
            return
        self.callback.success(response_body if result is None else result)

    def failure(self, exc):
        self.callback.failure(exc)
