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

import concurrent.futures
import logging

import httplib2
import mock

from stackmob import fields
from stackmob.callback import Callback
from stackmob.client import StackMob
from stackmob.geo import GeoPoint
from stackmob.model import Model


API_KEY = '7f1aebc7-d8e7-4dd1-a6b5-8da4c1c9d1fb'
API_SECRET = '9c1b4a3c-ba69-4a5c-a8ac-5f6d3c8e2d10'


def make_response(response):
    if isinstance(response, Exception):
        # Raised in place of a response by the mock.
        return response

    if isinstance(response, dict):
        response_info = dict(response)
        content = response_info.pop('content', '')
    else:
        response_info = {}
        content = response
    response_info.setdefault('status', 200)

    return httplib2.Response(response_info), content


def mock_http(*responses):
    """Returns a mock user agent that answers successive requests with the
    given responses.

    Each response is the content of a 200 response, a dictionary of response
    headers with the content under ``content``, or an exception to raise.

    """
    http = mock.Mock(spec_set=httplib2.Http)
    http.request.side_effect = [make_response(r) for r in responses]
    return http


def request_sent(http, index=-1):
    """Returns the keyword arguments of a request made to a mock user
    agent."""
    return http.request.call_args_list[index][1]


class SynchronousExecutor(concurrent.futures.Executor):

    """An executor that runs everything as soon as it is submitted."""

    def submit(self, fn, *args, **kwargs):
        future = concurrent.futures.Future()
        try:
            result = fn(*args, **kwargs)
        except Exception as exc:
            future.set_exception(exc)
        else:
            future.set_result(result)
        return future


class RecordingCallback(Callback):

    def __init__(self):
        self.successes = []
        self.failures = []

    def success(self, response_body):
        self.successes.append(response_body)

    def failure(self, exc):
        self.failures.append(exc)


def stackmob_client(http, **kwargs):
    kwargs.setdefault('executor', SynchronousExecutor())
    return StackMob(API_KEY, API_SECRET, http=http, **kwargs)


class Author(Model):
    name = fields.Field()


class Book(Model):
    title     = fields.Field()
    publisher = fields.Field()
    author    = fields.Related('Author')


class Library(Model):
    name  = fields.Field()
    books = fields.List(fields.Related(Book))


class Simple(Model):
    foo = fields.Field()
    bar = fields.Field(type=int)


class Complicated(Model):
    number     = fields.Field(type=int)
    flag       = fields.Field(type=bool)
    name       = fields.Field(type=str)
    point      = fields.Object(GeoPoint)
    strings    = fields.List(fields.Field(type=str))
    points     = fields.List(fields.Object(GeoPoint), container=tuple)
    raw        = fields.Field(type=bytes)
    subobject  = fields.Related('Simple')
    subobjects = fields.List(fields.Related('Simple'), container=tuple)


class Bad_Schema_Name(Model):
    foo = fields.Field()


class BadFieldName(Model):
    my_field = fields.Field()


def log():
    import sys
    logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(asctime)s %(levelname)s %(message)s")
