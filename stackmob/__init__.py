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

stackmob is a Python client for the StackMob backend platform.

You define the objects your application stores on StackMob as `Model`
classes and their fields. Instances of those classes can then be created,
fetched, saved and destroyed on StackMob, and found with queries, while the
client signs every request, follows the platform's redirects between hosts,
and keeps the session cookie for you.

stackmob has:

* declarative models whose relations to other models are sent to the
  server as identifiers and rebuilt from whatever the server expands

* chainable queries with comparisons, geo searches, ordering, paging and
  field selection

* asynchronous requests: every call returns at once, and its outcome is
  delivered to a callback from a worker thread


Example
=======

Define a model, then save it through a client::

    >>> from stackmob import Model, StackMob, Callback, fields, set_default
    >>> class Game(Model):
    ...     name    = fields.Field()
    ...     players = fields.List(fields.Related('User'))
    ...
    >>> set_default(StackMob('my-key', 'my-secret', api_version=0))
    >>> Game(name='chess').create(Callback(success=print))


Queries
=======

A `Query` asks for objects of one schema; a `ModelQuery` asks for them as
instances of a model class::

    >>> from stackmob import ModelQuery, QueryField, ASCENDING
    >>> ModelQuery(Game).field(QueryField('name').is_equal_to('chess')) \\
    ...     .field_is_ordered_by('name', ASCENDING).is_in_range(0, 9) \\
    ...     .send(Callback(success=print))

"""

__version__ = '1.0.0'
__author__ = 'StackMob Python contributors'

import stackmob.dataobject
import stackmob.fields as fields
from stackmob.callback import Callback
from stackmob.client import StackMob, set_default, get_default
from stackmob.errors import (StackMobError, ConfigurationError, TransportError,
                             RedirectLoopError, HttpResponseError)
from stackmob.files import File
from stackmob.geo import GeoPoint
from stackmob.model import Model, ModelQuery
from stackmob.push import PushToken
from stackmob.query import Query, QueryField, ASCENDING, DESCENDING
from stackmob.user import User

__all__ = ('Model', 'ModelQuery', 'User', 'fields', 'StackMob', 'Callback',
           'Query', 'QueryField', 'ASCENDING', 'DESCENDING', 'GeoPoint',
           'File', 'PushToken', 'set_default', 'get_default', 'StackMobError',
           'ConfigurationError', 'TransportError', 'RedirectLoopError',
           'HttpResponseError')
