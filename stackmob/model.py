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

`Model` is the base of the classes whose instances are stored on StackMob.

A model class maps to one StackMob schema, named after the class (lowercased)
unless the class sets `schema`. Instances are written to the server with
their related models flattened into identifiers, and read back with related
models rebuilt from whatever the server inlined:

>>> class Author(Model):
...     name = fields.Field()
...
>>> class Book(Model):
...     title  = fields.Field()
...     author = fields.Related(Author)
...
>>> book = Book(title='Emma', author=Author(id='austen'))
>>> book.to_dict()
{'title': 'Emma', 'author': 'austen'}

"""

import logging

import simplejson as json

from stackmob import fields, metadata
from stackmob.callback import IntermediaryCallback
import stackmob.client
from stackmob.dataobject import DataObject
from stackmob.files import File
from stackmob.query import Query


log = logging.getLogger('stackmob.model')


def related_class(fld):
    """Returns the `Model` class a relation field points to."""
    if isinstance(fld, fields.Related):
        return fld.cls
    return fld.type


def get_client(client):
    if client is None:
        return stackmob.client.get_default()
    return client


class Model(DataObject):

    """A `DataObject` stored in a StackMob schema.

    Every instance carries its identifier as `id` (None until the object has
    been saved), whether it has been populated from the server as
    `has_data`, and the number of relation levels to expand when fetched as
    `depth`.

    """

    schema = None

    def __init__(self, id=None, **kwargs):
        self.id = id
        self.has_data = False
        self.depth = 0
        super(Model, self).__init__(**kwargs)

    @classmethod
    def schema_name(cls):
        """Returns the name of the StackMob schema instances of this class
        are stored in."""
        if cls.schema is not None:
            return cls.schema
        return cls.__name__.lower()

    @classmethod
    def id_field_name(cls):
        """Returns the name of the field holding the identifier."""
        return cls.schema_name() + '_id'

    def has_same_id(self, data):
        """Returns whether the JSON value `data` refers to this same
        object."""
        if self.id is None:
            return False
        if isinstance(data, dict):
            other = data.get(self.id_field_name())
        else:
            other = data
        return other is not None and str(other) == str(self.id)

    def to_dict(self):
        """Encodes the `Model` instance as a dictionary ready to be sent as
        JSON.

        Related models are replaced by their identifiers; related models
        that have no identifier yet are left out. Raises
        `ConfigurationError` if the schema name or any field name cannot be
        stored on StackMob.

        """
        table = metadata.ensure_metadata(type(self))

        data = {}
        for name, info in table.items():
            metadata.ensure_valid_name(name, 'field')
            value = getattr(self, info.attrname)
            if value is None:
                continue

            if isinstance(value, File):
                # Attachments are sent in their own textual form whatever
                # the field's kind.
                data[name] = str(value)
                continue

            if info.kind == metadata.MODEL:
                related_id = getattr(value, 'id', value)
                if related_id is not None:
                    data[name] = related_id
            elif info.kind == metadata.MODEL_ARRAY:
                data[name] = [getattr(v, 'id', v) for v in value
                              if getattr(v, 'id', v) is not None]
            else:
                data[name] = info.field.encode(value)

        if self.id is not None:
            data[self.id_field_name()] = self.id

        return data

    def to_json(self):
        return json.dumps(self.to_dict())

    def update_from_dict(self, data):
        """Adds the content of a JSON value decoded from a server response
        to this `Model` instance.

        A bare scalar is taken to be the identifier of an object the server
        did not expand; only the identifier is set and `has_data` stays
        False. Keys the class has no field for are skipped.

        """
        if not isinstance(data, dict):
            self.id = str(data)
            return self

        cls = type(self)
        id_name = self.id_field_name()
        for name, value in data.items():
            if name == id_name:
                self.id = None if value is None else str(value)
                continue

            info = metadata.field_info(cls, name)
            if info is None:
                log.debug('Skipping unknown field %r of %s', name, cls.__name__)
                continue

            if info.kind == metadata.MODEL:
                value = self._related(related_class(info.field),
                                      [getattr(self, info.attrname)], value)
            elif info.kind == metadata.MODEL_ARRAY:
                if value is not None:
                    existing = list(getattr(self, info.attrname) or ())
                    elem_cls = related_class(info.field.fld)
                    value = info.field.container(
                        self._related(elem_cls, existing, v) for v in value)
            else:
                value = info.field.decode(value)

            setattr(self, info.attrname, value)

        self.has_data = True
        return self

    def _related(self, cls, existing, data):
        if data is None:
            return None
        for obj in existing:
            if isinstance(obj, Model) and obj.has_same_id(data):
                return obj.update_from_dict(data)
        return cls().update_from_dict(data)

    @classmethod
    def from_dict(cls, data):
        """Makes a new instance of this `Model` class from a decoded JSON
        value."""
        self = cls()
        self.update_from_dict(data)
        return self

    def _filling_callback(self, callback):
        def fill(body):
            self.update_from_dict(json.loads(body))
            return self
        return IntermediaryCallback(callback, fill)

    def create(self, callback=None, client=None):
        """Saves this instance as a new object.

        On success the instance is updated with what the server stored,
        including the identifier it assigned, and `callback` receives the
        instance.

        """
        client = get_client(client)
        return client.post(self.schema_name(), self,
                           self._filling_callback(callback))

    def fetch(self, callback=None, depth=None, client=None):
        """Refreshes this instance from the server.

        Optional parameter `depth` sets how many levels of related objects
        the server should expand into the response.

        """
        if self.id is None:
            raise ValueError('Cannot fetch %r with no id' % self)
        if depth is not None:
            self.depth = depth

        arguments = {}
        if self.depth > 0:
            arguments['_expand'] = str(self.depth)

        client = get_client(client)
        return client.get('%s/%s' % (self.schema_name(), self.id), arguments,
                          callback=self._filling_callback(callback))

    def save(self, callback=None, client=None):
        """Saves this instance, creating it on the server if it has no
        identifier yet."""
        if self.id is None:
            return self.create(callback, client=client)
        client = get_client(client)
        return client.put(self.schema_name(), self.id, self,
                          self._filling_callback(callback))

    def destroy(self, callback=None, client=None):
        if self.id is None:
            raise ValueError('Cannot destroy %r with no id' % self)
        client = get_client(client)
        return client.delete(self.schema_name(), self.id, callback)

    def __repr__(self):
        return '<%s %s>' % (type(self).__name__, self.id)


class ModelQuery(object):

    """A `Query` whose results are instances of a `Model` class.

    >>> ModelQuery(Book).field(QueryField('title').is_equal_to('Emma')) \\
    ...     .send(Callback(success=print))

    """

    def __init__(self, cls):
        self.cls = cls
        self.query = Query(cls.schema_name())

    def field(self, query_field):
        """Adds the directives built on a `QueryField`."""
        self.query.add(query_field.get_query())
        return self

    def field_is_near(self, field, point):
        self.query.field_is_near(field, point)
        return self

    def field_is_near_within_mi(self, field, point, max_distance_mi):
        self.query.field_is_near_within_mi(field, point, max_distance_mi)
        return self

    def field_is_near_within_km(self, field, point, max_distance_km):
        self.query.field_is_near_within_km(field, point, max_distance_km)
        return self

    def field_is_within_radius_in_mi(self, field, point, radius_mi):
        self.query.field_is_within_radius_in_mi(field, point, radius_mi)
        return self

    def field_is_within_radius_in_km(self, field, point, radius_km):
        self.query.field_is_within_radius_in_km(field, point, radius_km)
        return self

    def field_is_within_box(self, field, lower_left, upper_right):
        self.query.field_is_within_box(field, lower_left, upper_right)
        return self

    def field_is_in(self, field, values):
        self.query.field_is_in(field, values)
        return self

    def field_is_less_than(self, field, value):
        self.query.field_is_less_than(field, value)
        return self

    def field_is_less_than_or_equal_to(self, field, value):
        self.query.field_is_less_than_or_equal_to(field, value)
        return self

    def field_is_greater_than(self, field, value):
        self.query.field_is_greater_than(field, value)
        return self

    def field_is_greater_than_or_equal_to(self, field, value):
        self.query.field_is_greater_than_or_equal_to(field, value)
        return self

    def field_is_equal_to(self, field, value):
        self.query.field_is_equal_to(field, value)
        return self

    def field_is_ordered_by(self, field, ordering):
        self.query.field_is_ordered_by(field, ordering)
        return self

    def expand_depth_is(self, depth):
        self.query.expand_depth_is(depth)
        return self

    def is_in_range(self, start, end=None):
        self.query.is_in_range(start, end)
        return self

    def select(self, fields):
        self.query.select(fields)
        return self

    def send(self, callback=None, client=None):
        """Runs the query; `callback` receives a list of instances."""
        cls = self.cls

        def build(body):
            return [cls.from_dict(item) for item in json.loads(body)]

        client = get_client(client)
        return client.get_query(self.query, IntermediaryCallback(callback, build))
