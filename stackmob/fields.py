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

Fields are class attributes for `Model` subclasses that describe how each
attribute travels to and from the StackMob JSON wire format.

Each field is both the accessor and the mutator for its attribute, and
carries enough declared type information for `stackmob.metadata` to sort it
into one of the serialization kinds (primitive, object, model, or an array
of any of those).

"""

import simplejson as json

import stackmob.dataobject


#: Types whose values are sent over the wire as bare JSON scalars.
PRIMITIVE_TYPES = (str, int, float, bool)

#: Types that are raw byte buffers. These are arrays of numbers on the wire.
BINARY_TYPES = (bytes, bytearray)


def omit_nulls(data):
    """Reduces an arbitrary object to its structural JSON form.

    Objects with a `to_dict()` method are encoded through it, plain objects
    through their attribute dictionaries with `None` values removed, and
    anything else through its string form.

    """
    if hasattr(data, 'to_dict'):
        return data.to_dict()
    if not isinstance(data, dict):
        if not hasattr(data, '__dict__'):
            return str(data)
        data = dict(data.__dict__)
    return dict((k, v) for k, v in data.items() if v is not None)


def structure_of(data):
    """Reduces an arbitrary object to its structural JSON form, keeping
    attributes whose value is `None`."""
    if hasattr(data, 'to_dict'):
        return data.to_dict()
    if hasattr(data, '__dict__'):
        return dict(data.__dict__)
    return str(data)


class Property(object):

    """An attribute that can be installed declaratively on a `DataObject`."""

    def install(self, attrname, cls):
        """Signals to the `Property` that it has been installed on the given
        class as an attribute with the given name."""
        pass


class Field(Property):

    """A property for a value stored on the server as a JSON scalar.

    Use a `Field` directly for strings, numbers, and boolean values. Pass
    the expected Python type as `type` to have decoded values coerced to it.
    A `type` of `bytes` declares a byte buffer, which travels as an array of
    integers.

    """

    def __init__(self, type=None, api_name=None, default=None):
        """Sets the field's declared type, wire name and default value.

        Optional parameter `api_name` is the key of this field's value in
        the JSON document. If not given, the attribute name the field was
        declared under is used.

        Optional parameter `default` is the value of the attribute before
        one is assigned or decoded. If `default` is callable, it is called
        with the instance to produce the value.

        """
        self.type = type
        self.api_name = api_name
        self.default = default

    def install(self, attrname, cls):
        self.attrname = attrname
        if self.api_name is None:
            self.api_name = attrname
        self.of_cls = cls

    def __get__(self, obj, cls):
        """Returns the field's value on the given instance, or the field's
        default value if none has been set."""
        if obj is None:
            # Yield the real field instance when gotten through the class.
            return self

        if self.attrname not in obj.__dict__:
            if callable(self.default):
                value = self.default(obj)
            else:
                value = self.default
            obj.__dict__[self.attrname] = value

        return obj.__dict__[self.attrname]

    def __set__(self, obj, value):
        obj.__dict__[self.attrname] = value

    def __delete__(self, obj):
        obj.__dict__.pop(self.attrname, None)

    def decode(self, value):
        """Decodes a JSON value into an attribute value of the declared
        type."""
        if value is None or self.type is None:
            return value
        if self.type in BINARY_TYPES:
            return self.type(value)
        if self.type is bool:
            if not isinstance(value, bool):
                raise TypeError('Value to decode %r is not a valid bool'
                    % (value,))
            return value
        if self.type is int and isinstance(value, float):
            raise TypeError('Value to decode %r is not a valid int' % (value,))
        if isinstance(value, self.type):
            return value
        try:
            return self.type(value)
        except (TypeError, ValueError):
            raise TypeError('Value to decode %r is not a valid %s'
                % (value, self.type.__name__))

    def encode(self, value):
        """Encodes an attribute value into a JSON value."""
        if self.type in BINARY_TYPES:
            return list(value)
        return value


class Object(Field):

    """A field holding an opaque value of some class.

    StackMob schemas do not support nested objects, so the value's
    structural JSON form is itself sent as a JSON string.

    Classes with `to_dict()` and a `from_dict()` class method are encoded
    and rebuilt through them. Other classes travel as their attribute
    dictionaries; attributes holding instances of further plain classes
    must be declared in `nested` for them to be rebuilt:

    >>> class Sensor(object):
    ...     def __init__(self, serial):
    ...         self.serial = serial
    ...
    >>> class Reading(object):
    ...     def __init__(self, celsius, sensor=None):
    ...         self.celsius, self.sensor = celsius, sensor
    ...
    >>> latest = Object(Reading, nested={'sensor': Sensor})

    """

    def __init__(self, cls, nested=None, **kwargs):
        """Sets the class of the field's values.

        Optional parameter `nested` maps attribute names of plain values to
        the class (or `Object` field) their own values are rebuilt as. An
        attribute holding a list has each of its items rebuilt.

        """
        super(Object, self).__init__(type=cls, **kwargs)
        self.nested = {}
        for name, fld in (nested or {}).items():
            if not isinstance(fld, Object):
                fld = Object(fld)
            self.nested[name] = fld

    @property
    def cls(self):
        return self.type

    def structure(self, value):
        """Returns the structural JSON form of `value`."""
        return json.loads(self.encode(value))

    def encode(self, value):
        return json.dumps(value, default=structure_of)

    def decode(self, value):
        """Decodes either the escaped string form or an already structural
        form into an instance of the field's class."""
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except ValueError:
                # Not JSON at all; let the class parse the bare string.
                pass
        return self.rebuild(value)

    def rebuild(self, value):
        """Makes an instance of the field's class from its structural JSON
        form."""
        if value is None:
            return None
        cls = self.cls
        if isinstance(value, cls):
            return value
        if hasattr(cls, 'from_dict'):
            return cls.from_dict(value)
        if not isinstance(value, dict):
            return cls(value)

        obj = cls.__new__(cls)
        obj.__dict__.update(value)
        for name, fld in self.nested.items():
            if name not in value:
                continue
            item = value[name]
            if isinstance(item, list):
                item = [fld.rebuild(v) for v in item]
            else:
                item = fld.rebuild(item)
            obj.__dict__[name] = item
        return obj


class AcceptsStringCls(object):
    """Mixin for fields with a ``cls`` attribute that can either be a
    `Model` subclass or the name of one (to allow forward references)."""

    def get_cls(self):
        cls = self.__dict__['cls']
        if not callable(cls):
            cls = stackmob.dataobject.find_by_name(cls)
        return cls

    def set_cls(self, cls):
        self.__dict__['cls'] = cls

    cls = property(get_cls, set_cls)


class Related(AcceptsStringCls, Field):

    """A field representing a relation to another `Model`.

    Related models are always sent to the server by reference, as their
    identifiers. Responses may carry either the bare identifier or, when
    the request asked for expansion, the full related object.

    """

    def __init__(self, cls, **kwargs):
        """Sets the `Model` class the relation points to.

        `cls` may also be the name of a class, in which case the referenced
        class is the leafmost `Model` subclass declared with that name.

        """
        super(Related, self).__init__(**kwargs)
        self.cls = cls

    @property
    def type(self):
        return self.cls

    @type.setter
    def type(self, value):
        pass


class List(Field):

    """A field representing a homogeneous sequence of data.

    The elements of the sequence are described by another field given when
    the `List` is declared. Decoded sequences are built with `container`,
    which may be `list` or any other ordered collection type.

    """

    def __init__(self, fld, container=list, **kwargs):
        super(List, self).__init__(**kwargs)
        self.fld = fld
        self.container = container

    def install(self, attrname, cls):
        super(List, self).install(attrname, cls)

        # Make sure our content field knows its owner too.
        self.fld.install(attrname, cls)

    def decode(self, value):
        if value is None:
            return None
        return self.container(self.fld.decode(v) for v in value)

    def encode(self, value):
        if isinstance(self.fld, Object):
            # Elements of object arrays stay nested; only lone objects are
            # condensed to strings.
            return [self.fld.structure(v) for v in value]
        return [self.fld.encode(v) for v in value]
