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

Serialization metadata for `Model` classes.

Every field of a model class falls into one of six kinds, which decide how
the field is written to and read from the wire:

* ``PRIMITIVE``: strings, numbers and booleans, sent as they are
* ``OBJECT``: any other value, sent as a string holding its JSON form
* ``MODEL``: a related model, sent as its identifier
* ``PRIMITIVE_ARRAY``, ``OBJECT_ARRAY``: sequences of the above, sent as
  JSON arrays
* ``MODEL_ARRAY``: a sequence of related models, sent as an array of
  identifiers

Kinds are computed once per class, the first time the class is asked about,
and then kept for the life of the process.

"""

from collections import namedtuple
import logging
import re
import threading

from stackmob import fields
from stackmob.errors import ConfigurationError


PRIMITIVE = 'PRIMITIVE'
OBJECT = 'OBJECT'
MODEL = 'MODEL'
PRIMITIVE_ARRAY = 'PRIMITIVE_ARRAY'
OBJECT_ARRAY = 'OBJECT_ARRAY'
MODEL_ARRAY = 'MODEL_ARRAY'

KINDS = (PRIMITIVE, OBJECT, MODEL, PRIMITIVE_ARRAY, OBJECT_ARRAY, MODEL_ARRAY)

log = logging.getLogger('stackmob.metadata')

invalid_name = re.compile(r'\W|_', re.ASCII)

FieldInfo = namedtuple('FieldInfo', 'name attrname kind field')

metadata_for_classes = {}
metadata_lock = threading.Lock()


def ensure_valid_name(name, thing):
    """Raises `ConfigurationError` unless `name` is 3-25 alphanumeric
    characters.

    Parameter `thing` names what is being checked (``model`` or ``field``)
    for the error message.

    """
    if invalid_name.search(name) or not 3 <= len(name) <= 25:
        raise ConfigurationError(
            'Invalid name for a %s: %s. Must be 3-25 alphanumeric characters'
            % (thing, name))


def is_model_class(cls):
    # Imported late; model.py needs this module to define Model.
    from stackmob.model import Model
    return isinstance(cls, type) and issubclass(cls, Model)


def determine_kind(fld):
    """Returns the kind of the given field instance."""
    if isinstance(fld, fields.List):
        element = fld.fld
        if isinstance(element, fields.Related):
            return MODEL_ARRAY
        if is_model_class(element.type):
            return MODEL_ARRAY
        if element.type is None or element.type in fields.PRIMITIVE_TYPES:
            return PRIMITIVE_ARRAY
        return OBJECT_ARRAY
    if isinstance(fld, fields.Related):
        return MODEL
    if fld.type in fields.BINARY_TYPES:
        # Byte buffers are plain arrays of numbers, not attachments.
        return OBJECT_ARRAY
    if fld.type is None or fld.type in fields.PRIMITIVE_TYPES:
        return PRIMITIVE
    if is_model_class(fld.type):
        return MODEL
    return OBJECT


def build_metadata(cls):
    """Classifies every field of `cls`, keyed by the field's wire name."""
    table = {}
    for attrname, fld in cls.fields.items():
        table[fld.api_name] = FieldInfo(fld.api_name, attrname,
                                        determine_kind(fld), fld)
    return table


def ensure_metadata(cls):
    """Returns the classification table for `cls`, building it if this is
    the first time the class has been asked about.

    The model's schema name is validated on the way. Tables are published
    whole; concurrent first calls may each build one, but only the first
    one stored is ever returned.

    """
    try:
        return metadata_for_classes[cls]
    except KeyError:
        pass

    ensure_valid_name(cls.schema_name(), 'model')
    table = build_metadata(cls)
    log.debug('Classified fields of %s: %r', cls.__name__,
              dict((k, v.kind) for k, v in table.items()))

    with metadata_lock:
        return metadata_for_classes.setdefault(cls, table)


def field_info(cls, name):
    """Returns the `FieldInfo` for the field of `cls` with wire name
    `name`, or None if the class has no such field."""
    return ensure_metadata(cls).get(name)


def classify(cls, name):
    """Returns the kind of the field of `cls` with wire name `name`, or None
    if the class has no such field."""
    info = field_info(cls, name)
    if info is None:
        return None
    return info.kind
