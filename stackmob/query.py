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

Queries against a StackMob object collection.

A `Query` accumulates directives in two places: request headers (range,
ordering, expansion depth and field selection) and query string arguments
(comparisons, keyed ``field`` or ``field[operator]``). Each directive method
returns the same query, so directives chain:

    >>> q = Query.objects('user').field_is_greater_than('age', 20) \\
    ...         .field_is_ordered_by('name', ASCENDING).is_in_range(0, 9)
    >>> q.arguments
    {'age[gt]': '20'}

Queries are not thread safe. Build each query from a single thread.

"""

from stackmob import geo


RANGE_HEADER = 'Range'
EXPAND_HEADER = 'X-StackMob-Expand'
ORDER_BY_HEADER = 'X-StackMob-OrderBy'
SELECT_HEADER = 'X-StackMob-Select'

ASCENDING = 'asc'
DESCENDING = 'desc'

LT = 'lt'
GT = 'gt'
LTE = 'lte'
GTE = 'gte'
IN = 'in'
NEAR = 'near'
WITHIN = 'within'


def query_value(value):
    """Converts a directive value to its query string form."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def join(values):
    return ','.join(query_value(v) for v in values)


class Query(object):

    """A set of directives selecting objects from one collection."""

    def __init__(self, object_name):
        self.object_name = object_name
        self.headers = {}
        self.arguments = {}

    @classmethod
    def objects(cls, object_name):
        return cls(object_name)

    def add(self, other):
        """Merges the directives of query `other` into this query.

        Where both queries set the same header or argument, `other` wins.

        """
        self.headers.update(other.headers)
        self.arguments.update(other.arguments)
        return self

    def field(self, name):
        """Returns a `QueryField` that adds directives on field `name` to
        this query."""
        return QueryField(name, self)

    def put_in_map(self, field, operator, value):
        self.arguments['%s[%s]' % (field, operator)] = value
        return self

    def field_is_near(self, field, point):
        """Matches points near `point`, nearest first."""
        return self.put_in_map(field, NEAR, join(point.as_list()))

    def field_is_near_within_mi(self, field, point, max_distance_mi):
        """Matches points at most `max_distance_mi` miles from `point`,
        nearest first."""
        args = point.as_list() + [geo.mi_to_radians(max_distance_mi)]
        return self.put_in_map(field, NEAR, join(args))

    def field_is_near_within_km(self, field, point, max_distance_km):
        """Matches points at most `max_distance_km` kilometres from `point`,
        nearest first."""
        args = point.as_list() + [geo.km_to_radians(max_distance_km)]
        return self.put_in_map(field, NEAR, join(args))

    def field_is_within_radius_in_mi(self, field, point, radius_mi):
        """Matches points within `radius_mi` miles of `point`, unsorted."""
        args = point.as_list() + [geo.mi_to_radians(radius_mi)]
        return self.put_in_map(field, WITHIN, join(args))

    def field_is_within_radius_in_km(self, field, point, radius_km):
        """Matches points within `radius_km` kilometres of `point`,
        unsorted."""
        args = point.as_list() + [geo.km_to_radians(radius_km)]
        return self.put_in_map(field, WITHIN, join(args))

    def field_is_within_box(self, field, lower_left, upper_right):
        """Matches points inside the box with the given corners."""
        args = lower_left.as_list() + upper_right.as_list()
        return self.put_in_map(field, WITHIN, join(args))

    def field_is_in(self, field, values):
        return self.put_in_map(field, IN, join(values))

    def field_is_less_than(self, field, value):
        return self.put_in_map(field, LT, query_value(value))

    def field_is_less_than_or_equal_to(self, field, value):
        return self.put_in_map(field, LTE, query_value(value))

    def field_is_greater_than(self, field, value):
        return self.put_in_map(field, GT, query_value(value))

    def field_is_greater_than_or_equal_to(self, field, value):
        return self.put_in_map(field, GTE, query_value(value))

    def field_is_equal_to(self, field, value):
        self.arguments[field] = query_value(value)
        return self

    def field_is_ordered_by(self, field, ordering):
        """Adds a sort key. The first ordering added is the primary one."""
        order = '%s:%s' % (field, ordering)
        current = self.headers.get(ORDER_BY_HEADER)
        if current:
            order = current + ',' + order
        self.headers[ORDER_BY_HEADER] = order
        return self

    def expand_depth_is(self, depth):
        """Asks the server to inline `depth` levels of related objects.

        At time of writing StackMob allows a depth of at most 3.

        """
        self.headers[EXPAND_HEADER] = str(depth)
        return self

    def is_in_range(self, start, end=None):
        """Selects objects `start` through `end` inclusive, or every object
        from `start` on when no `end` is given."""
        if end is None:
            self.headers[RANGE_HEADER] = 'objects=%d-' % start
        else:
            self.headers[RANGE_HEADER] = 'objects=%d-%d' % (start, end)
        return self

    def select(self, fields):
        """Restricts the fields returned for each object."""
        self.headers[SELECT_HEADER] = join(fields)
        return self


class QueryField(object):

    """Directives on a single field.

    A `QueryField` either feeds a query it was taken from with
    `Query.field()`, or builds its own directives to be merged in later:

    >>> age = QueryField('age').is_greater_than(20).is_less_than(40)
    >>> Query.objects('user').add(age.get_query()).arguments
    {'age[gt]': '20', 'age[lt]': '40'}

    """

    def __init__(self, name, query=None):
        self.name = name
        if query is None:
            query = Query('')
        self.query = query

    def get_query(self):
        return self.query

    def field(self, name):
        return QueryField(name, self.query)

    def is_equal_to(self, value):
        self.query.field_is_equal_to(self.name, value)
        return self

    def is_near(self, point):
        self.query.field_is_near(self.name, point)
        return self

    def is_near_within_mi(self, point, max_distance_mi):
        self.query.field_is_near_within_mi(self.name, point, max_distance_mi)
        return self

    def is_near_within_km(self, point, max_distance_km):
        self.query.field_is_near_within_km(self.name, point, max_distance_km)
        return self

    def is_within_mi(self, point, radius_mi):
        self.query.field_is_within_radius_in_mi(self.name, point, radius_mi)
        return self

    def is_within_km(self, point, radius_km):
        self.query.field_is_within_radius_in_km(self.name, point, radius_km)
        return self

    def is_within_box(self, lower_left, upper_right):
        self.query.field_is_within_box(self.name, lower_left, upper_right)
        return self

    def is_in(self, values):
        self.query.field_is_in(self.name, values)
        return self

    def is_less_than(self, value):
        self.query.field_is_less_than(self.name, value)
        return self

    def is_less_than_or_equal_to(self, value):
        self.query.field_is_less_than_or_equal_to(self.name, value)
        return self

    def is_greater_than(self, value):
        self.query.field_is_greater_than(self.name, value)
        return self

    def is_greater_than_or_equal_to(self, value):
        self.query.field_is_greater_than_or_equal_to(self.name, value)
        return self

    def is_ordered_by(self, ordering):
        self.query.field_is_ordered_by(self.name, ordering)
        return self
