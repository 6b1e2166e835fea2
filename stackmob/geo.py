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

"""Geographic points for geo queries."""

EARTH_RADIUS_IN_MI = 3956.6
EARTH_RADIUS_IN_KM = 6367.5


def radians_to_mi(radians):
    return radians * EARTH_RADIUS_IN_MI


def radians_to_km(radians):
    return radians * EARTH_RADIUS_IN_KM


def mi_to_radians(mi):
    return mi / EARTH_RADIUS_IN_MI


def km_to_radians(km):
    return km / EARTH_RADIUS_IN_KM


class GeoPoint(object):

    """A longitude/latitude pair.

    Note the constructor takes longitude first, but StackMob wants latitude
    first in query arguments; `as_list()` gives them in query order.

    """

    def __init__(self, lon, lat):
        self.lon = lon
        self.lat = lat

    def as_list(self):
        return [repr(float(self.lat)), repr(float(self.lon))]

    def to_dict(self):
        return {'lon': self.lon, 'lat': self.lat}

    @classmethod
    def from_dict(cls, data):
        return cls(data['lon'], data['lat'])

    def __eq__(self, other):
        return (isinstance(other, GeoPoint)
                and (self.lon, self.lat) == (other.lon, other.lat))

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((self.lon, self.lat))

    def __repr__(self):
        return 'GeoPoint(lon=%r, lat=%r)' % (self.lon, self.lat)
