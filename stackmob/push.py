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

"""Device tokens for push notifications."""

IOS = 'ios'
ANDROID = 'android'
ANDROID_GCM = 'androidGCM'

TOKEN_TYPES = (IOS, ANDROID, ANDROID_GCM)


class PushToken(object):

    """A device token and the kind of device it belongs to."""

    def __init__(self, token, type=ANDROID):
        if type not in TOKEN_TYPES:
            raise ValueError('Unknown push token type %r' % (type,))
        self.token = token
        self.type = type

    def to_dict(self):
        return {'token': self.token, 'type': self.type}

    def __eq__(self, other):
        return (isinstance(other, PushToken)
                and (self.token, self.type) == (other.token, other.type))

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((self.token, self.type))

    def __repr__(self):
        return 'PushToken(%r, %r)' % (self.token, self.type)
