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

The built-in StackMob user model.

Subclass `User` to add fields of your own to the user schema:

>>> class Player(User):
...     schema = 'user'
...     score  = fields.Field(type=int)

"""

from stackmob import fields
from stackmob.model import Model, get_client


class User(Model):

    """A StackMob user, identified by its username."""

    schema = 'user'

    password = fields.Field()
    email = fields.Field()

    def __init__(self, username=None, password=None, **kwargs):
        super(User, self).__init__(id=username, **kwargs)
        if password is not None:
            self.password = password

    @classmethod
    def id_field_name(cls):
        return 'username'

    @property
    def username(self):
        return self.id

    def login(self, callback=None, client=None):
        """Logs in as this user with its username and password."""
        client = get_client(client)
        arguments = {'username': self.username, 'password': self.password}
        return client.login(arguments, callback)

    def logout(self, callback=None, client=None):
        client = get_client(client)
        return client.logout(callback)
