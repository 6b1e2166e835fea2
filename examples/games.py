#!/usr/bin/env python

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

An example StackMob client that keeps score for games, implemented using
stackmob.

Set STACKMOB_API_KEY and STACKMOB_API_SECRET to your application's
credentials, then:

    $ python games.py --add chess --player alice --player bob
    $ python games.py --list

"""

__version__ = '1.0'
__author__ = 'StackMob Python contributors'


from optparse import OptionParser
import sys

from stackmob import Model, ModelQuery, User, Callback, fields, ASCENDING
from stackmob.configuration import new_stackmob
from stackmob.errors import StackMobError


class Game(Model):
    name    = fields.Field()
    rounds  = fields.Field(type=int, default=0)
    players = fields.List(fields.Related(User))


def add_game(sm, name, players):
    game = Game(name=name, players=[User(p) for p in players])
    result = game.create(Callback(success=lambda g: print('Created %s' % g.id)),
                         client=sm)
    return result


def list_games(sm):

    def show(games):
        for game in games:
            players = ', '.join(p.username for p in game.players or ())
            print('%-20s %3d rounds  %s' % (game.name, game.rounds, players))

    query = ModelQuery(Game).field_is_ordered_by('name', ASCENDING) \
        .expand_depth_is(1).is_in_range(0, 49)
    return query.send(Callback(success=show), client=sm)


def main(argv=None):
    if argv is None:
        argv = sys.argv

    parser = OptionParser()
    parser.add_option("--add", dest="name",
        help="create a game with the given name")
    parser.add_option("--player", action="append", dest="players", default=[],
        help="username of a player in the new game (may be repeated)")
    parser.add_option("--list", action="store_true", dest="list",
        help="show the first fifty games")
    opts, args = parser.parse_args(argv[1:])

    sm = new_stackmob()

    if opts.name is not None:
        result = add_game(sm, opts.name, opts.players)
    else:
        result = list_games(sm)

    try:
        if result.future is None:
            raise result.failure_reason
        result.future.result()
    except StackMobError as exc:
        # The API could be down, or the credentials could be wrong, so show
        # the error to the end user.
        print("Error making request: %s: %s" % (type(exc).__name__, str(exc)),
              file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
