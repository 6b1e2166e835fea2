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

import unittest

import httplib2
import mock
import simplejson as json

from stackmob import client, configuration
from stackmob.client import StackMob
from stackmob.http import SENT
from stackmob.push import PushToken, IOS, ANDROID
from stackmob.query import Query
from tests import utils


API = 'http://api.mob1.stackmob.com/'
SECURE_API = 'https://api.mob1.stackmob.com/'
PUSH = 'http://push.mob1.stackmob.com/'


class ClientTestCase(unittest.TestCase):

    def setUp(self):
        self.http = mock.Mock(spec_set=httplib2.Http)
        self.http.request.return_value = utils.make_response('{}')
        self.sm = utils.stackmob_client(self.http)

    def assertSent(self, method, uri, body=None, headers=None):
        request = utils.request_sent(self.http)
        self.assertEqual(request['method'], method)
        self.assertEqual(request['uri'], uri)
        if body is None:
            self.assertTrue(request['body'] is None)
        else:
            self.assertEqual(json.loads(request['body']), body)
        for key, value in (headers or {}).items():
            self.assertEqual(request['headers'][key], value)


class TestRest(ClientTestCase):

    def test_get(self):
        callback = utils.RecordingCallback()
        result = self.sm.get('game', {'name': 'chess'}, {'X-StackMob-Expand': '1'}, callback)
        self.assertEqual(result.status, SENT)
        self.assertSent('GET', API + 'game?name=chess', headers={'X-StackMob-Expand': '1'})
        self.assertEqual(callback.successes, ['{}'])

    def test_get_query(self):
        q = Query.objects('game').field_is_less_than('players', 4).is_in_range(0, 4)
        self.sm.get_query(q)
        self.assertSent('GET', API + 'game?players%5Blt%5D=4',
                        headers={'Range': 'objects=0-4'})

    def test_post(self):
        self.sm.post('game', {'name': 'chess', 'rules': None})
        self.assertSent('POST', API + 'game', {'name': 'chess', 'rules': None})

    def test_post_model(self):
        self.sm.post('simple', utils.Simple(foo='x'))
        self.assertSent('POST', API + 'simple', {'foo': 'x'})

    def test_post_bulk(self):
        self.sm.post_bulk('simple', [utils.Simple(foo='x'), {'foo': 'y'}])
        self.assertSent('POST', API + 'simple', [{'foo': 'x'}, {'foo': 'y'}])

    def test_put(self):
        self.sm.put('game', 'g1', {'name': 'go'})
        self.assertSent('PUT', API + 'game/g1', {'name': 'go'})

    def test_delete(self):
        self.sm.delete('game', 'g1')
        self.assertSent('DELETE', API + 'game/g1')


class TestRelations(ClientTestCase):

    def test_post_related(self):
        self.sm.post_related('game', 'g1', 'players', {'name': 'bob'})
        self.assertSent('POST', API + 'game/g1/players', {'name': 'bob'})

    def test_post_related_bulk(self):
        self.sm.post_related_bulk('game', 'g1', 'players', [{'name': 'bob'}, {'name': 'al'}])
        self.assertSent('POST', API + 'game/g1/players', [{'name': 'bob'}, {'name': 'al'}])

    def test_put_related(self):
        self.sm.put_related('game', 'g1', 'players', ['p1', 'p2'])
        self.assertSent('PUT', API + 'game/g1/players', ['p1', 'p2'])

    def test_delete_ids_from(self):
        self.sm.delete_ids_from('game', 'g1', 'players', ['p1', 'p2', 3])
        self.assertSent('DELETE', API + 'game/g1/players/p1,p2,3')
        self.assertFalse('X-StackMob-CascadeDelete' in utils.request_sent(self.http)['headers'])

    def test_cascade_delete(self):
        self.sm.delete_ids_from('game', 'g1', 'players', ['p1'], cascade_deletes=True)
        self.assertSent('DELETE', API + 'game/g1/players/p1',
                        headers={'X-StackMob-CascadeDelete': 'true'})

    def test_delete_id_from(self):
        self.sm.delete_id_from('game', 'g1', 'players', 'p1', True)
        self.assertSent('DELETE', API + 'game/g1/players/p1',
                        headers={'X-StackMob-CascadeDelete': 'true'})


class TestUsers(ClientTestCase):

    def test_login(self):
        self.sm.login({'username': 'bob', 'password': 'pw'})
        self.assertSent('GET', SECURE_API + 'user/login?username=bob&password=pw')

    def test_logout(self):
        self.sm.logout()
        self.assertSent('GET', SECURE_API + 'user/logout')

    def test_user_object_name(self):
        sm = utils.stackmob_client(self.http, user_object_name='account')
        sm.logout()
        self.assertSent('GET', SECURE_API + 'account/logout')

    def test_start_session(self):
        self.sm.start_session()
        self.assertSent('GET', API + 'startsession')

    def test_forgot_password(self):
        self.sm.forgot_password('bob')
        self.assertSent('POST', SECURE_API + 'user/forgotPassword', {'username': 'bob'})

    def test_reset_password(self):
        self.sm.reset_password('old', 'new')
        self.assertSent('POST', SECURE_API + 'user/resetPassword',
                        {'old': {'password': 'old'}, 'new': {'password': 'new'}})

    def test_twitter(self):
        self.sm.twitter_login('tok', 'sec')
        self.assertSent('GET', SECURE_API + 'user/twitterlogin?tw_tk=tok&tw_ts=sec')

        self.sm.twitter_status_update('hello world')
        self.assertSent('GET', SECURE_API + 'user/twitterStatusUpdate?tw_st=hello%20world')

        self.sm.register_with_twitter_token('tok', 'sec', 'bob')
        self.assertSent('GET', SECURE_API + 'user/createUserWithTwitter?tw_tk=tok&tw_ts=sec&username=bob')

        self.sm.link_user_with_twitter_token('tok', 'sec')
        self.assertSent('GET', SECURE_API + 'user/linkUserWithTwitter?tw_tk=tok&tw_ts=sec')

        self.sm.get_twitter_user_info()
        self.assertSent('GET', SECURE_API + 'user/getTwitterUserInfo')

    def test_facebook(self):
        self.sm.facebook_login('tok')
        self.assertSent('GET', SECURE_API + 'user/facebookLogin?fb_at=tok')

        self.sm.register_with_facebook_token('tok', 'bob')
        self.assertSent('GET', SECURE_API + 'user/createUserWithFacebook?fb_at=tok&username=bob')

        self.sm.link_user_with_facebook_token('tok')
        self.assertSent('GET', SECURE_API + 'user/linkUserWithFacebook?fb_at=tok')

        self.sm.facebook_post_message('hi')
        self.assertSent('GET', SECURE_API + 'user/postFacebookMessage?message=hi')

        self.sm.get_facebook_user_info()
        self.assertSent('GET', SECURE_API + 'user/getFacebookUserInfo')


class TestPush(ClientTestCase):

    def test_push_to_tokens(self):
        tokens = [PushToken('abc', IOS), PushToken('def', ANDROID)]
        self.sm.push_to_tokens({'alert': 'hi'}, tokens)
        self.assertSent('POST', PUSH + 'push_tokens_universal', {
            'payload': {'kvPairs': {'alert': 'hi'}},
            'tokens': [{'token': 'abc', 'type': 'ios'}, {'token': 'def', 'type': 'android'}],
        })

    def test_push_to_users(self):
        self.sm.push_to_users({'alert': 'hi'}, ['bob', 'al'])
        self.assertSent('POST', PUSH + 'push_users_universal',
                        {'kvPairs': {'alert': 'hi'}, 'userIds': ['bob', 'al']})

    def test_register(self):
        self.sm.register_for_push_with_user('bob', 'reg-id')
        self.assertSent('POST', PUSH + 'register_device_token_universal',
                        {'userId': 'bob', 'token': {'token': 'reg-id', 'type': 'android'}})

    def test_register_token(self):
        self.sm.register_for_push_with_user('bob', PushToken('dev', IOS))
        self.assertSent('POST', PUSH + 'register_device_token_universal',
                        {'userId': 'bob', 'token': {'token': 'dev', 'type': 'ios'}})

    def test_get_tokens_for_users(self):
        self.sm.get_tokens_for_users(['bob', 'al'])
        self.assertSent('GET', PUSH + 'get_tokens_for_users_universal?userIds=bob%2Cal')

    def test_broadcast(self):
        self.sm.broadcast_push_notification({'alert': 'all'})
        self.assertSent('POST', PUSH + 'push_broadcast', {'kvPairs': {'alert': 'all'}})

    def test_expired_tokens(self):
        self.sm.get_expired_push_tokens()
        self.assertSent('POST', PUSH + 'get_expired_tokens_universal', {'clear': False})

        self.sm.get_and_clear_expired_push_tokens()
        self.assertSent('POST', PUSH + 'get_expired_tokens_universal', {'clear': True})

    def test_remove_push_token(self):
        self.sm.remove_push_token('abc', IOS)
        self.assertSent('POST', PUSH + 'remove_push_token_universal',
                        {'token': 'abc', 'type': 'ios'})


class TestDefaults(unittest.TestCase):

    def test_default_client(self):
        client.set_default(None)
        self.assertRaises(ValueError, client.get_default)

        sm = utils.stackmob_client(utils.mock_http())
        client.set_default(sm)
        self.addCleanup(client.set_default, None)
        self.assertTrue(client.get_default() is sm)

    def test_client_defaults(self):
        sm = StackMob('key', 'secret')
        self.assertEqual(sm.api_host, 'api.mob1.stackmob.com')
        self.assertEqual(sm.push_host, 'push.mob1.stackmob.com')
        self.assertEqual(sm.session.user_object_name, 'user')
        self.assertEqual(sm.max_redirects, 5)

    def test_new_stackmob(self):
        with mock.patch.multiple(configuration, API_KEY='envkey', API_SECRET='envsecret',
                                 API_VERSION=1, APP_NAME='chess'):
            sm = configuration.new_stackmob(api_host='api.mob9.stackmob.com')
        self.assertEqual(sm.session.api_key, 'envkey')
        self.assertEqual(sm.session.api_secret, 'envsecret')
        self.assertEqual(sm.session.api_version, 1)
        self.assertEqual(sm.session.app_name, 'chess')
        self.assertEqual(sm.api_host, 'api.mob9.stackmob.com')

    def test_new_stackmob_needs_credentials(self):
        with mock.patch.multiple(configuration, API_KEY=None, API_SECRET=None):
            self.assertRaises(ValueError, configuration.new_stackmob)
            sm = configuration.new_stackmob(api_key='k', api_secret='s')
        self.assertEqual(sm.session.api_key, 'k')


if __name__ == '__main__':
    unittest.main()
