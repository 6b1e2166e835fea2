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

`StackMob` is the client for one StackMob application.

It holds the application's `Session`, the current `Endpoints`, a cookie
store, and the user agent and worker pool its requests are sent with. Each
method builds one `stackmob.http.Request`, sends it, and returns the
request's `SendResult`; the outcome is delivered to the method's callback.

"""

import logging
import threading

import simplejson as json

from stackmob import fields
from stackmob.cookies import CookieStore
from stackmob.http import Request, DEFAULT_MAX_REDIRECTS
from stackmob.push import PushToken
from stackmob.session import Session, Endpoints, DEFAULT_API_HOST, DEFAULT_PUSH_HOST


log = logging.getLogger('stackmob.client')

CASCADE_DELETE_HEADER = 'X-StackMob-CascadeDelete'

default_client = None
default_lock = threading.Lock()


def set_default(client):
    """Makes `client` the client models use when none is given."""
    global default_client
    with default_lock:
        default_client = client


def get_default():
    with default_lock:
        client = default_client
    if client is None:
        raise ValueError('No default StackMob client has been set')
    return client


def to_body(obj):
    """Encodes a request object as a JSON body."""
    if hasattr(obj, 'to_dict'):
        obj = obj.to_dict()
    elif isinstance(obj, (list, tuple)):
        obj = [o.to_dict() if hasattr(o, 'to_dict') else o for o in obj]
    return json.dumps(obj, default=fields.omit_nulls)


def join_ids(ids):
    return ','.join(str(i) for i in ids)


class StackMob(object):

    """A client for the StackMob REST API.

    Optional parameter `redirected` is called as
    ``redirected(original_url, headers, body, new_url)`` whenever a request
    is redirected to a new API or push host, so callers can remember the
    new host between runs. `http` is the `httplib2.Http` compatible user
    agent to send with and `executor` the `concurrent.futures.Executor` to
    send on; by default each worker thread uses its own user agent and all
    clients share one pool.

    """

    def __init__(self, api_key, api_secret, user_object_name='user',
                 api_version=0, app_name=None, api_host=DEFAULT_API_HOST,
                 push_host=DEFAULT_PUSH_HOST, redirected=None, http=None,
                 executor=None, max_redirects=DEFAULT_MAX_REDIRECTS):
        self.session = Session(api_key, api_secret,
                               user_object_name=user_object_name,
                               api_version=api_version, app_name=app_name)
        self.endpoints = Endpoints(api_host, push_host)
        self.cookies = CookieStore()
        self.user_redirected = redirected
        self.http = http
        self.executor = executor
        self.max_redirects = max_redirects

    @property
    def api_host(self):
        return self.endpoints.api_host

    @property
    def push_host(self):
        return self.endpoints.push_host

    def redirected(self, original_url, headers, body, new_url):
        if self.endpoints.update_from_redirect(new_url):
            if self.user_redirected is not None:
                self.user_redirected(original_url, headers, body, new_url)

    def request(self, verb, path, headers=None, arguments=None, body=None,
                push=False, secure=False):
        """Builds a `Request` against the current API host, or push host if
        `push` is true."""
        host = self.endpoints.push_host if push else self.endpoints.api_host
        return Request(self.session, verb, host, path, headers=headers,
                       arguments=arguments, body=body, secure=secure,
                       redirected=self.redirected, http=self.http,
                       executor=self.executor, cookies=self.cookies,
                       max_redirects=self.max_redirects)

    def user_request(self, verb, action, arguments=None, body=None):
        path = '%s/%s' % (self.session.user_object_name, action)
        return self.request(verb, path, arguments=arguments, body=body,
                            secure=True)

    # Raw REST

    def get(self, path, arguments=None, headers=None, callback=None):
        return self.request('GET', path, headers=headers,
                            arguments=arguments).send(callback)

    def get_query(self, query, callback=None):
        """Runs a `Query` against its object collection."""
        return self.get(query.object_name, query.arguments, query.headers,
                        callback)

    def post(self, path, obj, callback=None):
        return self.request('POST', path, body=to_body(obj)).send(callback)

    def post_bulk(self, path, objs, callback=None):
        """Creates several objects in one request."""
        return self.post(path, list(objs), callback)

    def put(self, path, id, obj, callback=None):
        return self.request('PUT', '%s/%s' % (path, id),
                            body=to_body(obj)).send(callback)

    def delete(self, path, id, callback=None):
        return self.request('DELETE', '%s/%s' % (path, id)).send(callback)

    # Relations

    def post_related(self, path, primary_id, related_field, obj, callback=None):
        """Creates a related object and adds it to the relation
        `related_field` of object `primary_id`."""
        return self.post('%s/%s/%s' % (path, primary_id, related_field), obj,
                         callback)

    def post_related_bulk(self, path, primary_id, related_field, objs,
                          callback=None):
        return self.post_related(path, primary_id, related_field, list(objs),
                                 callback)

    def put_related(self, path, primary_id, related_field, related_ids,
                    callback=None):
        """Atomically appends `related_ids` to the relation or array field
        `related_field` of object `primary_id`."""
        return self.put('%s/%s' % (path, primary_id), related_field,
                        list(related_ids), callback)

    def delete_ids_from(self, path, primary_id, field, ids,
                        cascade_deletes=False, callback=None):
        """Atomically removes `ids` from the relation or array field `field`
        of object `primary_id`.

        If `cascade_deletes` is true, the related objects themselves are
        deleted too.

        """
        return self.delete_id_from(path, primary_id, field, join_ids(ids),
                                   cascade_deletes, callback)

    def delete_id_from(self, path, primary_id, field, id,
                       cascade_delete=False, callback=None):
        headers = {}
        if cascade_delete:
            headers[CASCADE_DELETE_HEADER] = 'true'
        path = '%s/%s/%s/%s' % (path, primary_id, field, id)
        return self.request('DELETE', path, headers=headers).send(callback)

    # Users

    def login(self, arguments, callback=None):
        """Logs in with `arguments`, usually ``username`` and
        ``password``."""
        return self.user_request('GET', 'login', arguments).send(callback)

    def logout(self, callback=None):
        return self.user_request('GET', 'logout').send(callback)

    def start_session(self, callback=None):
        return self.request('GET', 'startsession').send(callback)

    def forgot_password(self, username, callback=None):
        """Has StackMob send `username` an email with a temporary
        password."""
        body = to_body({'username': username})
        return self.user_request('POST', 'forgotPassword', body=body).send(callback)

    def reset_password(self, old_password, new_password, callback=None):
        """Changes the logged in user's password."""
        body = to_body({'old': {'password': old_password},
                        'new': {'password': new_password}})
        return self.user_request('POST', 'resetPassword', body=body).send(callback)

    def twitter_login(self, token, secret, callback=None):
        arguments = {'tw_tk': token, 'tw_ts': secret}
        return self.user_request('GET', 'twitterlogin', arguments).send(callback)

    def twitter_status_update(self, message, callback=None):
        arguments = {'tw_st': message}
        return self.user_request('GET', 'twitterStatusUpdate', arguments).send(callback)

    def register_with_twitter_token(self, token, secret, username,
                                    callback=None):
        arguments = {'tw_tk': token, 'tw_ts': secret, 'username': username}
        return self.user_request('GET', 'createUserWithTwitter', arguments).send(callback)

    def link_user_with_twitter_token(self, token, secret, callback=None):
        arguments = {'tw_tk': token, 'tw_ts': secret}
        return self.user_request('GET', 'linkUserWithTwitter', arguments).send(callback)

    def facebook_login(self, token, callback=None):
        arguments = {'fb_at': token}
        return self.user_request('GET', 'facebookLogin', arguments).send(callback)

    def register_with_facebook_token(self, token, username, callback=None):
        arguments = {'fb_at': token, 'username': username}
        return self.user_request('GET', 'createUserWithFacebook', arguments).send(callback)

    def link_user_with_facebook_token(self, token, callback=None):
        arguments = {'fb_at': token}
        return self.user_request('GET', 'linkUserWithFacebook', arguments).send(callback)

    def facebook_post_message(self, message, callback=None):
        arguments = {'message': message}
        return self.user_request('GET', 'postFacebookMessage', arguments).send(callback)

    def get_facebook_user_info(self, callback=None):
        return self.user_request('GET', 'getFacebookUserInfo').send(callback)

    def get_twitter_user_info(self, callback=None):
        return self.user_request('GET', 'getTwitterUserInfo').send(callback)

    # Push notifications

    def post_push(self, path, obj, callback=None):
        return self.request('POST', path, body=to_body(obj),
                            push=True).send(callback)

    def push_to_tokens(self, payload, tokens, callback=None):
        """Sends the key/value pairs in `payload` to every `PushToken` in
        `tokens`."""
        body = {
            'payload': {'kvPairs': payload},
            'tokens': [t.to_dict() for t in tokens],
        }
        return self.post_push('push_tokens_universal', body, callback)

    def push_to_users(self, payload, user_ids, callback=None):
        body = {'kvPairs': payload, 'userIds': list(user_ids)}
        return self.post_push('push_users_universal', body, callback)

    def register_for_push_with_user(self, username, token, callback=None):
        """Registers Android device `token` for pushes to `username`.

        `token` may also be a `PushToken` of any type.

        """
        if not isinstance(token, PushToken):
            token = PushToken(token)
        body = {'userId': username, 'token': token.to_dict()}
        return self.post_push('register_device_token_universal', body, callback)

    def get_tokens_for_users(self, usernames, callback=None):
        arguments = {'userIds': join_ids(usernames)}
        return self.request('GET', 'get_tokens_for_users_universal',
                            arguments=arguments, push=True).send(callback)

    def broadcast_push_notification(self, payload, callback=None):
        """Sends `payload` to every device registered with the
        application."""
        return self.post_push('push_broadcast', {'kvPairs': payload}, callback)

    def get_expired_push_tokens(self, callback=None):
        return self.post_push('get_expired_tokens_universal',
                              {'clear': False}, callback)

    def get_and_clear_expired_push_tokens(self, callback=None):
        return self.post_push('get_expired_tokens_universal',
                              {'clear': True}, callback)

    def remove_push_token(self, token, token_type, callback=None):
        body = PushToken(token, token_type).to_dict()
        return self.post_push('remove_push_token_universal', body, callback)
