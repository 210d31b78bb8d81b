# Copyright 2014 Red Hat, Inc.
# All Rights Reserved.
#
#    Licensed under the Apache License, Version 2.0 (the "License"); you may
#    not use this file except in compliance with the License. You may obtain
#    a copy of the License at
#
#         http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
#    WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
#    License for the specific language governing permissions and limitations
#    under the License.

from unittest import mock

V2_URL = 'https://keystone.example.com/v2.0'
V3_URL = 'https://keystone.example.com/v3'
RAX_URL = 'https://identity.api.rackspacecloud.com/v2.0'
STORAGE_URL = 'https://storage.example.com/v1/AUTH_123456'
TOKEN = 'a3f3c0b4c1d1'
EXPIRES = '2099-01-01T00:00:00Z'


def v2_token_body(token=TOKEN, region='DFW', service_name='cloudFiles',
                  storage_url=STORAGE_URL):
    return {
        'access': {
            'token': {
                'id': token,
                'expires': EXPIRES,
                'tenant': {'id': '123456', 'name': '123456'},
            },
            'user': {'id': 'u1', 'name': 'demo', 'roles': []},
            'serviceCatalog': [
                {'type': 'object-store',
                 'name': service_name,
                 'endpoints': [
                     {'region': region,
                      'tenantId': '123456',
                      'publicURL': storage_url,
                      'internalURL': storage_url.replace('https://',
                                                         'https://snet-')},
                 ]},
                {'type': 'rax:object-cdn',
                 'name': 'cloudFilesCDN',
                 'endpoints': [
                     {'region': region,
                      'publicURL': 'https://cdn.example.com/v1/AUTH_1'},
                 ]},
            ],
        },
    }


def v3_token_body(region='RegionOne', storage_url=STORAGE_URL):
    return {
        'token': {
            'methods': ['password'],
            'expires_at': EXPIRES,
            'user': {'id': 'u1', 'name': 'demo',
                     'domain': {'id': 'default', 'name': 'Default'}},
            'project': {'id': 'p1', 'name': 'demo',
                        'domain': {'id': 'default', 'name': 'Default'}},
            'catalog': [
                {'type': 'object-store',
                 'name': 'swift',
                 'id': 's1',
                 'endpoints': [
                     {'id': 'e1', 'interface': 'public',
                      'region': region, 'region_id': region,
                      'url': storage_url},
                 ]},
            ],
        },
    }


def fake_config(**kwargs):
    config = {
        'url': V2_URL,
        'region': 'DFW',
        'username': 'demo',
        'password': 'secret',
        'tenant_name': '123456',
        'container': 'files',
    }
    config.update(kwargs)
    return config


class FakeSession(object):
    """Stands in for an authenticated ObjectStoreSession."""

    def __init__(self, conn=None):
        self.connection = conn or mock.MagicMock()
        self.closed = False

    def get_connection(self):
        return self.connection

    def close(self):
        self.closed = True


class FakeBody(object):
    """Chunked object body that records whether it was closed."""

    def __init__(self, chunks, fail_after=None):
        self.chunks = chunks
        self.fail_after = fail_after
        self.closed = False

    def __iter__(self):
        for i, chunk in enumerate(self.chunks):
            if self.fail_after is not None and i >= self.fail_after:
                raise IOError('connection reset')
            yield chunk

    def close(self):
        self.closed = True
