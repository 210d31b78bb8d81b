# Copyright 2014 OpenStack Foundation
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

import datetime

from keystoneauth1 import exceptions as ks_exceptions
from oslotest import base
import requests
import swiftclient

from cloudfiles_store._drivers.swift import utils as sutils
from cloudfiles_store import exceptions


def swift_error(status, reason='', headers=None):
    return swiftclient.ClientException(
        'failed', http_scheme='https', http_host='storage.example.com',
        http_port='8443', http_path='/v1/AUTH_1/files/a.txt',
        http_query='format=json', http_status=status, http_reason=reason,
        http_response_headers=headers)


class TestTranslateError(base.BaseTestCase):

    def test_not_found(self):
        error = sutils.translate_error(
            swift_error(404, 'Not Found', {'X-Trans-Id': 'tx1'}), 'GET')
        self.assertIsInstance(error, exceptions.NotFound)
        self.assertEqual(
            '[404] Client error response. Not Found. GET '
            'https://storage.example.com:8443/v1/AUTH_1/files/a.txt'
            '?format=json (tx1)', str(error))

    def test_bad_request(self):
        error = sutils.translate_error(swift_error(400, 'Bad Request'),
                                       'PUT')
        self.assertIsInstance(error, exceptions.BadRequest)
        self.assertEqual(400, error.code)

    def test_other_status(self):
        error = sutils.translate_error(
            swift_error(507, 'Insufficient Storage',
                        {'X-Openstack-Request-Id': 'req-9'}), 'PUT')
        self.assertIs(type(error), exceptions.RestException)
        self.assertEqual(507, error.code)
        self.assertIn('(req-9)', str(error))

    def test_without_status(self):
        self.assertIsNone(sutils.translate_error(
            swiftclient.ClientException('Unauthorized. Check username')))
        self.assertIsNone(sutils.translate_error(IOError('reset')))

    def test_keystone_error(self):
        response = requests.Response()
        response.status_code = 401
        response.reason = 'Unauthorized'
        response.headers['x-openstack-request-id'] = 'req-1'
        exc = ks_exceptions.from_response(
            response, 'POST', 'https://keystone.example.com/v2.0/tokens')

        error = sutils.translate_error(exc)
        self.assertIs(type(error), exceptions.RestException)
        self.assertEqual(401, error.code)
        self.assertEqual(
            '[401] Client error response. Unauthorized. POST '
            'https://keystone.example.com/v2.0/tokens (req-1)', str(error))

    def test_short_message_with_missing_parts(self):
        self.assertEqual('[500] Client error response. . GET  ()',
                         sutils.build_short_error_message(500, None, 'GET',
                                                          None, None))


class TestMapObject(base.BaseTestCase):

    def test_format_last_modified(self):
        when = datetime.datetime(2016, 2, 29, 23, 59, 1)
        self.assertEqual('Mon, 29 Feb 2016 23:59:01 GMT',
                         sutils.format_last_modified(when))
        self.assertEqual('Mon, 29 Feb 2016 23:59:01 GMT',
                         sutils.format_last_modified(
                             'Mon, 29 Feb 2016 23:59:01 GMT'))
        self.assertIsNone(sutils.format_last_modified(None))

    def test_parse_listing_time(self):
        self.assertEqual(
            'Mon, 29 Feb 2016 23:59:01 GMT',
            sutils.format_last_modified(
                sutils.parse_listing_time('2016-02-29T23:59:01.654321')))
        self.assertIsNone(sutils.parse_listing_time(''))
        self.assertEqual('yesterday',
                         sutils.parse_listing_time('yesterday'))

    def test_datetime_and_string_agree(self):
        from_listing = sutils.map_object({
            'name': 'a.txt', 'content_type': 'text/plain',
            'content_length': 3,
            'last_modified': datetime.datetime(2016, 2, 29, 23, 59, 1)})
        from_head = sutils.map_object({
            'name': 'a.txt', 'content_type': 'text/plain',
            'content_length': 3,
            'last_modified': 'Mon, 29 Feb 2016 23:59:01 GMT'})
        self.assertEqual(from_listing, from_head)
