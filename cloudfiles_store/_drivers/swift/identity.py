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

"""Keystone v2.0 identity exchange"""

import logging

from keystoneauth1 import access
from keystoneauth1 import exceptions as ks_exceptions
from keystoneauth1.identity import base as ks_base
from keystoneauth1.identity import v2 as ks_v2
from keystoneauth1 import session as ks_session
import requests

from cloudfiles_store._drivers.swift import auth

LOG = logging.getLogger(__name__)


def normalize_url(url):
    if not url.endswith('/'):
        url += '/'
    return url


def _log_hook(logger, formatter):
    def hook(response, *args, **kwargs):
        logger.debug(formatter(response))
    return hook


class DescriptorAuth(ks_base.BaseIdentityPlugin):
    """Identity plugin whose token request is built from an AuthDescriptor.

    The response must be a v2.0 ``access`` document.
    """

    def __init__(self, auth_url, descriptor, values):
        super(DescriptorAuth, self).__init__(auth_url=auth_url,
                                             reauthenticate=False)
        self.descriptor = descriptor
        self.values = values

    def get_auth_ref(self, session, **kwargs):
        method, path, body = auth.build_request(self.descriptor, self.values)
        url = normalize_url(self.auth_url) + path
        resp = session.request(url, method, json=body,
                               headers={'Accept': 'application/json'},
                               authenticated=False, log=False)

        try:
            resp_data = resp.json()
        except ValueError:
            raise ks_exceptions.InvalidResponse(response=resp)

        if 'access' not in resp_data:
            raise ks_exceptions.InvalidResponse(response=resp)

        return access.AccessInfoV2(resp_data)


class IdentityClient(object):
    """Bootstrap client for a v2.0 identity endpoint.

    With a descriptor the token request follows that template, otherwise
    the standard v2.0 password exchange is used.

    :param auth_url: identity endpoint, e.g. https://example.com/v2.0
    :param descriptor: optional `auth.AuthDescriptor`
    :param verify: TLS verification flag or CA bundle path
    :param timeout: request timeout in seconds
    :param debug_log: log every identity response when a logger and a
                      message formatter are also given
    :param logger: `logging.Logger` used by the response hook
    :param message_formatter: callable turning a `requests.Response`
                              into a log line
    """

    def __init__(self, auth_url, descriptor=None, verify=True, timeout=None,
                 debug_log=False, logger=None, message_formatter=None):
        self.auth_url = normalize_url(auth_url)
        self.descriptor = descriptor
        self.verify = verify
        self.timeout = timeout
        self.http = requests.Session()
        if debug_log and logger is not None and message_formatter is not None:
            self.http.hooks['response'].append(
                _log_hook(logger, message_formatter))

    @property
    def logging_enabled(self):
        return bool(self.http.hooks['response'])

    def get_auth_plugin(self, values):
        """Return the keystoneauth1 plugin performing the exchange.

        :param values: v2.0 payload with 'username', 'tenantName' and
                       either 'password' or 'apiKey'
        """
        if self.descriptor is not None:
            return DescriptorAuth(self.auth_url, self.descriptor, values)
        return ks_v2.Password(auth_url=self.auth_url,
                              username=values.get('username'),
                              password=values.get('password'),
                              tenant_name=values.get('tenantName') or None,
                              reauthenticate=False)

    def get_session(self, plugin):
        LOG.debug("Building identity session for %s", self.auth_url)
        return ks_session.Session(auth=plugin, session=self.http,
                                  verify=self.verify, timeout=self.timeout)
