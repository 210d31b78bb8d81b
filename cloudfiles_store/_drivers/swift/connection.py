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

"""Authenticated handle on the object storage service"""

import logging

from keystoneauth1 import session as ks_session
from oslo_utils import encodeutils
import swiftclient

from cloudfiles_store._drivers.swift import utils as sutils
from cloudfiles_store import exceptions
from cloudfiles_store.i18n import _

LOG = logging.getLogger(__name__)

DEFAULT_SERVICE_TYPE = 'object-store'
DEFAULT_ENDPOINT_TYPE = 'public'


class ObjectStoreSession(object):
    """Token, endpoint and swiftclient connection of one store.

    The token is obtained once. The swift connection is built with that
    token and no retries, so an expired token is reported by Swift as a
    401 rather than refreshed.
    """

    def __init__(self, options, region, catalog_name=None,
                 service_type=DEFAULT_SERVICE_TYPE,
                 endpoint_type=DEFAULT_ENDPOINT_TYPE,
                 verify=True, timeout=None):
        self.options = options
        self.region = region
        self.catalog_name = catalog_name
        self.service_type = service_type
        self.endpoint_type = endpoint_type
        self.verify = verify
        self.timeout = timeout
        self.endpoint = None
        self.token = None
        self.connection = None

    @classmethod
    def open(cls, options, region, **kwargs):
        """Authenticate and return a ready session.

        :raises: `exceptions.ConnectionFailed` if the identity exchange or
                 the endpoint lookup fails; `exceptions.InvalidConfiguration`
                 is re-raised unchanged
        """
        session = cls(options, region, **kwargs)
        try:
            session.authenticate()
        except (exceptions.InvalidConfiguration,
                exceptions.ConnectionFailed):
            raise
        except Exception as e:
            error = sutils.translate_error(e, 'POST') or e
            reason = encodeutils.exception_to_unicode(error)
            LOG.error(_("Failed to authenticate against %(url)s: "
                        "%(reason)s"),
                      {'url': options.auth_url, 'reason': reason})
            raise exceptions.ConnectionFailed(reason=reason) from e
        return session

    def _get_keystone_session(self, plugin):
        if self.options.identity is not None:
            return self.options.identity.get_session(plugin)
        return ks_session.Session(auth=plugin, verify=self.verify,
                                  timeout=self.timeout)

    def authenticate(self):
        plugin = self.options.get_auth_plugin()
        sess = self._get_keystone_session(plugin)

        self.token = sess.get_token()
        endpoint = sess.get_endpoint(service_type=self.service_type,
                                     interface=self.endpoint_type,
                                     region_name=self.region,
                                     service_name=self.catalog_name)
        if not endpoint:
            reason = (_("No %(type)s endpoint found for region %(region)s") %
                      {'type': self.service_type, 'region': self.region})
            raise exceptions.ConnectionFailed(reason=reason)
        self.endpoint = endpoint
        LOG.debug("Using object store endpoint %s", endpoint)

        self.connection = self.get_store_connection(self.token, endpoint)

    def get_store_connection(self, auth_token, storage_url):
        """Get initialized swift connection

        :param auth_token: auth token
        :param storage_url: swift storage url
        :return: swiftclient connection that allows to request container and
                 others
        """
        insecure = self.verify is False
        cacert = self.verify if isinstance(self.verify, str) else None
        return swiftclient.Connection(
            preauthurl=storage_url,
            preauthtoken=auth_token,
            retries=0,
            insecure=insecure,
            cacert=cacert,
            timeout=self.timeout)

    @property
    def is_open(self):
        return self.connection is not None

    def get_connection(self):
        if self.connection is None:
            raise exceptions.NotConnected()
        return self.connection

    def close(self):
        if self.connection is not None:
            self.connection.close()
        self.connection = None
        self.token = None
