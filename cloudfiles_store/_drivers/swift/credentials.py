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

"""Resolve a configuration bag into identity auth options.

If an API key is set, Rackspace's v2.0 "RAX-KSKEY:apiKeyCredentials"
extension is used whatever version the auth URL names. Otherwise the
auth URL must end with the identity API version:

    .../v2.0   v2.0 password authentication
    .../v3     v3 password authentication
"""

import logging
import re
import urllib.parse

from keystoneauth1 import identity as ks_identity

from cloudfiles_store._drivers.swift import auth
from cloudfiles_store._drivers.swift import identity
from cloudfiles_store import exceptions
from cloudfiles_store.i18n import _

LOG = logging.getLogger(__name__)

DEFAULT_DOMAIN = 'default'
RACKSPACE_IDENTITY_HOST = 'identity.api.rackspacecloud.com'
RACKSPACE_CATALOG_NAME = 'cloudFiles'

_VERSION_RE = re.compile(r'/v(\d(\.\d)?)/?$', re.IGNORECASE)
_VERSION_SEGMENT_RE = re.compile(r'^v\d+(\.\d+)?$', re.IGNORECASE)


class PasswordV3(object):
    strategy = 'password-v3'

    def __init__(self, auth_url, username, password, project_name,
                 domain=DEFAULT_DOMAIN):
        self.auth_url = auth_url
        self.username = username
        self.password = password
        self.project_name = project_name
        self.domain = domain
        self.identity = None

    @property
    def payload(self):
        return {
            'user': {
                'name': self.username,
                'password': self.password,
                'domain': {'id': self.domain},
            },
            'scope': {
                'project': {
                    'name': self.project_name,
                    'domain': {'id': self.domain},
                },
            },
        }

    def get_auth_plugin(self):
        return ks_identity.V3Password(
            auth_url=self.auth_url,
            username=self.username,
            password=self.password,
            user_domain_id=self.domain,
            project_name=self.project_name,
            project_domain_id=self.domain,
            reauthenticate=False)


class PasswordV2(object):
    strategy = 'password-v2'

    def __init__(self, auth_url, username, password, tenant_name, identity):
        self.auth_url = auth_url
        self.username = username
        self.password = password
        self.tenant_name = tenant_name
        self.identity = identity

    @property
    def payload(self):
        return {'username': self.username,
                'password': self.password,
                'tenantName': self.tenant_name}

    def get_auth_plugin(self):
        return self.identity.get_auth_plugin(self.payload)


class ApiKeyV2(object):
    strategy = 'apikey-v2'

    def __init__(self, auth_url, username, api_key, tenant_name, identity):
        self.auth_url = auth_url
        self.username = username
        self.api_key = api_key
        self.tenant_name = tenant_name
        self.identity = identity

    @property
    def payload(self):
        return {'username': self.username,
                'apiKey': self.api_key,
                'tenantName': self.tenant_name}

    def get_auth_plugin(self):
        return self.identity.get_auth_plugin(self.payload)


AUTH_OPTION_TYPES = (PasswordV3, PasswordV2, ApiKeyV2)


def get_auth_version(url):
    """Return the identity API version named at the end of ``url``.

    :returns: version without the 'v' prefix, e.g. '2.0' or '3'
    :raises: `exceptions.MissingAuthVersion` if the URL has no version
    """
    match = _VERSION_RE.search(url)
    if match is None:
        raise exceptions.MissingAuthVersion()
    return match.group(1)


def ensure_v2_auth_url(url):
    """Rewrite ``url`` so that it points at the v2.0 identity API.

    The first version segment of the path and everything after it are
    dropped, then 'v2.0' is appended.
    """
    parts = urllib.parse.urlsplit(url)
    segments = parts.path.split('/')
    for i, segment in enumerate(segments):
        if _VERSION_SEGMENT_RE.match(segment):
            segments = segments[:i]
            break
    path = '/'.join(segments).rstrip('/') + '/v2.0'
    return urllib.parse.urlunsplit((parts.scheme, parts.netloc, path,
                                    '', ''))


def is_rackspace(url):
    return RACKSPACE_IDENTITY_HOST in url


def get_catalog_name(url):
    return RACKSPACE_CATALOG_NAME if is_rackspace(url) else None


def get_request_options(config):
    """Transport settings shared by the identity and storage clients."""
    verify = not config.get('insecure', False)
    if verify and config.get('cacert'):
        verify = config['cacert']
    return {'verify': verify, 'timeout': config.get('timeout')}


def _required(config, key, label):
    value = config.get(key)
    if not value:
        reason = _("Object Store %s can not be empty.") % label
        LOG.error(reason)
        raise exceptions.InvalidConfiguration(reason=reason)
    return value


def _identity_client(auth_url, config, descriptor=None):
    return identity.IdentityClient(
        auth_url, descriptor=descriptor,
        debug_log=config.get('debug_log', False),
        logger=config.get('logger'),
        message_formatter=config.get('message_formatter'),
        **get_request_options(config))


def resolve(config):
    """Pick the authentication strategy for ``config``.

    :param config: configuration mapping with 'username', 'url', 'region'
                   and either 'api_key' or 'password'; 'tenant_name' and
                   'domain_id' are optional
    :returns: one of `PasswordV3`, `PasswordV2`, `ApiKeyV2`
    :raises: `exceptions.InvalidConfiguration` (or a subclass) before any
             network call when the configuration cannot be used
    """
    username = _required(config, 'username', _('username'))
    auth_url = _required(config, 'url', _('authentication URL'))
    _required(config, 'region', _('region'))
    tenant_name = config.get('tenant_name')

    api_key = config.get('api_key')
    if api_key:
        auth_url = ensure_v2_auth_url(auth_url)
        LOG.debug("Using API key authentication against %s", auth_url)
        client = _identity_client(auth_url, config, auth.API_KEY_TOKEN)
        return ApiKeyV2(auth_url, username, api_key, tenant_name, client)

    password = config.get('password')
    if not password:
        reason = _("an API key or a password")
        LOG.error(_("Object Store credentials must contain %s."), reason)
        raise exceptions.MissingCredentialError(required=reason)

    version = get_auth_version(auth_url)
    if version == '3':
        LOG.debug("Using v3 password authentication against %s", auth_url)
        return PasswordV3(auth_url, username, password, tenant_name,
                          domain=config.get('domain_id') or DEFAULT_DOMAIN)
    if version == '2.0':
        LOG.debug("Using v2.0 password authentication against %s", auth_url)
        client = _identity_client(auth_url, config)
        return PasswordV2(auth_url, username, password, tenant_name, client)

    raise exceptions.UnsupportedAuthVersion(version=version)
