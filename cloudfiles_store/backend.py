# Copyright 2010-2011 OpenStack Foundation
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

import logging

from oslo_config import cfg

from cloudfiles_store._drivers.swift import store as swift_store
from cloudfiles_store.i18n import _

CONF = cfg.CONF
LOG = logging.getLogger(__name__)

GROUP = 'object_store'

_STORE_OPTS = [
    cfg.StrOpt('url',
               help=_("""
The URL of the identity service.

Password authentication needs the identity API version at the end of
the URL, for instance ``https://keystone.example.com/v3`` or
``https://keystone.example.com/v2.0``. When ``api_key`` is set the
version is rewritten to ``v2.0``.

Possible values:
    * A URL ending with /v2.0 or /v3

Related options:
    * api_key
    * password

""")),
    cfg.StrOpt('region',
               help=_("""
The region of the object storage endpoint.

For Rackspace Cloud Files this is one of ORD, DFW, LON, HKG, IAD or
SYD.

""")),
    cfg.StrOpt('username',
               help=_('The user name for the service connection.')),
    cfg.StrOpt('password', secret=True,
               help=_("""
The password for the service connection.

Ignored when ``api_key`` is set.

Related options:
    * api_key

""")),
    cfg.StrOpt('api_key', secret=True,
               help=_("""
The Rackspace API key for the service connection.

When set, authentication uses the RAX-KSKEY:apiKeyCredentials
extension of the v2.0 identity API and ``password`` is ignored.

Related options:
    * password
    * url

""")),
    cfg.StrOpt('tenant_name',
               help=_('Tenant (project) name. Normally your account '
                      'number.')),
    cfg.StrOpt('domain_id', default='default',
               help=_('Domain of the user and the project for identity '
                      'API v3.')),
    cfg.StrOpt('container',
               help=_("""
Name of the container holding the blobs of this service.

The container is created when the store starts if it does not exist.

""")),
    cfg.StrOpt('service_type', default='object-store',
               help=_('Service catalog type of the object storage '
                      'service.')),
    cfg.StrOpt('endpoint_type', default='public',
               choices=('public', 'internal', 'admin'),
               help=_('Endpoint interface of the object storage service.')),
    cfg.BoolOpt('insecure', default=False,
                help=_('Skip verification of the server certificate.')),
    cfg.StrOpt('cacert',
               help=_('Path to the CA bundle used to verify the server '
                      'certificate.')),
    cfg.FloatOpt('timeout', min=0,
                 help=_('Timeout in seconds of each HTTP request.')),
    cfg.BoolOpt('debug_log', default=False,
                help=_('Log every response of the identity service.')),
]


def register_opts(conf, group=GROUP):
    conf.register_opts(_STORE_OPTS, group=group)


def list_opts():
    return [(GROUP, _STORE_OPTS)]


def _format_response(response):
    return '%s %s %s' % (response.request.method, response.url,
                         response.status_code)


def get_config(conf=None, group=GROUP):
    """Build the configuration mapping expected by the store.

    :param conf: `oslo_config.cfg.ConfigOpts`, defaults to the global CONF
    :param group: option group holding the store options
    """
    if conf is None:
        conf = CONF
    store_conf = getattr(conf, group)
    config = dict((opt.dest, getattr(store_conf, opt.dest))
                  for opt in _STORE_OPTS)
    if config['debug_log']:
        config['logger'] = logging.getLogger('cloudfiles_store.identity')
        config['message_formatter'] = _format_response
    return config


def create_store(conf=None, group=GROUP):
    """Register the store options and return a connected store."""
    if conf is None:
        conf = CONF
    try:
        register_opts(conf, group=group)
    except cfg.DuplicateOptError:
        pass
    LOG.debug("Creating object store from option group %s", group)
    return swift_store.Store(get_config(conf, group=group))
