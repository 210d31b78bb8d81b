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

"""Storage backend for OpenStack Swift and Rackspace Cloud Files"""

import contextlib
import http.client as http_client
import logging

from oslo_utils import encodeutils
import swiftclient

from cloudfiles_store._drivers.swift import connection
from cloudfiles_store._drivers.swift import credentials
from cloudfiles_store._drivers.swift import utils as sutils
from cloudfiles_store import driver
from cloudfiles_store import exceptions
from cloudfiles_store.i18n import _

LOG = logging.getLogger(__name__)


def _is_not_found(exc):
    return (isinstance(exc, swiftclient.ClientException) and
            exc.http_status == http_client.NOT_FOUND)


def _raise_error(exc, method, message, **kwargs):
    """Raise the store exception matching a failed Swift request.

    HTTP failures go through `utils.translate_error`; anything else is
    wrapped in `exceptions.BackendException` using ``message``, which may
    reference ``%(reason)s`` and the keyword arguments.
    """
    error = sutils.translate_error(exc, method)
    if error is None:
        kwargs['reason'] = encodeutils.exception_to_unicode(exc)
        msg = message % kwargs
        LOG.error(msg)
        error = exceptions.BackendException(msg)
    raise error from exc


class Store(driver.Store):
    """Container and blob operations on one Swift account.

    The constructor authenticates once and creates the configured
    container when it is missing. A store holds mutable connection state
    and must not be shared between threads.
    """

    def __init__(self, conf):
        super(Store, self).__init__(conf)
        self.session = None

        try:
            options = credentials.resolve(conf)
            self.session = connection.ObjectStoreSession.open(
                options, conf['region'],
                catalog_name=credentials.get_catalog_name(conf['url']),
                service_type=(conf.get('service_type') or
                              connection.DEFAULT_SERVICE_TYPE),
                endpoint_type=(conf.get('endpoint_type') or
                               connection.DEFAULT_ENDPOINT_TYPE),
                **credentials.get_request_options(conf))
            if not self.container_exists(self.container):
                LOG.info("Creating swift container %(container)s",
                         {'container': self.container})
                self.create_container({'name': self.container})
        except (exceptions.InvalidConfiguration,
                exceptions.ConnectionFailed):
            self.close()
            raise
        except Exception as e:
            self.close()
            reason = encodeutils.exception_to_unicode(e)
            LOG.error(_("Failed to launch OpenStack service: %s"), reason)
            raise exceptions.ConnectionFailed(reason=reason) from e

    def _check_connection(self):
        if self.session is None:
            raise exceptions.NotConnected()
        return self.session.get_connection()

    def close(self):
        if self.session is not None:
            self.session.close()
            self.session = None

    def list_containers(self, include_properties=False):
        conn = self._check_connection()
        try:
            _headers, containers = conn.get_account(full_listing=True)
        except Exception as e:
            _raise_error(e, 'GET', _("Failed to list containers: %(reason)s"))

        out = []
        for container in containers:
            name = container['name'].rstrip()
            item = {'name': name, 'path': name}
            if include_properties:
                item['size'] = container.get('bytes')
                item['count'] = container.get('count')
            out.append(item)
        return out

    def get_container_properties(self, container):
        conn = self._check_connection()
        try:
            headers = conn.head_container(container)
        except Exception as e:
            _raise_error(e, 'HEAD', _("Failed to get container: %(reason)s"))

        return {'name': container,
                'size': int(headers.get('x-container-bytes-used', 0))}

    def container_exists(self, container):
        conn = self._check_connection()
        try:
            conn.head_container(container)
        except Exception as e:
            if _is_not_found(e):
                return False
            _raise_error(e, 'HEAD',
                         _("Failed to list containers: %(reason)s"))
        return True

    def create_container(self, properties, metadata=None):
        conn = self._check_connection()

        name = properties.get('name') or properties.get('path')
        if not name:
            raise exceptions.BadRequest(
                _('No name found for container in create request.'))

        headers = {}
        for key, value in (metadata or {}).items():
            headers['X-Container-Meta-%s' % key] = value

        try:
            conn.put_container(name, headers=headers)
        except Exception as e:
            _raise_error(e, 'PUT',
                         _("Failed to create container '%(name)s': "
                           "%(reason)s"), name=name)
        return {'name': name, 'path': name}

    def update_container_properties(self, container, properties=None):
        raise exceptions.OperationNotImplemented(
            _('Update of container properties not implemented'))

    def delete_container(self, container, force=False):
        # NOTE: force is accepted for interface compatibility only; Swift
        # refuses to delete a container that still holds objects.
        conn = self._check_connection()
        try:
            conn.delete_container(container)
        except Exception as e:
            _raise_error(e, 'DELETE',
                         _("Failed to delete container '%(name)s': "
                           "%(reason)s"), name=container)

    def blob_exists(self, container, name):
        conn = self._check_connection()
        try:
            conn.head_object(container, name)
        except Exception as e:
            if _is_not_found(e):
                return False
            _raise_error(e, 'HEAD',
                         _("Failed to check blob '%(name)s': %(reason)s"),
                         name=name)
        return True

    def put_blob_data(self, container, name, blob, content_type=None):
        conn = self._check_connection()
        try:
            conn.put_object(container, name, contents=blob,
                            content_type=content_type or None)
        except Exception as e:
            _raise_error(e, 'PUT',
                         _("Failed to create blob '%(name)s': %(reason)s"),
                         name=name)

    def put_blob_from_file(self, container, name, local_file_name,
                           content_type=None):
        conn = self._check_connection()
        with open(local_file_name, 'rb') as fd:
            data = fd.read()

        try:
            conn.put_object(container, name, contents=data,
                            content_length=len(data),
                            content_type=content_type or None)
        except Exception as e:
            _raise_error(e, 'PUT',
                         _("Failed to create blob '%(name)s': %(reason)s"),
                         name=name)

    def copy_blob(self, container, name, src_container, src_name,
                  properties=None):
        conn = self._check_connection()
        destination = '/%s/%s' % (container, name)
        try:
            conn.copy_object(src_container, src_name,
                             destination=destination)
        except Exception as e:
            _raise_error(e, 'COPY',
                         _("Failed to copy blob '%(name)s': %(reason)s"),
                         name=name)

    def get_blob_as_file(self, container, name, local_file_name):
        raise exceptions.OperationNotImplemented(
            _('getBlobAsFile not implemented for OpenStack'))

    def get_blob_data(self, container, name):
        conn = self._check_connection()
        try:
            _headers, body = conn.get_object(container, name)
        except Exception as e:
            _raise_error(e, 'GET',
                         _("Failed to retrieve blob '%(name)s': %(reason)s"),
                         name=name)
        return body

    def delete_blob(self, container, name, no_check=False):
        conn = self._check_connection()
        try:
            try:
                conn.delete_object(container, name)
            except Exception:
                if no_check:
                    LOG.debug("Ignoring failed delete of %(container)s/"
                              "%(name)s", {'container': container,
                                           'name': name})
                    return
                raise
        except Exception as e:
            error = sutils.translate_error(e, 'DELETE')
            if error is not None:
                raise error from e
            if isinstance(e, swiftclient.ClientException):
                raise exceptions.NotFound(
                    _("File '%s' was not found.") % name) from e
            _raise_error(e, 'DELETE',
                         _('Failed to delete blob "%(name)s": %(reason)s'),
                         name=name)

    def list_blobs(self, container, prefix='', delimiter=''):
        conn = self._check_connection()
        prefix = prefix or ''
        try:
            _headers, listing = conn.get_container(
                container, prefix=prefix or None,
                delimiter=delimiter or None, full_listing=True)
        except Exception as e:
            _raise_error(e, 'GET',
                         _("Failed to list blobs of '%(name)s': %(reason)s"),
                         name=container)

        out = []
        for entry in listing:
            name = entry.get('name', entry.get('subdir'))
            if name == prefix:
                # this is the requested "folder" itself
                continue
            out.append(sutils.map_object({
                'name': name,
                'content_type': entry.get('content_type'),
                'content_length': entry.get('bytes', 0),
                'last_modified': sutils.parse_listing_time(
                    entry.get('last_modified')),
            }))
        return out

    def get_blob_properties(self, container, name):
        conn = self._check_connection()
        if not name:
            # the container itself
            try:
                conn.head_container(container)
            except Exception as e:
                _raise_error(e, 'HEAD',
                             _("Failed to list metadata: %(reason)s"))
            return {'name': '.'}

        try:
            headers = conn.head_object(container, name)
        except Exception as e:
            _raise_error(e, 'HEAD', _("Failed to list metadata: %(reason)s"))

        return sutils.map_object({
            'name': name,
            'content_type': headers.get('content-type'),
            'content_length': int(headers.get('content-length', 0)),
            'last_modified': headers.get('last-modified'),
        })

    def get_blob_in_chunks(self, container, name, chunk_size=None):
        conn = self._check_connection()
        return self._read_chunks(conn, container, name,
                                 chunk_size or self.READ_CHUNKSIZE)

    def _read_chunks(self, conn, container, name, chunk_size):
        try:
            _headers, body = conn.get_object(container, name,
                                             resp_chunk_size=chunk_size)
        except Exception as e:
            _raise_error(e, 'GET',
                         _("Failed to retrieve blob '%(name)s': %(reason)s"),
                         name=name)

        with contextlib.closing(body):
            try:
                for chunk in body:
                    yield chunk
            except Exception as e:
                _raise_error(e, 'GET',
                             _("Failed to read blob '%(name)s': %(reason)s"),
                             name=name)
