# Copyright 2011 OpenStack Foundation
# Copyright 2012 RedHat Inc.
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

"""Base class for all remote file storage backends"""

import logging

from cloudfiles_store import exceptions
from cloudfiles_store.i18n import _

LOG = logging.getLogger(__name__)


class Store(object):

    READ_CHUNKSIZE = 65536

    def __init__(self, conf):
        """
        Initialize the Store

        :param conf: configuration mapping; it is not modified
        """
        self.conf = conf
        self.container = (conf.get('container') or '').strip(' /')
        if not self.container:
            reason = _("Blob container not specified. Please check the "
                       "configuration of the file service.")
            LOG.error(reason)
            raise exceptions.InvalidConfiguration(reason=reason)

    def __enter__(self):
        return self

    def __exit__(self, type, value, traceback):
        self.close()

    def close(self):
        """Release the connection to the backend."""

    def list_containers(self, include_properties=False):
        """
        List all containers.

        :param include_properties: also report the size and object count
        :returns: list of dicts with 'name' and 'path'
        """
        raise NotImplementedError

    def get_container_properties(self, container):
        """
        :returns: dict with 'name' and 'size' in bytes
        :raises: `exceptions.NotFound` if the container does not exist
        """
        raise NotImplementedError

    def container_exists(self, container):
        raise NotImplementedError

    def create_container(self, properties, metadata=None):
        """
        :param properties: dict holding the container 'name' (or 'path')
        :param metadata: optional dict of container metadata
        :returns: dict with 'name' and 'path'
        :raises: `exceptions.BadRequest` if no name is given
        """
        raise NotImplementedError

    def update_container_properties(self, container, properties=None):
        raise NotImplementedError

    def delete_container(self, container, force=False):
        """
        Delete a container.

        :param force: delete even if the container is not empty
        """
        raise NotImplementedError

    def blob_exists(self, container, name):
        raise NotImplementedError

    def put_blob_data(self, container, name, blob, content_type=None):
        raise NotImplementedError

    def put_blob_from_file(self, container, name, local_file_name,
                           content_type=None):
        raise NotImplementedError

    def copy_blob(self, container, name, src_container, src_name,
                  properties=None):
        """Copy ``src_container/src_name`` to ``container/name``."""
        raise NotImplementedError

    def get_blob_data(self, container, name):
        """
        :returns: the blob content as bytes
        """
        raise NotImplementedError

    def get_blob_as_file(self, container, name, local_file_name):
        raise NotImplementedError

    def delete_blob(self, container, name, no_check=False):
        """
        Delete a blob.

        :param no_check: do not report a blob that could not be deleted
        :raises: `exceptions.NotFound` if the blob does not exist
        """
        raise NotImplementedError

    def list_blobs(self, container, prefix='', delimiter=''):
        """
        List blobs.

        :param prefix: only return blobs whose name begins with it
        :param delimiter: folder separator, i.e. '/'
        :returns: list of blob records
        """
        raise NotImplementedError

    def get_blob_properties(self, container, name):
        raise NotImplementedError

    def get_blob_in_chunks(self, container, name, chunk_size=None):
        """
        :returns: iterator over the blob content
        """
        raise NotImplementedError
