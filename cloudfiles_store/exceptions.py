# Copyright (c) 2014 Red Hat, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or
# implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Cloud Files store exception subclasses"""

from cloudfiles_store.i18n import _


class ObjectStoreException(Exception):
    """
    Base Object Store Exception

    To correctly use this class, inherit from it and define
    a 'message' property. That message will get printf'd
    with the keyword arguments provided to the constructor.
    """
    message = _("An unknown exception occurred")

    def __init__(self, message=None, **kwargs):
        if not message:
            message = self.message
        try:
            if kwargs:
                message = message % kwargs
        except Exception:
            pass
        self.msg = message
        super(ObjectStoreException, self).__init__(message)


class InvalidConfiguration(ObjectStoreException):
    message = _("Object store could not be configured correctly. "
                "Reason: %(reason)s")


class MissingCredentialError(InvalidConfiguration):
    message = _("Missing required credential: %(required)s")


class MissingAuthVersion(InvalidConfiguration):
    message = _("URL must end with identity API version number")


class UnsupportedAuthVersion(InvalidConfiguration):
    message = _("Identity API v%(version)s is not supported")


class MissingAuthParameter(InvalidConfiguration):
    message = _("Missing required parameter %(param)s for "
                "%(method)s %(path)s")


class ConnectionFailed(ObjectStoreException):
    message = _("Failed to launch OpenStack service: %(reason)s")


class NotConnected(ObjectStoreException):
    message = _("No valid connection to blob file storage.")


class RestException(ObjectStoreException):
    message = _("Object store request failed with status %(code)s")
    code = 500

    def __init__(self, message=None, code=None, **kwargs):
        if code is not None:
            self.code = code
        if not message:
            kwargs.setdefault('code', self.code)
        super(RestException, self).__init__(message, **kwargs)


class NotFound(RestException):
    message = _("Object %(name)s not found")
    code = 404


class BadRequest(RestException):
    message = _("Bad request to the object store.")
    code = 400


class OperationNotImplemented(ObjectStoreException):
    message = _("%(operation)s is not implemented")


class BackendException(ObjectStoreException):
    message = _("Object store request failed: %(reason)s")
