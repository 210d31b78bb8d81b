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

"""Declarative descriptions of non-standard identity requests"""

from cloudfiles_store import exceptions
from cloudfiles_store.i18n import _

_PARAM_TYPES = {
    'string': str,
    'integer': int,
    'boolean': bool,
    'object': dict,
    'array': list,
}


class Parameter(object):
    """A single value of an identity request body.

    :param type: one of 'string', 'integer', 'boolean', 'object', 'array'
    :param required: the request cannot be built without a value
    :param path: dotted location of the enclosing object in the body,
                 e.g. ``auth.RAX-KSKEY:apiKeyCredentials``. Keys may
                 contain any character except '.'.
    """

    def __init__(self, type='string', required=False, path=None):
        if type not in _PARAM_TYPES:
            raise ValueError(_("Unknown parameter type %s") % type)
        self.type = type
        self.required = required
        self.path = path


class AuthDescriptor(object):
    """Template for one identity request: verb, path and parameters."""

    def __init__(self, method, path, params):
        self.method = method
        self.path = path
        self.params = params


# https://docs.rackspace.com/docs/cloud-identity/v2/api-reference
API_KEY_TOKEN = AuthDescriptor(
    method='POST',
    path='tokens',
    params={
        'username': Parameter(required=True,
                              path='auth.RAX-KSKEY:apiKeyCredentials'),
        'apiKey': Parameter(required=True,
                            path='auth.RAX-KSKEY:apiKeyCredentials'),
        'tenantName': Parameter(path='auth'),
    })


def build_request(descriptor, values):
    """Build the request described by ``descriptor``.

    :param descriptor: an `AuthDescriptor`
    :param values: mapping of parameter name to value; None or empty
                   strings count as missing
    :returns: tuple of (method, path, json body)
    :raises: `exceptions.MissingAuthParameter` when a required value is
             missing, `exceptions.InvalidConfiguration` when a value has
             the wrong type
    """
    body = {}
    for name, param in descriptor.params.items():
        value = values.get(name)
        if value is None or value == '':
            if param.required:
                raise exceptions.MissingAuthParameter(
                    param=name, method=descriptor.method,
                    path=descriptor.path)
            continue

        if not isinstance(value, _PARAM_TYPES[param.type]):
            reason = (_("Parameter %(param)s must be of type %(type)s") %
                      {'param': name, 'type': param.type})
            raise exceptions.InvalidConfiguration(reason=reason)

        target = body
        if param.path:
            for key in param.path.split('.'):
                target = target.setdefault(key, {})
        target[name] = value

    return descriptor.method, descriptor.path, body
