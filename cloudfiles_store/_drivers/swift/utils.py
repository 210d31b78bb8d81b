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
import http.client as http_client
import logging

from keystoneauth1 import exceptions as ks_exceptions
from oslo_utils import timeutils
import swiftclient

from cloudfiles_store import exceptions

LOG = logging.getLogger(__name__)

LAST_MODIFIED_FORMAT = '%a, %d %b %Y %H:%M:%S GMT'
TRANS_ID_HEADERS = ('X-Trans-Id', 'X-Openstack-Request-Id')


def _swift_request_uri(exc):
    netloc = exc.http_host or ''
    if exc.http_port:
        netloc = '%s:%s' % (netloc, exc.http_port)
    uri = '%s://%s%s' % (exc.http_scheme or 'https', netloc,
                         exc.http_path or '')
    if exc.http_query:
        uri = '%s?%s' % (uri, exc.http_query)
    return uri


def _header(headers, names):
    if not headers:
        return None
    lowered = dict((k.lower(), v) for k, v in headers.items())
    for name in names:
        value = lowered.get(name.lower())
        if value:
            return value
    return None


def _describe(exc, method):
    """Return (status, reason, method, uri, trans_id) or None."""
    if isinstance(exc, swiftclient.ClientException):
        if not exc.http_status:
            return None
        trans_id = (getattr(exc, 'transaction_id', None) or
                    _header(getattr(exc, 'http_response_headers', None),
                            TRANS_ID_HEADERS))
        return (exc.http_status, exc.http_reason, method,
                _swift_request_uri(exc), trans_id)

    if isinstance(exc, ks_exceptions.HttpError):
        response = exc.response
        reason = getattr(response, 'reason', None) or exc.message
        trans_id = exc.request_id or _header(
            getattr(response, 'headers', None), TRANS_ID_HEADERS)
        return (exc.http_status, reason, exc.method or method, exc.url,
                trans_id)

    return None


def build_short_error_message(code, reason, method, uri, trans_id):
    return '[%s] Client error response. %s. %s %s (%s)' % (
        code, reason or '', method or '', uri or '', trans_id or '')


def translate_error(exc, method=None):
    """Map a vendor HTTP failure onto the store's exception taxonomy.

    :param exc: exception raised by swiftclient or keystoneauth1
    :param method: HTTP verb of the failed request; swiftclient does not
                   record it on its exceptions
    :returns: `exceptions.NotFound` for 404, `exceptions.BadRequest` for
              400, `exceptions.RestException` carrying the status for any
              other code, or None when ``exc`` has no HTTP response
    """
    description = _describe(exc, method)
    if description is None:
        return None

    code = description[0]
    message = build_short_error_message(*description)
    if code == http_client.NOT_FOUND:
        return exceptions.NotFound(message)
    if code == http_client.BAD_REQUEST:
        return exceptions.BadRequest(message)
    return exceptions.RestException(message, code=code)


def format_last_modified(value):
    """Render a modification time as an RFC 1123 string.

    Container listings carry a timestamp, HEAD responses carry the header
    text already formatted; both end up as the same string.
    """
    if isinstance(value, datetime.datetime):
        return timeutils.normalize_time(value).strftime(LAST_MODIFIED_FORMAT)
    return value


def parse_listing_time(value):
    """Parse the ISO 8601 'last_modified' of a container listing entry."""
    if not value:
        return None
    try:
        return timeutils.parse_isotime(value)
    except ValueError:
        LOG.debug("Unparseable last_modified value %s", value)
        return value


def map_object(obj):
    """Map a stored object onto the blob record returned to callers.

    :param obj: mapping with 'name', 'content_type', 'content_length' and
                'last_modified' (a datetime or a preformatted string)
    """
    return {
        'name': obj.get('name'),
        'content_type': obj.get('content_type'),
        'content_length': obj.get('content_length'),
        'last_modified': format_last_modified(obj.get('last_modified')),
    }
