import logging

import requests

import osmrequest.model as model
from osmrequest import mutators
from osmrequest.auth import build_auth
from osmrequest.config import merge_options
from osmrequest.exceptions import ChangesetClosedError, ConfigurationError
from osmrequest.parsing import iter_osm_file, iter_osm_change_file, parse_notes, parse_preferences
from osmrequest.writing import element_to_xml, changeset_to_xml, preferences_to_xml

logger = logging.getLogger(__name__)

NOTE_FORMATS = {
    'xml': '',
    'raw': '',
    'json': '.json',
    'gpx': '.gpx',
    'rss': '.rss',
}

XML_HEADERS = {'Content-Type': 'text/xml; charset=utf-8'}


class Api(object):
    """Client for an OSM API endpoint.

    Options are the ones listed in ``osmrequest.config.DEFAULT_OPTIONS``::

        api = Api(endpoint='https://master.apis.dev.openstreetmap.org/api/0.6',
                  oauth_consumer_key='...', oauth_secret='...',
                  oauth_user_token='...', oauth_user_token_secret='...')

    Every method performs its HTTP call right away. Non-2xx answers raise
    ``requests.HTTPError`` with the untouched response attached.

    The underlying requests.Session is not thread-safe, use one Api per thread.
    """

    def __init__(self, session=None, **options):
        self._options = merge_options(options)
        self._auth = build_auth(self._options)

        self._session = session if session is not None else requests.Session()
        self._session.headers.update({
            'User-Agent': self._options.user_agent
        })

    @property
    def endpoint(self):
        return self._options.endpoint

    @property
    def options(self):
        return self._options

    ## HTTP plumbing

    def _require_auth(self):
        if self._auth is None:
            raise ConfigurationError('This request needs OAuth credentials but none were configured')
        return self._auth

    def _request(self, method, path, params=None, data=None, headers=None, signed=False):
        url = self.endpoint + path
        logger.debug('%s %s', method, url)

        response = self._session.request(
            method,
            url,
            params=params,
            data=data,
            headers=headers,
            auth=self._require_auth() if signed else None,
            timeout=self._options.timeout,
        )
        response.raise_for_status()

        return response

    def _get(self, path, params=None, signed=False):
        return self._request('GET', path, params=params, signed=signed)

    def _get_as_osm(self, path, params=None):
        return [t for t in iter_osm_file(self._get(path, params).content)]

    def _get_notes(self, path, params, fmt):
        if fmt not in NOTE_FORMATS:
            raise ValueError('Unknown notes format "{}", expected one of {}'.format(fmt, ', '.join(sorted(NOTE_FORMATS))))

        response = self._get(path + NOTE_FORMATS[fmt], params)

        if fmt == 'xml':
            return parse_notes(response.content)
        elif fmt == 'json':
            return response.json()
        else:
            return response.text

    def _post_note(self, path, params, signed=True):
        response = self._request('POST', path, params=params, signed=signed)
        return next(iter(parse_notes(response.content)))

    ## Notes

    def fetch_notes(self, left, bottom, right, top, limit=None, closed_days=None):
        """Retrieve the notes in the given bounding box.

        ``limit`` must be between 1 and 10000 (server default 100). ``closed_days``
        is how long a closed note stays visible: 0 means only open notes, -1 means all.
        """
        params = {'bbox': '{},{},{},{}'.format(left, bottom, right, top)}
        if limit is not None:
            params['limit'] = limit
        if closed_days is not None:
            params['closed'] = closed_days

        return self._get_notes('/notes', params, 'xml')

    def fetch_notes_search(self, q, format='xml', limit=None, closed=None, display_name=None, user=None,
                           from_date=None, to_date=None):
        """Search notes by text.

        ``format`` is 'xml' (parsed into Notes), 'raw' (the XML text), 'json'
        (GeoJSON as a dict), 'gpx' or 'rss' (the text as returned).
        ``display_name`` and ``user`` are mutually exclusive.
        """
        params = {'q': q}
        for name, value in (('limit', limit), ('closed', closed), ('display_name', display_name),
                            ('user', user), ('from', from_date), ('to', to_date)):
            if value is not None:
                params[name] = value

        return self._get_notes('/notes/search', params, format)

    def fetch_note(self, note_id, format='xml'):
        return self._get_notes('/notes/{}'.format(note_id), None, format)

    def create_note(self, lat, lon, text):
        # Notes may be opened anonymously
        return self._post_note('/notes', {'lat': lat, 'lon': lon, 'text': text}, signed=self._auth is not None)

    def _note_action(self, note_id, action, text):
        return self._post_note('/notes/{}/{}'.format(note_id, action), {'text': text})

    def comment_note(self, note_id, text):
        return self._note_action(note_id, 'comment', text)

    def close_note(self, note_id, text):
        return self._note_action(note_id, 'close', text)

    def reopen_note(self, note_id, text):
        return self._note_action(note_id, 'reopen', text)

    ## Changesets

    def create_changeset(self, created_by='', comment=''):
        """Open a new changeset and return its id."""
        body = changeset_to_xml({'created_by': created_by, 'comment': comment})
        response = self._request('PUT', '/changeset/create', data=body, headers=XML_HEADERS, signed=True)
        return int(response.text.strip())

    def fetch_changeset(self, changeset_id):
        return next(iter(self._get_as_osm('/changeset/{}'.format(changeset_id))))

    def fetch_changeset_download(self, changeset_id):
        response = self._get('/changeset/{}/download'.format(changeset_id))
        return [t for t in iter_osm_change_file(response.content)]

    def is_changeset_still_open(self, changeset_id):
        return bool(self.fetch_changeset(changeset_id).open)

    def update_changeset_tags(self, changeset_id, tags):
        """Replace the tags of a changeset, provided it is still open.

        Raises ChangesetClosedError without sending anything if the changeset
        was closed. The server may still close it between the check and the update.
        """
        if not self.is_changeset_still_open(changeset_id):
            logger.warning('Not updating tags of closed changeset %s', changeset_id)
            raise ChangesetClosedError(changeset_id)

        response = self._request('PUT', '/changeset/{}'.format(changeset_id),
                                 data=changeset_to_xml(tags), headers=XML_HEADERS, signed=True)
        return next(iter_osm_file(response.content))

    def close_changeset(self, changeset_id):
        self._request('PUT', '/changeset/{}/close'.format(changeset_id), signed=True)

    ## Elements

    def _get_object_revision_as_osm(self, osm_id, version=None, suffix=None):
        kind, thing_id = model.split_osm_id(osm_id)
        path = '/{}/{}'.format(kind, thing_id)
        if version:
            path += '/' + str(version)
        if suffix:
            path += '/' + suffix

        return self._get_as_osm(path)

    def fetch_element(self, osm_id, full=False):
        """Fetch an element by id, eg. 'node/12345'.

        With ``full`` a list is returned instead: the element followed by
        every element it references (a way's nodes, a relation's members).
        """
        if full:
            everything = self._get_object_revision_as_osm(osm_id, suffix='full')
            kind, thing_id = model.split_osm_id(osm_id)
            target = [e for e in everything if model.element_type(e) == kind and e.id == thing_id]
            return target + [e for e in everything if e not in target]

        return next(iter(self._get_object_revision_as_osm(osm_id)))

    def fetch_element_version(self, osm_id, version):
        return next(iter(self._get_object_revision_as_osm(osm_id, version=version)))

    def fetch_element_history(self, osm_id):
        return self._get_object_revision_as_osm(osm_id, suffix='history')

    def fetch_elements(self, kind, thing_ids):
        plural_kind = kind + 's'
        path = '/{}'.format(plural_kind)

        return self._get_as_osm(path, params={plural_kind: ','.join(str(i) for i in thing_ids)})

    def fetch_relations_for_element(self, osm_id):
        return self._get_object_revision_as_osm(osm_id, suffix='relations')

    def fetch_ways_for_node(self, osm_id):
        return self._get_object_revision_as_osm(osm_id, suffix='ways')

    def fetch_map_by_bbox(self, left, bottom, right, top):
        return self._get_as_osm('/map', params={'bbox': '{},{},{},{}'.format(left, bottom, right, top)})

    def send_element(self, element, changeset_id):
        """Upload an element in the given changeset.

        New elements (no id, or a negative placeholder id) are created and their
        new id is returned. Existing ones are updated and their new version is returned.
        """
        kind = model.element_type(element)
        if element.id is None or element.id < 0:
            element = element._replace(id=None)
            path = '/{}/create'.format(kind)
        else:
            path = '/{}/{}'.format(kind, element.id)

        response = self._request('PUT', path, data=element_to_xml(element, changeset_id),
                                 headers=XML_HEADERS, signed=True)
        return int(response.text.strip())

    def delete_element(self, element, changeset_id):
        """Delete an element and return the version number the deletion created."""
        path = '/{}/{}'.format(model.element_type(element), element.id)
        response = self._request('DELETE', path, data=element_to_xml(element, changeset_id),
                                 headers=XML_HEADERS, signed=True)
        return int(response.text.strip())

    ## Element helpers, no network involved

    def create_node_element(self, lat, lon, properties=None):
        return mutators.create_node_element(lat, lon, properties)

    def set_property(self, element, key, value):
        return mutators.set_property(element, key, value)

    def set_properties(self, element, properties):
        return mutators.set_properties(element, properties)

    def remove_property(self, element, key):
        return mutators.remove_property(element, key)

    def set_coordinates(self, element, lat, lon):
        return mutators.set_coordinates(element, lat, lon)

    def set_timestamp_to_now(self, element):
        return mutators.set_timestamp_to_now(element)

    def set_version(self, element, version):
        return mutators.set_version(element, version)

    ## User preferences

    def get_user_preferences(self):
        response = self._get('/user/preferences.json', signed=True)

        if 'xml' in response.headers.get('Content-Type', ''):
            return parse_preferences(response.content)
        return dict(response.json().get('preferences', {}))

    def set_user_preferences(self, preferences):
        """Replace all preferences of the user with the given dict."""
        self._request('PUT', '/user/preferences', data=preferences_to_xml(preferences),
                      headers=XML_HEADERS, signed=True)

    def get_user_preference_by_key(self, key):
        return self._get('/user/preferences/{}'.format(key), signed=True).text

    def set_user_preference_by_key(self, key, value):
        self._request('PUT', '/user/preferences/{}'.format(key), data=str(value).encode('utf-8'),
                      headers={'Content-Type': 'text/plain; charset=utf-8'}, signed=True)

    def delete_user_preference(self, key):
        self._request('DELETE', '/user/preferences/{}'.format(key), signed=True)
