"""Pytest fixtures for osmrequest tests."""
import json

import pytest
import requests

from osmrequest import Api

ENDPOINT = 'https://api.example.org/api/0.6'

CREDENTIALS = {
    'oauth_consumer_key': 'consumer-key',
    'oauth_secret': 'consumer-secret',
    'oauth_user_token': 'user-token',
    'oauth_user_token_secret': 'user-token-secret',
}


def make_response(status=200, body=b'', content_type='text/xml; charset=utf-8', url=ENDPOINT):
    response = requests.Response()
    response.status_code = status
    response.reason = 'OK' if status < 400 else 'Error'
    response.url = url
    response.encoding = 'utf-8'
    response.headers['Content-Type'] = content_type
    if isinstance(body, (dict, list)):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode('utf-8')
    response._content = body
    return response


class FakeSession(object):
    """Stands in for requests.Session, answering from a (method, url) table."""

    def __init__(self):
        self.headers = {}
        self.routes = {}
        self.calls = []

    def add(self, method, path, body=b'', status=200, content_type='text/xml; charset=utf-8'):
        url = ENDPOINT + path
        self.routes[(method, url)] = make_response(status, body, content_type, url)

    def request(self, method, url, **kwargs):
        self.calls.append(dict(kwargs, method=method, url=url))
        try:
            return self.routes[(method, url)]
        except KeyError:
            return make_response(404, 'Not found', 'text/plain', url)

    @property
    def methods(self):
        return [c['method'] for c in self.calls]


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def api(session):
    """Api with credentials, talking to a FakeSession."""
    return Api(session=session, endpoint=ENDPOINT + '/', **CREDENTIALS)


@pytest.fixture
def anonymous_api(session):
    return Api(session=session, endpoint=ENDPOINT)


NODE_XML = '''<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6" generator="OpenStreetMap server">
  <node id="12345" visible="true" version="3" changeset="999" timestamp="2019-03-01T10:00:00Z" user="alice" uid="42" lat="48.8566" lon="2.3522">
    <tag k="amenity" v="cafe"/>
    <tag k="name" v="Chez Nous"/>
  </node>
</osm>'''

WAY_FULL_XML = '''<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6" generator="OpenStreetMap server">
  <node id="1" visible="true" version="1" changeset="10" timestamp="2019-03-01T10:00:00Z" user="alice" uid="42" lat="48.1" lon="2.1"/>
  <node id="2" visible="true" version="1" changeset="10" timestamp="2019-03-01T10:00:00Z" user="alice" uid="42" lat="48.2" lon="2.2"/>
  <way id="100" visible="true" version="2" changeset="11" timestamp="2019-03-02T10:00:00Z" user="bob" uid="43">
    <nd ref="1"/>
    <nd ref="2"/>
    <tag k="highway" v="residential"/>
  </way>
</osm>'''

RELATION_XML = '''<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6">
  <relation id="7" visible="true" version="5" changeset="12" timestamp="2019-03-03T10:00:00Z" user="bob" uid="43">
    <member type="way" ref="100" role="outer"/>
    <member type="node" ref="1" role=""/>
    <tag k="type" v="multipolygon"/>
  </relation>
</osm>'''

OPEN_CHANGESET_XML = '''<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6">
  <changeset id="999" created_at="2019-03-01T10:00:00Z" open="true" user="alice" uid="42" min_lat="48.1" max_lat="48.2" min_lon="2.1" max_lon="2.2">
    <tag k="created_by" v="osmrequest"/>
    <tag k="comment" v="Adding cafes"/>
  </changeset>
</osm>'''

CLOSED_CHANGESET_XML = '''<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6">
  <changeset id="998" created_at="2019-03-01T10:00:00Z" closed_at="2019-03-01T11:00:00Z" open="false" user="alice" uid="42">
    <tag k="comment" v="Old edit"/>
  </changeset>
</osm>'''

OSM_CHANGE_XML = '''<?xml version="1.0" encoding="UTF-8"?>
<osmChange version="0.6">
  <create>
    <node id="5" version="1" changeset="999" timestamp="2019-03-01T10:00:00Z" user="alice" uid="42" lat="1.0" lon="2.0">
      <tag k="name" v="New"/>
    </node>
  </create>
  <modify>
    <way id="100" version="3" changeset="999" timestamp="2019-03-01T10:00:00Z" user="alice" uid="42">
      <nd ref="1"/>
      <nd ref="5"/>
    </way>
  </modify>
  <delete>
    <node id="2" version="2" changeset="999" timestamp="2019-03-01T10:00:00Z" user="alice" uid="42" visible="false"/>
  </delete>
</osmChange>'''

NOTES_XML = '''<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6" generator="OpenStreetMap server">
  <note lon="2.3522" lat="48.8566">
    <id>321</id>
    <url>https://api.example.org/api/0.6/notes/321</url>
    <date_created>2019-03-01 10:00:00 UTC</date_created>
    <status>open</status>
    <comments>
      <comment>
        <date>2019-03-01 10:00:00 UTC</date>
        <uid>42</uid>
        <user>alice</user>
        <action>opened</action>
        <text>Cafe is closed for good</text>
      </comment>
      <comment>
        <date>2019-03-02 10:00:00 UTC</date>
        <action>commented</action>
        <text>Still closed</text>
      </comment>
    </comments>
  </note>
  <note lon="2.0" lat="48.0">
    <id>322</id>
    <date_created>2019-02-01 10:00:00 UTC</date_created>
    <status>closed</status>
    <date_closed>2019-02-03 10:00:00 UTC</date_closed>
    <comments/>
  </note>
</osm>'''

PREFERENCES_XML = '''<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6">
  <preferences>
    <preference k="editor" v="id"/>
    <preference k="theme" v="dark"/>
  </preferences>
</osm>'''
