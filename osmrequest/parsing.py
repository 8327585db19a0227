import datetime
import io

from lxml import etree

import osmrequest.model as model


def isoToDatetime(s):
    """Parse a ISO8601-formatted string to a UTC Python datetime."""
    if s is None:
        return s
    else:
        return datetime.datetime.strptime(s, "%Y-%m-%dT%H:%M:%SZ").replace(tzinfo=datetime.timezone.utc)

def datetimeToIso(d):
    """Format a datetime the way the OSM API expects it."""
    if d is None or isinstance(d, str):
        return d
    if d.tzinfo is not None:
        d = d.astimezone(datetime.timezone.utc)
    return d.strftime("%Y-%m-%dT%H:%M:%SZ")

def noteTimeToDatetime(s):
    """Parse a datetime out of the Notes API."""
    if s is None:
        return s
    else:
        # 2013-05-01 08:10:42 UTC
        return datetime.datetime.strptime(s, "%Y-%m-%d %H:%M:%S UTC").replace(tzinfo=datetime.timezone.utc)

def maybeInt(s):
    return int(s) if s is not None else s

def maybeFloat(s):
    return float(s) if s is not None else s

def maybeBool(s):
    return s == 'true' if s is not None else s

def _as_source(f):
    if isinstance(f, (bytes, str)):
        if isinstance(f, str):
            f = f.encode('utf-8')
        return io.BytesIO(f)
    return f

def _freeze(obj):
    # Children are collected into lists while parsing, elements hand out tuples
    fields = dict((name, tuple(getattr(obj, name)))
                  for name in ('tags', 'nds', 'members')
                  if name in obj._fields)
    return obj._replace(**fields)

def _start_primitive(elem, parse_timestamps):
    timestamp = elem.attrib.get('timestamp')
    common = (
        int(elem.attrib['id']),
        maybeInt(elem.get('version')),
        maybeInt(elem.get('changeset')),
        elem.attrib.get('user'),
        maybeInt(elem.attrib.get('uid')),
        maybeBool(elem.attrib.get('visible')),
        isoToDatetime(timestamp) if parse_timestamps else timestamp,
    )

    if elem.tag == 'node':
        return model.Node(*common, maybeFloat(elem.get('lat')), maybeFloat(elem.get('lon')), [])
    elif elem.tag == 'way':
        return model.Way(*common, [], [])
    else:
        return model.Relation(*common, [], [])

def _start_changeset(elem, parse_timestamps):
    return model.Changeset(
        int(elem.attrib['id']),
        isoToDatetime(elem.attrib.get('created_at')) if parse_timestamps else elem.attrib.get('created_at'),
        isoToDatetime(elem.attrib.get('closed_at')) if parse_timestamps else elem.attrib.get('closed_at'),
        maybeBool(elem.attrib.get('open')),
        maybeFloat(elem.get('min_lat')),
        maybeFloat(elem.get('max_lat')),
        maybeFloat(elem.get('min_lon')),
        maybeFloat(elem.get('max_lon')),
        elem.attrib.get('user'),
        maybeInt(elem.attrib.get('uid')),
        []
    )

def _iter_primitives(f, parse_timestamps, track_actions):
    action = None
    obj = None
    for event, elem in etree.iterparse(_as_source(f), events=('start', 'end')):
        if event == 'start':
            if elem.tag in ('node', 'way', 'relation'):
                obj = _start_primitive(elem, parse_timestamps)
            elif elem.tag == 'changeset':
                obj = _start_changeset(elem, parse_timestamps)
            elif elem.tag == 'tag':
                obj.tags.append(
                    model.Tag(
                        elem.attrib['k'],
                        elem.attrib['v']
                    )
                )
            elif elem.tag == 'nd':
                obj.nds.append(int(elem.attrib['ref']))
            elif elem.tag == 'member':
                obj.members.append(
                    model.Member(
                        elem.attrib['type'],
                        int(elem.attrib['ref']),
                        elem.attrib.get('role', '')
                    )
                )
            elif track_actions and elem.tag in ('create', 'modify', 'delete'):
                action = elem.tag
        elif event == 'end':
            if elem.tag in ('node', 'way', 'relation', 'changeset'):
                yield action, _freeze(obj)
                obj = None
            elif track_actions and elem.tag in ('create', 'modify', 'delete'):
                action = None

        elem.clear()
        while elem.getprevious() is not None:
            del elem.getparent()[0]

def iter_osm_file(f, parse_timestamps=True):
    """Parse a file-like (or bytes) containing OSM XML and yield one OSM primitive
    at a time to the caller."""
    for _, obj in _iter_primitives(f, parse_timestamps, track_actions=False):
        yield obj

def iter_osm_change_file(f, parse_timestamps=True):
    """Parse an osmChange document and yield (action, primitive) tuples."""
    for action, obj in _iter_primitives(f, parse_timestamps, track_actions=True):
        yield (action, obj)

def parse_note(note_elem, parse_timestamps=True):
    """Turn a single <note> element into a Note."""

    def parse_date(text):
        return noteTimeToDatetime(text) if parse_timestamps else text

    def parse_comment(comment_element):
        user_elem = comment_element.xpath('user')
        uid_elem = comment_element.xpath('uid')
        text_elem = comment_element.xpath('text')
        return model.Comment(
            created_at=parse_date(comment_element.xpath('date')[0].text),
            user=user_elem[0].text if user_elem else None,
            uid=int(uid_elem[0].text) if uid_elem else None,
            action=comment_element.xpath('action')[0].text,
            text=(text_elem[0].text or '') if text_elem else ''
        )

    closed_elem = note_elem.xpath('date_closed')
    if closed_elem:
        closed_at = parse_date(closed_elem[0].text)
    else:
        closed_at = None

    return model.Note(
        id=int(note_elem.xpath('id')[0].text),
        lat=float(note_elem.attrib['lat']),
        lon=float(note_elem.attrib['lon']),
        created_at=parse_date(note_elem.xpath('date_created')[0].text),
        closed_at=closed_at,
        status=note_elem.xpath('status')[0].text,
        comments=tuple(parse_comment(c) for c in note_elem.xpath('comments/comment'))
    )

def parse_notes(f, parse_timestamps=True):
    """Parse a notes XML document into a list of Notes."""
    tree = etree.parse(_as_source(f))
    return [parse_note(n, parse_timestamps) for n in tree.xpath('/osm/note')]

def parse_preferences(f):
    """Parse a user preferences XML document into a dict."""
    tree = etree.parse(_as_source(f))
    return dict(
        (p.attrib['k'], p.attrib['v'])
        for p in tree.xpath('/osm/preferences/preference')
    )
