import collections

## OSM Objects
Tag = collections.namedtuple('Tag', 'key, value')
Node = collections.namedtuple('Node', 'id, version, changeset, user, uid, visible, timestamp, lat, lon, tags')
Way = collections.namedtuple('Way', 'id, version, changeset, user, uid, visible, timestamp, nds, tags')
Relation = collections.namedtuple('Relation', 'id, version, changeset, user, uid, visible, timestamp, members, tags')
Member = collections.namedtuple('Member', 'type, ref, role')
Changeset = collections.namedtuple('Changeset', 'id, created_at, closed_at, open, min_lat, max_lat, min_lon, max_lon, user, uid, tags')

## Notes
Note = collections.namedtuple('Note', 'id, lat, lon, created_at, closed_at, status, comments')
Comment = collections.namedtuple('Comment', 'created_at, user, uid, action, text')

ELEMENT_TYPES = {
    Node: 'node',
    Way: 'way',
    Relation: 'relation',
}

ELEMENT_CLASSES = dict((v, k) for k, v in ELEMENT_TYPES.items())


def element_type(element):
    """Return the OSM type name ('node', 'way' or 'relation') of an element."""
    try:
        return ELEMENT_TYPES[type(element)]
    except KeyError:
        raise TypeError('%r is not an OSM element' % (element,))


def split_osm_id(osm_id):
    """Split an id like 'node/12345' into ('node', 12345)."""
    kind, _, thing_id = str(osm_id).partition('/')
    if kind not in ELEMENT_CLASSES or not thing_id:
        raise ValueError('Invalid OSM id "%s", expected something like "node/12345"' % osm_id)

    return kind, int(thing_id)
