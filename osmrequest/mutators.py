"""Pure helpers that return modified copies of OSM elements.

Elements are namedtuples, so every helper goes through ``_replace`` and the
element passed in is never touched.
"""
import datetime

import osmrequest.model as model


def _tags_without(element, keys):
    return tuple(t for t in (element.tags or ()) if t.key not in keys)

def _tags_from(properties):
    # Keys are compared as strings, so {1: .., '1': ..} collapses to one tag
    as_strings = dict((str(k), str(v)) for k, v in properties.items())
    return tuple(model.Tag(k, v) for k, v in as_strings.items())

def create_node_element(lat, lon, properties=None):
    """Create a shiny new node, not yet known to the API."""
    tags = _tags_from(properties or {})
    return model.Node(
        id=None,
        version=None,
        changeset=None,
        user=None,
        uid=None,
        visible=None,
        timestamp=None,
        lat=lat,
        lon=lon,
        tags=tags
    )

def set_property(element, key, value):
    """Add or replace a tag."""
    key = str(key)
    return element._replace(tags=_tags_without(element, (key,)) + (model.Tag(key, str(value)),))

def set_properties(element, properties):
    """Add or replace several tags at once."""
    new_tags = _tags_from(properties)
    keys = set(t.key for t in new_tags)
    return element._replace(tags=_tags_without(element, keys) + new_tags)

def remove_property(element, key):
    return element._replace(tags=_tags_without(element, (str(key),)))

def set_coordinates(element, lat, lon):
    if not isinstance(element, model.Node):
        raise TypeError('Only nodes have coordinates, got a %s' % model.element_type(element))
    return element._replace(lat=float(lat), lon=float(lon))

def set_timestamp_to_now(element):
    now = datetime.datetime.now(datetime.timezone.utc).replace(microsecond=0)
    return element._replace(timestamp=now)

def set_version(element, version):
    try:
        version = int(version)
    except TypeError:
        raise ValueError('Version must be a number, got %r' % (version,))
    return element._replace(version=version)
