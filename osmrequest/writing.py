"""Build the XML request bodies the OSM API expects."""
from lxml import etree

import osmrequest.model as model
from osmrequest.parsing import datetimeToIso

GENERATOR = 'osmrequest'


def _osm_root():
    return etree.Element('osm', version='0.6', generator=GENERATOR)

def _to_bytes(root):
    return etree.tostring(root, xml_declaration=True, encoding='UTF-8')

def _add_tags(parent, tags):
    for tag in tags:
        etree.SubElement(parent, 'tag', k=str(tag.key), v=str(tag.value))

def element_to_xml(element, changeset_id=None):
    """Serialize a Node, Way or Relation into an <osm> document.

    If changeset_id is given it overrides the changeset stored on the element.
    """
    kind = model.element_type(element)
    root = _osm_root()

    attrs = {}
    if element.id is not None:
        attrs['id'] = str(element.id)
    if element.version is not None:
        attrs['version'] = str(element.version)

    changeset = changeset_id if changeset_id is not None else element.changeset
    if changeset is not None:
        attrs['changeset'] = str(changeset)
    if element.timestamp is not None:
        attrs['timestamp'] = datetimeToIso(element.timestamp)

    if kind == 'node':
        if element.lat is not None:
            attrs['lat'] = repr(float(element.lat))
        if element.lon is not None:
            attrs['lon'] = repr(float(element.lon))

    elem = etree.SubElement(root, kind, **attrs)

    if kind == 'way':
        for ref in element.nds:
            etree.SubElement(elem, 'nd', ref=str(ref))
    elif kind == 'relation':
        for member in element.members:
            etree.SubElement(elem, 'member', type=member.type, ref=str(member.ref), role=member.role or '')

    _add_tags(elem, element.tags or ())

    return _to_bytes(root)

def changeset_to_xml(tags):
    """Build a changeset document from a dict (or iterable of Tags)."""
    root = _osm_root()
    changeset = etree.SubElement(root, 'changeset')
    if isinstance(tags, dict):
        tags = [model.Tag(k, v) for k, v in tags.items()]
    _add_tags(changeset, tags)
    return _to_bytes(root)

def preferences_to_xml(preferences):
    root = _osm_root()
    prefs = etree.SubElement(root, 'preferences')
    for k, v in preferences.items():
        etree.SubElement(prefs, 'preference', k=str(k), v=str(v))
    return _to_bytes(root)
