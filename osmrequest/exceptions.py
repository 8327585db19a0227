class OsmRequestError(Exception):
    """Base class for errors raised by osmrequest itself.

    HTTP failures are not wrapped, they surface as requests.HTTPError.
    """


class ConfigurationError(OsmRequestError, ValueError):
    pass


class ChangesetClosedError(OsmRequestError):
    def __init__(self, changeset_id):
        self.changeset_id = changeset_id
        super(ChangesetClosedError, self).__init__('Changeset %s is closed' % changeset_id)
