import collections
from urllib.parse import urlparse

from osmrequest.exceptions import ConfigurationError

__version__ = '0.1.0'

Options = collections.namedtuple(
    'Options',
    'endpoint, oauth_consumer_key, oauth_secret, oauth_user_token, oauth_user_token_secret, user_agent, timeout'
)

DEFAULT_OPTIONS = {
    'endpoint': 'https://api.openstreetmap.org/api/0.6',
    'oauth_consumer_key': None,
    'oauth_secret': None,
    'oauth_user_token': None,
    'oauth_user_token_secret': None,
    'user_agent': 'osmrequest/{}'.format(__version__),
    'timeout': 60,
}


def remove_trailing_slashes(url):
    return url.rstrip('/')

def merge_options(overrides=None):
    """Merge user supplied options over the defaults and return an Options.

    Options explicitly set to None keep their default value.
    """
    overrides = overrides or {}

    unknown = set(overrides) - set(DEFAULT_OPTIONS)
    if unknown:
        raise ConfigurationError('Unknown option(s): {}'.format(', '.join(sorted(unknown))))

    merged = dict(DEFAULT_OPTIONS)
    merged.update((k, v) for k, v in overrides.items() if v is not None)

    endpoint = remove_trailing_slashes(str(merged['endpoint']))
    parsed = urlparse(endpoint)
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise ConfigurationError('Endpoint "{}" is not an http(s) URL'.format(merged['endpoint']))
    merged['endpoint'] = endpoint

    return Options(**merged)
