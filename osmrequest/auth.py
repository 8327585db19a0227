from requests_oauthlib import OAuth1

from osmrequest.exceptions import ConfigurationError

CREDENTIALS = ('oauth_consumer_key', 'oauth_secret', 'oauth_user_token', 'oauth_user_token_secret')


def build_auth(options):
    """Return an OAuth1 signer for the given Options, or None when no credentials are set."""
    values = [getattr(options, name) for name in CREDENTIALS]

    if not any(values):
        return None

    missing = [name for name, value in zip(CREDENTIALS, values) if not value]
    if missing:
        raise ConfigurationError('Incomplete OAuth credentials, missing: {}'.format(', '.join(missing)))

    return OAuth1(
        client_key=options.oauth_consumer_key,
        client_secret=options.oauth_secret,
        resource_owner_key=options.oauth_user_token,
        resource_owner_secret=options.oauth_user_token_secret,
    )
