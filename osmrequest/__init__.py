import logging

from osmrequest.api import Api
from osmrequest.config import __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())
