import logging

import requests

from .config import USER_AGENT
from .exceptions import FetchError

logger = logging.getLogger(__name__)

headers = {
    'User-Agent': USER_AGENT,
    'Accept': 'text/html',
}


def fetch_status_page(url, retries=3, timeout=10):
    """Fetch the server-status page once, retrying on failure. Returns the HTML."""
    if retries < 1:
        raise ValueError(f'retries must be at least 1, got {retries}')

    last_error = None

    for attempt in range(retries):
        try:
            response = requests.get(url, timeout=timeout, headers=headers)
            response.raise_for_status()  # Raises an HTTPError for bad responses
            logger.debug('Fetched %s (%d bytes) on attempt %d',
                         url, len(response.content), attempt + 1)
            return response.text
        except requests.exceptions.RequestException as e:
            last_error = e
            logger.warning('Attempt %d to fetch %s failed: %s', attempt + 1, url, e)

    raise FetchError(f'failed to get a response from {url} after {retries} attempts: {last_error}')
