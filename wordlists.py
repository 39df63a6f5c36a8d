"""
Wordlist and Domain File Loading
Reads newline-delimited names from disk or from the default wordlist URL.
"""

import requests

import config
from logger import logger


def _non_empty(lines):
    return [line.strip() for line in lines if line.strip()]


def get_file(path):
    """
    Read a newline-delimited file.

    Args:
        path: Path to a local file

    Returns:
        List of non-empty lines in file order, or empty list on failure
    """
    try:
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            return _non_empty(f)
    except OSError as e:
        logger.error("Error opening the file: %s", e)
        return []


def get_wordlist(path=""):
    """
    Load the brute forcing wordlist.

    Args:
        path: Local wordlist path; the default URL is fetched when empty

    Returns:
        List of words or empty list on failure
    """
    if path:
        return get_file(path)

    url = config.DEFAULT_WORDLIST_URL
    logger.debug("Fetching default wordlist from %s", url)

    try:
        response = requests.get(url, timeout=config.REQUEST_TIMEOUT)
        response.raise_for_status()

    except requests.exceptions.Timeout:
        logger.error("Wordlist download timed out: %s", url)
        return []

    except requests.exceptions.HTTPError as e:
        logger.error("Wordlist download HTTP error: %s", e)
        return []

    except requests.exceptions.RequestException as e:
        logger.error("Wordlist download failed: %s", e)
        return []

    words = _non_empty(response.text.splitlines())
    logger.debug("Loaded %d words from the default wordlist", len(words))
    return words
