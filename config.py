#!/usr/bin/env python3
"""
Subcast Configuration File
Loads settings and API keys from .env and the process environment.
"""

import os
import sys

from dotenv import load_dotenv

from logger import logger

# ============================================================================
# LOAD SETTINGS FROM .env
# ============================================================================

# Load .env from the same directory as this file
_env_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), '.env')
load_dotenv(_env_path)

API_KEYS = {
    'OTX_API_KEY': os.environ.get('OTX_API_KEY', ''),
}


def _int_setting(name, default):
    """Read an integer setting, falling back to default on bad input."""
    raw = os.environ.get(name, '')
    if not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r (not an integer), using %d", name, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring %s=%d (must be positive), using %d", name, value, default)
        return default
    return value


# ============================================================================
# ENUMERATION SETTINGS
# ============================================================================

# Wordlist used for brute forcing when -w is not given
DEFAULT_WORDLIST_URL = os.environ.get(
    'SUBCAST_WORDLIST_URL',
    'https://raw.githubusercontent.com/caffix/amass/master/wordlists/namelist.txt'
)

# Pending discovery events before the engine blocks
RESULTS_QUEUE_SIZE = _int_setting('SUBCAST_QUEUE_SIZE', 100)

# Engine implementation, as "module:Attribute"
ENGINE = os.environ.get('SUBCAST_ENGINE', 'engine:ResolverEngine')

# Seconds before an HTTP request is abandoned
REQUEST_TIMEOUT = _int_setting('SUBCAST_REQUEST_TIMEOUT', 30)


# ============================================================================
# SHOW SETTINGS IF EXECUTED DIRECTLY
# ============================================================================

def show_settings():
    """Print the effective configuration, masking API keys."""
    print("\n" + "="*60)
    print("[*] Subcast Settings")
    print("="*60 + "\n")

    print("[+] API Keys...")
    for key_name, key_value in API_KEYS.items():
        if not key_value:
            print(f"    [x] {key_name}: NOT SET")
        else:
            masked_key = key_value[:10] + "..." if len(key_value) > 10 else key_value
            print(f"    [+] {key_name}: {masked_key}")

    print("\n[+] Enumeration...")
    print(f"    Wordlist URL:    {DEFAULT_WORDLIST_URL}")
    print(f"    Queue size:      {RESULTS_QUEUE_SIZE}")
    print(f"    Engine:          {ENGINE}")
    print(f"    Request timeout: {REQUEST_TIMEOUT}s")
    print("\n" + "="*60 + "\n")


if __name__ == "__main__":
    show_settings()
    sys.exit(0)
