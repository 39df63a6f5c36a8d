#!/usr/bin/env python3
"""
Subcast Logging Configuration
Diagnostics go to stderr so stdout carries only discovered names.
"""

import logging
import sys

logger = logging.getLogger('subcast')

# Guard against duplicate handlers on repeated imports
if not logger.handlers:
    handler = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter('[%(levelname)s] %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)


def set_verbose(verbose=True):
    """Switch to DEBUG level when -vv is used."""
    if verbose:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)
