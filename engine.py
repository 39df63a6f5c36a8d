#!/usr/bin/env python3
"""
Enumeration Engine Boundary
Configuration handed to the discovery engine, the pluggable engine loader,
and a small resolver-based engine used when no other engine is configured.
"""

import importlib
import socket
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field, replace
from datetime import timedelta

from acquisition.whois import reverse_whois
from logger import logger
from pipeline.events import DiscoveryEvent

DEFAULT_FREQUENCY = timedelta(milliseconds=10)


@dataclass
class EngineConfig:
    """Everything an engine needs for one run."""
    domains: list = field(default_factory=list)
    wordlist: list = field(default_factory=list)
    brute_forcing: bool = False
    recursive: bool = True
    frequency: timedelta = DEFAULT_FREQUENCY
    output: object = None
    max_workers: int = 20


def unique_append(items, *new_items):
    """Append new_items to items, skipping anything already present."""
    seen = set(items)
    result = list(items)
    for item in new_items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


class Engine:
    """
    Base class for enumeration engines.

    run() blocks until enumeration completes, putting DiscoveryEvents on
    config.output. A full queue blocks the engine; that is expected.
    """

    def default_config(self):
        return EngineConfig(frequency=DEFAULT_FREQUENCY)

    def run(self, config):
        raise NotImplementedError

    def reverse_whois(self, domain):
        return reverse_whois(domain)


class ResolverEngine(Engine):
    """Resolves root domains and, optionally, wordlist names beneath them."""

    def __init__(self, resolve=socket.gethostbyname, sleep=time.sleep):
        self._resolve = resolve
        self._sleep = sleep

    def _lookup(self, name):
        try:
            return self._resolve(name)
        except (socket.gaierror, socket.herror, UnicodeError):
            return None
        except OSError as e:
            logger.debug("Lookup failed for %s: %s", name, e)
            return None

    def _check(self, name, source, output, found):
        address = self._lookup(name)
        if address:
            output.put(DiscoveryEvent(name=name, address=address, source=source))
            found.append(name)

    def _sweep(self, executor, names, source, config, seen):
        """Resolve names with spaced submissions. Returns newly found names."""
        delay = config.frequency.total_seconds()
        futures = []
        found = []

        for name in names:
            if name in seen:
                continue
            seen.add(name)
            futures.append(executor.submit(self._check, name, source, config.output, found))
            if delay:
                self._sleep(delay)

        for future in as_completed(futures):
            future.result()
        return found

    def run(self, config):
        seen = set()

        with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
            self._sweep(executor, config.domains, 'dns', config, seen)

            if not config.brute_forcing:
                return
            if not config.wordlist:
                logger.warning("Brute forcing requested but the wordlist is empty")
                return

            for domain in config.domains:
                logger.debug("Brute forcing %s with %d words", domain, len(config.wordlist))
                names = [f"{word}.{domain}" for word in config.wordlist]
                found = self._sweep(executor, names, 'brute', config, seen)

                if config.recursive:
                    for sub in found:
                        names = [f"{word}.{sub}" for word in config.wordlist]
                        self._sweep(executor, names, 'brute', config, seen)


def load_engine(target):
    """
    Instantiate an engine from a "module:Attribute" string.

    Raises:
        ValueError: If target is malformed or cannot be imported
    """
    module_name, _, attr = target.partition(':')
    if not module_name or not attr:
        raise ValueError(f"Engine must look like 'module:Attribute', got {target!r}")

    try:
        module = importlib.import_module(module_name)
        factory = getattr(module, attr)
    except (ImportError, AttributeError) as e:
        raise ValueError(f"Cannot load engine {target!r}: {e}") from e

    return factory()


def configure(engine, **overrides):
    """Start from the engine's defaults and apply overrides."""
    return replace(engine.default_config(), **overrides)
