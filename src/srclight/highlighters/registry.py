#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/srclight/highlighters/registry.py
"""Registry mapping highlighter names and aliases to adapter instances.

The registry is written during startup (built-in registration and plugin
discovery) and read by every document conversion afterwards. Writes build
a new immutable mapping under a lock and swap it in, so readers never lock
and never observe a half-applied registration.

Examples
--------
Use the process-wide registry:

    >>> from srclight.highlighters import highlighter_registry
    >>> adapter = highlighter_registry.resolve("highlight.js")
    >>> adapter.registered_name
    'highlightjs'

Register a custom adapter:

    >>> highlighter_registry.register("mine", ("my-alias",), MyHighlighter())

Third-party packages can register adapters through the
``srclight.highlighters`` entry point group. Each entry point loads either a
``BaseHighlighter`` subclass or a callable that receives the registry.

"""

from __future__ import annotations

import importlib.metadata
import logging
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from srclight.highlighters.base import BaseHighlighter

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "srclight.highlighters"


@dataclass(frozen=True)
class HighlighterDescriptor:
    """Registration record for one adapter.

    Parameters
    ----------
    name : str
        Canonical (lower-case) name
    aliases : tuple of str
        Alternative lower-case names
    adapter : BaseHighlighter
        The adapter instance
    supports_highlighting : bool
        Capability flag captured at registration time

    """

    name: str
    aliases: tuple[str, ...]
    adapter: BaseHighlighter
    supports_highlighting: bool

    @property
    def keys(self) -> tuple[str, ...]:
        return (self.name, *self.aliases)


def _normalize(name: str) -> str:
    return name.strip().lower()


class HighlighterRegistry:
    """Copy-on-write registry of highlighter adapters.

    Lookups are case-insensitive over names and aliases. Resolution fails
    open: an unknown name yields None so the caller renders plain text.

    Notes
    -----
    Plugin discovery runs once, on the first read, unless it was disabled
    by passing ``discover=False``. Readers in other threads wait until it
    has finished.

    """

    def __init__(self, *, discover: bool = True):
        """Create an empty registry."""
        self._write_lock = threading.Lock()
        self._descriptors: Mapping[str, HighlighterDescriptor] = MappingProxyType({})
        self._lookup: Mapping[str, HighlighterDescriptor] = MappingProxyType({})
        self._init_lock = threading.RLock()
        self._initialized = not discover
        self._discovering = False

    def _ensure_initialized(self) -> None:
        """Ensure plugin discovery has been run."""
        if self._initialized:
            return
        with self._init_lock:
            # Plugins may read the registry while they are being discovered
            if self._initialized or self._discovering:
                return
            self._discovering = True
            try:
                self.discover_plugins()
            finally:
                self._discovering = False
                self._initialized = True

    def _publish(self, descriptors: dict[str, HighlighterDescriptor]) -> None:
        lookup: dict[str, HighlighterDescriptor] = {}
        for descriptor in descriptors.values():
            for alias in descriptor.aliases:
                lookup[alias] = descriptor
        # Canonical names win over aliases of other adapters
        for descriptor in descriptors.values():
            lookup[descriptor.name] = descriptor
        self._descriptors = MappingProxyType(descriptors)
        self._lookup = MappingProxyType(lookup)

    def register(self, name: str, aliases: Iterable[str], adapter: BaseHighlighter) -> HighlighterDescriptor:
        """Register an adapter under a name and aliases.

        Parameters
        ----------
        name : str
            Canonical name
        aliases : iterable of str
            Alternative names
        adapter : BaseHighlighter
            Adapter instance

        Returns
        -------
        HighlighterDescriptor
            The new registration record

        Raises
        ------
        TypeError
            If ``adapter`` is not a BaseHighlighter
        ValueError
            If ``name`` is empty

        Notes
        -----
        If a highlighter with the same name is already registered, it will
        be overwritten and a warning will be logged.

        """
        if not isinstance(adapter, BaseHighlighter):
            raise TypeError(f"Highlighter adapter must be a BaseHighlighter, got {type(adapter).__name__}")
        key = _normalize(name)
        if not key:
            raise ValueError("Highlighter name must not be empty")

        alias_keys = tuple(dict.fromkeys(a for a in (_normalize(alias) for alias in aliases) if a and a != key))
        descriptor = HighlighterDescriptor(
            name=key,
            aliases=alias_keys,
            adapter=adapter,
            supports_highlighting=adapter.supports_highlighting(),
        )

        with self._write_lock:
            if key in self._descriptors:
                logger.warning(f"Highlighter '{key}' already registered, overwriting")
            descriptors = dict(self._descriptors)
            descriptors[key] = descriptor
            self._publish(descriptors)

        logger.debug(f"Registered highlighter: {key} (aliases: {', '.join(alias_keys) or 'none'})")
        return descriptor

    def unregister(self, name: str) -> bool:
        """Unregister a highlighter and its aliases.

        Parameters
        ----------
        name : str
            Canonical name or alias

        Returns
        -------
        bool
            True if a highlighter was unregistered, False if not found

        """
        with self._write_lock:
            descriptor = self._lookup.get(_normalize(name))
            if descriptor is None:
                return False
            descriptors = dict(self._descriptors)
            del descriptors[descriptor.name]
            self._publish(descriptors)
        logger.debug(f"Unregistered highlighter: {descriptor.name}")
        return True

    def clear(self) -> None:
        """Remove every registration."""
        with self._write_lock:
            self._publish({})

    def resolve(self, name: Optional[str]) -> Optional[BaseHighlighter]:
        """Return the adapter registered for ``name``.

        Parameters
        ----------
        name : str or None
            Highlighter name or alias

        Returns
        -------
        BaseHighlighter or None
            The adapter, or None when the name is empty or unknown

        """
        if not name:
            return None
        self._ensure_initialized()
        descriptor = self._lookup.get(_normalize(name))
        if descriptor is None:
            logger.debug(f"Unknown highlighter '{name}', rendering without highlighting")
            return None
        return descriptor.adapter

    def get_descriptor(self, name: str) -> HighlighterDescriptor:
        """Get the registration record for a highlighter.

        Raises
        ------
        KeyError
            If the highlighter is not registered

        """
        self._ensure_initialized()
        descriptor = self._lookup.get(_normalize(name))
        if descriptor is None:
            raise KeyError(f"Highlighter '{name}' not registered")
        return descriptor

    def has_highlighter(self, name: str) -> bool:
        self._ensure_initialized()
        return _normalize(name) in self._lookup

    def list_highlighters(self) -> list[str]:
        """List canonical highlighter names, sorted alphabetically."""
        self._ensure_initialized()
        return sorted(self._descriptors)

    def discover_plugins(self) -> int:
        """Discover and register highlighters from entry points.

        This method scans the ``srclight.highlighters`` entry point group.
        Each entry point may load a ``BaseHighlighter`` subclass, which is
        instantiated and registered under its ``name`` and ``aliases``, or a
        callable that performs its own registrations on this registry.

        Returns
        -------
        int
            Number of entry points loaded successfully

        """
        discovered_count = 0

        try:
            highlighter_eps = importlib.metadata.entry_points().select(group=ENTRY_POINT_GROUP)
        except Exception as e:
            logger.warning(f"Failed to discover highlighter plugins: {e}")
            return 0

        for ep in highlighter_eps:
            try:
                target = ep.load()
                if isinstance(target, type) and issubclass(target, BaseHighlighter):
                    adapter = target()
                    self.register(adapter.registered_name or ep.name, target.aliases, adapter)
                elif callable(target):
                    target(self)
                else:
                    logger.warning(f"Entry point '{ep.name}' is neither a highlighter class nor a callable, skipping")
                    continue
                discovered_count += 1
                logger.debug(f"Discovered highlighter from entry point: {ep.name}")
            except Exception as e:
                logger.warning(f"Failed to load highlighter entry point '{ep.name}': {e}")
                continue

        logger.debug(f"Discovered {discovered_count} highlighter plugin(s) from entry points")
        return discovered_count
