"""Entropy source registry with entry-point auto-discovery.

Built-in sources register at import time via ``@register_entropy_source``.
Sources shipped by other packages are discovered lazily, on the first lookup
that misses, through the ``stream_select.entropy_sources`` entry-point group.
"""

from __future__ import annotations

import importlib.metadata
import inspect
import logging
from typing import TYPE_CHECKING, ClassVar

from stream_select.exceptions import InvalidConfigurationError

if TYPE_CHECKING:
    from collections.abc import Callable

    from stream_select.entropy.base import EntropySource

logger = logging.getLogger("stream_select")

_ENTRY_POINT_GROUP = "stream_select.entropy_sources"


class EntropySourceRegistry:
    """Maps source names to EntropySource classes.

    Lookup order: decorator registrations first, then entry points. A
    decorator registration is never replaced by an entry point of the same
    name.
    """

    _registry: ClassVar[dict[str, type[EntropySource]]] = {}
    _entry_points_loaded: ClassVar[bool] = False

    @classmethod
    def register(cls, name: str) -> Callable[[type[EntropySource]], type[EntropySource]]:
        """Decorator that registers a source class under *name*.

        Example::

            @EntropySourceRegistry.register("my_source")
            class MySource(EntropySource):
                ...
        """

        def decorator(source_cls: type[EntropySource]) -> type[EntropySource]:
            cls._registry[name] = source_cls
            return source_cls

        return decorator

    @classmethod
    def get(cls, name: str) -> type[EntropySource]:
        """Look up a source class by name, loading entry points on a miss.

        Raises:
            KeyError: If *name* is unknown after entry points are loaded.
        """
        if name not in cls._registry and not cls._entry_points_loaded:
            cls._load_entry_points()
        try:
            return cls._registry[name]
        except KeyError:
            available = ", ".join(sorted(cls._registry)) or "(none)"
            raise KeyError(f"Unknown entropy source: {name!r}. Available: {available}") from None

    @classmethod
    def build(cls, name: str, seed: int | None = None) -> EntropySource:
        """Instantiate the source registered under *name*.

        *seed* is passed only to constructors that declare a ``seed``
        parameter; OS-backed sources ignore it.

        Raises:
            InvalidConfigurationError: If *name* is not registered.
        """
        try:
            source_cls = cls.get(name)
        except KeyError as exc:
            raise InvalidConfigurationError(str(exc.args[0])) from exc

        if _accepts_seed(source_cls):
            return source_cls(seed=seed)  # type: ignore[call-arg]
        return source_cls()

    @classmethod
    def list_available(cls) -> list[str]:
        """Return all registered source names, sorted."""
        if not cls._entry_points_loaded:
            cls._load_entry_points()
        return sorted(cls._registry)

    @classmethod
    def _load_entry_points(cls) -> None:
        cls._entry_points_loaded = True
        try:
            eps = importlib.metadata.entry_points(group=_ENTRY_POINT_GROUP)
        except Exception:  # Broken metadata must not break lookups.
            logger.warning("Failed to load entry points for %s", _ENTRY_POINT_GROUP, exc_info=True)
            return

        for ep in eps:
            if ep.name in cls._registry:
                continue
            try:
                cls._registry[ep.name] = ep.load()
                logger.debug("Loaded entropy source %r from entry point", ep.name)
            except Exception:  # One bad plugin must not block the others.
                logger.warning(
                    "Failed to load entropy source entry point %r: %s",
                    ep.name,
                    ep.value,
                    exc_info=True,
                )

    @classmethod
    def _reset(cls) -> None:
        """Reset registry state. **Test-only**."""
        cls._registry.clear()
        cls._entry_points_loaded = False


def _accepts_seed(source_cls: type) -> bool:
    try:
        params = inspect.signature(source_cls).parameters
    except (ValueError, TypeError):
        return False
    return "seed" in params


# Convenience alias used as a decorator in source modules.
register_entropy_source = EntropySourceRegistry.register
