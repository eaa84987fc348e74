"""Planet data providers.

A provider returns heliocentric ecliptic coordinates (mean equinox of date)
of one of the eight planets at a Julian Day:

  vsop87   truncated VSOP87 series for the Earth (built in, no extras)
  de422    JPL DE422 for all eight planets (optional)
           pip install "scalib[ephemeris]"

The Sun pipeline asks the default provider for Planet.EARTH unless it was
constructed with another one.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Protocol, Union

from scalib.core.errors import InvalidInputError
from scalib.core.time import require_jd
from scalib.core.types import HeliocentricPosition, Planet

log = logging.getLogger(__name__)


class PlanetDataProvider(Protocol):
    def heliocentric(self, planet: Planet, jd: float) -> HeliocentricPosition: ...
    def info(self) -> Dict[str, Any]: ...


ProviderFactory = Callable[[], PlanetDataProvider]


@dataclass
class ProviderRegistry:
    """Named providers, instantiated on first use."""
    _factories: Dict[str, ProviderFactory]
    default: str = "vsop87"
    _instances: Dict[str, PlanetDataProvider] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def get(self, name: Optional[str] = None) -> PlanetDataProvider:
        name = name or self.default
        if name not in self._factories:
            raise KeyError(f"Unknown planet data provider '{name}'. Available: {self.list()}")
        with self._lock:
            provider = self._instances.get(name)
            if provider is None:
                log.debug("loading planet data provider %r", name)
                provider = self._factories[name]()
                self._instances[name] = provider
        return provider

    def list(self) -> List[str]:
        return sorted(self._factories.keys())

    def register(
        self,
        name: str,
        provider: Union[PlanetDataProvider, ProviderFactory],
        *,
        overwrite: bool = False,
    ) -> None:
        """
        Register a provider instance, or a zero-argument factory building one.

        Classes count as factories even though they carry `heliocentric`.
        """
        if (not overwrite) and (name in self._factories):
            raise KeyError(f"Provider '{name}' already exists. Use overwrite=True to replace.")
        with self._lock:
            self._instances.pop(name, None)
            if not isinstance(provider, type) and hasattr(provider, "heliocentric"):
                self._instances[name] = provider
                self._factories[name] = lambda p=provider: p
            else:
                self._factories[name] = provider
        log.debug("registered planet data provider %r", name)

    def set_default(self, name: str) -> None:
        if name not in self._factories:
            raise KeyError(f"Unknown planet data provider '{name}'. Available: {self.list()}")
        self.default = name


def build_registry() -> ProviderRegistry:
    from .de422 import DE422PlanetProvider
    from .vsop87 import Vsop87EarthProvider

    return ProviderRegistry({"vsop87": Vsop87EarthProvider, "de422": DE422PlanetProvider.load})


_registry = build_registry()


def get_registry() -> ProviderRegistry:
    return _registry


def set_registry(reg: ProviderRegistry) -> None:
    global _registry
    _registry = reg


def get_provider(name: Optional[str] = None) -> PlanetDataProvider:
    return _registry.get(name)


def register_provider(name: str, provider: Union[PlanetDataProvider, ProviderFactory], *, overwrite: bool = False) -> None:
    _registry.register(name, provider, overwrite=overwrite)


def set_default_provider(name: str) -> None:
    _registry.set_default(name)


def resolve_provider(provider: Union[str, PlanetDataProvider, None]) -> PlanetDataProvider:
    """Accept a provider instance, a registered name, or None for the default."""
    if provider is None or isinstance(provider, str):
        return get_provider(provider)
    return provider


def planet_data(
    planet: Union[Planet, int],
    jd: float,
    provider: Union[str, PlanetDataProvider, None] = None,
) -> HeliocentricPosition:
    """Heliocentric longitude/latitude (degrees) and distance (AU) of `planet` at `jd`."""
    jd = require_jd(jd)
    try:
        planet = Planet(planet)
    except ValueError as e:
        raise InvalidInputError(f"planet must be in 1..8, got {planet!r}") from e
    return resolve_provider(provider).heliocentric(planet, jd)


def require_ephemeris():
    """Raise a clear error if ephemeris extras aren't installed."""
    try:
        import jplephem  # noqa: F401
        import de422  # noqa: F401
    except ImportError as e:
        raise RuntimeError('Ephemeris support requires: pip install "scalib[ephemeris]"') from e
