"""Job board adapters.

Each adapter implements one capability, ``fetch(criteria)``, for one board:
- Indeed: indeed.IndeedAdapter
- Naukri: naukri.NaukriAdapter
- Cutshort: cutshort.CutshortAdapter
- Glassdoor: glassdoor.GlassdoorAdapter
- Monster: monster.MonsterAdapter
- LinkedIn: linkedin.LinkedInAdapter

Build adapters from configuration with the factory:
    from jobalert.adapters.factory import build_adapters
    adapters = build_adapters(app_config.sources, app_config.advanced)
"""

from .base import BaseAdapter
from .cutshort import CutshortAdapter
from .exceptions import (
    AdapterConfigurationError,
    AdapterError,
    AdapterHTTPError,
    AdapterResponseError,
    AdapterTimeoutError,
)
from .factory import ADAPTER_REGISTRY, build_adapters, get_adapter
from .glassdoor import GlassdoorAdapter
from .indeed import IndeedAdapter
from .linkedin import LinkedInAdapter
from .monster import MonsterAdapter
from .naukri import NaukriAdapter

__all__ = [
    # Base and factory
    "BaseAdapter",
    "ADAPTER_REGISTRY",
    "build_adapters",
    "get_adapter",
    # Adapters
    "IndeedAdapter",
    "NaukriAdapter",
    "CutshortAdapter",
    "GlassdoorAdapter",
    "MonsterAdapter",
    "LinkedInAdapter",
    # Exceptions
    "AdapterError",
    "AdapterHTTPError",
    "AdapterTimeoutError",
    "AdapterResponseError",
    "AdapterConfigurationError",
]
