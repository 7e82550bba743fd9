"""Factory for instantiating job board adapters from configuration."""

import logging
from typing import Dict, List, Optional, Type

import requests

from jobalert.config.models import AdvancedConfig, SourceConfig

from .base import BaseAdapter
from .cutshort import CutshortAdapter
from .exceptions import AdapterConfigurationError
from .glassdoor import GlassdoorAdapter
from .indeed import IndeedAdapter
from .linkedin import LinkedInAdapter
from .monster import MonsterAdapter
from .naukri import NaukriAdapter

logger = logging.getLogger(__name__)

ADAPTER_REGISTRY: Dict[str, Type[BaseAdapter]] = {
    "indeed": IndeedAdapter,
    "naukri": NaukriAdapter,
    "cutshort": CutshortAdapter,
    "glassdoor": GlassdoorAdapter,
    "monster": MonsterAdapter,
    "linkedin": LinkedInAdapter,
}


def get_adapter(
    source_config: SourceConfig,
    advanced_config: AdvancedConfig,
    session: Optional[requests.Session] = None,
) -> BaseAdapter:
    """Instantiate the adapter for one configured source.

    Raises:
        AdapterConfigurationError: If the source type is not registered or
            the adapter rejects the HTTP settings

    Example:
        >>> adapter = get_adapter(SourceConfig(type="naukri"), AdvancedConfig())
        >>> postings = adapter.fetch(criteria)
    """
    source_type = str(source_config.type).lower()
    adapter_class = ADAPTER_REGISTRY.get(source_type)

    if not adapter_class:
        supported = ", ".join(sorted(ADAPTER_REGISTRY))
        raise AdapterConfigurationError(
            f"Unknown source type: {source_config.type}. Supported types: {supported}"
        )

    logger.debug(
        "Creating adapter instance",
        extra={"source_type": source_type, "adapter_class": adapter_class.__name__},
    )

    try:
        return adapter_class(
            timeout=advanced_config.http_request_timeout,
            user_agent=advanced_config.user_agent,
            max_postings=advanced_config.max_postings_per_source,
            session=session,
        )
    except AdapterConfigurationError:
        raise
    except Exception as e:
        raise AdapterConfigurationError(f"Failed to create {source_type} adapter: {e}") from e


def build_adapters(
    sources: List[SourceConfig], advanced_config: AdvancedConfig
) -> List[BaseAdapter]:
    """Adapters for every enabled source, in declaration order."""
    return [get_adapter(source, advanced_config) for source in sources if source.enabled]
