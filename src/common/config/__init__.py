"""Site configuration management for the Blog Builder."""

from .site_config import (
    AnalyticsConfig,
    Config,
    MediaConfig,
    MenuConfig,
    SiteConfig,
    SiteStyle,
    config_from_dict,
    default_config_data,
    find_root,
    load_config,
)

__all__ = [
    "AnalyticsConfig",
    "Config",
    "MediaConfig",
    "MenuConfig",
    "SiteConfig",
    "SiteStyle",
    "config_from_dict",
    "default_config_data",
    "find_root",
    "load_config",
]
