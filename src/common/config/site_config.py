"""Site configuration management for the Blog Builder."""

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import tomli

import constants
from common.base.logging_config import get_logger
from common.errors import ConfigError, CouldNotFindRoot

logger = get_logger(__name__)

class SiteStyle(enum.Enum):
    """Named themes a site can select with `[site].style`."""
    TECH = "tech"
    MODERN = "modern"
    CITIZEN = "citizen"
    TRUTH = "truth"

@dataclass(frozen=True)
class SiteConfig:
    """Configuration information for the site."""
    name: str
    icon: Optional[str] = None
    style: Optional[SiteStyle] = None

@dataclass(frozen=True)
class MenuConfig:
    """Menu button names and links, as parallel lists."""
    names: Tuple[str, ...]
    links: Tuple[str, ...]

    @property
    def entries(self) -> Tuple[Tuple[str, str], ...]:
        """Menu entries as (name, link) pairs, in configured order."""
        return tuple(zip(self.names, self.links))

@dataclass(frozen=True)
class AnalyticsConfig:
    """Location of the analytics tag, relative to the site root."""
    tag: str

@dataclass(frozen=True)
class MediaConfig:
    """Glob patterns, relative to the source directory, of assets to copy."""
    include: Tuple[str, ...]

@dataclass(frozen=True)
class Config:
    """A configuration file that dictates Blog Builder settings.

    Loaded once per build from `blog.toml` in the site root and never
    modified afterwards.
    """
    site: SiteConfig
    menu: Optional[MenuConfig] = None
    analytics: Optional[AnalyticsConfig] = None
    media: Optional[MediaConfig] = None

def _string_list(section: Dict[str, Any], key: str, section_name: str) -> Tuple[str, ...]:
    values = section.get(key, [])
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise ConfigError(f"[{section_name}].{key} must be a list of strings")
    return tuple(values)

def config_from_dict(data: Dict[str, Any]) -> Config:
    """
    Build a validated Config from already-parsed TOML data.

    :param data: Parsed TOML document
    :return: The site configuration
    :raises ConfigError: If a required field is missing or a value is invalid
    """
    site_data = data.get('site')
    if not isinstance(site_data, dict):
        raise ConfigError("missing [site] section")

    name = site_data.get('name')
    if not isinstance(name, str) or not name.strip():
        raise ConfigError("[site].name is required")

    style = None
    if site_data.get('style') is not None:
        try:
            style = SiteStyle(site_data['style'])
        except ValueError:
            valid = ', '.join(s.value for s in SiteStyle)
            raise ConfigError(
                f"invalid [site].style '{site_data['style']}'. Valid styles are: {valid}"
            ) from None

    site = SiteConfig(name=name, icon=site_data.get('icon'), style=style)

    menu = None
    if 'menu' in data:
        names = _string_list(data['menu'], 'names', 'menu')
        links = _string_list(data['menu'], 'links', 'menu')
        if len(names) != len(links):
            raise ConfigError(
                f"[menu].names has {len(names)} entries but [menu].links has {len(links)}"
            )
        menu = MenuConfig(names=names, links=links)

    analytics = None
    if 'analytics' in data:
        tag = data['analytics'].get('tag')
        if not isinstance(tag, str) or not tag:
            raise ConfigError("[analytics].tag must be a file path")
        analytics = AnalyticsConfig(tag=tag)

    media = None
    if 'media' in data:
        media = MediaConfig(include=_string_list(data['media'], 'include', 'media'))

    return Config(site=site, menu=menu, analytics=analytics, media=media)

def load_config(root: Union[str, Path]) -> Config:
    """
    Load and validate the configuration file of a site.

    :param root: Site root directory holding `blog.toml`
    :return: The site configuration
    :raises ConfigError: If the file cannot be read or is invalid
    """
    config_path = Path(root) / constants.CONFIG_FILE_NAME
    logger.info(f"Loading site configuration from {config_path}")
    try:
        with open(config_path, 'rb') as f:
            data = tomli.load(f)
    except OSError as e:
        logger.error(f"Error reading site configuration: {e}")
        raise ConfigError(f"cannot read '{config_path}': {e.strerror or e}") from e
    except tomli.TOMLDecodeError as e:
        logger.error(f"Error parsing site configuration: {e}")
        raise ConfigError(f"cannot parse '{config_path}': {e}") from e

    try:
        return config_from_dict(data)
    except ConfigError as e:
        logger.error(f"Invalid site configuration in {config_path}: {e}")
        raise

def find_root(start: Optional[Union[str, Path]] = None) -> Path:
    """
    Find the site root by walking up from a directory.

    :param start: Directory to start from (default: current working directory)
    :return: First directory, from `start` upwards, containing `blog.toml`
    :raises CouldNotFindRoot: If no such directory exists
    """
    start_path = Path(start) if start is not None else Path.cwd()
    start_path = start_path.resolve()
    for candidate in (start_path, *start_path.parents):
        if (candidate / constants.CONFIG_FILE_NAME).is_file():
            logger.debug(f"Found site root at {candidate}")
            return candidate
    raise CouldNotFindRoot(start_path)

def default_config_data(name: str) -> Dict[str, Any]:
    """Configuration written for a brand new site."""
    return {
        'site': {
            'name': name,
        },
        'menu': {
            'names': ['Home'],
            'links': ['/'],
        },
    }
