"""Site builder - turns a directory of Blog Builder pages into a static site."""

from .sitetree import SiteTree, create_site

__all__ = ['SiteTree', 'create_site']
