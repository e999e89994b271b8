"""Site tree management: mapping source pages to output files and building them."""

import shutil
from datetime import date
from pathlib import Path
from typing import List, Optional, Union

import tomli_w

import constants
from blog_parser import parse, process_page, validate
from common.atomic_file import atomic_write_text
from common.base.logging_config import get_logger
from common.config.site_config import Config, default_config_data
from common.errors import CannotReadFile, CannotWriteFile
from common.result import BlogResult

logger = get_logger(__name__)


class SiteTree:
    """
    The directory layout of one site.

    Pages are `source/**/*.txt`; each one is rendered to the mirrored path
    under `html/` with an `.html` extension. Every other file under `source/`
    is an asset and is copied verbatim, optionally filtered by the
    `[media].include` globs of the configuration.
    """

    def __init__(self, root: Union[str, Path], config: Config):
        self.root = Path(root)
        self.config = config
        self.source_dir = self.root / constants.SOURCE_DIR_NAME
        self.output_dir = self.root / constants.OUTPUT_DIR_NAME

    def pages(self) -> List[Path]:
        """All page sources, sorted for a deterministic build order."""
        if not self.source_dir.is_dir():
            return []
        return sorted(p for p in self.source_dir.rglob(f"*{constants.SOURCE_FILE_EXT}") if p.is_file())

    def assets(self) -> List[Path]:
        """Non-page files under the source directory that should be copied."""
        if not self.source_dir.is_dir():
            return []

        if self.config.media is not None:
            candidates = set()
            for pattern in self.config.media.include:
                candidates.update(self.source_dir.glob(pattern))
        else:
            candidates = set(self.source_dir.rglob("*"))

        return sorted(p for p in candidates
                      if p.is_file() and p.suffix != constants.SOURCE_FILE_EXT)

    def page_name(self, page: Path) -> str:
        """Page path relative to the source directory, without extension (`blog/first-post`)."""
        return page.relative_to(self.source_dir).with_suffix("").as_posix()

    def output_path(self, source: Path) -> Path:
        relative = source.relative_to(self.source_dir)
        if relative.suffix == constants.SOURCE_FILE_EXT:
            relative = relative.with_suffix(constants.OUTPUT_FILE_EXT)
        return self.output_dir / relative

    def _read_page(self, page: Path, result: BlogResult) -> Optional[str]:
        try:
            return page.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
            result.err(CannotReadFile(page, reason))
            return None

    def _display_path(self, path: Path) -> Path:
        try:
            return path.relative_to(self.root)
        except ValueError:
            return path

    def build(self, today: Optional[date] = None) -> BlogResult[List[Path]]:
        """
        Render every page and copy every asset into the output directory.

        A failing page does not stop the build; its errors are collected and
        the remaining pages are still written.

        :param today: Date shown by `::date` (default: the current date)
        :return: The written files, or every error met during the build
        """
        result: BlogResult[List[Path]] = BlogResult()
        written: List[Path] = []

        pages = self.pages()
        logger.info(f"Building {len(pages)} page(s) from {self.source_dir}")

        for page in pages:
            source = self._read_page(page, result)
            if source is None:
                continue

            page_result = process_page(
                source,
                self.config,
                self.page_name(page),
                root=self.root,
                filename=self._display_path(page),
                today=today,
            )
            if not page_result.is_ok:
                logger.debug(f"Skipping {page}: {len(page_result.errors)} error(s)")
                result.merge(page_result)
                continue

            target = self.output_path(page)
            try:
                atomic_write_text(target, page_result.value)
            except CannotWriteFile as e:
                result.err(e)
                continue
            logger.debug(f"Wrote {target}")
            written.append(target)

        for asset in self.assets():
            target = self.output_path(asset)
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(asset, target)
            except OSError as e:
                result.err(CannotWriteFile(target, e.strerror or str(e)))
                continue
            written.append(target)

        logger.info(f"Wrote {len(written)} file(s) to {self.output_dir}")
        return result.ok(written)

    def check(self) -> BlogResult[int]:
        """
        Parse and validate every page without writing anything.

        :return: The number of pages checked, or every diagnostic found
        """
        result: BlogResult[int] = BlogResult()
        pages = self.pages()
        for page in pages:
            source = self._read_page(page, result)
            if source is None:
                continue
            result.errs(validate(parse(source), filename=self._display_path(page)))
        logger.info(f"Checked {len(pages)} page(s)")
        return result.ok(len(pages))

    def clean(self) -> bool:
        """
        Remove the output directory.

        :return: True if there was anything to remove
        """
        if not self.output_dir.exists():
            logger.debug(f"Nothing to clean at {self.output_dir}")
            return False
        shutil.rmtree(self.output_dir)
        logger.info(f"Removed {self.output_dir}")
        return True


def create_site(parent: Union[str, Path], name: str) -> Path:
    """
    Create a new site directory with a default configuration and index page.

    :param parent: Directory the site is created in
    :param name: Site name, also used as the directory name
    :return: The root of the new site
    :raises CannotWriteFile: If the directory already exists or cannot be written
    """
    root = Path(parent) / name
    if root.exists():
        raise CannotWriteFile(root, "directory already exists")

    logger.info(f"Creating new site at {root}")
    config_text = tomli_w.dumps(default_config_data(name))
    atomic_write_text(root / constants.CONFIG_FILE_NAME, config_text)
    atomic_write_text(
        root / constants.SOURCE_DIR_NAME / f"{constants.INDEX_PAGE_NAME}{constants.SOURCE_FILE_EXT}",
        constants.DEFAULT_INDEX,
    )
    return root
