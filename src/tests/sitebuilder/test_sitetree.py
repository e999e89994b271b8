import shutil
import tempfile
import unittest
from datetime import date
from pathlib import Path

from common.config.site_config import Config, MediaConfig, MenuConfig, SiteConfig, load_config
from common.errors import CannotWriteFile
from sitebuilder.sitetree import SiteTree, create_site


class SiteTreeTestBase(unittest.TestCase):
    """Base class with a temporary site root."""

    def setUp(self):
        self.root = Path(tempfile.mkdtemp())
        self.source = self.root / "source"
        self.source.mkdir()
        self.config = Config(
            site=SiteConfig(name="Test Site"),
            menu=MenuConfig(names=("Home",), links=("/",)),
        )

    def tearDown(self):
        shutil.rmtree(self.root, ignore_errors=True)

    def write_source(self, relative, content):
        path = self.source / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path


class TestSiteTreeLayout(SiteTreeTestBase):

    def test_pages_are_sorted(self):
        self.write_source("b.txt", "B")
        self.write_source("a.txt", "A")
        self.write_source("blog/c.txt", "C")
        self.write_source("logo.png", "png")
        tree = SiteTree(self.root, self.config)
        self.assertEqual(
            [p.relative_to(self.source).as_posix() for p in tree.pages()],
            ["a.txt", "b.txt", "blog/c.txt"],
        )

    def test_output_path_mirrors_source(self):
        tree = SiteTree(self.root, self.config)
        self.assertEqual(
            tree.output_path(self.source / "blog" / "first.txt"),
            self.root / "html" / "blog" / "first.html",
        )
        self.assertEqual(
            tree.output_path(self.source / "img" / "a.png"),
            self.root / "html" / "img" / "a.png",
        )

    def test_page_name(self):
        tree = SiteTree(self.root, self.config)
        self.assertEqual(tree.page_name(self.source / "blog" / "first.txt"), "blog/first")

    def test_media_include_filters_assets(self):
        self.write_source("a.png", "png")
        self.write_source("notes.md", "md")
        config = Config(site=self.config.site, media=MediaConfig(include=("*.png",)))
        tree = SiteTree(self.root, config)
        self.assertEqual([p.name for p in tree.assets()], ["a.png"])

    def test_missing_source_directory(self):
        shutil.rmtree(self.source)
        tree = SiteTree(self.root, self.config)
        self.assertEqual(tree.pages(), [])
        self.assertEqual(tree.assets(), [])


class TestSiteTreeBuild(SiteTreeTestBase):

    def test_build_writes_pages_and_assets(self):
        self.write_source("index.txt", "# Welcome\n~\nHello *world*\n")
        self.write_source("blog/first-post.txt", "::date\n")
        self.write_source("style.css", "body {}")

        result = SiteTree(self.root, self.config).build(today=date(2024, 1, 1))
        self.assertTrue(result.is_ok, result)
        self.assertEqual(len(result.value), 3)

        index = (self.root / "html" / "index.html").read_text()
        self.assertIn("<title>Test Site</title>", index)
        self.assertIn('<div class="menu"><a href="/">Home</a></div>', index)
        self.assertIn("<p>Hello <em>world</em></p>", index)

        post = (self.root / "html" / "blog" / "first-post.html").read_text()
        self.assertIn("<title>First Post | Test Site</title>", post)
        self.assertIn("Last Updated Monday, January 01, 2024", post)

        self.assertEqual((self.root / "html" / "style.css").read_text(), "body {}")

    def test_build_collects_every_error(self):
        self.write_source("good.txt", "# Fine\n")
        self.write_source("bad1.txt", "**oops\n")
        self.write_source("bad2.txt", "::video [x]\n")

        result = SiteTree(self.root, self.config).build()
        self.assertFalse(result.is_ok)
        messages = [str(e) for e in result.errors]
        self.assertEqual(len(messages), 2)
        self.assertIn("source/bad1.txt", messages[0])
        self.assertIn("unrecognized control sequence 'video'", messages[1])
        # Valid pages are still written
        self.assertTrue((self.root / "html" / "good.html").exists())
        self.assertFalse((self.root / "html" / "bad1.html").exists())

    def test_check_reports_without_writing(self):
        self.write_source("bad.txt", "]\n")
        result = SiteTree(self.root, self.config).check()
        self.assertEqual(len(result.errors), 1)
        self.assertFalse((self.root / "html").exists())

    def test_check_counts_pages(self):
        self.write_source("a.txt", "A\n")
        self.write_source("b.txt", "B\n")
        result = SiteTree(self.root, self.config).check()
        self.assertTrue(result.is_ok)
        self.assertEqual(result.value, 2)

    def test_clean(self):
        self.write_source("index.txt", "Hi\n")
        tree = SiteTree(self.root, self.config)
        tree.build()
        self.assertTrue(tree.clean())
        self.assertFalse((self.root / "html").exists())
        self.assertFalse(tree.clean())


class TestCreateSite(unittest.TestCase):

    def setUp(self):
        self.parent = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.parent, ignore_errors=True)

    def test_create_site_builds_cleanly(self):
        root = create_site(self.parent, "fresh")
        self.assertTrue((root / "blog.toml").is_file())
        self.assertTrue((root / "source" / "index.txt").is_file())

        config = load_config(root)
        self.assertEqual(config.site.name, "fresh")
        result = SiteTree(root, config).build()
        self.assertTrue(result.is_ok, result)

    def test_refuses_existing_directory(self):
        (self.parent / "taken").mkdir()
        with self.assertRaises(CannotWriteFile):
            create_site(self.parent, "taken")


if __name__ == "__main__":
    unittest.main()
