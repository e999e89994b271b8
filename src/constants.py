import os

VERSION = "0.3.0"

# Get the src directory
SRC_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(SRC_DIR)

# Site layout, relative to the site root
CONFIG_FILE_NAME = "blog.toml"
SOURCE_DIR_NAME = "source"
OUTPUT_DIR_NAME = "html"

SOURCE_FILE_EXT = ".txt"
OUTPUT_FILE_EXT = ".html"

INDEX_PAGE_NAME = "index"
STYLESHEET_FILE_NAME = "style.css"

# Deepest heading level supported by the markup (h1 through h6)
MAX_HEADING_LEVEL = 6

DEFAULT_INDEX = """# Welcome
~
This site was built with the Blog Builder.

Edit *source/index.txt* and run `blog build` to regenerate it.
"""
