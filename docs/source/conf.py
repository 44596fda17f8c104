# Configuration file for the Sphinx documentation builder.

import os
import sys


# -- Path setup --------------------------------------------------------------

# To find the pegcomb module
sys.path.insert(0, os.path.abspath("../.."))

# -- Project information -----------------------------------------------------

project = "Pegcomb"
copyright = "2026, Pegcomb contributors"
author = "Pegcomb contributors"

from pegcomb import __version__ as version

release = version

# -- General configuration ---------------------------------------------------

master_doc = "index"

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.intersphinx",
    "sphinx.ext.doctest",
    "numpydoc",
]

# -- Options for numpydoc/autodoc --------------------------------------------

# Members are documented explicitly in the package docstring
numpydoc_show_class_members = False

autodoc_member_order = "bysource"

add_module_names = False

autodoc_typehints = "none"

# -- Options for intersphinx -------------------------------------------------

# For references to RecursionError, logging, etc.
intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
}

# -- Options for HTML output -------------------------------------------------

html_theme = "nature"
