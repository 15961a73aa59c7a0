from __future__ import annotations

project = "buildrec"
author = "buildrec developers"

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
    "myst_parser",
]

html_theme = "furo"

autodoc_typehints = "description"
templates_path = ["_templates"]
exclude_patterns = ["_build"]
root_doc = "index"
