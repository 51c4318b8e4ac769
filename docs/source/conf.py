# Sphinx configuration for the spine documentation.

import os
import re
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))

# -- Project information -----------------------------------------------------

project = "spine"
copyright = "2025, spine developers"
author = "spine developers"

# Read version from pyproject.toml
pyproject_path = os.path.join(os.path.dirname(os.path.dirname(__file__)), '..', 'pyproject.toml')
with open(pyproject_path, 'r') as f:
    content = f.read()
    version_match = re.search(r'^version = ["\']([^"\']+)["\']', content, re.MULTILINE)
    release = version_match.group(1) if version_match else "0.1.0"

# General configuration
extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
    'sphinx_rtd_theme'
]

autodoc_member_order = 'bysource'
templates_path = ['_templates']
exclude_patterns = []

# HTML output options
html_theme = 'sphinx_rtd_theme'
html_title = 'spine Documentation'
