# Sphinx configuration for the ecosystem-core reference docs.

import os
import sys

sys.path.insert(0, os.path.abspath('../src'))

from ecosystem_core import __version__  # noqa: E402

project = 'ecosystem-core'
copyright = '2024, ecosystem-core contributors'
author = 'ecosystem-core contributors'
version = '.'.join(__version__.split('.')[:2])
release = __version__

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
    'sphinx.ext.intersphinx',
    'sphinx_autodoc_typehints',
]

exclude_patterns = ['_build']
master_doc = 'index'

html_theme = 'sphinx_rtd_theme'
html_title = f'ecosystem-core {release}'

# Hide pydantic's generated model members.
autodoc_default_options = {
    'members': True,
    'member-order': 'bysource',
    'exclude-members': 'model_config,model_fields,model_computed_fields',
}
autodoc_typehints = 'description'
always_document_param_types = False

napoleon_google_docstring = True
napoleon_numpy_docstring = False

intersphinx_mapping = {
    'python': ('https://docs.python.org/3', None),
    'pydantic': ('https://docs.pydantic.dev/latest', None),
}
