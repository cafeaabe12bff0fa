# Sphinx configuration for the txlens docs.  autodoc imports the installed package,
# so build with ``pip install -e .[docs]``.

project = "txlens"
copyright = "2026, txlens contributors"
author = "txlens contributors"
release = "0.1.0"

extensions = ["sphinx.ext.autodoc", "sphinx.ext.intersphinx"]

autodoc_member_order = "bysource"
autoclass_content = "both"

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "web3": ("https://web3py.readthedocs.io/en/stable/", None),
}

html_theme = "sphinx_book_theme"
html_title = "txlens"
