"""
API server package — HTTP interface.

Serves the index page and static assets and exposes read-only wallet lookups
that delegate to the analytics layer.
"""
