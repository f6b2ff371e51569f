"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Each domain (members, books, borrows) exposes a router
defined in ``api/v1/endpoints`` backed by a service in ``services``.
Storage, configuration, identifiers and errors live in ``core``.
"""

from .main import app  # noqa: F401
