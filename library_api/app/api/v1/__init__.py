"""
Version 1 of the API.

This subpackage bundles the member, book and borrow endpoints.  It is
mounted at the application root because clients address the
resources directly (``/members``, ``/borrows``).
"""
