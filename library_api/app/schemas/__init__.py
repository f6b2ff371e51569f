"""
Pydantic schema definitions for API payloads.

Each domain (members, books, borrows) defines its own Pydantic models
for request and response bodies.  Request models declare every field
optional: presence is checked by the services so that a missing field
is reported as ``MissingFields`` rather than as a validation error.
"""
