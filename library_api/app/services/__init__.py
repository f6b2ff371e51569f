"""
Service layer.

Each service encapsulates business logic for a domain and receives
the store handles (and, for members, the validation client) through
its constructor.  API handlers build services from FastAPI
dependencies, so tests can swap any collaborator.
"""
