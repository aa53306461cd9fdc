"""
Service layer abstraction.

Each service encapsulates business logic for a domain and talks to
storage only through the repository it was constructed with.
"""
