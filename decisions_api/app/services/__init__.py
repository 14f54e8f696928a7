"""
Service layer abstraction.

Each service wraps a repository and adds the existence checks the API
relies on: operations on a missing entity raise ``ValueError``, which
the endpoints turn into HTTP 404 responses.
"""
