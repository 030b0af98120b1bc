"""
Shared building blocks used by every feature package: the storage gateway
(`db`), the error taxonomy (`errors`), environment settings, schema bootstrap
and input checks. Entity SQL and request handling live in the feature
packages (`users/`, `pantries/`).
"""
