"""Product catalog HTTP API.

Products are stored in a SQL-backed document table; their images live in an
external image-hosting service and are referenced by public id.
"""

__version__ = "0.1.0"
