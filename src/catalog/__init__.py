"""Product catalog service.

This package contains a CRUD web API for products with local image uploads,
the database and configuration runtime behind it, and a small browser and
command-line client.
"""

__version__ = "0.1.0"
