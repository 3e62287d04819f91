"""Item-shop HTTP service with paginated item listings stored in PostgreSQL."""

__version__ = "0.1.0"