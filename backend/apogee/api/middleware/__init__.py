"""ASGI middleware shared by every service."""
