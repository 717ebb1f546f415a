"""Mini README: Interactive interfaces (HTTP) for Momo Ledger.

Exports the FastAPI application factory that the mobile client talks to.
Further interface modules should live alongside this one.
"""

from .web_app import create_application

__all__ = ["create_application"]
