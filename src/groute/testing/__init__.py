"""Test utilities for groute routers::

    from groute.testing import TestClient
"""

from groute.testing.client import TestClient

__all__ = ["TestClient"]
