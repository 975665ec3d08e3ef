"""Testing utilities for snapstatic applications.

Usage::

    from snapstatic.testing import TestClient

    async with TestClient(app) as client:
        response = await client.get("/index.css", headers={"Accept-Encoding": "br"})
        assert response.status == 200
"""

from snapstatic.testing.client import TestClient

__all__ = ["TestClient"]
