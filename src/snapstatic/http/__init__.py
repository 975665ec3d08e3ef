"""HTTP primitives — immutable Request, Headers, and Response."""

from snapstatic.http.headers import Headers
from snapstatic.http.request import Request
from snapstatic.http.response import Response

__all__ = ["Headers", "Request", "Response"]
