"""Default response headers — security bundle plus ``Vary``.

Every snapshot entry starts from this bundle; the file type's own
headers and the validator are layered on top of it.
"""

from dataclasses import dataclass, fields


@dataclass(frozen=True, slots=True)
class SecurityHeadersConfig:
    """Headers sent with every content response.

    All values are applied as-is. Set a field to ``None`` to omit
    that header entirely.
    """

    strict_transport_security: str | None = "max-age=63072000; includeSubDomains"
    x_content_type_options: str | None = "nosniff"
    x_frame_options: str | None = "DENY"
    content_security_policy: str | None = (
        "default-src 'self'; base-uri 'self'; frame-ancestors 'none'; object-src 'none'"
    )
    cross_origin_opener_policy: str | None = "same-origin"
    cross_origin_embedder_policy: str | None = "require-corp"
    cross_origin_resource_policy: str | None = "same-origin"
    referrer_policy: str | None = "strict-origin-when-cross-origin"
    vary: str | None = "Accept-Encoding"

    def header_items(self) -> tuple[tuple[str, str], ...]:
        """The configured headers as ``(name, value)`` pairs."""
        return tuple(
            (_header_name(f.name), value)
            for f in fields(self)
            if (value := getattr(self, f.name)) is not None
        )


def _header_name(field_name: str) -> str:
    """``cross_origin_opener_policy`` -> ``Cross-Origin-Opener-Policy``."""
    return "-".join(part.capitalize() for part in field_name.split("_"))
