"""File type descriptors — extension to header template and compress flag.

A lookup table, not a class hierarchy. The default table covers the
usual web assets; pass a different mapping to ``HandlerConfig`` (or
build one with ``merge_file_types``) to override or extend it.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from snapstatic.errors import ConfigurationError

NO_CACHE = "public,no-cache"
DAY = "public,max-age=86400,must-revalidate"
HOUR = "public,max-age=3600,must-revalidate"
IMMUTABLE = "public,immutable"


@dataclass(frozen=True, slots=True)
class FileType:
    """How files with one extension are served.

    ``compress`` selects whether gzip and brotli representations are
    built. ``text`` switches brotli into its text mode.
    """

    content_type: str
    cache_control: str
    compress: bool
    text: bool = False
    headers: tuple[tuple[str, str], ...] = ()

    def header_items(self) -> tuple[tuple[str, str], ...]:
        """Headers contributed by this type, in emission order."""
        return (
            ("Content-Type", self.content_type),
            ("Cache-Control", self.cache_control),
            *self.headers,
        )

    def validate(self, extension: str) -> None:
        """Raise ``ConfigurationError`` if this descriptor is unusable."""
        if not self.content_type:
            msg = f"File type {extension!r} has no Content-Type"
            raise ConfigurationError(msg)
        directives = [d.strip() for d in self.cache_control.split(",")]
        if "public" not in directives:
            msg = (
                f"File type {extension!r} Cache-Control must contain 'public', "
                f"got {self.cache_control!r}"
            )
            raise ConfigurationError(msg)


def _text(content_type: str, cache_control: str) -> FileType:
    return FileType(content_type, cache_control, compress=True, text=True)


def _binary(content_type: str, cache_control: str, *, compress: bool = False) -> FileType:
    return FileType(content_type, cache_control, compress=compress)


DEFAULT_FILE_TYPES: Mapping[str, FileType] = MappingProxyType(
    {
        "js": _text("application/javascript", NO_CACHE),
        "mjs": _text("application/javascript", NO_CACHE),
        "css": _text("text/css", NO_CACHE),
        "map": _text("application/json", NO_CACHE),
        "htm": _text("text/html", NO_CACHE),
        "html": _text("text/html", NO_CACHE),
        "txt": _text("text/plain", DAY),
        "csv": _text("text/csv", DAY),
        "md": _text("text/markdown", DAY),
        "adoc": _text("text/asciidoc", DAY),
        "xml": _text("application/xml", DAY),
        "gpx": _text("application/gpx+xml", DAY),
        "json": _text("application/json", HOUR),
        "jsonld": _text("application/ld+json", HOUR),
        "geojson": _text("application/geo+json", DAY),
        "topojson": _text("application/json", DAY),
        "yaml": _text("text/yaml", HOUR),
        "woff": _binary("application/font-woff", IMMUTABLE),
        "woff2": _binary("font/woff2", IMMUTABLE),
        "jpg": _binary("image/jpeg", IMMUTABLE),
        "png": _binary("image/png", IMMUTABLE),
        "svg": _text("image/svg+xml", IMMUTABLE),
        "ico": _binary("image/x-icon", IMMUTABLE),
        "webp": _binary("image/webp", IMMUTABLE),
        "mp4": _binary("video/mp4", IMMUTABLE),
        "webm": _binary("video/webm", IMMUTABLE),
        "zip": _binary("application/zip", NO_CACHE),
        "epub": _binary("application/epub+zip", NO_CACHE),
        "pdf": _binary("application/pdf", NO_CACHE, compress=True),
        "wav": _binary("audio/x-wav", IMMUTABLE, compress=True),
        "mp3": _binary("audio/mp3", IMMUTABLE),
        "aac": _binary("audio/aac", IMMUTABLE),
        "wasm": _binary("application/wasm", HOUR, compress=True),
        "wat": _text("text/plain", HOUR),
        "sig": _binary("application/pgp-signature", NO_CACHE),
        "bin": _binary("application/octet-stream", DAY, compress=True),
        "glsl": _text("text/plain", HOUR),
        "gltf": _text("model/gltf+json", DAY),
        "glb": _binary("model/gltf-binary", DAY, compress=True),
        "manifest": _text("application/manifest+json", HOUR),
    }
)


def merge_file_types(
    overrides: Mapping[str, FileType],
    base: Mapping[str, FileType] = DEFAULT_FILE_TYPES,
) -> Mapping[str, FileType]:
    """Return a read-only table of *base* overridden and extended by *overrides*.

    Keys may be given with or without a leading dot::

        types = merge_file_types({".webmanifest": FileType(
            "application/manifest+json", "public,no-cache", compress=True, text=True,
        )})
    """
    merged = dict(base)
    for extension, file_type in overrides.items():
        merged[extension.removeprefix(".")] = file_type
    return MappingProxyType(merged)


def validate_file_types(file_types: Mapping[str, FileType]) -> None:
    """Validate every descriptor in *file_types*."""
    for extension, file_type in file_types.items():
        if not extension or extension.startswith(".") or "/" in extension:
            msg = f"Invalid file type extension {extension!r}"
            raise ConfigurationError(msg)
        file_type.validate(extension)
