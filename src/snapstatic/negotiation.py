"""Request-target normalization and Accept-Encoding negotiation.

Both are pure string functions; the handler calls them once per request.
"""

from typing import Literal, TypeAlias

Encoding: TypeAlias = Literal["identity", "gzip", "br"]


def uri_path(target: str) -> str:
    """Path component of a request target.

    Truncates at whichever of ``?`` or ``#`` comes first::

        >>> uri_path("/a.css?v=2#top")
        '/a.css'
        >>> uri_path("/a#b?c")
        '/a'
    """
    cut = len(target)
    for marker in ("?", "#"):
        index = target.find(marker)
        if index != -1 and index < cut:
            cut = index
    return target[:cut]


def best_encoding(accept_encoding: str | None, *, has_br: bool, has_gzip: bool) -> Encoding:
    """Pick the representation to send for an ``Accept-Encoding`` value.

    - missing or empty -> identity
    - ``*`` -> brotli if available, else identity
    - otherwise ``br`` beats ``gzip`` beats identity, by presence in the
      list; ``q`` parameters are ignored
    """
    value = (accept_encoding or "").strip()
    if not value:
        return "identity"
    if value == "*":
        return "br" if has_br else "identity"
    codings = {item.split(";", 1)[0].strip().lower() for item in value.split(",")}
    if "br" in codings and has_br:
        return "br"
    if "gzip" in codings and has_gzip:
        return "gzip"
    return "identity"
