"""Metric name encoding: fold request tags into a dotted metric name.

The stats backends we feed (StatsD, Graphite-style aggregators) key on a
single flat name, so tags can't travel as labels.  Instead each tag value
becomes one more dot-separated segment:

  encode_name("handler.received", {"os": "Linux", "browser": "Chrome"})
  → "handler.received.Linux.Chrome"

SEGMENT ORDER
--------------
Dashboards and alert rules match these names byte-for-byte, so the
order must never depend on dict iteration:

  1. the base name
  2. host          (omitted when unknown)
  3. any extra tags, sorted by key (omitted when empty)
  4. os            (falls back to "no-os")
  5. browser       (falls back to "no-browser")

os and browser always close the name, so a name without either ends in
".no-os.no-browser" whatever else is tagged.

SANITIZATION
-------------
Tag values come from request headers, which means anything goes.
Whitespace and the characters  { } / \\ :  mean something to downstream
backends (paths, namespaces, the StatsD "name:value" separator), so each
one is replaced by a single "-".  Nothing is collapsed: "a  b" → "a--b".
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

NO_OS = "no-os"
NO_BROWSER = "no-browser"

_UNSAFE_CHARS = frozenset("{}/\\:")


def sanitize(value: str) -> str:
    """Replace every whitespace or delimiter character with "-"."""
    return "".join(
        "-" if ch.isspace() or ch in _UNSAFE_CHARS else ch for ch in value
    )


@dataclass(frozen=True)
class StatsTags:
    """Dimensions attached to one metric emission.

    os/browser get a fallback segment when missing; host and extras don't.
    """

    os: str | None = None
    browser: str | None = None
    host: str | None = None
    extra: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, tags: Mapping[str, str] | None) -> StatsTags:
        if not tags:
            return cls()
        known = {"os", "browser", "host"}
        return cls(
            os=tags.get("os"),
            browser=tags.get("browser"),
            host=tags.get("host"),
            extra={k: v for k, v in tags.items() if k not in known},
        )

    def as_dict(self) -> dict[str, str]:
        out: dict[str, str] = {}
        if self.host:
            out["host"] = self.host
        if self.os:
            out["os"] = self.os
        if self.browser:
            out["browser"] = self.browser
        out.update({k: v for k, v in self.extra.items() if v})
        return out


def encode_name(
    name: str, tags: StatsTags | Mapping[str, str] | None = None
) -> str:
    """Return ``name`` with the tag values appended as sanitized segments."""
    if not isinstance(tags, StatsTags):
        tags = StatsTags.from_mapping(tags)

    segments = [name]
    if tags.host:
        segments.append(sanitize(tags.host))
    for key in sorted(tags.extra):
        value = tags.extra[key]
        if value:
            segments.append(sanitize(value))
    segments.append(sanitize(tags.os) if tags.os else NO_OS)
    segments.append(sanitize(tags.browser) if tags.browser else NO_BROWSER)
    return ".".join(segments)
