"""User-agent parsing: raw header string → browser and OS names.

Delegates to the `user-agents` library (a wrapper around the ua-parser
regex database).  The library reports unrecognized parts as the family
"Other"; we turn that into None so the name encoder's fallback segments
("no-browser", "no-os") take over.
"""

from __future__ import annotations

from dataclasses import dataclass

from user_agents import parse

_UNKNOWN_FAMILY = "Other"


@dataclass(frozen=True)
class ClientAgent:
    browser: str | None = None
    os: str | None = None


def _family(value: str | None) -> str | None:
    if not value or value == _UNKNOWN_FAMILY:
        return None
    return value


def parse_user_agent(ua_string: str | None) -> ClientAgent:
    if not ua_string:
        return ClientAgent()
    ua = parse(ua_string)
    return ClientAgent(browser=_family(ua.browser.family), os=_family(ua.os.family))
