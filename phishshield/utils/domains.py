"""Domain normalization utilities."""

from __future__ import annotations

import re
from urllib.parse import urlparse

import idna

SELF_TEST_HOST = "scannec.com"

_HOSTNAME_RE = re.compile(r"^[a-z0-9_-]+(?:\.[a-z0-9_-]+)*$")

_TEST_DOMAIN_PATTERNS = (
    re.compile(r"(?:simulated|test|mock)\s+domain:\s*([a-z0-9.-]+\.[a-z]{2,})", re.IGNORECASE),
    re.compile(r"domain:\s*([a-z0-9.-]+\.[a-z]{2,})", re.IGNORECASE),
    re.compile(r"testing:\s*([a-z0-9.-]+\.[a-z]{2,})", re.IGNORECASE),
    re.compile(r"^([a-z0-9.-]+\.[a-z]{2,})$", re.IGNORECASE),
)


def canonicalize_domain(value: str) -> str:
    """
    Normalize a domain/URL to a canonical host key.

    - Lowercase
    - Strip leading "www."
    - Drop scheme, port, path, query and fragment
    - IDNA-encode internationalized hosts (punycode)

    Returns "" when no host can be parsed.
    """
    raw = (value or "").strip()
    if not raw:
        return ""

    candidate = raw if "://" in raw else f"https://{raw}"
    try:
        parsed = urlparse(candidate)
        host = (parsed.hostname or "").strip().lower().strip(".")
    except ValueError:
        return ""
    if not host:
        return ""

    if not host.isascii():
        try:
            host = idna.encode(host, uts46=True).decode("ascii")
        except (idna.IDNAError, UnicodeError):
            return ""

    if host.startswith("www.") and len(host) > 4:
        host = host[4:]

    return host


def is_valid_hostname(domain: str) -> bool:
    """Whether ``domain`` is a normalized host: dot-separated [a-z0-9_-] labels."""
    if not domain or len(domain) > 253:
        return False
    return _HOSTNAME_RE.match(domain) is not None


def find_test_domain(text: str, test_host: str = SELF_TEST_HOST) -> str | None:
    """Extract the simulated domain shown on the self-test page.

    Looks for "test domain: X", "domain: X", "testing: X" or a line holding
    only a domain; the test host itself is ignored.
    """
    for line in (text or "").splitlines():
        line = line.strip()
        if not line:
            continue
        for pattern in _TEST_DOMAIN_PATTERNS:
            match = pattern.search(line)
            if not match:
                continue
            domain = match.group(1).lower().strip()
            if domain != test_host and "." in domain and len(domain) > 4:
                return domain
    return None
