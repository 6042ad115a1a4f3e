"""User whitelist file helpers."""

from __future__ import annotations

from pathlib import Path

from .domains import canonicalize_domain


def read_allowlist(path: Path) -> set[str]:
    """Read whitelist entries from disk (normalized hosts)."""
    if not path.exists():
        return set()

    entries: set[str] = set()
    for line in path.read_text(encoding="utf-8").splitlines():
        value = line.strip()
        if not value or value.startswith("#"):
            continue
        normalized = canonicalize_domain(value)
        if normalized:
            entries.add(normalized)
    return entries


def write_allowlist(path: Path, entries: set[str]) -> None:
    """Write whitelist entries to disk (sorted, atomic)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    header = [
        "# Whitelisted domains (one per line, exact host match)",
        "# These are always classified as safe",
    ]
    content = "\n".join(header + sorted(entries) + [""])
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_text(content, encoding="utf-8")
    tmp_path.replace(path)


def add_to_allowlist(path: Path, domain: str) -> bool:
    """Add a domain to the whitelist file. Returns False if already present."""
    normalized = canonicalize_domain(domain)
    if not normalized:
        raise ValueError(f"Not a valid domain: {domain!r}")
    entries = read_allowlist(path)
    if normalized in entries:
        return False
    entries.add(normalized)
    write_allowlist(path, entries)
    return True
