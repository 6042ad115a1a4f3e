"""Curated and user allow-list lookup."""

from __future__ import annotations

from typing import AbstractSet, Iterable


class AllowListStore:
    """Exact-match lookup against the built-in safe domains and a user whitelist.

    No suffix matching: ``mail.example.com`` is not covered by ``example.com``.
    """

    def __init__(self, safe_domains: Iterable[str]):
        self.safe_domains = frozenset(d.lower() for d in safe_domains)

    def __len__(self) -> int:
        return len(self.safe_domains)

    def contains(self, domain: str, user_whitelist: AbstractSet[str] | Iterable[str] = ()) -> bool:
        """Check the built-in list first, then the caller's whitelist snapshot."""
        if domain in self.safe_domains:
            return True
        return domain in user_whitelist
