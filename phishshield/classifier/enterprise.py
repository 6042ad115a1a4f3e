"""Recognition of legitimate cloud, CDN and identity-platform hosts."""

from __future__ import annotations

import logging
import re
from typing import Iterable

logger = logging.getLogger(__name__)


class EnterpriseHostRecognizer:
    """Matches subdomains issued by large hosting platforms.

    Patterns describe each provider's generated naming scheme (hex or
    base36 identifiers of bounded length), so a bare provider domain or an
    arbitrary attacker-chosen label does not qualify.
    """

    def __init__(self, patterns: Iterable[re.Pattern]):
        self.patterns = tuple(patterns)

    def is_enterprise_host(self, domain: str) -> bool:
        for pattern in self.patterns:
            if pattern.search(domain):
                logger.debug("Enterprise host %s matched %s", domain, pattern.pattern)
                return True
        return False
