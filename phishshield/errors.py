"""Exceptions raised by PhishShield."""


class PhishShieldError(Exception):
    """Base exception for PhishShield errors."""

    pass


class RulesError(PhishShieldError):
    """Rule data could not be read or parsed."""

    def __init__(self, source: str, message: str):
        self.source = source
        self.message = message
        super().__init__(f"Invalid rules in {source}: {message}")
