"""Shared helpers for PhishShield."""
