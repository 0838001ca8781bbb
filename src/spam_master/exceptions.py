"""Exceptions raised by spam-master."""

from __future__ import annotations


class SpamMasterError(Exception):
    """Base class for all spam-master errors."""


class UntrainedModelError(SpamMasterError, RuntimeError):
    """Scoring was attempted without training documents of both classes."""


class ConfigError(SpamMasterError, ValueError):
    """A classifier setting is out of range or cannot be parsed."""
