"""Classifier configuration.

Settings can be given directly or read from the environment::

    SPAM_MASTER_SMOOTHING=1.0
    SPAM_MASTER_THRESHOLD=0.6
    SPAM_MASTER_ENCODING=utf-8

The command-line interface loads a ``.env`` file before calling
``ClassifierConfig.from_env()``.
"""

from __future__ import annotations

import codecs
import math
import os
from dataclasses import asdict, dataclass
from typing import Mapping, Optional

from .exceptions import ConfigError

DEFAULT_SMOOTHING = 1.0
DEFAULT_SPAM_THRESHOLD = 0.6
DEFAULT_ENCODING = "utf-8"

ENV_SMOOTHING = "SPAM_MASTER_SMOOTHING"
ENV_THRESHOLD = "SPAM_MASTER_THRESHOLD"
ENV_ENCODING = "SPAM_MASTER_ENCODING"


@dataclass(frozen=True)
class ClassifierConfig:
    """Tunable parameters of the classifier.

    Attributes:
        smoothing_constant: Added to each per-class file count before
            dividing by the class document total.
        spam_threshold: A document is predicted spam only when its spam
            probability is strictly greater than this value.
        encoding: Text encoding used to decode documents.
    """

    smoothing_constant: float = DEFAULT_SMOOTHING
    spam_threshold: float = DEFAULT_SPAM_THRESHOLD
    encoding: str = DEFAULT_ENCODING

    def __post_init__(self) -> None:
        if not math.isfinite(self.smoothing_constant) or self.smoothing_constant <= 0:
            raise ConfigError(
                f"smoothing_constant must be a positive finite number, got {self.smoothing_constant}"
            )
        if not 0.0 <= self.spam_threshold <= 1.0:
            raise ConfigError(
                f"spam_threshold must be between 0 and 1, got {self.spam_threshold}"
            )
        try:
            codecs.lookup(self.encoding)
        except LookupError as exc:
            raise ConfigError(f"Unknown encoding: {self.encoding!r}") from exc

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: object,
    ) -> "ClassifierConfig":
        """Build a config from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.
            **overrides: Field values that take precedence over the
                environment; ``None`` values are ignored.

        Returns:
            A validated ClassifierConfig.

        Raises:
            ConfigError: If a value cannot be parsed or is out of range.
        """
        env = os.environ if environ is None else environ
        values: dict = {}

        if ENV_SMOOTHING in env:
            values["smoothing_constant"] = _parse_float(ENV_SMOOTHING, env[ENV_SMOOTHING])
        if ENV_THRESHOLD in env:
            values["spam_threshold"] = _parse_float(ENV_THRESHOLD, env[ENV_THRESHOLD])
        if env.get(ENV_ENCODING):
            values["encoding"] = env[ENV_ENCODING]

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def to_dict(self) -> dict:
        return asdict(self)


def _parse_float(name: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc
