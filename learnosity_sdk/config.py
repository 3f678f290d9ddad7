"""
Consumer credentials.

The SDK never stores the secret; callers bring it. This module only
reads it from where callers usually keep it:

    environment     LEARNOSITY_CONSUMER_KEY
                    LEARNOSITY_CONSUMER_SECRET
                    LEARNOSITY_DOMAIN            (optional)

    YAML file       consumer_key: ...
                    consumer_secret: ...
                    domain: ...                  (optional)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from learnosity_sdk.core.exceptions import ConfigurationError

ENV_CONSUMER_KEY    = "LEARNOSITY_CONSUMER_KEY"
ENV_CONSUMER_SECRET = "LEARNOSITY_CONSUMER_SECRET"
ENV_DOMAIN          = "LEARNOSITY_DOMAIN"


@dataclass
class Credentials:
    consumer_key:    Optional[str] = None
    consumer_secret: Optional[str] = None
    domain:          Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Credentials":
        """Read credentials from environment variables. Missing ones stay None."""
        env = os.environ if environ is None else environ
        return cls(
            consumer_key=    env.get(ENV_CONSUMER_KEY) or None,
            consumer_secret= env.get(ENV_CONSUMER_SECRET) or None,
            domain=          env.get(ENV_DOMAIN) or None,
        )

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "Credentials":
        """
        Load credentials from a YAML file.
        Raises ConfigurationError if the file is missing, unparsable,
        not a mapping, or holds non-string values.
        """
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(f"Credentials file not found: {path}")
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigurationError(
                f"Failed to parse credentials file {path}: {exc}"
            ) from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Credentials file {path} must contain a mapping"
            )
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Credentials":
        values = {}
        for key in ("consumer_key", "consumer_secret", "domain"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ConfigurationError(
                    f"Credential '{key}' must be a string, got {type(value).__name__}"
                )
            values[key] = value
        return cls(**values)

    def merged(self, other: "Credentials") -> "Credentials":
        """Fields from self, falling back to other where unset."""
        return Credentials(
            consumer_key=    self.consumer_key or other.consumer_key,
            consumer_secret= self.consumer_secret or other.consumer_secret,
            domain=          self.domain or other.domain,
        )

    def __repr__(self) -> str:
        secret = "***" if self.consumer_secret else None
        return (
            f"Credentials(consumer_key={self.consumer_key!r}, "
            f"consumer_secret={secret!r}, domain={self.domain!r})"
        )


def load_credentials(
    path:    Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Credentials:
    """
    Credentials from the YAML file at path (if given), with environment
    variables filling any gaps.
    """
    env_creds = Credentials.from_env(environ)
    if path is None:
        return env_creds
    return Credentials.from_yaml(path).merged(env_creds)
