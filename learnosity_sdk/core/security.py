"""
learnosity_sdk/core/security.py

Security Context: the caller identity and timing fields that get signed.

Recognized keys, in signing order:
    consumer_key, domain, timestamp, user_id

`signature` is added by the SDK after signing and is never accepted
from the caller. The context is owned by exactly one request build and
must not be shared between builds.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Iterator, List, Optional

from learnosity_sdk.core.exceptions import (
    EmptySecurityContextError,
    MalformedInputError,
    MissingArgumentError,
    MissingUserIdError,
    UnrecognizedSecurityKeyError,
)
from learnosity_sdk.core.services import Service
from learnosity_sdk.core.time import security_timestamp, utc_now
from learnosity_sdk.core.wire import as_object, encode

logger = logging.getLogger(__name__)

# Order matters: it is the signing order.
VALID_SECURITY_KEYS = ("consumer_key", "domain", "timestamp", "user_id")

SIGNATURE_KEY = "signature"


class SecurityContext:
    """
    Ordered, validated security packet.

    Build with SecurityContext.validate(); do not construct directly from
    untrusted input. Key order is the caller's order, with an injected
    timestamp and the signature appended at the end.
    """

    def __init__(self, fields: Dict[str, str]) -> None:
        self._fields: Dict[str, str] = fields

    # ── Construction ──────────────────────────────────────────

    @classmethod
    def validate(
        cls,
        raw:     Any,
        service: Optional[Service] = None,
        clock:   Callable[[], datetime] = utc_now,
    ) -> "SecurityContext":
        """
        Normalize and validate a caller-supplied security packet.

        Checks, in order:
            present at all                -> MissingArgumentError
            parsable into a mapping       -> MalformedInputError
            user_id present (Questions)   -> MissingUserIdError
            non-empty                     -> EmptySecurityContextError
            only recognized keys          -> UnrecognizedSecurityKeyError
            every value is a string       -> MalformedInputError

        Injects `timestamp` from clock() when absent.
        """
        if raw is None:
            raise MissingArgumentError("The `securityPacket` argument is required")

        if isinstance(raw, SecurityContext):
            fields = raw.to_dict()
            fields.pop(SIGNATURE_KEY, None)
        else:
            fields, _ = as_object(raw, "security packet")

        if service is Service.QUESTIONS and "user_id" not in fields:
            raise MissingUserIdError(
                "If using the questions api, a user id needs to be specified"
            )

        if not fields:
            raise EmptySecurityContextError(
                "The security packet argument cannot be empty",
                {"expected": ",".join(VALID_SECURITY_KEYS)},
            )

        for key in fields:
            if key not in VALID_SECURITY_KEYS:
                raise UnrecognizedSecurityKeyError(key)

        for key, value in fields.items():
            if not isinstance(value, str):
                raise MalformedInputError(
                    f"Security packet value for '{key}' must be a string, "
                    f"got {type(value).__name__}",
                    {"key": key},
                )

        if "timestamp" not in fields:
            fields["timestamp"] = security_timestamp(clock())
            logger.debug("Injected security timestamp %s", fields["timestamp"])

        logger.debug("Validated security packet keys: %s", ",".join(fields))
        return cls(fields)

    # ── Access ────────────────────────────────────────────────

    def __contains__(self, key: object) -> bool:
        return key in self._fields

    def __getitem__(self, key: str) -> str:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._fields.get(key, default)

    def signing_values(self) -> List[str]:
        """Values of the recognized keys that are present, in signing order."""
        return [self._fields[k] for k in VALID_SECURITY_KEYS if k in self._fields]

    @property
    def signature(self) -> Optional[str]:
        return self._fields.get(SIGNATURE_KEY)

    # ── Mutation ──────────────────────────────────────────────

    def set_user_id(self, user_id: str) -> None:
        """Add or replace user_id (used when a service shares the request's user)."""
        if not isinstance(user_id, str):
            raise MalformedInputError(
                f"user_id must be a string, got {type(user_id).__name__}",
                {"key": "user_id"},
            )
        self._fields["user_id"] = user_id

    def set_signature(self, signature: str) -> None:
        """Store the signature. Re-signing replaces the value in place."""
        self._fields[SIGNATURE_KEY] = signature

    # ── Serialization ─────────────────────────────────────────

    def to_dict(self) -> Dict[str, str]:
        """Shallow copy of the fields, in order."""
        return dict(self._fields)

    def to_json(self) -> str:
        """Compact JSON text, in field order."""
        return encode(self._fields)

    def __repr__(self) -> str:
        keys = ",".join(self._fields)
        return f"SecurityContext(keys={keys})"
