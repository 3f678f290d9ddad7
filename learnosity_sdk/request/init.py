"""
learnosity_sdk/request/init.py

Init: generate the security and request data, in the correct format,
to initialise any of the Learnosity API services.

Pipeline, fixed order:
    1. validate   service, secret, security packet, request packet
    2. policy     service-specific preparation (policy.py)
    3. sign       signature stored in the security packet
    4. assemble   generate() renders the envelope (assembly.py)

Setting `action` re-runs step 3 from the current state.

Each Init owns its security and request packets; caller objects are
copied on the way in and never mutated.
"""

import hashlib
import logging
from datetime import datetime
from typing import Any, Callable, Optional, Union

from learnosity_sdk.core.assembly import assemble
from learnosity_sdk.core.exceptions import (
    InvalidSecretError,
    MissingArgumentError,
    ValidationError,
)
from learnosity_sdk.core.hashing import HashFunction
from learnosity_sdk.core.policy import apply_policy
from learnosity_sdk.core.request import RequestPacket
from learnosity_sdk.core.security import VALID_SECURITY_KEYS, SecurityContext
from learnosity_sdk.core.services import Service
from learnosity_sdk.core.signature import generate_signature
from learnosity_sdk.core.time import utc_now

logger = logging.getLogger(__name__)


class Init:
    """
    Signed initialisation data for one Learnosity API request.

        init = Init("items", {"consumer_key": "yis0TYCu7U9V4o7M",
                              "domain": "localhost"}, secret, request)
        payload = init.generate()

    Args:
        service:         Service member or name ("items", "questions", ...).
        security_packet: JSON text, mapping or dataclass with any of
                         consumer_key, domain, timestamp, user_id.
        secret:          The consumer secret. Never included in output.
        request_packet:  Optional request body, same accepted forms.
        action:          Optional action (Data API), e.g. "get".
        clock:           Returns "now" when a timestamp must be filled in.
        hash_function:   Digest constructor, SHA-256 by default.
    """

    VALID_SECURITY_KEYS = VALID_SECURITY_KEYS

    def __init__(
        self,
        service:         Union[Service, str],
        security_packet: Any,
        secret:          str,
        request_packet:  Any = None,
        action:          Optional[str] = "",
        clock:           Optional[Callable[[], datetime]] = None,
        hash_function:   HashFunction = hashlib.sha256,
    ) -> None:
        self._service = Service.coerce(service)

        if secret is None:
            raise MissingArgumentError("The `secret` argument is required")
        if not isinstance(secret, str) or not secret.strip():
            raise InvalidSecretError("The `secret` argument must be a valid string")
        self._secret = secret
        self._hash_function = hash_function

        self._security = SecurityContext.validate(
            security_packet, self._service, clock or utc_now
        )
        self._request = RequestPacket.normalize(request_packet)
        self._action = self._check_action(action)

        self._sign_request = apply_policy(
            self._service,
            self._security,
            self._request,
            self._secret,
            self._hash_function,
        )
        self._security.set_signature(self.generate_signature())
        logger.debug("Initialised %s request", self._service.value)

    # ── Public API ────────────────────────────────────────────

    @property
    def service(self) -> Service:
        return self._service

    @property
    def security_packet(self) -> SecurityContext:
        return self._security

    @property
    def request_packet(self) -> Optional[RequestPacket]:
        return self._request

    @property
    def request_string(self) -> str:
        """Exact request text that is signed and sent ("" when absent)."""
        return self._request.text if self._request is not None else ""

    @property
    def sign_request_data(self) -> bool:
        """Whether the request text takes part in the signature."""
        return self._sign_request

    @property
    def signature(self) -> str:
        return self._security.signature

    @property
    def action(self) -> str:
        return self._action

    @action.setter
    def action(self, action: Optional[str]) -> None:
        self._action = self._check_action(action)
        self._security.set_signature(self.generate_signature())

    def set_action(self, action: Optional[str]) -> None:
        """Set the action (e.g. "get" or "post") and re-sign."""
        self.action = action

    def generate_signature(self) -> str:
        """
        Signature over the security credentials, the secret, the request
        text (if this service signs it) and the action (if set).
        """
        return generate_signature(
            self._security,
            self._secret,
            request_text=self.request_string,
            action=self._action,
            sign_request=self._sign_request,
            hash_function=self._hash_function,
        )

    def generate(self) -> str:
        """
        Generate the data necessary to make a request to one of the
        Learnosity services.

        Returns:
            A JSON string.
        """
        return assemble(
            self._service,
            self._security,
            self.request_string,
            self._action,
        )

    # ── Internals ─────────────────────────────────────────────

    @staticmethod
    def _check_action(action: Optional[str]) -> str:
        if action is None:
            return ""
        if not isinstance(action, str):
            raise ValidationError(
                f"action must be a string, got {type(action).__name__}"
            )
        return action

    def __repr__(self) -> str:
        return f"Init(service={self._service.value!r}, security={self._security!r})"
