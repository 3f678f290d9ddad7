"""
learnosity_sdk/__init__.py

Learnosity SDK: signed initialisation data for the Learnosity APIs.

    from learnosity_sdk import Init

    init = Init("items", {"consumer_key": key, "domain": "localhost"}, secret, request)
    payload = init.generate()

The remote service recomputes the signature from the same fields, so
the signing order and the emitted request text are part of the protocol.
"""

__version__ = "0.1.0"

from learnosity_sdk.core.exceptions import (
    ConfigurationError,
    EmptySecurityContextError,
    InvalidSecretError,
    LearnosityError,
    MalformedInputError,
    MissingArgumentError,
    MissingUserIdError,
    ServicePreconditionError,
    UnknownServiceError,
    UnrecognizedSecurityKeyError,
    ValidationError,
)
from learnosity_sdk.core.hashing import hash_value, hash_values
from learnosity_sdk.core.request import RequestPacket
from learnosity_sdk.core.security import VALID_SECURITY_KEYS, SecurityContext
from learnosity_sdk.core.services import Service
from learnosity_sdk.core.signature import generate_signature
from learnosity_sdk.core.time import security_timestamp
from learnosity_sdk.config import Credentials, load_credentials
from learnosity_sdk.request.init import Init

__all__ = [
    # Core types
    "Init",
    "Service",
    "SecurityContext",
    "RequestPacket",
    "Credentials",
    # Errors
    "LearnosityError",
    "ValidationError",
    "MissingArgumentError",
    "InvalidSecretError",
    "EmptySecurityContextError",
    "UnrecognizedSecurityKeyError",
    "MissingUserIdError",
    "MalformedInputError",
    "UnknownServiceError",
    "ServicePreconditionError",
    "ConfigurationError",
    # Helpers
    "generate_signature",
    "hash_value",
    "hash_values",
    "security_timestamp",
    "load_credentials",
    # Constants
    "VALID_SECURITY_KEYS",
]
