"""
Signature Generator.

Signing string (joined with "_", see hashing.py):

    [consumer_key] [domain] [timestamp] [user_id]   present keys, fixed order
    secret
    [request text]                                  only if signed and non-empty
    [action]                                        only if non-empty

The remote service rebuilds the same sequence to verify, so order is
part of the protocol. The timestamp must already be fixed in the
security context; nothing here reads the clock.
"""

import hashlib
from typing import List, Optional

from learnosity_sdk.core.hashing import HashFunction, hash_values
from learnosity_sdk.core.security import SecurityContext


def signing_values(
    security:     SecurityContext,
    secret:       str,
    request_text: Optional[str] = "",
    action:       Optional[str] = "",
    sign_request: bool = True,
) -> List[str]:
    """The ordered pre-hash values. Exposed for testing and debugging."""
    values = security.signing_values()
    values.append(secret)
    if sign_request and request_text:
        values.append(request_text)
    if action:
        values.append(action)
    return values


def generate_signature(
    security:      SecurityContext,
    secret:        str,
    request_text:  Optional[str] = "",
    action:        Optional[str] = "",
    sign_request:  bool = True,
    hash_function: HashFunction = hashlib.sha256,
) -> str:
    """
    Compute the request signature.

    Returns:
        Lowercase hex SHA-256 digest (64 characters).
    """
    return hash_values(
        signing_values(security, secret, request_text, action, sign_request),
        hash_function,
    )
