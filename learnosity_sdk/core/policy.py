"""
Service Policy Table.

Per-service signing rules, applied once before the signature is
generated:

    Service     signs request   preparation
    ---------   -------------   -----------------------------------------
    assess      no              sign the nested questionsApiActivity
    author      yes             -
    data        yes             -
    items       yes             copy request user_id into security
    questions   no              -
    reports     yes             -
    events      no              replace request `users` with user hashes

Preparation hooks may mutate the security context and the request
packet in place; a hook that changes the request body refreshes its
text before returning.
"""

import hashlib
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from learnosity_sdk.core.exceptions import MalformedInputError, ServicePreconditionError
from learnosity_sdk.core.hashing import HashFunction, hash_value, hash_values
from learnosity_sdk.core.request import RequestPacket
from learnosity_sdk.core.security import SecurityContext
from learnosity_sdk.core.services import Service

logger = logging.getLogger(__name__)

DEFAULT_ASSESS_DOMAIN = "assess.learnosity.com"

QUESTIONS_ACTIVITY_KEY = "questionsApiActivity"

PrepareHook = Callable[
    [SecurityContext, Optional[RequestPacket], str, HashFunction], None
]


@dataclass(frozen=True)
class ServicePolicy:
    """Signing rules for one service."""
    sign_request: bool
    prepare:      Optional[PrepareHook] = None


# ─────────────────────────────────────────────────────────────
# Preparation hooks
# ─────────────────────────────────────────────────────────────

def _prepare_assess(
    security:      SecurityContext,
    request:       Optional[RequestPacket],
    secret:        str,
    hash_function: HashFunction,
) -> None:
    """
    The Assess API carries a Questions API activity that needs its own
    security fields and signature. The activity signature always covers
    exactly consumer_key, domain, timestamp, user_id and the secret.
    """
    if request is None or QUESTIONS_ACTIVITY_KEY not in request:
        return

    activity = request.get(QUESTIONS_ACTIVITY_KEY)
    if not isinstance(activity, dict):
        raise MalformedInputError(
            f"{QUESTIONS_ACTIVITY_KEY} must be an object, "
            f"got {type(activity).__name__}"
        )

    if "domain" in security:
        domain = security["domain"]
    elif "domain" in activity:
        domain = activity["domain"]
        if not isinstance(domain, str):
            raise MalformedInputError(
                f"{QUESTIONS_ACTIVITY_KEY}.domain must be a string",
                {"key": "domain"},
            )
    else:
        domain = DEFAULT_ASSESS_DOMAIN

    for key in ("consumer_key", "timestamp", "user_id"):
        if key not in security:
            raise ServicePreconditionError(
                f"The assess service needs `{key}` in the security packet "
                f"to sign {QUESTIONS_ACTIVITY_KEY}",
                {"key": key},
            )
        activity[key] = security[key]

    activity["signature"] = hash_values(
        [
            security["consumer_key"],
            domain,
            security["timestamp"],
            security["user_id"],
            secret,
        ],
        hash_function,
    )
    request.refresh()
    logger.debug("Signed %s for domain %s", QUESTIONS_ACTIVITY_KEY, domain)


def _prepare_items(
    security:      SecurityContext,
    request:       Optional[RequestPacket],
    secret:        str,
    hash_function: HashFunction,
) -> None:
    """Items shares its signature with the request, so both carry the same user_id."""
    if "user_id" in security or request is None or "user_id" not in request:
        return
    user_id = request.get("user_id")
    if not isinstance(user_id, str):
        raise MalformedInputError(
            f"Request user_id must be a string, got {type(user_id).__name__}",
            {"key": "user_id"},
        )
    security.set_user_id(user_id)
    logger.debug("Copied user_id from request packet into security packet")


def _prepare_events(
    security:      SecurityContext,
    request:       Optional[RequestPacket],
    secret:        str,
    hash_function: HashFunction,
) -> None:
    """Replace the `users` list with {user_id: hash(user_id + secret)}."""
    if request is None or "users" not in request:
        return
    users = request.get("users")
    if not isinstance(users, list):
        raise MalformedInputError(
            f"Request `users` must be a list, got {type(users).__name__}",
            {"key": "users"},
        )

    hashed: Dict[str, str] = {}
    for user in users:
        if not isinstance(user, str):
            raise MalformedInputError(
                f"Request `users` entries must be strings, got {type(user).__name__}",
                {"key": "users"},
            )
        hashed[user] = hash_value(user + secret, hash_function)

    request.data["users"] = hashed
    request.refresh()
    logger.debug("Hashed %d event users", len(hashed))


# ─────────────────────────────────────────────────────────────
# The table
# ─────────────────────────────────────────────────────────────

POLICIES: Dict[Service, ServicePolicy] = {
    Service.ASSESS:    ServicePolicy(sign_request=False, prepare=_prepare_assess),
    Service.AUTHOR:    ServicePolicy(sign_request=True),
    Service.DATA:      ServicePolicy(sign_request=True),
    Service.ITEMS:     ServicePolicy(sign_request=True, prepare=_prepare_items),
    Service.QUESTIONS: ServicePolicy(sign_request=False),
    Service.REPORTS:   ServicePolicy(sign_request=True),
    Service.EVENTS:    ServicePolicy(sign_request=False, prepare=_prepare_events),
}


def apply_policy(
    service:       Service,
    security:      SecurityContext,
    request:       Optional[RequestPacket],
    secret:        str,
    hash_function: HashFunction = hashlib.sha256,
) -> bool:
    """
    Run the service's preparation hook.

    Returns:
        True if the request text takes part in the signature.
    """
    policy = POLICIES[service]
    if policy.prepare is not None:
        policy.prepare(security, request, secret, hash_function)
    logger.debug(
        "Service %s: request %s signed",
        service.value,
        "is" if policy.sign_request else "is not",
    )
    return policy.sign_request
