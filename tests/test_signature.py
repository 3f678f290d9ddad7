"""
tests/test_signature.py

Signature generation: fixed order, optional request text and action.
"""

import hashlib

import pytest

from learnosity_sdk.core.security import SecurityContext
from learnosity_sdk.core.services import Service
from learnosity_sdk.core.signature import generate_signature, signing_values


def sha256_hex(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


@pytest.fixture
def ctx(security):
    return SecurityContext.validate(security, Service.ITEMS)


def test_order_is_fixed_regardless_of_input_order(ctx, secret):
    assert signing_values(ctx, secret) == [
        "yis0TYCu7U9V4o7M", "localhost", "20140626-0528", "u1", secret,
    ]


def test_request_text_and_action_follow_secret(ctx, secret):
    values = signing_values(ctx, secret, request_text='{"a":1}', action="get")
    assert values[-3:] == [secret, '{"a":1}', "get"]


def test_request_text_skipped_when_not_signed(ctx, secret):
    values = signing_values(ctx, secret, request_text='{"a":1}', sign_request=False)
    assert values[-1] == secret


def test_empty_request_text_and_action_are_skipped(ctx, secret):
    assert signing_values(ctx, secret, request_text="", action="")[-1] == secret


def test_signature_matches_reference(ctx, secret):
    expected = sha256_hex(
        f"yis0TYCu7U9V4o7M_localhost_20140626-0528_u1_{secret}_{{\"a\":1}}_get"
    )
    assert generate_signature(ctx, secret, '{"a":1}', "get") == expected


def test_signature_is_deterministic(ctx, secret):
    assert generate_signature(ctx, secret, "{}") == generate_signature(ctx, secret, "{}")


def test_existing_signature_field_is_not_signed(ctx, secret):
    before = generate_signature(ctx, secret)
    ctx.set_signature(before)
    assert generate_signature(ctx, secret) == before
