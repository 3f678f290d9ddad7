"""
tests/test_init.py

End-to-end: Init validates, applies service policy, signs and assembles.
"""

import hashlib
import json
import re

import pytest

from learnosity_sdk import (
    EmptySecurityContextError,
    Init,
    InvalidSecretError,
    MalformedInputError,
    MissingArgumentError,
    MissingUserIdError,
    Service,
    UnknownServiceError,
    UnrecognizedSecurityKeyError,
)


def sha256_hex(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


ITEMS_REQUEST = '{"limit":50,"user_id":"u1","rendering_type":"assess"}'


# ─────────────────────────────────────────────────────────────
# Argument validation
# ─────────────────────────────────────────────────────────────

class TestArguments:

    def test_service_required(self, security, secret):
        with pytest.raises(MissingArgumentError):
            Init(None, security, secret)

    def test_unknown_service(self, security, secret):
        with pytest.raises(UnknownServiceError):
            Init("nope", security, secret)

    @pytest.mark.parametrize("name", ["items", "Items", "ITEMS", Service.ITEMS])
    def test_service_names_are_coerced(self, name, security, secret):
        assert Init(name, security, secret).service is Service.ITEMS

    def test_secret_required(self, security):
        with pytest.raises(MissingArgumentError):
            Init("items", security, None)

    @pytest.mark.parametrize("bad", ["", "   ", 123])
    def test_secret_must_be_non_blank_string(self, bad, security):
        with pytest.raises(InvalidSecretError):
            Init("items", security, bad)

    def test_security_required(self, secret):
        with pytest.raises(MissingArgumentError):
            Init("items", None, secret)

    def test_empty_security(self, secret):
        with pytest.raises(EmptySecurityContextError):
            Init("items", "{}", secret)

    def test_unrecognized_security_key(self, secret):
        with pytest.raises(UnrecognizedSecurityKeyError, match="secret"):
            Init("items", {"consumer_key": "k", "secret": "oops"}, secret)

    def test_questions_without_user_id(self, secret):
        with pytest.raises(MissingUserIdError):
            Init("questions", {"consumer_key": "k"}, secret)

    def test_malformed_request(self, security, secret):
        with pytest.raises(MalformedInputError):
            Init("items", security, secret, "{oops")


# ─────────────────────────────────────────────────────────────
# Signing
# ─────────────────────────────────────────────────────────────

class TestSigning:

    def test_items_signs_request_text(self, security, secret):
        init = Init("items", security, secret, ITEMS_REQUEST)
        expected = sha256_hex(
            f"yis0TYCu7U9V4o7M_localhost_20140626-0528_u1_{secret}_{ITEMS_REQUEST}"
        )
        assert init.signature == expected
        assert init.security_packet["signature"] == expected

    def test_questions_does_not_sign_request(self, security, secret):
        init = Init("questions", security, secret, '{"type":"local_practice"}')
        assert init.sign_request_data is False
        assert init.signature == sha256_hex(
            f"yis0TYCu7U9V4o7M_localhost_20140626-0528_u1_{secret}"
        )

    def test_signature_is_deterministic(self, security, secret):
        init = Init("reports", security, secret, '{"reports":[]}')
        assert init.generate_signature() == init.generate_signature() == init.signature

    def test_injected_timestamp_is_stable(self, secret):
        init = Init("data", {"consumer_key": "k"}, secret)
        timestamp = init.security_packet["timestamp"]
        assert re.fullmatch(r"\d{8}-\d{4}", timestamp)
        assert init.generate_signature() == sha256_hex(f"k_{timestamp}_{secret}")

    def test_clock_is_injectable(self, fixed_clock, secret):
        init = Init("data", {"consumer_key": "k"}, secret, clock=fixed_clock)
        assert init.security_packet["timestamp"] == "20200102-0304"

    def test_hash_function_is_injectable(self, security, secret):
        init = Init("author", security, secret, hash_function=hashlib.sha512)
        assert init.signature == hashlib.sha512(
            f"yis0TYCu7U9V4o7M_localhost_20140626-0528_u1_{secret}".encode()
        ).hexdigest()

    def test_caller_packets_are_not_mutated(self, secret):
        security = {"consumer_key": "k"}
        request = {"users": ["alice"]}
        Init("events", security, secret, request)
        assert security == {"consumer_key": "k"}
        assert request == {"users": ["alice"]}


# ─────────────────────────────────────────────────────────────
# Action
# ─────────────────────────────────────────────────────────────

class TestAction:

    def test_setting_action_resigns(self, security, secret):
        init = Init("data", security, secret, '{"limit":10}')
        before = init.signature

        init.set_action("get")

        after = init.generate_signature()
        assert after != before
        assert init.signature == after
        assert init.generate_signature() == after
        assert after == sha256_hex(
            f"yis0TYCu7U9V4o7M_localhost_20140626-0528_u1_{secret}_{{\"limit\":10}}_get"
        )

    def test_action_property_and_constructor_agree(self, security, secret):
        via_ctor = Init("data", security, secret, action="post")
        via_prop = Init("data", security, secret)
        via_prop.action = "post"
        assert via_ctor.signature == via_prop.signature

    def test_clearing_action_restores_signature(self, security, secret):
        init = Init("data", security, secret)
        original = init.signature
        init.action = "get"
        init.action = None
        assert init.signature == original
        assert init.action == ""


# ─────────────────────────────────────────────────────────────
# Output
# ─────────────────────────────────────────────────────────────

class TestGenerate:

    def test_data_outputs_security_only(self):
        init = Init("data", {"consumer_key": "k1", "timestamp": "20200101-0000"}, "s", '{"limit":1}')
        init.set_action("get")
        expected_sig = sha256_hex('k1_20200101-0000_s_{"limit":1}_get')
        assert init.generate() == (
            '{"consumer_key":"k1","timestamp":"20200101-0000",'
            f'"signature":"{expected_sig}"}}'
        )

    def test_questions_hoists_security_and_splices_request(self):
        security = {"consumer_key": "k1", "domain": "d", "timestamp": "t", "user_id": "u1"}
        init = Init("questions", security, "s", '{"foo":"bar"}')
        output = json.loads(init.generate())
        assert output == {
            "consumer_key": "k1",
            "timestamp":    "t",
            "user_id":      "u1",
            "signature":    sha256_hex("k1_d_t_u1_s"),
            "foo":          "bar",
        }

    def test_items_keeps_request_text_verbatim(self, security, secret):
        request = '{ "limit": 50,\n  "rendering_type": "assess" }'
        init = Init("items", security, secret, request)
        output = init.generate()
        assert output.endswith(f'"request":{request}}}')
        assert json.loads(output)["security"]["signature"] == init.signature

    def test_items_user_id_from_request(self, secret):
        init = Init("items", {"consumer_key": "k", "timestamp": "t"}, secret, ITEMS_REQUEST)
        assert init.security_packet["user_id"] == "u1"
        assert init.signature == sha256_hex(f"k_t_u1_{secret}_{ITEMS_REQUEST}")

    def test_events_hashes_users_into_config(self):
        init = Init("events", {"consumer_key": "k", "timestamp": "t"}, "s3cret",
                    {"users": ["alice", "bob"]})
        output = json.loads(init.generate())
        assert output["config"]["users"] == {
            "alice": sha256_hex("alices3cret"),
            "bob":   sha256_hex("bobs3cret"),
        }
        assert output["security"]["signature"] == sha256_hex("k_t_s3cret")

    def test_assess_outputs_signed_activity(self):
        security = {"consumer_key": "k", "timestamp": "t", "user_id": "u"}
        request = {"name": "demo", "questionsApiActivity": {"id": "a1"}}
        init = Init("assess", security, "s", request)
        output = json.loads(init.generate())
        assert output["name"] == "demo"
        assert output["questionsApiActivity"] == {
            "id":           "a1",
            "consumer_key": "k",
            "timestamp":    "t",
            "user_id":      "u",
            "signature":    sha256_hex("k_assess.learnosity.com_t_u_s"),
        }
        assert init.signature == sha256_hex("k_t_u_s")

    def test_secret_never_in_output(self, security, secret):
        for service in Service:
            output = Init(service, security, secret, '{"a":1}').generate()
            assert secret not in output


class TestMalformedNumbers:

    def test_nan_in_request_mapping_is_rejected(self, security, secret):
        with pytest.raises(MalformedInputError):
            Init("items", security, secret, {"score": float("nan")})

    def test_nan_in_request_text_is_rejected(self, security, secret):
        with pytest.raises(MalformedInputError):
            Init("author", security, secret, '{"a": NaN}')
