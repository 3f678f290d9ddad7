"""
learnosity_sdk/core/wire.py

Ordered JSON encoding for outgoing envelopes.

Two rules:
    1. Key order is insertion order. Nothing is ever sorted.
    2. RawJSON fragments are emitted byte-for-byte. Caller-supplied request
       text is wrapped in RawJSON so it reaches the wire exactly as it was
       signed.

Output is compact: no whitespace between tokens, non-ASCII left unescaped.
"""

import copy
import json
from dataclasses import asdict, dataclass, is_dataclass
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from learnosity_sdk.core.exceptions import MalformedInputError


@dataclass(frozen=True)
class RawJSON:
    """Pre-serialized JSON text, emitted verbatim by encode()."""
    text: str

    def __str__(self) -> str:
        return self.text


def _scalar(value: Any) -> str:
    return json.dumps(
        value, ensure_ascii=False, allow_nan=False, separators=(",", ":")
    )


def encode(value: Any) -> str:
    """
    Serialize value to compact JSON, preserving mapping order and
    passing RawJSON fragments through untouched.
    """
    if isinstance(value, RawJSON):
        return value.text
    if isinstance(value, Mapping):
        return "{" + encode_members(value.items()) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(encode(v) for v in value) + "]"
    return _scalar(value)


def encode_members(items: Iterable[Tuple[str, Any]]) -> str:
    """Encode key/value pairs as object members without the enclosing braces."""
    return ",".join(f"{_scalar(str(k))}:{encode(v)}" for k, v in items)


def object_members(text: str) -> str:
    """
    Return the member text of a serialized JSON object, i.e. everything
    between its outermost braces, with surrounding whitespace removed.

    The text must already be known to hold a single JSON object.
    """
    body = text.strip()
    if not (body.startswith("{") and body.endswith("}")):
        raise ValueError("expected serialized JSON object text")
    return body[1:-1].strip()


def splice_objects(*parts: str) -> str:
    """
    Join object member texts into one object, in order, skipping empty parts.

        splice_objects('"a":1', '', '"b":2')  ->  '{"a":1,"b":2}'
    """
    return "{" + ",".join(p for p in parts if p) + "}"


def _reject_constant(name: str) -> Any:
    raise MalformedInputError(f"Non-finite number {name} is not valid JSON")


def _unique_pairs(pairs: List[Tuple[str, Any]]) -> dict:
    obj = {}
    for key, value in pairs:
        if key in obj:
            raise MalformedInputError(f"Duplicate key '{key}'", {"key": key})
        obj[key] = value
    return obj


def as_object(raw: Any, what: str) -> Tuple[dict, Optional[str]]:
    """
    Normalize a caller representation into (mapping, original_text).

    Accepted forms:
        str / bytes       JSON object text. original_text is the text itself.
        Mapping           deep-copied into a dict. original_text is None.
        dataclass         converted with dataclasses.asdict(). original_text is None.

    Raises MalformedInputError for anything else, for unparsable text, for
    JSON text that is not an object, and for text holding NaN, Infinity
    or a repeated key.
    """
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = bytes(raw).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedInputError(f"The {what} is not valid UTF-8") from exc

    if isinstance(raw, str):
        try:
            parsed = json.loads(
                raw,
                parse_constant=_reject_constant,
                object_pairs_hook=_unique_pairs,
            )
        except json.JSONDecodeError as exc:
            raise MalformedInputError(
                f"The {what} is not valid JSON",
                {"position": exc.pos},
            ) from exc
        if not isinstance(parsed, dict):
            raise MalformedInputError(
                f"The {what} must be a JSON object, got {type(parsed).__name__}"
            )
        return parsed, raw

    if isinstance(raw, Mapping):
        return copy.deepcopy(dict(raw)), None

    if is_dataclass(raw) and not isinstance(raw, type):
        return asdict(raw), None

    raise MalformedInputError(
        f"The {what} must be JSON text, a mapping or a dataclass, "
        f"got {type(raw).__name__}"
    )
