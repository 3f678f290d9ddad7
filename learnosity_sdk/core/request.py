"""
Request Packet: the optional request body of an API initialisation.

Holds both the structured body and the exact text that is signed and
sent. Text given by the caller is kept verbatim so key order and
formatting survive; the text is only re-derived after the SDK itself
mutates the body (see RequestPacket.refresh).
"""

from typing import Any, Dict, Optional

from learnosity_sdk.core.exceptions import MalformedInputError
from learnosity_sdk.core.wire import as_object, encode


class RequestPacket:
    """Structured request body plus its exact serialized text."""

    def __init__(self, data: Dict[str, Any], text: str) -> None:
        self.data = data
        self.text = text

    @classmethod
    def normalize(cls, raw: Any) -> Optional["RequestPacket"]:
        """
        Build a RequestPacket from JSON text, a mapping, a dataclass or an
        existing RequestPacket. Returns None when raw is None.

        An empty object is a valid request body.
        """
        if raw is None:
            return None
        if isinstance(raw, RequestPacket):
            return cls.normalize(raw.text)
        data, text = as_object(raw, "request packet")
        if text is None:
            try:
                text = encode(data)
            except (TypeError, ValueError) as exc:
                raise MalformedInputError(
                    f"The request packet is not JSON serializable: {exc}"
                ) from exc
        return cls(data, text)

    def refresh(self) -> None:
        """Re-derive the text after the structured body was changed."""
        self.text = encode(self.data)

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __repr__(self) -> str:
        return f"RequestPacket(length={len(self.text)})"
