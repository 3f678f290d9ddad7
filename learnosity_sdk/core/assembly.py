"""
Payload Assembler: the final JSON envelope per service.

    data                      {<security>}
    assess                    <request text>
    author / items / reports  {"security":{..}[,"action":".."][,"request":<request text>]}
    questions                 {<security without domain>,<request members>}
    events                    {"security":{..}[,"config":<request text>]}

Request text is always emitted verbatim (RawJSON / member splicing),
never decoded and re-encoded, so the bytes sent are the bytes signed.
"""

from typing import Callable, Dict, Optional

from learnosity_sdk.core.security import SecurityContext
from learnosity_sdk.core.services import Service
from learnosity_sdk.core.wire import (
    RawJSON,
    encode,
    encode_members,
    object_members,
    splice_objects,
)

Shaper = Callable[[SecurityContext, str, str], str]


def _data(security: SecurityContext, request_text: str, action: str) -> str:
    return security.to_json()


def _assess(security: SecurityContext, request_text: str, action: str) -> str:
    return request_text


def _wrapped(security: SecurityContext, request_text: str, action: str) -> str:
    output: Dict[str, object] = {"security": security.to_dict()}
    if action:
        output["action"] = action
    if request_text:
        output["request"] = RawJSON(request_text)
    return encode(output)


def _questions(security: SecurityContext, request_text: str, action: str) -> str:
    fields = security.to_dict()
    fields.pop("domain", None)
    return splice_objects(
        encode_members(fields.items()),
        object_members(request_text) if request_text else "",
    )


def _events(security: SecurityContext, request_text: str, action: str) -> str:
    output: Dict[str, object] = {"security": security.to_dict()}
    if request_text:
        output["config"] = RawJSON(request_text)
    return encode(output)


SHAPERS: Dict[Service, Shaper] = {
    Service.DATA:      _data,
    Service.ASSESS:    _assess,
    Service.AUTHOR:    _wrapped,
    Service.ITEMS:     _wrapped,
    Service.REPORTS:   _wrapped,
    Service.QUESTIONS: _questions,
    Service.EVENTS:    _events,
}


def assemble(
    service:      Service,
    security:     SecurityContext,
    request_text: Optional[str] = "",
    action:       Optional[str] = "",
) -> str:
    """Render the envelope text for service."""
    return SHAPERS[service](security, request_text or "", action or "")
