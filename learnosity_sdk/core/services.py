"""
Learnosity service variants.

A Service is chosen once per request build and drives everything
downstream: which fields are signed (policy.py) and how the final
envelope is shaped (assembly.py).
"""

from enum import Enum
from typing import Union

from learnosity_sdk.core.exceptions import MissingArgumentError, UnknownServiceError


class Service(Enum):
    """The Learnosity API a request is built for."""
    ASSESS    = "assess"
    AUTHOR    = "author"
    DATA      = "data"
    ITEMS     = "items"
    QUESTIONS = "questions"
    REPORTS   = "reports"
    EVENTS    = "events"

    @classmethod
    def coerce(cls, value: Union["Service", str, None]) -> "Service":
        """
        Accept a Service member or its name/value in any case
        ("items", "Items", "ITEMS").
        """
        if value is None:
            raise MissingArgumentError("The `service` argument is required")
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if member.value == key:
                    return member
        raise UnknownServiceError(
            f"Unknown service {value!r}",
            {"valid": ",".join(m.value for m in cls)},
        )
