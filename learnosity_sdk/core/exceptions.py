"""
Learnosity SDK Exception Hierarchy

All exceptions inherit from LearnosityError for easy catching.
Every validation failure is raised at construction or mutation time;
no partially built request is ever returned.
"""


class LearnosityError(Exception):
    """Base exception for all Learnosity SDK errors"""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ValidationError(LearnosityError):
    """Raised when caller-supplied input fails validation"""
    pass


class MissingArgumentError(ValidationError):
    """Raised when a required argument (service, secret, security packet) is absent"""
    pass


class InvalidSecretError(ValidationError):
    """Raised when the consumer secret is empty or blank"""
    pass


class EmptySecurityContextError(ValidationError):
    """Raised when the security packet has no entries"""
    pass


class UnrecognizedSecurityKeyError(ValidationError):
    """Raised when the security packet holds a key outside VALID_SECURITY_KEYS"""

    def __init__(self, key: str):
        super().__init__(
            f"Invalid key found in the security packet: {key}",
            {"key": key},
        )
        self.key = key


class MissingUserIdError(ValidationError):
    """Raised when the Questions API is used without a user_id"""
    pass


class MalformedInputError(ValidationError):
    """Raised when a security or request representation cannot be normalized"""
    pass


class UnknownServiceError(ValidationError):
    """Raised when a service name does not match any known service"""
    pass


class ServicePreconditionError(ValidationError):
    """Raised when a service-specific requirement is not met"""
    pass


class ConfigurationError(LearnosityError):
    """Raised when credentials cannot be loaded from the environment or a file"""
    pass
