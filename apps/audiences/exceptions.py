from rest_framework import status


class AudienceError(Exception):
    """Base class for failures while building or resolving an audience."""

    status_code = status.HTTP_400_BAD_REQUEST


class AudienceValidationError(AudienceError):
    """Malformed request; carries every violated constraint."""

    def __init__(self, messages):
        if isinstance(messages, str):
            messages = [messages]
        self.messages = list(messages)
        super().__init__(", ".join(self.messages))


class RuleError(AudienceError):
    """A single rule cannot be turned into a predicate."""


class UnsupportedFieldError(RuleError):
    def __init__(self, field):
        self.field = field
        super().__init__(f"Unsupported field: {field}")


class UnsupportedOperatorError(RuleError):
    def __init__(self, operator):
        self.operator = operator
        super().__init__(f"Unsupported operator: {operator}")


class CoercionError(RuleError):
    def __init__(self, field, value, expected):
        self.field = field
        self.value = value
        self.expected = expected
        super().__init__(f"Invalid value for {field}: {value!r} is not a valid {expected}")


class RuleSetError(AudienceValidationError):
    """Several rules failed to compile at once."""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__([str(e) for e in self.errors])


class StoreError(AudienceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
