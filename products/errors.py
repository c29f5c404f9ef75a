"""Errors raised while validating and encoding product records."""


class InvalidField(ValueError):
    """Raised when a product field cannot be encoded for the contract call."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid product field '{field}': {reason}")
