from __future__ import annotations


class BusinessValidationError(Exception):
    """Raised when a domain/business rule is violated."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ShapeNotFoundError(Exception):
    """Raised when a referenced shape is absent from the canvas snapshot."""

    def __init__(self, shape_id: str):
        super().__init__(f"Shape not found: {shape_id}")
        self.shape_id = shape_id
