from typing import Optional, Dict, Any, Iterable


class CostboardException(Exception):
    """Base exception for all Costboard errors."""
    def __init__(
        self,
        message: str,
        code: str = "internal_error",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Error payload handed to the presentation layer."""
        return {"code": self.code, "message": self.message, "details": self.details}


class EmptyInputError(CostboardException):
    """Raised when an operation that needs at least one element receives none."""
    def __init__(self, message: str, code: str = "empty_input", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=code, details=details)


class InsufficientDataError(EmptyInputError):
    """Raised when a summary or trend cannot be derived from the supplied records."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="insufficient_data", details=details)


class InvalidParameterError(CostboardException):
    """
    Raised when an enum-typed parameter or a record field holds a value
    outside its recognized set.
    """
    def __init__(
        self,
        parameter: str,
        value: Any,
        allowed: Optional[Iterable[Any]] = None,
        message: Optional[str] = None
    ):
        allowed_list = [str(a) for a in allowed] if allowed is not None else None
        if message is None:
            message = f"Invalid value for '{parameter}': {value!r}."
            if allowed_list:
                message += f" Expected one of: {', '.join(allowed_list)}."
        details: Dict[str, Any] = {"parameter": parameter, "value": repr(value)}
        if allowed_list is not None:
            details["allowed"] = allowed_list
        super().__init__(message, code="invalid_parameter", details=details)
        self.parameter = parameter
        self.value = value


class OutOfRangeError(CostboardException):
    """Raised when page or page size is not a positive integer."""
    def __init__(self, parameter: str, value: Any):
        super().__init__(
            f"'{parameter}' must be a positive integer, got {value!r}.",
            code="out_of_range",
            details={"parameter": parameter, "value": repr(value)}
        )
        self.parameter = parameter
        self.value = value
