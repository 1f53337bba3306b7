from typing import Optional, Dict, Any

class EngineException(Exception):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }

class ValidationException(EngineException):
    def __init__(self, field: str, reason: str):
        super().__init__(
            f"Validation failed for {field}: {reason}",
            {"field": field, "reason": reason}
        )

class MalformedEvidence(EngineException):
    def __init__(self, index: int, reason: str):
        self.index = index
        self.reason = reason
        super().__init__(
            f"Evidence item {index} is malformed: {reason}",
            {"index": index, "reason": reason}
        )

class InvariantViolation(EngineException):
    """Breakdown contributions no longer add up to the final score."""

    def __init__(self, expected: float, actual: float):
        super().__init__(
            f"Breakdown contributions sum to {actual!r}, expected {expected!r}",
            {"expected": expected, "actual": actual}
        )

class UnsupportedFormat(EngineException):
    def __init__(self, fmt: str):
        super().__init__(
            f"Unsupported export format: {fmt}",
            {"format": fmt, "supported": ["json", "text", "both"]}
        )
