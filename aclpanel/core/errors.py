"""
Error types shared by the store and the API layer.
"""
from typing import Dict, Iterator, List


class StoreError(Exception):
    """Raised when the backing store fails a read or write (connectivity, constraint)."""


class ValidationError(ValueError):
    """Base class for field-scoped validation problems."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class RangeError(ValidationError):
    """An ACL address range problem (bad address or family mismatch)."""


class ErrorCollector:
    """
    Collects field-scoped validation errors so a caller can render several
    field errors at once instead of stopping at the first exception.
    """

    def __init__(self):
        self._errors: List[ValidationError] = []

    def add(self, error: ValidationError) -> None:
        self._errors.append(error)

    def get(self, field: str) -> List[str]:
        """Messages recorded for a field, in insertion order."""
        return [e.message for e in self._errors if e.field == field]

    def has(self, field: str) -> bool:
        return any(e.field == field for e in self._errors)

    def as_dict(self) -> Dict[str, List[str]]:
        result: Dict[str, List[str]] = {}
        for error in self._errors:
            result.setdefault(error.field, []).append(error.message)
        return result

    def __iter__(self) -> Iterator[ValidationError]:
        return iter(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __bool__(self) -> bool:
        return bool(self._errors)
