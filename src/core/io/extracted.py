"""
Result type for best-effort extractions.

A fallback is an expected outcome for delimiter, Reynolds number and label
extraction, so it is returned as a value rather than raised.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ExtractedValue(Generic[T]):
    """
    A parsed value, or a default plus the reason it was used.

    Usage:
        re = extractor.reynolds(lines)
        if re.is_fallback:
            log.warning(re.fallback_reason)
        use(re.value)
    """
    value: T
    fallback_reason: Optional[str] = None

    @classmethod
    def parsed(cls, value: T) -> ExtractedValue[T]:
        return cls(value=value)

    @classmethod
    def fallback(cls, value: T, reason: str) -> ExtractedValue[T]:
        return cls(value=value, fallback_reason=reason)

    @property
    def is_fallback(self) -> bool:
        return self.fallback_reason is not None
