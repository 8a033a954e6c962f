"""Stats data layer - record models and descriptor read-back."""

from statsgen.data.models import (
    StatType,
    Achievement,
    Stat,
    ProcessingResult,
)
from statsgen.data.reader import DescriptorReader

__all__ = [
    "StatType",
    "Achievement",
    "Stat",
    "ProcessingResult",
    "DescriptorReader",
]
