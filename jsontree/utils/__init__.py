"""
jsontree configuration objects.
"""

from .config import (
    ErrorReporting,
    ParseConfig,
    ParseLimits,
    SerializeConfig,
    SerializeMode,
    SizeLimits,
    StructureLimits,
)

__all__ = [
    'ParseConfig', 'ParseLimits', 'SizeLimits', 'StructureLimits',
    'ErrorReporting', 'SerializeConfig', 'SerializeMode',
]
