"""
Schemas Package

JSON schema definitions and validation utilities.
"""

from .validator import validate_folder_spec, ValidationError

__all__ = [
    "validate_folder_spec",
    "ValidationError",
]
