#!/usr/bin/env python3
"""
Custom exceptions and error handling utilities for smsgfx.

Errors raised for bad input also derive from the matching builtin
(ValueError / IndexError / FileNotFoundError) so callers can catch either.
"""


class SmsGfxError(Exception):
    """Base exception for all smsgfx errors"""
    pass


class ValidationError(SmsGfxError, ValueError):
    """Raised when a value or enum argument is invalid"""
    pass


class OutOfRangeError(SmsGfxError, IndexError):
    """Raised when an index or coordinate is outside its valid range"""
    pass


class FormatError(SmsGfxError, ValueError):
    """Raised when persisted or imported data cannot be parsed"""
    pass


class UndoError(SmsGfxError):
    """Raised when there is no history entry to restore"""
    pass


class StorageError(SmsGfxError):
    """Raised when reading or writing project storage fails"""
    pass


class ProjectNotFoundError(StorageError, FileNotFoundError):
    """Raised when a requested project does not exist"""
    pass


def format_error_message(operation: str, error: Exception) -> str:
    """
    Format an error message for user display.

    Args:
        operation: Description of the operation that failed
        error: The exception that was raised

    Returns:
        User-friendly error message
    """
    if isinstance(error, ProjectNotFoundError):
        return f"Project not found during {operation}: {error}"
    elif isinstance(error, FileNotFoundError):
        return f"File not found during {operation}"
    elif isinstance(error, PermissionError):
        return f"Permission denied during {operation}"
    elif isinstance(error, FormatError):
        return f"Invalid format: {error}"
    elif isinstance(error, OutOfRangeError):
        return f"Out of range: {error}"
    elif isinstance(error, ValidationError):
        return f"Invalid input: {error}"
    elif isinstance(error, UndoError):
        return f"Nothing to {operation}"
    else:
        return f"Failed to {operation}: {error}"
