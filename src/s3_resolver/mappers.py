"""
Error mapping and CLI utilities.

Provides centralized exception-to-exit-code mapping and a CLI command wrapper
to ensure consistent error handling across all Typer commands.
"""
from __future__ import annotations

import typer
from typing import Callable, TypeVar

T = TypeVar('T')

# Exit codes by exception class name
EXIT_CODES = {
    "ObjectNotFound": 1,
    "InvalidConfiguration": 2,
    "InvalidDelegateResult": 2,
    "ValueError": 2,
    "StorageIOError": 3,
    "ExternalSubsystemError": 3,
    "AccessDenied": 4,
}


def exit_code_for(exc: BaseException) -> int:
    """
    Map exception to standardized exit code.
    
    Returns:
    - 0: Success
    - 1: Object not found (ObjectNotFound)
    - 2: Configuration or validation error (InvalidConfiguration, InvalidDelegateResult, ValueError)
    - 3: Storage or delegate failure (StorageIOError, ExternalSubsystemError) or unknown error
    - 4: Access denied (AccessDenied)
    
    Args:
        exc: Exception to map
        
    Returns:
        Exit code (1-4, with 3 as fallback for unknown exceptions)
    """
    return EXIT_CODES.get(type(exc).__name__, 3)


def run_and_exit(func: Callable[[], T]) -> T:
    """
    Unified error wrapper for CLI commands.
    
    Executes the given function and maps any exceptions to appropriate
    exit codes using typer.Exit, after reporting the error on stderr.
    
    Args:
        func: Function to execute
        
    Returns:
        Function result if successful
        
    Raises:
        typer.Exit: With appropriate exit code if function raises exception
    """
    try:
        return func()
    except Exception as e:
        typer.echo(f"Error: {type(e).__name__}: {e}", err=True)
        raise typer.Exit(code=exit_code_for(e)) from e
