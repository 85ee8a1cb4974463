"""
intcalc runtime - tree-walking interpreter for program execution.

This module provides:
- Interpreter: Executes a parsed Program statement by statement
- Memory: The variable store of one run
- ExecutionContext: Memory, output stream and source lines of one run
"""

from .context import (
    Memory,
    ExecutionContext,
    create_context,
)

from .interpreter import (
    Interpreter,
    ExecutionResult,
    truncating_divide,
    execute,
    compile_and_run,
)

__all__ = [
    # Context
    'Memory',
    'ExecutionContext',
    'create_context',

    # Interpreter
    'Interpreter',
    'ExecutionResult',
    'truncating_divide',
    'execute',
    'compile_and_run',
]
