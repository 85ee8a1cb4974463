"""
Execution context for the intcalc interpreter.

Holds the variable memory and the output stream for exactly one program
run. Nothing here is shared between runs.
"""

import sys
from dataclasses import dataclass, field
from typing import Dict, List, Optional, TextIO


@dataclass
class Memory:
    """
    The single global namespace of a program run.

    Names come into existence on their first assignment; there is no
    declaration step.
    """
    variables: Dict[str, int] = field(default_factory=dict)

    def get(self, name: str) -> Optional[int]:
        """Look up a variable, returning None if it was never assigned."""
        return self.variables.get(name)

    def set(self, name: str, value: int) -> None:
        """Create or overwrite a variable."""
        self.variables[name] = value

    def contains(self, name: str) -> bool:
        return name in self.variables

    def snapshot(self) -> Dict[str, int]:
        """Copy of the current bindings."""
        return dict(self.variables)

    def __len__(self) -> int:
        return len(self.variables)


@dataclass
class ExecutionContext:
    """
    The full execution context for one program run.

    Tracks:
    - Variable memory
    - Output stream and the values printed to it
    - Source lines for error messages
    """
    memory: Memory = field(default_factory=Memory)

    # None means standard output as it is when the program prints
    output: Optional[TextIO] = None
    printed: List[int] = field(default_factory=list)

    # Source tracking for error messages
    source_lines: List[str] = field(default_factory=list)

    def get_variable(self, name: str) -> Optional[int]:
        return self.memory.get(name)

    def set_variable(self, name: str, value: int) -> None:
        self.memory.set(name, value)

    def write(self, value: int) -> None:
        """Write one printed value, followed by a newline."""
        stream = self.output if self.output is not None else sys.stdout
        print(value, file=stream)
        self.printed.append(value)

    def get_source_line(self, line_num: int) -> Optional[str]:
        """Get a source line for error messages."""
        if 1 <= line_num <= len(self.source_lines):
            return self.source_lines[line_num - 1]
        return None


def create_context(source: str = "", output: Optional[TextIO] = None) -> ExecutionContext:
    """
    Create a fresh execution context with an empty memory.

    Args:
        source: The source code (for error messages)
        output: Stream for print statements (defaults to standard output)

    Returns:
        A new ExecutionContext
    """
    return ExecutionContext(
        output=output,
        source_lines=source.split('\n') if source else [],
    )
