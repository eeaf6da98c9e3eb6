"""Source parser port (interface)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from forceloader.domain.model.program import CompilationUnit, Program


class SourceParserPort(ABC):
    """Port for parsing source code into the program model.

    Infrastructure layer must provide implementation.
    """

    @abstractmethod
    def parse_file(self, path: Path) -> CompilationUnit:
        """Parse single Python file.

        Args:
            path: Path to .py file

        Returns:
            Parsed CompilationUnit

        Raises:
            ParseError: If file cannot be read or parsed
        """
        ...

    @abstractmethod
    def parse_directory(self, path: Path) -> Program:
        """Parse directory recursively.

        Args:
            path: Root directory path

        Returns:
            Program with all parsed units

        Raises:
            ParseError: If any file cannot be parsed
        """
        ...
