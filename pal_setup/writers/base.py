"""Base class for artifact writers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ..errors import PersistenceError
from ..logging.config import get_logger


@dataclass(frozen=True)
class WriteResult:
    """Result of writing one artifact."""
    name: str
    path: Path
    lines_written: int


class BaseWriter(ABC):
    """
    Base class for writers that render an artifact as text lines.

    Subclasses implement ``render``; ``write`` handles directories, the file
    itself and error translation.
    """

    def __init__(self, name: str, output_path: Union[str, Path], create_dirs: bool = True):
        self.name = name
        self.output_path = Path(output_path)
        self.create_dirs = create_dirs
        self.logger = get_logger(f"pal_setup.writers.{name}")

    @abstractmethod
    def render(self) -> list[str]:
        """
        Render the artifact.

        Returns:
            Lines without terminators
        """
        pass

    def write(self) -> WriteResult:
        """
        Write the rendered lines to the output path, replacing any existing file.

        Raises:
            PersistenceError: If the directory or file cannot be written
        """
        lines = self.render()

        try:
            if self.create_dirs:
                self.output_path.parent.mkdir(parents=True, exist_ok=True)

            with open(self.output_path, "w", newline="") as f:
                for line in lines:
                    f.write(line)
                    f.write("\n")

        except OSError as e:
            self.logger.error(
                "Artifact write failed",
                writer=self.name,
                output_path=str(self.output_path),
                error=str(e)
            )
            raise PersistenceError(
                f"Cannot write {self.name} to {self.output_path}: {e}",
                operation="write",
                target=str(self.output_path)
            ) from e

        self.logger.info(
            "Artifact written",
            writer=self.name,
            output_path=str(self.output_path),
            lines=len(lines)
        )

        return WriteResult(name=self.name, path=self.output_path, lines_written=len(lines))
