import logging
import random
from pathlib import Path
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from ..engine.parsing import prepare_lines
from .models import SnippetNotFoundError

logger = logging.getLogger(__name__)

SNIPPET_SUFFIX = ".txt"


class SnippetRepository(BaseModel):
    """
    Directory-backed store of code snippets.

    Each snippet is a `<identifier>.txt` file directly under `root`. The
    sorted list of identifiers is cached and refreshed after every change.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    root: Path
    rng: random.Random = Field(default_factory=random.Random)
    _cache: List[Path] = None

    def model_post_init(self, __context) -> None:
        """Create the snippet directory if needed and index it."""
        if not self.root.exists():
            logger.info("Creating snippet directory %s", self.root)
            self.root.mkdir(parents=True, exist_ok=True)
        self._refresh()

    def _refresh(self) -> None:
        self._cache = sorted(
            (p for p in self.root.iterdir() if p.is_file() and p.suffix == SNIPPET_SUFFIX),
            key=lambda p: p.name,
        )

    def make_path(self, identifier: str) -> Path:
        return self.root / f"{identifier}{SNIPPET_SUFFIX}"

    def list(self) -> List[str]:
        """Identifiers of all stored snippets, sorted by file name."""
        return [p.stem for p in self._cache]

    def add(self, identifier: str, lines: List[str]) -> None:
        """
        Store a snippet, replacing any existing one with the same identifier.

        Args:
            identifier: Snippet identifier (file stem)
            lines: Snippet lines without line terminators
        """
        path = self.make_path(identifier)
        with open(path, 'w', encoding='utf-8') as f:
            for line in lines:
                f.write(line + '\n')

        logger.info("Stored snippet %s (%d lines)", identifier, len(lines))
        self._refresh()

    def remove(self, identifier: str) -> bool:
        """
        Delete a snippet.

        Returns:
            True if the snippet existed and was removed, False otherwise
        """
        path = self.make_path(identifier)
        if not path.is_file():
            return False

        path.unlink()
        logger.info("Removed snippet %s", identifier)
        self._refresh()
        return True

    def read(self, identifier: str) -> Optional[str]:
        """
        Raw text of a snippet, or None if it does not exist.

        Bytes that are not valid UTF-8 are replaced with U+FFFD.
        """
        path = self.make_path(identifier)
        if not path.is_file():
            return None
        return path.read_text(encoding='utf-8', errors='replace')

    def pick_random(self) -> Optional[str]:
        """Identifier of a uniformly chosen snippet, or None if the repository is empty."""
        if not self._cache:
            return None
        return self._cache[self.rng.randrange(len(self._cache))].stem

    def load_lines(self, identifier: str) -> List[str]:
        """
        Load a snippet as the padded buffer used by the matcher.

        Tabs are expanded to 4 spaces and every line is right-padded.

        Raises:
            SnippetNotFoundError: If the snippet does not exist
            OSError: If the snippet file exists but cannot be read
        """
        path = self.make_path(identifier)
        if not path.is_file():
            raise SnippetNotFoundError(f"Snippet not found: {identifier}")

        with open(path, encoding='utf-8', errors='replace') as f:
            return prepare_lines(f)
