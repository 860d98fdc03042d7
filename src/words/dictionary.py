"""Dictionary sources for word validation."""

from pathlib import Path
from typing import FrozenSet, Iterable, Protocol


_DATA_FILE = Path(__file__).parent / "data" / "words.txt"


class Dictionary(Protocol):
    """Anything that answers membership for lowercase words (a set works)."""

    def __contains__(self, word: object) -> bool: ...


class WordList:
    """An immutable set of lowercase words loaded from a plain-text list."""

    def __init__(self, words: Iterable[str]):
        self._words: FrozenSet[str] = frozenset(w.strip().lower() for w in words if w.strip())

    @classmethod
    def from_file(cls, path: str | Path) -> "WordList":
        '''
        Load a word list with one word per line.

        Blank lines and lines starting with '#' are skipped.

        Raises:
            FileNotFoundError: If the file does not exist
        '''
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Word list not found: {path}")

        lines = path.read_text(encoding="utf-8").splitlines()
        return cls(line for line in lines if not line.lstrip().startswith("#"))

    @classmethod
    def bundled(cls) -> "WordList":
        """The starter word list shipped with the package."""
        return cls.from_file(_DATA_FILE)

    def contains(self, word: str) -> bool:
        '''
        Returns True if `word` (lowercase) is in the list.
        Returns False otherwise.
        '''
        return word in self._words

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def __len__(self) -> int:
        return len(self._words)


def load_dictionary(path: str | Path | None = None) -> WordList:
    """Load the word list at `path`, or the bundled one when no path is given."""
    if path is None:
        return WordList.bundled()
    return WordList.from_file(path)
