import random
from typing import List, Dict, Optional
from pydantic import BaseModel, Field, ConfigDict

from .models import VOWELS


# Letter frequencies loosely following English usage (100 tiles total)
LETTER_FREQUENCIES: Dict[str, int] = {
    "E": 12, "A": 9, "I": 9, "O": 8, "N": 6, "R": 6, "T": 6,
    "S": 6, "L": 4, "U": 4, "D": 4, "G": 3, "B": 2, "C": 2,
    "M": 2, "P": 2, "F": 2, "H": 2, "V": 2, "W": 2, "Y": 2,
    "K": 1, "J": 1, "X": 1, "Q": 1, "Z": 1,
}


class LetterBag(BaseModel):
    """
    Weighted letter source drawn without replacement.

    The bag starts from LETTER_FREQUENCIES, is shuffled, and hands out
    letters from the end. Once empty it is rebuilt in full and reshuffled,
    so a draw always succeeds.

    Attributes:
        letters: The remaining letters, in draw order (last drawn first)
        refills: Number of times the bag has been rebuilt
        seed: Optional random seed for reproducibility
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    letters: List[str] = Field(default_factory=list)
    refills: int = Field(default=0, ge=0)
    seed: Optional[int] = None
    _rng: random.Random = None

    def model_post_init(self, __context) -> None:
        """Initialize the random generator after model creation."""
        self._rng = random.Random(self.seed)

    @classmethod
    def create(cls, seed: Optional[int] = None) -> "LetterBag":
        """
        Factory method to create a full, shuffled bag.

        Args:
            seed: Optional random seed for reproducibility

        Returns:
            A new LetterBag ready to draw from
        """
        bag = cls(seed=seed)
        bag.refill()
        return bag

    @property
    def tiles_remaining(self) -> int:
        """Number of letters left before the next refill."""
        return len(self.letters)

    def refill(self) -> None:
        """Rebuild the bag from the frequency table and shuffle it."""
        letters = []
        for letter, count in LETTER_FREQUENCIES.items():
            letters.extend([letter] * count)
        self._rng.shuffle(letters)
        self.letters = letters
        self.refills += 1

    def draw(self) -> str:
        """
        Draw one letter, refilling first if the bag is empty.

        Returns:
            An uppercase letter
        """
        if not self.letters:
            self.refill()
        return self.letters.pop()

    def draw_vowel(self) -> str:
        """
        Draw a vowel directly out of the bag.

        The vowel is picked uniformly among the vowel tiles still in the bag
        and removed in place, bypassing the normal draw order. The bag is
        refilled first if it holds no vowels.

        Returns:
            One of A, E, I, O, U
        """
        positions = [i for i, letter in enumerate(self.letters) if letter in VOWELS]
        if not positions:
            self.refill()
            positions = [i for i, letter in enumerate(self.letters) if letter in VOWELS]
        return self.letters.pop(self._rng.choice(positions))

    def get_state(self) -> Dict:
        """
        Get the current bag state as a dictionary.

        Returns:
            Dictionary containing bag state
        """
        return {
            "tiles_remaining": self.tiles_remaining,
            "refills": self.refills,
        }
