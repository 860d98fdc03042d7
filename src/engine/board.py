import random
from typing import Iterable, List, Optional, Set
from pydantic import BaseModel, Field, ConfigDict

from .letter_bag import LetterBag
from .models import Cell, Tile, VOWELS


class Board(BaseModel):
    """
    The playing field and its tile spawner.

    Tiles are placed by rejection sampling: random cells are drawn until one
    falls outside the occupied set.

    Attributes:
        width: Number of cells across
        height: Number of cells down
        seed: Optional random seed for reproducibility
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    width: int = Field(default=20, gt=0)
    height: int = Field(default=20, gt=0)
    seed: Optional[int] = None
    _rng: random.Random = None

    def model_post_init(self, __context) -> None:
        """Initialize the random generator after model creation."""
        self._rng = random.Random(self.seed)

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def in_bounds(self, cell: Cell) -> bool:
        """Check whether a cell lies on the grid."""
        return 0 <= cell.x < self.width and 0 <= cell.y < self.height

    def has_free_cell(self, occupied: Iterable[Cell]) -> bool:
        taken = {cell for cell in occupied if self.in_bounds(cell)}
        return len(taken) < self.cell_count

    def random_free_cell(self, occupied: Set[Cell]) -> Cell:
        """
        Pick a uniformly random cell not in `occupied`.

        Raises:
            ValueError: If every cell on the grid is occupied
        """
        taken = {cell for cell in occupied if self.in_bounds(cell)}
        if len(taken) >= self.cell_count:
            raise ValueError(f"No free cell left on a {self.width}x{self.height} grid")

        while True:
            cell = Cell(self._rng.randrange(self.width), self._rng.randrange(self.height))
            if cell not in taken:
                return cell

    def spawn_tile(
        self,
        occupied: Iterable[Cell],
        bag: LetterBag,
        letter: Optional[str] = None,
    ) -> Tile:
        """
        Place one tile on a free cell.

        Args:
            occupied: Snake cells and existing tile cells
            bag: Letter source used when no letter is given
            letter: Optional letter to place instead of drawing one

        Returns:
            The new tile
        """
        cell = self.random_free_cell(set(occupied))
        return Tile(x=cell.x, y=cell.y, letter=letter or bag.draw())

    def spawn_initial_pair(self, snake: List[Cell], bag: LetterBag) -> List[Tile]:
        """
        Spawn the two opening tiles, at least one of them a vowel.

        The first tile is drawn normally. If it is a consonant, the second
        tile's letter is pulled from the vowels left in the bag.

        Args:
            snake: Current snake cells
            bag: Letter source

        Returns:
            Exactly two tiles
        """
        first = self.spawn_tile(snake, bag)
        occupied = set(snake) | {first.cell}

        if first.letter in VOWELS:
            second = self.spawn_tile(occupied, bag)
        else:
            second = self.spawn_tile(occupied, bag, letter=bag.draw_vowel())

        return [first, second]
