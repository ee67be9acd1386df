"""Core data models for the water sort solver."""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

# Maximum number of liquid units a beaker can hold
CAPACITY = 4

# Type aliases for clarity
Color = int  # Opaque identifier for one liquid color
Beaker = Tuple[Color, ...]  # Index 0 is the top (pourable end)

EMPTY_BEAKER: Beaker = ()


@dataclass(frozen=True)
class Puzzle:
    """Multiset of beakers, stored as sorted (content, count) entries.

    Beakers with identical contents are interchangeable, so a puzzle only
    records how many physical beakers hold each distinct content. Every
    count is positive; absent contents have count zero.
    """

    entries: Tuple[Tuple[Beaker, int], ...] = ()
    _index: Optional[Dict[Beaker, int]] = field(
        default=None, init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        """Validate entries and build the lookup index."""
        previous: Optional[Beaker] = None
        for beaker, count in self.entries:
            if count <= 0:
                raise ValueError(f"Beaker {beaker} has non-positive count {count}")
            if len(beaker) > CAPACITY:
                raise ValueError(f"Beaker {beaker} exceeds capacity {CAPACITY}")
            if previous is not None and not previous < beaker:
                raise ValueError("Puzzle entries must be sorted and unique")
            previous = beaker
        object.__setattr__(self, '_index', dict(self.entries))

    @classmethod
    def from_counts(cls, counts: Mapping[Beaker, int]) -> 'Puzzle':
        """Create a puzzle from a content -> count mapping, dropping zero counts."""
        entries = tuple(sorted(
            (tuple(beaker), count) for beaker, count in counts.items() if count != 0
        ))
        return cls(entries)

    @classmethod
    def from_beakers(cls, beakers: Sequence[Sequence[Color]]) -> 'Puzzle':
        """Create a puzzle from a list of physical beakers."""
        counts: Dict[Beaker, int] = {}
        for beaker in beakers:
            key = tuple(beaker)
            counts[key] = counts.get(key, 0) + 1
        return cls.from_counts(counts)

    def count(self, beaker: Beaker) -> int:
        """Number of physical beakers holding exactly this content."""
        return self._index.get(beaker, 0)

    def beakers(self) -> List[Beaker]:
        """Distinct beaker contents in sorted order."""
        return [beaker for beaker, _ in self.entries]

    def items(self) -> Iterator[Tuple[Beaker, int]]:
        return iter(self.entries)

    def counts(self) -> Dict[Beaker, int]:
        """Mutable copy of the content -> count mapping."""
        return dict(self._index)

    def physical_beakers(self) -> List[Beaker]:
        """Expand the multiset into one entry per physical beaker."""
        result = []
        for beaker, count in self.entries:
            result.extend([beaker] * count)
        return result

    @property
    def total_beakers(self) -> int:
        return sum(count for _, count in self.entries)

    def __contains__(self, beaker: object) -> bool:
        return beaker in self._index

    def __iter__(self) -> Iterator[Beaker]:
        return iter(self.beakers())

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class Move:
    """A pour identified by the contents of the two beakers involved."""

    source: Beaker
    destination: Beaker

    def to_dict(self) -> Dict[str, List[Color]]:
        return {'source': list(self.source), 'destination': list(self.destination)}


@dataclass
class Palette:
    """Bidirectional mapping between color names and Color identifiers."""

    names: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._ids: Dict[str, Color] = {name: i for i, name in enumerate(self.names)}
        assert len(self._ids) == len(self.names), "Palette color names must be unique"

    def color_of(self, name: str) -> Color:
        """Return the id for a color name, assigning the next id on first use."""
        if name not in self._ids:
            self._ids[name] = len(self.names)
            self.names.append(name)
        return self._ids[name]

    def name_of(self, color: Color) -> str:
        if 0 <= color < len(self.names):
            return self.names[color]
        return f"#{color}"

    def __len__(self) -> int:
        return len(self.names)
