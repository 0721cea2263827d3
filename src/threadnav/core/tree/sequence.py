"""The flat, depth-annotated row sequence that every tree query reads."""

from collections.abc import Iterable, Iterator


class DepthSequence:
    """Ordered row depths.

    Depths are read once from the page and never change. Rows discovered later
    are appended; existing positions stay valid.
    """

    def __init__(self, depths: Iterable[int] = ()) -> None:
        self._depths: list[int] = []
        self.extend(depths)

    def extend(self, depths: Iterable[int]) -> None:
        """Append depths of newly discovered rows."""
        for depth in depths:
            if depth < 0:
                msg = f"Depth must be non-negative, got {depth!r}"
                raise ValueError(msg)
            self._depths.append(int(depth))

    def depth(self, position: int) -> int:
        if not self.contains(position):
            msg = f"Position {position!r} out of range (0..{len(self._depths) - 1})"
            raise IndexError(msg)
        return self._depths[position]

    def contains(self, position: int | None) -> bool:
        return position is not None and 0 <= position < len(self._depths)

    def is_well_formed(self) -> bool:
        """Check that this is a valid pre-order flattening of a forest.

        The first depth is 0 and no depth exceeds its predecessor by more than one.
        """
        prev = -1
        for depth in self._depths:
            if depth > prev + 1:
                return False
            prev = depth
        return True

    def __len__(self) -> int:
        return len(self._depths)

    def __getitem__(self, position: int) -> int:
        return self._depths[position]

    def __iter__(self) -> Iterator[int]:
        return iter(self._depths)

    def __repr__(self) -> str:
        return f"DepthSequence({self._depths!r})"
