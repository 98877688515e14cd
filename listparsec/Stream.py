from dataclasses import dataclass
from typing import Iterator, Optional


@dataclass(frozen=True)
class SourcePos:
    """Represents a position in the source text."""
    line: int = 1
    column: int = 1
    offset: int = 0
    name: str = ""

    def update(self, char: str) -> 'SourcePos':
        """Return the position following `char`."""
        if char == '\n':
            return SourcePos(self.line + 1, 1, self.offset + 1, self.name)
        return SourcePos(self.line, self.column + 1, self.offset + 1, self.name)

    def __str__(self) -> str:
        prefix = f"{self.name} " if self.name else ""
        return f"{prefix}line {self.line}, column {self.column}"


@dataclass(frozen=True)
class StreamChar:
    """A character tagged with the position it was read at."""
    value: str
    position: SourcePos


@dataclass(frozen=True)
class Stream:
    """
    An immutable view of source text at a position.

    Advancing returns a new Stream sharing the same source, so any stream
    value can be handed to several parsers and re-read.
    """
    source: str
    pos: SourcePos

    @staticmethod
    def of(text: str, name: str = "") -> 'Stream':
        """Lift source text into a stream positioned at its first character."""
        return Stream(text, SourcePos(name=name))

    @property
    def offset(self) -> int:
        return self.pos.offset

    @property
    def at_end(self) -> bool:
        return self.pos.offset >= len(self.source)

    @property
    def remaining(self) -> str:
        """The unconsumed text."""
        return self.source[self.pos.offset:]

    def head(self) -> Optional[StreamChar]:
        if self.at_end:
            return None
        return StreamChar(self.source[self.pos.offset], self.pos)

    def advance(self) -> 'Stream':
        """Return the stream after its first character."""
        if self.at_end:
            raise IndexError("advance past end of stream")
        return Stream(self.source, self.pos.update(self.source[self.pos.offset]))

    def __iter__(self) -> Iterator[StreamChar]:
        pos = self.pos
        for c in self.source[self.pos.offset:]:
            yield StreamChar(c, pos)
            pos = pos.update(c)

    def __len__(self) -> int:
        return len(self.source) - self.pos.offset

    def __repr__(self) -> str:
        preview = self.remaining[:20]
        more = "..." if len(self) > 20 else ""
        return f"Stream({preview!r}{more} at {self.pos})"
