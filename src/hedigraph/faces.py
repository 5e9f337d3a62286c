"""Face table: append-only storage of face payloads indexed by face id."""

from __future__ import annotations

from typing import Callable, Generic, Iterator, Optional, TypeVar

from .types import Face

F = TypeVar("F")


class FaceTable(Generic[F]):
    """
    Ordered collection of face payloads.

    A face id is the table size at the time the face was added; ids are
    never reused. Adding a face writes its id into the payload's ``idx``.
    """

    __slots__ = ("_faces", "_factory")

    def __init__(self, factory: Callable[[], F]) -> None:
        self._faces: list[F] = []
        self._factory = factory

    def add(self, props: Optional[F] = None) -> Face:
        """Append a face (blank if props is None) and return its id."""
        if props is None:
            props = self._factory()
        index = len(self._faces)
        self._faces.append(props)
        props.idx = index  # type: ignore[attr-defined]
        return index

    def __getitem__(self, f: Face) -> F:
        if not 0 <= f < len(self._faces):
            raise IndexError(f"face {f} out of range [0, {len(self._faces)})")
        return self._faces[f]

    def __len__(self) -> int:
        return len(self._faces)

    def __iter__(self) -> Iterator[F]:
        return iter(self._faces)

    def ids(self) -> range:
        """Return the range of valid face ids."""
        return range(len(self._faces))


__all__ = ["FaceTable"]
