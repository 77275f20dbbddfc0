"""Ordered issue collections with predicate filtering and story-point totals."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import TYPE_CHECKING, overload

from .models import Issue

if TYPE_CHECKING:
    import pandas as pd

IssuePredicate = Callable[[Issue | None], bool]


class IssueCollection(Sequence):
    """An ordered group of issues.

    Order is insertion order; nothing is ever sorted. Slots created by
    :meth:`new` stay ``None`` until the caller populates them. Issues are held
    by reference, so the same issue may appear in several collections.
    """

    __slots__ = ("_issues",)

    def __init__(self, issues: Iterable[Issue | None] = ()):
        self._issues: list[Issue | None] = list(issues)

    @classmethod
    def new(cls, size: int) -> IssueCollection:
        return cls([None] * size)

    @overload
    def __getitem__(self, index: int) -> Issue | None: ...

    @overload
    def __getitem__(self, index: slice) -> IssueCollection: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return IssueCollection(self._issues[index])
        return self._issues[index]

    def __setitem__(self, index: int, issue: Issue) -> None:
        self._issues[index] = issue

    def __len__(self) -> int:
        return len(self._issues)

    def __iter__(self) -> Iterator[Issue | None]:
        return iter(self._issues)

    def __eq__(self, other) -> bool:
        if not isinstance(other, IssueCollection):
            return NotImplemented
        return len(self) == len(other) and all(a is b for a, b in zip(self, other))

    __hash__ = None

    def __repr__(self) -> str:
        keys = [i.key if i is not None else None for i in self._issues]
        return f"IssueCollection({keys!r})"

    def append(self, issue: Issue) -> None:
        self._issues.append(issue)

    def issues(self) -> list[Issue]:
        """Populated issues, skipping empty slots."""
        return [i for i in self._issues if i is not None]

    def filter_by_function(self, fn: IssuePredicate) -> IssueCollection:
        """Return a new collection with the issues for which ``fn`` is true.

        Relative order is kept and the receiver is left untouched. Every slot,
        empty ones included, is handed to ``fn``.
        """
        out = IssueCollection()
        for issue in self._issues:
            if fn(issue):
                out._issues.append(issue)
        return out

    def story_points(self) -> int:
        return sum(i.story_points for i in self._issues if i is not None and i.has_story_points())

    def keys(self) -> list[str | None]:
        return [i.key for i in self.issues()]

    def to_dataframe(self) -> pd.DataFrame:
        from .mappers import issues_to_dataframe

        return issues_to_dataframe(self.issues())

