"""
Catalog lookup boundary.

The review service only needs to turn a problem URL into a stable slug
and fetch the problem's metadata once, when the problem is added.
"""

from __future__ import annotations

from typing import Protocol

from revisit.schemas import ProblemMetadata


class ProblemCatalog(Protocol):
    def slug_for(self, url: str) -> str:
        """Extract the catalog identifier from a problem URL.

        Raises ValueError for URLs that do not point at a problem.
        """
        ...

    def fetch(self, slug: str) -> ProblemMetadata:
        ...
