"""Graph module providing the adjacency index used by traversals.

This module contains:
- AdjacencyIndex: ordered child/parent/child-count indexes over named nodes
- topological_sort: Kahn ordering, used by the optional cycle check
"""

from ._adjacency import AdjacencyIndex
from ._algorithms import find_unsorted, topological_sort

__all__ = ["AdjacencyIndex", "find_unsorted", "topological_sort"]
