"""Read-only access to the repository registry and cached indexes."""

from helm_fetcher.repo.index import CachedIndexLoader, IndexLoader, RepositoryIndex, load_index
from helm_fetcher.repo.registry import RepositoryRegistry, load_registry

__all__ = [
    "CachedIndexLoader",
    "IndexLoader",
    "RepositoryIndex",
    "RepositoryRegistry",
    "load_index",
    "load_registry",
]
