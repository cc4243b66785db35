"""Find which configured repository's index lists a literal chart URL."""

from __future__ import annotations

import logging

from helm_fetcher.errors import NoOwnerRepository
from helm_fetcher.models.repo import RepositoryEntry
from helm_fetcher.repo.index import IndexLoader
from helm_fetcher.repo.registry import RepositoryRegistry
from helm_fetcher.utils.urlutil import urls_equal

logger = logging.getLogger(__name__)


def find_owner(url: str, registry: RepositoryRegistry, load_index: IndexLoader) -> RepositoryEntry:
    """Return the first repository, in registry order, whose index lists ``url``.

    Every index is read in full, so this is only meant for literal-URL
    references. An index that cannot be loaded raises IndexUnavailable;
    a broken cache is never reported as "no owner". When no index lists
    the URL, NoOwnerRepository is raised.
    """
    for entry in registry:
        index = load_index(entry.name)
        for candidate in index.iter_urls():
            if urls_equal(url, candidate):
                logger.debug("Repository %s owns %s", entry.name, url)
                return entry
    raise NoOwnerRepository(url)
