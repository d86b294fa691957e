"""Console access for the todotxt command line."""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=2)
def get_console(highlight: bool = True) -> Console:
    """Shared Rich console."""
    return Console(highlight=highlight)
