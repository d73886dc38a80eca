"""
Naming helpers used to turn class and controller names into provider keys.
"""
import re

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
_SEPARATORS = re.compile(r"::|[/.]")


def underscore(word: str) -> str:
    """
    Convert a CamelCase word to snake_case.

    >>> underscore("BlogPost")
    'blog_post'
    >>> underscore("HTMLPage")
    'html_page'
    """
    word = _ACRONYM_BOUNDARY.sub(r"\1_\2", word)
    word = _WORD_BOUNDARY.sub(r"\1_\2", word)
    return word.replace("-", "_").lower()


def strip_suffix(word: str, suffix: str) -> str:
    """Drop ``suffix`` (and a joining underscore) from the end of ``word``."""
    if word.endswith(suffix) and word != suffix:
        word = word[: -len(suffix)]
        return word.rstrip("_")
    return word


def split_path(name: str) -> list[str]:
    """
    Split a namespaced name on ``/``, ``.`` or ``::`` into snake_case segments.

    Empty segments are dropped, so ``"/admin//articles"`` yields
    ``["admin", "articles"]``.
    """
    return [underscore(part.strip()) for part in _SEPARATORS.split(name) if part.strip()]
