from __future__ import annotations

from typing import List, Optional, Sequence

from .errors import NoAuthorsError


def _split_name(line: str) -> Optional[str]:
    close = line.rfind(">")
    if close == -1:
        return None
    start = line.rfind(" <", 1, close - 1)
    if start == -1:
        return None
    return line[:start]


def parse_git_style_author(author: str) -> Optional[str]:
    """Return the name part of a git-style ``Name <email>`` author, if any.

    The name runs up to the last `` <`` that is followed by a non-empty
    email and a closing ``>``. Neither part spans a line break; the first
    line that looks like an author wins.
    """
    for line in author.split("\n"):
        name = _split_name(line)
        if name is not None:
            return name
    return None


def parse_author_names(authors: Sequence[str]) -> List[str]:
    if not authors:
        raise NoAuthorsError()
    names = []
    for author in authors:
        name = parse_git_style_author(author)
        names.append(author if name is None else name)
    return names
