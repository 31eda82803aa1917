r"""Discover the Markdown documents that make up the site.

A :class:`ContentTree` is the set of root-relative document paths the build
will render, after ``exclude`` globs from the site configuration have been
applied. The link checker asks the tree whether a navigation target or an
in-document link resolves; the generator iterates its documents.

Example
-------
>>> from webaudio_pages.content import ContentTree
>>> tree = ContentTree(["/basics/intro.md", "index.md"])
>>> tree.resolve("/basics/intro")
'basics/intro.md'
>>> tree.resolve("/")
'index.md'
>>> tree.resolve("/missing.md") is None
True
"""

from __future__ import annotations

import dataclasses as dc
import fnmatch
import re
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ._constants import CONTENT_SUFFIX
from .paths import document_candidates, normalize_document_path

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

FRONT_MATTER_PATTERN = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)
HEADING_PATTERN = re.compile(r"^#[ \t]+(.+?)[ \t#]*$", re.MULTILINE)
FENCED_BLOCK_PATTERN = re.compile(
    r"^[ \t]*(`{3,}|~{3,}).*?^[ \t]*\1[ \t]*$", re.MULTILINE | re.DOTALL
)


@dc.dataclass(frozen=True, slots=True)
class Document:
    """A Markdown document loaded from the content tree.

    Attributes
    ----------
    path : str
        Root-relative posix path, for example ``introduction/general-principles.md``.
    front_matter : dict[str, Any]
        Parsed YAML front matter; empty when the document has none.
    body : str
        Markdown following the front matter block.
    """

    path: str
    front_matter: dict[str, typ.Any]
    body: str

    @property
    def directory(self) -> str:
        """Root-relative directory that relative links resolve against."""
        head, _, _ = self.path.rpartition("/")
        return head

    @property
    def title(self) -> str | None:
        """Title from front matter, falling back to the first level-one heading."""
        title = self.front_matter.get("title")
        if isinstance(title, str) and title.strip():
            return title.strip()
        prose = FENCED_BLOCK_PATTERN.sub("", self.body)
        match = HEADING_PATTERN.search(prose)
        if match:
            return match.group(1).strip()
        return None


def split_front_matter(text: str) -> tuple[dict[str, typ.Any], str]:
    """Return the parsed front matter mapping and the remaining Markdown body.

    Raises
    ------
    ValueError
        If the front matter block is not valid YAML or not a mapping.
    """
    match = FRONT_MATTER_PATTERN.match(text)
    if not match:
        return {}, text
    loader = YAML(typ="safe")
    try:
        loaded = loader.load(match.group(1)) or {}
    except YAMLError as exc:
        msg = f"Invalid front matter: {exc}"
        raise ValueError(msg) from exc
    if not isinstance(loaded, dict):
        msg = "Front matter must be a mapping."
        raise ValueError(msg)
    return dict(loaded), text[match.end() :]


def is_excluded(path: str, patterns: cabc.Iterable[str]) -> bool:
    """Return ``True`` when ``path`` matches one of the exclusion globs.

    A leading ``**/`` also matches documents at the content root, so
    ``**/README.md`` excludes ``README.md`` as well as ``guide/README.md``.
    """
    for pattern in patterns:
        if fnmatch.fnmatchcase(path, pattern):
            return True
        if pattern.startswith("**/") and fnmatch.fnmatchcase(path, pattern[3:]):
            return True
    return False


class ContentTree:
    """Set of document paths available to a site build."""

    def __init__(
        self, paths: cabc.Iterable[str], *, root: Path | None = None
    ) -> None:
        """Build a tree from root-relative document paths.

        Parameters
        ----------
        paths : Iterable[str]
            Document paths; a leading ``/`` is optional.
        root : Path, optional
            Source directory the paths live under. Required for :meth:`load`.
        """
        self.root = root
        self._paths = sorted({normalize_document_path(path) for path in paths} - {""})
        self._lookup = frozenset(self._paths)

    @classmethod
    def from_directory(
        cls, root: Path, *, excluded: cabc.Iterable[str] = ()
    ) -> ContentTree:
        """Scan ``root`` for Markdown documents, skipping excluded globs.

        Raises
        ------
        FileNotFoundError
            If ``root`` is not an existing directory.
        """
        if not root.is_dir():
            msg = f"Content directory '{root}' not found."
            raise FileNotFoundError(msg)
        patterns = tuple(excluded)
        paths = [
            relative
            for relative in (
                path.relative_to(root).as_posix()
                for path in root.rglob(f"*{CONTENT_SUFFIX}")
                if path.is_file()
            )
            if not is_excluded(relative, patterns)
        ]
        return cls(paths, root=root)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and normalize_document_path(path) in self._lookup

    def __iter__(self) -> cabc.Iterator[str]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def resolve(self, target: str, *, relative_to: str = "") -> str | None:
        """Return the document an internal link target points at, or None."""
        for candidate in document_candidates(target, relative_to):
            if candidate in self._lookup:
                return candidate
        return None

    def load(self, path: str) -> Document:
        """Read a document from disk and split off its front matter."""
        if self.root is None:
            msg = "Content tree has no root directory to load documents from."
            raise RuntimeError(msg)
        text = (self.root / path).read_text(encoding="utf-8")
        try:
            front_matter, body = split_front_matter(text)
        except ValueError as exc:
            msg = f"{path}: {exc}"
            raise ValueError(msg) from exc
        return Document(path=path, front_matter=front_matter, body=body)


__all__ = ["ContentTree", "Document", "is_excluded", "split_front_matter"]
