"""Data models for the document renderer.

This module defines the collection tree and the rendered document models.
All models use dataclasses for clean, type-safe data structures.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union


@dataclass(frozen=True)
class RequestInfo:
    """The HTTP request carried by a leaf node.

    Attributes:
        method: HTTP method (e.g. "GET")
        url: Raw request URL
        description: Request documentation (None when absent)
    """
    method: str
    url: str
    description: Optional[str] = None


@dataclass
class Request:
    """Leaf node of the collection tree.

    Attributes:
        name: Display name, also used as the file name
        request: The request rendered into the document body
        description: Item-level description (not rendered)
    """
    name: str
    request: RequestInfo
    description: Optional[str] = None


@dataclass
class Folder:
    """Container node of the collection tree.

    The collection root is a Folder built from ``info.name`` and
    ``info.description``; sub-folders map to sub-directories.

    Attributes:
        name: Display name, also used as the directory name
        description: Folder documentation (None when absent)
        children: Child nodes in collection order
    """
    name: str
    description: Optional[str] = None
    children: List['CollectionNode'] = field(default_factory=list)


CollectionNode = Union[Folder, Request]


@dataclass(frozen=True)
class RenderedDocument:
    """A Markdown document written by the renderer.

    Attributes:
        path: File the document was written to
        title: Heading text (empty for documents without a heading)
        body: Markdown body below the heading
    """
    path: Path
    title: str
    body: str

    @property
    def content(self) -> str:
        """Full file content: ``# <title>`` heading, blank line, body."""
        if not self.title:
            return self.body
        return f"# {self.title}\n\n{self.body}"
