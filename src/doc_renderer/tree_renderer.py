"""Recursive rendering of a collection tree into Markdown files.

This module mirrors the Folder/Request tree of a collection as a directory
tree. Every request becomes one Markdown file, every folder carrying a
description gets one as well, and folders map to sub-directories.

Layout for a collection "API" with a folder "Users":
    API/
      API.md               # Collection description (if any)
      Ping.md              # Top-level request
      Users/
        Users.md           # Folder description (if any)
        Create user.md
"""

import logging
from pathlib import Path
from typing import List

from .errors import FilesystemError, PathConflictError
from .models import CollectionNode, Folder, RenderedDocument, Request
from .sanitizer import markdown_filename, sanitize
from .text_normalizer import unescape

logger = logging.getLogger(__name__)


def ensure_directory(path: Path) -> Path:
    """Create a directory (and parents) unless it already exists.

    Args:
        path: Directory to create

    Returns:
        The same path

    Raises:
        PathConflictError: If the path exists as a plain file
        FilesystemError: If the directory cannot be created
    """
    if path.exists():
        if not path.is_dir():
            raise PathConflictError(str(path))
        return path

    try:
        path.mkdir(parents=True, exist_ok=True)
    except FileExistsError:
        raise PathConflictError(str(path))
    except OSError as e:
        raise FilesystemError(str(path), 'create_directory', str(e))
    return path


class TreeRenderer:
    """Writes the documentation files of a collection tree.

    Example:
        >>> renderer = TreeRenderer()
        >>> documents = renderer.render(root, ensure_directory(Path("docs/API")))
        >>> print(f"Wrote {len(documents)} file(s)")
    """

    def render(self, node: CollectionNode, directory: Path) -> List[RenderedDocument]:
        """Render a node into a directory.

        Args:
            node: Folder or Request to render
            directory: Existing directory the node's files go into

        Returns:
            Documents written, in tree order

        Raises:
            PathConflictError: If a sub-directory path is a plain file
            FilesystemError: If a file cannot be written
        """
        documents: List[RenderedDocument] = []
        self._render_node(node, directory, documents)
        return documents

    def _render_node(
        self,
        node: CollectionNode,
        directory: Path,
        documents: List[RenderedDocument]
    ) -> None:
        if isinstance(node, Request):
            documents.append(self._render_request(node, directory))
            return

        if isinstance(node, Folder):
            if node.description:
                documents.append(self._write(
                    directory / markdown_filename(node.name),
                    node.name,
                    unescape(node.description),
                ))

            for child in node.children:
                if isinstance(child, Folder):
                    child_dir = ensure_directory(directory / sanitize(child.name))
                    self._render_node(child, child_dir, documents)
                else:
                    self._render_node(child, directory, documents)
            return

        raise TypeError(f"Unsupported collection node: {type(node).__name__}")

    def _render_request(self, node: Request, directory: Path) -> RenderedDocument:
        request = node.request
        heading = f"### `{request.method}` {request.url}"
        description = unescape(request.description or '')
        return self._write(
            directory / markdown_filename(node.name),
            node.name,
            f"{heading}\n\n{description}",
        )

    def _write(self, path: Path, title: str, body: str) -> RenderedDocument:
        document = RenderedDocument(path=path, title=title, body=body)
        try:
            # newline='' keeps "\n" as is on every platform
            with open(path, 'w', encoding='utf-8', newline='') as f:
                f.write(document.content)
        except IsADirectoryError:
            raise PathConflictError(str(path))
        except OSError as e:
            raise FilesystemError(str(path), 'write', str(e))

        logger.debug(f"Wrote {path}")
        return document
