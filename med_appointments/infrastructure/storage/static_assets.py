import logging
import os
import posixpath
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from starlette.concurrency import run_in_threadpool

from ...exceptions import AssetNotFoundError, PathTraversalError

logger = logging.getLogger(__name__)

CONTENT_TYPES = {
    ".html": "text/html; charset=utf-8",
    ".js": "application/javascript; charset=utf-8",
    ".css": "text/css; charset=utf-8",
    ".json": "application/json; charset=utf-8",
    ".txt": "text/plain; charset=utf-8",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
    ".webp": "image/webp",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def content_type_for(path: Union[str, Path]) -> str:
    return CONTENT_TYPES.get(os.path.splitext(str(path))[1].lower(), DEFAULT_CONTENT_TYPE)


@dataclass
class StaticAsset:
    path: Path
    content: bytes
    content_type: str


class StaticAssetResolver:
    """Maps URL paths to files under a fixed front-end root."""

    def __init__(self, root: Union[str, Path], index_document: str = "index.html") -> None:
        self.root = Path(os.path.abspath(root))
        self.index_document = index_document

    def resolve(self, url_path: str) -> Path:
        """Return the absolute file path for ``url_path`` without touching the disk.

        Raises PathTraversalError if the path lexically escapes the root.
        """
        relative = posixpath.normpath(url_path.replace("\\", "/").lstrip("/"))
        if relative in ("", "."):
            return self.root / self.index_document

        target = os.path.abspath(os.path.join(self.root, relative))
        if os.path.commonpath([str(self.root), target]) != str(self.root):
            logger.warning(f"Blocked path traversal attempt: {url_path!r}")
            raise PathTraversalError(url_path)
        return Path(target)

    async def load(self, url_path: str) -> StaticAsset:
        target = self.resolve(url_path)
        return await run_in_threadpool(self._read, target)

    def _read(self, target: Path) -> StaticAsset:
        try:
            if target.is_dir():
                target = target / self.index_document
            content = target.read_bytes()
        except (OSError, ValueError) as e:
            raise AssetNotFoundError(str(target)) from e
        return StaticAsset(path=target, content=content, content_type=content_type_for(target))
