import logging
from pathlib import Path
from typing import Optional, Union

from clientforge.errors import AccessDeniedError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class PathGuard:
    """
    Turns user supplied paths into absolute ones.

    When a sandbox root is given, every resolved path must stay inside it;
    anything escaping the root (``..`` segments, symlinks, absolute paths
    elsewhere) raises AccessDeniedError.
    """

    def __init__(self, sandbox_root: Optional[PathLike] = None):
        self.sandbox_root = Path(sandbox_root).resolve() if sandbox_root else None

    @property
    def is_sandboxed(self) -> bool:
        return self.sandbox_root is not None

    def resolve(self, path: PathLike) -> Path:
        resolved = Path(path).expanduser().resolve()
        if self.sandbox_root is not None and not resolved.is_relative_to(self.sandbox_root):
            logger.error(f"Rejected path outside of sandbox: {resolved}")
            raise AccessDeniedError(resolved, self.sandbox_root)
        return resolved
