"""Read-only lookup of the bundled front end files."""
import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_ROOT = Path(__file__).resolve().parent.parent.parent / "static"
INDEX = "index.html"


@dataclass(frozen=True)
class StaticAsset:
    path: str
    content: bytes
    media_type: str


class StaticBundle:
    """Maps request paths to files under ``root``; nothing outside it is reachable."""

    def __init__(self, root: Union[str, Path] = DEFAULT_ROOT):
        self.root = Path(root).resolve()
        if not self.root.is_dir():
            logger.warning(f"⚠️ Static directory {self.root} does not exist")

    def get(self, request_path: str) -> Optional[StaticAsset]:
        relative = request_path.lstrip("/")
        if relative == "" or relative.endswith("/"):
            relative += INDEX

        candidate = (self.root / relative).resolve()
        if not candidate.is_relative_to(self.root) or not candidate.is_file():
            return None

        media_type = mimetypes.guess_type(candidate.name)[0] or "application/octet-stream"
        return StaticAsset(path=relative, content=candidate.read_bytes(), media_type=media_type)

    def index(self) -> Optional[StaticAsset]:
        return self.get("/" + INDEX)
