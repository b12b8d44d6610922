"""
Local Filesystem Storage Implementation.
Each key is one UTF-8 text file below a base directory.
"""

import logging
import aiofiles
from pathlib import Path
from typing import Optional, List
from .interface import StorageInterface

logger = logging.getLogger(__name__)


class LocalStorage(StorageInterface):
    """
    Local filesystem key/value storage.
    """

    def __init__(self, base_dir: str = "./data"):
        """
        Initialize local storage with a base directory.

        Args:
            base_dir: Base directory for all stored keys
        """
        self.base_dir = Path(base_dir).resolve()
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, key: str) -> Path:
        """Resolve a key to a path inside the base directory."""
        full_path = (self.base_dir / key).resolve()

        if full_path != self.base_dir and self.base_dir not in full_path.parents:
            raise ValueError(f"Invalid key: {key} - path traversal detected")

        return full_path

    async def save(self, key: str, content: str) -> bool:
        try:
            full_path = self._get_full_path(key)
            full_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(full_path, 'w', encoding='utf-8') as f:
                await f.write(content)
            return True
        except (OSError, ValueError) as e:
            logger.error(f"Error saving key {key}: {e}")
            return False

    async def load(self, key: str) -> Optional[str]:
        try:
            full_path = self._get_full_path(key)
            if not full_path.is_file():
                return None
            async with aiofiles.open(full_path, 'r', encoding='utf-8', errors='replace') as f:
                return await f.read()
        except (OSError, ValueError) as e:
            logger.error(f"Error loading key {key}: {e}")
            return None

    async def exists(self, key: str) -> bool:
        try:
            return self._get_full_path(key).is_file()
        except ValueError:
            return False

    async def delete(self, key: str) -> bool:
        try:
            full_path = self._get_full_path(key)
            if full_path.is_file():
                full_path.unlink()
                return True
            return False
        except (OSError, ValueError) as e:
            logger.error(f"Error deleting key {key}: {e}")
            return False

    async def list(self, prefix: str = "") -> List[str]:
        try:
            root = self._get_full_path(prefix) if prefix else self.base_dir
        except ValueError:
            return []
        if not root.is_dir():
            return []
        return sorted(
            str(p.relative_to(self.base_dir)) for p in root.rglob("*") if p.is_file()
        )
