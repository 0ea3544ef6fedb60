import asyncio
from pathlib import Path

from dmv_price_tracker.errors import SourceError


class FileRecordSource:
    def __init__(self, path):
        self.path = Path(path)
        self.name = f"file:{self.path}"

    async def open(self) -> None:
        if not await asyncio.to_thread(self.path.is_file):
            raise SourceError(f"data file not found: {self.path}")

    def _read(self) -> str:
        try:
            return self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise SourceError(f"{self.path} is not UTF-8: {e}") from e
        except OSError as e:
            raise SourceError(f"cannot read {self.path}: {e}") from e

    async def fetch_text(self) -> str:
        return await asyncio.to_thread(self._read)

    async def close(self) -> None:
        return None
