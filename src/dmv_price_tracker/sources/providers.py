from typing import Protocol


class RecordSource(Protocol):
    name: str

    async def open(self) -> None: ...

    async def fetch_text(self) -> str: ...

    async def close(self) -> None: ...
