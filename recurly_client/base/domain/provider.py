# (c) Nelen & Schuurmans

__all__ = ["Provider", "SyncProvider"]


class Provider:
    """A connection to an external system; use as async context manager"""

    async def connect(self) -> None:
        pass

    async def disconnect(self) -> None:
        pass

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, *args) -> None:
        await self.disconnect()


class SyncProvider:
    def connect(self) -> None:
        pass

    def disconnect(self) -> None:
        pass

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, *args) -> None:
        self.disconnect()
