from typing import Literal, Protocol


Category = Literal["experience", "project", "summary"]


class AIClient(Protocol):
    async def complete(self, prompt: str) -> str: ...
