from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class GenerationParams:
    max_tokens: int = 512
    temperature: float = 0.2
    top_p: float = 0.9


class ModelClient(Protocol):
    async def generate(self, prompt: str, params: GenerationParams) -> str: ...
