from dataclasses import dataclass

from screener.ai.types import GenerationParams
from screener.core.config import Settings, settings


@dataclass(frozen=True)
class ModelConfig:
    provider: str
    model: str
    region: str
    params: GenerationParams


def load_model_config(source: Settings = settings) -> ModelConfig:
    return ModelConfig(
        provider=source.model_provider,
        model=source.bedrock_model_id,
        region=source.bedrock_region,
        params=GenerationParams(
            max_tokens=source.model_max_tokens,
            temperature=source.model_temperature,
            top_p=source.model_top_p,
        ),
    )
