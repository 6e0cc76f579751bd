from screener.ai.config import ModelConfig, load_model_config
from screener.ai.types import ModelClient

from screener.ai.providers.bedrock_provider import BedrockTitanProvider
from screener.ai.providers.openai_provider import from_env as openai_from_env


def get_model_client(cfg: ModelConfig | None = None) -> ModelClient:
    cfg = cfg or load_model_config()

    if cfg.provider == "bedrock":
        return BedrockTitanProvider.from_region(model_id=cfg.model, region=cfg.region)

    if cfg.provider == "openai":
        return openai_from_env()

    raise ValueError(f"Unsupported MODEL_PROVIDER='{cfg.provider}'")
