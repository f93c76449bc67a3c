"""Model lookup shared by the Sensei, Fuel and Vision agents."""

import os

from pydantic_ai.models import Model
from pydantic_ai.models.openai import OpenAIModel

from app.config.settings import settings


def get_model(provider: str, model_name: str) -> Model:
    """Return the pydantic_ai model for ``provider``/``model_name``.

    The OpenAI client reads its key from the environment, so the configured
    key is exported there first.

    Raises:
        ValueError: If the provider is not supported
    """
    if provider != "openai":
        raise ValueError(f"Unsupported LLM provider: {provider}")

    if settings.openai_api_key and not os.getenv("OPENAI_API_KEY"):
        os.environ["OPENAI_API_KEY"] = settings.openai_api_key
    return OpenAIModel(model_name)
