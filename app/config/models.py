"""LLM model configuration for the Sensei, Fuel and Vision assistants."""

# Camp plans and coach chat (free text)
SENSEI_MODEL = "gpt-5.1"

# Single structured training session
SENSEI_PLAN_MODEL = "gpt-5.1"

# Nutrition analysis (text and photo)
FUEL_MODEL = "gpt-5.1"

# Technique frame analysis
VISION_MODEL = "gpt-4.1-mini"

LLM_PROVIDER = "openai"
