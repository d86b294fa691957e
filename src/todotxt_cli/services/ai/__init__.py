"""AI assisted task entry through OpenRouter."""
