from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict

from omegaconf import OmegaConf

logger = logging.getLogger(__name__)

# secrets file key -> environment variable read by the provider SDKs
API_KEY_ENV = {
    "openai_api": "OPENAI_API_KEY",
    "deepseek_api": "DEEPSEEK_API_KEY",
    "gemini_api": "GOOGLE_API_KEY",
    "anthropic_api": "ANTHROPIC_API_KEY",
    "mistral_api": "MISTRAL_API_KEY",
    "azure_api": "AZURE_OPENAI_API_KEY",
}


def load_api_keys(path: str | Path = "config.yml") -> Dict[str, str]:
    """Export provider API keys from a local secrets file.

    Variables already present in the environment win. Returns the mapping of
    variables that were set by this call.
    """
    path = Path(path)
    if not path.exists():
        logger.debug("No secrets file at %s", path)
        return {}

    config = OmegaConf.load(path)
    exported: Dict[str, str] = {}
    for key, env_name in API_KEY_ENV.items():
        value = config.get(key)
        if value and not os.environ.get(env_name):
            os.environ[env_name] = str(value)
            exported[env_name] = str(value)
    if exported:
        logger.info("Loaded API keys from %s: %s", path, ", ".join(sorted(exported)))
    return exported
