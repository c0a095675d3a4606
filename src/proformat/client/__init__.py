"""Components for talking to the generation service"""  # noqa: D415

from .adapters import GenerationAdapter, GoogleGenAIAdapter, MockAdapter
from .error_handler import GenerationErrorHandler
from .generation import GenerationClient, create_client
from .prompt_builder import PromptBuilder

__all__ = [  # noqa: RUF022
    "GenerationClient",
    "create_client",
    "PromptBuilder",
    "GenerationErrorHandler",
    # Adapters
    "GenerationAdapter",
    "GoogleGenAIAdapter",
    "MockAdapter",
]
