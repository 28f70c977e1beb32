"""
Adapters package - External service connections.
Gateway to the generative AI backend.
"""

from adapters.gemini_adapter import AIGateway, GeminiGateway, MODEL_NAME

__all__ = [
    "AIGateway",
    "GeminiGateway",
    "MODEL_NAME",
]
