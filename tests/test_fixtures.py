"""
Shared test fixtures and utilities for the Meal AI Service test suite.

Provides a fake AI gateway, a settings builder that never reads .env, and a
TestClient builder wired to the fake gateway so no test reaches Gemini.
"""

import base64
import json

from fastapi.testclient import TestClient

from app.config import Settings
from main import create_app

# Smallest byte sequence that still starts like a JPEG
FAKE_JPEG = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00fake-meal-photo"
FAKE_JPEG_BASE64 = base64.b64encode(FAKE_JPEG).decode("ascii")

CHICKEN_SALAD_REPLY = {
    "calories": 350,
    "protein": 40,
    "carbs": 10,
    "fats": 15,
    "description": "Grilled Chicken Salad",
}


class FakeGateway:
    """
    Stand-in for GeminiGateway.

    Records every prompt it receives and either returns ``reply`` or raises
    ``error``.
    """

    def __init__(self, reply=None, error=None):
        if isinstance(reply, dict):
            reply = json.dumps(reply)
        self.reply = reply
        self.error = error
        self.prompts = []

    async def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


def make_settings(**overrides) -> Settings:
    """Settings for tests: fixed API key, testing environment, no .env file."""
    values = {"gemini_api_key": "test-key", "environment": "testing"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_client(reply=None, error=None, **overrides):
    """
    Build a TestClient around a fresh app and fake gateway.

    Returns:
        (TestClient, FakeGateway)
    """
    gateway = FakeGateway(reply=reply, error=error)
    app = create_app(make_settings(**overrides), gateway=gateway)
    return TestClient(app), gateway
