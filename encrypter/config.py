"""
config.py — Encrypter Configuration
======================================
"""

import os


class Settings:
    """Encrypter configuration from environment."""

    # Read per instance, not at import, so the environment can change between builds
    def __init__(self):
        self.CIPHER: str = os.getenv("APP_CIPHER", "AES-256-CBC")
        # Raw text, or "base64:<standard base64>" for binary keys
        self.KEY: str = os.getenv("APP_KEY", "")
