"""Secrets, read once from the environment at import time."""

import os

GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY", "")
