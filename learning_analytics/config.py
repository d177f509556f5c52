from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from google import genai

GENERATION_MODEL = os.getenv("GENERATION_MODEL", "gemini-2.5-flash")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DEFAULT_MATERIAL_LIMIT = int(os.getenv("DEFAULT_MATERIAL_LIMIT", "5"))

API_KEY = os.getenv("GOOGLE_API_KEY")

_DEFAULT_KNOWLEDGE_BASE = (
    Path(__file__).resolve().parent.parent
    / "_data"
    / "knowledge_base"
    / "knowledge_base.json"
)
KNOWLEDGE_BASE_PATH = Path(os.getenv("KNOWLEDGE_BASE_PATH", str(_DEFAULT_KNOWLEDGE_BASE)))

_genai_client: Optional[genai.Client] = None


def get_genai_client() -> genai.Client:
    global _genai_client
    if _genai_client is None:
        if not API_KEY:
            raise RuntimeError("GOOGLE_API_KEY is missing!")
        _genai_client = genai.Client(api_key=API_KEY)
    return _genai_client
