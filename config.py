import logging
import os

from dotenv import load_dotenv
from rich.logging import RichHandler

load_dotenv()

YOUTUBE_API_KEY: str = os.getenv("YOUTUBE_API_KEY", "")
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")

# Any OpenAI-compatible endpoint, e.g. a local Ollama server at http://localhost:11434/v1
LLM_BASE_URL: str = os.getenv("LLM_BASE_URL", "")
LLM_MODEL: str = os.getenv("LLM_MODEL", "gpt-4o-mini")
LLM_TIMEOUT: float = float(os.getenv("LLM_TIMEOUT", "60"))

MAX_WORKERS: int = int(os.getenv("MAX_WORKERS", "8"))
PORT: int = int(os.getenv("PORT", "5000"))
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


def has_youtube_api() -> bool:
    return bool(YOUTUBE_API_KEY)


def has_llm() -> bool:
    return bool(OPENAI_API_KEY or LLM_BASE_URL)


def validate():
    if not YOUTUBE_API_KEY:
        raise SystemExit("YOUTUBE_API_KEY not set in .env")


def setup_logging(level: str | None = None, console=None):
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )
