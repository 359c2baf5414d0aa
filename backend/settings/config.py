# settings/config.py
from pydantic import BaseModel
import os
from pathlib import Path
from dotenv import load_dotenv

# ===== 只加载一次 .env =====
def _load_env() -> None:
    here = Path(__file__).resolve()
    for p in [here.parent, *here.parents]:
        env_path = p / ".env"
        if env_path.exists():
            load_dotenv(env_path, override=False)
            return
    load_dotenv(override=False)


_load_env()


def _env_bool(key: str, default: str = "false") -> bool:
    return os.getenv(key, default).strip().lower() in ("1", "true", "yes", "on")


def _env_int(key: str, default: int = 0) -> int:
    raw = os.getenv(key, "")
    try:
        return int(raw)
    except Exception:
        return default


def _env_float(key: str, default: float = 0.0) -> float:
    raw = os.getenv(key, "")
    try:
        return float(raw)
    except Exception:
        return default


class Settings(BaseModel):
    # ---------- SQLite（本地持久化 KV） ----------
    sqlite_path: str = os.getenv(
        "SQLITE_PATH",
        str((Path(__file__).resolve().parents[1] / "data" / "chat.sqlite3")),
    )

    # ---------- Chat widget ----------
    # 为空则不调用远端问答服务，只走本地规则
    chat_answer_url: str = os.getenv("CHAT_ANSWER_URL", "")
    chat_answer_timeout: float = _env_float("CHAT_ANSWER_TIMEOUT", 10.0)
    chat_last_topic_max: int = _env_int("CHAT_LAST_TOPIC_MAX", 160)
    chat_answer_max_chars: int = _env_int("CHAT_ANSWER_MAX_CHARS", 450)

    # ---------- Logging ----------
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # ---------- Answer service ----------
    answer_use_llm: bool = _env_bool("ANSWER_USE_LLM", "false")

    # ---------- OpenAI ----------
    openai_api_key: str = os.getenv("OPENAI_API_KEY", "")
    openai_api_base: str = os.getenv("OPENAI_API_BASE", "")
    openai_model: str = os.getenv("OPENAI_MODEL", "")

    # ---------- API ----------
    cors_allow_origins: str = os.getenv("CORS_ALLOW_ORIGINS", "")
