import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

SERVICE_ROOT = Path(__file__).resolve().parents[2]  # medication_reminder_service/

def load_env(env_file: Optional[str] = None) -> Path:
    """Load config.env (or $REMINDER_ENV_FILE); real environment variables win."""
    env_path = Path(env_file or os.getenv("REMINDER_ENV_FILE") or SERVICE_ROOT / "config.env")
    load_dotenv(dotenv_path=env_path, override=False)
    return env_path
