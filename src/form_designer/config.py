"""Configuration loader for the form designer with .env support"""

import os
from pathlib import Path

from dotenv import load_dotenv

project_dir = Path(__file__).parent.parent.parent
env_path = project_dir / ".env"

# Load .env file if it exists. For local development only.
if env_path.exists():
    load_dotenv(env_path)

# Configuration dictionary - set once at initialization
config = {
    "log_level": os.getenv("LOG_LEVEL", "INFO"),
    # One of: memory, redis, database
    "storage_backend": os.getenv("STORAGE_BACKEND", "memory"),
    "storage_key": os.getenv("STORAGE_KEY", "formBuilderData"),
    "redis_url": os.getenv("REDIS_URL", "redis://localhost:6379/0"),
    "database_url": os.getenv("DATABASE_URL", "sqlite:///form_designer.db"),
    "commit_quiet_period_ms": int(os.getenv("COMMIT_QUIET_PERIOD_MS", "1000")),
    "export_filename": os.getenv("EXPORT_FILENAME", "form-definition.json"),
    "port": int(os.getenv("PORT", "8000")),
}
