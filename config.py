"""
Global config facade: delegates to app.core.settings for module-level constants.
Prefer importing get_settings() or Settings from app.core in new code.
"""
from pathlib import Path

from app.core.settings import get_settings

_s = get_settings()

# Paths
BASE_DIR: Path = _s.base_dir
DATABASE_DIR: Path = _s.database_dir
CHATS_DATA_DIR: Path = _s.chats_data_dir

# Groq
GROQ_MODEL: str = _s.groq_model
ASSISTANT_NAME: str = _s.assistant_name
GROQ_API_KEYS: list = _s.groq_api_keys

# Ops
RATE_LIMIT_CHAT: str = _s.rate_limit_chat
LOG_FILE: str = _s.log_file

# MySQL
MYSQL_HOST: str = _s.mysql_host
MYSQL_PORT: int = _s.mysql_port
MYSQL_USER: str = _s.mysql_user
MYSQL_PASSWORD: str = _s.mysql_password
MYSQL_DATABASE: str = _s.mysql_database
