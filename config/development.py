from .config import *  # noqa: F401,F403

LOG_LEVEL = "DEBUG"

# Áp dụng schema.sql khi chạy batch (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = True
