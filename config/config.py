"""Cấu hình dùng chung cho mọi môi trường (đọc từ biến môi trường / .env)."""
import os


def _env_bool(name: str, default: str) -> bool:
    return bool(int(os.environ.get(name, default)))


def _env_days(name: str, default: str) -> tuple[int, ...]:
    raw = os.environ.get(name, default)
    return tuple(int(part) for part in raw.split(",") if part.strip())


# Cấu hình DB
DB_CONFIG = {
    "host": os.environ.get("DB_HOST", "localhost"),
    "port": int(os.environ.get("DB_PORT", "3306")),
    "user": os.environ.get("DB_USER", "root"),
    "password": os.environ.get("DB_PASSWORD", ""),
    "database": os.environ.get("DB_NAME", "attendance_engine"),
}

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

# Chính sách chấm công / tính lương
POLICY_TOLERANCE_MINUTES = int(os.environ.get("POLICY_TOLERANCE_MINUTES", "20"))
POLICY_APPLY_ALLOWANCE = _env_bool("POLICY_APPLY_ALLOWANCE", "1")
POLICY_START_ALLOWANCE_MINUTES = int(os.environ.get("POLICY_START_ALLOWANCE_MINUTES", "30"))
POLICY_END_ALLOWANCE_MINUTES = int(os.environ.get("POLICY_END_ALLOWANCE_MINUTES", "30"))
POLICY_REGULAR_HOURS_CAP = int(os.environ.get("POLICY_REGULAR_HOURS_CAP", "8"))
POLICY_OVERTIME_MULTIPLIER = float(os.environ.get("POLICY_OVERTIME_MULTIPLIER", "1.5"))
POLICY_DAYS_IN_MONTH_DIVISOR = int(os.environ.get("POLICY_DAYS_IN_MONTH_DIVISOR", "31"))
POLICY_WEEKEND_DAYS = _env_days("POLICY_WEEKEND_DAYS", "5,6")
POLICY_WORKER_COUNT = int(os.environ.get("POLICY_WORKER_COUNT", "4"))

AUTO_INIT_DB = _env_bool("AUTO_INIT_DB", "0")
