from .config import *  # noqa: F401,F403

TESTING = True
LOG_LEVEL = "WARNING"
AUTO_INIT_DB = False
POLICY_WORKER_COUNT = 2
