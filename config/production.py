from .config import *  # noqa: F401,F403

AUTO_INIT_DB = False
