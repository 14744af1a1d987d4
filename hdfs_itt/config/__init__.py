from .env import Env as Env
from .itt_config import ITTConfig as ITTConfig
from .load_env import load_env as load_env
