from .settings import BuildConfig
from .loader import load_build_config, build_config_from_mapping

__all__ = ["BuildConfig", "load_build_config", "build_config_from_mapping"]
