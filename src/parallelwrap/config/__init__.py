from .wrapper_config import (
    DEFAULT_CONFIG_PATH,
    OUTPUT_MODES,
    WrapperConfig,
    load_config,
    save_config,
)

__all__ = ["DEFAULT_CONFIG_PATH", "OUTPUT_MODES", "WrapperConfig", "load_config", "save_config"]
