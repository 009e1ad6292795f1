"""
Logging configuration for the gift card web layer.
Stream output by default, per-module JSON files when LOG_TO_FILE is set.
"""
import logging

# Settings
from giftcard_web.config.settings import GiftCardWebConfigs
configs = GiftCardWebConfigs()

class LoggingConfig:
    """Logging switches resolved once from the environment"""

    LOG_LEVEL = configs.LOG_LEVEL
    LOG_TO_FILE = configs.LOG_TO_FILE
    LOG_DIR = configs.LOG_DIR
    AUDIT_LOGGING_ENABLED = configs.AUDIT_LOGGING_ENABLED

    @classmethod
    def level(cls) -> int:
        level = logging.getLevelName(cls.LOG_LEVEL)
        return level if isinstance(level, int) else logging.INFO

    @classmethod
    def is_valid_config(cls):
        """Validate configuration - only the level name can be wrong"""
        if not isinstance(logging.getLevelName(cls.LOG_LEVEL), int):
            return False, f"Unknown LOG_LEVEL '{cls.LOG_LEVEL}', falling back to INFO"
        return True, "Configuration is valid"
