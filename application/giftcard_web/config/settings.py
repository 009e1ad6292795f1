import os
from dotenv import load_dotenv
load_dotenv()

class GiftCardWebConfigs:
    def __init__(self):

        # Environment settings
        self.DEBUG = os.getenv("DEBUG", "true").lower() == "true"
        self.APPLICATION_ENVIRONMENT = os.getenv("APPLICATION_ENVIRONMENT", "UAT")
        self.APP_NAME = os.getenv('APP_NAME', 'gift-card-web')
        self.APP_VERSION = os.getenv('APP_VERSION', '1.0.0')

        # Gift card API settings
        self.GIFT_CARD_API_BASE_URL = os.getenv("GIFT_CARD_API_BASE_URL", "http://localhost:8080").rstrip("/")
        # Empty means no timeout: a hung API call blocks only that request
        api_timeout = os.getenv("GIFT_CARD_API_TIMEOUT", "").strip()
        self.GIFT_CARD_API_TIMEOUT = float(api_timeout) if api_timeout else None

        # Search settings
        self.SEARCH_PAGE_SIZE = int(os.getenv("SEARCH_PAGE_SIZE", "10"))

        # Sentry settings
        self.SENTRY_ENABLED = os.getenv("SENTRY_ENABLED", "false").lower() == "true"
        self.SENTRY_DSN = os.getenv("SENTRY_DSN", "")
        self.ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
        self.SENTRY_RELEASE = os.getenv("SENTRY_RELEASE", "gift-card-web@1.0.0")
        self.SENTRY_TRACES_SAMPLE_RATE = os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.1")
        self.SENTRY_PROFILES_SAMPLE_RATE = os.getenv("SENTRY_PROFILES_SAMPLE_RATE", "0.1")

        # Logging settings
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.LOG_TO_FILE = os.getenv("LOG_TO_FILE", "false").lower() == "true"
        self.LOG_DIR = os.getenv("LOG_DIR", "logs")
        self.AUDIT_LOGGING_ENABLED = os.getenv("AUDIT_LOGGING_ENABLED", "false").lower() == "true"
