# config/settings.py
import environ
from pathlib import Path

# Build paths
BASE_DIR = Path(__file__).resolve().parent.parent

# Initialize environ
env = environ.Env(
    DISCOGS_USER_AGENT=(str, "DiscogsClient/0.1 +https://github.com/soultrust"),
    DISCOGS_CONSUMER_KEY=(str, ""),
    DISCOGS_CONSUMER_SECRET=(str, ""),
    DISCOGS_API_BASE_URL=(str, "https://api.discogs.com"),
    DISCOGS_REQUEST_TIMEOUT=(float, 20.0),
    DISCOGS_LOG_LEVEL=(str, "INFO"),
    DISCOGS_ONLINE_TESTS=(bool, False),
)
# Load environment variables from .env file
environ.Env.read_env(BASE_DIR / '.env')

# SECRET_KEY is required by Django, but the client never signs anything with it
SECRET_KEY = env('SECRET_KEY', default='dummy-key-for-tests-only')

INSTALLED_APPS = [
    'discogs.apps.DiscogsConfig',
]

# Discogs API
DISCOGS_USER_AGENT = env("DISCOGS_USER_AGENT")
DISCOGS_CONSUMER_KEY = env("DISCOGS_CONSUMER_KEY")
DISCOGS_CONSUMER_SECRET = env("DISCOGS_CONSUMER_SECRET")
DISCOGS_API_BASE_URL = env("DISCOGS_API_BASE_URL")
DISCOGS_REQUEST_TIMEOUT = env("DISCOGS_REQUEST_TIMEOUT")

# Online tests hit api.discogs.com; keep them off unless asked for
DISCOGS_ONLINE_TESTS = env("DISCOGS_ONLINE_TESTS")

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'discogs': {
            'handlers': ['console'],
            'level': env("DISCOGS_LOG_LEVEL"),
            'propagate': False,
        },
    },
}
