# Gunicorn config: read PORT from environment (avoids shell $PORT expansion issues)
import os

chdir = os.path.dirname(os.path.abspath(__file__))
bind = f"0.0.0.0:{os.environ.get('PORT', '10000')}"
# The rate limiter lives in process memory; more workers means a looser per-client limit
workers = int(os.environ.get("WEB_CONCURRENCY", "1"))
threads = 4
timeout = int(os.environ.get("GUNICORN_TIMEOUT", "60"))
