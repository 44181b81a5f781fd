import os

bind = f"0.0.0.0:{os.getenv('PORT', '3000')}"
worker_class = "uvicorn.workers.UvicornWorker"
workers = int(os.getenv("WEB_CONCURRENCY", "2"))

# a full brew (script + storyboard with retries) can take a few minutes
timeout = int(os.getenv("GUNICORN_TIMEOUT", "300"))
graceful_timeout = 60
keepalive = 75

# recycle workers to cap memory growth
max_requests = int(os.getenv("MAX_REQUESTS", "1000"))
max_requests_jitter = int(os.getenv("MAX_REQUESTS_JITTER", "100"))

# stdout/stderr
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()
