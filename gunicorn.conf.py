"""Gunicorn config for container deployment."""
import os

# Bind to the platform's PORT or default 8000
bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Uvicorn async workers. Uploaded datasets live in process memory, so a second
# worker would not see files uploaded to the first: keep this at 1.
worker_class = "uvicorn.workers.UvicornWorker"
workers = 1

# Large uploads are parsed inside the request
timeout = 120

# Graceful timeout for shutdown
graceful_timeout = 30

# Keep-alive — must exceed the proxy keep-alive (commonly 60s)
keepalive = 65

# Logging
accesslog = "-"
errorlog = "-"
loglevel = "info"
