# gunicorn.conf.py: Production server configuration.
#
# Run from backend/ with:
#   gunicorn api.main:app -c gunicorn.conf.py

# Live result subscribers are held in process memory (core/broadcast.py), so a
# write handled by one worker only reaches clients connected to that worker.
# Keep a single worker until the channel is backed by a shared pub/sub.
workers = 1
worker_class = "uvicorn.workers.UvicornWorker"

# Bind
bind = "0.0.0.0:8000"

# Logging: write to stdout/stderr so the process manager (systemd, Docker, etc.)
# captures everything; structured JSON is handled by core/logging.py
accesslog = "-"
errorlog  = "-"
loglevel  = "info"

# Timeouts
timeout          = 120   # seconds before a worker is killed and restarted
keepalive        = 5     # seconds to wait for the next request on a keep-alive connection
graceful_timeout = 30    # seconds to finish in-flight requests and close live sockets on SIGTERM
