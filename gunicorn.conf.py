# Gunicorn configuration file for the library admin app
# https://docs.gunicorn.org/en/stable/settings.html

import multiprocessing

wsgi_app = "wsgi:app"

# Server socket
bind = "127.0.0.1:5000"  # Only listen locally (Nginx will proxy)
backlog = 2048

# Worker processes
workers = multiprocessing.cpu_count() * 2 + 1
worker_class = "sync"  # One request per worker at a time
timeout = 60
keepalive = 5
max_requests = 1000  # Restart workers after this many requests
max_requests_jitter = 50

# Server mechanics
daemon = False  # Let systemd manage the daemon
pidfile = "/run/library-admin/gunicorn.pid"
user = "www-data"
group = "www-data"

# Logging
errorlog = "/var/log/library-admin/gunicorn-error.log"
accesslog = "/var/log/library-admin/gunicorn-access.log"
loglevel = "info"
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

# Process naming
proc_name = "library-admin"

# Security
limit_request_line = 4094
limit_request_fields = 100
limit_request_field_size = 8190
