"""WSGI entry point: `gunicorn -c gunicorn.conf.py wsgi:app` or `flask --app wsgi run`."""
import os

from config import config
from library_admin import create_app

app = create_app(config[os.environ.get('FLASK_ENV', 'default')])
