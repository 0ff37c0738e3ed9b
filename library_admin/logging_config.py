"""Logging configuration for the library admin application."""

import os
import logging
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler


# Request fields that must never reach a log file
SENSITIVE_FIELDS = frozenset({'password', 'password_confirmation', 'csrf_token'})


class LogConfig:
    APP_LOG_FILE = 'app.log'
    ERROR_LOG_FILE = 'error.log'
    AUDIT_LOG_FILE = 'audit.log'

    LOG_LEVELS = {
        'development': logging.DEBUG,
        'testing': logging.INFO,
        'production': logging.INFO,
    }

    MAX_BYTES = 10 * 1024 * 1024
    BACKUP_COUNT = 10

    DETAILED_FORMAT = (
        '%(asctime)s - %(name)s - %(levelname)s - '
        '[%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s'
    )
    SIMPLE_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
    AUDIT_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

    @classmethod
    def get_log_level(cls, env='development'):
        return cls.LOG_LEVELS.get(env, logging.INFO)


def setup_logging(app):
    env = app.config.get('ENV', 'development')
    log_level = LogConfig.get_log_level(env)

    log_dir = app.config.get('LOG_DIR') or os.path.join(app.root_path, '..', 'logs')
    os.makedirs(log_dir, exist_ok=True)

    app.logger.handlers.clear()
    app.logger.setLevel(log_level)

    if env == 'development':
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(logging.Formatter(LogConfig.SIMPLE_FORMAT))
        app.logger.addHandler(console_handler)

    app_handler = RotatingFileHandler(
        os.path.join(log_dir, LogConfig.APP_LOG_FILE),
        maxBytes=LogConfig.MAX_BYTES,
        backupCount=LogConfig.BACKUP_COUNT
    )
    app_handler.setLevel(log_level)
    app_handler.setFormatter(logging.Formatter(LogConfig.DETAILED_FORMAT))
    app.logger.addHandler(app_handler)

    error_handler = RotatingFileHandler(
        os.path.join(log_dir, LogConfig.ERROR_LOG_FILE),
        maxBytes=LogConfig.MAX_BYTES,
        backupCount=LogConfig.BACKUP_COUNT
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(logging.Formatter(LogConfig.DETAILED_FORMAT))
    app.logger.addHandler(error_handler)

    audit_handler = TimedRotatingFileHandler(
        os.path.join(log_dir, LogConfig.AUDIT_LOG_FILE),
        when='midnight',
        interval=1,
        backupCount=365
    )
    audit_handler.setLevel(logging.INFO)
    audit_handler.setFormatter(logging.Formatter(LogConfig.AUDIT_FORMAT))

    audit_logger = logging.getLogger('audit')
    audit_logger.setLevel(logging.INFO)
    audit_logger.handlers.clear()
    audit_logger.addHandler(audit_handler)
    audit_logger.propagate = False

    app.logger.info('=' * 80)
    app.logger.info('Library Admin Application Starting')
    app.logger.info(f'Environment: {env}')
    app.logger.info(f'Log Level: {logging.getLevelName(log_level)}')
    app.logger.info(f'Log Directory: {log_dir}')
    app.logger.info('=' * 80)


def get_audit_logger():
    return logging.getLogger('audit')


def scrub_context(data):
    """Return a copy of a request/context mapping without credential fields."""
    if not data:
        return {}
    return {k: v for k, v in dict(data).items() if k not in SENSITIVE_FIELDS}


def log_admin_action(actor_id, action, target_id=None, **kwargs):
    logger = get_audit_logger()

    log_message = f"ACTOR:{actor_id} | ACTION:{action}"
    if target_id is not None:
        log_message += f" | TARGET:{target_id}"

    metadata = ' | '.join([f'{k}={v}' for k, v in scrub_context(kwargs).items()])
    if metadata:
        log_message += f" | {metadata}"

    logger.info(log_message)


def log_error_with_context(message, context=None, error=None, level=logging.ERROR):
    """
    Log a failure with a structured context map.

    Credential fields are stripped from the context before it is written.
    """
    from flask import current_app

    log_message = message
    if error is not None:
        log_message += f": {error}"

    context = scrub_context(context)
    if context:
        context_str = ' | '.join([f'{k}={v}' for k, v in context.items()])
        log_message += f" | CONTEXT: {context_str}"

    current_app.logger.log(level, log_message, exc_info=error if level >= logging.ERROR else None)
