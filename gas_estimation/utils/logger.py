from contextvars import ContextVar
from logging import LoggerAdapter, getLogger
from logging.config import dictConfig
from typing import Optional, Tuple
from uuid import uuid4

import elasticapm

from gas_estimation.config import config
from gas_estimation.config.logger import LoggerConfig

CORRELATION_ID = 'cid'
SESSION_ID = 'sid'


def logging_config(logger_config: LoggerConfig) -> dict:
    """dictConfig for the console and logstash handlers, see LoggerConfig."""
    return {
        'version': 1,
        # loggers created at import time must keep working after reconfiguration
        'disable_existing_loggers': False,
        'formatters': {
            'simple': {
                'format': '%(asctime)s - %(name)s:%(lineno)s - %(levelname)s - %(message)s'
            },
            'logstash': {'()': 'logstash_formatter.LogstashFormatterV1'},
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'level': logger_config.LOGGING_LEVEL,
                'formatter': 'simple',
                'stream': 'ext://sys.stdout',
            },
            'logstash': {
                'class': 'logstash_async.handler.AsynchronousLogstashHandler',
                'level': logger_config.LOGSTASH_LOGGING_LEVEL,
                'transport': 'logstash_async.transport.TcpTransport',
                'formatter': 'logstash',
                'host': logger_config.LOGSTASH,
                'port': logger_config.PORT,
                'database_path': None,
                'event_ttl': 30,  # sec
            },
        },
        'root': {
            'handlers': logger_config.LOG_HANDLERS,
            'level': logger_config.LOGGING_LEVEL,
        },
    }


CONFIG = logging_config(config)

correlation_id = ContextVar(CORRELATION_ID, default=uuid4().hex)
session_id = ContextVar(SESSION_ID, default=None)


class CustomContextLogger(LoggerAdapter):
    """Adds the request correlation id and the user session id to every record."""

    def process(self, msg, kwargs):
        extra = {**self.extra, **kwargs.get('extra', {})}
        extra[CORRELATION_ID] = correlation_id.get()
        sid = extra.get(SESSION_ID) or session_id.get()
        if sid:
            extra[SESSION_ID] = sid
        kwargs['extra'] = extra
        return msg, kwargs


class LogArgs:
    gas_estimator = 'gas_estimator'  # name of the estimator (oracle) in charge
    gas_limit = 'gas_limit'
    time_limit = 'time_limit'
    time_slice = 'time_slice'  # seconds the combinator waits for one estimator
    priority = 'priority'  # position of the estimator in the priority list
    web3_url = 'web3_url'
    error_count = 'error_count'
    errors_list = 'errors_list'
    ex = 'ex'  # human readable exception description


def get_logger(name: str, extra: Optional[dict] = None) -> CustomContextLogger:
    dictConfig(CONFIG)
    return CustomContextLogger(getLogger(name), extra or {})


def set_correlation_id(corr_id: str):
    correlation_id.set(corr_id)


def set_session_id(sid: str):
    session_id.set(sid)


def capture_exception(exc_info: Optional[Tuple] = None) -> Optional[str]:
    """Capture exception in APM.

    Args:
        exc_info: Optional[tuple]: A (type, value, traceback) tuple as returned by sys.exc_info().
                If not provided, it will be captured automatically,
                if capture_exception() was called in an except block.

    Returns:
        Id of the captured error or None if APM client is not set up.
    """
    client = elasticapm.get_client()
    if client is None:
        return None
    return client.capture_exception(exc_info)
