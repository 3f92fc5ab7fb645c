"""Console logging for the API process."""
import logging
import logging.config


def build_logging_config(level="INFO"):
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'standard',
                'level': level,
            },
        },
        'root': {
            'handlers': ['console'],
            'level': level,
        },
        'loggers': {
            # request lines are noisy below WARNING in production
            'werkzeug': {'level': 'INFO' if level == 'DEBUG' else 'WARNING'},
            'sqlalchemy.engine': {'level': 'WARNING'},
        },
    }


def configure_logging(app):
    level = str(app.config.get('LOG_LEVEL', 'INFO')).upper()
    logging.config.dictConfig(build_logging_config(level))
    app.logger.setLevel(level)
