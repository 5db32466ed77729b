import click

from .config import DEFAULT_ENV_FILE
from .xprint import xprint, LOG_LEVEL_VERBOSE


def set_verbose(ctx, param, value):
    if value:
        xprint.set_loglevel(LOG_LEVEL_VERBOSE)


def verbose_option(*param_decls, **attrs):
    def decorator(f):
        attrs.setdefault('is_flag', True)
        attrs.setdefault('callback', set_verbose)
        attrs.setdefault('expose_value', False)
        attrs.setdefault('help', 'Print progress details.')
        return click.option(*(param_decls or ('-v', '--verbose',)), **attrs)(f)
    return decorator


def debug_option(*param_decls, **attrs):
    def decorator(f):
        attrs.setdefault('is_flag', True)
        attrs.setdefault('help', 'Echo every client command to stderr.')
        return click.option(*(param_decls or ('-d', '--debug',)), **attrs)(f)
    return decorator


def env_file_option(*param_decls, **attrs):
    def decorator(f):
        attrs.setdefault('default', DEFAULT_ENV_FILE)
        attrs.setdefault('show_default', True)
        attrs.setdefault('envvar', 'REDIS_PAIR_ENV_FILE')
        attrs.setdefault('help', 'Environment file with the cluster settings.')
        return click.option(*(param_decls or ('-e', '--env-file',)), **attrs)(f)
    return decorator
