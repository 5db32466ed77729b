import enum
import os
from collections import namedtuple

from dotenv import dotenv_values

from .exceptions import ConfigError
from .util import is_truthy

DEFAULT_ENV_FILE = '.env'
DEFAULT_PORT = 6379
DEFAULT_CLI = 'redis-cli'

BACKEND_CLI = 'cli'
BACKEND_NATIVE = 'native'
BACKENDS = (BACKEND_CLI, BACKEND_NATIVE)

_DEBUG_VALUES = ('yes', 'true')
_KNOWN_KEYS = ('REDIS_CLI', 'CLIENT_BACKEND', 'COMMAND_TIMEOUT', 'DEBUG')
_CLUSTER_KEYS = ('ENDPOINT', 'PORT', 'AUTH', 'TLS')


class Cluster(enum.Enum):
    SOURCE = 'source'
    TARGET = 'target'

    def __str__(self):
        return self.value

    @property
    def prefix(self):
        return self.value.upper()


class ConnectionParams(namedtuple('ConnectionParams', 'cluster host port auth tls')):

    __slots__ = ()

    def __str__(self):
        return f"{self.cluster} ({self.host}:{self.port})"


class Settings:
    def __init__(self, values):
        self._values = dict(values)

    def get(self, key, default=None):
        value = self._values.get(key)
        if value is None or value == '':
            return default
        return value

    @property
    def cli_path(self):
        return self.get('REDIS_CLI', DEFAULT_CLI)

    @property
    def backend(self):
        backend = self.get('CLIENT_BACKEND', BACKEND_CLI).lower()
        if backend not in BACKENDS:
            raise ConfigError(f"CLIENT_BACKEND must be one of {', '.join(BACKENDS)} "
                              f"(given as {backend})")
        return backend

    @property
    def debug(self):
        return str(self.get('DEBUG', '')).strip().lower() in _DEBUG_VALUES

    @property
    def command_timeout(self):
        timeout = self.get('COMMAND_TIMEOUT')
        if timeout is None:
            return None
        try:
            timeout = float(timeout)
        except ValueError:
            raise ConfigError(f"COMMAND_TIMEOUT must be a number of seconds "
                              f"(given as {timeout})")
        return timeout if timeout > 0 else None

    def select(self, cluster):
        prefix = cluster.prefix
        host = self.get(f'{prefix}_ENDPOINT')
        if not host:
            raise ConfigError(f"{prefix}_ENDPOINT is not configured for the {cluster} cluster")

        port = self.get(f'{prefix}_PORT', DEFAULT_PORT)
        try:
            port = int(port)
        except ValueError:
            raise ConfigError(f"{prefix}_PORT must be an integer (given as {port})")

        return ConnectionParams(cluster, host, port,
                                self.get(f'{prefix}_AUTH'),
                                is_truthy(self.get(f'{prefix}_TLS')))


def load_settings(env_file=DEFAULT_ENV_FILE, environ=None, overrides=None):
    if not os.path.isfile(env_file):
        raise ConfigError(f"Environment file {env_file} not found")

    values = dotenv_values(env_file)
    environ = os.environ if environ is None else environ
    values.update({k: v for k, v in environ.items() if _is_known(k)})
    values.update(overrides or {})
    return Settings(values)


def _is_known(key):
    if key in _KNOWN_KEYS:
        return True
    prefix, _, name = key.partition('_')
    return prefix in ('SOURCE', 'TARGET') and name in _CLUSTER_KEYS
