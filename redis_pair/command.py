from .admin import ClusterAdmin
from .config import load_settings
from .factory import ClientFactory
from .xprint import xprint
from .exceptions import (
    AbortedByUserException,
    ConfigError,
    NodeException,
)

EXIT_OK = 0
EXIT_FAILURE = 1


def run_action_command(cluster, action, env_file, yes=False, debug=False):
    try:
        settings = load_settings(env_file, overrides={'DEBUG': 'yes'} if debug else None)
        params = settings.select(cluster)
        client = ClientFactory.create_client(settings, params)
    except ConfigError as e:
        xprint.error(e)
        return EXIT_FAILURE

    xprint.verbose(f">>> Running {action} on {params}")
    try:
        result = ClusterAdmin(client, yes=yes).run(action)
    except AbortedByUserException as e:
        xprint.warning(e)
        return EXIT_FAILURE
    except NodeException as e:
        xprint.error(e)
        return EXIT_FAILURE

    if result.failed:
        xprint.error(f"{action} failed on {len(result.failed)} node(s)")
        return EXIT_FAILURE
    return EXIT_OK
