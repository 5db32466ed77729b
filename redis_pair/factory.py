from .config import BACKEND_NATIVE
from .client import CliClient, NativeClient
from .xprint import xprint


class ClientFactory:
    @classmethod
    def create_client(cls, settings, params):
        if settings.backend == BACKEND_NATIVE:
            client = NativeClient(params, debug=settings.debug,
                                  command_timeout=settings.command_timeout)
        else:
            client = CliClient(params, executable=settings.cli_path,
                               debug=settings.debug,
                               command_timeout=settings.command_timeout)
        xprint.verbose(f">>> Using {settings.backend} client for {params}")
        return client
