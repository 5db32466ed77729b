from .admin import ClusterAdmin, Action
from .client import Client, CliClient, NativeClient
from .config import Cluster, ConnectionParams, Settings, load_settings
from .factory import ClientFactory
from .numeric import parse_mb, format_thousands
from .topology import Role, NodeEntry, parse_cluster_nodes, list_nodes_by_role
from .mixins import NodeResult, ActionResult
from .xprint import xprint
from .exceptions import (
    RedisPairException,
    AbortedByUserException,
    ConfigError,
    NodeException,
    NodeCommandError,
    TopologyQueryError,
)
