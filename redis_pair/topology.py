import enum
from collections import namedtuple

from .exceptions import TopologyQueryError
from .xprint import xprint


class Role(enum.Enum):
    PRIMARY = 'master'
    REPLICA = 'slave'

    @property
    def marker(self):
        return self.value


NodeEntry = namedtuple('NodeEntry', 'node_id addr host port flags master_id')


def parse_addr(addr):
    # ip:port@cport[,hostname]
    addr, _, hostname = addr.partition(',')
    host, _, port = addr.split('@')[0].rpartition(':')
    return hostname or host, port


def parse_node_line(line):
    node_id, addr, flags, master_id = line.split(' ')[:4]
    host, port = parse_addr(addr)
    return NodeEntry(node_id, addr, host, port, flags.split(','), master_id)


def parse_cluster_nodes(text):
    nodes = []
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        if len(line.split(' ')) < 8:
            raise TopologyQueryError(f"Unexpected CLUSTER NODES line: {line!r}")
        nodes.append(parse_node_line(line))
    return nodes


def filter_by_role(nodes, role):
    return [n.host for n in nodes
              if role.marker in n.flags
              and 'noaddr' not in n.flags
              and n.host]


def list_nodes_by_role(client, role):
    nodes = client.cluster_nodes()
    if not nodes:
        raise TopologyQueryError(f"CLUSTER NODES returned no nodes for {client.params}")
    hosts = filter_by_role(nodes, role)
    xprint.verbose(f">>> Found {len(hosts)} {role.name.lower()} node(s) on {client.params}")
    return hosts
