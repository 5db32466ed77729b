from redis_pair import Cluster, ConnectionParams

PRIMARIES = ['10.0.1.2', '10.0.1.3', '10.0.1.1']
REPLICAS = ['10.0.1.4', '10.0.1.5', 'replica-3.example.com']

_CLUSTER_NODES = [
    "07c37dfeb235213a872192d90877d0cd55635b91 10.0.1.4:6379@16379 slave "
    "e7d1eecce10fd6bb5eb35b9f99a514335d9ba9ca 0 1426238317239 4 connected",
    "67ed2db8d677e59ec4a4cefb06858cf2a1a89fa1 10.0.1.2:6379@16379 master "
    "- 0 1426238316232 2 connected 5461-10922",
    "292f8b365bb7edb5e285caf0b7e6ddc7265d2f4f 10.0.1.3:6379@16379 master "
    "- 0 1426238318243 3 connected 10923-16383",
    "6ec23923021cf3ffec47632106199cb7f496ce01 10.0.1.5:6379@16379 slave "
    "67ed2db8d677e59ec4a4cefb06858cf2a1a89fa1 0 1426238316232 5 connected",
    "824fe116063bc5fcf9f4ffd895bc17aee7731ac3 10.0.1.6:6379@16379,replica-3.example.com slave "
    "292f8b365bb7edb5e285caf0b7e6ddc7265d2f4f 0 1426238317741 6 connected",
    "e7d1eecce10fd6bb5eb35b9f99a514335d9ba9ca 10.0.1.1:6379@16379 myself,master "
    "- 0 0 1 connected 0-5460",
    "a1b2c3d4e5f60718293a4b5c6d7e8f9012345678 :0@0 master,fail,noaddr "
    "- 1426238317239 1426238316232 7 disconnected",
]


def cluster_nodes():
    return '\n'.join(_CLUSTER_NODES) + '\n'


def connection_params(auth=None, tls=False):
    return ConnectionParams(Cluster.SOURCE, 'source.example.com', 6379, auth, tls)
