
class RedisPairException(Exception): pass

class AbortedByUserException(RedisPairException): pass
class ConfigError(RedisPairException): pass

class NodeException(RedisPairException): pass
class NodeCommandError(NodeException): pass
class TopologyQueryError(NodeException): pass
