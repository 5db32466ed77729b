import abc
import shlex
import subprocess

import redis

from .exceptions import NodeCommandError, TopologyQueryError
from .topology import NodeEntry, parse_addr, parse_cluster_nodes
from .xprint import xprint

DISCOVERY_TIMEOUT = 5
SOCKET_TIMEOUT = 5
SCAN_COUNT = 1000

# key names are not guaranteed to be valid utf-8
OUTPUT_ENCODING = 'utf-8'
OUTPUT_ERRORS = 'surrogateescape'

# redis-cli prints error replies on stdout when it is not attached to a tty
_ERROR_REPLIES = (
    'ERR', 'NOAUTH', 'WRONGPASS', 'NOPERM', 'LOADING', 'BUSY',
    'MOVED', 'ASK', 'CLUSTERDOWN', 'MASTERDOWN', 'READONLY',
    'Could not connect', 'Error:',
)


class Client(abc.ABC):
    def __init__(self, params, debug=False, command_timeout=None):
        self._params = params
        self._debug = debug
        self._command_timeout = command_timeout

    @property
    def params(self):
        return self._params

    @abc.abstractmethod
    def cluster_nodes(self):
        pass

    @abc.abstractmethod
    def bgsave(self, host):
        pass

    @abc.abstractmethod
    def flushall(self, host):
        pass

    @abc.abstractmethod
    def dbsize(self, host):
        pass

    @abc.abstractmethod
    def used_memory_human(self, host):
        pass

    @abc.abstractmethod
    def scan_keys(self, host):
        pass


class CliClient(Client):
    def __init__(self, params, executable='redis-cli', debug=False, command_timeout=None):
        super().__init__(params, debug, command_timeout)
        self._executable = executable

    def command_line(self, host, *args):
        cmd = [self._executable, '-h', host, '-p', str(self._params.port)]
        if self._params.auth:
            cmd += ['-a', self._params.auth, '--no-auth-warning']
        if self._params.tls:
            cmd.append('--tls')
        return cmd + [str(arg) for arg in args]

    def cluster_nodes(self):
        output = self._run(self._params.host, 'CLUSTER', 'NODES',
                           timeout=DISCOVERY_TIMEOUT, exc=TopologyQueryError)
        return parse_cluster_nodes(output)

    def bgsave(self, host):
        return self._run(host, 'BGSAVE')

    def flushall(self, host):
        return self._run(host, 'FLUSHALL')

    def dbsize(self, host):
        output = self._run(host, 'DBSIZE')
        try:
            return int(output)
        except ValueError:
            raise NodeCommandError(f"Unexpected DBSIZE reply from {host}: {output!r}")

    def used_memory_human(self, host):
        output = self._run(host, 'INFO', 'memory')
        for line in output.splitlines():
            key, _, value = line.strip().partition(':')
            if key == 'used_memory_human':
                return value
        raise NodeCommandError(f"used_memory_human not found in INFO memory from {host}")

    def scan_keys(self, host):
        cmd = self.command_line(host, '--scan')
        self._echo(cmd)
        try:
            proc = subprocess.Popen(cmd, stdout=subprocess.PIPE,
                                    stderr=subprocess.PIPE,
                                    encoding=OUTPUT_ENCODING, errors=OUTPUT_ERRORS)
        except OSError as e:
            raise NodeCommandError(f"Cannot execute {self._executable}: {e}")

        with proc:
            for line in proc.stdout:
                key = line.rstrip('\r\n')
                if key:
                    yield key
            stderr = proc.stderr.read().strip()

        if proc.returncode != 0:
            raise NodeCommandError(f"SCAN failed on {host}: "
                                   f"{stderr or f'exit status {proc.returncode}'}")

    def _run(self, host, *args, timeout=None, exc=NodeCommandError):
        cmd = self.command_line(host, *args)
        self._echo(cmd)
        timeout = timeout or self._command_timeout
        command = ' '.join(map(str, args))
        try:
            proc = subprocess.run(cmd, capture_output=True, timeout=timeout,
                                  encoding=OUTPUT_ENCODING, errors=OUTPUT_ERRORS)
        except subprocess.TimeoutExpired:
            raise exc(f"{command} on {host} timed out after {timeout}s")
        except OSError as e:
            raise exc(f"Cannot execute {self._executable}: {e}")

        output = proc.stdout.strip()
        if proc.returncode != 0 or output.startswith(_ERROR_REPLIES):
            reason = output or proc.stderr.strip() or f"exit status {proc.returncode}"
            raise exc(f"{command} failed on {host}: {reason}")
        return output

    def _echo(self, cmd):
        if not self._debug:
            return
        xprint.debug(' '.join('****' if prev == '-a' else shlex.quote(arg)
                              for prev, arg in zip([None] + cmd, cmd)))


class NativeClient(Client):
    def __init__(self, params, debug=False, command_timeout=None):
        super().__init__(params, debug, command_timeout)
        self._connections = {}

    def cluster_nodes(self):
        reply = self._call(self._params.host, 'CLUSTER NODES',
                           lambda r: r.cluster('NODES'), exc=TopologyQueryError)
        if isinstance(reply, str):
            return parse_cluster_nodes(reply)
        return [self._to_node_entry(addr, n) for addr, n in reply.items()]

    def bgsave(self, host):
        reply = self._call(host, 'BGSAVE', lambda r: r.bgsave())
        return 'Background saving started' if reply is True else str(reply)

    def flushall(self, host):
        reply = self._call(host, 'FLUSHALL', lambda r: r.flushall())
        return 'OK' if reply is True else str(reply)

    def dbsize(self, host):
        return int(self._call(host, 'DBSIZE', lambda r: r.dbsize()))

    def used_memory_human(self, host):
        info = self._call(host, 'INFO memory', lambda r: r.info('memory'))
        value = info.get('used_memory_human')
        if value is None:
            raise NodeCommandError(f"used_memory_human not found in INFO memory from {host}")
        return str(value)

    def scan_keys(self, host):
        r = self._redis(host)
        self._echo(host, 'SCAN')
        try:
            yield from r.scan_iter(count=SCAN_COUNT)
        except (redis.exceptions.RedisError, UnicodeError) as e:
            raise NodeCommandError(f"SCAN failed on {host}: {e}")

    def _redis(self, host):
        r = self._connections.get(host)
        if r is None:
            r = redis.Redis(host, self._params.port,
                            password=self._params.auth,
                            ssl=self._params.tls,
                            socket_timeout=self._command_timeout or SOCKET_TIMEOUT,
                            decode_responses=True,
                            encoding_errors=OUTPUT_ERRORS)
            self._connections[host] = r
        return r

    def _call(self, host, command, f, exc=NodeCommandError):
        self._echo(host, command)
        try:
            return f(self._redis(host))
        except (redis.exceptions.RedisError, UnicodeError) as e:
            raise exc(f"{command} failed on {host}: {e}")

    def _echo(self, host, command):
        if self._debug:
            scheme = 'rediss' if self._params.tls else 'redis'
            xprint.debug(f"{scheme}://{host}:{self._params.port} {command}")

    def _to_node_entry(self, addr, node):
        flags = node.get('flags') or ''
        if isinstance(flags, str):
            flags = flags.split(',')
        host, port = parse_addr(addr)
        # redis-py moves an announced hostname out of the address
        host = node.get('hostname') or host
        return NodeEntry(node.get('node_id'), addr, host, port,
                         list(flags), node.get('master_id'))
