import io
import subprocess
import unittest
from unittest.mock import MagicMock, patch

import redis
from redis._parsers.helpers import parse_cluster_nodes as parse_cluster_nodes_reply

from redis_pair import (
    Action,
    ClusterAdmin,
    CliClient,
    NativeClient,
    NodeCommandError,
    TopologyQueryError,
)
from redis_pair.topology import Role, filter_by_role
from . import fixture


def completed(stdout='', stderr='', returncode=0):
    return subprocess.CompletedProcess([], returncode, stdout=stdout, stderr=stderr)


def fake_popen(lines, returncode=0, stderr=''):
    proc = MagicMock()
    proc.__enter__.return_value = proc
    proc.__exit__.return_value = False
    proc.stdout = iter(lines)
    proc.stderr.read.return_value = stderr
    proc.returncode = returncode
    return proc


class TestCliClient(unittest.TestCase):
    def setUp(self):
        self._client = CliClient(fixture.connection_params(auth='s3cret', tls=True),
                                 executable='/usr/bin/redis-cli')

    def test_command_line(self):
        self.assertListEqual(
            self._client.command_line('10.0.1.1', 'DBSIZE'),
            ['/usr/bin/redis-cli', '-h', '10.0.1.1', '-p', '6379',
             '-a', 's3cret', '--no-auth-warning', '--tls', 'DBSIZE'])

    def test_command_line_without_auth(self):
        client = CliClient(fixture.connection_params())
        self.assertListEqual(client.command_line('10.0.1.1', 'INFO', 'memory'),
                             ['redis-cli', '-h', '10.0.1.1', '-p', '6379', 'INFO', 'memory'])

    def test_cluster_nodes(self):
        with patch('subprocess.run', return_value=completed(fixture.cluster_nodes())) as run:
            nodes = self._client.cluster_nodes()
            self.assertEqual(len(nodes), 7)
            args, kwargs = run.call_args
            self.assertEqual(args[0][-2:], ['CLUSTER', 'NODES'])
            self.assertIn('source.example.com', args[0])
            self.assertEqual(kwargs['timeout'], 5)

    def test_cluster_nodes_failure(self):
        with patch('subprocess.run', return_value=completed(stderr='Could not connect', returncode=1)):
            with self.assertRaises(TopologyQueryError):
                self._client.cluster_nodes()

    def test_cluster_nodes_timeout(self):
        with patch('subprocess.run', side_effect=subprocess.TimeoutExpired('redis-cli', 5)):
            with self.assertRaises(TopologyQueryError):
                self._client.cluster_nodes()

    def test_missing_executable(self):
        with patch('subprocess.run', side_effect=FileNotFoundError('redis-cli')):
            with self.assertRaises(TopologyQueryError):
                self._client.cluster_nodes()
            with self.assertRaises(NodeCommandError):
                self._client.bgsave('10.0.1.1')

    def test_dbsize(self):
        with patch('subprocess.run', return_value=completed("42\n")) as run:
            self.assertEqual(self._client.dbsize('10.0.1.2'), 42)
            self.assertIsNone(run.call_args[1]['timeout'])

    def test_error_reply(self):
        with patch('subprocess.run', return_value=completed("NOAUTH Authentication required.\n")):
            with self.assertRaises(NodeCommandError):
                self._client.dbsize('10.0.1.2')

    def test_unexpected_dbsize(self):
        with patch('subprocess.run', return_value=completed("")):
            with self.assertRaises(NodeCommandError):
                self._client.dbsize('10.0.1.2')

    def test_command_timeout(self):
        client = CliClient(fixture.connection_params(), command_timeout=3)
        with patch('subprocess.run', return_value=completed("Background saving started\n")) as run:
            self.assertEqual(client.bgsave('10.0.1.2'), "Background saving started")
            self.assertEqual(run.call_args[1]['timeout'], 3)

    def test_used_memory_human(self):
        info = "# Memory\r\nused_memory:1288490189\r\nused_memory_human:1.20G\r\nused_memory_rss:0\r\n"
        with patch('subprocess.run', return_value=completed(info)):
            self.assertEqual(self._client.used_memory_human('10.0.1.2'), '1.20G')

    def test_used_memory_human_missing(self):
        with patch('subprocess.run', return_value=completed("# Memory\r\n")):
            with self.assertRaises(NodeCommandError):
                self._client.used_memory_human('10.0.1.2')

    def test_scan_keys(self):
        with patch('subprocess.Popen', return_value=fake_popen(['k1\n', 'k2\n', '\n'])) as popen:
            self.assertListEqual(list(self._client.scan_keys('10.0.1.2')), ['k1', 'k2'])
            self.assertEqual(popen.call_args[0][0][-1], '--scan')

    def test_scan_keys_failure(self):
        with patch('subprocess.Popen', return_value=fake_popen([], returncode=1, stderr='AUTH failed')):
            with self.assertRaises(NodeCommandError):
                list(self._client.scan_keys('10.0.1.2'))

    def test_debug_echo_masks_auth(self):
        client = CliClient(fixture.connection_params(auth='s3cret'), debug=True)
        with patch('subprocess.run', return_value=completed("OK\n")), \
             patch('sys.stderr', new_callable=io.StringIO) as stderr:
            client.flushall('10.0.1.2')
            echoed = stderr.getvalue()
            self.assertIn('redis-cli -h 10.0.1.2 -p 6379 -a **** --no-auth-warning FLUSHALL', echoed)
            self.assertNotIn('s3cret', echoed)

    def test_no_echo_without_debug(self):
        client = CliClient(fixture.connection_params(auth='s3cret'))
        with patch('subprocess.run', return_value=completed("OK\n")), \
             patch('sys.stderr', new_callable=io.StringIO) as stderr:
            client.flushall('10.0.1.2')
            self.assertEqual(stderr.getvalue(), '')


class TestNativeClient(unittest.TestCase):
    def setUp(self):
        self._client = NativeClient(fixture.connection_params(auth='s3cret'))

    def test_cluster_nodes_from_parsed_reply(self):
        reply = parse_cluster_nodes_reply(fixture.cluster_nodes())
        with patch('redis.Redis') as mock_redis:
            mock_redis.return_value.cluster.return_value = reply
            nodes = self._client.cluster_nodes()
            mock_redis.assert_called_once_with('source.example.com', 6379, password='s3cret',
                                               ssl=False, socket_timeout=5,
                                               decode_responses=True,
                                               encoding_errors='surrogateescape')
        self.assertListEqual(filter_by_role(nodes, Role.PRIMARY), fixture.PRIMARIES)
        self.assertListEqual(filter_by_role(nodes, Role.REPLICA), fixture.REPLICAS)

    def test_cluster_nodes_from_text_reply(self):
        with patch('redis.Redis') as mock_redis:
            mock_redis.return_value.cluster.return_value = fixture.cluster_nodes()
            self.assertEqual(len(self._client.cluster_nodes()), 7)

    def test_cluster_nodes_failure(self):
        with patch('redis.Redis') as mock_redis:
            mock_redis.return_value.cluster.side_effect = redis.exceptions.ConnectionError('refused')
            with self.assertRaises(TopologyQueryError):
                self._client.cluster_nodes()

    def test_node_commands(self):
        with patch('redis.Redis') as mock_redis:
            r = mock_redis.return_value
            r.bgsave.return_value = True
            r.dbsize.return_value = 250
            r.info.return_value = {'used_memory_human': '512.00M'}
            r.scan_iter.return_value = iter(['a', 'b'])
            self.assertEqual(self._client.bgsave('10.0.1.2'), 'Background saving started')
            self.assertEqual(self._client.dbsize('10.0.1.2'), 250)
            self.assertEqual(self._client.used_memory_human('10.0.1.2'), '512.00M')
            self.assertListEqual(list(self._client.scan_keys('10.0.1.2')), ['a', 'b'])
            # one connection per host
            mock_redis.assert_called_once()
            r.info.assert_called_once_with('memory')

    def test_node_command_failure(self):
        with patch('redis.Redis') as mock_redis:
            mock_redis.return_value.flushall.side_effect = redis.exceptions.ResponseError('NOPERM')
            with self.assertRaises(NodeCommandError):
                self._client.flushall('10.0.1.2')



class TestNativeClientKeyNames(unittest.TestCase):
    def setUp(self):
        patch('sys.stdout', new_callable=io.StringIO).start()
        self._stderr = patch('sys.stderr', new_callable=io.StringIO).start()
        self._binary_key = b'session:\xff'.decode('utf-8', 'surrogateescape')

    def test_dups_with_non_utf8_key(self):
        with patch('redis.Redis') as mock_redis:
            r = mock_redis.return_value
            r.cluster.return_value = fixture.cluster_nodes()
            r.scan_iter.side_effect = lambda **kwargs: iter(['a', self._binary_key])
            result = ClusterAdmin(NativeClient(fixture.connection_params())).run(Action.DUPS)
        self.assertListEqual(result.failed, [])
        self.assertListEqual(result.summary, ['a', self._binary_key])

    def test_undecodable_key_is_node_error(self):
        error = UnicodeDecodeError('utf-8', b'\xff', 0, 1, 'invalid start byte')
        with patch('redis.Redis') as mock_redis:
            r = mock_redis.return_value
            r.cluster.return_value = fixture.cluster_nodes()
            r.scan_iter.side_effect = error
            result = ClusterAdmin(NativeClient(fixture.connection_params())).run(Action.DUPS)
        self.assertListEqual([n.host for n in result.failed], fixture.PRIMARIES)
        self.assertIn("SCAN failed on 10.0.1.2", self._stderr.getvalue())

    def tearDown(self):
        patch.stopall()


if __name__ == '__main__':
    unittest.main()
