import contextlib
import heapq
import itertools
import operator
import os
import tempfile

from ..xprint import xprint
from .common import ActionResult

KEYS_FILE_ENCODING = 'utf-8'
KEYS_FILE_ERRORS = 'surrogateescape'


def _open_keys_file(path, mode='r'):
    return open(path, mode, encoding=KEYS_FILE_ENCODING,
                errors=KEYS_FILE_ERRORS, newline='\n')


def _tagged_keys(f, tag):
    for line in f:
        yield line.rstrip('\n'), tag


def merge_duplicates(paths):
    '''Return the keys found in more than one of the sorted key files.'''
    with contextlib.ExitStack() as stack:
        files = [stack.enter_context(_open_keys_file(p)) for p in paths]
        merged = heapq.merge(*(_tagged_keys(f, i) for i, f in enumerate(files)))
        return [key for key, group in itertools.groupby(merged, key=operator.itemgetter(0))
                    if len({tag for _, tag in group}) > 1]


class FindDuplicates:

    __slots__ = ()

    def find_duplicates(self):
        with tempfile.TemporaryDirectory(prefix='redis-pair-dups-', dir=self._tmpdir) as workdir:
            results = self._for_each_primary(lambda host: self._dump_keys(host, workdir))
            duplicates = merge_duplicates([r.value for r in results if r.ok])

        scanned = len([r for r in results if r.ok])
        if duplicates:
            xprint(f"[WARNING] {len(duplicates)} duplicate key(s) found "
                   f"across {scanned} primaries:")
            for key in duplicates:
                print(key)
        else:
            xprint.ok(f"No duplicate keys found across {scanned} primaries.")
        return ActionResult(results, duplicates)

    def _dump_keys(self, host, workdir):
        xprint(f">>> Scanning keys on {host}")
        # SCAN may return a key more than once
        keys = sorted(set(self._client.scan_keys(host)))

        fd, path = tempfile.mkstemp(prefix=f"{host}-", suffix='.keys', dir=workdir)
        os.close(fd)
        with _open_keys_file(path, 'w') as f:
            for key in keys:
                f.write(f"{key}\n")
        xprint.verbose(f"{len(keys)} key(s) from {host} written to {path}")
        return path
