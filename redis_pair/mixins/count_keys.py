from ..numeric import format_thousands
from .common import ActionResult


class CountKeys:

    __slots__ = ()

    def count_keys(self):
        def _dbsize(host):
            count = self._client.dbsize(host)
            print(f"{host}: {format_thousands(count)}")
            return count

        results = self._for_each_primary(_dbsize)
        return ActionResult(results, self._show_total(results, 'keys'))
