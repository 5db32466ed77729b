from collections import namedtuple

import more_itertools

from ..exceptions import NodeCommandError
from ..numeric import format_thousands
from ..topology import Role, list_nodes_by_role
from ..xprint import xprint


class NodeResult(namedtuple('NodeResult', 'host value error')):

    __slots__ = ()

    @property
    def ok(self):
        return self.error is None


class ActionResult(namedtuple('ActionResult', 'nodes summary')):

    __slots__ = ()

    @property
    def failed(self):
        return [r for r in self.nodes if not r.ok]


def sum_results(results):
    failed, succeeded = more_itertools.partition(lambda r: r.ok, results)
    return sum(r.value for r in succeeded), list(failed)


class Common:

    __slots__ = ()

    def _get_primaries(self):
        return list_nodes_by_role(self._client, Role.PRIMARY)

    def _get_replicas(self):
        return list_nodes_by_role(self._client, Role.REPLICA)

    def _for_each_primary(self, f):
        return self._for_each(self._get_primaries(), f)

    def _for_each(self, hosts, f):
        results = []
        for host in hosts:
            try:
                results.append(NodeResult(host, f(host), None))
            except NodeCommandError as e:
                xprint.error(e)
                results.append(NodeResult(host, None, e))
        return results

    def _show_total(self, results, unit):
        total, failed = sum_results(results)
        xprint.ok(f"{format_thousands(total)} {unit} in "
                  f"{len(results) - len(failed)} primaries.")
        if failed:
            xprint.warning(f"Total is incomplete: {len(failed)} of {len(results)} "
                           f"primaries failed ({', '.join(r.host for r in failed)}).")
        return total
