from .common import ActionResult, NodeResult


class ListNodes:

    __slots__ = ()

    def primaries(self):
        return self._print_hosts(self._get_primaries())

    def replicas(self):
        return self._print_hosts(self._get_replicas())

    def _print_hosts(self, hosts):
        for host in hosts:
            print(host)
        return ActionResult([NodeResult(host, host, None) for host in hosts], None)
