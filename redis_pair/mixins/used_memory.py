from ..exceptions import NodeCommandError
from ..numeric import format_thousands, parse_mb
from .common import ActionResult


class UsedMemory:

    __slots__ = ()

    def used_memory(self):
        def _used_memory(host):
            human = self._client.used_memory_human(host)
            mb = parse_mb(human)
            if mb is None:
                raise NodeCommandError(f"Cannot parse used memory {human!r} of {host}")
            mb = int(mb)
            print(f"{host}: {format_thousands(mb)} MB")
            return mb

        results = self._for_each_primary(_used_memory)
        return ActionResult(results, self._show_total(results, 'MB'))
