from ..xprint import xprint
from .common import ActionResult


class BackgroundSave:

    __slots__ = ()

    def bgsave(self):
        def _bgsave(host):
            xprint(f">>> Starting BGSAVE on {host}")
            reply = self._client.bgsave(host)
            print(reply)
            return reply

        return ActionResult(self._for_each_primary(_bgsave), None)
