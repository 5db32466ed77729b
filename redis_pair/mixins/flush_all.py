from ..exceptions import AbortedByUserException
from ..util import query_yes_no
from ..xprint import xprint
from .common import ActionResult


class FlushAll:

    __slots__ = ()

    def flush(self):
        primaries = self._get_primaries()
        if not primaries:
            xprint.warning(f"No primary nodes found on {self._client.params}")
            return ActionResult([], None)

        xprint(f"*** FLUSHALL erases every key on {len(primaries)} primary node(s) "
               f"of {self._client.params}: {', '.join(primaries)}")
        if not (self._yes or query_yes_no("Do you really want to flush all data?", default=False)):
            raise AbortedByUserException("Aborted flushing all data")

        def _flushall(host):
            xprint(f">>> Flushing all keys on {host}")
            reply = self._client.flushall(host)
            print(reply)
            return reply

        return ActionResult(self._for_each(primaries, _flushall), None)
