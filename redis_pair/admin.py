import enum

from .mixins import (
    Common, BackgroundSave, FlushAll, ListNodes,
    CountKeys, UsedMemory, FindDuplicates
)


class Action(enum.Enum):
    BGSAVE = 'bgsave'
    DUPS = 'dups'
    FLUSH = 'flush'
    KEYS = 'keys'
    MEMORY = 'memory'
    PRIMARIES = 'primaries'
    REPLICAS = 'replicas'

    def __str__(self):
        return self.value


class ClusterAdmin(Common, BackgroundSave, FlushAll, ListNodes,
                   CountKeys, UsedMemory, FindDuplicates):

    def __init__(self, client, yes=False, tmpdir=None):
        self._client = client
        self._yes = yes
        self._tmpdir = tmpdir
        self._handlers = {
            Action.BGSAVE: self.bgsave,
            Action.DUPS: self.find_duplicates,
            Action.FLUSH: self.flush,
            Action.KEYS: self.count_keys,
            Action.MEMORY: self.used_memory,
            Action.PRIMARIES: self.primaries,
            Action.REPLICAS: self.replicas,
        }

    def run(self, action):
        return self._handlers[action]()
