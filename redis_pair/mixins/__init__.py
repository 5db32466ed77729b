from .common import Common, NodeResult, ActionResult
from .bgsave import BackgroundSave
from .flush_all import FlushAll
from .list_nodes import ListNodes
from .count_keys import CountKeys
from .used_memory import UsedMemory
from .find_duplicates import FindDuplicates
