from __future__ import annotations

from ..models import Word
from ..tables import WORDS_TABLE
from .peer import Peer


class WordPeer(Peer[Word]):
    table_name = WORDS_TABLE
    entity_cls = Word
