from __future__ import annotations

from ..models import WordDefinition
from ..tables import WORD_DEFINITIONS_TABLE
from .peer import Peer


class WordDefinitionPeer(Peer[WordDefinition]):
    table_name = WORD_DEFINITIONS_TABLE
    entity_cls = WordDefinition
