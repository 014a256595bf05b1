"""Repository layer: generic table access (Peer) plus per-entity bindings.

Services pass entities and filters in; SQL strings stay in here.
"""
from __future__ import annotations

from .peer import Peer
from .question_peer import QuestionPeer
from .word_definition_peer import WordDefinitionPeer
from .word_peer import WordPeer

__all__ = ["Peer", "QuestionPeer", "WordDefinitionPeer", "WordPeer"]
