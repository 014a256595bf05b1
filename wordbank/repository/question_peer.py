from __future__ import annotations

from ..models import Question
from ..tables import QUESTIONS_TABLE
from .peer import Peer


class QuestionPeer(Peer[Question]):
    table_name = QUESTIONS_TABLE
    entity_cls = Question
