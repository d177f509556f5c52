import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from learning_analytics import knowledge_base  # noqa: E402
from learning_analytics.models import KnowledgeDocument  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_knowledge_base_cache():
    knowledge_base.clear_cache()
    yield
    knowledge_base.clear_cache()


@pytest.fixture()
def corpus():
    return knowledge_base.load_knowledge_base()


@pytest.fixture()
def make_document():
    def _make(topic, keywords=(), content="", subject="Data Structures", difficulty="EASY"):
        return KnowledgeDocument(
            id=topic.lower().replace(" ", "-"),
            topic=topic,
            subject=subject,
            difficulty=difficulty,
            keywords=tuple(keywords),
            content=content,
        )

    return _make
