"""Tests for key-concept extraction, formatting and the study plan."""

from learning_analytics.models import ScoredDocument
from learning_analytics.retrieval import retrieve_materials
from learning_analytics.study_plan import (
    build_study_plan,
    extract_key_concepts,
    format_recommendations,
)


def test_extract_bold_and_list_items():
    content = (
        "Intro with **Big O** notation.\n"
        "1. First step\n"
        "- Not a numbered item\n"
        "-. Dash item\n"
        "*. Star item\n"
        "**Big O** again\n"
    )
    assert extract_key_concepts(content) == [
        "Big O",
        "First step",
        "Dash item",
        "Star item",
    ]


def test_extract_skips_long_list_items_and_caps_at_ten():
    long_line = "1. " + "x" * 120
    assert extract_key_concepts(long_line) == []

    content = "\n".join(f"{i % 10}. concept {i}" for i in range(15))
    concepts = extract_key_concepts(content)
    assert len(concepts) == 10
    assert concepts[0] == "concept 0"


def test_bold_list_item_yields_both_forms():
    content = "1. **Merge Sort**\n2. Quick Sort\n"
    assert extract_key_concepts(content) == ["Merge Sort", "**Merge Sort**", "Quick Sort"]


def test_extract_seed_sorting_concepts_keep_markers_on_list_entries(corpus):
    sorting = next(doc for doc in corpus if doc.topic == "Sorting Algorithms")
    concepts = extract_key_concepts(sorting.content)
    assert concepts[:4] == ["Comparison-based Sorting:", "Merge Sort", "Quick Sort", "Heap Sort"]
    assert "**Merge Sort**" in concepts


def test_extract_seed_stack_concepts(corpus):
    stack = next(doc for doc in corpus if doc.topic == "Stack")
    assert extract_key_concepts(stack.content) == [
        "Basic Operations:",
        "Applications:",
        "Implementation Methods:",
        "Example Use Cases:",
        "Push - Add element to top (O(1))",
        "Pop - Remove element from top (O(1))",
        "Peek/Top - View top element without removing (O(1))",
        "isEmpty - Check if stack is empty (O(1))",
        "Array-based implementation",
        "Linked list-based implementation",
    ]


def test_format_recommendations(make_document):
    doc = make_document("Stack", content="s" * 250)
    formatted = format_recommendations([ScoredDocument(document=doc, relevance_score=10)], ["Stack", "Trees"])

    assert formatted.summary == (
        "Based on your performance, we recommend focusing on: Stack, Trees. "
        "Here are curated materials to help you improve:"
    )
    material = formatted.materials[0]
    assert material.title == "Stack"
    assert material.topic == "Stack"
    assert material.difficulty == "EASY"
    assert material.preview == "s" * 200 + "..."


def test_format_recommendations_without_weak_areas():
    formatted = format_recommendations([], [])
    assert formatted.summary == "Great job! Here are some materials to further enhance your knowledge:"
    assert formatted.materials == []


def test_study_plan_follows_weak_area_priority(corpus):
    weak_areas = ["Trees", "Linked Lists"]
    plan = build_study_plan(weak_areas, retrieve_materials(corpus, weak_areas))

    assert [(e.day, e.focus, e.materials) for e in plan] == [
        (1, "Trees", ["Trees"]),
        (2, "Linked Lists", ["Linked Lists"]),
    ]
    assert plan[0].activities == [
        "Read knowledge base material on Trees",
        "Practice 5-10 questions on Trees",
        "Take notes on key concepts",
        "Review and summarize your understanding",
    ]


def test_study_plan_caps_days_and_materials(make_document):
    weak_areas = [f"Topic {i}" for i in range(10)]
    materials = [
        ScoredDocument(document=make_document(f"topic 0 part {n}"), relevance_score=10)
        for n in range(3)
    ]
    plan = build_study_plan(weak_areas, materials)

    assert len(plan) == 7
    assert [e.day for e in plan] == list(range(1, 8))
    assert [e.focus for e in plan] == weak_areas[:7]
    assert plan[0].materials == ["topic 0 part 0", "topic 0 part 1"]
    assert plan[1].materials == []


def test_study_plan_empty():
    assert build_study_plan([], []) == []
