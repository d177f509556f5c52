from learning_analytics.utils.json_naming_converter import (
    convert_keys_snake_to_camel,
    snake_to_camel,
)


def test_snake_to_camel():
    assert snake_to_camel("weak_areas") == "weakAreas"
    assert snake_to_camel("total_materials_found") == "totalMaterialsFound"
    assert snake_to_camel("summary") == "summary"


def test_nested_conversion():
    payload = {"study_plan": [{"day": 1, "key_concepts": ["a_b"]}], "search_query": "x"}
    assert convert_keys_snake_to_camel(payload) == {
        "studyPlan": [{"day": 1, "keyConcepts": ["a_b"]}],
        "searchQuery": "x",
    }


def test_string_values_are_left_alone():
    payload = {"weak_areas": ["linked_lists", "dynamic_programming"]}
    assert convert_keys_snake_to_camel(payload) == {
        "weakAreas": ["linked_lists", "dynamic_programming"],
    }
