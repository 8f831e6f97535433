from __future__ import annotations

import pytest

from scent_rules.rule_harvester.classifier import classify, classify_element, classify_level
from scent_rules.rule_harvester.tagger import determine_category, generate_keywords


def test_level_first_in_declaration_order_wins() -> None:
    assert classify_level("Master and Novice handlers") == "Novice"
    assert classify_level("Excellent or Advanced") == "Advanced"


def test_element_first_in_declaration_order_wins() -> None:
    assert classify_element("Container searches differ from Interior searches") == "Interior"
    assert classify_element("Buried or Exterior") == "Exterior"


def test_classification_is_whole_word_and_case_insensitive() -> None:
    assert classify_level("MASTER class") == "Master"
    assert classify_level("Masters of ceremony") is None
    assert classify_element("containers") is None


def test_classify_uses_title_and_content() -> None:
    assert classify("Buried Search", "Applies to the Excellent class.") == ("Excellent", "Buried")
    assert classify("Ribbons", "Ribbons are awarded.") == (None, None)


def test_keywords_include_labels_and_vocabulary() -> None:
    keywords = generate_keywords(
        "The handler keeps the dog on leash while it searches for hides.", "Novice", "Container"
    )
    assert keywords == sorted(keywords)
    assert {"novice", "container", "handler", "dog", "leash", "search", "hide", "hides"} <= set(
        keywords
    )


def test_keywords_are_deduplicated() -> None:
    keywords = generate_keywords("Container container CONTAINER", None, "Container")
    assert keywords.count("container") == 1


@pytest.mark.parametrize(
    ("content", "category"),
    [
        ("The search area size and the time limit are posted.", "Search Area"),
        ("The time limit for hides is posted.", "Time Limit"),
        ("Hides must be placed out of reach.", "Hides"),
        ("Equipment such as a leash may be checked.", "Equipment"),
        ("Handler conduct is expected to be sporting.", "Handler Requirements"),
        ("The judge will record the score.", "Judging"),
        ("A fault may lead to elimination.", "Faults and Eliminations"),
        ("Ribbons are blue.", "General"),
    ],
)
def test_category_decision_order(content: str, category: str) -> None:
    assert determine_category(content) == category
