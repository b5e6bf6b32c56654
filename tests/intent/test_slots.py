from intent_bot.intent.slots import extract_values, placeholders


def test_extracts_unit_conversion_slots() -> None:
    values = extract_values(
        "convert 10 km to miles", "convert {amount} {unitFrom} to {unitTo}"
    )
    assert values == {"amount": "10", "unitFrom": "km", "unitTo": "miles"}


def test_last_slot_takes_the_rest_of_the_input() -> None:
    values = extract_values("tell me about albert einstein", "tell me about {topic}")
    assert values == {"topic": "albert einstein"}


def test_slot_between_literals() -> None:
    values = extract_values(
        "how many feet in 3 meters", "how many {unitTo} in {amount} {unitFrom}"
    )
    assert values == {"unitTo": "feet", "amount": "3", "unitFrom": "meters"}


def test_template_whitespace_is_flexible() -> None:
    values = extract_values("convert  2   kg to lb", "convert {amount} {unitFrom} to {unitTo}")
    assert values == {"amount": "2", "unitFrom": "kg", "unitTo": "lb"}


def test_literal_regex_characters_are_escaped() -> None:
    assert extract_values("what is c++ (lang)", "what is {topic} (lang)") == {"topic": "c++"}
    assert extract_values("what is c++ xlangx", "what is {topic} (lang)") is None


def test_mismatched_shape_returns_none() -> None:
    assert extract_values("what is photosynthesis", "what is a {topic}") is None
    assert extract_values("convert km to miles", "convert {amount} {unitFrom} to {unitTo}") is None


def test_template_without_placeholders() -> None:
    assert extract_values("hello", "hello") == {}
    assert extract_values("hello there", "hello") is None


def test_placeholders_lists_names_in_order() -> None:
    assert placeholders("how many {unitTo} in {amount} {unitFrom}") == [
        "unitTo",
        "amount",
        "unitFrom",
    ]
