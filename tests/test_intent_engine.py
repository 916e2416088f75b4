import pytest

from intent_engine import (
    FEMALE,
    MALE,
    NameQuery,
    asks_who_created,
    detect_name_query,
    guess_code_language,
    infer_gender,
    is_affirmative,
    is_coding_question,
)


@pytest.mark.parametrize("message, name", [
    ("who is Priya", "priya"),
    ("Do you know Rohan?", "rohan"),
    ("tell me about Anjali please", "anjali"),
    ("WHAT ABOUT rahul", "rahul"),
])
def test_detect_name_query_captures_lowercased_name(message, name):
    query = detect_name_query(message)
    assert query is not None
    assert query.name == name


@pytest.mark.parametrize("message", ["who created you", "hello", "", None, "who is"])
def test_detect_name_query_no_match(message):
    assert detect_name_query(message) is None


@pytest.mark.parametrize("name, gender", [
    ("priya", FEMALE),
    ("ravi", FEMALE),
    ("rohan", MALE),
    ("amit", MALE),
])
def test_infer_gender(name, gender):
    assert infer_gender(name) == gender


def test_name_query_dict_round_trip_and_bad_input():
    query = NameQuery("priya", FEMALE)
    assert NameQuery.from_dict(query.to_dict()) == query
    assert NameQuery.from_dict(None) is None
    assert NameQuery.from_dict({"gender": FEMALE}) is None
    assert NameQuery.from_dict({"name": "x", "gender": "other"}).gender == MALE


@pytest.mark.parametrize("message", ["yes", "YES", "Yaa", "ha", "haan", "yup"])
def test_is_affirmative(message):
    assert is_affirmative(message)


@pytest.mark.parametrize("message", ["yes please", " yes", "no", "", None, "yeah"])
def test_is_not_affirmative(message):
    assert not is_affirmative(message)


@pytest.mark.parametrize("message", [
    "write a program for bubble sort",
    "Implement quicksort",
    "python list comprehension",
    "cpp vector example",
    "javascript closures",
])
def test_is_coding_question(message):
    assert is_coding_question(message)


@pytest.mark.parametrize("message", ["capital of france", "who created you", "", None])
def test_is_not_coding_question(message):
    assert not is_coding_question(message)


@pytest.mark.parametrize("query, lang", [
    ("bubble sort in c", "c"),
    ("Write a Python program", "python"),
    ("binary search JAVA", "java"),
    ("js debounce function", "js"),
    ("sort a list", "txt"),
])
def test_guess_code_language(query, lang):
    assert guess_code_language(query) == lang


def test_asks_who_created():
    assert asks_who_created("Who created you?")
    assert not asks_who_created("who made you")
