import pytest

from personality_engine import (
    CREATOR_ATTRIBUTION,
    FEMALE_PROBE,
    MALE_PROBE,
    PENDING_KEY,
    apply_creator_attribution,
    ask_about_person,
    confirm_person,
    personality_reply,
)

PRIYA_REPLY = (
    "Aree Priya is a really sweet and confident girl from RRSDEC! 🌸 "
    "Always active in events and known for her smile that can fix a whole bad day 😄. "
    "Fun fact: College ke canteen wale bhi uska naam leke discount de dete hain "
    "— bas naam ka jaadu hi aisa hai! 😂"
)
ROHAN_REPLY = (
    "Rohan bhai is a proper RRSDEC legend 😎. "
    "Coding me tez, attendance me kam, par style me full marks! 💪 "
    "Fun fact: Teachers bhi kehte hain “iska confidence alag level pe hai” "
    "— par result ke time silent mode on kar deta hai 😅"
)


# --------------------------------------------------------------------------- #
#  Name dialogue                                                               #
# --------------------------------------------------------------------------- #

def test_female_name_sets_pending_and_probes():
    state = {}
    assert ask_about_person("who is Priya", state) == FEMALE_PROBE
    assert FEMALE_PROBE == "Is she from RRSDEC Begusarai?"
    assert state[PENDING_KEY] == {"name": "priya", "gender": "female"}


def test_male_name_sets_pending_and_probes():
    state = {}
    assert ask_about_person("who is Rohan", state) == MALE_PROBE
    assert MALE_PROBE == "Is he from RRSDEC Begusarai?"
    assert state[PENDING_KEY] == {"name": "rohan", "gender": "male"}


def test_no_name_leaves_state_alone():
    state = {}
    assert ask_about_person("what time is it", state) is None
    assert state == {}


def test_confirmation_returns_template_once():
    state = {}
    ask_about_person("who is Priya", state)
    assert confirm_person("yes", state) == PRIYA_REPLY
    assert PENDING_KEY not in state
    assert confirm_person("yes", state) is None


def test_confirmation_male_template_case_insensitive():
    state = {}
    ask_about_person("do you know rohan", state)
    assert confirm_person("HAAN", state) == ROHAN_REPLY


def test_non_affirmative_keeps_pending():
    state = {}
    ask_about_person("who is Priya", state)
    assert confirm_person("no", state) is None
    assert confirm_person("yes please", state) is None
    assert state[PENDING_KEY]["name"] == "priya"
    assert confirm_person("yup", state) == PRIYA_REPLY


def test_new_name_overwrites_pending():
    state = {}
    ask_about_person("who is Priya", state)
    ask_about_person("what about rohan", state)
    assert confirm_person("yes", state) == ROHAN_REPLY


def test_affirmative_without_pending():
    assert confirm_person("yes", {}) is None


def test_conversations_do_not_share_pending():
    alice, bob = {}, {}
    ask_about_person("who is Priya", alice)
    assert confirm_person("yes", bob) is None
    assert confirm_person("yes", alice) == PRIYA_REPLY


def test_corrupt_pending_is_ignored():
    state = {PENDING_KEY: "garbage"}
    assert confirm_person("yes", state) is None


# --------------------------------------------------------------------------- #
#  Rules                                                                       #
# --------------------------------------------------------------------------- #

@pytest.mark.parametrize("message", ["hi", "Hello!", "good morning", "Thank you so much", "bye"])
def test_personality_reply_known(message):
    assert personality_reply(message)


@pytest.mark.parametrize("message", [
    "who created you",
    "hello there friend, what is python",
    "this is hi",
    "",
    "where is rrsdec located",
])
def test_personality_reply_unknown(message):
    assert personality_reply(message) is None


def test_personality_identity():
    assert "chat buddy" in personality_reply("What's your name?")


# --------------------------------------------------------------------------- #
#  Creator attribution                                                         #
# --------------------------------------------------------------------------- #

def test_attribution_replaces_meta_reply():
    reply = apply_creator_attribution("Who created you?", "I was developed by Meta AI.")
    assert reply == CREATOR_ATTRIBUTION


@pytest.mark.parametrize("message, reply", [
    ("who created you", "I was trained by a research lab."),
    ("what is meta learning", "Meta learning is learning to learn."),
])
def test_attribution_leaves_other_replies(message, reply):
    assert apply_creator_attribution(message, reply) == reply
