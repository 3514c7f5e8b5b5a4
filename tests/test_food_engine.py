# tests/test_food_engine.py
import pytest

from fittrack.errors import EstimationUnavailable, MalformedEstimation, NotFound, Unauthorized, ValidationError
from fittrack.tracker.food_engine import build_food_prompt


def test_prompt_with_quantity():
    prompt = build_food_prompt("rice", "2 cups")
    assert '"2 cups of rice"' in prompt
    assert 'return "0" for all values' in prompt


def test_prompt_without_quantity():
    assert '"banana"' in build_food_prompt("banana")
    assert " of banana" not in build_food_prompt("banana", "  ")


def test_add_food_entry(food_engine, client, clock):
    client.replies.append('{"calories": 250, "protein": 10, "carbs": 20, "fat": 15}')

    entry = food_engine.add_food_entry("alice", "Peanut butter toast", "2 slices")

    assert entry["user"] == "alice"
    assert entry["foodName"] == "Peanut butter toast"
    assert entry["quantity"] == "2 slices"
    assert (entry["calories"], entry["protein"], entry["carbs"], entry["fat"]) == (250, 10, 20, 15)
    assert entry["date"] == clock.now
    assert "2 slices of Peanut butter toast" in client.prompts[0]


def test_missing_nutrients_default_to_zero(food_engine, client, food_store):
    client.replies.append('{"calories":250}')

    entry = food_engine.add_food_entry("alice", "Mystery stew")
    stored = food_store.find_by_id(entry["id"])

    assert stored["calories"] == 250
    assert stored["protein"] == 0
    assert stored["carbs"] == 0
    assert stored["fat"] == 0
    assert stored["quantity"] is None


def test_string_and_junk_values(food_engine, client):
    client.replies.append('```json\n{"calories": "0", "protein": "12.5", "carbs": null, "fat": "n/a"}\n```')
    entry = food_engine.add_food_entry("alice", "Salad")
    assert (entry["calories"], entry["protein"], entry["carbs"], entry["fat"]) == (0, 12.5, 0, 0)


def test_empty_food_name(food_engine, client):
    with pytest.raises(ValidationError):
        food_engine.add_food_entry("alice", "   ")
    assert client.prompts == []


def test_unparseable_reply_is_not_persisted(food_engine, client, food_store, clock):
    client.replies.append("That sounds delicious!")
    with pytest.raises(MalformedEstimation):
        food_engine.add_food_entry("alice", "Cake")
    assert food_store.find_between("alice", clock.now.replace(hour=0), clock.now.replace(hour=23)) == []


def test_service_down(food_engine, client):
    client.replies.append(EstimationUnavailable("quota"))
    with pytest.raises(EstimationUnavailable):
        food_engine.add_food_entry("alice", "Cake")


def test_delete_own_entry(food_engine, client, food_store):
    client.replies.append('{"calories": 90}')
    entry = food_engine.add_food_entry("alice", "Apple")

    food_engine.delete_food_entry("alice", entry["id"])
    assert food_store.find_by_id(entry["id"]) is None


def test_delete_other_users_entry(food_engine, client, food_store):
    client.replies.append('{"calories": 90}')
    entry = food_engine.add_food_entry("alice", "Apple")

    with pytest.raises(Unauthorized):
        food_engine.delete_food_entry("bob", entry["id"])
    assert food_store.find_by_id(entry["id"]) is not None


def test_delete_missing_entry(food_engine):
    with pytest.raises(NotFound):
        food_engine.delete_food_entry("alice", "5f43a1b2c3d4e5f6a7b8c9d0")
    with pytest.raises(NotFound):
        food_engine.delete_food_entry("alice", "garbage")


def test_huge_calorie_count_defaults_to_zero(food_engine, client):
    client.replies.append('{"calories": ' + "9" * 400 + ', "protein": 5}')
    entry = food_engine.add_food_entry("alice", "Everything bagel")
    assert (entry["calories"], entry["protein"]) == (0, 5)
