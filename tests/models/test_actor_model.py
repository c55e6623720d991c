from __future__ import annotations

import base64

import pytest

from actor_roster.models.actors import Actor, ActorDataError, actor_from_mapping, describe_actor


def test_describe_actor_lists_text_fields() -> None:
    actor = Actor(name="Alice", role="Herself", thumb="https://img.test/a.jpg", id="nm001", order=3)

    text = describe_actor(actor)

    assert text == (
        "Actor\n"
        "  Name:  Alice\n"
        "  Role:  Herself\n"
        "  Thumb: https://img.test/a.jpg\n"
        "  ID:    nm001\n"
        "  Order: 3\n"
    )
    assert str(actor) == text


def test_describe_actor_omits_image_bytes() -> None:
    text = describe_actor(Actor(name="Bob", image=b"secret-bytes"))
    assert "secret-bytes" not in text


def test_actor_from_mapping_coerces_loose_rows() -> None:
    row = {
        "name": "  Carol ",
        "role": None,
        "thumbnail": "https://img.test/c.jpg",
        "id": 42,
        "order": " 7 ",
        "image": base64.b64encode(b"jpeg").decode("ascii"),
        "preserveImage": "true",
    }

    actor = actor_from_mapping(row)

    assert actor.name == "Carol"
    assert actor.role == ""
    assert actor.thumb == "https://img.test/c.jpg"
    assert actor.id == "42"
    assert actor.order == 7
    assert actor.image == b"jpeg"
    assert actor.preserve_image is True
    assert actor.image_has_changed is False


def test_actor_from_mapping_defaults_bad_order_to_zero() -> None:
    assert actor_from_mapping({"name": "Dan", "order": "first"}).order == 0
    assert actor_from_mapping({"name": "Dan", "order": True}).order == 0


def test_actor_from_mapping_rejects_non_mapping() -> None:
    with pytest.raises(ActorDataError):
        actor_from_mapping(["not", "a", "row"])  # type: ignore[arg-type]


def test_actor_from_mapping_rejects_invalid_base64_image() -> None:
    with pytest.raises(ActorDataError):
        actor_from_mapping({"name": "Eve", "image": "not base64!!"})


def test_to_dict_round_trips_through_mapping() -> None:
    actor = Actor(name="Frank", role="Host", id="nm9", order=2, image=b"\x89PNG", preserve_image=True)

    payload = actor.to_dict()

    assert payload["image"] == base64.b64encode(b"\x89PNG").decode("ascii")
    assert actor_from_mapping(payload) == actor
