import pytest

from db.errors import ConstraintViolation, NotFound
from models.album import Album


def test_insert_then_get_album_round_trip(store):
    album = Album(name="X", artist="Y", uri="u1", image_link="img")
    store.insert_album(album)

    fetched = store.get_album("u1")
    assert fetched == album
    assert fetched.id is not None


def test_get_album_without_image_link(store):
    store.insert_album(Album(name="Blue", artist="Joni Mitchell", uri="u2"))
    assert store.get_album("u2").image_link is None


def test_get_album_unknown_uri(store):
    with pytest.raises(NotFound):
        store.get_album("missing")


def test_insert_album_duplicate_uri(store):
    store.insert_album(Album(name="X", artist="Y", uri="u1"))
    with pytest.raises(ConstraintViolation):
        store.insert_album(Album(name="Other", artist="Z", uri="u1"))
    # The failed insert was rolled back, the first one survives.
    assert store.get_album("u1").name == "X"


def test_album_equality_ignores_id():
    assert Album("X", "Y", "u1", "img", id=1) == Album("X", "Y", "u1", "img", id=7)
    assert Album("X", "Y", "u1", "img") != Album("X", "Y", "u2", "img")


def test_album_str():
    assert str(Album("Blue", "Joni Mitchell", "u2")) == "Blue - Joni Mitchell (u2)"
