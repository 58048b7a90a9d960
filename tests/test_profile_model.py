from app.models.profile import DEFAULT_BIO, DEFAULT_LOCATION, Profile


def test_null_collections_become_empty_lists():
    profile = Profile.from_document({"userId": "u1", "photoUrls": None, "interests": None})

    assert profile.photo_urls == []
    assert profile.interests == []


def test_missing_fields_take_defaults():
    profile = Profile.from_document({"userId": "u1"})

    assert profile.age == 0
    assert profile.latitude == 0.0
    assert profile.voice_note_duration == 0
    assert profile.is_verified is False
    assert profile.profile_image_url is None


def test_interests_drop_duplicates_keeping_order():
    profile = Profile(id="u1", interests=["Art", "Music", "Art", "Hiking", "Music"])

    assert profile.interests == ["Art", "Music", "Hiking"]


def test_document_uses_stored_key_names():
    profile = Profile(id="u1", full_name="Jade Walker", is_verified=True, last_active=5)
    doc = profile.to_document()

    assert doc["userId"] == "u1"
    assert doc["fullName"] == "Jade Walker"
    assert doc["isVerified"] is True
    assert doc["lastActive"] == 5
    assert doc["photoUrls"] == []
    assert "full_name" not in doc


def test_signup_defaults():
    profile = Profile.for_signup("u1", "Jade Walker", "jade@example.com", now=1000)

    assert profile.id == "u1"
    assert profile.bio == DEFAULT_BIO
    assert profile.location == DEFAULT_LOCATION
    assert profile.age == 0
    assert profile.created_at == 1000
    assert profile.last_active == 1000


def test_display_helpers():
    profile = Profile(
        id="u1",
        full_name="Jade Walker",
        age=24,
        distance_km=0.66,
        photo_urls=["a.jpg", "b.jpg"],
    )

    assert profile.first_name == "Jade"
    assert profile.name_age == "Jade Walker, 24"
    assert profile.formatted_distance == "0.7 km away"
    assert profile.has_multiple_photos
    assert profile.primary_photo == "a.jpg"


def test_recently_active_window():
    profile = Profile(id="u1", last_active=1_000_000)

    assert profile.is_recently_active(1_000_000 + 60_000)
    assert not profile.is_recently_active(1_000_000 + 10 * 60_000)
    assert not Profile(id="u2").is_recently_active(1_000_000)
