"""
Tests for profile lifecycle: create/update, username checks, details view
and request payload validation.
"""
from datetime import date, timedelta
from uuid import uuid4

import pytest
from pydantic import ValidationError as PayloadError

from cordigram.core.config import get_settings
from cordigram.schemas.profiles import ProfileUpdateRequest, ProfileUpsertRequest
from cordigram.services.errors import NotFoundError, ValidationError
from cordigram.services.follows import follow_user
from cordigram.services.profiles import (
    create_or_update_profile,
    get_profile_details,
    is_username_available,
    update_profile,
)

from tests.fixtures.directory_fixtures import make_company, make_profile


class TestCreateOrUpdateProfile:

    def test_new_profile_gets_default_avatar(self, db):
        user_id = uuid4()
        profile = create_or_update_profile(db, user_id, display_name=" Ann ", username="Ann_1")

        assert profile.user_id == user_id
        assert profile.username == "ann_1"
        assert profile.display_name == "Ann"
        assert profile.avatar_url == get_settings().DEFAULT_AVATAR_URL

    def test_second_call_updates_in_place(self, db):
        user_id = uuid4()
        first = create_or_update_profile(db, user_id, display_name="Ann", username="ann")
        second = create_or_update_profile(
            db, user_id, display_name="Ann B", username="ann", location=" Hanoi "
        )
        assert first.id == second.id
        assert second.display_name == "Ann B"
        assert second.location == "Hanoi"

    def test_username_taken_by_someone_else(self, db):
        make_profile(db, "ann")
        with pytest.raises(ValidationError, match="Username already taken"):
            create_or_update_profile(db, uuid4(), display_name="Other", username="ann")


class TestUsernameAvailability:

    def test_taken_username(self, db):
        make_profile(db, "ann")
        assert is_username_available(db, "ann") is False
        assert is_username_available(db, "ANN") is False

    def test_own_username_is_available_when_excluded(self, db):
        profile = make_profile(db, "ann")
        assert is_username_available(db, "ann", exclude_user_id=str(profile.user_id)) is True

    def test_free_username(self, db):
        assert is_username_available(db, "nobody") is True


class TestUpdateProfile:

    def test_missing_profile(self, db):
        with pytest.raises(NotFoundError):
            update_profile(db, uuid4(), ProfileUpdateRequest(bio="x"))

    def test_invalid_user_id(self, db):
        with pytest.raises(ValidationError):
            update_profile(db, "nope", ProfileUpdateRequest(bio="x"))

    def test_bio_line_endings_are_normalized(self, db):
        profile = make_profile(db, "ann")
        updated = update_profile(db, profile.user_id, ProfileUpdateRequest(bio="a\r\nb\rc"))
        assert updated.bio == "a\nb\nc"

    def test_username_change_checks_availability(self, db):
        make_profile(db, "bob")
        profile = make_profile(db, "ann")
        with pytest.raises(ValidationError, match="Username already taken"):
            update_profile(db, profile.user_id, ProfileUpdateRequest(username="bob"))

    def test_gender_and_birthdate_can_be_cleared(self, db):
        profile = make_profile(db, "ann")
        update_profile(
            db, profile.user_id,
            ProfileUpdateRequest(gender="female", birthdate="2000-01-31"),
        )
        updated = update_profile(
            db, profile.user_id, ProfileUpdateRequest(gender="", birthdate="")
        )
        assert updated.gender == ""
        assert updated.birthdate is None


class TestProfileDetails:

    def test_lookup_by_username_profile_id_and_user_id(self, db):
        profile = make_profile(db, "ann", "Ann")
        for key in ("@Ann", str(profile.id), str(profile.user_id)):
            details = get_profile_details(db, key)
            assert details["username"] == "ann"

    def test_only_one_leading_at_sign_is_stripped(self, db):
        make_profile(db, "ann")
        assert get_profile_details(db, "@ann")["username"] == "ann"
        with pytest.raises(NotFoundError):
            get_profile_details(db, "@@ann")

    def test_missing_profile(self, db):
        with pytest.raises(NotFoundError):
            get_profile_details(db, "ghost")

    def test_blank_key(self, db):
        with pytest.raises(ValidationError):
            get_profile_details(db, "  ")

    def test_workplace_stats_and_follow_state(self, db):
        company = make_company(db, "Acme Corp")
        ann = make_profile(db, "ann")
        bob = make_profile(db, "bob")
        update_profile(
            db, ann.user_id,
            ProfileUpdateRequest(workplace_company_id=str(company.id), birthdate="1999-05-04"),
        )
        follow_user(db, bob.user_id, ann.user_id)

        details = get_profile_details(db, "ann", viewer_id=bob.user_id)

        assert details["workplace"] == {"company_id": str(company.id), "company_name": "Acme Corp"}
        assert details["birthdate"] == "1999-05-04"
        assert details["stats"] == {"followers": 1, "following": 0}
        assert details["is_following"] is True

    def test_unlinked_workplace_is_blank(self, db):
        make_profile(db, "ann")
        details = get_profile_details(db, "ann")
        assert details["workplace"] == {"company_id": "", "company_name": ""}
        assert details["is_following"] is False


class TestProfilePayloads:

    @pytest.mark.parametrize("username", ["ab", "has space", "UPPER!", "x" * 31])
    def test_invalid_usernames(self, username):
        with pytest.raises(PayloadError):
            ProfileUpdateRequest(username=username)

    def test_username_is_lowercased(self):
        assert ProfileUpdateRequest(username=" Ann.B ").username == "ann.b"

    def test_bio_limit(self):
        ProfileUpdateRequest(bio="x" * 300)
        with pytest.raises(PayloadError):
            ProfileUpdateRequest(bio="x" * 301)

    def test_future_birthdate_rejected(self):
        with pytest.raises(PayloadError):
            ProfileUpdateRequest(birthdate=date.today() + timedelta(days=1))

    def test_unknown_gender_rejected(self):
        with pytest.raises(PayloadError):
            ProfileUpdateRequest(gender="robot")

    def test_workplace_name_limit(self):
        with pytest.raises(PayloadError):
            ProfileUpdateRequest(workplace_name="x" * 121)

    def test_touches_workplace_tracks_explicit_fields(self):
        assert ProfileUpdateRequest(bio="x").touches_workplace is False
        assert ProfileUpdateRequest(workplace_name="").touches_workplace is True
        assert ProfileUpdateRequest(workplace_company_id=None).touches_workplace is True

    def test_upsert_requires_display_name(self):
        with pytest.raises(PayloadError):
            ProfileUpsertRequest(display_name="  ", username="ann")
