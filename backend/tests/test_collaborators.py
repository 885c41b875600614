"""Tests for the geocoding address validator and local picture storage."""
import os

import httpx
import pytest
from PIL import Image

from holiday_api.errors import LocationValidationError, PictureStorageError
from holiday_api.models.activity import Activity
from holiday_api.models.holiday import Holiday
from holiday_api.services import activity_service, holiday_service
from holiday_api.services.location_service import AddressValidator, ensure_address_valid
from holiday_api.services.picture_storage import PictureStorage
from tests.conftest import image_bytes, make_activity, make_holiday, make_location, make_participant, row_ids, utc


def _validator(handler) -> AddressValidator:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return AddressValidator(api_key="test-key", url="https://geo.test/geocode/json", client=client)


class TestAddressValidator:
    """Geocoding responses map to valid / invalid / error."""

    def test_ok_with_results_is_valid(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json={"status": "OK", "results": [{"place_id": "abc"}]})

        location = make_location()
        assert _validator(handler).is_address_valid(location.formatted_address()) is True
        assert seen["params"] == {"address": "98000 Monaco, Monaco", "key": "test-key"}

    def test_zero_results_is_invalid(self):
        validator = _validator(lambda request: httpx.Response(200, json={"status": "ZERO_RESULTS", "results": []}))
        assert validator.is_address_valid("nowhere") is False

    def test_http_error_status_is_invalid(self):
        validator = _validator(lambda request: httpx.Response(500, text="boom"))
        assert validator.is_address_valid("somewhere") is False

    def test_transport_failure_raises(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        with pytest.raises(LocationValidationError):
            _validator(handler).is_address_valid("somewhere")

    def test_malformed_json_raises(self):
        validator = _validator(lambda request: httpx.Response(200, text="not json"))
        with pytest.raises(LocationValidationError):
            validator.is_address_valid("somewhere")

    def test_formatted_address_with_street(self):
        location = make_location("Monaco", "Monaco", "98000")
        location.street = "Place du Casino"
        location.number = "1"
        assert location.formatted_address() == "Place du Casino 1, 98000 Monaco, Monaco"

    def test_ensure_address_valid_rejects(self):
        validator = _validator(lambda request: httpx.Response(200, json={"status": "ZERO_RESULTS", "results": []}))
        with pytest.raises(LocationValidationError):
            ensure_address_valid(validator, make_location())


def _rejecting_validator() -> AddressValidator:
    return _validator(lambda request: httpx.Response(200, json={"status": "ZERO_RESULTS", "results": []}))


class TestAddressRejection:
    """An address the validator refuses blocks holiday and activity writes."""

    def test_holiday_creation(self, db):
        creator = make_participant(db)
        holiday = Holiday(
            name="Atlantis",
            start_date=utc(2024, 7, 1),
            end_date=utc(2024, 7, 8),
            creator_id=creator.participant_id,
            location=make_location("Atlantis", "Nowhere", "00000"),
        )
        with pytest.raises(LocationValidationError):
            holiday_service.create_holiday(db, holiday, validator=_rejecting_validator())
        assert db.query(Holiday).count() == 0

    def test_holiday_update_leaves_row_unchanged(self, db):
        creator = make_participant(db)
        holiday = make_holiday(db, creator)
        before = row_ids(db)
        with pytest.raises(LocationValidationError):
            holiday_service.update_holiday(
                db,
                holiday.holiday_id,
                {"name": "Atlantis trip"},
                location_updates={"locality": "Atlantis", "country": "Nowhere"},
                validator=_rejecting_validator(),
            )
        reloaded = holiday_service.get_holiday_by_id(db, holiday.holiday_id)
        assert reloaded.name == "Monaco 2024"
        assert reloaded.location.locality == "Monaco"
        assert reloaded.location.country == "Monaco"
        assert row_ids(db) == before

    def test_activity_creation(self, db):
        creator = make_participant(db)
        holiday = make_holiday(db, creator)
        before = row_ids(db)
        activity = Activity(
            holiday_id=holiday.holiday_id,
            name="Diving",
            start_date=utc(2024, 7, 2),
            end_date=utc(2024, 7, 3),
            location=make_location("Atlantis", "Nowhere", "00000"),
        )
        with pytest.raises(LocationValidationError):
            activity_service.add_activity(db, activity, validator=_rejecting_validator())
        assert db.query(Activity).count() == 0
        assert row_ids(db) == before

    def test_activity_update_leaves_row_unchanged(self, db):
        creator = make_participant(db)
        holiday = make_holiday(db, creator)
        activity = make_activity(db, holiday)
        before = row_ids(db)
        with pytest.raises(LocationValidationError):
            activity_service.update_activity(
                db,
                activity.activity_id,
                {"name": "Diving", "price": 10.0},
                location_updates={"locality": "Atlantis", "country": "Nowhere"},
                validator=_rejecting_validator(),
            )
        reloaded = activity_service.get_activity_by_id(db, activity.activity_id)
        assert reloaded.name == "Casino Night"
        assert reloaded.price == 50.0
        assert reloaded.location.locality == "Monaco"
        assert row_ids(db) == before


class TestPictureStorage:
    """Upload validation, re-encoding, stock pictures and deletion."""

    def test_store_and_delete(self, pictures):
        path = pictures.store("beach.JPG", image_bytes("JPEG"))
        assert path.startswith("images/") and path.endswith(".jpg")
        full_path = os.path.join(pictures.root, path)
        assert os.path.isfile(full_path)
        with Image.open(full_path) as stored:
            assert stored.format == "JPEG"

        pictures.delete(path)
        assert not os.path.exists(full_path)

    def test_rejects_non_image_content(self, pictures):
        with pytest.raises(PictureStorageError):
            pictures.store("evil.png", b"<?php system($_GET['cmd']); ?>")
        assert not os.path.exists(os.path.join(pictures.root, pictures.folder))

    def test_wide_picture_narrowed_keeping_ratio(self, pictures):
        path = pictures.store("panorama.png", image_bytes("PNG", size=(1600, 400)))
        with Image.open(os.path.join(pictures.root, path)) as stored:
            assert stored.format == "PNG"
            assert stored.size == (800, 200)

    def test_narrow_picture_keeps_size(self, pictures):
        path = pictures.store("thumb.jpeg", image_bytes("PNG", size=(120, 90)))
        with Image.open(os.path.join(pictures.root, path)) as stored:
            # Encoder follows the file extension
            assert stored.format == "JPEG"
            assert stored.size == (120, 90)

    def test_rejects_bad_extension(self, pictures):
        with pytest.raises(PictureStorageError):
            pictures.store("notes.txt", b"hello")

    def test_rejects_empty_and_oversized(self, tmp_path):
        storage = PictureStorage(root=str(tmp_path), max_size=4)
        with pytest.raises(PictureStorageError):
            storage.store("a.png", b"")
        with pytest.raises(PictureStorageError):
            storage.store("a.png", b"12345")

    def test_stock_pictures_never_deleted(self, pictures):
        pictures.delete(pictures.default_holiday_picture)
        pictures.delete(pictures.default_activity_picture)

    def test_any_picture_in_stock_folder_is_stock(self, pictures):
        assert pictures.is_stock_picture("defaultImg/logoTravel1.png") is True
        assert pictures.is_stock_picture("images/defaultImg.png") is False
        # Older stock paths are left alone even though the file is absent
        pictures.delete("defaultImg/logoTravel1.png")

    def test_missing_file_raises(self, pictures):
        with pytest.raises(PictureStorageError):
            pictures.delete("images/missing.png")

    def test_discard_swallows_missing_file(self, pictures):
        pictures.discard("images/missing.png")
