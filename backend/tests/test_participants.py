"""Tests for participant registration, federated sync, membership views and statistics."""
from holiday_api.models.participant import Participant
from holiday_api.services import participant_service, statistics_service
from tests.conftest import invite, make_holiday, make_location, make_participant, utc


class TestParticipants:
    """Participant manager."""

    def test_duplicate_email_rejected(self, db):
        make_participant(db, "Alice", email="alice@example.com")
        clone = Participant(first_name="Other", last_name="Alice", email="alice@example.com")
        assert participant_service.create_participant(db, clone) is False
        assert participant_service.count_participants(db) == 1

    def test_sync_creates_then_updates_names(self, db):
        created = participant_service.sync_external_participant(db, "dana@example.com", "Dana")
        assert created.external_provider == "google"
        assert created.last_name == ""

        updated = participant_service.sync_external_participant(db, "dana@example.com", "Danielle", "Smith")
        assert updated.participant_id == created.participant_id
        assert updated.first_name == "Danielle"
        assert updated.last_name == "Smith"
        assert updated.email == "dana@example.com"
        assert participant_service.count_participants(db) == 1

    def test_in_and_not_in_holiday(self, db):
        alice = make_participant(db, "Alice")
        bob = make_participant(db, "Bob")
        carol = make_participant(db, "Carol")
        holiday = make_holiday(db, alice)
        invite(db, holiday, bob, accepted=False)

        members = participant_service.list_participants_in_holiday(db, holiday.holiday_id)
        assert [p.participant_id for p in members] == [alice.participant_id]
        # Pending invitees are neither members nor candidates for a new invitation
        candidates = participant_service.list_participants_not_in_holiday(db, holiday.holiday_id)
        assert [p.participant_id for p in candidates] == [carol.participant_id]


class TestStatistics:
    """Participant totals and holidaymakers per country."""

    def test_global_statistics(self, db):
        make_participant(db, "Alice")
        make_participant(db, "Bob")
        assert statistics_service.get_global_statistics(db) == {"active_participants": 2}

    def test_holidaymakers_by_country(self, db):
        alice = make_participant(db, "Alice")
        bob = make_participant(db, "Bob")
        carol = make_participant(db, "Carol")
        monaco = make_holiday(db, alice, name="Monaco", start=utc(2024, 7, 1), end=utc(2024, 7, 8))
        invite(db, monaco, bob, accepted=True)
        invite(db, monaco, carol, accepted=False)
        make_holiday(
            db, carol, name="Rome", start=utc(2024, 7, 5), end=utc(2024, 7, 12),
            location=make_location("Rome", "Italy", "00100"),
        )
        make_holiday(
            db, bob, name="Later", start=utc(2024, 9, 1), end=utc(2024, 9, 5),
            location=make_location("Paris", "France", "75001"),
        )

        stats = statistics_service.count_holidaymakers_by_country(db, utc(2024, 7, 6))
        assert stats == [
            {"country": "Italy", "participants": 1},
            {"country": "Monaco", "participants": 2},
        ]

    def test_no_holiday_running(self, db):
        alice = make_participant(db)
        make_holiday(db, alice)
        assert statistics_service.count_holidaymakers_by_country(db, utc(2025, 1, 1)) == []
