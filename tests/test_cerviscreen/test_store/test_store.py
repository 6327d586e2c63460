"""Tests for the SQLite and hosted-backend stores and the repositories."""

from __future__ import annotations

import json

import httpx
import pytest

from cerviscreen.config import PortalConfig
from cerviscreen.errors import (
    BackendAuthError,
    BackendConflict,
    BackendError,
    BackendTimeout,
    BackendUnavailable,
    error_from_status_code,
)
from cerviscreen.model.consent import ConsentRecord, EligibilityData
from cerviscreen.model.decision import ClinicalDecision, DecisionType, Urgency
from cerviscreen.model.notification import Notification, NotificationType
from cerviscreen.model.profile import Patient, Physician
from cerviscreen.model.question import AnswerRecord
from cerviscreen.model.submission import ScreeningImage, Submission, SubmissionStatus
from cerviscreen.store import open_store
from cerviscreen.store.repositories import (
    ConsentRepository,
    DecisionRepository,
    NotificationRepository,
    PatientRepository,
    PhysicianRepository,
    SubmissionRepository,
)
from cerviscreen.store.sqlite import SqliteStore
from cerviscreen.store.supabase import SupabaseClient, SupabaseStore


def _submission(id: str = "sub-1", submitted_at: str = "2025-03-01T10:00:00+00:00", **kwargs) -> Submission:
    defaults = dict(
        patient_id="pat-1",
        physician_id="phy-1",
        patient_name="Jane Doe",
        questionnaire_answers=(
            AnswerRecord("symptoms", "Symptoms?", ("No symptoms - routine screening",), "t1"),
            AnswerRecord("bleeding-details", "When?", "Not provided", "t2"),
        ),
        images=(
            ScreeningImage(
                id="img-1",
                file_name="a.jpg",
                file_size=10,
                content_type="image/jpeg",
                quality_score=72,
                quality_feedback="Fair quality - May need repeat capture",
                preview="data:image/jpeg;base64,AAAA",
            ),
        ),
    )
    defaults.update(kwargs)
    return Submission(id=id, submitted_at=submitted_at, **defaults)


# ===========================================================================
# SqliteStore
# ===========================================================================


class TestSqliteStore:
    def test_insert_and_select(self, store: SqliteStore) -> None:
        store.insert("physicians", {"id": "p1", "full_name": "B"})
        store.insert("physicians", {"id": "p2", "full_name": "A"})
        rows = store.select("physicians", order_by="full_name")
        assert [r["id"] for r in rows] == ["p2", "p1"]

    def test_select_filters_and_limit(self, store: SqliteStore) -> None:
        for i in range(3):
            store.insert("physicians", {"id": f"p{i}", "full_name": f"N{i}", "phone": "x"})
        assert len(store.select("physicians", filters={"phone": "x"}, limit=2)) == 2
        assert store.select("physicians", filters={"id": "missing"}) == []

    def test_upsert_merges_columns(self, store: SqliteStore) -> None:
        store.upsert("patients", {"id": "pat", "full_name": "Jane"})
        store.upsert("patients", {"id": "pat", "assigned_physician_id": "phy"})
        row = store.select("patients", filters={"id": "pat"})[0]
        assert row["full_name"] == "Jane"
        assert row["assigned_physician_id"] == "phy"

    def test_update_returns_rowcount(self, store: SqliteStore) -> None:
        store.insert("physicians", {"id": "p1", "full_name": "A"})
        assert store.update("physicians", {"phone": "1"}, filters={"id": "p1"}) == 1
        assert store.update("physicians", {"phone": "1"}, filters={"id": "nope"}) == 0

    def test_count(self, store: SqliteStore) -> None:
        assert store.count("physicians") == 0
        store.insert("physicians", {"id": "p1", "full_name": "A"})
        assert store.count("physicians", filters={"id": "p1"}) == 1

    def test_rejects_bad_identifiers(self, store: SqliteStore) -> None:
        with pytest.raises(ValueError, match="Invalid SQL identifier"):
            store.select("physicians; DROP TABLE physicians")


def test_open_store_sqlite_runs_migrations(tmp_path) -> None:
    opened = open_store(PortalConfig(db_path=str(tmp_path / "portal.db")))
    assert isinstance(opened, SqliteStore)
    assert opened.count("screening_submissions") == 0


def test_open_store_rejects_unknown_backend() -> None:
    with pytest.raises(ValueError, match="Unknown backend"):
        open_store(PortalConfig(backend="mongo"))


def test_open_store_supabase_requires_credentials() -> None:
    with pytest.raises(ValueError):
        open_store(PortalConfig(backend="supabase"))


# ===========================================================================
# Repositories
# ===========================================================================


class TestProfileRepositories:
    def test_physicians_listed_by_name(self, store) -> None:
        repo = PhysicianRepository(store)
        repo.upsert(Physician(id="b", full_name="Zed", years_of_experience=3))
        repo.upsert(Physician(id="a", full_name="Amy"))
        assert [p.full_name for p in repo.list_all()] == ["Amy", "Zed"]
        assert repo.get("b").years_of_experience == 3
        assert repo.get("missing") is None

    def test_assign_physician_creates_patient(self, store) -> None:
        repo = PatientRepository(store)
        repo.assign_physician("pat-1", "phy-1")
        assert repo.get("pat-1") == Patient(id="pat-1", assigned_physician_id="phy-1")

    def test_assign_physician_keeps_profile(self, store) -> None:
        repo = PatientRepository(store)
        repo.upsert(Patient(id="pat-1", full_name="Jane Doe", email="jane@example.com"))
        repo.assign_physician("pat-1", "phy-2")
        patient = repo.get("pat-1")
        assert patient.full_name == "Jane Doe"
        assert patient.assigned_physician_id == "phy-2"


class TestConsentRepository:
    def test_latest_for_patient(self, store) -> None:
        repo = ConsentRepository(store)
        eligibility = EligibilityData(True, True, True, True)
        repo.create(ConsentRecord("c1", "pat-1", True, eligibility, "2025-01-01T00:00:00"))
        repo.create(ConsentRecord("c2", "pat-1", True, eligibility, "2025-02-01T00:00:00"))
        latest = repo.latest_for_patient("pat-1")
        assert latest.id == "c2"
        assert latest.consent_given is True
        assert latest.eligibility.all_met
        assert repo.latest_for_patient("other") is None


class TestSubmissionRepository:
    def test_round_trip_json_columns(self, store) -> None:
        repo = SubmissionRepository(store)
        original = _submission()
        repo.create(original)
        assert repo.get("sub-1") == original

    def test_list_by_physician_newest_first(self, store) -> None:
        repo = SubmissionRepository(store)
        repo.create(_submission("old", "2025-03-01T10:00:00+00:00"))
        repo.create(_submission("new", "2025-03-02T10:00:00+00:00"))
        repo.create(_submission("other", physician_id="phy-9"))
        assert [s.id for s in repo.list_by_physician("phy-1")] == ["new", "old"]

    def test_mark_reviewed_and_filter(self, store) -> None:
        repo = SubmissionRepository(store)
        repo.create(_submission("a"))
        repo.create(_submission("b"))
        repo.mark_reviewed("a", "2025-03-03T00:00:00+00:00")
        reviewed = repo.get("a")
        assert reviewed.status is SubmissionStatus.REVIEWED
        assert reviewed.reviewed_at == "2025-03-03T00:00:00+00:00"
        pending = repo.list_by_physician("phy-1", SubmissionStatus.PENDING_REVIEW)
        assert [s.id for s in pending] == ["b"]

    def test_stored_answer_format(self, store) -> None:
        SubmissionRepository(store).create(_submission())
        row = store.select("screening_submissions", filters={"id": "sub-1"})[0]
        answers = json.loads(row["questionnaire_answers"])
        assert answers[0]["questionId"] == "symptoms"
        assert answers[1]["answer"] == "Not provided"
        assert row["image_count"] == 1


class TestDecisionAndNotificationRepositories:
    def test_decision_urgency_nullable(self, store) -> None:
        SubmissionRepository(store).create(_submission())
        repo = DecisionRepository(store)
        repo.create(ClinicalDecision("d1", "sub-1", "phy-1", DecisionType.REASSURE, "Fine", None, "t1"))
        repo.create(
            ClinicalDecision("d2", "sub-1", "phy-1", DecisionType.REFER_URGENT, "Refer", Urgency.URGENT, "t2")
        )
        decisions = repo.list_by_submission("sub-1")
        assert [d.id for d in decisions] == ["d2", "d1"]
        assert decisions[0].urgency is Urgency.URGENT
        assert decisions[1].urgency is None

    def test_unread_and_mark_read(self, store) -> None:
        repo = NotificationRepository(store)
        for i in range(3):
            repo.create(Notification(f"n{i}", "pat-1", "Title", "Body", created_at=f"t{i}"))
        repo.create(Notification("x", "pat-2", "Title", "Body", NotificationType.URGENT))
        assert repo.count_unread("pat-1") == 3
        repo.mark_read("n0")
        assert repo.count_unread("pat-1") == 2
        assert repo.mark_all_read("pat-1") == 2
        assert repo.count_unread("pat-1") == 0
        assert repo.count_unread("pat-2") == 1
        assert [n.id for n in repo.list_for_patient("pat-1")] == ["n2", "n1", "n0"]
        assert repo.get("x").notification_type is NotificationType.URGENT


# ===========================================================================
# Hosted backend over httpx
# ===========================================================================


def _client(handler) -> SupabaseClient:
    return SupabaseClient(
        "https://demo.supabase.co", "anon-key", transport=httpx.MockTransport(handler)
    )


class TestSupabaseStore:
    def test_select_builds_postgrest_query(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[{"id": "n1"}])

        rows = SupabaseStore(_client(handler)).select(
            "notifications",
            filters={"patient_id": "pat-1", "is_read": False},
            order_by="created_at",
            descending=True,
            limit=5,
        )

        assert rows == [{"id": "n1"}]
        request = seen[0]
        assert request.url.path == "/rest/v1/notifications"
        assert request.url.params["patient_id"] == "eq.pat-1"
        assert request.url.params["is_read"] == "eq.false"
        assert request.url.params["order"] == "created_at.desc"
        assert request.url.params["limit"] == "5"
        assert request.headers["apikey"] == "anon-key"
        assert request.headers["authorization"] == "Bearer anon-key"

    def test_upsert_sends_merge_preference(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201)

        SupabaseStore(_client(handler)).upsert("patients", {"id": "p", "full_name": "J"})
        request = seen[0]
        assert request.method == "POST"
        assert request.url.params["on_conflict"] == "id"
        assert "merge-duplicates" in request.headers["prefer"]
        assert json.loads(request.content) == {"id": "p", "full_name": "J"}

    def test_update_counts_returned_rows(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "PATCH"
            assert request.url.params["id"] == "eq.s1"
            return httpx.Response(200, json=[{"id": "s1"}])

        assert SupabaseStore(_client(handler)).update(
            "screening_submissions", {"status": "reviewed"}, filters={"id": "s1"}
        ) == 1

    def test_count_reads_content_range(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.headers["prefer"] == "count=exact"
            return httpx.Response(200, json=[], headers={"Content-Range": "*/4"})

        assert SupabaseStore(_client(handler)).count("notifications") == 4

    def test_repository_over_hosted_backend(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json=[{
                    "id": "c1",
                    "patient_id": "pat-1",
                    "consent_given": True,
                    "eligibility_data": {"ageConfirmed": True, "hasCervix": True,
                                         "notPregnant": True, "noRecentScreening": True},
                    "created_at": "2025-01-01T00:00:00Z",
                }],
            )

        record = ConsentRepository(SupabaseStore(_client(handler))).latest_for_patient("pat-1")
        assert record.eligibility.all_met


class TestSupabaseErrors:
    @pytest.mark.parametrize(
        ("status", "error_type"),
        [(401, BackendAuthError), (403, BackendAuthError), (409, BackendConflict), (400, BackendError)],
    )
    def test_status_mapping(self, status, error_type) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status, json={"message": "nope"})

        with pytest.raises(error_type) as exc_info:
            SupabaseStore(_client(handler)).select("patients")
        assert exc_info.value.upstream_status == status
        assert str(exc_info.value) == "nope"

    def test_server_errors_are_retryable(self) -> None:
        assert error_from_status_code(503, "down").retryable
        assert error_from_status_code(429, "slow").retryable
        assert not error_from_status_code(400, "bad").retryable

    def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(BackendTimeout):
            SupabaseStore(_client(handler)).select("patients")

    def test_connection_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(BackendUnavailable):
            SupabaseStore(_client(handler)).select("patients")
