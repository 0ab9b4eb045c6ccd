import httpx
import pytest

from app.modules.business.service import verification_view
from app.modules.business.webhooks import VerificationNotifier, get_verification_notifier

URL = "/api/v1/business-verification"
TABLE = "ams_business_profiles"


class RecordingNotifier:
    def __init__(self):
        self.payloads = []

    def notify(self, payload):
        self.payloads.append(payload)
        return True


@pytest.fixture()
def notifier(app):
    recorder = RecordingNotifier()
    app.dependency_overrides[get_verification_notifier] = lambda: recorder
    return recorder


def seed_profile(fake_supabase, user_id, status, attempts):
    return fake_supabase.seed(TABLE, {
        "user_id": user_id,
        "company_email": "biz@example.com",
        "company_website": "https://acme.io",
        "linkedin_url": None,
        "verification_status": status,
        "attempt_count": attempts,
    })


@pytest.mark.parametrize(
    "profile, expected",
    [
        (None, "form"),
        ({"verification_status": "pending", "attempt_count": 1}, "pending"),
        ({"verification_status": "verified", "attempt_count": 2}, "verified"),
        ({"verification_status": "rejected", "attempt_count": 2}, "rejected"),
        ({"verification_status": "rejected", "attempt_count": 3}, "contact_support"),
        ({"verification_status": "rejected", "attempt_count": None}, "rejected"),
    ],
)
def test_verification_view(profile, expected):
    assert verification_view(profile, max_attempts=3) == expected


def test_status_without_profile_shows_form(client, fake_supabase):
    headers = fake_supabase.login(user_id="b-1", user_type="business")
    r = client.get(URL, headers=headers)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["view"] == "form"
    assert body["can_submit"] is True
    assert body["attempts_remaining"] == 3


def test_first_submission_inserts_pending_profile(client, fake_supabase, notifier):
    headers = fake_supabase.login(user_id="b-1", email="biz@example.com", user_type="business")
    r = client.post(URL, headers=headers, json={
        "company_website": "https://acme.io", "linkedin_url": "  ",
    })
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["verification_status"] == "pending"
    assert body["attempt_count"] == 1
    assert body["linkedin_url"] is None

    [row] = fake_supabase.rows(TABLE)
    assert row["user_id"] == "b-1"
    assert row["company_email"] == "biz@example.com"

    assert notifier.payloads == [{
        "email": "biz@example.com",
        "website": "https://acme.io",
        "linkedin": None,
        "userId": "b-1",
    }]


def test_website_without_scheme_is_rejected_before_any_write(client, fake_supabase, notifier):
    headers = fake_supabase.login(user_id="b-1", user_type="business")
    r = client.post(URL, headers=headers, json={"company_website": "acme.io"})
    assert r.status_code == 422
    assert "http://" in r.text
    assert fake_supabase.calls_for(TABLE) == []
    assert notifier.payloads == []


def test_resubmission_after_rejection_increments_attempts(client, fake_supabase, notifier):
    headers = fake_supabase.login(user_id="b-1", user_type="business")
    seed_profile(fake_supabase, "b-1", "rejected", 1)

    r = client.post(URL, headers=headers, json={"company_website": "https://acme.example"})
    assert r.status_code == 201, r.text
    assert r.json()["attempt_count"] == 2
    assert r.json()["verification_status"] == "pending"

    [update] = fake_supabase.calls_for(TABLE, "update")
    assert ("eq", "attempt_count", 1) in update["filters"]


def test_pending_profile_cannot_resubmit(client, fake_supabase, notifier):
    headers = fake_supabase.login(user_id="b-1", user_type="business")
    seed_profile(fake_supabase, "b-1", "pending", 1)

    r = client.post(URL, headers=headers, json={"company_website": "https://acme.io"})
    assert r.status_code == 409
    assert notifier.payloads == []


def test_attempt_cap_shows_contact_support_and_blocks_submission(client, fake_supabase, notifier):
    headers = fake_supabase.login(user_id="b-1", user_type="business")
    seed_profile(fake_supabase, "b-1", "rejected", 3)

    status = client.get(URL, headers=headers).json()
    assert status["view"] == "contact_support"
    assert status["can_submit"] is False
    assert status["attempts_remaining"] == 0
    assert status["support_email"]

    r = client.post(URL, headers=headers, json={"company_website": "https://acme.io"})
    assert r.status_code == 403
    assert fake_supabase.calls_for(TABLE, "update") == []
    assert notifier.payloads == []


def test_stale_attempt_count_is_a_conflict(client, fake_supabase, notifier):
    headers = fake_supabase.login(user_id="b-1", user_type="business")
    row = seed_profile(fake_supabase, "b-1", "rejected", 1)

    original_table = fake_supabase.table

    def racing_table(name):
        query = original_table(name)
        original_update = query.update

        def update(data, **kwargs):
            # another session bumps the counter between read and write
            row["attempt_count"] = 2
            return original_update(data, **kwargs)

        query.update = update
        return query

    fake_supabase.table = racing_table
    r = client.post(URL, headers=headers, json={"company_website": "https://acme.io"})
    assert r.status_code == 409
    assert notifier.payloads == []


def test_notifier_falls_back_to_production():
    seen = []

    def handler(request):
        seen.append(str(request.url))
        if "test" in str(request.url):
            return httpx.Response(500)
        return httpx.Response(200, json={"ok": True})

    notifier = VerificationNotifier(
        "https://hooks.example.com/webhook-test/verify",
        "https://hooks.example.com/webhook/verify",
        transport=httpx.MockTransport(handler),
    )
    assert notifier.notify({"userId": "b-1"}) is True
    assert seen == [
        "https://hooks.example.com/webhook-test/verify",
        "https://hooks.example.com/webhook/verify",
    ]


def test_notifier_uses_test_endpoint_when_it_answers():
    seen = []

    def handler(request):
        seen.append(str(request.url))
        return httpx.Response(200)

    notifier = VerificationNotifier(
        "https://hooks.example.com/webhook-test/verify",
        "https://hooks.example.com/webhook/verify",
        transport=httpx.MockTransport(handler),
    )
    assert notifier.notify({"userId": "b-1"}) is True
    assert seen == ["https://hooks.example.com/webhook-test/verify"]


def test_notifier_never_raises_when_both_fail():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    notifier = VerificationNotifier(
        "https://hooks.example.com/webhook-test/verify",
        "https://hooks.example.com/webhook/verify",
        transport=httpx.MockTransport(handler),
    )
    assert notifier.notify({"userId": "b-1"}) is False
