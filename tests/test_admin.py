from app.admin.service import AdminService
from app.auth.utils import create_token
from conftest import question_payload


def test_list_admins(auth_client, admin, db):
    AdminService(db).create_admin("Second", "second@soliton.com", "password123", created_by=admin.id)

    resp = auth_client.get("/admin/list")
    assert resp.status_code == 200
    admins = resp.json()["admins"]
    assert [a["email"] for a in admins] == ["admin@soliton.com", "second@soliton.com"]
    assert admins[0]["createdBy"] is None
    assert admins[1]["createdBy"] == admin.id
    for entry in admins:
        assert set(entry) == {"id", "name", "email", "createdAt", "createdBy"}
    assert "$2b$" not in resp.text


def test_list_admins_includes_registered_admin(auth_client, admin):
    auth_client.post(
        "/auth/register",
        json={"name": "Third", "email": "third@soliton.com", "password": "password123"},
    )
    admins = auth_client.get("/admin/list").json()["admins"]
    assert admins[-1]["email"] == "third@soliton.com"
    assert admins[-1]["createdBy"] == admin.id


def test_stats_empty(auth_client):
    resp = auth_client.get("/admin/stats")
    assert resp.status_code == 200
    assert resp.json() == {
        "totalQuestions": 0,
        "totalTestCases": 0,
        "totalAdmins": 1,
        "questionsByDifficulty": {"EASY": 0, "MEDIUM": 0, "HARD": 0},
        "recentQuestions": [],
    }


def test_stats(auth_client):
    for i in range(6):
        difficulty = "HARD" if i % 2 else "EASY"
        auth_client.post("/questions", json=question_payload(title=f"Q{i}", difficulty=difficulty))

    stats = auth_client.get("/admin/stats").json()
    assert stats["totalQuestions"] == 6
    assert stats["totalTestCases"] == 12
    assert stats["questionsByDifficulty"] == {"EASY": 3, "MEDIUM": 0, "HARD": 3}
    assert [q["title"] for q in stats["recentQuestions"]] == ["Q5", "Q4", "Q3", "Q2", "Q1"]
    assert set(stats["recentQuestions"][0]) == {"id", "title", "difficulty", "language", "createdAt"}


def test_session_for_deleted_admin_still_verifies(client, admin, db):
    # Sessions are checked by signature and expiry only.
    token, _ = create_token(admin)
    with db.connection() as conn:
        conn.execute("DELETE FROM admins WHERE id = ?", (admin.id,))
    resp = client.get("/auth/session", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
