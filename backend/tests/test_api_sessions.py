import uuid

from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from workout_tracker.db import SessionLocal
from workout_tracker.errors import StoreError
from workout_tracker.models import ExerciseSet, WorkoutSession
from workout_tracker.repositories.session_repo import SessionRepository


def test_incomplete_session_can_be_resumed_from_the_live_engine(client):
    day = client.get("/days").json()[1]
    started = client.post(f"/days/{day['id']}/workouts").json()

    inc = client.get("/sessions/incomplete")
    assert inc.status_code == 200
    assert inc.json()["id"] == started["session_id"]
    assert inc.json()["workout_day"]["name"] == "Pull"

    resumed = client.post("/sessions/incomplete/resume")
    assert resumed.status_code == 200
    assert resumed.json()["session_id"] == started["session_id"]


def test_stored_incomplete_session_is_resumed_into_a_new_engine(client, push, log_session):
    sess = log_session(push, {push.exercises[0]: [(40, 12), (40, 11, False)]}, days_ago=0, completed=False)

    r = client.post("/sessions/incomplete/resume")
    assert r.status_code == 200
    body = r.json()
    assert body["session_id"] == str(sess.id)
    assert body["state"] == "active"
    assert body["completed_sets_count"] == 1

    # it is live now
    assert client.get(f"/workouts/{sess.id}").status_code == 200
    assert client.post(f"/days/{push.id}/workouts").status_code == 409


def test_discard_incomplete_session(client, push, log_session):
    sess = log_session(push, {push.exercises[0]: [(40, 12, False)]}, days_ago=0, completed=False)

    assert client.delete("/sessions/incomplete").status_code == 204
    assert client.get("/sessions/incomplete").status_code == 404
    assert client.get(f"/sessions/{sess.id}").status_code == 404
    assert client.delete("/sessions/incomplete").status_code == 404


def test_discard_stops_a_live_workout(client):
    day = client.get("/days").json()[0]
    started = client.post(f"/days/{day['id']}/workouts").json()

    assert client.delete("/sessions/incomplete").status_code == 204
    assert client.get(f"/workouts/{started['session_id']}").status_code == 404
    assert client.post(f"/days/{day['id']}/workouts").status_code == 201


def test_no_incomplete_session(client):
    assert client.get("/sessions/incomplete").status_code == 404
    assert client.post("/sessions/incomplete/resume").status_code == 404


def test_session_list_pages_completed_sessions(client, push, pull, log_session):
    for n in range(3):
        log_session(push if n % 2 else pull, {}, days_ago=n + 1)
    log_session(push, {}, days_ago=0, completed=False)

    page = client.get("/sessions", params={"limit": 2}).json()
    assert page["total"] == 3
    assert len(page["items"]) == 2
    assert all(item["is_completed"] for item in page["items"])
    assert client.get("/sessions", params={"limit": 0}).status_code == 422


def test_session_detail_orders_sets_by_exercise(client, push, log_session):
    first, second = push.exercises[0], push.exercises[1]
    sess = log_session(push, {second: [(20, 12)], first: [(50, 12), (50, 10)]})

    sets = client.get(f"/sessions/{sess.id}").json()["sets"]
    assert [(s["exercise_id"], s["set_number"]) for s in sets] == [
        (str(first.id), 1), (str(first.id), 2), (str(second.id), 1),
    ]


def test_progress_for_an_exercise(client, push, log_session):
    ex = push.exercises[0]
    log_session(push, {ex: [(50, 12), (55, 12), (60, 10)]}, days_ago=3)
    log_session(push, {ex: [(0, 12)]}, days_ago=1)

    r = client.get(f"/progress/exercises/{ex.id}")
    assert r.status_code == 200
    body = r.json()
    assert body["exercise"]["id"] == str(ex.id)
    assert body["personal_best"]["weight"] == 55
    assert [p["weight"] for p in body["chart"]] == [60]
    assert len(body["sets"]) == 4

    missing = "00000000-0000-0000-0000-000000000000"
    assert client.get(f"/progress/exercises/{missing}").status_code == 404


def test_history_groups_sessions_by_month(client, push, log_session):
    log_session(push, {}, days_ago=0)
    months = client.get("/progress/history").json()
    assert len(months) == 1
    assert len(months[0]["sessions"]) == 1


def test_reset_history_keeps_the_catalog(client, push, log_session):
    log_session(push, {push.exercises[0]: [(50, 12), (50, 12)]}, days_ago=2)
    day = client.get("/days").json()[1]
    live = client.post(f"/days/{day['id']}/workouts").json()

    assert client.delete("/sessions").status_code == 204

    assert client.get(f"/workouts/{live['session_id']}").status_code == 404
    assert client.get("/sessions").json()["total"] == 0
    assert [len(d["exercises"]) for d in client.get("/days").json()] == [6, 6, 7]
    with SessionLocal() as db:
        assert db.scalar(select(func.count()).select_from(WorkoutSession)) == 0
        assert db.scalar(select(func.count()).select_from(ExerciseSet)) == 0

    # the rotation starts over
    assert client.get("/dashboard").json()["next_day"]["name"] == "Push"


def test_store_errors_map_to_503(client, monkeypatch):
    def unavailable(self, **kwargs):
        raise StoreError("database is locked")

    monkeypatch.setattr(SessionRepository, "latest_incomplete", unavailable)
    r = client.get("/sessions/incomplete")
    assert r.status_code == 503
    assert r.json()["detail"] == "storage unavailable, try again"


def test_discard_reports_503_until_the_cancel_is_saved(client, monkeypatch):
    day = client.get("/days").json()[0]
    sid = client.post(f"/days/{day['id']}/workouts").json()["session_id"]
    engine = client.app.state.workouts.get(uuid.UUID(sid))

    def broken_commit():
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(engine.db, "commit", broken_commit)
    assert client.delete("/sessions/incomplete").status_code == 503
    # still live, with the cancel pending
    assert client.get(f"/workouts/{sid}").json()["pending_save"] is True

    monkeypatch.undo()
    assert client.delete("/sessions/incomplete").status_code == 204
    assert client.get(f"/workouts/{sid}").status_code == 404
    assert client.get(f"/sessions/{sid}").status_code == 404
