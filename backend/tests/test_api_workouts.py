def day_by_name(client, name):
    return next(d for d in client.get("/days").json() if d["name"] == name)


def start(client, name="Push"):
    day = day_by_name(client, name)
    r = client.post(f"/days/{day['id']}/workouts")
    assert r.status_code == 201
    return day, r.json()


def test_days_are_listed_in_rotation_order(client):
    r = client.get("/days")
    assert r.status_code == 200
    days = r.json()
    assert [d["name"] for d in days] == ["Push", "Pull", "Legs & Core"]
    assert [len(d["exercises"]) for d in days] == [6, 6, 7]
    ex = days[0]["exercises"][0]
    assert ex["target_reps_range"] == "10-12"
    assert ex["name"] == "Chest Press Machine"


def test_unknown_day_is_404(client):
    assert client.get("/days/00000000-0000-0000-0000-000000000000").status_code == 404
    assert client.post("/days/00000000-0000-0000-0000-000000000000/workouts").status_code == 404


def test_start_seeds_sets_and_blocks_a_second_start(client):
    day, body = start(client)
    assert body["state"] == "active"
    assert body["saved"] is True
    assert body["completed_sets_count"] == 0
    assert body["total_sets_count"] == 18
    assert body["rest_timer"]["is_running"] is False
    for ex in body["exercises"]:
        assert [s["set_number"] for s in ex["sets"]] == [1, 2, 3]
        assert all(s["reps"] == 12 and s["weight"] == 0 for s in ex["sets"])

    assert client.post(f"/days/{day['id']}/workouts").status_code == 409


def test_complete_set_starts_rest_timer(client):
    _, body = start(client)
    sid = body["session_id"]
    set_id = body["exercises"][0]["sets"][0]["id"]

    r = client.post(f"/workouts/{sid}/sets/{set_id}/complete")
    assert r.status_code == 200
    body = r.json()
    assert body["completed_sets_count"] == 1
    assert body["exercises"][0]["sets"][0]["completed_at"] is not None
    assert body["rest_timer"]["is_running"] is True
    assert 0 < body["rest_timer"]["remaining"] <= 75

    body = client.post(f"/workouts/{sid}/rest-timer/stop").json()
    assert body["rest_timer"]["is_running"] is False

    body = client.post(f"/workouts/{sid}/sets/{set_id}/uncomplete").json()
    assert body["completed_sets_count"] == 0
    assert body["exercises"][0]["sets"][0]["completed_at"] is None


def test_update_set_and_validation(client):
    _, body = start(client)
    sid = body["session_id"]
    set_id = body["exercises"][1]["sets"][2]["id"]

    r = client.patch(f"/workouts/{sid}/sets/{set_id}", json={"weight": 37.5, "reps": 9})
    assert r.status_code == 200
    updated = r.json()["exercises"][1]["sets"][2]
    assert (updated["weight"], updated["reps"]) == (37.5, 9)

    assert client.patch(f"/workouts/{sid}/sets/{set_id}", json={}).status_code == 422
    assert client.patch(f"/workouts/{sid}/sets/{set_id}", json={"reps": -1}).status_code == 422
    missing = "00000000-0000-0000-0000-000000000000"
    assert client.patch(f"/workouts/{sid}/sets/{missing}", json={"reps": 5}).status_code == 404


def test_skip_and_unskip_change_the_total(client):
    _, body = start(client)
    sid = body["session_id"]
    ex_id = body["exercises"][0]["exercise"]["id"]

    body = client.post(f"/workouts/{sid}/exercises/{ex_id}/skip").json()
    assert body["total_sets_count"] == 15
    assert body["exercises"][0]["is_skipped"] is True

    body = client.delete(f"/workouts/{sid}/exercises/{ex_id}/skip").json()
    assert body["total_sets_count"] == 18
    assert body["exercises"][0]["is_skipped"] is False

    pull = day_by_name(client, "Pull")
    foreign = pull["exercises"][0]["id"]
    assert client.post(f"/workouts/{sid}/exercises/{foreign}/skip").status_code == 404


def test_finish_persists_without_skipped_sets(client):
    _, body = start(client)
    sid = body["session_id"]
    skipped = body["exercises"][0]["exercise"]["id"]
    client.post(f"/workouts/{sid}/exercises/{skipped}/skip")
    for s in body["exercises"][1]["sets"]:
        client.post(f"/workouts/{sid}/sets/{s['id']}/complete")

    r = client.post(f"/workouts/{sid}/finish")
    assert r.status_code == 200
    assert r.json()["state"] == "finished"
    assert r.json()["rest_timer"]["is_running"] is False

    # no longer live
    assert client.get(f"/workouts/{sid}").status_code == 404

    detail = client.get(f"/sessions/{sid}").json()
    assert detail["is_completed"] is True
    assert len(detail["sets"]) == 15
    assert skipped not in {s["exercise_id"] for s in detail["sets"]}
    assert sum(s["is_completed"] for s in detail["sets"]) == 3

    page = client.get("/sessions").json()
    assert page["total"] == 1
    assert page["items"][0]["workout_day"]["name"] == "Push"


def test_dashboard_after_a_finished_workout(client):
    assert client.get("/dashboard").json()["next_day"]["name"] == "Push"
    _, body = start(client)
    client.post(f"/workouts/{body['session_id']}/finish")

    dash = client.get("/dashboard").json()
    assert dash["next_day"]["name"] == "Pull"
    assert dash["total_completed"] == 1
    assert dash["completed_this_week"] == 1
    assert dash["current_streak"] == 1
    assert dash["last_session"]["id"] == body["session_id"]
    assert dash["incomplete_session"] is None


def test_cancel_removes_the_session(client):
    _, body = start(client)
    sid = body["session_id"]
    set_id = body["exercises"][0]["sets"][0]["id"]
    client.post(f"/workouts/{sid}/sets/{set_id}/complete")

    r = client.post(f"/workouts/{sid}/cancel")
    assert r.status_code == 200
    assert r.json()["state"] == "cancelled"
    assert client.get(f"/workouts/{sid}").status_code == 404
    assert client.get(f"/sessions/{sid}").status_code == 404
    assert client.get("/sessions/incomplete").status_code == 404


def test_finish_twice_is_404_once_released(client):
    _, body = start(client)
    sid = body["session_id"]
    assert client.post(f"/workouts/{sid}/finish").status_code == 200
    assert client.post(f"/workouts/{sid}/finish").status_code == 404


def test_retry_save_with_nothing_pending_is_ok(client):
    _, body = start(client)
    r = client.post(f"/workouts/{body['session_id']}/save")
    assert r.status_code == 200
    assert r.json()["saved"] is True and r.json()["pending_save"] is False
