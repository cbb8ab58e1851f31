from datetime import datetime
from types import SimpleNamespace

from workout_tracker.services.progress import chart_data, completed_sets, personal_best, sessions_by_month


def test_completed_sets_skip_unfinished_work(db, push, log_session):
    ex = push.exercises[0]
    log_session(push, {ex: [(50, 12), (55, 10, False)]}, days_ago=4)
    log_session(push, {ex: [(60, 12)]}, days_ago=2, completed=False)
    log_session(push, {ex: [(52.5, 12)]}, days_ago=1)

    assert [s.weight for s in completed_sets(db, ex)] == [50, 52.5]


def test_personal_best_needs_the_top_of_the_range(db, push, log_session):
    ex = push.exercises[0]
    log_session(push, {ex: [(70, 11), (60, 12), (65, 12)]})

    best = personal_best(ex, completed_sets(db, ex))
    assert best.weight == 65


def test_no_personal_best_without_a_full_set(db, push, log_session):
    ex = push.exercises[0]
    log_session(push, {ex: [(70, 9)]})
    assert personal_best(ex, completed_sets(db, ex)) is None


def test_chart_takes_the_top_weight_per_day(db, push, log_session):
    ex = push.exercises[0]
    log_session(push, {ex: [(40, 12), (45, 12)]}, days_ago=10)
    log_session(push, {ex: [(0, 12)]}, days_ago=5)
    log_session(push, {ex: [(50, 12)]}, days_ago=2)

    points = chart_data(completed_sets(db, ex))
    assert [p.weight for p in points] == [45, 50]
    assert points[0].date < points[1].date


def test_sessions_are_grouped_by_month_newest_first():
    def at(y, m, d):
        return SimpleNamespace(date=datetime(y, m, d, 12).astimezone())

    jan, mar_early, mar_late = at(2025, 1, 20), at(2025, 3, 2), at(2025, 3, 28)
    groups = sessions_by_month([jan, mar_early, mar_late])

    assert [g.key for g in groups] == ["March 2025", "January 2025"]
    assert groups[0].sessions == [mar_late, mar_early]
    assert groups[1].sessions == [jan]


def test_no_sessions_no_groups():
    assert sessions_by_month([]) == []
