import pytest

from revisit import reviews
from revisit.fsrs import database
from scripts.maintenance import reset_review_db

USER = "alice"

pytestmark = pytest.mark.usefixtures("db")


@pytest.fixture
def tracked_problem(catalog, clock):
    card_id = reviews.add_problem(
        USER, "https://leetcode.com/problems/two-sum/", catalog, clock=clock
    ).card_id
    reviews.submit_review(USER, card_id, 3, clock=clock)
    return card_id


def run_reset(monkeypatch, *argv, answer=None):
    monkeypatch.setattr("sys.argv", ["reset_review_db", *argv])
    if answer is not None:
        monkeypatch.setattr("builtins.input", lambda prompt: answer)
    reset_review_db.main()


def test_reset_reports_counts_then_clears(tracked_problem, monkeypatch, capsys):
    run_reset(monkeypatch, "--yes")

    out = capsys.readouterr().out
    assert "problems" in out
    assert "review_logs" in out
    assert "1 rows" in out
    assert database.count_rows() == {"problems": 0, "cards": 0, "review_logs": 0}


def test_reset_cancelled_keeps_data(tracked_problem, monkeypatch, capsys):
    run_reset(monkeypatch, answer="no")

    assert "Cancelled" in capsys.readouterr().out
    assert database.count_rows() == {"problems": 1, "cards": 1, "review_logs": 1}


def test_reset_on_empty_database_does_not_prompt(monkeypatch, capsys):
    def fail_prompt(prompt):
        raise AssertionError("prompted for an empty database")

    monkeypatch.setattr("builtins.input", fail_prompt)
    run_reset(monkeypatch)

    assert "Nothing to delete." in capsys.readouterr().out
