"""Web frontend tests — Flask test client against the blueprint routes."""

from __future__ import annotations

import pytest

from backend.models.codec import state_from_text
from frontend.web import create_app

TWO_COLORS_TEXT = "12-1_1-12_0-0_0-0"
SOLVED_TEXT = "12-12_1-1_0-0_0-0"


@pytest.fixture
def client():
    app = create_app({
        "TESTING": True,
        "WATERSORT_COLORS": 4,
        "WATERSORT_BOTTLE_SIZE": 3,
        "WATERSORT_SEED": 7,
    })
    with app.test_client() as client:
        yield client


def test_index_redirects_to_generator(client) -> None:
    response = client.get("/")
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/gen")


def test_gen_redirects_to_valid_state(client) -> None:
    response = client.get("/gen")
    assert response.status_code == 302

    location = response.headers["Location"]
    assert "/state?state=" in location
    text = location.split("state=", 1)[1]
    state = state_from_text(text)
    assert len(state) == 6
    assert not state.is_solved()


def test_state_shows_next_move(client) -> None:
    response = client.get("/state", query_string={"state": TWO_COLORS_TEXT})
    assert response.status_code == 200

    body = response.get_data(as_text=True)
    assert "Next move" in body
    assert "pour" in body
    assert "/state?state=" in body


def test_state_following_links_reaches_solution(client) -> None:
    text = TWO_COLORS_TEXT
    for _ in range(10):
        body = client.get("/state", query_string={"state": text}).get_data(as_text=True)
        if "Solved!" in body:
            break
        marker = 'href="/state?state='
        start = body.index(marker) + len(marker)
        text = body[start:body.index('"', start)]
    else:
        pytest.fail("following 'Next move' links never reached a solved state")

    assert state_from_text(text).is_solved()


def test_state_solved(client) -> None:
    response = client.get("/state", query_string={"state": SOLVED_TEXT})
    assert response.status_code == 200
    assert "Solved!" in response.get_data(as_text=True)


@pytest.mark.parametrize("query", [{}, {"state": "nope"}, {"state": "12-1_1-12_0-0"}])
def test_state_bad_request(client, query) -> None:
    response = client.get("/state", query_string=query)
    assert response.status_code == 400


def test_state_unsolvable(client, monkeypatch) -> None:
    from backend.engine.gamesolver import Solver
    from backend.models.errors import NoSolutionError

    def _exhausted(*args, **kwargs):
        raise NoSolutionError(explored=3)

    monkeypatch.setattr(Solver, "solve", staticmethod(_exhausted))
    response = client.get("/state", query_string={"state": TWO_COLORS_TEXT})
    assert response.status_code == 422


def test_api_solve(client) -> None:
    response = client.post("/api/solve", json=[["Red", "Blue"], ["Blue", "Red"], ["Empty", "Empty"], ["Empty", "Empty"]])
    assert response.status_code == 200

    data = response.get_json()
    assert len(data["steps"]) == 3
    assert data["complexity"] > 0
    assert set(data["steps"][0]) == {"from", "to", "color"}


def test_api_solve_rejects_bad_input(client) -> None:
    assert client.post("/api/solve", data="x", content_type="text/plain").status_code == 400
    assert client.post("/api/solve", json=[["Red"], ["Empty"]]).status_code == 400


@pytest.mark.parametrize("key", ["WATERSORT_COLORS", "WATERSORT_BOTTLE_SIZE"])
def test_create_app_rejects_sizes_that_are_always_sorted(key) -> None:
    with pytest.raises(ValueError):
        create_app({"TESTING": True, key: 1})
