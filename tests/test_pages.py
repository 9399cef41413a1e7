"""HTTP tests for the form page."""

import re

from fastapi import status
from fastapi.testclient import TestClient

from statform.core.errors import StoreConnectionError, StoreQueryError, StoreWriteError
from statform.core.settings import Settings
from statform.main import create_app
from statform.repositories.reading_repo import ReadingRepository


def _stat(html: str, name: str) -> str:
    match = re.search(rf'data-stat="{name}">([^<]*)<', html)
    assert match is not None, name
    return match.group(1)


def test_get_renders_form(client: TestClient) -> None:
    r = client.get("/")
    assert r.status_code == status.HTTP_200_OK
    assert r.headers["content-type"].startswith("text/html")
    assert r.text.count('name="values"') == 6
    assert _stat(r.text, "total") == "-"
    assert "error-box" not in r.text


def test_submit_stores_values_and_updates_stored_panel(
    client: TestClient, app_repo: ReadingRepository
) -> None:
    r = client.post("/", data={"values": ["10", "20", "30", "40"]})

    assert r.status_code == status.HTTP_200_OK
    assert "Saved 4 values" in r.text
    assert _stat(r.text, "lowest") == "10"
    assert _stat(r.text, "highest") == "40"
    assert _stat(r.text, "total") == "$100.00"
    assert _stat(r.text, "mean") == "25"
    assert _stat(r.text, "total-with-tax") == "$105.00"
    assert app_repo.count() == 4


def test_stored_panel_accumulates_across_submissions(client: TestClient) -> None:
    client.post("/", data={"values": ["5", "5", "7"]})
    r = client.post("/", data={"values": ["7", "9"]})

    assert _stat(r.text, "mode") == "Multiple (5, 7)"
    assert _stat(r.text, "total") == "$33.00"


def test_bracketed_field_name_is_accepted(client: TestClient, app_repo: ReadingRepository) -> None:
    r = client.post("/", data={"values[]": ["1", "2"]})
    assert r.status_code == status.HTTP_200_OK
    assert app_repo.count() == 2


def test_invalid_batch_is_rejected_atomically(
    client: TestClient, app_repo: ReadingRepository
) -> None:
    r = client.post("/", data={"values": ["10", "150", "20"]})

    assert r.status_code == 422
    assert "All numbers must be between 0 and 100" in r.text
    assert _stat(r.text, "total") == "-"
    assert app_repo.count() == 0


def test_empty_field_rejects_batch(client: TestClient, app_repo: ReadingRepository) -> None:
    r = client.post("/", data={"values": ["10", ""]})
    assert r.status_code == 422
    assert app_repo.count() == 0


def test_post_without_values_just_renders(client: TestClient, app_repo: ReadingRepository) -> None:
    r = client.post("/", data={"other": "x"})
    assert r.status_code == status.HTTP_200_OK
    assert "Saved" not in r.text
    assert app_repo.count() == 0


def test_aggregate_query_failure_renders_banner(client: TestClient, mocker) -> None:
    mocker.patch.object(
        ReadingRepository,
        "query_aggregate",
        side_effect=StoreQueryError("Error loading stored values"),
    )

    r = client.get("/")

    assert r.status_code == status.HTTP_200_OK
    assert "Error loading stored values" in r.text
    assert _stat(r.text, "total") == "-"
    assert r.text.count('name="values"') == 6


def test_write_failure_surfaces_message(client: TestClient, mocker) -> None:
    mocker.patch.object(
        ReadingRepository,
        "append",
        side_effect=StoreWriteError("Error inserting records: disk full"),
    )

    r = client.post("/", data={"values": ["1", "2"]})

    assert r.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert "Error inserting records" in r.text


def test_partial_write_is_flagged(client: TestClient, mocker) -> None:
    original_append = ReadingRepository.append
    calls = {"n": 0}

    def flaky_append(self: ReadingRepository, value: int) -> int:
        calls["n"] += 1
        if calls["n"] == 2:
            raise StoreWriteError("Error inserting records: disk full")
        return original_append(self, value)

    mocker.patch.object(ReadingRepository, "append", flaky_append)

    r = client.post("/", data={"values": ["1", "2", "3"]})

    assert r.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert "1 of 3 saved before the failure" in r.text
    assert _stat(r.text, "total") == "$1.00"


def test_unreachable_database_aborts_request(client: TestClient, mocker) -> None:
    mocker.patch.object(
        ReadingRepository,
        "check_connection",
        side_effect=StoreConnectionError("Error establishing database connection"),
    )

    r = client.get("/")

    assert r.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    assert r.text == "Error establishing database connection"


def test_static_assets_are_served(client: TestClient) -> None:
    r = client.get("/static/statform.js")
    assert r.status_code == status.HTTP_200_OK
    assert "computeStatistics" in r.text
    assert "amount.toFixed(2)" in r.text

    r = client.get("/static/statform.css")
    assert r.status_code == status.HTTP_200_OK


def test_overlong_value_is_rejected_atomically(
    client: TestClient, app_repo: ReadingRepository
) -> None:
    r = client.post("/", data={"values": ["10", "9" * 5000]})

    assert r.status_code == 422
    assert "All numbers must be between 0 and 100" in r.text
    assert app_repo.count() == 0


def test_database_down_at_startup_answers_503(tmp_path) -> None:
    missing = tmp_path / "missing" / "statform.db"
    settings = Settings(database_url=f"sqlite:///{missing}", field_count=6)

    with TestClient(create_app(settings), base_url="http://test") as down_client:
        r = down_client.get("/")
        assert r.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert r.text == "Error establishing database connection"

        r = down_client.post("/", data={"values": ["10"]})
        assert r.status_code == status.HTTP_503_SERVICE_UNAVAILABLE

        assert down_client.get("/health").json() == {"status": "ok"}
