"""
Тесты для GoogleSheetStore: ленивая авторизация и вызовы gspread.
"""

import asyncio
import threading

import pytest

from app.services.sheet_store import AuthState, GoogleSheetStore, row_range


@pytest.fixture
def google_store(settings) -> GoogleSheetStore:
    return GoogleSheetStore(settings)


@pytest.fixture
def spreadsheet(mocker, google_store):
    """Мок таблицы gspread, возвращаемый вместо реального подключения."""
    mock = mocker.MagicMock()
    mocker.patch.object(google_store, "_build_client").return_value.open_by_key.return_value = mock
    return mock


@pytest.mark.asyncio
async def test_authorize_is_memoized(google_store, spreadsheet):
    assert google_store.state is AuthState.UNINITIALIZED

    await google_store.authorize()
    await google_store.authorize()

    assert google_store.state is AuthState.READY
    google_store._build_client.assert_called_once()


@pytest.mark.asyncio
async def test_concurrent_first_callers_share_one_attempt(
    google_store, spreadsheet, mocker
):
    """Тест: параллельные первые вызовы ждут одну попытку авторизации."""
    release = threading.Event()
    client = google_store._build_client.return_value

    def slow_open(key):
        release.wait(timeout=5)
        return spreadsheet

    client.open_by_key.side_effect = slow_open

    waiters = [asyncio.ensure_future(google_store.authorize()) for _ in range(3)]
    await asyncio.sleep(0.05)
    assert google_store.state is AuthState.AUTHORIZING
    release.set()
    await asyncio.gather(*waiters)

    assert google_store.state is AuthState.READY
    client.open_by_key.assert_called_once_with("test-sheet-id")


@pytest.mark.asyncio
async def test_failed_authorization_is_not_cached(google_store, mocker):
    build = mocker.patch.object(google_store, "_build_client")
    build.side_effect = [FileNotFoundError("no creds"), mocker.MagicMock()]

    with pytest.raises(FileNotFoundError):
        await google_store.authorize()
    assert google_store.state is AuthState.UNINITIALIZED

    await google_store.authorize()
    assert google_store.state is AuthState.READY


@pytest.mark.asyncio
async def test_bulk_read_returns_empty_grid(google_store, spreadsheet):
    spreadsheet.values_get.return_value = {"range": "'Ebooks'!A1:Z1000"}

    assert await google_store.bulk_read("Ebooks") == []
    spreadsheet.values_get.assert_called_once_with("'Ebooks'")


@pytest.mark.asyncio
async def test_append_and_update_use_sheet_qualified_ranges(google_store, spreadsheet):
    await google_store.append("Planes Nutricionales", ["a", "b"])
    await google_store.update_range("Usuarios", row_range(3), [["x", "y"]])

    spreadsheet.values_append.assert_called_once_with(
        "'Planes Nutricionales'",
        {"valueInputOption": "RAW"},
        {"values": [["a", "b"]]},
    )
    spreadsheet.values_update.assert_called_once_with(
        "'Usuarios'!3:3", {"valueInputOption": "RAW"}, {"values": [["x", "y"]]}
    )


def test_row_range_rejects_zero():
    with pytest.raises(ValueError):
        row_range(0)


def test_env_credentials_are_used(settings, mocker):
    settings = settings.model_copy(
        update={
            "google_service_account_email": "svc@example.iam.gserviceaccount.com",
            "google_private_key": "KEY",
        }
    )
    from_info = mocker.patch(
        "app.services.sheet_store.Credentials.from_service_account_info"
    )
    authorize = mocker.patch("app.services.sheet_store.gspread.authorize")

    client = GoogleSheetStore(settings)._build_client()

    assert client is authorize.return_value
    info = from_info.call_args.args[0]
    assert info["client_email"] == "svc@example.iam.gserviceaccount.com"
    assert info["private_key"] == "KEY"


def test_missing_credentials_file(settings, tmp_path):
    settings = settings.model_copy(
        update={
            "google_service_account_email": None,
            "google_private_key": None,
            "google_credentials_file": tmp_path / "missing.json",
        }
    )
    with pytest.raises(FileNotFoundError):
        GoogleSheetStore(settings)._build_client()


@pytest.mark.asyncio
async def test_append_stores_formula_like_text_verbatim(google_store, spreadsheet):
    """Тест: email, начинающийся с '=' или '+', записывается как текст, а не как формула."""
    await google_store.append("Usuarios", ["id-1", "=1+1@x.com", "+34600@x.com"])

    (_, params, body) = spreadsheet.values_append.call_args.args
    assert params == {"valueInputOption": "RAW"}
    assert body == {"values": [["id-1", "=1+1@x.com", "+34600@x.com"]]}
