"""Tests for folio.investments.remote."""

from __future__ import annotations

import io
import json
import urllib.error
from datetime import date
from decimal import Decimal
from unittest.mock import patch

import pytest

from folio.core.exceptions import NotFound, SerializationFailure, TransportFailure, ValidationRejected
from folio.investments.models import InvestmentFormData, InvestmentType
from folio.investments.remote import RemoteInvestmentRepository, from_wire, to_wire
from folio.investments.store import InvestmentStore

BASE = "http://api.test/api/investments"
URLOPEN = "folio.investments.remote.urllib.request.urlopen"


class _DummyResp:
    def __init__(self, payload: object | None = None, raw: bytes | None = None):
        self._raw = raw if raw is not None else (b"" if payload is None else json.dumps(payload).encode("utf-8"))

    def read(self):
        return self._raw

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


def _http_error(code: int, payload: object | None = None) -> urllib.error.HTTPError:
    body = json.dumps(payload).encode("utf-8") if payload is not None else b""
    return urllib.error.HTTPError(BASE, code, "error", {}, io.BytesIO(body))


@pytest.fixture
def repo():
    return RemoteInvestmentRepository(base_url=BASE + "/", timeout=5)


class TestWireTranslation:
    def test_to_wire_uses_value(self, fund_form):
        assert to_wire(fund_form) == {"name": "Fund A", "type": "Fund", "value": 1000, "date": "2024-01-01"}

    def test_from_wire_reads_value(self):
        inv = from_wire({"id": "9", "name": "x", "type": "ETF", "value": 12.5, "date": "2024-01-01"})
        assert inv.amount == Decimal("12.5")

    def test_from_wire_accepts_amount(self):
        inv = from_wire({"id": "9", "name": "x", "type": "ETF", "amount": 3, "date": "2024-01-01"})
        assert inv.amount == 3

    def test_from_wire_defaults_missing_amount_to_zero(self):
        inv = from_wire({"id": "9", "name": "x", "type": "ETF", "date": "2024-01-01"})
        assert inv.amount == 0

    def test_from_wire_rejects_non_object(self):
        with pytest.raises(SerializationFailure):
            from_wire(["not", "a", "record"])

    def test_from_wire_rejects_missing_fields(self):
        with pytest.raises(SerializationFailure, match="Malformed"):
            from_wire({"name": "no id"})


class TestRequests:
    @patch(URLOPEN)
    async def test_list(self, mock_urlopen, repo):
        mock_urlopen.return_value = _DummyResp(
            [
                {"id": "1", "name": "Fund A", "type": "Fund", "value": 1000, "date": "2024-01-01"},
                {"id": "2", "name": "BTC", "type": "Crypto", "value": 250.75, "date": "2024-02-01"},
            ]
        )

        investments = await repo.list()

        assert [i.id for i in investments] == ["1", "2"]
        assert investments[1].amount == Decimal("250.75")
        req = mock_urlopen.call_args[0][0]
        assert req.get_method() == "GET"
        assert req.full_url == BASE
        assert mock_urlopen.call_args[1]["timeout"] == 5

    @patch(URLOPEN)
    async def test_list_empty_body(self, mock_urlopen, repo):
        mock_urlopen.return_value = _DummyResp()
        assert await repo.list() == []

    @patch(URLOPEN)
    async def test_list_not_an_array(self, mock_urlopen, repo):
        mock_urlopen.return_value = _DummyResp({"items": []})
        with pytest.raises(SerializationFailure, match="JSON array"):
            await repo.list()

    @patch(URLOPEN)
    async def test_list_invalid_json(self, mock_urlopen, repo):
        mock_urlopen.return_value = _DummyResp(raw=b"<html>oops</html>")
        with pytest.raises(SerializationFailure, match="not valid JSON"):
            await repo.list()

    @patch(URLOPEN)
    async def test_create_posts_value(self, mock_urlopen, repo, fund_form):
        mock_urlopen.return_value = _DummyResp(
            {
                "id": "srv-1",
                "name": "Fund A",
                "type": "Fund",
                "value": 1000,
                "date": "2024-01-01",
                "createdAt": "2024-01-01T10:00:00Z",
            }
        )

        created = await repo.create(fund_form)

        assert created.id == "srv-1"
        assert created.amount == 1000
        assert created.created_at is not None
        req = mock_urlopen.call_args[0][0]
        assert req.get_method() == "POST"
        assert req.full_url == BASE
        assert req.get_header("Content-type") == "application/json"
        assert json.loads(req.data) == {"name": "Fund A", "type": "Fund", "value": 1000, "date": "2024-01-01"}

    @patch(URLOPEN)
    async def test_update_puts_to_id(self, mock_urlopen, repo):
        mock_urlopen.return_value = _DummyResp({"id": "abc", "value": 500, "updatedAt": "2024-03-01T00:00:00Z"})
        form = InvestmentFormData(name="Fund A", type=InvestmentType.FUND, amount=500, date=date(2024, 1, 1))

        updated = await repo.update("abc", form)

        # partial response is merged over the submitted fields
        assert updated.id == "abc"
        assert updated.name == "Fund A"
        assert updated.type is InvestmentType.FUND
        assert updated.amount == 500
        assert updated.updated_at is not None
        req = mock_urlopen.call_args[0][0]
        assert req.get_method() == "PUT"
        assert req.full_url == f"{BASE}/abc"

    @patch(URLOPEN)
    async def test_update_without_value_keeps_submitted_amount(self, mock_urlopen, repo, fund_form):
        mock_urlopen.return_value = _DummyResp({"id": "abc"})
        updated = await repo.update("abc", fund_form)
        assert updated.amount == 1000

    @patch(URLOPEN)
    async def test_ids_are_url_quoted(self, mock_urlopen, repo):
        mock_urlopen.return_value = _DummyResp()
        await repo.delete("a/b c")
        assert mock_urlopen.call_args[0][0].full_url == f"{BASE}/a%2Fb%20c"

    @patch(URLOPEN)
    async def test_delete(self, mock_urlopen, repo):
        mock_urlopen.return_value = _DummyResp()
        await repo.delete("abc")
        req = mock_urlopen.call_args[0][0]
        assert req.get_method() == "DELETE"
        assert req.full_url == f"{BASE}/abc"

    @patch(URLOPEN)
    async def test_store_update_keeps_created_at_from_partial_response(self, mock_urlopen, repo):
        listed = {
            "id": "1",
            "name": "Fund A",
            "type": "Fund",
            "value": 1000,
            "date": "2024-01-01",
            "createdAt": "2024-01-01T10:00:00Z",
        }
        mock_urlopen.side_effect = [_DummyResp([listed]), _DummyResp({"id": "1", "value": 500})]
        store = InvestmentStore(repo)
        await store.load()
        created_at = store.get("1").created_at

        changed = InvestmentFormData(name="Fund A", type=InvestmentType.FUND, amount=500, date=date(2024, 1, 1))
        updated = await store.update("1", changed)

        assert created_at is not None
        assert updated.created_at == created_at
        assert updated.amount == 500
        assert store.get("1").name == "Fund A"


class TestErrors:
    @patch(URLOPEN)
    async def test_create_rejected_joins_errors(self, mock_urlopen, repo, fund_form):
        mock_urlopen.side_effect = _http_error(400, {"errors": ["Name is required", "Value must be positive"]})

        with pytest.raises(ValidationRejected) as exc_info:
            await repo.create(fund_form)

        assert str(exc_info.value) == "Name is required, Value must be positive"
        assert exc_info.value.errors == ["Name is required", "Value must be positive"]

    @patch(URLOPEN)
    async def test_rejected_without_body_uses_default(self, mock_urlopen, repo, fund_form):
        mock_urlopen.side_effect = _http_error(422)
        with pytest.raises(ValidationRejected, match="Failed to update investment"):
            await repo.update("abc", fund_form)

    @patch(URLOPEN)
    async def test_delete_uses_error_field(self, mock_urlopen, repo):
        mock_urlopen.side_effect = _http_error(409, {"error": "Investment is locked"})
        with pytest.raises(ValidationRejected, match="Investment is locked"):
            await repo.delete("abc")

    @patch(URLOPEN)
    async def test_404_is_not_found(self, mock_urlopen, repo):
        mock_urlopen.side_effect = _http_error(404, {"error": "Investment not found"})
        with pytest.raises(NotFound, match="Investment not found"):
            await repo.delete("abc")

    @patch(URLOPEN)
    async def test_5xx_is_transport_failure(self, mock_urlopen, repo):
        mock_urlopen.side_effect = _http_error(503)
        with pytest.raises(TransportFailure, match="Failed to load investments"):
            await repo.list()

    @patch(URLOPEN)
    async def test_unreachable_is_transport_failure(self, mock_urlopen, repo):
        mock_urlopen.side_effect = urllib.error.URLError("Connection refused")
        with pytest.raises(TransportFailure, match="unreachable"):
            await repo.list()

    @patch(URLOPEN)
    async def test_timeout_is_transport_failure(self, mock_urlopen, repo):
        mock_urlopen.side_effect = TimeoutError("timed out")
        with pytest.raises(TransportFailure):
            await repo.list()


def test_base_url_required():
    with pytest.raises(ValueError):
        RemoteInvestmentRepository(base_url="")
