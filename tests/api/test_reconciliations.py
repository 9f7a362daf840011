"""
Tests for the reconciliation endpoints.

Covers the JSON contract the console depends on: row shape
and ordering, manual and auto matching, and unmatching.
"""

PERIOD = {"startDate": "2026-03-01", "endDate": "2026-03-31"}


def _seed(client):
    """One account with a bank credit, a bank debit, a receipt and an expenditure."""
    account_id = client.post("/accounts", json={"name": "BRI Operasional"}).json()["id"]
    lines = client.post("/bank-statements/bulk", json=[
        {
            "accountId": account_id,
            "postDate": "2026-03-05",
            "remarks": "TRF CPO",
            "creditAmount": 100000,
        },
        {
            "accountId": account_id,
            "postDate": "2026-03-02",
            "remarks": "SOLAR",
            "debitAmount": 2500,
        },
    ]).json()
    receipt = client.post("/receipts/bulk", json=[{
        "accountId": account_id,
        "receiptDate": "2026-03-05",
        "amount": 100000,
        "note": "CPO sale",
    }]).json()[0]
    expenditure = client.post("/expenditures/bulk", json=[{
        "accountId": account_id,
        "expenditureDate": "2026-03-09",
        "amount": 2500,
        "note": "Fuel",
    }]).json()[0]
    return account_id, lines, receipt, expenditure


def _rows(client, account_id, **period):
    params = {"accountId": account_id, **PERIOD, **period}
    return client.get("/reconciliations", params=params)


class TestGetRows:

    def test_rows_returned_in_effective_date_order(self, client):
        account_id, _, _, _ = _seed(client)

        response = _rows(client, account_id)

        assert response.status_code == 200
        rows = response.json()
        assert [r["date"] for r in rows] == [
            "2026-03-02", "2026-03-05", "2026-03-05", "2026-03-09",
        ]
        assert [r["status"] for r in rows] == [
            "UNRECONCILED_BANK",
            "UNRECONCILED_BANK",
            "UNRECONCILED_INTERNAL",
            "UNRECONCILED_INTERNAL",
        ]

    def test_row_payload_is_camel_case(self, client):
        account_id, lines, receipt, _ = _seed(client)

        rows = _rows(client, account_id).json()

        bank_row = rows[1]
        assert bank_row["bankStatement"]["id"] == lines[0]["id"]
        assert bank_row["bankStatement"]["postDate"] == "2026-03-05"
        assert "internalTransaction" not in bank_row
        internal_row = rows[2]
        assert internal_row["internalTransaction"] == {
            "id": receipt["id"],
            "type": "RECEIPT",
            "date": "2026-03-05",
            "description": "CPO sale",
            "amount": internal_row["internalTransaction"]["amount"],
        }
        assert float(internal_row["internalTransaction"]["amount"]) == 100000.0

    def test_missing_account_returns_404(self, client):
        assert _rows(client, 999).status_code == 404

    def test_missing_period_returns_422(self, client):
        response = client.get("/reconciliations", params={"accountId": 1})
        assert response.status_code == 422


class TestManualReconcile:

    def test_manual_reconcile_returns_201(self, client):
        account_id, lines, receipt, _ = _seed(client)

        response = client.post("/reconciliations/manual", json={
            "bankStatementId": lines[0]["id"],
            "receiptId": receipt["id"],
        })

        assert response.status_code == 201
        data = response.json()
        assert data["matchType"] == "MANUAL"
        assert data["receiptId"] == receipt["id"]
        assert data["expenditureId"] is None

    def test_reconciled_pair_shown_as_one_row(self, client):
        account_id, lines, receipt, _ = _seed(client)
        link = client.post("/reconciliations/manual", json={
            "bankStatementId": lines[0]["id"],
            "receiptId": receipt["id"],
        }).json()

        rows = _rows(client, account_id).json()

        reconciled = [r for r in rows if r["status"] == "RECONCILED"]
        assert len(reconciled) == 1
        assert reconciled[0]["id"] == link["id"]
        assert reconciled[0]["bankStatement"]["id"] == lines[0]["id"]
        assert reconciled[0]["internalTransaction"]["id"] == receipt["id"]
        assert len(rows) == 3

    def test_both_internal_ids_returns_422(self, client):
        _, lines, receipt, expenditure = _seed(client)
        response = client.post("/reconciliations/manual", json={
            "bankStatementId": lines[0]["id"],
            "receiptId": receipt["id"],
            "expenditureId": expenditure["id"],
        })
        assert response.status_code == 422

    def test_direction_mismatch_returns_400(self, client):
        _, lines, _, expenditure = _seed(client)
        response = client.post("/reconciliations/manual", json={
            "bankStatementId": lines[0]["id"],
            "expenditureId": expenditure["id"],
        })
        assert response.status_code == 400
        assert "Cannot match" in response.json()["detail"]


class TestAutoReconcile:

    def test_auto_reconcile_reports_matches(self, client):
        account_id, _, _, _ = _seed(client)

        response = client.get("/reconciliations/auto", params={
            "accountId": account_id, **PERIOD,
        })

        # The receipt matches on the same day. The expenditure is
        # seven days from its bank debit, outside the tolerance.
        assert response.status_code == 200
        assert response.json() == {"matched": 1}
        statuses = [r["status"] for r in _rows(client, account_id).json()]
        assert statuses.count("RECONCILED") == 1

    def test_auto_reconcile_missing_account_returns_404(self, client):
        response = client.get("/reconciliations/auto", params={
            "accountId": 999, **PERIOD,
        })
        assert response.status_code == 404


class TestUnreconcile:

    def test_unreconcile_returns_204(self, client):
        account_id, lines, receipt, _ = _seed(client)
        link = client.post("/reconciliations/manual", json={
            "bankStatementId": lines[0]["id"],
            "receiptId": receipt["id"],
        }).json()

        response = client.delete(f"/reconciliations/{link['id']}")

        assert response.status_code == 204
        statuses = [r["status"] for r in _rows(client, account_id).json()]
        assert "RECONCILED" not in statuses
        assert len(statuses) == 4

    def test_unknown_link_returns_404(self, client):
        assert client.delete("/reconciliations/12345").status_code == 404
