from types import SimpleNamespace

import pytest

from gestion_alquiler.services.dashboard import build_dashboard
from gestion_alquiler.utils.dates import quarter_bounds

Q2_2024 = quarter_bounds(2024, 2)


def make_income(check_in, total_invoice, total_iva):
    return SimpleNamespace(check_in=check_in, total_invoice=total_invoice, total_iva=total_iva)


def make_expense(date, total_invoice, total_iva):
    return SimpleNamespace(date=date, total_invoice=total_invoice, total_iva=total_iva)


class TestBuildDashboard:

    def test_empty_inputs_give_zero_totals(self):
        settlement = build_dashboard([], [])
        assert settlement.incomes == []
        assert settlement.expenses == []
        assert settlement.total_incomes == 0
        assert settlement.total_expenses == 0
        assert settlement.result == 0
        assert settlement.quarterly_vat == 0

    def test_sums_and_differences(self):
        incomes = [make_income(1, 121.0, 21.0), make_income(2, 242.0, 42.0)]
        expenses = [make_expense(3, 110.0, 10.0)]
        settlement = build_dashboard(incomes, expenses)

        assert settlement.total_incomes == pytest.approx(363.0)
        assert settlement.total_vat_quarterly_incomes == pytest.approx(63.0)
        assert settlement.total_expenses == pytest.approx(110.0)
        assert settlement.total_vat_quarterly_expenses == pytest.approx(10.0)
        assert settlement.result == settlement.total_incomes - settlement.total_expenses
        assert settlement.quarterly_vat == pytest.approx(53.0)
        assert settlement.taxable_incomes == pytest.approx(300.0)
        assert settlement.taxable_expenses == pytest.approx(100.0)

    def test_refundable_vat_is_negative(self):
        settlement = build_dashboard([make_income(1, 110.0, 10.0)], [make_expense(1, 1210.0, 210.0)])
        assert settlement.quarterly_vat == pytest.approx(-200.0)
        assert settlement.result == pytest.approx(-1100.0)

    def test_window_is_inclusive_at_both_bounds(self):
        incomes = [
            make_income(Q2_2024.start - 1, 1000.0, 100.0),
            make_income(Q2_2024.start, 121.0, 21.0),
            make_income(Q2_2024.end, 121.0, 21.0),
            make_income(Q2_2024.end + 1, 1000.0, 100.0),
        ]
        expenses = [
            make_expense(Q2_2024.start - 1, 500.0, 50.0),
            make_expense(Q2_2024.end, 60.5, 10.5),
            make_expense(Q2_2024.end + 1, 500.0, 50.0),
        ]
        settlement = build_dashboard(incomes, expenses, Q2_2024)

        assert len(settlement.incomes) == 2
        assert len(settlement.expenses) == 1
        assert settlement.total_incomes == pytest.approx(242.0)
        assert settlement.total_expenses == pytest.approx(60.5)
        assert settlement.quarterly_vat == pytest.approx(31.5)

    def test_incomes_are_matched_on_check_in_only(self):
        # Stay starting in the window and ending after it counts in full
        income = SimpleNamespace(check_in=Q2_2024.end, check_out=Q2_2024.end + 10 ** 9,
                                 total_invoice=50.0, total_iva=5.0)
        settlement = build_dashboard([income], [], Q2_2024)
        assert settlement.total_incomes == 50.0

    def test_current_quarter_is_wall_clock(self, mocker):
        mocker.patch("gestion_alquiler.services.dashboard.quarter_of", return_value=3)
        assert build_dashboard([], [], Q2_2024).current_quarter == 3


class TestDashboardRoutes:

    def test_requires_token(self, anonymous_client):
        response = anonymous_client.get("/api/v1/dashboard")
        assert response.status_code == 401
        assert response.json()["statusCode"] == 401

    def test_empty_dashboard(self, client):
        response = client.get("/api/v1/dashboard")
        assert response.status_code == 200
        data = response.json()
        assert data["incomes"] == []
        assert data["expenses"] == []
        assert data["totalIncomes"] == 0
        assert data["result"] == 0
        assert data["quarterlyVAT"] == 0
        assert data["currentQuarter"] in (1, 2, 3, 4)

    def test_dashboard_includes_every_record(self, client, income, expense, apartment):
        client.post("/api/v1/expenses", json={
            "apartmentId": apartment["id"],
            "concept": "Plumber",
            "date": 1727018790000,
            "expense": 200,
            "iva": 10
        })
        data = client.get("/api/v1/dashboard").json()

        assert len(data["incomes"]) == 1
        assert len(data["expenses"]) == 2
        assert data["totalIncomes"] == pytest.approx(653.4)
        assert data["totalExpenses"] == pytest.approx(121 + 220)
        assert data["result"] == pytest.approx(653.4 - 341)
        assert data["totalVATQuarterlyIncomes"] == pytest.approx(113.4)
        assert data["totalVATQuarterlyExpenses"] == pytest.approx(41)
        assert data["quarterlyVAT"] == pytest.approx(72.4)

    def test_quarter_dashboard(self, client, income, expense, apartment):
        client.post("/api/v1/expenses", json={
            "apartmentId": apartment["id"],
            "concept": "Plumber",
            "date": 1727018790000,
            "expense": 200,
            "iva": 10
        })
        response = client.get("/api/v1/dashboard/2", params={"year": 2024})
        assert response.status_code == 200
        data = response.json()

        assert data["quarter"] == 2
        assert data["year"] == 2024
        assert data["startOfQuarter"] == 1711929600000
        assert data["endOfQuarter"] == 1719791999000
        assert [i["id"] for i in data["incomes"]] == [income["id"]]
        assert [e["id"] for e in data["expenses"]] == [expense["id"]]
        assert data["totalIncomes"] == pytest.approx(653.4)
        assert data["totalExpenses"] == pytest.approx(121)
        assert data["result"] == pytest.approx(532.4)
        assert data["quarterlyVAT"] == pytest.approx(92.4)
        assert data["quarterlyIncomes"] == pytest.approx(540)
        assert data["quarterlyExpenses"] == pytest.approx(100)

    def test_quarter_without_records_is_zero(self, client, income):
        data = client.get("/api/v1/dashboard/1", params={"year": 2024}).json()
        assert data["incomes"] == []
        assert data["totalIncomes"] == 0
        assert data["quarterlyVAT"] == 0

    @pytest.mark.parametrize("quarter", [0, 5])
    def test_quarter_out_of_range(self, client, quarter):
        response = client.get(f"/api/v1/dashboard/{quarter}")
        assert response.status_code == 422
