from __future__ import annotations

BASE = "/api/v1/dashboard"


def test_summary_all(client):
    response = client.get(f"{BASE}/summary")

    assert response.status_code == 200
    data = response.json()
    assert data["scope"] == "all"
    metrics = data["metrics"]
    assert metrics["total_employees"] == 35
    assert sum(metrics["department_counts"].values()) == 35
    assert metrics["top_department"]["name"] in metrics["department_counts"]
    assert [c["title"] for c in data["cards"]] == [
        "Total Employees",
        "Average Salary",
        "Avg Experience",
        "Avg Performance",
        "Top Department",
    ]


def test_summary_filtered_follows_store_filters(client):
    client.patch("/api/v1/employees/filters", json={"search_term": "no-such-person-anywhere"})

    filtered = client.get(f"{BASE}/summary", params={"scope": "filtered"}).json()
    everything = client.get(f"{BASE}/summary").json()

    assert filtered["metrics"]["total_employees"] == 0
    assert filtered["metrics"]["top_department"] is None
    assert everything["metrics"]["total_employees"] == 35


def test_summary_rejects_unknown_scope(client):
    response = client.get(f"{BASE}/summary", params={"scope": "some"})

    assert response.status_code == 422


def test_charts(client):
    response = client.get(f"{BASE}/charts")

    assert response.status_code == 200
    data = response.json()
    assert sum(d["value"] for d in data["departments"]) == 35
    assert sum(m["count"] for m in data["department_metrics"]) == 35
    assert len(data["scatter"]) == 35
    assert all(b["count"] > 0 for b in data["salary_ranges"])


def test_charts_filtered_by_department(client):
    department = client.get("/api/v1/employees").json()["employees"][0]["department"]["name"]
    client.patch("/api/v1/employees/filters", json={"department": department})

    data = client.get(f"{BASE}/charts", params={"scope": "filtered"}).json()

    assert [d["name"] for d in data["departments"]] == [department]
    assert data["departments"][0]["percentage"] == 100.0
    assert {p["department"] for p in data["scatter"]} == {department}
