"""Tests for categorization API endpoints."""

from datetime import datetime

from smartbudget.models import TransactionType


class TestSuggestAPI:
    """Test the suggestion endpoint."""

    def test_suggest_rule_match(self, client, categories, make_rule):
        """Whole-word rule match is returned at 0.9."""
        make_rule("coffee", categories["Food"])

        response = client.post("/api/v1/categorization/suggest", json={
            "description": "Morning coffee at Starbucks",
            "amount": "8.50",
            "transaction_type": "expense",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["category_id"] == categories["Food"].id
        assert data["category_name"] == "Food"
        assert data["confidence"] == 0.9

    def test_suggest_without_match(self, client, categories):
        """No suggestion is reported as nulls with zero confidence."""
        response = client.post("/api/v1/categorization/suggest", json={
            "description": "Bank transfer",
            "amount": "500",
            "transaction_type": "expense",
        })

        assert response.status_code == 200
        assert response.json() == {"category_id": None, "category_name": None, "confidence": 0.0}

    def test_suggest_personalized(self, client, sample_user, categories, make_rule, make_feedback):
        """Enough corrections by the user win over a rule."""
        make_rule("netflix", categories["Food"])
        make_feedback("Netflix monthly", categories["Entertainment"], times=3)

        response = client.post("/api/v1/categorization/suggest", json={
            "description": "NETFLIX subscription",
            "transaction_type": "expense",
            "user_id": sample_user.id,
        })

        data = response.json()
        assert data["category_name"] == "Entertainment"
        assert data["confidence"] == 0.95

    def test_suggest_requires_type(self, client):
        """Missing transaction type is a validation error."""
        response = client.post("/api/v1/categorization/suggest", json={"description": "coffee"})
        assert response.status_code == 422

    def test_suggest_rejects_empty_description(self, client):
        """Empty description is a validation error."""
        response = client.post("/api/v1/categorization/suggest", json={
            "description": "",
            "transaction_type": "expense",
        })
        assert response.status_code == 422

    def test_suggest_rejects_negative_amount(self, client):
        """Negative amount is a validation error."""
        response = client.post("/api/v1/categorization/suggest", json={
            "description": "coffee",
            "amount": "-5",
            "transaction_type": "expense",
        })
        assert response.status_code == 422


class TestRulesAPI:
    """Test keyword rule administration."""

    def test_create_and_list(self, client, categories):
        """Created rule is trimmed and listed."""
        response = client.post("/api/v1/categorization/rules", json={
            "keyword": "  uber ",
            "transaction_type": "expense",
            "category_id": categories["Transport"].id,
        })

        assert response.status_code == 201
        created = response.json()
        assert created["keyword"] == "uber"
        assert isinstance(created["id"], int)

        listed = client.get("/api/v1/categorization/rules").json()
        assert [r["id"] for r in listed] == [created["id"]]

    def test_list_filtered_by_type(self, client, categories, make_rule):
        """Type filter returns only rules of that type."""
        make_rule("uber", categories["Transport"])
        make_rule("bonus", categories["Salary"], TransactionType.income)

        response = client.get("/api/v1/categorization/rules", params={"transaction_type": "income"})

        assert [r["keyword"] for r in response.json()] == ["bonus"]

    def test_create_with_unknown_category(self, client):
        """Rule for an unknown category returns 404."""
        response = client.post("/api/v1/categorization/rules", json={
            "keyword": "uber",
            "transaction_type": "expense",
            "category_id": "missing",
        })
        assert response.status_code == 404
        assert response.json()["detail"] == "Category not found"

    def test_delete(self, client, categories, make_rule):
        """Should delete a rule."""
        rule = make_rule("uber", categories["Transport"])

        response = client.delete(f"/api/v1/categorization/rules/{rule.id}")
        assert response.status_code == 204
        assert client.get("/api/v1/categorization/rules").json() == []

    def test_delete_unknown(self, client):
        """Unknown rule id returns 404."""
        response = client.delete("/api/v1/categorization/rules/9999")
        assert response.status_code == 404


class TestMetricsAPI:
    """Test the metrics endpoint."""

    def test_metrics(self, client, sample_user, categories, make_feedback):
        """Should report totals, accuracy and breakdown."""
        make_feedback("coffee", categories["Food"], suggested=categories["Food"])
        make_feedback("uber", categories["Transport"], suggested=categories["Food"])

        response = client.get("/api/v1/categorization/metrics")

        assert response.status_code == 200
        data = response.json()
        assert data["total_suggestions"] == 2
        assert data["accepted_suggestions"] == 1
        assert data["rejected_suggestions"] == 1
        assert data["accuracy"] == 0.5
        assert len(data["breakdown"]) == 2

    def test_metrics_date_filter(self, client, sample_user, categories, make_feedback):
        """Date range limits the counted feedback."""
        make_feedback("coffee", categories["Food"], created_at=datetime(2024, 1, 10))
        make_feedback("coffee", categories["Food"], created_at=datetime(2024, 2, 10))

        response = client.get("/api/v1/categorization/metrics", params={
            "start_date": "2024-02-01",
            "end_date": "2024-02-29",
        })

        assert response.json()["total_suggestions"] == 1

    def test_metrics_rejects_inverted_range(self, client):
        """Start after end returns 400."""
        response = client.get("/api/v1/categorization/metrics", params={
            "start_date": "2024-03-01",
            "end_date": "2024-02-01",
        })
        assert response.status_code == 400
