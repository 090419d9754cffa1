"""Tests for the concert catalog endpoints.

Run with: pytest tests/test_concerts.py -v
"""

import pytest


class TestListAndGet:

    def test_seeded_concerts_are_listed(self, client):
        r = client.get("/api/concerts")
        assert r.status_code == 200
        titles = [c["title"] for c in r.json()]
        assert titles == ["The Rolling Stones", "Billie Eilish"]

    def test_list_is_ordered_by_date(self, client, auth_headers,
                                     concert_payload):
        for date in ("2027-05-01", "2025-12-31", "2026-04-20"):
            r = client.post("/api/concerts",
                            json={**concert_payload, "date": date},
                            headers=auth_headers)
            assert r.status_code == 201

        dates = [c["date"] for c in client.get("/api/concerts").json()]
        assert dates == sorted(dates)
        assert len(dates) == 5

    def test_get_unknown_concert(self, client):
        r = client.get("/api/concerts/999")
        assert r.status_code == 404
        assert r.json() == {"error": "Concert not found"}

    @pytest.mark.parametrize("concert_id", [
        "abc", "1.5", "99999999999999999999", "-99999999999999999999",
    ])
    def test_impossible_ids_are_not_found(self, client, concert_id):
        r = client.get(f"/api/concerts/{concert_id}")
        assert r.status_code == 404
        assert r.json() == {"error": "Concert not found"}


class TestCreate:

    def test_create_then_get(self, client, auth_headers, concert_payload):
        r = client.post("/api/concerts", json=concert_payload,
                        headers=auth_headers)
        assert r.status_code == 201
        created = r.json()
        assert isinstance(created["id"], int)
        for k, v in concert_payload.items():
            assert created[k] == v

        fetched = client.get(f"/api/concerts/{created['id']}").json()
        assert fetched == created

    def test_create_requires_token(self, client, concert_payload):
        r = client.post("/api/concerts", json=concert_payload)
        assert r.status_code == 401
        assert len(client.get("/api/concerts").json()) == 2

    def test_missing_field_is_a_storage_error(self, client, auth_headers,
                                              concert_payload):
        del concert_payload["venue"]
        r = client.post("/api/concerts", json=concert_payload,
                        headers=auth_headers)
        assert r.status_code == 500
        assert r.json() == {"error": "Database error"}

    def test_unknown_fields_are_ignored(self, client, auth_headers,
                                        concert_payload):
        r = client.post("/api/concerts",
                        json={**concert_payload, "headliner": "yes"},
                        headers=auth_headers)
        assert r.status_code == 201
        assert "headliner" not in r.json()

    def test_oversized_integer_is_a_storage_error(self, client, auth_headers,
                                                   concert_payload):
        r = client.post("/api/concerts",
                        json={**concert_payload, "price": 10 ** 20},
                        headers=auth_headers)
        assert r.status_code == 500
        assert r.json() == {"error": "Database error"}
        assert len(client.get("/api/concerts").json()) == 2


class TestUpdate:

    def test_update_overwrites(self, client, auth_headers, concert_payload):
        r = client.put("/api/concerts/1",
                       json={**concert_payload, "price": 9900},
                       headers=auth_headers)
        assert r.status_code == 200
        assert r.json() == {"message": "Concert updated", "id": 1}

        concert = client.get("/api/concerts/1").json()
        assert concert["price"] == 9900
        assert concert["title"] == concert_payload["title"]

    def test_update_unknown_concert(self, client, auth_headers,
                                    concert_payload):
        r = client.put("/api/concerts/999", json=concert_payload,
                       headers=auth_headers)
        assert r.status_code == 404

    def test_update_requires_token(self, client, concert_payload):
        r = client.put("/api/concerts/1", json=concert_payload,
                       headers={"Authorization": "Bearer nope"})
        assert r.status_code == 403

    @pytest.mark.parametrize("concert_id", ["abc", "99999999999999999999"])
    def test_update_impossible_id(self, client, auth_headers,
                                  concert_payload, concert_id):
        r = client.put(f"/api/concerts/{concert_id}", json=concert_payload,
                       headers=auth_headers)
        assert r.status_code == 404
        assert r.json() == {"error": "Concert not found"}

    def test_update_oversized_price(self, client, auth_headers,
                                    concert_payload):
        r = client.put("/api/concerts/1",
                       json={**concert_payload, "price": 10 ** 20},
                       headers=auth_headers)
        assert r.status_code == 500
        assert r.json() == {"error": "Database error"}
        assert client.get("/api/concerts/1").json()["title"] == \
            "The Rolling Stones"


class TestDelete:

    def test_delete_then_get(self, client, auth_headers):
        r = client.delete("/api/concerts/1", headers=auth_headers)
        assert r.status_code == 200
        assert r.json() == {"message": "Concert deleted"}
        assert client.get("/api/concerts/1").status_code == 404

    @pytest.mark.parametrize("concert_id", ["abc", "99999999999999999999"])
    def test_delete_impossible_id(self, client, auth_headers, concert_id):
        r = client.delete(f"/api/concerts/{concert_id}",
                          headers=auth_headers)
        assert r.status_code == 404
        assert r.json() == {"error": "Concert not found"}
        assert len(client.get("/api/concerts").json()) == 2

    def test_delete_unknown_concert(self, client, auth_headers):
        r = client.delete("/api/concerts/999", headers=auth_headers)
        assert r.status_code == 404
        assert r.json() == {"error": "Concert not found"}

    def test_delete_keeps_orders(self, client, auth_headers, order_payload):
        assert client.post("/api/orders", json=order_payload).status_code == 201
        assert client.delete("/api/concerts/1",
                             headers=auth_headers).status_code == 200

        orders = client.get("/api/orders", headers=auth_headers).json()
        assert len(orders) == 1
        assert orders[0]["concert_id"] == 1
        assert orders[0]["concert_title"] == "X"
