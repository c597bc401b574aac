"""Integration tests for the FastAPI endpoints."""

import pytest


class TestRootEndpoint:
    def test_root(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        data = resp.json()
        assert "message" in data
        assert data["docs"] == "/docs"

    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["conversion"] == "ok"


class TestReferenceEndpoints:
    def test_list_datums(self, client):
        resp = client.get("/api/v1/datums")
        assert resp.status_code == 200
        data = resp.json()
        assert len(data) == 11
        hubs = [d["name"] for d in data if d["is_hub"]]
        assert hubs == ["WGS84"]

    def test_get_datum(self, client):
        resp = client.get("/api/v1/datums/OSGB36")
        assert resp.status_code == 200
        data = resp.json()
        assert data["ellipsoid"]["name"] == "Airy1830"
        assert data["transform"]["tx"] == -446.448

    def test_get_datum_not_found(self, client):
        resp = client.get("/api/v1/datums/Narnia")
        assert resp.status_code == 404

    def test_list_ellipsoids(self, client):
        resp = client.get("/api/v1/ellipsoids")
        assert resp.status_code == 200
        assert {e["name"] for e in resp.json()} >= {"Airy1830", "WGS84", "GRS80"}


class TestGridRefEndpoints:
    def test_get_gridref(self, client):
        resp = client.get("/api/v1/gridref/TG 51409 13177")
        assert resp.status_code == 200
        data = resp.json()
        assert data["grid"]["easting"] == 651409
        assert data["grid"]["northing"] == 313177
        assert data["grid"]["gridref"] == "TG 51409 13177"
        assert data["grid"]["numeric"] == "651409,313177"
        assert data["latlon"]["latitude"] == pytest.approx(52.657977, abs=5e-5)
        assert data["latlon"]["datum"] == "WGS84"

    def test_get_gridref_osgb36(self, client):
        resp = client.get("/api/v1/gridref/SJ9239552997", params={"datum": "OSGB36", "digits": 6})
        assert resp.status_code == 200
        data = resp.json()
        assert data["grid"]["gridref"] == "SJ 923 529"
        assert data["latlon"]["latitude"] == pytest.approx(53.073851, abs=5e-5)

    def test_invalid_gridref(self, client):
        resp = client.get("/api/v1/gridref/XX123")
        assert resp.status_code == 400

    def test_unknown_datum(self, client):
        resp = client.get("/api/v1/gridref/TG5113", params={"datum": "Narnia"})
        assert resp.status_code == 400
        assert "Narnia" in resp.json()["detail"]

    def test_odd_digits(self, client):
        resp = client.get("/api/v1/gridref/TG5113", params={"digits": 3})
        assert resp.status_code == 400

    def test_post_easting_northing(self, client):
        resp = client.post("/api/v1/convert/gridref-to-latlon", json={"easting": 392395, "northing": 352997})
        assert resp.status_code == 200
        assert resp.json()["latlon"]["longitude"] == pytest.approx(-2.114964, abs=5e-5)

    def test_post_out_of_range(self, client):
        resp = client.post("/api/v1/convert/gridref-to-latlon", json={"easting": 700001, "northing": 0})
        assert resp.status_code == 400

    def test_post_nothing(self, client):
        resp = client.post("/api/v1/convert/gridref-to-latlon", json={})
        assert resp.status_code == 400

    def test_latlon_to_gridref(self, client):
        resp = client.post("/api/v1/convert/latlon-to-gridref", json={
            "latitude": "52°39′28.72″N",
            "longitude": 1.716020,
            "digits": 8,
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["grid"]["gridref"].startswith("TG 5140 1317")
        assert data["latlon"]["formatted"] == "52.6580°N, 001.7160°E"

    def test_latlon_to_gridref_odd_digits(self, client):
        resp = client.post("/api/v1/convert/latlon-to-gridref", json={
            "latitude": 52.657977, "longitude": 1.716020, "digits": 3,
        })
        assert resp.status_code == 400
        assert "precision" in resp.json()["detail"]

    def test_latlon_to_gridref_outside(self, client):
        resp = client.post("/api/v1/convert/latlon-to-gridref", json={"latitude": 40, "longitude": -2})
        assert resp.status_code == 400

    def test_latlon_unparseable(self, client):
        resp = client.post("/api/v1/convert/latlon-to-gridref", json={"latitude": "north-ish", "longitude": 0})
        assert resp.status_code == 400


class TestDatumEndpoints:
    def test_convert_datum(self, client):
        resp = client.post("/api/v1/convert/datum", json={
            "latitude": 51.47788,
            "longitude": -0.00147,
            "to_datum": "OSGB36",
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["source"]["datum"] == "WGS84"
        assert data["result"]["datum"] == "OSGB36"
        assert data["result"]["latitude"] == pytest.approx(51.4773, abs=1e-4)

    def test_convert_datum_unknown(self, client):
        resp = client.post("/api/v1/convert/datum", json={"latitude": 51, "longitude": 0, "to_datum": "Narnia"})
        assert resp.status_code == 400

    def test_cartesian_round_trip(self, client):
        resp = client.post("/api/v1/convert/latlon-to-cartesian", json={
            "latitude": 52.657977, "longitude": 1.716020, "height": 24.7, "datum": "OSGB36",
        })
        assert resp.status_code == 200
        xyz = resp.json()
        assert xyz["datum"] == "OSGB36"

        resp = client.post("/api/v1/convert/cartesian-to-latlon", json=xyz)
        assert resp.status_code == 200
        data = resp.json()
        assert data["latitude"] == pytest.approx(52.657977, abs=1e-9)
        assert data["height"] == pytest.approx(24.7, abs=1e-3)

    def test_geocentre(self, client):
        resp = client.post("/api/v1/convert/cartesian-to-latlon", json={"x": 0, "y": 0, "z": 0})
        assert resp.status_code == 422


class TestSphericalEndpoints:
    def test_distance(self, client):
        resp = client.post("/api/v1/spherical/distance", json={
            "start": {"latitude": 52.205, "longitude": 0.119},
            "end": {"latitude": 48.857, "longitude": 2.351},
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["distance_m"] == pytest.approx(404279, abs=1)
        assert data["initial_bearing"] == pytest.approx(156.2, abs=0.5)
        assert data["final_bearing"] == pytest.approx(157.9, abs=0.5)

    def test_midpoint(self, client):
        resp = client.post("/api/v1/spherical/midpoint", json={
            "start": {"latitude": 52.205, "longitude": 0.119},
            "end": {"latitude": 48.857, "longitude": 2.351},
        })
        assert resp.status_code == 200
        assert resp.json()["latitude"] == pytest.approx(50.5363, abs=1e-4)

    @pytest.mark.parametrize("fraction", [0.25, 0.5])
    def test_midpoint_antipodal(self, client, fraction):
        resp = client.post("/api/v1/spherical/midpoint", json={
            "start": {"latitude": 0, "longitude": 0},
            "end": {"latitude": 0, "longitude": 180},
            "fraction": fraction,
        })
        assert resp.status_code == 400

    def test_destination(self, client):
        resp = client.post("/api/v1/spherical/destination", json={
            "start": {"latitude": 51.47788, "longitude": -0.00147},
            "distance_m": 7794,
            "bearing": 300.7,
        })
        assert resp.status_code == 200
        assert resp.json()["longitude"] == pytest.approx(-0.0983, abs=5e-5)

    def test_intersection(self, client):
        resp = client.post("/api/v1/spherical/intersection", json={
            "first": {"latitude": 51.8853, "longitude": 0.2545},
            "first_bearing": 108.547,
            "second": {"latitude": 49.0034, "longitude": 2.5735},
            "second_bearing": 32.435,
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["intersects"] is True
        assert data["point"]["latitude"] == pytest.approx(50.9078, abs=1e-4)

    def test_no_intersection(self, client):
        resp = client.post("/api/v1/spherical/intersection", json={
            "first": {"latitude": 0, "longitude": 0},
            "first_bearing": 135,
            "second": {"latitude": 0, "longitude": 1},
            "second_bearing": 45,
        })
        assert resp.status_code == 200
        assert resp.json() == {"intersects": False, "point": None}

    def test_area(self, client):
        resp = client.post("/api/v1/spherical/area", json={
            "polygon": [
                {"latitude": 1, "longitude": 1},
                {"latitude": 2, "longitude": 1},
                {"latitude": 1, "longitude": 2},
            ],
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["area_m2"] == pytest.approx(6181527888, abs=1.0)
        assert data["vertices"] == 3

    def test_latitude_out_of_range(self, client):
        resp = client.post("/api/v1/spherical/distance", json={
            "start": {"latitude": 95, "longitude": 0},
            "end": {"latitude": 0, "longitude": 0},
        })
        assert resp.status_code == 422
