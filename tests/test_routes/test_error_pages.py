from catalog import create_app
from catalog.errors import (
    CatalogError,
    CategoryNotFound,
    CircularReference,
    DuplicateName,
    InternalError,
    NotFound,
    ParentNotFound,
    SelfParent,
)
from catalog.extensions import db as _db
from catalog.routes.errors import status_for


class TestErrorPages:
    def test_404_returns_json(self, client):
        resp = client.get("/nonexistent-page")
        assert resp.status_code == 404
        assert resp.get_json()["error"] == "NotFound"

    def test_405_returns_json(self, client):
        resp = client.put("/api/categories")
        assert resp.status_code == 405
        assert resp.get_json()["error"] == "MethodNotAllowed"

    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.get_json() == {"status": "ok"}

    def test_500_returns_json(self):
        """Use a separate app with exception propagation disabled."""
        app = create_app("testing")
        app.config["PROPAGATE_EXCEPTIONS"] = False

        @app.route("/test-500")
        def trigger_500():
            raise RuntimeError("test error")

        with app.app_context():
            _db.create_all()
            client = app.test_client()
            resp = client.get("/test-500")
            assert resp.status_code == 500
            data = resp.get_json()
            assert data["error"] == "InternalError"
            assert "test error" not in data["message"]
            _db.drop_all()


class TestStatusMapping:
    def test_each_kind(self):
        assert status_for(NotFound()) == 404
        assert status_for(ParentNotFound()) == 404
        assert status_for(CategoryNotFound()) == 404
        assert status_for(DuplicateName()) == 409
        assert status_for(SelfParent()) == 409
        assert status_for(CircularReference()) == 409
        assert status_for(InternalError()) == 500

    def test_unmapped_kind_is_500(self):
        assert status_for(CatalogError()) == 500

    def test_error_carries_kind_and_message(self):
        err = ParentNotFound()
        assert err.kind == "ParentNotFound"
        assert err.message == "Parent category not found"
        assert NotFound("Book 1 not found").message == "Book 1 not found"
