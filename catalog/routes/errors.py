from flask import jsonify
from werkzeug.exceptions import HTTPException

from catalog import errors

# Checked in MRO order, so subclasses inherit their base's status.
STATUS_BY_ERROR = {
    errors.NotFound: 404,
    errors.ReferenceNotFound: 404,
    errors.DuplicateName: 409,
    errors.SelfParent: 409,
    errors.CircularReference: 409,
    errors.InternalError: 500,
}


class InvalidRequest(Exception):
    """Raised by routes when a form fails validation."""

    def __init__(self, fields: dict):
        super().__init__("Invalid request")
        self.fields = fields


def validated(form):
    """Return ``form`` if it validates, otherwise raise ``InvalidRequest``.

    Errors are keyed by the JSON field name (``parentId``), not the attribute.
    """
    if not form.validate():
        raise InvalidRequest(
            {
                (form[key].name if key in form else key): messages
                for key, messages in form.errors.items()
            }
        )
    return form


def status_for(error: errors.CatalogError) -> int:
    for cls in type(error).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return 500


def register_error_handlers(app):
    @app.errorhandler(errors.CatalogError)
    def catalog_error(e):
        status = status_for(e)
        if status >= 500:
            app.logger.error("%s: %s", e.kind, e.message)
        return jsonify(error=e.kind, message=e.message), status

    @app.errorhandler(InvalidRequest)
    def invalid_request(e):
        return (
            jsonify(error="ValidationError", message=str(e), fields=e.fields),
            400,
        )

    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify(error=e.name.replace(" ", ""), message=e.description), e.code

    @app.errorhandler(500)
    def internal_error(e):
        app.logger.exception("Internal server error")
        return (
            jsonify(error="InternalError", message="Something went wrong"),
            500,
        )
