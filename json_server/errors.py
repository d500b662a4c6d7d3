from flask import jsonify
from werkzeug.exceptions import MethodNotAllowed, NotFound

ENDPOINT_NOT_FOUND = "endpoint not found"


class JsonServerError(Exception):
    """Base class for failures that map onto an HTTP error response."""

    status_code = 500
    message = "Unexpected error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class InvalidId(JsonServerError):
    status_code = 400
    message = "Invalid ID"


class InvalidBody(JsonServerError):
    status_code = 400
    message = "Invalid Body"


class InvalidParams(JsonServerError):
    status_code = 400
    message = "Invalid params"


class InvalidEntityType(JsonServerError):
    status_code = 400
    message = "Invalid entity type"


class ElementNotFound(JsonServerError):
    status_code = 404
    message = "Element Not found"


class CollectionNotFound(JsonServerError):
    status_code = 404
    message = ENDPOINT_NOT_FOUND


class UnsupportedOperation(JsonServerError):
    status_code = 500
    message = "Unexpected error"


class PersistenceFailure(JsonServerError):
    status_code = 500
    message = "Error writing the database file"


class LoadFailure(Exception):
    """The backing document could not be read or decoded. Fatal at startup."""


def _error_response(message: str, status_code: int):
    resp = jsonify({"message": message})
    resp.status_code = status_code
    return resp


def register_error_handlers(app):
    @app.errorhandler(JsonServerError)
    def handle_json_server_error(err: JsonServerError):
        # persistence failures are already logged with a traceback by the store
        if err.status_code >= 500 and not isinstance(err, PersistenceFailure):
            app.logger.error("%s: %s", type(err).__name__, err)
        return _error_response(err.message, err.status_code)

    @app.errorhandler(NotFound)
    def handle_not_found(_err):
        return _error_response(ENDPOINT_NOT_FOUND, 404)

    @app.errorhandler(MethodNotAllowed)
    def handle_method_not_allowed(_err):
        return _error_response("method not allowed", 405)

    @app.after_request
    def force_json_content_type(response):
        response.headers["Content-Type"] = "application/json"
        return response
