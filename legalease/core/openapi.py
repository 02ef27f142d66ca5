from fastapi import FastAPI

ERROR_SCHEMA_REF = "#/components/schemas/ErrorResponse"

TRACE_ID_HEADER = {
    "description": "Correlation ID echoed from the request or generated per request",
    "schema": {"type": "string"},
}


def _validation_error_response() -> dict:
    return {
        "description": "Validation Error",
        "content": {"application/json": {"schema": {"$ref": ERROR_SCHEMA_REF}}},
    }


def custom_openapi(app: FastAPI):
    """Generate the OpenAPI schema with LegalEase error envelopes.

    FastAPI's 422 HTTPValidationError responses are replaced by 400
    ErrorResponse bodies, which is what request validation actually answers.
    Every documented response carries the X-Trace-ID header.
    """
    if app.openapi_schema:
        return app.openapi_schema

    from fastapi.openapi.utils import get_openapi

    servers = [{"url": app.root_path}] if app.root_path else None

    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
        servers=servers,
    )

    schemas = openapi_schema.get("components", {}).get("schemas", {})
    has_error_schema = "ErrorResponse" in schemas

    for path in openapi_schema.get("paths", {}).values():
        for operation in path.values():
            responses = operation.get("responses", {})
            validation = responses.pop("422", None)
            if validation is not None and has_error_schema:
                responses.setdefault("400", _validation_error_response())
            for response in responses.values():
                response.setdefault("headers", {})["X-Trace-ID"] = TRACE_ID_HEADER

    schemas.pop("HTTPValidationError", None)
    schemas.pop("ValidationError", None)

    app.openapi_schema = openapi_schema
    return app.openapi_schema
