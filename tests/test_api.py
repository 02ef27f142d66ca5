from io import BytesIO
from pathlib import Path

from legalease.core.settings import PROJECT_ROOT


def _upload(client, name="contract.txt", content=b"The tenant shall pay.", content_type="text/plain"):
    return client.post(
        "/documents/upload",
        files={"file": (name, BytesIO(content), content_type)},
    )


class TestInfoEndpoints:
    def test_root(self, make_client):
        resp = make_client().get("/")

        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "healthy"
        assert body["version"] == "1.0.0"
        assert resp.headers["X-Trace-ID"]

    def test_health(self, make_client):
        body = make_client(APP_ENV="staging").get("/health").json()

        assert body["status"] == "healthy"
        assert body["uptime"] >= 0
        assert body["environment"] == "staging"
        assert body["memory"]["rss"] > 0
        assert body["memory"]["vms"] >= body["memory"]["rss"]

    def test_documents_info_and_health(self, make_client):
        client = make_client()

        assert client.get("/documents").json()["message"] == "Documents API is working perfectly!"
        health = client.get("/documents/health").json()
        assert health["service"] == "documents"
        assert health["features"] == ["upload", "list", "process"]

    def test_documents_list_is_static(self, make_client):
        body = make_client().get("/documents/list").json()

        assert body["success"] is True
        assert body["count"] == 3
        assert [d["id"] for d in body["documents"]] == ["doc-001", "doc-002", "doc-003"]

    def test_api_test_endpoint(self, make_client):
        body = make_client().get("/api/test").json()

        assert body["status"] == "working"

    def test_unknown_route(self, make_client):
        resp = make_client().get("/nope")

        assert resp.status_code == 404
        body = resp.json()
        assert body["error"] == "Route not found"
        assert body["path"] == "/nope"
        assert "/documents/upload" in body["availableEndpoints"]

    def test_wrong_method_is_route_not_found(self, make_client):
        resp = make_client().get("/documents/upload")

        assert resp.status_code == 404
        assert resp.json()["error"] == "Route not found"

    def test_openapi_has_no_default_422(self, make_client):
        schema = make_client().get("/openapi.json").json()

        responses = schema["paths"]["/documents/upload"]["post"]["responses"]
        assert "422" not in responses
        assert "400" in responses
        assert "HTTPValidationError" not in schema["components"]["schemas"]

    def test_openapi_validation_errors_use_error_envelope(self, make_client):
        schema = make_client().get("/openapi.json").json()

        simplify = schema["paths"]["/documents/simplify"]["post"]["responses"]
        body_schema = simplify["400"]["content"]["application/json"]["schema"]
        assert body_schema["$ref"] == "#/components/schemas/ErrorResponse"
        assert "X-Trace-ID" in simplify["200"]["headers"]

    def test_openapi_lists_root_path_as_server(self, make_client):
        app = make_client().app
        app.root_path = "/legalease"
        app.openapi_schema = None

        assert app.openapi()["servers"] == [{"url": "/legalease"}]


class TestUpload:
    def test_upload_success(self, make_client, uploads_dir):
        content = b"The tenant shall pay rent."
        resp = _upload(make_client(), content=content)

        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        data = body["data"]
        assert data["uploadId"].startswith("upload-")
        assert data["filename"].startswith("file-") and data["filename"].endswith(".txt")
        assert data["originalName"] == "contract.txt"
        assert data["size"] == len(content)
        assert data["mimetype"] == "text/plain"
        assert data["uploadedAt"].endswith("Z")
        stored = Path(data["filePath"])
        assert stored.parent == uploads_dir.resolve()
        assert stored.read_bytes() == content
        assert body["nextSteps"] == ["Text extraction", "Legal analysis", "Simplification"]

    def test_uploads_get_distinct_names(self, make_client):
        client = make_client()

        names = {_upload(client).json()["data"]["filename"] for _ in range(5)}

        assert len(names) == 5

    def test_disallowed_extension_is_not_written(self, make_client, uploads_dir):
        resp = _upload(make_client(), name="setup.exe", content_type="application/x-msdownload")

        assert resp.status_code == 400
        body = resp.json()
        assert body["success"] is False
        assert body["error"] == "Upload error"
        assert body["message"] == "Only PDF, DOC, DOCX, and TXT files are allowed!"
        assert list(uploads_dir.iterdir()) == []

    def test_file_too_large(self, make_client, uploads_dir):
        client = make_client(MAX_UPLOAD_SIZE_MB=1)

        resp = _upload(client, name="big.pdf", content=b"x" * (1024 * 1024 + 1))

        assert resp.status_code == 400
        body = resp.json()
        assert body["error"] == "File too large"
        assert body["message"] == "File size must be less than 1MB"
        assert list(uploads_dir.iterdir()) == []

    def test_several_files_rejected(self, make_client, uploads_dir):
        resp = make_client().post(
            "/documents/upload",
            files=[
                ("file", ("a.txt", BytesIO(b"first"), "text/plain")),
                ("file", ("b.txt", BytesIO(b"second"), "text/plain")),
            ],
        )

        assert resp.status_code == 400
        body = resp.json()
        assert body["error"] == "Upload error"
        assert body["code"] == "LIMIT_UNEXPECTED_FILE"
        assert list(uploads_dir.iterdir()) == []

    def test_no_file(self, make_client):
        resp = make_client().post("/documents/upload", data={"note": "hello"})

        assert resp.status_code == 400
        body = resp.json()
        assert body["error"] == "No file uploaded"
        assert body["message"] == "Please select a file to upload"

    def test_storage_failure(self, make_client, tmp_path):
        client = make_client()
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        client.app.state.upload_store.content_dir = blocker

        resp = _upload(client)

        assert resp.status_code == 500
        body = resp.json()
        assert body["error"] == "Upload failed"
        assert body["message"] != "Unable to store the uploaded file"

    def test_storage_failure_hides_cause_in_production(self, make_client, tmp_path):
        client = make_client(APP_ENV="production")
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        client.app.state.upload_store.content_dir = blocker

        resp = _upload(client)

        assert resp.status_code == 500
        assert resp.json()["message"] == "Unable to store the uploaded file"


class TestSimplify:
    def test_success(self, make_client, make_script, document):
        client = make_client(SIMPLIFIER_SCRIPT=make_script("success"))

        resp = client.post("/documents/simplify", json={"filePath": str(document)})

        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["output"] == "SIMPLIFIED TEXT"
        assert body["fileProcessed"] == "contract.txt"
        assert body["processedAt"].endswith("Z")

    def test_missing_file_path(self, make_client, make_script):
        client = make_client(SIMPLIFIER_SCRIPT=make_script("success"))

        for payload in ({}, {"filePath": ""}, {"filePath": "   "}):
            resp = client.post("/documents/simplify", json=payload)
            assert resp.status_code == 400
            assert resp.json()["error"] == "No file path provided"

    def test_missing_body(self, make_client, make_script):
        resp = make_client(SIMPLIFIER_SCRIPT=make_script("success")).post("/documents/simplify")

        assert resp.status_code == 400
        assert resp.json()["error"] == "No file path provided"

    def test_malformed_body(self, make_client, make_script):
        client = make_client(SIMPLIFIER_SCRIPT=make_script("success"))

        resp = client.post(
            "/documents/simplify",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )

        assert resp.status_code == 400
        assert resp.json()["code"] == "VALIDATION_ERROR"

    def test_file_not_found(self, make_client, make_script, tmp_path):
        client = make_client(SIMPLIFIER_SCRIPT=make_script("success"))

        resp = client.post("/documents/simplify", json={"filePath": str(tmp_path / "gone.pdf")})

        assert resp.status_code == 404
        body = resp.json()
        assert body["error"] == "File not found"
        assert body["message"] == "The specified file does not exist"

    def test_script_not_found(self, make_client, tmp_path, document):
        client = make_client(SIMPLIFIER_SCRIPT=tmp_path / "absent.py")

        resp = client.post("/documents/simplify", json={"filePath": str(document)})

        assert resp.status_code == 500
        body = resp.json()
        assert body["error"] == "Processing script not found"
        assert body["message"] == "Document processing is temporarily unavailable"

    def test_processing_failure_returns_stderr(self, make_client, make_script, document):
        client = make_client(SIMPLIFIER_SCRIPT=make_script("failure"))

        resp = client.post("/documents/simplify", json={"filePath": str(document)})

        assert resp.status_code == 500
        body = resp.json()
        assert body["error"] == "Processing failed"
        assert body["details"] == "boom: cannot parse document"

    def test_empty_output_is_failure(self, make_client, make_script, document):
        client = make_client(SIMPLIFIER_SCRIPT=make_script("empty"))

        resp = client.post("/documents/simplify", json={"filePath": str(document)})

        assert resp.status_code == 500
        assert resp.json()["details"] == "Unknown processing error"

    def test_timeout(self, make_client, make_script, document):
        client = make_client(
            SIMPLIFIER_SCRIPT=make_script("hang"), SIMPLIFY_TIMEOUT_SECONDS=0.5
        )

        resp = client.post("/documents/simplify", json={"filePath": str(document)})

        assert resp.status_code == 408
        body = resp.json()
        assert body["error"] == "Processing timeout"
        assert body["message"] == "Document processing took too long. Please try again."

    def test_unexpected_error(self, make_client, make_script, document):
        client = make_client(SIMPLIFIER_SCRIPT=make_script("success"))

        async def explode(file_path):
            raise RuntimeError("spawn failed")

        client.app.state.simplifier.simplify = explode

        resp = client.post("/documents/simplify", json={"filePath": str(document)})

        assert resp.status_code == 500
        body = resp.json()
        assert body["error"] == "Processing failed"
        assert body["message"] == "An unexpected error occurred during processing"

    def test_upload_then_simplify_with_bundled_script(self, make_client):
        client = make_client(
            SIMPLIFIER_SCRIPT=PROJECT_ROOT / "scripts" / "simple_legal_simplifier.py",
            SIMPLIFY_TIMEOUT_SECONDS=10,
        )
        upload = _upload(client, content=b"The tenant shall pay rent prior to the first day.")
        file_path = upload.json()["data"]["filePath"]

        resp = client.post("/documents/simplify", json={"filePath": file_path})

        assert resp.status_code == 200
        assert resp.json()["output"] == "The tenant must pay rent before the first day."


class TestErrorHandling:
    def _add_failing_route(self, client):
        async def boom():
            raise RuntimeError("database on fire")

        client.app.add_api_route("/boom", boom)

    def test_unhandled_error_shows_message_in_development(self, make_client):
        client = make_client(raise_server_exceptions=False)
        self._add_failing_route(client)

        resp = client.get("/boom")

        assert resp.status_code == 500
        body = resp.json()
        assert body["error"] == "Internal server error"
        assert body["message"] == "database on fire"

    def test_unhandled_error_hidden_in_production(self, make_client):
        client = make_client(APP_ENV="production", raise_server_exceptions=False)
        self._add_failing_route(client)

        resp = client.get("/boom")

        assert resp.status_code == 500
        assert resp.json()["message"] == "Something went wrong"


class TestCors:
    def test_allowed_origin(self, make_client):
        resp = make_client().options(
            "/documents/upload",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "http://localhost:3000"
        assert resp.headers["access-control-allow-credentials"] == "true"

    def test_unknown_origin(self, make_client):
        resp = make_client().get("/", headers={"Origin": "https://evil.example"})

        assert "access-control-allow-origin" not in resp.headers
