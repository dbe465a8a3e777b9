# =============================================================================
# tests/test_routes.py - API Endpoint Tests
# =============================================================================
# End-to-end tests through FastAPI's TestClient with the in-memory
# Supabase fake. Authentication is overridden to a fixed user.
# =============================================================================

from unittest.mock import MagicMock
from uuid import uuid4

from core.services.document_service import DocumentService


def upload(client, name="notes.md", content=b"# Notes\n", content_type="text/markdown"):
    return client.post("/api/v1/documents/upload", files={"file": (name, content, content_type)})


# =============================================================================
# Upload
# =============================================================================

class TestUpload:

    def test_upload_creates_private_document(self, api_client, fake_supabase, owner_id):
        response = upload(api_client)

        assert response.status_code == 201
        body = response.json()
        assert body["file_name"] == "notes.md"
        assert body["content"] == "# Notes\n"
        assert body["is_public"] is False
        assert body["title"] is None
        assert body["display_title"] == "notes.md"
        assert fake_supabase.blobs()[f"{owner_id}/notes.md"] == b"# Notes\n"

    def test_upload_drops_directories_from_file_name(self, api_client, fake_supabase, owner_id):
        """A crafted multipart name can't escape the owner's storage folder."""
        response = upload(api_client, name="../victim/notes.md")

        assert response.status_code == 201
        assert response.json()["file_name"] == "notes.md"
        assert fake_supabase.rows()[0]["storage_path"] == f"{owner_id}/notes.md"
        assert list(fake_supabase.blobs()) == [f"{owner_id}/notes.md"]

    def test_upload_rejects_dot_only_name(self, api_client, fake_supabase):
        response = upload(api_client, name="..")

        assert response.status_code == 400
        assert response.json()["code"] == "FILE_READ_ERROR"
        assert fake_supabase.rows() == []

    def test_upload_strips_bom(self, api_client):
        response = upload(api_client, content="\ufeff# Notes".encode("utf-8"))

        assert response.json()["content"] == "# Notes"

    def test_upload_rejects_extension(self, api_client, fake_supabase):
        response = upload(api_client, name="notes.pdf", content_type="application/pdf")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_FILE_TYPE"
        assert fake_supabase.rows() == []

    def test_upload_rejects_binary(self, api_client, fake_supabase):
        response = upload(api_client, content=b"\xff\xfe\x00\x81")

        assert response.status_code == 400
        assert response.json()["code"] == "FILE_READ_ERROR"

    def test_upload_too_large(self, api_client, fake_supabase):
        response = upload(api_client, content=b"a" * (5 * 1024 * 1024 + 1))

        assert response.status_code == 413
        assert response.json()["code"] == "FILE_TOO_LARGE"

    def test_upload_duplicate_name(self, api_client):
        upload(api_client)

        response = upload(api_client)

        assert response.status_code == 409
        assert response.json()["code"] == "DUPLICATE_FILE_NAME"

    def test_upload_storage_failure_leaves_nothing(self, api_client, fake_supabase):
        fake_supabase.fail_on.add(("storage", "upload"))

        response = upload(api_client)

        assert response.status_code == 500
        assert response.json()["code"] == "STORAGE_UPLOAD_ERROR"
        assert fake_supabase.rows() == []

    def test_upload_requires_auth(self, anonymous_client):
        response = upload(anonymous_client)

        assert response.status_code in (401, 403)


# =============================================================================
# Documents
# =============================================================================

class TestDocumentEndpoints:

    def test_create_blank_document(self, api_client):
        response = api_client.post("/api/v1/documents", json={})

        assert response.status_code == 201
        body = response.json()
        assert body["file_name"].endswith(".md")
        assert body["content"] == ""

    def test_create_with_file_name(self, api_client):
        response = api_client.post(
            "/api/v1/documents",
            json={"file_name": "draft.md", "content": "# Draft", "title": "Draft", "is_public": True},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["file_name"] == "draft.md"
        assert body["display_title"] == "Draft"
        assert body["is_public"] is True

    def test_create_rejects_path_in_file_name(self, api_client, fake_supabase):
        response = api_client.post("/api/v1/documents", json={"file_name": "../x.md"})

        assert response.status_code == 422
        assert fake_supabase.rows() == []

    def test_list_documents(self, api_client):
        upload(api_client, name="a.md")
        upload(api_client, name="b.md")

        response = api_client.get("/api/v1/documents")

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        assert [d["file_name"] for d in body["documents"]] == ["b.md", "a.md"]

    def test_get_document(self, api_client):
        document_id = upload(api_client).json()["id"]

        response = api_client.get(f"/api/v1/documents/{document_id}")

        assert response.status_code == 200
        assert response.json()["content"] == "# Notes\n"

    def test_get_other_users_private_document(self, api_client, fake_supabase, other_user_id):
        other = DocumentService.create_document(other_user_id, "theirs.md", "secret")

        response = api_client.get(f"/api/v1/documents/{other.id}")

        assert response.status_code == 404
        assert response.json()["code"] == "DOCUMENT_NOT_FOUND"

    def test_get_other_users_public_document(self, api_client, fake_supabase, other_user_id):
        other = DocumentService.create_document(other_user_id, "theirs.md", "hello", is_public=True)

        response = api_client.get(f"/api/v1/documents/{other.id}")

        assert response.status_code == 200
        assert response.json()["content"] == "hello"

    def test_get_invalid_id(self, api_client):
        response = api_client.get("/api/v1/documents/not-a-uuid")

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_patch_document(self, api_client):
        document_id = upload(api_client).json()["id"]

        response = api_client.patch(
            f"/api/v1/documents/{document_id}",
            json={"title": "Notes", "content": "# Updated"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Notes"
        assert body["content"] == "# Updated"
        assert api_client.get(f"/api/v1/documents/{document_id}").json()["content"] == "# Updated"

    def test_patch_other_users_document(self, api_client, fake_supabase, other_user_id):
        other = DocumentService.create_document(other_user_id, "theirs.md", "hello", is_public=True)

        response = api_client.patch(f"/api/v1/documents/{other.id}", json={"content": "mine now"})

        assert response.status_code == 404
        assert fake_supabase.blobs()[f"{other_user_id}/theirs.md"] == b"hello"

    def test_toggle_visibility(self, api_client):
        document_id = upload(api_client).json()["id"]

        first = api_client.post(f"/api/v1/documents/{document_id}/visibility")
        second = api_client.post(f"/api/v1/documents/{document_id}/visibility")

        assert first.json()["is_public"] is True
        assert second.json()["is_public"] is False

    def test_share_link(self, api_client):
        document_id = upload(api_client).json()["id"]

        response = api_client.get(f"/api/v1/documents/{document_id}/share")

        assert response.status_code == 200
        assert response.json() == {
            "document_id": document_id,
            "url": f"https://md.example.com/?docId={document_id}",
            "is_public": False,
        }

    def test_delete_document(self, api_client, fake_supabase):
        document_id = upload(api_client).json()["id"]

        response = api_client.delete(f"/api/v1/documents/{document_id}")

        assert response.status_code == 200
        assert response.json()["document_id"] == document_id
        assert fake_supabase.rows() == []
        assert fake_supabase.blobs() == {}
        assert api_client.get(f"/api/v1/documents/{document_id}").status_code == 404

    def test_delete_missing_document(self, api_client):
        response = api_client.delete(f"/api/v1/documents/{uuid4()}")

        assert response.status_code == 404

    def test_exists(self, api_client):
        upload(api_client)

        assert api_client.get("/api/v1/documents/exists", params={"file_name": "notes.md"}).json() == {
            "file_name": "notes.md",
            "exists": True,
        }
        assert api_client.get("/api/v1/documents/exists", params={"file_name": "other.md"}).json()["exists"] is False

    def test_documents_require_auth(self, anonymous_client):
        assert anonymous_client.get("/api/v1/documents").status_code in (401, 403)
        assert anonymous_client.delete(f"/api/v1/documents/{uuid4()}").status_code in (401, 403)


# =============================================================================
# Public
# =============================================================================

class TestPublicEndpoints:

    def test_public_document(self, anonymous_client, fake_supabase, owner_id, sample_markdown):
        document = DocumentService.create_document(owner_id, "notes.md", sample_markdown, is_public=True)

        response = anonymous_client.get(f"/api/v1/public/documents/{document.id}")

        assert response.status_code == 200
        assert response.json()["content"] == sample_markdown

    def test_private_document_is_not_found(self, anonymous_client, fake_supabase, owner_id):
        document = DocumentService.create_document(owner_id, "notes.md", "secret")

        response = anonymous_client.get(f"/api/v1/public/documents/{document.id}")

        assert response.status_code == 404
        assert "secret" not in response.text

    def test_raw_markdown(self, anonymous_client, fake_supabase, owner_id, sample_markdown):
        document = DocumentService.create_document(owner_id, "notes.md", sample_markdown, is_public=True)

        response = anonymous_client.get(f"/api/v1/public/documents/{document.id}/raw")

        assert response.status_code == 200
        assert response.headers["content-type"] == "text/markdown; charset=utf-8"
        assert response.text == sample_markdown

    def test_raw_private_is_not_found(self, anonymous_client, fake_supabase, owner_id):
        document = DocumentService.create_document(owner_id, "notes.md", "secret")

        assert anonymous_client.get(f"/api/v1/public/documents/{document.id}/raw").status_code == 404


# =============================================================================
# Health
# =============================================================================

class TestHealth:

    def test_health(self, anonymous_client):
        response = anonymous_client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready(self, anonymous_client):
        response = anonymous_client.get("/api/v1/health/ready")

        body = response.json()
        assert body["status"] == "ready"
        assert body["checks"] == {"documents_table": "healthy", "storage_bucket": "healthy"}
        assert (body["table"], body["bucket"]) == ("markdown_documents", "markdown-files")

    def test_ready_degraded(self, anonymous_client, fake_supabase):
        fake_supabase.fail_on.add(("markdown_documents", "select"))

        response = anonymous_client.get("/api/v1/health/ready")

        assert response.json()["status"] == "degraded"
        assert response.json()["checks"]["documents_table"].startswith("unhealthy")
        assert response.json()["checks"]["storage_bucket"] == "healthy"

    def test_ready_missing_bucket(self, anonymous_client, fake_supabase):
        fake_supabase.storage.get_bucket = MagicMock(side_effect=Exception("Bucket not found"))

        response = anonymous_client.get("/api/v1/health/ready")

        assert response.json()["status"] == "degraded"
        assert response.json()["checks"]["storage_bucket"] == "unhealthy: Bucket not found"

    def test_live(self, anonymous_client):
        assert anonymous_client.get("/api/v1/health/live").json()["status"] == "alive"

    def test_root(self, anonymous_client):
        assert anonymous_client.get("/").json()["name"] == "MarkShare API"
