from storagehub.models.file import FileMeta, FileStatus
from storagehub.models.folder import Folder


def _upload(client, **overrides):
    body = {"fileName": "photo.png", "fileType": "image/png", "fileSize": 2048, "folderName": "vacation"}
    body.update(overrides)
    return client.post("/upload", json=body)


class TestUploadRoute:
    def test_returns_url_file_id_and_path(self, client, db_session):
        response = _upload(client)

        assert response.status_code == 200
        data = response.json()
        assert data["filePath"] == "u1/vacation/photo.png"
        assert data["url"]
        file = db_session.query(FileMeta).filter(FileMeta.file_id == data["fileId"]).one()
        assert file.status == FileStatus.PENDING.value

    def test_missing_file_size_is_400_without_side_effects(self, client, db_session):
        response = client.post("/upload", json={"fileName": "photo.png", "fileType": "image/png"})

        assert response.status_code == 400
        assert "fileSize" in response.json()["details"]["fields"]
        assert db_session.query(FileMeta).count() == 0

    def test_zero_file_size_is_400(self, client):
        assert _upload(client, fileSize=0).status_code == 400

    def test_separator_in_folder_name_is_400(self, client, db_session):
        response = _upload(client, folderName="a/b")

        assert response.status_code == 400
        assert db_session.query(Folder).count() == 0

    def test_same_file_again_gets_a_new_url(self, client, db_session):
        first = _upload(client).json()

        response = _upload(client)

        assert response.status_code == 200
        assert response.json()["fileId"] == first["fileId"]
        assert response.json()["filePath"] == "u1/vacation/photo.png"
        assert db_session.query(FileMeta).count() == 1

    def test_requires_identity(self, client, db_session):
        client.cookies.clear()

        assert _upload(client).status_code == 401
        assert db_session.query(FileMeta).count() == 0

    def test_store_misconfiguration_is_500(self, client, object_store):
        object_store.bucket = None

        response = _upload(client)

        assert response.status_code == 500
        assert response.json()["error"] == "Object store is not configured"


class TestFileUploadedRoute:
    def test_marks_file_uploaded(self, client, db_session):
        file_id = _upload(client).json()["fileId"]

        response = client.post("/file-uploaded", json={"fileId": file_id, "status": "done"})

        assert response.status_code == 200
        assert response.json() == {"message": "File metadata updated successfully"}
        assert db_session.query(FileMeta).one().status == FileStatus.UPLOAD.value

    def test_repeat_confirmation_is_ok(self, client):
        file_id = _upload(client).json()["fileId"]

        client.post("/file-uploaded", json={"fileId": file_id, "status": "done"})
        response = client.post("/file-uploaded", json={"fileId": file_id, "status": "done"})

        assert response.status_code == 200

    def test_missing_status_is_400(self, client):
        file_id = _upload(client).json()["fileId"]

        assert client.post("/file-uploaded", json={"fileId": file_id}).status_code == 400

    def test_any_status_value_is_accepted(self, client, db_session):
        file_id = _upload(client).json()["fileId"]

        for status in (None, 1, True, {"done": True}):
            response = client.post("/file-uploaded", json={"fileId": file_id, "status": status})
            assert response.status_code == 200
        assert db_session.query(FileMeta).one().status == FileStatus.UPLOAD.value

    def test_unknown_file_is_404(self, client):
        response = client.post("/file-uploaded", json={"fileId": "nope", "status": "done"})

        assert response.status_code == 404


class TestCreateFolderRoute:
    def test_creates_folder(self, client, s3_client, object_store):
        response = client.post("/create-folder", json={"folderName": "vacation"})

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == 'Folder "vacation" created successfully!'
        assert data["folder"]["path"] == "u1/vacation"
        assert data["folder"]["ownerId"] == "u1"
        s3_client.head_object(Bucket=object_store.bucket, Key="u1/vacation/")

    def test_twice_keeps_one_row(self, client, db_session):
        first = client.post("/create-folder", json={"folderName": "vacation"}).json()
        second = client.post("/create-folder", json={"folderName": "vacation"}).json()

        assert first["folder"]["folderId"] == second["folder"]["folderId"]
        assert db_session.query(Folder).count() == 1

    def test_missing_name_is_400(self, client):
        assert client.post("/create-folder", json={}).status_code == 400


class TestListing:
    def test_files_with_stats(self, client):
        _upload(client)
        _upload(client, fileName="doc.pdf", fileType="application/pdf", fileSize=512, folderName=None)

        data = client.get("/files").json()

        assert {f["key"] for f in data["files"]} == {"u1/vacation/photo.png", "u1/doc.pdf"}
        assert data["stats"] == {"totalFiles": 2, "totalStorage": 2560}

    def test_files_filtered_by_folder(self, client):
        _upload(client)
        _upload(client, fileName="doc.pdf", fileType="application/pdf", fileSize=512, folderName=None)

        data = client.get("/files", params={"folderName": "vacation"}).json()

        assert [f["name"] for f in data["files"]] == ["photo.png"]
        assert data["stats"] is None

    def test_folders(self, client):
        client.post("/create-folder", json={"folderName": "work"})
        _upload(client)

        names = [f["name"] for f in client.get("/folders").json()]

        assert names == ["vacation", "work"]
