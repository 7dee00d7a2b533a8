"""
File access service tests
"""

import hashlib

import pytest

from filecloud.core.errors import InvalidInput, NotFound, Unauthorized
from filecloud.models import StoredFile
from filecloud.services import auth, files


@pytest.fixture
def owner(db):
    token = auth.login(db, "testuser", "password")
    return files.require_owner(db, token)


class TestRequireOwner:

    def test_resolves_login(self, db, owner):
        assert owner == "testuser"

    @pytest.mark.parametrize("token", [None, "", "bogus"])
    def test_rejects_bad_token(self, db, token):
        with pytest.raises(Unauthorized):
            files.require_owner(db, token)


class TestListFiles:

    def test_sorted_by_size(self, db, owner):
        files.save_file(db, owner, "big.bin", b"x" * 30)
        files.save_file(db, owner, "small.bin", b"x")
        files.save_file(db, owner, "mid.bin", b"x" * 10)

        names = [f.filename for f in files.list_files(db, owner)]
        assert names == ["small.bin", "mid.bin", "big.bin"]

    def test_limit(self, db, owner):
        for size in (3, 1, 2):
            files.save_file(db, owner, f"f{size}", b"x" * size)

        result = files.list_files(db, owner, 2)
        assert [f.size for f in result] == [1, 2]

    @pytest.mark.parametrize("limit", [0, -5])
    def test_non_positive_limit_means_unlimited(self, db, owner, limit):
        for i in range(3):
            files.save_file(db, owner, f"f{i}", b"data")

        assert len(files.list_files(db, owner, limit)) == 3
        assert files.list_files(db, owner, limit) == files.list_files(db, owner)

    def test_only_owner_files(self, db, owner):
        files.save_file(db, owner, "mine.txt", b"mine")
        files.save_file(db, "other", "theirs.txt", b"theirs")

        result = files.list_files(db, owner)
        assert [f.filename for f in result] == ["mine.txt"]
        assert all(f.owner == owner for f in result)


class TestSaveFile:

    def test_stores_content_and_metadata(self, db, owner):
        stored = files.save_file(db, owner, "test.txt", b"hello")

        assert stored.id is not None
        assert stored.size == 5
        assert stored.owner == "testuser"
        assert stored.hash == hashlib.sha256(b"hello").hexdigest()

    @pytest.mark.parametrize("filename", [None, "", "   "])
    def test_blank_filename(self, db, owner, filename):
        with pytest.raises(InvalidInput):
            files.save_file(db, owner, filename, b"hello")

    @pytest.mark.parametrize("data", [None, b""])
    def test_empty_payload(self, db, owner, data):
        with pytest.raises(InvalidInput):
            files.save_file(db, owner, "test.txt", data)

        assert db.query(StoredFile).count() == 0

    def test_same_name_is_not_overwritten(self, db, owner):
        files.save_file(db, owner, "dup.txt", b"one")
        files.save_file(db, owner, "dup.txt", b"two")

        assert db.query(StoredFile).filter_by(owner=owner, filename="dup.txt").count() == 2


class TestDeleteFile:

    def test_delete(self, db, owner):
        files.save_file(db, owner, "test.txt", b"hello")
        files.delete_file(db, owner, "test.txt")

        assert files.list_files(db, owner) == []

    def test_missing(self, db, owner):
        with pytest.raises(NotFound):
            files.delete_file(db, owner, "missing.txt")

    def test_cannot_delete_other_owner_file(self, db, owner):
        files.save_file(db, "other", "theirs.txt", b"theirs")

        with pytest.raises(NotFound):
            files.delete_file(db, owner, "theirs.txt")
        assert db.query(StoredFile).count() == 1

    def test_duplicate_removes_first_only(self, db, owner):
        files.save_file(db, owner, "dup.txt", b"one")
        second_id = files.save_file(db, owner, "dup.txt", b"two").id

        files.delete_file(db, owner, "dup.txt")

        remaining = db.query(StoredFile).all()
        assert [f.id for f in remaining] == [second_id]
        assert remaining[0].data == b"two"


class TestRenameFile:

    def test_rename(self, db, owner):
        files.save_file(db, owner, "old.txt", b"content")
        files.rename_file(db, owner, "old.txt", "new.txt")

        with pytest.raises(NotFound):
            files.download_file(db, owner, "old.txt")
        assert files.download_file(db, owner, "new.txt").data == b"content"

    def test_missing(self, db, owner):
        with pytest.raises(NotFound):
            files.rename_file(db, owner, "old.txt", "new.txt")

    def test_blank_new_name(self, db, owner):
        files.save_file(db, owner, "old.txt", b"content")

        with pytest.raises(InvalidInput):
            files.rename_file(db, owner, "old.txt", " ")

    def test_missing_file_reported_before_blank_name(self, db, owner):
        with pytest.raises(NotFound):
            files.rename_file(db, owner, "missing.txt", "")

    def test_missing_uses_input_error_message(self, db, owner):
        with pytest.raises(NotFound) as exc_info:
            files.rename_file(db, owner, "missing.txt", "new.txt")

        assert exc_info.value.message == "Ошибка входных данных"

    def test_duplicate_renames_first_only(self, db, owner):
        first_id = files.save_file(db, owner, "dup.txt", b"one").id
        second_id = files.save_file(db, owner, "dup.txt", b"two").id

        renamed = files.rename_file(db, owner, "dup.txt", "renamed.txt")

        assert renamed.id == first_id
        assert db.get(StoredFile, first_id).filename == "renamed.txt"
        assert db.get(StoredFile, second_id).filename == "dup.txt"

    def test_no_uniqueness_check(self, db, owner):
        files.save_file(db, owner, "a.txt", b"a")
        files.save_file(db, owner, "b.txt", b"b")

        files.rename_file(db, owner, "a.txt", "b.txt")

        assert [f.filename for f in files.list_files(db, owner)] == ["b.txt", "b.txt"]


class TestDownloadFile:

    def test_round_trip(self, db, owner):
        payload = bytes(range(256))
        files.save_file(db, owner, "blob.bin", payload)

        assert files.download_file(db, owner, "blob.bin").data == payload

    def test_missing(self, db, owner):
        with pytest.raises(NotFound):
            files.download_file(db, owner, "missing.txt")

    def test_duplicate_returns_first_upload(self, db, owner):
        files.save_file(db, owner, "dup.txt", b"first")
        files.save_file(db, owner, "dup.txt", b"second upload")

        assert files.download_file(db, owner, "dup.txt").data == b"first"

    def test_other_owner_file_is_hidden(self, db, owner):
        files.save_file(db, "other", "theirs.txt", b"theirs")

        with pytest.raises(NotFound):
            files.download_file(db, owner, "theirs.txt")
