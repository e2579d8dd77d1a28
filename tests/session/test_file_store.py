# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests specific to FileSessionStore: on-disk layout, durability, and bad input."""

from __future__ import annotations

import json

import pytest

from sessionlogin.kernel.exceptions import SessionStoreException
from sessionlogin.session.adapters.file import FileSessionStore


class TestLayout:
    def test_creates_directory(self, tmp_path):
        path = tmp_path / "nested" / "sessions"
        FileSessionStore(path=path)
        assert path.is_dir()

    @pytest.mark.asyncio
    async def test_one_json_file_per_session(self, tmp_path):
        store = FileSessionStore(path=tmp_path)
        await store.save("s1", {"username": "alice"}, ttl=60)

        document = json.loads((tmp_path / "s1.json").read_text())
        assert document["data"] == {"username": "alice"}
        assert isinstance(document["expires_at"], float)

    @pytest.mark.asyncio
    async def test_custom_extension(self, tmp_path):
        store = FileSessionStore(path=tmp_path, extension=".session")
        await store.save("s1", {}, ttl=60)
        assert (tmp_path / "s1.session").is_file()
        assert await store.ids() == ["s1"]

    def test_extension_must_start_with_dot(self, tmp_path):
        with pytest.raises(ValueError):
            FileSessionStore(path=tmp_path, extension="json")

    @pytest.mark.asyncio
    async def test_no_temporary_files_left_behind(self, tmp_path):
        store = FileSessionStore(path=tmp_path)
        for i in range(5):
            await store.save("s1", {"n": i}, ttl=60)
        assert sorted(p.name for p in tmp_path.iterdir()) == ["s1.json"]

    def test_unusable_directory(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        with pytest.raises(SessionStoreException):
            FileSessionStore(path=blocker / "sessions")


class TestDurability:
    @pytest.mark.asyncio
    async def test_records_survive_a_new_store_instance(self, tmp_path):
        await FileSessionStore(path=tmp_path).save("s1", {"username": "alice"}, ttl=60)
        assert await FileSessionStore(path=tmp_path).get("s1") == {"username": "alice"}

    @pytest.mark.asyncio
    async def test_expired_file_is_removed_on_read(self, tmp_path):
        store = FileSessionStore(path=tmp_path)
        await store.save("s1", {}, ttl=-1)
        assert await store.get("s1") is None
        assert not (tmp_path / "s1.json").exists()


class TestBadInput:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("session_id", ["../escape", "a/b", "", "dot.ted"])
    async def test_invalid_session_id_rejected(self, tmp_path, session_id):
        store = FileSessionStore(path=tmp_path)
        with pytest.raises(SessionStoreException):
            await store.save(session_id, {}, ttl=60)

    @pytest.mark.asyncio
    async def test_corrupt_file_reads_as_missing(self, tmp_path):
        (tmp_path / "s1.json").write_text("{not json")
        store = FileSessionStore(path=tmp_path)
        assert await store.get("s1") is None
        assert await store.ids() == []

    @pytest.mark.asyncio
    async def test_wrong_shape_reads_as_missing(self, tmp_path):
        (tmp_path / "s1.json").write_text(json.dumps({"username": "alice"}))
        assert await FileSessionStore(path=tmp_path).get("s1") is None

    @pytest.mark.asyncio
    async def test_purge_removes_corrupt_files(self, tmp_path):
        (tmp_path / "bad.json").write_text("{not json")
        store = FileSessionStore(path=tmp_path)
        await store.save("good", {}, ttl=60)
        assert await store.purge_expired() == 1
        assert await store.ids() == ["good"]
