"""Tests for ConfigStorage and ConfigTypeStorage."""
import os
import logging
import stat
import shutil

import pytest

from config_picker.storage import (
    ConfigStorage,
    ConfigTypeAlreadyExistsError,
    ConfigTypeDescriptor,
    ConfigTypeNotFoundError,
    CopyFileError,
    IncorrectConfigTypeDirectoryError,
    InvalidNameError,
    InvalidStorageRootError,
    LabelNotFoundError,
    ListingError,
    RemoveOldLabelError,
    StagingDirectoryError,
    TemplateResolutionError,
)


class TestConfigStorage:
    """Tests for the config type registry."""

    def test_creates_layout(self, tmp_path, resolver):
        """root, db and temp are created on first use."""
        ConfigStorage(resolver, tmp_path / "root")

        assert (tmp_path / "root" / "db").is_dir()
        assert (tmp_path / "root" / "temp").is_dir()

    def test_reopening_keeps_content(self, tmp_path, resolver):
        """Opening an existing root is harmless."""
        ConfigStorage(resolver, tmp_path / "root").create_config_type("vim")
        reopened = ConfigStorage(resolver, tmp_path / "root")

        assert list(reopened.iter_config_types()) == ["vim"]

    def test_root_is_a_file(self, tmp_path, resolver):
        """A file where the root should be is rejected."""
        (tmp_path / "root").write_text("x")

        with pytest.raises(InvalidStorageRootError):
            ConfigStorage(resolver, tmp_path / "root")

    def test_empty_root_lists_nothing(self, storage):
        """Listing an empty root is an empty sequence, not an error."""
        assert list(storage.iter_config_types()) == []

    def test_create_config_type(self, storage):
        """A new type gets a directory and an empty descriptor."""
        type_storage = storage.create_config_type("vim")

        assert type_storage.config_type == "vim"
        assert type_storage.directory.is_dir()
        assert type_storage.descriptor.paths == ()
        assert ConfigTypeDescriptor.from_file(type_storage.descriptor_path).paths == ()
        assert list(storage.iter_config_types()) == ["vim"]

    def test_create_config_type_is_timed(self, storage, caplog):
        """Type creation is reported on the perf logger."""
        caplog.set_level(logging.DEBUG, logger="config_picker.perf")

        storage.create_config_type("vim")

        records = [r for r in caplog.records if r.name == "config_picker.perf"]
        assert any("create_type" in r.getMessage() and "OK" in r.getMessage() for r in records)

    def test_create_existing_type_fails_untouched(self, storage, make_type):
        """Creating an existing type fails and keeps its descriptor."""
        type_storage = make_type("vim", "{{HOME}}/.vimrc")
        before = type_storage.descriptor_path.read_bytes()

        with pytest.raises(ConfigTypeAlreadyExistsError) as exc_info:
            storage.create_config_type("vim")

        assert exc_info.value.config_type == "vim"
        assert type_storage.descriptor_path.read_bytes() == before

    def test_get_missing_type(self, storage):
        """A type without a directory is not found."""
        with pytest.raises(ConfigTypeNotFoundError) as exc_info:
            storage.get_config_type_storage("missing")

        assert exc_info.value.config_type == "missing"

    def test_type_path_is_a_file(self, storage):
        """A file in place of the type directory is an incorrect type."""
        (storage.directories.db_dir / "broken").write_text("x")

        with pytest.raises(IncorrectConfigTypeDirectoryError):
            storage.get_config_type_storage("broken")

    def test_type_without_descriptor(self, storage):
        """A directory without a readable descriptor is an incorrect type."""
        (storage.directories.db_dir / "bare").mkdir()

        with pytest.raises(IncorrectConfigTypeDirectoryError):
            storage.get_config_type_storage("bare")

    def test_corrupt_descriptor(self, storage):
        """A corrupt descriptor is an incorrect type, also for create."""
        storage.create_config_type("vim")
        storage.directories.descriptor_path("vim").write_text("{not json")

        with pytest.raises(IncorrectConfigTypeDirectoryError):
            storage.get_config_type_storage("vim")
        with pytest.raises(IncorrectConfigTypeDirectoryError):
            storage.create_config_type("vim")

    def test_files_in_db_are_not_types(self, storage):
        """Only directories count as config types."""
        storage.create_config_type("vim")
        storage.create_config_type("git")
        (storage.directories.db_dir / "stray.txt").write_text("x")

        assert sorted(storage.iter_config_types()) == ["git", "vim"]

    @pytest.mark.parametrize("name", ["", ".", "..", "a/b", "a\x00b"])
    def test_invalid_type_names(self, storage, name):
        """Names must be a single path segment."""
        with pytest.raises(InvalidNameError):
            storage.create_config_type(name)


class TestConfigTypeStorage:
    """Tests for store/load/list of labels."""

    def test_store_then_load_round_trip(self, make_type, home):
        """load restores byte-identical content after the live files change."""
        (home / ".vimrc").write_bytes(b"set number\n\x00\xff")
        (home / ".config" / "nvim").mkdir(parents=True)
        (home / ".config" / "nvim" / "init.lua").write_text("-- lua\n")
        type_storage = make_type("vim", "{{HOME}}/.vimrc", "{{HOME}}/.config/nvim/init.lua")

        type_storage.store("work")
        (home / ".vimrc").write_text("changed")
        shutil.rmtree(home / ".config")
        type_storage.load("work")

        assert (home / ".vimrc").read_bytes() == b"set number\n\x00\xff"
        assert (home / ".config" / "nvim" / "init.lua").read_text() == "-- lua\n"

    def test_store_layout(self, make_type, home, storage):
        """The label directory mirrors the raw templates."""
        (home / ".vimrc").write_text("x")
        type_storage = make_type("vim", "{{HOME}}/.vimrc")

        type_storage.store("work")

        label_dir = storage.directories.label_dir("vim", "work")
        assert (label_dir / "{{HOME}}" / ".vimrc").read_text() == "x"
        assert list(storage.directories.temp_dir.iterdir()) == []

    def test_repeated_store_replaces_snapshot(self, storage, make_type, home):
        """A second store under the same label leaves no old files behind."""
        (home / "a").write_text("a1")
        (home / "b").write_text("b1")
        make_type("t", "{{HOME}}/a", "{{HOME}}/b").store("label")

        ConfigTypeDescriptor(paths=("{{HOME}}/a",)).write_to_file(
            storage.directories.descriptor_path("t")
        )
        (home / "a").write_text("a2")
        storage.get_config_type_storage("t").store("label")

        label_dir = storage.directories.label_dir("t", "label")
        assert (label_dir / "{{HOME}}" / "a").read_text() == "a2"
        assert not (label_dir / "{{HOME}}" / "b").exists()

    def test_failed_store_keeps_previous_label(self, storage, make_type, home):
        """A capture failure leaves the old snapshot and no staging dir."""
        (home / "a").write_text("old")
        type_storage = make_type("t", "{{HOME}}/a")
        type_storage.store("label")
        (home / "a").unlink()

        with pytest.raises(CopyFileError):
            type_storage.store("label")

        label_dir = storage.directories.label_dir("t", "label")
        assert (label_dir / "{{HOME}}" / "a").read_text() == "old"
        assert list(storage.directories.temp_dir.iterdir()) == []

    def test_store_with_unresolvable_template(self, make_type, storage):
        """Template failures abort the store before any label is created."""
        type_storage = make_type("t", "{{NOPE}}/x")

        with pytest.raises(TemplateResolutionError):
            type_storage.store("label")

        assert not storage.directories.label_dir("t", "label").exists()

    def test_store_when_temp_is_unusable(self, make_type, storage, home):
        """Staging allocation failures are reported as such."""
        (home / "a").write_text("a")
        type_storage = make_type("t", "{{HOME}}/a")
        shutil.rmtree(storage.directories.temp_dir)
        storage.directories.temp_dir.write_text("not a dir")

        with pytest.raises(StagingDirectoryError):
            type_storage.store("label")

    def test_store_over_a_file_label(self, make_type, storage, home):
        """An old label that cannot be removed as a directory is reported."""
        (home / "a").write_text("a")
        type_storage = make_type("t", "{{HOME}}/a")
        storage.directories.label_dir("t", "label").write_text("squatter")

        with pytest.raises(RemoveOldLabelError):
            type_storage.store("label")

    def test_empty_descriptor(self, make_type, storage):
        """An empty descriptor stores and loads as a no-op."""
        type_storage = make_type("t")

        type_storage.store("empty")
        type_storage.load("empty")

        assert storage.directories.label_dir("t", "empty").is_dir()

    def test_load_missing_label_writes_nothing(self, make_type, home):
        """Loading an unknown label fails before touching the live side."""
        type_storage = make_type("t", "{{HOME}}/deep/dir/file")

        with pytest.raises(LabelNotFoundError) as exc_info:
            type_storage.load("missing")

        assert exc_info.value.label == "missing"
        assert not (home / "deep").exists()

    def test_load_partial_failure_keeps_earlier_files(self, make_type, storage, home):
        """load is not staged: files restored before a failure stay restored."""
        (home / "a").write_text("a-snap")
        (home / "b").write_text("b-snap")
        type_storage = make_type("t", "{{HOME}}/a", "{{HOME}}/b")
        type_storage.store("label")
        (storage.directories.label_dir("t", "label") / "{{HOME}}" / "b").unlink()
        (home / "a").write_text("a-live")

        with pytest.raises(CopyFileError):
            type_storage.load("label")

        assert (home / "a").read_text() == "a-snap"

    def test_descriptor_is_read_once(self, make_type, storage, home):
        """Later descriptor edits do not affect an open instance."""
        (home / "a").write_text("a")
        type_storage = make_type("t", "{{HOME}}/a")
        ConfigTypeDescriptor(paths=("{{HOME}}/missing",)).write_to_file(
            type_storage.descriptor_path
        )

        type_storage.store("label")

        assert type_storage.descriptor.paths == ("{{HOME}}/a",)

    def test_add_paths(self, make_type):
        """add_paths appends to the file but not to the open instance."""
        type_storage = make_type("t", "{{HOME}}/a")

        written = type_storage.add_paths("{{HOME}}/b", "{{HOME}}/c")

        assert written.paths == ("{{HOME}}/a", "{{HOME}}/b", "{{HOME}}/c")
        assert ConfigTypeDescriptor.from_file(type_storage.descriptor_path) == written
        assert type_storage.descriptor.paths == ("{{HOME}}/a",)

    def test_iter_labels(self, make_type, home):
        """Labels are the sub-directories; the descriptor file is skipped."""
        (home / "a").write_text("a")
        type_storage = make_type("t", "{{HOME}}/a")
        assert list(type_storage.iter_labels()) == []

        type_storage.store("one")
        type_storage.store("two")

        assert sorted(type_storage.iter_labels()) == ["one", "two"]

    def test_iter_labels_listing_error(self, make_type):
        """A vanished type directory ends the label sequence with an error."""
        type_storage = make_type("t")
        labels = type_storage.iter_labels()
        shutil.rmtree(type_storage.directory)

        with pytest.raises(ListingError):
            list(labels)

    @pytest.mark.parametrize("label", ["", "..", "a/b", "a\x00b", "descriptor.json"])
    def test_invalid_label_names(self, make_type, label):
        """Labels must be a single path segment distinct from the descriptor."""
        type_storage = make_type("t")

        with pytest.raises(InvalidNameError):
            type_storage.store(label)
        with pytest.raises(InvalidNameError):
            type_storage.load(label)

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
    def test_permissions_survive_store_and_load(self, make_type, home, storage):
        """A private file keeps its mode in the snapshot and after restore."""
        secret = home / ".netrc"
        secret.write_text("machine example login me password pw\n")
        secret.chmod(0o600)
        type_storage = make_type("net", "{{HOME}}/.netrc")

        type_storage.store("work")
        captured = storage.directories.label_dir("net", "work") / "{{HOME}}" / ".netrc"
        assert stat.S_IMODE(captured.stat().st_mode) == 0o600

        secret.unlink()
        type_storage.load("work")

        assert secret.read_text() == "machine example login me password pw\n"
        assert stat.S_IMODE(secret.stat().st_mode) == 0o600

    def test_store_with_nul_in_template(self, make_type, storage, home):
        """A NUL in a resolved path is a copy failure, not a crash."""
        type_storage = make_type("t", "{{HOME}}/bad\x00name")

        with pytest.raises(CopyFileError):
            type_storage.store("label")

        assert not storage.directories.label_dir("t", "label").exists()
        assert list(storage.directories.temp_dir.iterdir()) == []
