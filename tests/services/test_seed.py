import pytest

from services.seed import load_seed_names, seed_categories


@pytest.fixture
def seed_file(tmp_path):
    path = tmp_path / "categories.yaml"
    path.write_text("- Food\n- name: Pets\n- Gifts\n- '  '\n")
    return path


class TestLoadSeedNames:
    """Tests for reading seed files."""

    def test_reads_names_and_mappings(self, seed_file):
        assert load_seed_names(seed_file) == ["Food", "Pets", "Gifts", "  "]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_seed_names(tmp_path / "nope.yaml")

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("name: Food\n")

        with pytest.raises(ValueError, match="must contain a list"):
            load_seed_names(path)

    def test_invalid_entry(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- 12\n")

        with pytest.raises(ValueError, match="Invalid category entry"):
            load_seed_names(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- [unclosed\n")

        with pytest.raises(ValueError, match="Error parsing"):
            load_seed_names(path)


class TestSeedCategories:
    """Tests for seeding through the sync client."""

    def test_creates_missing_and_skips_existing(self, loaded, backend, seed_file):
        result = seed_categories(loaded.sync, seed_file)

        assert result.created == 2
        assert result.skipped == 1
        assert result.failed == 0
        assert [c for c in backend.calls if c[0] == "insert"] == [
            ("insert", "Pets"),
            ("insert", "Gifts"),
        ]
        assert [r.name for r in loaded.store.list()[:2]] == ["Gifts", "Pets"]

    def test_counts_failures(self, loaded, backend, seed_file):
        backend.fail.add("insert")

        result = seed_categories(loaded.sync, seed_file)

        assert result.created == 0
        assert result.failed == 2
        assert result.total == 3
