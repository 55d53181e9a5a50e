"""Tests for the static site build (F5)."""

from academy.web.static_site import build_site


class TestBuildSite:
    """Tests for build_site function."""

    def test_writes_every_page(self, data_dir, tmp_path):
        out = tmp_path / "out"
        result = build_site(out)

        # home + 5 sections + 5 topics + tutorial index + 3 tutorials
        assert result.page_count == 15
        assert (out / "index.html").exists()
        assert (out / "sections" / "apex" / "index.html").exists()
        assert (out / "sections" / "apex" / "loops" / "index.html").exists()
        assert (out / "tutorials" / "index.html").exists()
        assert (out / "tutorials" / "lwc" / "datatable" / "index.html").exists()

    def test_pages_match_server_rendering(self, data_dir, tmp_path):
        html = (build_site(tmp_path / "out").out_dir / "sections" / "apex" / "loops" / "index.html").read_text(
            encoding="utf-8"
        )
        assert "<h1>Loops</h1>" in html
        assert "section-code" in html

    def test_explicit_data_dir(self, data_dir, tmp_path, monkeypatch):
        monkeypatch.delenv("ACADEMY_DATA_DIR")
        result = build_site(tmp_path / "out", data_dir=data_dir)
        assert result.page_count == 15

    def test_empty_content(self, tmp_path, monkeypatch):
        """A data dir without content still gets home, sections and the tutorial index."""
        monkeypatch.chdir(tmp_path)
        result = build_site(tmp_path / "out", data_dir=tmp_path / "empty")
        assert result.page_count == 7
