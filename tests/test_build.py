"""
Tests for the blog-feed command.
"""

from blogfeed.build import main


def test_writes_feed(config, write_post, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    write_post("a", title="A", date="2024-01-01")
    output = tmp_path / "site" / "rss.xml"
    status = main(
        [
            "--site-url", "https://example.com",
            "--posts-dir", str(config.posts_dir),
            "--output", str(output),
        ]
    )
    assert status == 0
    assert "<title>A</title>" in output.read_text(encoding="utf-8")


def test_reads_site_file(config, write_post, tmp_path):
    write_post("a", title="A", date="2024-01-01")
    site = tmp_path / "site.yml"
    site.write_text(
        f"site_url: https://example.com\nbase_path: /blog\nposts_dir: {config.posts_dir}\noutput: out/rss.xml\n",
        encoding="utf-8",
    )
    assert main(["--config", str(site)]) == 0
    rss = (tmp_path / "out" / "rss.xml").read_text(encoding="utf-8")
    assert "https://example.com/blog/posts/a/" in rss


def test_missing_site_url_fails(config, write_post, tmp_path, caplog):
    write_post("a", title="A", date="2024-01-01")
    site = tmp_path / "site.yml"
    site.write_text(f"posts_dir: {config.posts_dir}\noutput: rss.xml\n", encoding="utf-8")
    assert main(["--config", str(site)]) == 1
    assert not (tmp_path / "rss.xml").exists()
    assert "site_url is not configured" in caplog.text


def test_malformed_post_fails(config, write_post, tmp_path):
    write_post("broken", title="Broken", date="whenever")
    site = tmp_path / "site.yml"
    site.write_text(
        f"site_url: https://example.com\nposts_dir: {config.posts_dir}\noutput: rss.xml\n",
        encoding="utf-8",
    )
    assert main(["--config", str(site)]) == 1
    assert not (tmp_path / "rss.xml").exists()
