import json

from cli import main


def test_cli_converts_tree(site_root, tmp_path, capsys):
    page = site_root / "index.html"
    page.write_text('<a href="./about.html">')

    code = main([str(site_root), "https://example.com", "--log-file", str(tmp_path / "run.log"), "--no-backup"])

    out = capsys.readouterr().out
    assert code == 0
    assert json.loads(out[out.index("{\n"): out.index("\n}") + 2]) == {"total": 1, "success": 1, "failed": 0}
    assert page.read_text() == '<a href="https://example.com/about.html">'
    assert not (site_root.parent / "path2url_backup").exists()


def test_cli_rejects_invalid_domain(site_root, capsys):
    assert main([str(site_root), "not-a-url"]) == 2
    assert "Invalid base domain URL" in capsys.readouterr().err
