import re

from path2url.backup.backup_manager import BackupManager
from path2url.telemetry.run_logger import RunLogger


def test_backup_mirrors_relative_path(site_root, make_config):
    page = site_root / "blog" / "post.html"
    page.parent.mkdir()
    page.write_text("<img src='./a.png'>")
    config = make_config()

    result = BackupManager(config).backup(page)

    assert result.ok
    assert result.backup_path.parent == site_root.parent / "path2url_backup" / "blog"
    assert re.fullmatch(r"post\.html\.\d+\.bak", result.backup_path.name)
    assert result.backup_path.read_text() == "<img src='./a.png'>"


def test_backup_root_is_sibling_of_tree_root(site_root, make_config):
    manager = BackupManager(make_config(backup_dir_name="snapshots"))
    assert manager.backup_root == site_root.parent / "snapshots"


def test_backup_path_for_uses_timestamp(site_root, make_config):
    manager = BackupManager(make_config())
    target = manager.backup_path_for(site_root / "css" / "a.css", timestamp=1700000000)
    assert target == site_root.parent / "path2url_backup" / "css" / "a.css.1700000000.bak"


def test_disabled_backup_is_noop(site_root, make_config):
    page = site_root / "index.html"
    page.write_text("x")

    result = BackupManager(make_config(enable_backup=False)).backup(page)

    assert result.ok
    assert result.backup_path is None
    assert not (site_root.parent / "path2url_backup").exists()


def test_backup_failure_is_reported_not_raised(site_root, make_config, tmp_path):
    # a plain file where the backup directory should go blocks mkdir
    (site_root.parent / "path2url_backup").write_text("not a directory")
    page = site_root / "sub" / "index.html"
    page.parent.mkdir()
    page.write_text("x")
    log_path = tmp_path / "backup.log"

    result = BackupManager(make_config(), run_logger=RunLogger(log_path)).backup(page)

    assert not result.ok
    assert result.backup_path is None
    assert "Failed to create backup directory" in result.error
    assert "[ERROR]" in log_path.read_text()
