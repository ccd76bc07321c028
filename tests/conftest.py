import pytest

from path2url.config import ConverterConfig

BASE_DOMAIN = "https://example.com"


@pytest.fixture
def site_root(tmp_path):
    root = tmp_path / "site"
    root.mkdir()
    return root


@pytest.fixture
def make_config(site_root, tmp_path):
    def _make(**overrides):
        values = {
            "root_dir": site_root,
            "base_domain": BASE_DOMAIN,
            "log_file": tmp_path / "url_converter.log",
        }
        values.update(overrides)
        return ConverterConfig(**values)

    return _make
