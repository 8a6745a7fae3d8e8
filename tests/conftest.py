import pytest


@pytest.fixture(autouse=True)
def isolate_user_config(tmp_path, monkeypatch):
    """Point the user configuration directory at an empty temporary directory.

    Tests expect the built-in defaults, so a real
    ``~/.pr_name_prefixer/config.json`` on the developer's machine must not
    leak into them.
    """
    monkeypatch.setattr(
        "pr_name_prefixer.config.loader._get_config_directory",
        lambda: tmp_path / ".pr_name_prefixer",
    )
    yield
