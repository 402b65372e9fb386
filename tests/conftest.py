import pytest

from kcheck.config import loader
from kcheck.kernel import detect

KERNEL_CONFIG_LINES = [
    "CONFIG_FOO=y",
    "CONFIG_BAR=m",
    "# CONFIG_BAZ is not set",
    "CONFIG_USB_ACM=y",
]


@pytest.fixture(autouse=True)
def isolated_system(tmp_path, monkeypatch):
    """Keep tests away from the host's /proc, /boot and /etc files."""
    missing = tmp_path / "missing"
    monkeypatch.setattr(
        detect,
        "system_config_paths",
        lambda: [missing / "config.gz", missing / "config"],
    )
    monkeypatch.setattr(
        loader,
        "SYSTEM_CONFIG_FILES",
        [missing / "kcheck.toml", missing / "kcheck.json"],
    )


@pytest.fixture
def kernel_config_text():
    return "\n".join(KERNEL_CONFIG_LINES)


@pytest.fixture
def kernel_config_file(tmp_path, kernel_config_text):
    path = tmp_path / "config"
    path.write_text(kernel_config_text, encoding="utf-8")
    return path


@pytest.fixture
def requirements_toml(tmp_path):
    path = tmp_path / "kcheck.toml"
    path.write_text(
        """
[[kernel]]
name = "CONFIG_FOO"
state = "On"

[[kernel]]
name = "CONFIG_BAR"
state = "Module"

[[kernel]]
name = "CONFIG_BAZ"
state = "Off"

[[kernel]]
name = "CONFIG_USB_ACM"
state = "Enabled"
""",
        encoding="utf-8",
    )
    return path
