"""Test configuration for expo-stallion."""

import shutil
import tempfile
from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"

MAIN_APPLICATION_DIR = "android/app/src/main/java/com/example/demo"
STRINGS_XML = "android/app/src/main/res/values/strings.xml"
IOS_APP_DIR = "ios/Demo"


def load_fixture(name: str) -> str:
    """Read a fixture file exactly as stored (no newline translation)."""
    with open(FIXTURES / name, encoding="utf-8", newline="") as f:
        return f.read()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests.

    Yields:
        Path: A Path object pointing to the temporary directory.
            The directory is automatically cleaned up after the test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fixture_text():
    """Return a loader for files under tests/fixtures."""
    return load_fixture


@pytest.fixture
def expo_project(temp_dir):
    """Create a prebuilt Expo project with a Kotlin wrapper host and a Swift delegate.

    Returns:
        Path: The project root.
    """
    android_dir = temp_dir / MAIN_APPLICATION_DIR
    android_dir.mkdir(parents=True)
    shutil.copyfile(FIXTURES / "android" / "expo_wrapper.kt", android_dir / "MainApplication.kt")

    values_dir = (temp_dir / STRINGS_XML).parent
    values_dir.mkdir(parents=True)
    shutil.copyfile(FIXTURES / "android" / "strings.xml", values_dir / "strings.xml")

    ios_dir = temp_dir / IOS_APP_DIR
    ios_dir.mkdir(parents=True)
    shutil.copyfile(FIXTURES / "ios" / "AppDelegate.swift", ios_dir / "AppDelegate.swift")
    shutil.copyfile(FIXTURES / "ios" / "Info.plist", ios_dir / "Info.plist")

    return temp_dir


@pytest.fixture
def store(expo_project):
    """Create a project store over the sample Expo project.

    Returns:
        LocalProjectStore: A store rooted at the project directory.
    """
    from expo_stallion.storage import LocalProjectStore
    return LocalProjectStore(expo_project)


@pytest.fixture
def props():
    """Valid plugin properties."""
    from expo_stallion.models import StallionPluginProps
    return StallionPluginProps(projectId="proj_123", appToken="spb_abc")


@pytest.fixture
def config():
    """Default configuration, independent of the environment."""
    from expo_stallion.core.config import Config
    return Config()
