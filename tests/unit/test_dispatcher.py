"""Unit tests for the dialect dispatcher."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from expo_stallion.engine import dispatcher
from expo_stallion.engine import patch_app_delegate, patch_main_application, patch_source
from expo_stallion.models import AndroidDialect, IOSDialect, Platform

ANDROID_FIXTURES = [
    "android/expo_wrapper.kt",
    "android/react_host.kt",
    "android/react_host_no_argument.kt",
    "android/kotlin_host.kt",
    "android/kotlin_host_legacy_hook.kt",
    "android/kotlin_host_patched.kt",
    "android/java_host.java",
    "android/java_host_legacy_hook.java",
]
IOS_FIXTURES = [
    "ios/AppDelegate.swift",
    "ios/launch_only.swift",
    "ios/AppDelegate.mm",
]


class TestMainApplicationDispatch:
    """Tests for patch_main_application."""

    @pytest.mark.parametrize("fixture", ANDROID_FIXTURES)
    def test_idempotent(self, fixture_text, fixture):
        """Patching the output again changes nothing."""
        once = patch_main_application(fixture_text(fixture)).contents
        twice = patch_main_application(once)
        assert twice.contents == once
        assert twice.already_patched
        assert not twice.changed

    def test_patches_wrapper(self, fixture_text):
        result = patch_main_application(fixture_text("android/expo_wrapper.kt"), "MainApplication.kt")
        assert result.dialect is AndroidDialect.EXPO_REACT_HOST_WRAPPER
        assert result.changed
        assert result.platform is Platform.ANDROID
        assert result.diagnostics == []

    def test_legacy_dialect_scenario(self, fixture_text):
        """One new method before onCreate, import added once above it."""
        result = patch_main_application(fixture_text("android/java_host.java"))
        assert result.dialect is AndroidDialect.JAVA_HOST
        assert result.contents.count("protected String getJSBundleFile()") == 1
        assert result.contents.count("import com.stallion.Stallion;") == 1
        assert (
            result.contents.index("import com.stallion.Stallion;")
            < result.contents.index("protected String getJSBundleFile()")
            < result.contents.index("public void onCreate()")
        )

    def test_already_patched_is_silent(self, fixture_text):
        """An already-patched file is byte-identical and not a warning."""
        source = fixture_text("android/kotlin_host_patched.kt")
        result = patch_main_application(source)
        assert result.contents == source
        assert result.already_patched
        assert result.diagnostics == []

    def test_builder_argument_scenario(self, fixture_text):
        source = fixture_text("android/react_host.kt")
        result = patch_main_application(source)
        assert result.dialect is AndroidDialect.REACT_HOST
        assert "jsBundleFilePath = null" not in result.contents
        assert "jsMainModulePath = \"index\",\n      jsBundleFilePath = if (BuildConfig.DEBUG)" in result.contents

    def test_unrecognized_gives_one_warning(self):
        """Text matching no dialect is returned as-is with one warning naming the file."""
        source = "hello world\n"
        result = patch_main_application(source, "android/app/MainApplication.kt")
        assert result.contents == source
        assert not result.changed
        assert result.dialect is AndroidDialect.UNRECOGNIZED
        assert len(result.warnings) == 1
        assert result.warnings[0].file_name == "android/app/MainApplication.kt"
        assert "android/app/MainApplication.kt" in str(result.warnings[0])

    def test_no_anchor_gives_one_warning(self):
        source = "public class MainApplication extends Application;\n"
        result = patch_main_application(source)
        assert result.dialect is AndroidDialect.JAVA_HOST
        assert result.contents == source
        assert len(result.warnings) == 1
        assert "java_host" in result.warnings[0].message

    def test_exactly_one_patcher_runs(self, fixture_text, monkeypatch):
        """Only the patcher of the classified dialect is invoked."""
        calls = []

        def recorder(dialect):
            def patcher(text):
                calls.append(dialect)
                return text + "// patched\n"
            return patcher

        for dialect in list(dispatcher.ANDROID_PATCHERS):
            monkeypatch.setitem(dispatcher.ANDROID_PATCHERS, dialect, recorder(dialect))

        expected = {
            "android/expo_wrapper.kt": AndroidDialect.EXPO_REACT_HOST_WRAPPER,
            "android/react_host.kt": AndroidDialect.REACT_HOST,
            "android/kotlin_host.kt": AndroidDialect.KOTLIN_HOST,
            "android/java_host.java": AndroidDialect.JAVA_HOST,
        }
        for fixture, dialect in expected.items():
            calls.clear()
            patch_main_application(fixture_text(fixture))
            assert calls == [dialect]


class TestAppDelegateDispatch:
    """Tests for patch_app_delegate."""

    @pytest.mark.parametrize("fixture", IOS_FIXTURES)
    def test_idempotent(self, fixture_text, fixture):
        once = patch_app_delegate(fixture_text(fixture)).contents
        twice = patch_app_delegate(once)
        assert twice.contents == once
        assert twice.already_patched

    def test_dialects(self, fixture_text):
        assert patch_app_delegate(fixture_text("ios/AppDelegate.swift")).dialect is IOSDialect.SWIFT_DELEGATE
        assert patch_app_delegate(fixture_text("ios/AppDelegate.mm")).dialect is IOSDialect.OBJC_DELEGATE

    def test_ambiguous_falls_back_to_objc(self):
        """With no language markers Swift is tried first, then Objective-C."""
        source = "- (NSURL *)bundleURL\n{\n  return nil;\n}\n"
        result = patch_app_delegate(source, "ios/Demo/AppDelegate")
        assert result.dialect is IOSDialect.UNRECOGNIZED
        assert result.changed
        assert "return [StallionModule getBundleURL];" in result.contents
        assert "return nil;" not in result.contents
        assert len(result.warnings) == 1
        assert "Objective-C" in result.warnings[0].message

    def test_unclassified_patched_as_swift(self):
        """An unclassified delegate that Swift can patch gets one warning."""
        source = "class AppDelegate {\n}\n"
        result = patch_app_delegate(source, "ios/Demo/AppDelegate")
        assert result.dialect is IOSDialect.UNRECOGNIZED
        assert result.changed
        assert "override func bundleURL() -> URL?" in result.contents
        assert len(result.warnings) == 1
        assert "Swift" in result.warnings[0].message

    def test_unrecognized_gives_one_warning(self):
        source = "hello world\n"
        result = patch_app_delegate(source, "ios/Demo/AppDelegate.swift")
        assert result.contents == source
        assert len(result.warnings) == 1
        assert result.warnings[0].file_name == "ios/Demo/AppDelegate.swift"


class TestTotality:
    """Every input yields a result without raising."""

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "\n",
            "{{{{",
            "}}}}",
            "class MainApplication {",
            'class MainApplication { val s = "unterminated',
            "getDefaultReactHost(",
            "object : DefaultReactNativeHost(this",
            "override fun getJSBundleFile(): String? =",
            "@implementation AppDelegate",
            "- (NSURL *)bundleURL {",
            "import React\nclass AppDelegate {",
            "/* open comment",
            "'",
        ],
    )
    @pytest.mark.parametrize("platform", [Platform.ANDROID, Platform.IOS])
    def test_never_raises(self, text, platform):
        result = patch_source(text, platform, "Entry")
        assert isinstance(result.contents, str)
        # Malformed input never gets a half-applied patch.
        if not result.changed:
            assert result.contents == text


def test_concurrent_equals_sequential(fixture_text):
    """Patching many files in parallel yields the same results as one by one."""
    jobs = [(fixture_text(name), Platform.ANDROID, name) for name in ANDROID_FIXTURES]
    jobs += [(fixture_text(name), Platform.IOS, name) for name in IOS_FIXTURES]
    jobs = jobs * 4

    sequential = [patch_source(*job) for job in jobs]
    with ThreadPoolExecutor(max_workers=8) as pool:
        concurrent = list(pool.map(lambda job: patch_source(*job), jobs))

    assert [r.model_dump() for r in concurrent] == [r.model_dump() for r in sequential]
