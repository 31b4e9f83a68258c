"""Unit tests for AppDelegate patchers."""

from expo_stallion.engine.ios import (
    OBJC_HOOK,
    SWIFT_HOOK,
    patch_objc_app_delegate,
    patch_swift_app_delegate,
)
from expo_stallion.engine.scanner import indent_block

SWIFT_STALLION = "import react_native_stallion\n"
OBJC_STALLION = "#import <react_native_stallion/StallionModule.h>\n"


class TestSwiftPatcher:
    """Tests for Swift delegates."""

    def test_replaces_existing_bundle_url(self, fixture_text):
        source = fixture_text("ios/AppDelegate.swift")
        start = source.index("override func bundleURL")
        end = source.rindex("  }\n}") + 3

        expected = source[:start] + indent_block(SWIFT_HOOK, "  ", skip_first=True) + source[end:]
        expected = expected.replace(
            "import ReactAppDependencyProvider\n",
            "import ReactAppDependencyProvider\n" + SWIFT_STALLION,
        )
        result = patch_swift_app_delegate(source)
        assert result == expected
        assert "bridge.bundleURL ?? bundleURL()" in result

    def test_inserts_before_launch(self, fixture_text):
        source = fixture_text("ios/launch_only.swift")
        expected = source.replace(
            "import Expo\n", "import Expo\n" + SWIFT_STALLION + "import React\n"
        ).replace(
            "  override func application(",
            indent_block(SWIFT_HOOK, "  ") + "\n\n  override func application(",
        )
        assert patch_swift_app_delegate(source) == expected

    def test_inserts_before_class_end(self):
        """A class named exactly AppDelegate is still found."""
        source = "import UIKit\n\nclass AppDelegate: UIResponder {\n  var window: UIWindow?\n}\n"
        assert patch_swift_app_delegate(source) == (
            "import UIKit\n" + SWIFT_STALLION + "import React\n\n"
            "class AppDelegate: UIResponder {\n  var window: UIWindow?\n\n"
            + indent_block(SWIFT_HOOK, "  ")
            + "\n}\n"
        )

    def test_no_anchor_is_unchanged(self):
        source = "import UIKit\n\nstruct Settings {}\n"
        assert patch_swift_app_delegate(source) == source

    def test_idempotent(self, fixture_text):
        once = patch_swift_app_delegate(fixture_text("ios/AppDelegate.swift"))
        assert patch_swift_app_delegate(once) == once
        assert once.count(SWIFT_STALLION) == 1


class TestObjCPatcher:
    """Tests for Objective-C delegates."""

    def test_replaces_existing_bundle_url(self, fixture_text):
        source = fixture_text("ios/AppDelegate.mm")
        start = source.index("- (NSURL *)bundleURL")
        end = source.index("}\n\n@end") + 1

        expected = (source[:start] + OBJC_HOOK + source[end:]).replace(
            "#import <React/RCTLinkingManager.h>\n",
            "#import <React/RCTLinkingManager.h>\n" + OBJC_STALLION,
        )
        result = patch_objc_app_delegate(source)
        assert result == expected
        assert "return [self bundleURL];" in result

    def test_inserts_before_end(self):
        source = '#import "AppDelegate.h"\n\n@implementation AppDelegate\n\n@end\n'
        assert patch_objc_app_delegate(source) == (
            '#import "AppDelegate.h"\n'
            + OBJC_STALLION
            + "#import <React/RCTBundleURLProvider.h>\n"
            + "\n@implementation AppDelegate\n\n"
            + OBJC_HOOK
            + "\n\n@end\n"
        )

    def test_inserts_before_launch(self):
        source = (
            "#import <React/RCTBundleURLProvider.h>\n"
            "@implementation AppDelegate\n"
            "- (BOOL)application:(UIApplication *)application didFinishLaunchingWithOptions:(NSDictionary *)launchOptions\n"
            "{\n  return YES;\n}\n"
            "@end\n"
        )
        result = patch_objc_app_delegate(source)
        assert result.index("- (NSURL *)bundleURL") < result.index("- (BOOL)application")
        assert result.count("#import <React/RCTBundleURLProvider.h>") == 1

    def test_no_anchor_is_unchanged(self):
        source = "#import <Foundation/Foundation.h>\n"
        assert patch_objc_app_delegate(source) == source
