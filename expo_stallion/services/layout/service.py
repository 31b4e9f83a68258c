"""
Project Layout Service.

Locates the native files the plugin touches inside a generated Expo project,
using the same locations Expo's own mods resolve.
"""

from __future__ import annotations

from ...core.exceptions import ProjectLayoutError
from ...core.types import ProjectKey
from ...models.patch import Platform
from ...storage import ProjectStore

MAIN_APPLICATION_GLOBS = (
    "android/app/src/main/java/**/MainApplication.kt",
    "android/app/src/main/java/**/MainApplication.java",
)
APP_DELEGATE_GLOBS = (
    "ios/*/AppDelegate.swift",
    "ios/*/AppDelegate.mm",
    "ios/*/AppDelegate.m",
)
STRINGS_XML = "android/app/src/main/res/values/strings.xml"
INFO_PLIST_GLOB = "ios/*/Info.plist"

ANDROID_SUFFIXES = (".kt", ".java")
IOS_SUFFIXES = (".swift", ".mm", ".m")


def platform_for(key: str) -> Platform | None:
    """Infer the platform of an entry file from its extension."""
    if key.endswith(ANDROID_SUFFIXES):
        return Platform.ANDROID
    if key.endswith(IOS_SUFFIXES):
        return Platform.IOS
    return None


class ProjectLayout:
    """Resolves native file locations within one project."""

    def __init__(self, store: ProjectStore) -> None:
        self.store = store

    async def _first(self, patterns: tuple[str, ...]) -> ProjectKey | None:
        for pattern in patterns:
            matches = await self.store.glob(pattern)
            if matches:
                return matches[0]
        return None

    async def main_application(self) -> ProjectKey:
        """Locate MainApplication.kt / MainApplication.java.

        Raises:
            ProjectLayoutError: If no MainApplication exists.
        """
        key = await self._first(MAIN_APPLICATION_GLOBS)
        if key is None:
            raise ProjectLayoutError(
                message="MainApplication not found",
                platform=Platform.ANDROID.value,
                expected=" or ".join(MAIN_APPLICATION_GLOBS),
            )
        return key

    async def app_delegate(self) -> ProjectKey:
        """Locate AppDelegate.swift / .mm / .m.

        Raises:
            ProjectLayoutError: If no AppDelegate exists.
        """
        key = await self._first(APP_DELEGATE_GLOBS)
        if key is None:
            raise ProjectLayoutError(
                message="AppDelegate not found",
                platform=Platform.IOS.value,
                expected=" or ".join(APP_DELEGATE_GLOBS),
            )
        return key

    def strings_xml(self) -> ProjectKey:
        # Created on demand, like Expo's strings mod.
        return STRINGS_XML

    async def info_plist(self) -> ProjectKey:
        """Locate Info.plist, preferring the one next to AppDelegate.

        Raises:
            ProjectLayoutError: If no Info.plist exists.
        """
        try:
            delegate = await self.app_delegate()
        except ProjectLayoutError:
            delegate = None

        if delegate is not None:
            sibling = delegate.rsplit("/", 1)[0] + "/Info.plist"
            if await self.store.exists(sibling):
                return sibling

        key = await self._first((INFO_PLIST_GLOB,))
        if key is None:
            raise ProjectLayoutError(
                message="Info.plist not found",
                platform=Platform.IOS.value,
                expected=INFO_PLIST_GLOB,
            )
        return key
