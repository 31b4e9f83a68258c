"""
Bundle Provider Service.

Reads native entry files, runs them through the patch engine and writes back the
ones that changed. The engine is pure, so independent files can be patched
concurrently without any locking.
"""

from __future__ import annotations

import asyncio
import time

from ...core.exceptions import ProjectLayoutError
from ...core.logging import get_logger, log_diagnostics
from ...core.types import ProjectKey, ServiceResult
from ...engine import patch_source
from ...models.patch import Diagnostic, PatchResult, Platform
from ...models.plugin import FileReport, FileStatus
from ...storage import ProjectStore
from ..layout import ProjectLayout, platform_for

logger = get_logger(__name__)


def _status(result: PatchResult) -> FileStatus:
    if result.already_patched:
        return FileStatus.UNCHANGED
    if result.changed:
        return FileStatus.PATCHED
    return FileStatus.UNRECOGNIZED


class BundleProviderService:
    """Service for installing Stallion as the JS bundle provider."""

    def __init__(self, store: ProjectStore, dry_run: bool = False) -> None:
        """Initialize the bundle provider service.

        Args:
            store: Project file store
            dry_run: Compute patches without writing them
        """
        self.store = store
        self.layout = ProjectLayout(store)
        self.dry_run = dry_run

    async def patch_file(self, key: ProjectKey, platform: Platform) -> tuple[FileReport, PatchResult]:
        """Patch a single entry file in place.

        Args:
            key: Project-relative path of the entry file.
            platform: Which patch pipeline to run.

        Returns:
            The per-file report and the engine result.
        """
        contents = await self.store.read_text(key)
        result = patch_source(contents, platform, key)
        log_diagnostics(logger, result.diagnostics)

        written = result.changed and not self.dry_run
        if written:
            await self.store.write_text(key, result.contents)

        logger.info(
            "Entry file processed",
            file=key,
            dialect=result.dialect.value,
            changed=result.changed,
            already_patched=result.already_patched,
        )
        report = FileReport(
            platform=platform,
            path=key,
            status=_status(result),
            dialect=result.dialect.value,
            written=written,
        )
        return report, result

    async def _patch_entry(self, platform: Platform) -> ServiceResult[FileReport]:
        start_time = time.perf_counter()
        try:
            if platform is Platform.ANDROID:
                key = await self.layout.main_application()
            else:
                key = await self.layout.app_delegate()
        except ProjectLayoutError as e:
            logger.warning("Entry file not found", platform=platform.value, error=str(e))
            return ServiceResult.fail(str(e), platform=platform.value)

        try:
            report, result = await self.patch_file(key, platform)
        except (UnicodeDecodeError, OSError) as e:
            logger.warning("Could not access entry file", file=key, error=str(e))
            return ServiceResult.fail(f"Could not access file: {e}", path=key)

        duration_ms = (time.perf_counter() - start_time) * 1000
        metadata = {
            "diagnostics": result.diagnostics,
            "duration_ms": duration_ms,
        }
        warnings = [str(d) for d in result.warnings]
        if warnings:
            return ServiceResult.with_warnings(report, warnings, **metadata)
        return ServiceResult.ok(report, **metadata)

    async def patch_android(self) -> ServiceResult[FileReport]:
        """Patch the project's MainApplication."""
        return await self._patch_entry(Platform.ANDROID)

    async def patch_ios(self) -> ServiceResult[FileReport]:
        """Patch the project's AppDelegate."""
        return await self._patch_entry(Platform.IOS)

    async def patch_files(self, keys: list[ProjectKey]) -> list[tuple[FileReport | None, list[Diagnostic]]]:
        """Patch many entry files concurrently.

        The platform of each file is inferred from its extension. A file that
        cannot be read or has an unknown extension yields ``None`` and a
        warning; it never stops the other files.

        Returns:
            One ``(report, diagnostics)`` pair per key, in input order.
        """

        async def one(key: ProjectKey) -> tuple[FileReport | None, list[Diagnostic]]:
            platform = platform_for(key)
            if platform is None:
                warning = Diagnostic(file_name=key, message="Not a MainApplication or AppDelegate source")
                return None, [warning]
            try:
                report, result = await self.patch_file(key, platform)
            except (UnicodeDecodeError, OSError) as e:
                logger.warning("Could not access entry file", file=key, error=str(e))
                return None, [Diagnostic(file_name=key, message=f"Could not access file: {e}")]
            return report, result.diagnostics

        return list(await asyncio.gather(*(one(key) for key in keys)))
