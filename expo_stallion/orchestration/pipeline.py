"""
Plugin pipeline for expo-stallion.

Runs the whole plugin over a generated Expo project: credentials into the native
resources, then Stallion as the bundle provider, Android first and iOS second.
Only malformed properties abort a run; everything else is reported as a warning.
"""

from __future__ import annotations

from pathlib import Path

from ..core.config import Config, get_config
from ..core.exceptions import ConfigurationError
from ..core.logging import bind_context, clear_context, get_logger
from ..core.types import ServiceResult
from ..models.patch import Diagnostic, Platform
from ..models.plugin import (
    APP_TOKEN_PREFIX,
    FileReport,
    FileStatus,
    PluginResult,
    StallionPluginProps,
)
from ..services.bundle_provider import BundleProviderService
from ..services.resources import ResourceService
from ..storage import LocalProjectStore, ProjectStore

logger = get_logger(__name__)

PLUGIN_NAME = "expo-stallion"
MISSING_CREDENTIALS = "projectId and appToken are required; skipping Stallion setup."


def validate_props(props: StallionPluginProps) -> None:
    """Check plugin properties before touching any file.

    Raises:
        ConfigurationError: If the app token does not carry the ``spb_`` prefix.
    """
    if props.app_token and not props.app_token.startswith(APP_TOKEN_PREFIX):
        raise ConfigurationError(
            message=f'appToken must start with "{APP_TOKEN_PREFIX}"',
            field_name="appToken",
        )


def _collect(
    result: ServiceResult[FileReport],
    outcome: PluginResult,
    fallback_name: str,
    platform: Platform,
) -> None:
    """Fold one service result into the run outcome."""
    if not result.success:
        # A known path means the file exists but could not be read or parsed.
        path = result.metadata.get("path")
        status = FileStatus.UNRECOGNIZED if path else FileStatus.MISSING
        outcome.diagnostics.append(Diagnostic(file_name=path or fallback_name, message=result.error or ""))
        outcome.files.append(FileReport(platform=platform, path=path or fallback_name, status=status))
        return

    if result.data is not None:
        outcome.files.append(result.data)
    outcome.diagnostics.extend(result.metadata.get("diagnostics", []))


async def _run_platform(
    platform: Platform,
    props: StallionPluginProps,
    resources: ResourceService,
    bundle: BundleProviderService,
    outcome: PluginResult,
) -> None:
    if platform is Platform.ANDROID:
        _collect(await resources.write_android_credentials(props), outcome, "strings.xml", platform)
        _collect(await bundle.patch_android(), outcome, "MainApplication", platform)
    else:
        _collect(await resources.write_ios_credentials(props), outcome, "Info.plist", platform)
        _collect(await bundle.patch_ios(), outcome, "AppDelegate", platform)


async def run_plugin(
    project_root: Path,
    props: StallionPluginProps,
    store: ProjectStore | None = None,
    config: Config | None = None,
) -> PluginResult:
    """Apply the Stallion plugin to an Expo project.

    Args:
        project_root: Root of the generated Expo project (holds android/ and ios/).
        props: Plugin properties.
        store: File store to use; defaults to a local store over ``project_root``.
        config: Configuration; defaults to the cached environment configuration.

    Returns:
        PluginResult with per-file reports and all warnings.

    Raises:
        ConfigurationError: If the properties are present but malformed.
    """
    config = config or get_config()

    if not props.is_complete:
        logger.warning(MISSING_CREDENTIALS)
        return PluginResult(
            skipped=True,
            diagnostics=[Diagnostic(file_name=PLUGIN_NAME, message=MISSING_CREDENTIALS)],
        )

    validate_props(props)

    store = store or LocalProjectStore(project_root)
    resources = ResourceService(store, dry_run=config.patch.dry_run)
    bundle = BundleProviderService(store, dry_run=config.patch.dry_run)
    outcome = PluginResult()

    bind_context(project_root=str(project_root))
    try:
        logger.info("Applying Stallion plugin", dry_run=config.patch.dry_run)
        if config.patch.android_enabled:
            await _run_platform(Platform.ANDROID, props, resources, bundle, outcome)
        if config.patch.ios_enabled:
            await _run_platform(Platform.IOS, props, resources, bundle, outcome)

        logger.info(
            "Stallion plugin applied",
            files=len(outcome.files),
            warnings=len(outcome.warnings),
        )
        return outcome
    finally:
        clear_context()
