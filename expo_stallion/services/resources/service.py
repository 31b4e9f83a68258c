"""
Resource Injection Service.

Writes the Stallion credentials into Android ``strings.xml`` and iOS
``Info.plist`` under fixed keys. Both operations are plain key-value upserts.
"""

from __future__ import annotations

import plistlib
import time
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from xml.parsers.expat import ExpatError

from ...core.exceptions import ProjectLayoutError, ResourceFormatError
from ...core.logging import get_logger
from ...core.types import ServiceResult
from ...models.patch import Platform
from ...models.plugin import FileReport, FileStatus, StallionPluginProps
from ...storage import ProjectStore
from ..layout import ProjectLayout

logger = get_logger(__name__)

PROJECT_ID_KEY = "StallionProjectId"
APP_TOKEN_KEY = "StallionAppToken"


def credential_items(props: StallionPluginProps) -> dict[str, str]:
    """Map plugin properties to resource keys."""
    return {
        PROJECT_ID_KEY: props.project_id or "",
        APP_TOKEN_KEY: props.app_token or "",
    }


def upsert_string_resources(xml_text: str, items: Mapping[str, str]) -> str:
    """Set ``<string name=...>`` items in an Android strings.xml document.

    Existing items keep their position and get the new value; missing ones are
    appended. The input is returned untouched when every value already matches.

    Raises:
        ResourceFormatError: If the document is not a ``<resources>`` file.
    """
    if not xml_text.strip():
        root = ET.Element("resources")
    else:
        parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
        try:
            root = ET.fromstring(xml_text, parser=parser)
        except ET.ParseError as e:
            raise ResourceFormatError(message=str(e), resource="strings.xml", cause=e)
        if root.tag != "resources":
            raise ResourceFormatError(
                message=f"unexpected root element <{root.tag}>", resource="strings.xml"
            )

    strings = {el.get("name"): el for el in root.findall("string")}
    if xml_text.strip() and all(
        name in strings and (strings[name].text or "") == value for name, value in items.items()
    ):
        return xml_text

    for name, value in items.items():
        element = strings.get(name)
        if element is None:
            element = ET.SubElement(root, "string", {"name": name})
        element.text = value

    ET.indent(root, space="  ")
    body = ET.tostring(root, encoding="unicode")
    if xml_text.lstrip().startswith("<?xml"):
        body = '<?xml version="1.0" encoding="utf-8"?>\n' + body
    return body + "\n"


def upsert_plist_keys(data: bytes, items: Mapping[str, str]) -> bytes:
    """Set top-level keys of an Info.plist, keeping its XML or binary format.

    Raises:
        ResourceFormatError: If the data is not a dictionary plist.
    """
    if data.strip():
        try:
            plist = plistlib.loads(data)
        except (plistlib.InvalidFileException, ExpatError, ValueError) as e:
            raise ResourceFormatError(message=str(e), resource="Info.plist", cause=e)
        if not isinstance(plist, dict):
            raise ResourceFormatError(message="top-level object is not a dict", resource="Info.plist")
    else:
        plist = {}

    if data.strip() and all(plist.get(key) == value for key, value in items.items()):
        return data

    plist.update(items)
    fmt = plistlib.FMT_BINARY if data.startswith(b"bplist00") else plistlib.FMT_XML
    return plistlib.dumps(plist, fmt=fmt, sort_keys=False)


class ResourceService:
    """Service for writing Stallion credentials into native resources."""

    def __init__(self, store: ProjectStore, dry_run: bool = False) -> None:
        """Initialize the resource service.

        Args:
            store: Project file store
            dry_run: Compute changes without writing them
        """
        self.store = store
        self.layout = ProjectLayout(store)
        self.dry_run = dry_run

    async def write_android_credentials(self, props: StallionPluginProps) -> ServiceResult[FileReport]:
        """Upsert the credentials into strings.xml, creating it when missing."""
        start_time = time.perf_counter()
        key = self.layout.strings_xml()
        try:
            current = await self.store.read_text(key) if await self.store.exists(key) else ""
            updated = upsert_string_resources(current, credential_items(props))
            written = updated != current and not self.dry_run
            if written:
                await self.store.write_text(key, updated)
        except ResourceFormatError as e:
            logger.warning("Skipping strings.xml", file=key, error=str(e))
            return ServiceResult.fail(str(e), path=key)
        except (UnicodeDecodeError, OSError) as e:
            logger.warning("Could not access strings.xml", file=key, error=str(e))
            return ServiceResult.fail(f"Could not access file: {e}", path=key)

        logger.info("Android credentials applied", file=key, changed=updated != current)

        report = FileReport(
            platform=Platform.ANDROID,
            path=key,
            status=FileStatus.PATCHED if updated != current else FileStatus.UNCHANGED,
            written=written,
        )
        duration_ms = (time.perf_counter() - start_time) * 1000
        return ServiceResult.ok(report, duration_ms=duration_ms)

    async def write_ios_credentials(self, props: StallionPluginProps) -> ServiceResult[FileReport]:
        """Upsert the credentials into the app's Info.plist."""
        start_time = time.perf_counter()
        try:
            key = await self.layout.info_plist()
        except ProjectLayoutError as e:
            logger.warning("Skipping Info.plist", error=str(e))
            return ServiceResult.fail(str(e))

        try:
            current = await self.store.read_bytes(key)
            updated = upsert_plist_keys(current, credential_items(props))
            written = updated != current and not self.dry_run
            if written:
                await self.store.write_bytes(key, updated)
        except ResourceFormatError as e:
            logger.warning("Skipping Info.plist", file=key, error=str(e))
            return ServiceResult.fail(str(e), path=key)
        except OSError as e:
            logger.warning("Could not access Info.plist", file=key, error=str(e))
            return ServiceResult.fail(f"Could not access file: {e}", path=key)

        logger.info("iOS credentials applied", file=key, changed=updated != current)

        report = FileReport(
            platform=Platform.IOS,
            path=key,
            status=FileStatus.PATCHED if updated != current else FileStatus.UNCHANGED,
            written=written,
        )
        duration_ms = (time.perf_counter() - start_time) * 1000
        return ServiceResult.ok(report, duration_ms=duration_ms)
