"""Shared fixtures for app package ingestion tests"""

import base64
import io
import json
import zipfile
from typing import Dict, List, Mapping, Tuple, Union

import pytest

from appingest.core.config import IngestionSettings
from appingest.core.packages.models import PackageManifest, SourceFile

VALID_ID = "1b4e28ba-2fa1-4d2b-a2c4-4b4c5c1b6f3e"

EntryList = List[Tuple[str, Union[str, bytes, None]]]


def build_zip(entries: EntryList) -> bytes:
    """Build a zip in memory; names ending in '/' become directories"""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, content in entries:
            if name.endswith("/"):
                zf.writestr(zipfile.ZipInfo(name), b"")
            else:
                zf.writestr(name, content if content is not None else b"")
    return buffer.getvalue()


def build_package(entries: EntryList) -> str:
    return base64.b64encode(build_zip(entries)).decode("ascii")


def manifest_json(**overrides) -> str:
    manifest = {
        "id": VALID_ID,
        "name": "Hello World",
        "classFile": "main.ts",
        "requiredApiVersion": ">=1.0.0",
        "author": {"name": "Jane Doe"},
    }
    manifest.update(overrides)
    return json.dumps({k: v for k, v in manifest.items() if v is not None})


class FakeCompiler:
    """Deterministic compiler that prefixes each file with a banner"""

    def __init__(self):
        self.calls: List[Tuple[PackageManifest, Dict[str, SourceFile]]] = []

    async def compile(self, manifest: PackageManifest, sources: Mapping[str, SourceFile]) -> Dict[str, SourceFile]:
        self.calls.append((manifest, dict(sources)))
        return {
            name: source.with_compiled(f"// compiled {name}\n{source.content}")
            for name, source in sources.items()
        }


@pytest.fixture
def compiler():
    return FakeCompiler()


@pytest.fixture
def settings():
    return IngestionSettings(host_api_version="2.3.0")


@pytest.fixture
def basic_entries() -> EntryList:
    return [
        ("app.json", manifest_json()),
        ("main.ts", "export class HelloWorldApp {}"),
        ("src/", None),
        ("src/util.ts", "export const answer = 42;"),
        ("i18n/en.json", json.dumps({"hello": "Hello"})),
        ("README.md", "# Hello"),
    ]


@pytest.fixture
def valid_id() -> str:
    return VALID_ID


@pytest.fixture
def make_zip():
    return build_zip


@pytest.fixture
def make_package():
    return build_package


@pytest.fixture
def make_manifest():
    return manifest_json
