"""Package manifest (package.json) rewriting.

A manifest edit is a small typed record: the fields to set and the fields to remove. The
packaging direction resets the identity fields to placeholders and strips everything that
only makes sense for the published scaffolding tool; the instantiation direction injects
the new project's name and strips the same fields again.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from templatize.exceptions import ManifestParseError

MANIFEST_NAME = "package.json"

# Keys describing the publishable scaffolding tool itself rather than a generated project.
PUBLISH_ONLY_FIELDS: Tuple[str, ...] = (
    "bin",
    "files",
    "description",
    "keywords",
    "author",
    "license",
    "repository",
    "homepage",
    "bugs",
)


@dataclass(frozen=True)
class ManifestEdit:
    """Field-level edit applied to a parsed manifest.

    Fields left as None are not touched. Existing keys keep their position when they are
    overwritten; new keys are appended at the end.

    Attributes:
        name: Value to store under ``name``.
        version: Value to store under ``version``.
        private: Value to store under ``private``.
        remove_fields: Keys to delete if present.

    Example:
        >>> edit = ManifestEdit(name="demo", private=True, remove_fields=("license",))
        >>> edit.apply({"name": "tool", "license": "MIT", "scripts": {}})
        {'name': 'demo', 'scripts': {}, 'private': True}
    """

    name: Optional[str] = None
    version: Optional[str] = None
    private: Optional[bool] = None
    remove_fields: Tuple[str, ...] = PUBLISH_ONLY_FIELDS

    def apply(self, manifest: Dict[str, Any]) -> Dict[str, Any]:
        """Return a copy of ``manifest`` with this edit applied."""
        result = dict(manifest)
        for key, value in (("name", self.name), ("version", self.version), ("private", self.private)):
            if value is not None:
                result[key] = value
        for key in self.remove_fields:
            result.pop(key, None)
        return result


def packaging_edit(placeholder_name: str, baseline_version: str) -> ManifestEdit:
    """Edit used when building a template: placeholder identity, private, publish fields removed."""
    return ManifestEdit(name=placeholder_name, version=baseline_version, private=True)


def instantiation_edit(project_name: str) -> ManifestEdit:
    """Edit used when creating a project: the project's name, private, publish fields removed."""
    return ManifestEdit(name=project_name, private=True)


def load_manifest(path: Path) -> Dict[str, Any]:
    """Read and parse a manifest.

    Raises:
        ManifestParseError: If the file is not UTF-8 encoded JSON or its top level is not an object.
        OSError: If the file cannot be read.
    """
    content = path.read_bytes()
    try:
        data = json.loads(content.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ManifestParseError(str(path), str(e))
    if not isinstance(data, dict):
        raise ManifestParseError(str(path), f"expected a JSON object, got {type(data).__name__}")
    return data


def read_scripts(path: Path) -> Dict[str, str]:
    """Return the ``scripts`` table of the manifest at ``path``.

    A missing manifest or a manifest without a ``scripts`` object yields an empty dict.

    Raises:
        ManifestParseError: If the manifest exists but is malformed.
    """
    if not path.is_file():
        return {}
    scripts = load_manifest(path).get("scripts")
    if not isinstance(scripts, dict):
        return {}
    return {str(key): str(value) for key, value in scripts.items()}


def dump_manifest(manifest: Dict[str, Any]) -> str:
    """Serialize a manifest with 2-space indentation, preserving key order and non-ASCII text."""
    return json.dumps(manifest, indent=2, ensure_ascii=False)


def rewrite_manifest(source: Path, dest: Path, edit: ManifestEdit) -> None:
    """Read the manifest at ``source``, apply ``edit`` and write the result to ``dest``.

    ``source`` and ``dest`` may be the same path. Nothing is written if parsing fails.

    Raises:
        ManifestParseError: If the source manifest is malformed.
        OSError: If reading or writing fails.
    """
    manifest = edit.apply(load_manifest(source))
    dest.write_text(dump_manifest(manifest), encoding="utf-8")
