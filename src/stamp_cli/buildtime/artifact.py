"""Artifact readers and the build metadata record table.

An artifact exposes named members (files in a build directory, entries in a
wheel or zip archive). Build metadata lives in one reserved YAML member as an
ordered list of attribute records; embedded resources are other members read
as opaque bytes.
"""

import zipfile
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml


METADATA_MEMBER = "stamp_cli.build.metadata.yml"
TIMESTAMP_RESOURCE = "stamp_cli.build.timestamp"


@dataclass(frozen=True)
class MetadataRecord:
    """One attribute declaration: the attribute name and its constructor argument."""
    name: str
    value: str


@dataclass
class ArtifactMetadata:
    """Ordered attribute records attached to an artifact.

    Several records may share a name. Lookups return the first one in
    document order; which one the packager meant is not resolved here.
    """
    records: List[MetadataRecord] = field(default_factory=list)

    def add(self, name: str, value: str) -> 'ArtifactMetadata':
        self.records.append(MetadataRecord(name=name, value=value))
        return self

    def find(self, name: str) -> Optional[str]:
        """Return the value of the first record named ``name``, or None."""
        for record in self.records:
            if record.name == name:
                return record.value
        return None

    def find_all(self, name: str) -> List[str]:
        return [record.value for record in self.records if record.name == name]

    def to_yaml(self) -> str:
        data = {'attributes': [{'name': r.name, 'value': r.value} for r in self.records]}
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)

    @classmethod
    def from_yaml(cls, text: str) -> 'ArtifactMetadata':
        """Load the record table.

        Raises:
            ValueError: If the text is not a metadata document.
        """
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML format in build metadata: {e}")

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"Build metadata must contain a YAML object, got {type(data)}")

        entries = data.get('attributes') or []
        if not isinstance(entries, list):
            raise ValueError("Build metadata 'attributes' must be a list")

        metadata = cls()
        for entry in entries:
            if not isinstance(entry, dict) or 'name' not in entry or 'value' not in entry:
                raise ValueError(f"Invalid attribute record in build metadata: {entry!r}")
            metadata.add(str(entry['name']), str(entry['value']))
        return metadata


class Artifact(ABC):
    """Base interface for a compiled artifact."""

    @abstractmethod
    def read_member(self, name: str) -> Optional[bytes]:
        """Return the content of a named member, or None if it does not exist."""
        pass

    def has_member(self, name: str) -> bool:
        return self.read_member(name) is not None

    def get_metadata(self) -> ArtifactMetadata:
        """Return the artifact's attribute records (empty if none were attached)."""
        raw = self.read_member(METADATA_MEMBER)
        if raw is None:
            return ArtifactMetadata()
        return ArtifactMetadata.from_yaml(raw.decode('utf-8'))


class InMemoryArtifact(Artifact):
    """Artifact held in memory, used by packagers before they emit the real file."""

    def __init__(self, members: Optional[Dict[str, bytes]] = None):
        self.members: Dict[str, bytes] = dict(members or {})

    def read_member(self, name: str) -> Optional[bytes]:
        return self.members.get(name)

    def write_member(self, name: str, data: bytes):
        self.members[name] = data

    def attach(self, metadata: ArtifactMetadata):
        self.write_member(METADATA_MEMBER, metadata.to_yaml().encode('utf-8'))


class DirectoryArtifact(Artifact):
    """Build output directory; members are files relative to its root."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def read_member(self, name: str) -> Optional[bytes]:
        path = self.root / name
        if not path.is_file():
            return None
        return path.read_bytes()

    def write_member(self, name: str, data: bytes):
        path = self.root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    def attach(self, metadata: ArtifactMetadata):
        self.write_member(METADATA_MEMBER, metadata.to_yaml().encode('utf-8'))


class ZipArtifact(Artifact):
    """Wheel or other zip archive; members are archive entries. Read-only."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def read_member(self, name: str) -> Optional[bytes]:
        with zipfile.ZipFile(self.path) as archive:
            try:
                return archive.read(name)
            except KeyError:
                return None


def open_artifact(path: Union[str, Path]) -> Artifact:
    """Open a directory or zip archive as an artifact.

    Raises:
        FileNotFoundError: If the path does not exist.
        ValueError: If the path is a file that is not a zip archive.
    """
    path = Path(path)
    if path.is_dir():
        return DirectoryArtifact(path)
    if not path.exists():
        raise FileNotFoundError(f"Artifact not found: {path}")
    if not zipfile.is_zipfile(path):
        raise ValueError(f"Unsupported artifact (expected a directory or zip archive): {path}")
    return ZipArtifact(path)
