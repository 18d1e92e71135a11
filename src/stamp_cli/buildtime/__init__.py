"""Build time stamping and lookup for compiled artifacts."""

from .attribute import AssemblyBuildTime, TimestampFormatError
from .artifact import (
    Artifact,
    ArtifactMetadata,
    DirectoryArtifact,
    InMemoryArtifact,
    MetadataRecord,
    ZipArtifact,
    open_artifact,
    METADATA_MEMBER,
    TIMESTAMP_RESOURCE
)
from .extensions import (
    NO_BUILD_TIME,
    attach_timestamp,
    render_timestamp_resource,
    get_build_time_attribute,
    has_build_time,
    get_utc_build_time,
    get_build_time,
    get_utc_build_date,
    get_build_date
)

__all__ = [
    # Records
    'AssemblyBuildTime',
    'TimestampFormatError',
    'ArtifactMetadata',
    'MetadataRecord',

    # Artifacts
    'Artifact',
    'DirectoryArtifact',
    'InMemoryArtifact',
    'ZipArtifact',
    'open_artifact',
    'METADATA_MEMBER',
    'TIMESTAMP_RESOURCE',

    # Queries
    'NO_BUILD_TIME',
    'attach_timestamp',
    'render_timestamp_resource',
    'get_build_time_attribute',
    'has_build_time',
    'get_utc_build_time',
    'get_build_time',
    'get_utc_build_date',
    'get_build_date'
]
