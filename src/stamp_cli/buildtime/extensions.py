"""Functions for quickly reading an artifact's build time.

Two encodings are understood, checked in this order:

1. an ``AssemblyBuildTime`` record in the artifact's build metadata;
2. the embedded ``stamp_cli.build.timestamp`` resource holding date-time text.

An artifact without either stamp has no build time; every query then returns
``NO_BUILD_TIME`` (None). A stamp that is present but unreadable raises
``TimestampFormatError`` and is never reported as absent.
"""

import zipfile
from datetime import date, datetime, timezone
from typing import Optional

from .artifact import Artifact, ArtifactMetadata, TIMESTAMP_RESOURCE
from .attribute import AssemblyBuildTime, TimestampFormatError, parse_datetime, to_local_time


NO_BUILD_TIME = None


def attach_timestamp(instant: datetime) -> ArtifactMetadata:
    """Build the metadata declaration for ``instant``.

    Naive datetimes are taken as local time. Embedding the result is left to
    the packager (see ``DirectoryArtifact.attach``).
    """
    if instant.tzinfo is None:
        instant = instant.astimezone()
    record = AssemblyBuildTime(instant.astimezone(timezone.utc))
    return ArtifactMetadata().add(AssemblyBuildTime.NAME, record.to_argument())


def render_timestamp_resource(instant: datetime) -> bytes:
    """Build the embedded resource blob for ``instant``: UTF-8 ISO 8601 text in UTC."""
    if instant.tzinfo is None:
        instant = instant.astimezone()
    return instant.astimezone(timezone.utc).isoformat().encode('utf-8')


def get_build_time_attribute(artifact: Artifact) -> Optional[AssemblyBuildTime]:
    """Return the first ``AssemblyBuildTime`` record, or None.

    Raises:
        TimestampFormatError: The build metadata or the record is corrupt.
    """
    try:
        metadata = artifact.get_metadata()
    except ValueError as e:
        raise TimestampFormatError(f"Build metadata is corrupt: {e}") from e
    value = metadata.find(AssemblyBuildTime.NAME)
    if value is None:
        return None
    return AssemblyBuildTime.parse(value)


def _read_timestamp_resource(artifact: Artifact) -> Optional[datetime]:
    raw = artifact.read_member(TIMESTAMP_RESOURCE)
    if raw is None:
        return None
    try:
        text = raw.decode('utf-8-sig')
    except UnicodeDecodeError as e:
        raise TimestampFormatError(f"Embedded {TIMESTAMP_RESOURCE} is not UTF-8 text") from e
    return parse_datetime(text)


def has_build_time(artifact: Artifact) -> bool:
    """Check whether the artifact carries either build time encoding.

    Never raises: unreadable metadata counts as carrying no attribute record,
    and an unreadable artifact as carrying no stamp at all.
    """
    try:
        if artifact.get_metadata().find(AssemblyBuildTime.NAME) is not None:
            return True
    except (ValueError, OSError, zipfile.BadZipFile):
        pass
    try:
        return artifact.has_member(TIMESTAMP_RESOURCE)
    except (OSError, zipfile.BadZipFile):
        return False


def get_utc_build_time(artifact: Artifact) -> Optional[datetime]:
    """Get the UTC build time of the artifact.

    Args:
        artifact: The artifact to read.

    Returns:
        The aware UTC build time, or NO_BUILD_TIME if the artifact was not stamped.

    Raises:
        TimestampFormatError: The stamp is present but corrupt.
    """
    if artifact is None:
        raise TypeError("artifact must not be None")

    attribute = get_build_time_attribute(artifact)
    if attribute is not None:
        return attribute.utc_build_time
    return _read_timestamp_resource(artifact)


def get_build_time(artifact: Artifact) -> Optional[datetime]:
    """Get the local build time of the artifact, or NO_BUILD_TIME."""
    value = get_utc_build_time(artifact)
    if value is NO_BUILD_TIME:
        return NO_BUILD_TIME
    return to_local_time(value)


def get_utc_build_date(artifact: Artifact) -> Optional[date]:
    """Get the UTC build date of the artifact, or NO_BUILD_TIME."""
    value = get_utc_build_time(artifact)
    if value is NO_BUILD_TIME:
        return NO_BUILD_TIME
    return value.date()


def get_build_date(artifact: Artifact) -> Optional[date]:
    """Get the local build date of the artifact, or NO_BUILD_TIME."""
    value = get_build_time(artifact)
    if value is NO_BUILD_TIME:
        return NO_BUILD_TIME
    return value.date()
