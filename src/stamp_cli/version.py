"""Version management for the stamp CLI."""

import re
import sys
from pathlib import Path

# Build-time version constant (injected by the release build)
__BUILD_VERSION__ = None


def get_version() -> str:
    """
    Get the current version.

    Uses the build-time constant when present, otherwise reads pyproject.toml
    from the source checkout.

    Returns:
        str: Version string, or "unknown" when neither source is available.
    """
    if __BUILD_VERSION__:
        return __BUILD_VERSION__

    if getattr(sys, 'frozen', False):
        # PyInstaller bundle
        pyproject_path = Path(sys._MEIPASS) / 'pyproject.toml'
    else:
        pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"

    if not pyproject_path.exists():
        return "unknown"

    try:
        content = pyproject_path.read_text(encoding='utf-8')
    except OSError:
        return "unknown"

    match = re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE)
    if match:
        version = match.group(1)
        # PEP 440: x.y.z or x.y.z{a|b|rc}N
        if re.match(r'^\d+\.\d+\.\d+(a\d+|b\d+|rc\d+)?$', version):
            return version

    return "unknown"


__version__ = get_version()
