"""Build-time stamping and copyright year substitution for build pipelines."""

from .version import __version__
