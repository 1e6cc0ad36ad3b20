"""Package manifest loading (apps, plugs, slots)."""

from snapseal.manifest.loader import PackageInfo, load_manifest, load_manifest_file

__all__ = [
    "PackageInfo",
    "load_manifest",
    "load_manifest_file",
]
