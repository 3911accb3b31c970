"""Source file resolution for profile identifiers."""

from coverview.resolve.module import ModuleInfo
from coverview.resolve.packages import PackageInfo, decode_package_stream, lookup_packages
from coverview.resolve.resolver import FileResolver, package_paths

__all__ = [
    "FileResolver",
    "ModuleInfo",
    "PackageInfo",
    "decode_package_stream",
    "lookup_packages",
    "package_paths",
]
