"""Go coverage profile parsing and block merging."""

from coverview.profile.merge import merge_blocks, merge_profiles
from coverview.profile.models import CountingMode, CoverageBlock, Profile
from coverview.profile.parser import parse_block_line, parse_profile, parse_profile_text

__all__ = [
    "CountingMode",
    "CoverageBlock",
    "Profile",
    "merge_blocks",
    "merge_profiles",
    "parse_block_line",
    "parse_profile",
    "parse_profile_text",
]
