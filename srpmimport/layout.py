"""
Working tree layout for imported source packages.

Every imported package produces the same shape:

    SPECS/<name>.spec
    SOURCES/<everything else>
    .gitignore            (archive-like sources kept out of git)

Routing is purely name based. File roles from package metadata are
never consulted here.
"""

from pathlib import PurePosixPath

SPEC_DIR = "SPECS"
SOURCE_DIR = "SOURCES"
IGNORE_FILE = ".gitignore"
SPEC_EXTENSION = ".spec"

BRANCH_PREFIX = "rocky"

# rw for owner, group and world; used when metadata has no entry for a file
FALLBACK_MODE = 0o666
DIR_MODE = 0o755


def is_spec_file(name: str) -> bool:
    """True if the name ends with the spec-file extension."""
    return name.endswith(SPEC_EXTENSION)


def destination_for(name: str) -> PurePosixPath:
    """
    Map an archive entry name to its path inside the working tree.

    Args:
        name: Entry name exactly as it appears in the archive

    Returns:
        SPECS/<name> for spec files, SOURCES/<name> for everything else
    """
    if is_spec_file(name):
        return PurePosixPath(SPEC_DIR, name)
    return PurePosixPath(SOURCE_DIR, name)


def ignore_path_for(name: str) -> str:
    """Path of an excluded source as written to the ignore file."""
    return f"{SOURCE_DIR}/{name}"


def branch_name(version: int) -> str:
    """Branch that an import for the given distribution version lands on."""
    return f"{BRANCH_PREFIX}{version}"
