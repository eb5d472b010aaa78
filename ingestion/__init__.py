_SNAPSHOT_FORMATS = {
    ".yaml": "yaml",
    ".yml": "yaml",
    ".json": "json",
}


def get_snapshot_format(suffix: str) -> str:
    """Get the snapshot format for a file suffix."""
    if suffix.lower() not in _SNAPSHOT_FORMATS:
        raise ValueError(f"Unknown snapshot file type: {suffix}")
    return _SNAPSHOT_FORMATS[suffix.lower()]


def get_available_formats():
    """Get list of accepted snapshot file suffixes."""
    return list(_SNAPSHOT_FORMATS.keys())
