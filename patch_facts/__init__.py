"""patch-facts: OS patch posture facts for Ansible."""


def _get_version() -> str:
    """Get package version with fallback mechanisms."""
    # Method 1: Try importlib.metadata (preferred for installed packages)
    try:
        from importlib.metadata import PackageNotFoundError, version

        return version("patch-facts")
    except (ImportError, PackageNotFoundError):
        pass

    # Method 2: Try reading from pyproject.toml directly
    try:
        from pathlib import Path

        import tomllib

        pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, "rb") as f:
                pyproject_data = tomllib.load(f)
            return pyproject_data.get("project", {}).get("version", "unknown")
    except (ImportError, OSError, ValueError):
        pass

    # Final fallback
    return "unknown"


__version__ = _get_version()
