"""Top-level package for the Roadmap Toolkit.

Provides subpackages:
- roadmap_toolkit.core – immutable tree models, schemas, serialization
- roadmap_toolkit.progress – status roll-up from tasks to phases
- roadmap_toolkit.export – snapshot rendering, page slicing, PDF/PNG output
- roadmap_toolkit.store – repository, edit operations, application context
- roadmap_toolkit.settings – persisted display preferences and themes
- roadmap_toolkit.utils – logging setup and default data paths
- roadmap_toolkit.cli – command-line interface
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"

    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    # Fallback to importlib.metadata for installed package
    try:
        from importlib.metadata import version as pkg_version
        return pkg_version("roadmap_toolkit")
    except Exception:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
