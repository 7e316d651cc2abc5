"""Tests for the tvt package."""


def test_package_imports():
    """Test that the package and its CLI can be imported successfully."""
    import tvt
    import tvt.cli

    assert tvt.cli.main is not None


def test_package_version():
    """Test that the package has a version string."""
    from tvt import __version__

    assert __version__ == "0.1.0"
