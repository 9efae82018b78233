"""
Smoke test to verify test infrastructure works
"""

from pathlib import Path


def test_pytest_working():
    """Verify pytest is configured correctly"""
    assert True


def test_can_import_main_module():
    """Verify the package exposes its public API"""
    import trello_proxy

    package_dir = Path(trello_proxy.__file__).parent
    assert (package_dir / "__init__.py").exists()

    for name in (
        "TrelloConnection",
        "TrelloBoard",
        "ClientConfig",
        "board_from_url",
        "extract_id",
        "main",
    ):
        assert hasattr(trello_proxy, name), f"Should export {name}"


def test_fixtures_directory_exists(fixtures_dir):
    """Verify fixtures directory is accessible"""
    assert fixtures_dir.exists()
    assert fixtures_dir.is_dir()
    assert (fixtures_dir / "card_detail.json").exists()
