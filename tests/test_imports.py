def test_import_textblade_package() -> None:
    import importlib

    module = importlib.import_module("textblade")
    assert module is not None


def test_import_services_no_side_effects() -> None:
    from textblade.services import GameSession, InMemorySaveStore

    store = InMemorySaveStore()
    assert GameSession is not None
    assert store.load() is None
