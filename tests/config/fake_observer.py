"""Fake ConfigObserver for use in tests: records events without mocking."""


class FakeConfigObserver:
    def __init__(self) -> None:
        self.loaded: list[dict[str, str]] = []
        self.sandbox_warnings: list[str] = []

    def config_loaded(self, name: str, version: str) -> None:
        self.loaded.append({"name": name, "version": version})

    def config_sandbox_warning(self, name: str) -> None:
        self.sandbox_warnings.append(name)
