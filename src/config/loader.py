import json
import yaml
from typing import Any, Callable
from pathlib import Path

from config.models.credential import CredentialSettings
from config.preprocessor import ConfigPreprocessor, ConfigValue


class ConfigLoader:
    """
    Load + preprocess + validate credential settings from YAML/JSON.

    - Preprocessors run on raw data before Pydantic validation.
    - Result is a fully validated CredentialSettings.
    """

    def __init__(self, preprocessors: list[ConfigPreprocessor] | None = None):
        self._preprocessors = preprocessors or []

    def add_preprocessor(self, preprocessor: ConfigPreprocessor) -> None:
        self._preprocessors.append(preprocessor)

    def from_yaml(self, source: str | Path) -> CredentialSettings:
        data = self._load(source, parser=yaml.safe_load)
        return self._build(data)

    def from_json(self, source: str | Path) -> CredentialSettings:
        data = self._load(source, parser=json.loads)
        return self._build(data)

    def _load(
        self,
        source: str | Path,
        *,
        parser: Callable[[str], Any],
    ) -> ConfigValue:
        """
        Load config from a file path or raw string, then parse.
        """
        text = self._read_source(source)
        return parser(text)

    def _read_source(self, source: str | Path) -> str:
        """
        Read source as text.
        If `source` is a file path, read it.
        Otherwise treat it as raw content.
        """
        if isinstance(source, Path):
            return source.read_text()

        # Raw YAML/JSON content is usually multi-line and never a valid path
        if "\n" not in source:
            try:
                if Path(source).is_file():
                    return Path(source).read_text()
            except OSError:
                # Compact single-line content can exceed the filename limit
                pass

        return source

    def _build(self, data: ConfigValue) -> CredentialSettings:
        """
        Apply preprocessors and validate into CredentialSettings.
        """
        for pre in self._preprocessors:
            data = pre.process(data)

        return CredentialSettings.model_validate(data)
