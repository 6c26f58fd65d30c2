import pytest
import json
import yaml

from config.loader import ConfigLoader
from config.models.credential import CredentialSettings, ClientCredentialsConfig
from config.preprocessor import EnvVarPreprocessor


YAML_CONFIG = """
credential:
  type: oauth2_client_credentials
  token_url: https://login.example.com/token
  client_id: client
  client_secret: ${CLIENT_SECRET}
scopes:
  - api://resource/.default
token_debug:
  enabled: true
  expiry-minutes: 3
"""


@pytest.mark.unit
@pytest.mark.config
def test_loader_from_yaml_string(debug_settings):
    loader = ConfigLoader()

    config_dict = debug_settings.model_dump(mode="json")
    yaml_text = yaml.dump(config_dict)

    cfg = loader.from_yaml(yaml_text)

    assert isinstance(cfg, CredentialSettings)
    assert cfg.token_debug.enabled is True
    assert cfg.refresh_margin == 30


@pytest.mark.unit
@pytest.mark.config
def test_loader_from_json_file(tmp_path, static_settings):
    p = tmp_path / "config.json"

    config_dict = static_settings.model_dump(mode="json")
    p.write_text(json.dumps(config_dict))

    loader = ConfigLoader()
    cfg = loader.from_json(p)

    assert cfg.scopes == ["https://database.windows.net/.default"]


@pytest.mark.unit
@pytest.mark.config
def test_loader_applies_preprocessors(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text(YAML_CONFIG)

    loader = ConfigLoader([EnvVarPreprocessor({"CLIENT_SECRET": "from-env"})])
    cfg = loader.from_yaml(str(p))

    assert isinstance(cfg.credential, ClientCredentialsConfig)
    assert cfg.credential.client_secret == "from-env"
    assert cfg.token_debug.expiry_minutes == 3


@pytest.mark.unit
@pytest.mark.config
def test_add_preprocessor():
    loader = ConfigLoader()
    loader.add_preprocessor(EnvVarPreprocessor({"CLIENT_SECRET": "added"}))

    cfg = loader.from_yaml(YAML_CONFIG)

    assert cfg.credential.client_secret == "added"


@pytest.mark.unit
@pytest.mark.config
def test_read_source_prefers_file(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("foo: bar")

    loader = ConfigLoader()
    text = loader._read_source(str(p))

    assert text == "foo: bar"


@pytest.mark.unit
@pytest.mark.config
def test_read_source_raw_text():
    loader = ConfigLoader()

    assert loader._read_source("credential:\n  type: static") == "credential:\n  type: static"


@pytest.mark.unit
@pytest.mark.config
def test_loader_from_long_single_line_json():
    """
    GIVEN compact JSON content longer than the filesystem's filename limit
    WHEN it is loaded as raw text
    THEN it should be parsed as content rather than failing the path check
    """
    raw = json.dumps({"credential": {"type": "static", "token": "x" * 300}})
    assert len(raw) > 255

    cfg = ConfigLoader().from_json(raw)

    assert cfg.credential.token == "x" * 300
