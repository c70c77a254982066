from zee.utils.setup import load_api_keys


def test_keys_are_exported_unless_already_set(tmp_path, monkeypatch):
    secrets = tmp_path / "config.yml"
    secrets.write_text("openai_api: sk-file\ndeepseek_api: ds-file\n", encoding="utf-8")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("DEEPSEEK_API_KEY", "")

    exported = load_api_keys(secrets)

    assert exported == {"DEEPSEEK_API_KEY": "ds-file"}


def test_missing_file_is_ignored(tmp_path):
    assert load_api_keys(tmp_path / "absent.yml") == {}


def test_additional_provider_keys_are_exported(tmp_path, monkeypatch):
    secrets = tmp_path / "config.yml"
    secrets.write_text("anthropic_api: an-file\nmistral_api: mi-file\n", encoding="utf-8")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "")
    monkeypatch.setenv("MISTRAL_API_KEY", "")

    exported = load_api_keys(secrets)

    assert exported == {"ANTHROPIC_API_KEY": "an-file", "MISTRAL_API_KEY": "mi-file"}
