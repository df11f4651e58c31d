"""Tests for configuration loading and merging."""

import pytest

from snippet_test.config.loader import DEFAULT_RUNNERS, default_config, load_config, merge_config
from snippet_test.config.schema import HookConfig, UnknownLanguageMode


def test_default_config_is_fresh_each_call():
    first = default_config()
    first.runners["ruby"] = "ruby"
    first.include.append("*.rst")

    second = default_config()

    assert "ruby" not in second.runners
    assert second.include == ["**/*.md", "**/*.mdx"]
    assert second.timeout == 20.0
    assert second.unknown_language == UnknownLanguageMode.SKIP
    assert second.runners == DEFAULT_RUNNERS


def test_merge_config_overrides():
    config = merge_config({
        "include": ["docs/**/*.md"],
        "timeout": 5,
        "unknown_language": "fail",
        "runners": {"sh": "bash -e", "deno": {"command": "deno run", "extension": ".ts"}},
        "env": {"A": "1", "B": 2},
        "hooks": {"setup": "make build", "teardown": ""},
    })

    assert config.include == ["docs/**/*.md"]
    assert config.exclude == ["**/node_modules/**", "**/dist/**"]
    assert config.timeout == 5
    assert config.fails_on_unknown
    assert config.runners == {"sh": "bash -e", "deno": {"command": "deno run", "extension": ".ts"}}
    assert config.env == {"A": "1"}
    assert config.hooks == HookConfig(setup="make build", teardown=None)


def test_merge_config_timeout_ms_and_bad_values():
    config = merge_config({"timeout_ms": 1500, "unknown_language": "explode", "include": "*.md"})

    assert config.timeout == 1.5
    assert config.unknown_language == UnknownLanguageMode.SKIP
    assert config.include == ["**/*.md", "**/*.mdx"]


def test_merge_config_rejects_boolean_timeout():
    assert merge_config({"timeout": True}).timeout == 20.0


def test_load_config_without_file_uses_defaults(tmp_path):
    loaded = load_config(cwd=tmp_path)

    assert loaded.config_path is None
    assert loaded.root_dir == tmp_path.resolve()
    assert loaded.config == default_config()


def test_load_toml_config(tmp_path):
    (tmp_path / "doctest.config.toml").write_text(
        'timeout = 3\nunknown_language = "fail"\n\n[env]\nMODE = "docs"\n\n[hooks]\nsetup = "make"\n',
        encoding="utf-8",
    )

    loaded = load_config(cwd=tmp_path)

    assert loaded.config_path == (tmp_path / "doctest.config.toml").resolve()
    assert loaded.config.timeout == 3
    assert loaded.config.env == {"MODE": "docs"}
    assert loaded.config.hooks.setup == "make"


def test_load_yaml_config_sets_root_to_its_directory(tmp_path):
    conf_dir = tmp_path / "conf"
    conf_dir.mkdir()
    (conf_dir / "snippets.yaml").write_text(
        "runners:\n  python: python3 -X utf8\nexclude: []\n",
        encoding="utf-8",
    )

    loaded = load_config("conf/snippets.yaml", cwd=tmp_path)

    assert loaded.root_dir == conf_dir.resolve()
    assert loaded.config.runners == {"python": "python3 -X utf8"}
    assert loaded.config.exclude == []


def test_load_config_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config("missing.toml", cwd=tmp_path)

    (tmp_path / "conf.json").write_text("{}", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config("conf.json", cwd=tmp_path)

    (tmp_path / "list.yaml").write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError, match="mapping"):
        load_config("list.yaml", cwd=tmp_path)

    (tmp_path / "broken.toml").write_text("timeout = = 3\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid TOML"):
        load_config("broken.toml", cwd=tmp_path)
